"""Tests for MultiGlobMatcher."""

from pathlib import Path

from checkvault.sources.glob_matcher import MultiGlobMatcher, parse_glob_patterns


class TestMultiGlobMatcher:
    """Tests for MultiGlobMatcher."""

    def test_recursive_pattern_matches_root_and_nested(self):
        """``**/`` also matches zero directories."""
        matcher = MultiGlobMatcher(["**/*.md"])

        assert matcher.matches("Inbox.md")
        assert matcher.matches("daily/2024-01-02.md")
        assert matcher.matches("a/b/c/note.md")
        assert not matcher.matches("image.png")

    def test_directory_prefix(self):
        matcher = MultiGlobMatcher(["daily/**"])

        assert matcher.matches("daily/2024-01-02.md")
        assert matcher.matches("daily/2024/01.md")
        assert not matcher.matches("weekly/2024-W01.md")

    def test_exclusions_remove_matches(self):
        """A path matching any exclusion is rejected."""
        matcher = MultiGlobMatcher(["**/*.md", "!**/archive/**", "!**/templates/**"])

        assert matcher.matches("projects/garden.md")
        assert not matcher.matches("archive/2019.md")
        assert not matcher.matches("projects/archive/old/done.md")
        assert not matcher.matches("templates/daily.md")

    def test_exclusion_only_implies_markdown(self):
        """Only exclusions means every markdown document except those."""
        matcher = MultiGlobMatcher(["!**/archive/**"])

        assert matcher.includes == ["**/*.md"]
        assert matcher.matches("Inbox.md")
        assert not matcher.matches("archive/old.md")
        assert not matcher.matches("notes.txt")

    def test_empty_patterns_match_markdown(self):
        assert MultiGlobMatcher([]).matches("Inbox.md")

    def test_exclude_exact_file(self):
        matcher = MultiGlobMatcher(["**/*.md", "!Inbox.md"])

        assert not matcher.matches("Inbox.md")
        assert matcher.matches("inbox-2.md")

    def test_backslash_paths(self):
        matcher = MultiGlobMatcher(["daily/**"])

        assert matcher.matches("daily\\2024-01-02.md")

    def test_list_matching_files(self, tmp_path: Path):
        """list_matching_files walks the vault and honours exclusions."""
        (tmp_path / "Inbox.md").write_text("- [ ] a")
        (tmp_path / "notes.txt").write_text("plain")
        (tmp_path / "archive").mkdir()
        (tmp_path / "archive" / "old.md").write_text("- [ ] b")
        (tmp_path / "daily").mkdir()
        (tmp_path / "daily" / "today.md").write_text("- [ ] c")

        matcher = MultiGlobMatcher(["**/*.md", "!**/archive/**"])

        files = list(matcher.list_matching_files(tmp_path))

        assert sorted(f.relative_to(tmp_path).as_posix() for f in files) == [
            "Inbox.md",
            "daily/today.md",
        ]

    def test_list_matching_files_deduplicates(self, tmp_path: Path):
        (tmp_path / "Inbox.md").write_text("- [ ] a")

        matcher = MultiGlobMatcher(["**/*.md", "*.md"])

        assert len(list(matcher.list_matching_files(tmp_path))) == 1


class TestParseGlobPatterns:
    """Tests for parse_glob_patterns."""

    def test_none_returns_default(self):
        assert parse_glob_patterns(None) == ["**/*.md"]

    def test_blank_string_returns_default(self):
        assert parse_glob_patterns("  \n ,") == ["**/*.md"]

    def test_splits_on_newlines_and_commas(self):
        expression = "daily/**, projects/**\n!**/archive/**\n"

        assert parse_glob_patterns(expression) == [
            "daily/**",
            "projects/**",
            "!**/archive/**",
        ]

    def test_list_is_stripped(self):
        assert parse_glob_patterns([" a/** ", "", "b.md"]) == ["a/**", "b.md"]
