"""Tests for TagFilter and FilterPipeline."""

from checkvault.checklist import ChecklistExtractor, FilterPipeline, TagFilter
from checkvault.core.types import ChecklistFilter

from tests.fakes import make_document


def _pipeline(todos_match: str, **kwargs) -> FilterPipeline:
    return FilterPipeline(ChecklistFilter(todos_match=todos_match), ChecklistExtractor(), **kwargs)


class TestTagFilterParse:
    """Tests for TagFilter.parse."""

    def test_include_and_exclude(self):
        tag_filter = TagFilter.parse("todo\n-Waiting\n\n  #Idea  ")

        assert tag_filter.include == ["todo", "idea"]
        assert tag_filter.exclude == ["waiting"]

    def test_exclude_strips_hash(self):
        assert TagFilter.parse("-#later").exclude == ["later"]

    def test_empty_text(self):
        assert TagFilter.parse("") == TagFilter(include=[], exclude=[])

    def test_bare_dash_is_ignored(self):
        assert TagFilter.parse("-").exclude == []

    def test_hidden_tags_removed_from_include(self):
        tag_filter = TagFilter.parse("todo\nidea\n-later", hidden_tags=["#Idea", "later"])

        assert tag_filter.include == ["todo"]
        assert tag_filter.exclude == ["later"]

    def test_hiding_every_include_keeps_them(self):
        tag_filter = TagFilter.parse("todo\n#Idea", hidden_tags=["todo", "#idea"])

        assert tag_filter.include == ["todo", "idea"]


class TestFilterPipeline:
    """Tests for FilterPipeline admission."""

    def test_drops_checked_items(self):
        doc = make_document("#todo\n- [ ] open\n- [x] done")

        items = _pipeline("todo").admitted(doc)

        assert [i.text for i in items] == ["open"]

    def test_exclude_only_uses_whole_document(self):
        """With only exclusions, items under the excluded tag are removed."""
        doc = make_document("- [ ] keep\n#todo\n- [ ] drop")

        items = _pipeline("-todo").admitted(doc)

        assert [i.text for i in items] == ["keep"]

    def test_exclusion_wins_over_inclusion(self):
        """An item under both an included and an excluded tag is dropped."""
        doc = make_document("#todo #later\n- [ ] both\n#todo\n- [ ] only")

        items = _pipeline("todo\n-later").admitted(doc)

        assert [i.text for i in items] == ["only"]

    def test_exclusion_matches_by_text_within_document(self):
        """Identical lines elsewhere in the same document are excluded too."""
        doc = make_document("#later\n- [ ] same\n#todo\n- [ ] same\n- [ ] other")

        items = _pipeline("todo\n-later").admitted(doc)

        assert [i.text for i in items] == ["other"]

    def test_exclusion_does_not_cross_documents(self):
        first = make_document("#later\n- [ ] same", path="A.md")
        second = make_document("#todo\n- [ ] same", path="B.md")

        items = _pipeline("todo\n-later").run([first, second])

        assert [(i.file_path, i.text) for i in items] == [("B.md", "same")]

    def test_no_tags_admits_every_unchecked_line(self):
        doc = make_document("- [ ] a\n- [x] b\n#todo\n- [ ] c")

        items = _pipeline("").admitted(doc)

        assert [i.text for i in items] == ["a", "c"]

    def test_search_term(self):
        doc = make_document("- [ ] Call Bob\n- [ ] buy milk")

        items = _pipeline("", search_term="  bob ").admitted(doc)

        assert [i.text for i in items] == ["Call Bob"]

    def test_run_preserves_document_order(self):
        docs = [
            make_document("- [ ] a", path="A.md"),
            make_document("- [ ] b", path="B.md"),
        ]

        items = _pipeline("").run(docs)

        assert [i.file_path for i in items] == ["A.md", "B.md"]

    def test_hidden_include_tag_keeps_tag_scope(self):
        """Hiding every included tag never widens the filter to the whole document."""
        doc = make_document("- [ ] loose\n\n#todo\n- [ ] tagged")

        items = _pipeline("todo", hidden_tags=["todo"]).admitted(doc)

        assert [i.text for i in items] == ["tagged"]
