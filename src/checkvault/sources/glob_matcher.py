"""Multi-glob document query.

A filter's document query is a list of glob patterns with include/exclude
semantics, inspired by gitignore and ripgrep.
"""

from __future__ import annotations

import re
from pathlib import Path, PurePosixPath
from typing import Iterator

from loguru import logger

DEFAULT_PATTERNS = ["**/*.md"]


class MultiGlobMatcher:
    """Match files against multiple glob patterns with include/exclude semantics.

    - Patterns without prefix are "include" patterns (OR'd together)
    - Patterns with ! prefix are "exclude" patterns

    A file matches if it satisfies ANY include pattern AND does NOT match
    ANY exclude pattern. When only exclusions are given, ``**/*.md`` is the
    implied include.

    Example:
        matcher = MultiGlobMatcher(["**/*.md", "!**/archive/**"])
        matcher.matches("daily/2024-01-02.md")  # True
        matcher.matches("archive/old.md")       # False (excluded)
    """

    def __init__(self, patterns: list[str]) -> None:
        """Initialize with pattern list.

        Args:
            patterns: List of glob patterns. Use ! prefix for exclusions.
        """
        self.includes = [p for p in patterns if not p.startswith("!")]
        self.excludes = [p[1:] for p in patterns if p.startswith("!")]

        if not self.includes:
            self.includes = list(DEFAULT_PATTERNS)

        logger.debug(
            f"MultiGlobMatcher initialized: includes={self.includes}, excludes={self.excludes}"
        )

    def matches(self, path: str) -> bool:
        """Check if a relative path matches the pattern set.

        Args:
            path: Relative file path to check (forward slashes).

        Returns:
            True if path matches any include and no excludes.
        """
        normalized = path.replace("\\", "/")

        if not any(self._glob_match(normalized, inc) for inc in self.includes):
            return False

        if any(self._glob_match(normalized, exc) for exc in self.excludes):
            return False

        return True

    def _glob_match(self, path: str, pattern: str) -> bool:
        """Match path against a single glob pattern.

        ``**/`` also matches zero directories, so ``**/*.md`` matches both
        ``doc.md`` and ``sub/doc.md``.
        """
        if pattern.startswith("**/"):
            suffix_pattern = pattern[3:]

            if suffix_pattern.startswith("**/") and self._glob_match(path, suffix_pattern):
                return True

            if PurePosixPath(path).match(suffix_pattern):
                return True

            if PurePosixPath(path).match(pattern):
                return True

            # **/X/** -> X appears as a directory anywhere in the path
            if suffix_pattern.endswith("/**"):
                dir_part = suffix_pattern[:-3]
                if dir_part in path.split("/")[:-1]:
                    return True

            return False

        if pattern.endswith("/**"):
            return path.startswith(pattern[:-2])

        return PurePosixPath(path).match(pattern)

    def list_matching_files(self, base_path: Path) -> Iterator[Path]:
        """List all files under base_path matching the pattern set.

        Args:
            base_path: Root directory to search.

        Yields:
            Path objects for matching files (deduplicated).
        """
        seen: set[Path] = set()

        for pattern in self.includes:
            # a trailing ** only yields directories from Path.glob
            glob_pattern = f"{pattern}/*" if pattern.endswith("**") else pattern
            logger.debug(f"Globbing pattern: {glob_pattern}")
            try:
                for file_path in sorted(base_path.glob(glob_pattern)):
                    if not file_path.is_file() or file_path in seen:
                        continue

                    rel_path = file_path.relative_to(base_path).as_posix()

                    if any(self._glob_match(rel_path, exc) for exc in self.excludes):
                        logger.debug(f"Excluded by pattern: {rel_path}")
                        continue

                    seen.add(file_path)
                    yield file_path

            except (OSError, ValueError, NotImplementedError) as e:
                logger.warning(f"Error globbing pattern {pattern}: {e}")


def parse_glob_patterns(expression: list[str] | str | None) -> list[str]:
    """Normalize a document query expression to a list of patterns.

    A string is split on newlines and commas; blank entries are dropped.

    Args:
        expression: Query string, list of patterns, or None.

    Returns:
        List of patterns, defaulting to ["**/*.md"] if None/empty.
    """
    if expression is None:
        return list(DEFAULT_PATTERNS)
    if isinstance(expression, str):
        patterns = [p.strip() for p in re.split(r"[\n,]", expression)]
    else:
        patterns = [p.strip() for p in expression]
    patterns = [p for p in patterns if p]
    return patterns or list(DEFAULT_PATTERNS)
