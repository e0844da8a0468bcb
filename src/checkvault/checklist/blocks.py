"""Tag block location.

A tag occurrence "owns" a contiguous run of lines starting at the tag's line.
Checklist lines inside that run are attributed to the tag. Where the run ends
is a policy choice (``BlockBoundary``):

- ``section``: up to the next non-checklist line carrying another tag, or the
  next heading at the tag's depth or shallower, or the end of the document.
  The tag's depth is the level of the heading on its own line, else of the
  nearest heading above it, else 6.
- ``paragraph``: up to the first blank line.

Under either policy a tag written on a checklist line owns only that line.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass

from checkvault.core.types import BlockBoundary, TagOccurrence
from checkvault.sources.parsing import CHECKLIST_PATTERN, code_fence_lines, heading_level

_MAX_HEADING_DEPTH = 6


@dataclass(frozen=True)
class TagBlock:
    """Line span ``[start, end)`` owned by one tag occurrence."""

    occurrence: TagOccurrence
    start: int
    end: int

    @property
    def lines(self) -> range:
        return range(self.start, self.end)


class TagBlockLocator:
    """Computes the span each tag occurrence owns under a boundary policy."""

    def __init__(self, boundary: BlockBoundary = BlockBoundary.SECTION) -> None:
        self.boundary = BlockBoundary(boundary)

    def locate(self, lines: list[str], occurrences: list[TagOccurrence]) -> list[TagBlock]:
        """Return one block per occurrence, in the order given.

        Args:
            lines: Document text split on newlines.
            occurrences: Every tag occurrence in the document. All of them
                act as boundaries, not only the ones being located, except
                tags written on checklist lines.
        """
        fenced = code_fence_lines(lines)
        tag_lines = sorted(
            {
                o.line
                for o in occurrences
                if 0 <= o.line < len(lines) and not CHECKLIST_PATTERN.match(lines[o.line])
            }
        )
        return [self._block(lines, o, tag_lines, fenced) for o in occurrences]

    def _block(
        self,
        lines: list[str],
        occurrence: TagOccurrence,
        tag_lines: list[int],
        fenced: set[int],
    ) -> TagBlock:
        start = occurrence.line
        if start < 0 or start >= len(lines):
            return TagBlock(occurrence, start, start)

        if CHECKLIST_PATTERN.match(lines[start]):
            return TagBlock(occurrence, start, start + 1)

        if self.boundary is BlockBoundary.PARAGRAPH:
            end = start + 1
            while end < len(lines) and lines[end].strip():
                end += 1
            return TagBlock(occurrence, start, end)

        depth = self._depth(lines, start, fenced)
        next_tag = bisect_right(tag_lines, start)
        stop = len(lines)
        if next_tag < len(tag_lines):
            stop = min(stop, tag_lines[next_tag])

        end = start + 1
        while end < stop:
            if end not in fenced:
                level = heading_level(lines[end])
                if level is not None and level <= depth:
                    break
            end += 1
        return TagBlock(occurrence, start, end)

    @staticmethod
    def _depth(lines: list[str], start: int, fenced: set[int]) -> int:
        for index in range(start, -1, -1):
            if index in fenced:
                continue
            level = heading_level(lines[index])
            if level is not None:
                return level
        return _MAX_HEADING_DEPTH
