"""Checklist extraction.

Turns document text into ``TodoItem``s, either from the whole document or
from the blocks owned by matching tag occurrences.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from loguru import logger

from checkvault.core.types import DocumentInfo, TagMeta, TagOccurrence, TodoItem
from checkvault.sources.parsing import CHECKLIST_PATTERN, code_fence_lines

from .blocks import TagBlockLocator


@dataclass
class Document:
    """A document snapshot: identity, raw text and cached tag occurrences."""

    info: DocumentInfo
    content: str
    tags: list[TagOccurrence] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.lines = [line.rstrip("\r") for line in self.content.split("\n")]


def tag_matches(tag: str, wanted: Iterable[str]) -> bool:
    """Check whether a tag occurrence is selected by a set of tag names.

    The leading ``#`` is ignored and matching is case-insensitive. A name
    selects the tag when it equals the whole hierarchical tag or its main
    component, so ``todo`` selects ``#todo`` and ``#Todo/work``.
    """
    meta = TagMeta.parse(tag.lower())
    names = set(wanted)
    return meta.full in names or meta.main in names


class ChecklistExtractor:
    """Finds checklist lines in documents.

    Example:
        extractor = ChecklistExtractor(TagBlockLocator(BlockBoundary.SECTION))
        items = extractor.extract_tagged(document, ["todo"])
    """

    def __init__(self, locator: TagBlockLocator | None = None) -> None:
        self.locator = locator or TagBlockLocator()

    def extract_document(self, document: Document) -> list[TodoItem]:
        """Extract every checklist line in the document, without tag info."""
        fenced = code_fence_lines(document.lines)
        items = [
            item
            for index in range(len(document.lines))
            if index not in fenced
            and (item := self._form_todo(document, index)) is not None
        ]
        logger.debug(f"Extracted {len(items)} items from {document.info.path}")
        return items

    def extract_tagged(self, document: Document, tags: Iterable[str]) -> list[TodoItem]:
        """Extract checklist lines owned by occurrences of the given tags.

        Args:
            document: Document to scan.
            tags: Lower-case tag names without ``#``.

        Returns:
            Items annotated with the owning occurrence's main and sub tag,
            grouped by occurrence in document order.
        """
        wanted = set(tags)
        if not wanted or not document.tags:
            return []

        fenced = code_fence_lines(document.lines)
        items: list[TodoItem] = []
        for block in self.locator.locate(document.lines, document.tags):
            if not tag_matches(block.occurrence.tag, wanted):
                continue
            meta = TagMeta.parse(block.occurrence.tag.lower())
            for index in block.lines:
                if index in fenced:
                    continue
                item = self._form_todo(document, index, meta)
                if item is not None:
                    items.append(item)
        return items

    @staticmethod
    def _form_todo(
        document: Document, index: int, meta: TagMeta | None = None
    ) -> TodoItem | None:
        line = document.lines[index]
        match = CHECKLIST_PATTERN.match(line)
        if not match:
            return None

        return TodoItem(
            original_text=line,
            checked=match.group("mark") != " ",
            file_path=document.info.path,
            file_label=document.info.label,
            file_created_ts=document.info.created_ts,
            text=match.group("text"),
            line=index,
            indent=len(match.group("indent")),
            main_tag=meta.main if meta else None,
            sub_tag=meta.sub if meta else None,
        )
