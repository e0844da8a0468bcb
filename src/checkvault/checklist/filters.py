"""Filter pipeline: tag include/exclude reconciliation and checked-state filtering."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from loguru import logger

from checkvault.core.types import ChecklistFilter, TodoItem

from .extractor import ChecklistExtractor, Document


@dataclass(frozen=True)
class TagFilter:
    """Include and exclude tag names parsed from a filter's tag text.

    Attributes:
        include: Lower-case tag names selecting items. Empty means every
            checklist line in the document is a candidate.
        exclude: Lower-case tag names whose items are removed.
    """

    include: list[str] = field(default_factory=list)
    exclude: list[str] = field(default_factory=list)

    @classmethod
    def parse(cls, todos_match: str, hidden_tags: Iterable[str] = ()) -> "TagFilter":
        """Split newline-separated tag text into include and exclude lists.

        Lines starting with ``-`` are exclusions (the first ``-`` is
        stripped). A leading ``#`` is tolerated. Hidden tags are dropped from
        the include list unless every included tag is hidden, in which case
        the include list is kept as written.

        Example:
            >>> TagFilter.parse("todo\\n-Waiting\\n")
            TagFilter(include=['todo'], exclude=['waiting'])
        """
        names = [line.strip().lower() for line in (todos_match or "").strip().split("\n")]
        names = [name for name in names if name]

        hidden = {tag.lower().lstrip("#") for tag in hidden_tags}
        include = [name.lstrip("#") for name in names if not name.startswith("-")]
        visible = [name for name in include if name not in hidden]
        if visible:
            include = visible
        elif include:
            logger.debug(f"All included tags are hidden, keeping {include}")
        exclude = [name[1:].strip().lstrip("#") for name in names if name.startswith("-")]
        return cls(include=include, exclude=[name for name in exclude if name])


class FilterPipeline:
    """Applies one checklist filter to a set of documents.

    Steps, per document:
    1. items under any excluded tag are collected;
    2. candidates are the items under any included tag, or every checklist
       line when no tag is included;
    3. candidates sharing ``original_text`` with an excluded item are dropped;
    4. checked items are dropped.

    An optional search term keeps only items whose text contains it.
    """

    def __init__(
        self,
        checklist_filter: ChecklistFilter,
        extractor: ChecklistExtractor,
        hidden_tags: Iterable[str] = (),
        search_term: str = "",
    ) -> None:
        self.tag_filter = TagFilter.parse(checklist_filter.todos_match, hidden_tags)
        self.extractor = extractor
        self.search_term = search_term.strip().lower()

    def admitted(self, document: Document) -> list[TodoItem]:
        """Return the admitted items of a single document."""
        excluded_texts = {
            item.original_text
            for item in self.extractor.extract_tagged(document, self.tag_filter.exclude)
        }

        if self.tag_filter.include:
            candidates = self.extractor.extract_tagged(document, self.tag_filter.include)
        else:
            candidates = self.extractor.extract_document(document)

        return [
            item
            for item in candidates
            if item.original_text not in excluded_texts
            and not item.checked
            and self._matches_search(item)
        ]

    def run(self, documents: Iterable[Document]) -> list[TodoItem]:
        """Return the admitted items of every document, in document order."""
        items: list[TodoItem] = []
        for document in documents:
            items.extend(self.admitted(document))
        logger.debug(
            f"Admitted {len(items)} items "
            f"(include={self.tag_filter.include}, exclude={self.tag_filter.exclude})"
        )
        return items

    def _matches_search(self, item: TodoItem) -> bool:
        return not self.search_term or self.search_term in item.text.lower()
