"""Type definitions for checkvault."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional, Union


class GroupType(str, Enum):
    """Dimension a grouping pass partitions items by."""

    PAGE = "page"
    TAG = "tag"

    @property
    def other(self) -> "GroupType":
        """The dimension used for the next subgroup level."""
        return GroupType.TAG if self is GroupType.PAGE else GroupType.PAGE


class GroupBy(str, Enum):
    """Grouping modes a checklist filter can select."""

    PAGE_ONLY = "page"
    TAGS_ONLY = "tag"
    PAGE_THEN_TAGS = "page-then-tag"
    TAGS_THEN_PAGE = "tag-then-page"


class SortDirection(str, Enum):
    """Ordering policy for groups and items."""

    NEW_TO_OLD = "new->old"
    OLD_TO_NEW = "old->new"
    A_TO_Z = "a->z"
    Z_TO_A = "z->a"


class BlockBoundary(str, Enum):
    """Where a tag occurrence's owned span ends."""

    SECTION = "section"
    PARAGRAPH = "paragraph"


@dataclass(frozen=True)
class Location:
    """A point in a document (0-based line and column, absolute offset)."""

    line: int
    col: int
    offset: int


@dataclass(frozen=True)
class TagOccurrence:
    """One cached tag occurrence in a document.

    Attributes:
        tag: Tag as written, including the leading ``#`` (e.g. ``#todo/work``).
        start: Position of the first character of the tag.
        end: Position just past the last character of the tag.
    """

    tag: str
    start: Location
    end: Location

    @property
    def line(self) -> int:
        """Line the occurrence starts on."""
        return self.start.line


@dataclass(frozen=True)
class TagMeta:
    """A tag split into its main and sub components."""

    main: str
    sub: Optional[str] = None

    @classmethod
    def parse(cls, tag: str) -> "TagMeta":
        """Split ``#main/sub/deeper`` into ``main`` and ``sub/deeper``."""
        bare = tag.lstrip("#")
        main, _, sub = bare.partition("/")
        return cls(main=main, sub=sub or None)

    @property
    def full(self) -> str:
        """Tag without the leading ``#``."""
        return f"{self.main}/{self.sub}" if self.sub else self.main


@dataclass(frozen=True)
class DocumentInfo:
    """A document returned by a document query."""

    path: str
    label: str
    created_ts: float = 0.0
    modified_ts: float = 0.0


@dataclass(frozen=True)
class TodoItem:
    """One checklist line extracted from a document."""

    original_text: str
    checked: bool
    file_path: str
    file_label: str
    file_created_ts: float
    text: str = ""
    line: int = 0
    indent: int = 0
    main_tag: Optional[str] = None
    sub_tag: Optional[str] = None


@dataclass
class Leaf:
    """Group content holding items directly."""

    todos: list[TodoItem] = field(default_factory=list)


@dataclass
class Branch:
    """Group content holding nested subgroups."""

    groups: list["TodoGroup"] = field(default_factory=list)


GroupContent = Union[Leaf, Branch]


def classify_string(value: str) -> str:
    """Turn a display name into a CSS-safe class name."""
    return re.sub(r"[^a-z0-9_-]+", "-", value.lower()).strip("-")


@dataclass
class TodoGroup:
    """One node of the grouped checklist tree."""

    id: str
    type: GroupType
    sort_name: str = ""
    class_name: str = ""
    oldest_item: float = math.inf
    newest_item: float = 0
    content: GroupContent = field(default_factory=Leaf)
    page_name: Optional[str] = None
    main_tag: Optional[str] = None
    sub_tag: Optional[str] = None

    @property
    def is_leaf(self) -> bool:
        return isinstance(self.content, Leaf)

    @property
    def todos(self) -> list[TodoItem]:
        """Items held directly by this group (empty for branch groups)."""
        return self.content.todos if isinstance(self.content, Leaf) else []

    @property
    def groups(self) -> list["TodoGroup"]:
        """Subgroups of this group (empty for leaf groups)."""
        return self.content.groups if isinstance(self.content, Branch) else []

    def iter_items(self) -> Iterator[TodoItem]:
        """Yield every item in this group, descending into subgroups."""
        if isinstance(self.content, Leaf):
            yield from self.content.todos
        else:
            for group in self.content.groups:
                yield from group.iter_items()

    def __len__(self) -> int:
        if isinstance(self.content, Leaf):
            return len(self.content.todos)
        return len(self.content.groups)


@dataclass
class ChecklistFilter:
    """A named filter configuration selecting and grouping checklist items.

    Attributes:
        filter_name: Unique name of the filter.
        minimatch_file_names: Document query expression.
        todos_match: Newline-separated tag names; a leading ``-`` excludes.
        limit_todos: Maximum items per leaf group (0 means unlimited).
        group_by: One of the ``GroupBy`` values. Kept as the raw string so a
            corrupted value is reported when the filter is used.
        enabled: Whether the filter is offered for selection.
    """

    filter_name: str = ""
    minimatch_file_names: str = ""
    todos_match: str = ""
    limit_todos: int = 3
    group_by: str = GroupBy.PAGE_ONLY.value
    enabled: bool = True
