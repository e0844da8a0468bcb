"""Grouping engine.

Partitions admitted items into page or tag groups, orders groups and items,
caps leaf groups, and optionally nests a second grouping level.
"""

from __future__ import annotations

import math
from typing import Callable, Sequence, TypeVar

from checkvault.core.exceptions import UnknownGroupingError
from checkvault.core.types import (
    Branch,
    GroupBy,
    GroupType,
    Leaf,
    SortDirection,
    TodoGroup,
    TodoItem,
    classify_string,
)

T = TypeVar("T")

# filter mode -> (top-level dimension, build subgroups)
GROUPING_MODES: dict[GroupBy, tuple[GroupType, bool]] = {
    GroupBy.PAGE_ONLY: (GroupType.PAGE, False),
    GroupBy.TAGS_ONLY: (GroupType.TAG, False),
    GroupBy.PAGE_THEN_TAGS: (GroupType.PAGE, True),
    GroupBy.TAGS_THEN_PAGE: (GroupType.TAG, True),
}


def resolve_group_by(value: str | GroupBy) -> tuple[GroupType, bool]:
    """Map a filter's grouping mode to a dimension and a subgroup flag.

    Raises:
        UnknownGroupingError: If ``value`` is not a known mode.
    """
    try:
        return GROUPING_MODES[GroupBy(value)]
    except ValueError:
        raise UnknownGroupingError(value) from None


def sort_in_place(
    values: list[T],
    direction: SortDirection,
    name_key: Callable[[T], str],
    ts_key: Callable[[T], float],
) -> None:
    """Stable in-place sort by recency or by name.

    ``new->old`` and ``old->new`` order by timestamp and break ties by name;
    ``a->z`` and ``z->a`` order by name only.
    """
    direction = SortDirection(direction)
    if direction is SortDirection.NEW_TO_OLD:
        values.sort(key=lambda v: (-ts_key(v), name_key(v).casefold()))
    elif direction is SortDirection.OLD_TO_NEW:
        values.sort(key=lambda v: (ts_key(v), name_key(v).casefold()))
    elif direction is SortDirection.A_TO_Z:
        values.sort(key=lambda v: name_key(v).casefold())
    else:
        values.sort(key=lambda v: name_key(v).casefold(), reverse=True)


def _group_key(item: TodoItem, group_type: GroupType) -> str:
    if group_type is GroupType.PAGE:
        return item.file_path
    return "#" + "/".join(part for part in (item.main_tag, item.sub_tag) if part)


def _new_group(key: str, item: TodoItem, group_type: GroupType) -> TodoGroup:
    group = TodoGroup(id=key, type=group_type, oldest_item=math.inf, newest_item=0)
    if group_type is GroupType.PAGE:
        group.page_name = item.file_label
        group.sort_name = item.file_label
        group.class_name = classify_string(item.file_label)
    else:
        group.main_tag = item.main_tag
        group.sub_tag = item.sub_tag
        group.sort_name = (item.main_tag or "") + (item.sub_tag or "0")
        group.class_name = classify_string((item.main_tag or "") + (item.sub_tag or ""))
    return group


def group_todos(
    items: Sequence[TodoItem],
    group_by: GroupType | str,
    sort_groups: SortDirection = SortDirection.NEW_TO_OLD,
    sort_items: SortDirection = SortDirection.NEW_TO_OLD,
    sub_groups: bool = False,
    sub_group_sort: SortDirection = SortDirection.NEW_TO_OLD,
    max_items_per_group: int | None = 0,
) -> list[TodoGroup]:
    """Group items into a sorted tree of ``TodoGroup``s.

    Args:
        items: Admitted items, in extraction order.
        group_by: ``page`` (by document) or ``tag`` (by ``#main/sub``).
        sort_groups: Order of the groups at this level.
        sort_items: Order of items inside leaf groups.
        sub_groups: Nest a second level grouped by the other dimension.
        sub_group_sort: Order of the nested groups.
        max_items_per_group: Cap on items per leaf group; 0 or None means
            unlimited. The cap applies to this level only: nested groups are
            built uncapped.

    Returns:
        Non-empty groups. Leaf groups hold items; with ``sub_groups`` every
        group is a branch holding leaf groups.

    Raises:
        UnknownGroupingError: If ``group_by`` is not ``page`` or ``tag``.
    """
    try:
        group_type = GroupType(group_by)
    except ValueError:
        raise UnknownGroupingError(group_by) from None

    by_key: dict[str, TodoGroup] = {}
    for item in items:
        key = _group_key(item, group_type)
        group = by_key.get(key)
        if group is None:
            group = by_key[key] = _new_group(key, item, group_type)

        group.newest_item = max(group.newest_item, item.file_created_ts)
        group.oldest_item = min(group.oldest_item, item.file_created_ts)
        group.todos.append(item)

    groups = [g for g in by_key.values() if g.todos]

    sort_in_place(
        groups,
        sort_groups,
        lambda g: g.sort_name,
        (lambda g: g.newest_item)
        if SortDirection(sort_groups) is SortDirection.NEW_TO_OLD
        else (lambda g: g.oldest_item),
    )

    for group in groups:
        if sub_groups:
            group.content = Branch(
                groups=group_todos(
                    group.todos,
                    group_type.other,
                    sub_group_sort,
                    sort_items,
                    False,
                    sub_group_sort,
                    0,
                )
            )
        else:
            todos = list(group.todos)
            sort_in_place(todos, sort_items, lambda i: i.original_text, lambda i: i.file_created_ts)
            if max_items_per_group and max_items_per_group > 0:
                todos = todos[:max_items_per_group]
            group.content = Leaf(todos=todos)

    return groups
