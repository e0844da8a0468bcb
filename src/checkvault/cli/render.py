"""Plain-text rendering of checklist group trees."""

from __future__ import annotations

from checkvault.core.types import GroupType, TodoGroup


def group_title(group: TodoGroup) -> str:
    if group.type is GroupType.PAGE:
        return group.page_name or group.id
    return group.id


def format_groups(groups: list[TodoGroup] | None, indent: str = "  ") -> str:
    """Render a group tree as an indented outline.

    Example output::

        Weekly review
          - [ ] call the plumber
        #errands
          - [ ] buy stamps
    """
    if groups is None:
        return "No checklist filter selected."
    if not groups:
        return "Nothing to do."

    lines: list[str] = []

    def walk(nodes: list[TodoGroup], depth: int) -> None:
        for group in nodes:
            lines.append(f"{indent * depth}{group_title(group)}")
            if group.is_leaf:
                for item in group.todos:
                    lines.append(f"{indent * (depth + 1)}- [ ] {item.text}")
            else:
                walk(group.groups, depth + 1)

    walk(groups, 0)
    return "\n".join(lines)


def print_groups(groups: list[TodoGroup] | None) -> None:
    print(format_groups(groups))
