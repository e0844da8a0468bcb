"""Checklist settings: filter list, selected filter and view preferences.

Settings are read from a YAML or JSON file (JSON is valid YAML, so the
plugin's own ``data.json`` loads as is). Keys are accepted in snake_case or
in the plugin's camelCase. Editing operations work on the in-memory
settings; nothing here writes the file back.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Literal

import yaml
from loguru import logger

from checkvault.core.exceptions import FilterExistsError, FilterNotFoundError, SettingsError
from checkvault.core.types import ChecklistFilter

NO_FILTER_AVAILABLE = "-- no filter available --"

_FILTER_KEYS = {
    "filterName": "filter_name",
    "minimatchFileNames": "minimatch_file_names",
    "todosMatch": "todos_match",
    "limitTodos": "limit_todos",
    "groupBy": "group_by",
}

_SETTINGS_KEYS = {
    "checklistFilters": "checklist_filters",
    "selectedChecklistFilter": "selected_checklist_filter",
    "autoRefresh": "auto_refresh",
    "lookAndFeel": "look_and_feel",
    "_hiddenTags": "hidden_tags",
    "_collapsedSections": "collapsed_sections",
}


def _snake_case(data: dict[str, Any], mapping: dict[str, str]) -> dict[str, Any]:
    return {mapping.get(key, key): value for key, value in data.items()}


def filter_from_dict(data: dict[str, Any]) -> ChecklistFilter:
    """Build a ChecklistFilter from a settings mapping.

    Raises:
        SettingsError: If ``limit_todos`` is not a number.
    """
    values = _snake_case(data, _FILTER_KEYS)
    known = {k: v for k, v in values.items() if k in ChecklistFilter.__dataclass_fields__}

    limit = known.get("limit_todos")
    if "limit_todos" not in known:
        pass
    elif limit is None or limit == "":
        known["limit_todos"] = 0
    else:
        try:
            known["limit_todos"] = int(limit)
        except (TypeError, ValueError):
            raise SettingsError(
                f"limit_todos must be a number, got {limit!r} "
                f"in filter {known.get('filter_name')!r}"
            ) from None

    for text_key in ("filter_name", "minimatch_file_names", "todos_match"):
        if known.get(text_key) is None:
            known.pop(text_key, None)
        else:
            known[text_key] = str(known[text_key])

    return ChecklistFilter(**known)


@dataclass
class ChecklistSettings:
    """User settings consumed by the checklist view."""

    checklist_filters: list[ChecklistFilter] = field(default_factory=list)
    selected_checklist_filter: str | None = ""
    auto_refresh: bool = True
    look_and_feel: str = "classic"
    hidden_tags: list[str] = field(default_factory=list)
    collapsed_sections: list[bool] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ChecklistSettings":
        values = _snake_case(data, _SETTINGS_KEYS)
        filters = [
            filter_from_dict(item) for item in values.get("checklist_filters") or [] if item
        ]
        return cls(
            checklist_filters=filters,
            selected_checklist_filter=values.get("selected_checklist_filter") or "",
            auto_refresh=bool(values.get("auto_refresh", True)),
            look_and_feel=values.get("look_and_feel") or "classic",
            hidden_tags=[str(t).lower() for t in values.get("hidden_tags") or []],
            collapsed_sections=list(values.get("collapsed_sections") or []),
        )

    @classmethod
    def load(cls, path: Path | str) -> "ChecklistSettings":
        """Load settings from a YAML or JSON file.

        Raises:
            SettingsError: If the file is missing or malformed.
        """
        path = Path(path)
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            raise SettingsError(f"Settings file not found: {path}") from None
        except (OSError, yaml.YAMLError) as e:
            raise SettingsError(f"Could not read settings {path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise SettingsError(f"Settings {path} must be a mapping, got {type(data).__name__}")

        settings = cls.from_dict(data)
        logger.debug(f"Loaded {len(settings.checklist_filters)} filters from {path}")
        return settings

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    def get_filter(self, filter_name: str) -> ChecklistFilter | None:
        return next(
            (f for f in self.checklist_filters if f.filter_name == filter_name), None
        )

    def selected_filter(self) -> ChecklistFilter | None:
        """Return the selected filter, falling back to the first one."""
        selected = self.get_filter(self.selected_checklist_filter or "")
        if selected is None and self.checklist_filters:
            selected = self.checklist_filters[0]
        if selected is None:
            logger.error("There's no filter currently set")
        return selected

    def filter_names(self) -> list[str]:
        """Names offered for selection: enabled filters, or a placeholder."""
        names = [f.filter_name for f in self.checklist_filters if f.enabled]
        return names or [NO_FILTER_AVAILABLE]

    def selected_filter_name(self) -> str:
        if not any(f.enabled for f in self.checklist_filters):
            return NO_FILTER_AVAILABLE
        return self.selected_checklist_filter or ""

    # -------------------------------------------------------------------------
    # Editing
    # -------------------------------------------------------------------------

    def add_filter(self, filter_name: str) -> ChecklistFilter:
        """Prepend a new default filter; select it if nothing is selected.

        Raises:
            FilterExistsError: If a filter with that name exists.
        """
        if not filter_name:
            raise SettingsError("Filter name must not be empty")
        if self.get_filter(filter_name) is not None:
            raise FilterExistsError(filter_name)

        new_filter = ChecklistFilter(filter_name=filter_name)
        self.checklist_filters = [new_filter, *self.checklist_filters]
        if not self.selected_checklist_filter:
            self.selected_checklist_filter = filter_name
        return new_filter

    def update_filter(self, filter_name: str, updated: ChecklistFilter) -> None:
        """Replace a filter; selection follows a rename of the selected filter."""
        index = self._index(filter_name)
        if updated.filter_name != filter_name and self.get_filter(updated.filter_name):
            raise FilterExistsError(updated.filter_name)

        self.checklist_filters[index] = updated
        if self.selected_checklist_filter == filter_name:
            self.selected_checklist_filter = updated.filter_name

    def move_filter(self, filter_name: str, direction: Literal["up", "down"]) -> None:
        """Swap a filter with its neighbour; no-op at either end of the list."""
        index = self._index(filter_name)
        other = index - 1 if direction == "up" else index + 1
        if other < 0 or other >= len(self.checklist_filters):
            return
        filters = self.checklist_filters
        filters[index], filters[other] = filters[other], filters[index]

    def delete_filter(self, filter_name: str) -> None:
        self._index(filter_name)
        self.checklist_filters = [
            f for f in self.checklist_filters if f.filter_name != filter_name
        ]

    def set_filter_enabled(self, filter_name: str, enabled: bool) -> None:
        """Toggle a filter; disabling the selected one selects the first enabled."""
        index = self._index(filter_name)
        self.checklist_filters[index] = replace(self.checklist_filters[index], enabled=enabled)

        if filter_name == self.selected_checklist_filter and not enabled:
            self.selected_checklist_filter = next(
                (f.filter_name for f in self.checklist_filters if f.enabled), None
            )

    def _index(self, filter_name: str) -> int:
        for index, checklist_filter in enumerate(self.checklist_filters):
            if checklist_filter.filter_name == filter_name:
                return index
        raise FilterNotFoundError(filter_name)
