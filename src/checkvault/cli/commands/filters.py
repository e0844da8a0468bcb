"""Filters command for checkvault CLI."""

from ...core.config import Config
from ...services import ChecklistSettings


def handle_filters(args, config: Config) -> None:
    """Handle filters command.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    settings = ChecklistSettings.load(config.settings_path)
    _print_filters(settings)


def _print_filters(settings: ChecklistSettings) -> None:
    """Print the filter list, marking the active filter.

    Args:
        settings: Loaded checklist settings.
    """
    if not settings.checklist_filters:
        print("No checklist filters defined.")
        return

    selected = settings.selected_filter()
    for checklist_filter in settings.checklist_filters:
        marker = "*" if checklist_filter is selected else " "
        state = "" if checklist_filter.enabled else " (disabled)"
        limit = checklist_filter.limit_todos or "all"
        print(
            f"{marker} {checklist_filter.filter_name}{state}: "
            f"group by {checklist_filter.group_by}, limit {limit}"
        )
        if checklist_filter.minimatch_file_names:
            print(f"    files: {checklist_filter.minimatch_file_names!r}")
        if checklist_filter.todos_match.strip():
            tags = ", ".join(t.strip() for t in checklist_filter.todos_match.split("\n") if t.strip())
            print(f"    tags:  {tags}")
