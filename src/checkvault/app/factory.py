"""Application composition root.

Wires a filesystem vault, the settings file and the checklist services into
a ready-to-use ``ChecklistView``.

Example:
    from checkvault.app import create_view
    from checkvault.core.config import Config

    view = create_view(Config.from_env(), renderer=print)
    await view.refresh_and_render()
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..core.exceptions import FilterNotFoundError
from ..services import ChecklistService, ChecklistSettings, ChecklistView
from ..sources import FileSystemVault, SystemNavigator

if TYPE_CHECKING:
    from ..core.config import Config
    from ..services.scheduler import Scheduler
    from ..sources.base import Navigator, Renderer


def create_view(
    config: "Config",
    renderer: "Renderer | None" = None,
    navigator: "Navigator | None" = None,
    scheduler: "Scheduler | None" = None,
    filter_name: str | None = None,
    search_term: str = "",
) -> ChecklistView:
    """Create a ChecklistView over the configured vault.

    Settings are re-read from ``config.settings_path`` on every refresh so
    edits made elsewhere are picked up.

    Args:
        config: Application configuration.
        renderer: Callback receiving the group tree after each refresh.
        navigator: Opens documents; defaults to the system opener.
        scheduler: Debounce scheduler; defaults to an asyncio scheduler.
        filter_name: Use this filter instead of the selected one.
        search_term: Only show items whose text contains this.

    Returns:
        ChecklistView wired to a FileSystemVault.

    Raises:
        FilterNotFoundError: On refresh, if ``filter_name`` is not defined.
    """
    vault = FileSystemVault(config.vault)
    service = ChecklistService(
        documents=vault,
        contents=vault,
        tags=vault,
        config=config.checklist,
    )

    def load_settings() -> ChecklistSettings:
        settings = ChecklistSettings.load(config.settings_path)
        if filter_name:
            if settings.get_filter(filter_name) is None:
                raise FilterNotFoundError(filter_name)
            settings.selected_checklist_filter = filter_name
        return settings

    return ChecklistView(
        service,
        load_settings,
        renderer=renderer,
        navigator=navigator or SystemNavigator(vault.base_path),
        scheduler=scheduler,
        search_term=search_term,
    )
