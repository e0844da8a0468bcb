"""Refresh service and checklist view state.

``ChecklistService`` runs one full pass of the pipeline - query documents,
read them, extract, filter, group - against injected host capabilities.
``ChecklistView`` owns the resulting group tree, debounces change
notifications into refresh passes, and commits only the newest pass.
"""

from __future__ import annotations

import itertools
import time
from typing import TYPE_CHECKING, Any, Callable, Iterable

from loguru import logger

from checkvault.checklist import (
    ChecklistExtractor,
    Document,
    FilterPipeline,
    TagBlockLocator,
    group_todos,
    resolve_group_by,
)
from checkvault.core.config import ChecklistConfig
from checkvault.core.exceptions import SettingsError, SourceFetchError
from checkvault.core.types import ChecklistFilter, GroupType, TodoGroup

from .scheduler import Debouncer, Scheduler
from .settings import ChecklistSettings

if TYPE_CHECKING:
    from checkvault.sources.base import (
        ContentReader,
        DocumentQuery,
        Navigator,
        Renderer,
        TagMetadataProvider,
    )


# =============================================================================
# Pipeline Service
# =============================================================================


class ChecklistService:
    """Builds grouped checklists from a host's documents.

    Responsibilities:
    - Resolve the filter's document query.
    - Read each document and its cached tags; skip unreadable documents.
    - Run the filter pipeline and the grouping engine.

    Example:
        vault = FileSystemVault(config.vault)
        service = ChecklistService(documents=vault, contents=vault, tags=vault)
        groups = await service.build_groups(checklist_filter)
    """

    def __init__(
        self,
        documents: "DocumentQuery",
        contents: "ContentReader",
        tags: "TagMetadataProvider",
        config: ChecklistConfig | None = None,
    ):
        """Initialize ChecklistService.

        Args:
            documents: Answers document-selection queries.
            contents: Reads raw document text.
            tags: Supplies cached tag occurrences per document.
            config: Sort directions and tag block policy.
        """
        self._documents = documents
        self._contents = contents
        self._tags = tags
        self._config = config or ChecklistConfig()
        self._extractor = ChecklistExtractor(TagBlockLocator(self._config.block_boundary))

    @property
    def config(self) -> ChecklistConfig:
        return self._config

    async def load_documents(self, expression: str) -> list[Document]:
        """Query and read documents, skipping any that cannot be read.

        Raises:
            SourceListError: If the host cannot enumerate documents.
        """
        infos = await self._documents.query(expression)
        logger.debug(f"Enumerated {len(infos)} documents for query {expression!r}")

        documents: list[Document] = []
        for info in infos:
            try:
                content = await self._contents.read(info.path)
            except SourceFetchError as e:
                logger.warning(f"Skipping unreadable document: {info.path}: {e}")
                continue
            documents.append(
                Document(info=info, content=content, tags=self._tags.get_tags(info.path))
            )
        return documents

    async def build_groups(
        self,
        checklist_filter: ChecklistFilter,
        hidden_tags: Iterable[str] = (),
        search_term: str = "",
    ) -> list[TodoGroup]:
        """Run one full refresh pass for a filter.

        Raises:
            UnknownGroupingError: If the filter's ``group_by`` is not a known
                mode. Checked before any document is read.
        """
        group_type, sub_groups = resolve_group_by(checklist_filter.group_by)

        documents = await self.load_documents(checklist_filter.minimatch_file_names)
        pipeline = FilterPipeline(
            checklist_filter,
            self._extractor,
            hidden_tags=hidden_tags,
            search_term=search_term,
        )
        items = pipeline.run(documents)

        groups = group_todos(
            items,
            group_type,
            self._config.sort_groups,
            self._config.sort_items,
            sub_groups,
            self._config.sort_sub_groups,
            checklist_filter.limit_todos,
        )
        logger.debug(
            f"Filter {checklist_filter.filter_name!r}: {len(items)} items in {len(groups)} groups"
        )
        return groups


# =============================================================================
# View State
# =============================================================================


class ChecklistView:
    """Holds the current group tree and keeps it fresh.

    Every pass takes a generation token; a pass commits its result only if no
    newer pass has started since. The tree and the last-refresh timestamp are
    replaced together, never mutated in place.

    Example:
        view = ChecklistView(service, lambda: ChecklistSettings.load(path), renderer=print)
        await view.refresh_and_render()
        view.notify_changed()  # debounced
    """

    def __init__(
        self,
        service: ChecklistService,
        settings: Callable[[], ChecklistSettings],
        renderer: "Renderer | None" = None,
        navigator: "Navigator | None" = None,
        scheduler: Scheduler | None = None,
        search_term: str = "",
    ):
        self._service = service
        self._settings = settings
        self._renderer = renderer
        self._navigator = navigator
        self._debouncer = Debouncer(
            self.refresh_and_render,
            delay=service.config.debounce_seconds,
            scheduler=scheduler,
        )
        self._tokens = itertools.count(1)
        self._latest_token = 0
        self.groups: list[TodoGroup] | None = []
        self.last_refresh: float = 0.0
        self._search_term = search_term

    @property
    def search_term(self) -> str:
        return self._search_term

    @property
    def debouncer(self) -> Debouncer:
        return self._debouncer

    @property
    def generation(self) -> int:
        """Token of the most recently started pass."""
        return self._latest_token

    async def refresh(self) -> list[TodoGroup] | None:
        """Recompute the group tree for the selected filter.

        Returns:
            The committed tree; None when no filter is selected. A pass
            overtaken by a newer one returns the tree it did not replace.

        Raises:
            UnknownGroupingError: If the selected filter's grouping mode is
                not recognised.
        """
        token = next(self._tokens)
        self._latest_token = token

        settings = self._settings()
        checklist_filter = settings.selected_filter()

        if checklist_filter is None:
            groups = None
        else:
            groups = await self._service.build_groups(
                checklist_filter,
                hidden_tags=settings.hidden_tags,
                search_term=self._search_term,
            )

        if token != self._latest_token:
            logger.debug(f"Discarding refresh {token}, superseded by {self._latest_token}")
            return self.groups

        self.groups, self.last_refresh = groups, (time.time() if groups is not None else 0.0)
        return self.groups

    async def refresh_and_render(self) -> None:
        await self.refresh()
        self.render()

    def notify_changed(self, force: bool = False) -> None:
        """Handle a host change notification.

        Args:
            force: Skip the auto-refresh check, as for edits to a document.
        """
        if not force:
            try:
                auto_refresh = self._settings().auto_refresh
            except SettingsError as e:
                logger.warning(f"Ignoring change notification, settings unavailable: {e}")
                return
            if not (self._service.config.auto_refresh and auto_refresh):
                return
        self._debouncer.trigger()

    def set_search_term(self, term: str) -> None:
        """Change the search term and schedule a refresh."""
        self._search_term = term
        self._debouncer.trigger()

    def render(self) -> None:
        if self._renderer is not None:
            self._renderer(self.groups)

    def open_group(self, group: TodoGroup, event: Any = None) -> None:
        """Open the document behind a group."""
        if self._navigator is None:
            return
        if group.type is GroupType.PAGE:
            path = group.id
        else:
            first = next(group.iter_items(), None)
            if first is None:
                return
            path = first.file_path
        self._navigator.open(path, event)

    def props(self) -> dict[str, Any]:
        """View properties handed to a UI renderer."""
        settings = self._settings()
        groups = self.groups or []
        collapsed = settings.collapsed_sections
        return {
            "todo_groups": groups,
            "todo_groups_keys": [
                f"{str(flag).lower()}_{groups[index].id if index < len(groups) else ''}"
                for index, flag in enumerate(collapsed)
            ],
            "look_and_feel": settings.look_and_feel,
            "checklist_filter_names": settings.filter_names(),
            "selected_checklist_filter_name": settings.selected_filter_name(),
        }
