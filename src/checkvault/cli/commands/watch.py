"""Watch command for checkvault CLI.

A watchdog observer reports markdown file events from its own thread; each
event is handed to the event loop as a change notification, and the view's
debouncer turns bursts of changes into a single refresh.
"""

import asyncio
import functools
from pathlib import Path
from typing import Any, Callable

from loguru import logger
from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from ...app import create_view
from ...core.config import Config
from ..render import print_groups


class VaultEventHandler(FileSystemEventHandler):
    """Forwards markdown file events to a callback on the event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop, callback: Callable[[], None]):
        self.loop = loop
        self.callback = callback

    def on_modified(self, event: Any) -> None:
        self._dispatch(event)

    def on_created(self, event: Any) -> None:
        self._dispatch(event)

    def on_deleted(self, event: Any) -> None:
        self._dispatch(event)

    def on_moved(self, event: Any) -> None:
        self._dispatch(event)

    def _dispatch(self, event: Any) -> None:
        if event.is_directory:
            return
        paths = [event.src_path, getattr(event, "dest_path", "")]
        if not any(path and Path(path).suffix == ".md" for path in paths):
            return
        logger.debug(f"Vault change: {event.event_type} {event.src_path}")
        self.loop.call_soon_threadsafe(self.callback)


def handle_watch(args, config: Config) -> None:
    """Handle watch command.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    try:
        asyncio.run(_handle_watch_async(args, config))
    except KeyboardInterrupt:
        pass


async def _handle_watch_async(args, config: Config) -> None:
    view = create_view(
        config,
        renderer=_clear_and_print,
        filter_name=args.filter_name,
        search_term=args.search,
    )
    await view.refresh_and_render()

    base_path = Path(config.vault.path).expanduser().resolve()
    handler = VaultEventHandler(
        asyncio.get_running_loop(),
        functools.partial(view.notify_changed, force=True),
    )
    observer = Observer()
    observer.schedule(handler, str(base_path), recursive=True)
    observer.start()
    logger.info(f"Watching {base_path}")
    try:
        await asyncio.Event().wait()
    finally:
        observer.stop()
        observer.join(timeout=2.0)


def _clear_and_print(groups) -> None:
    print("\033[2J\033[H", end="")
    print_groups(groups)
