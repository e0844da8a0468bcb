"""Deferred execution and debouncing of refresh passes."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Protocol, runtime_checkable

from loguru import logger

AsyncCallback = Callable[[], Awaitable[None]]


@runtime_checkable
class Scheduler(Protocol):
    """Runs one callback after a delay; scheduling again replaces it."""

    def schedule(self, delay: float, callback: AsyncCallback) -> None:
        """Run ``callback`` after ``delay`` seconds, replacing any pending run."""
        ...

    def cancel(self) -> None:
        """Drop the pending run, if any. Runs already started are unaffected."""
        ...

    @property
    def pending(self) -> bool:
        ...


class AsyncioScheduler:
    """Scheduler backed by ``loop.call_later``.

    Callbacks run as tasks on the loop. A failing callback is logged; it does
    not stop later scheduled runs.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self, delay: float, callback: AsyncCallback) -> None:
        self.cancel()
        loop = self._loop or asyncio.get_running_loop()
        self._handle = loop.call_later(delay, self._fire, loop, callback)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    async def drain(self) -> None:
        """Wait for callbacks that have already started to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _fire(self, loop: asyncio.AbstractEventLoop, callback: AsyncCallback) -> None:
        self._handle = None
        task = loop.create_task(callback())
        self._tasks.add(task)
        task.add_done_callback(self._finished)

    def _finished(self, task: asyncio.Task[None]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        if (error := task.exception()) is not None:
            logger.opt(exception=error).error(f"Scheduled refresh failed: {error}")


class Debouncer:
    """Coalesces bursts of triggers into a single callback run.

    Every ``trigger()`` restarts the quiet period; the callback runs once the
    period elapses with no further triggers.

    Example:
        debouncer = Debouncer(view.refresh_and_render, delay=1.0)
        for event in events:
            debouncer.trigger()
    """

    def __init__(
        self,
        callback: AsyncCallback,
        delay: float = 1.0,
        scheduler: Scheduler | None = None,
    ) -> None:
        self._callback = callback
        self.delay = delay
        self._scheduler = scheduler or AsyncioScheduler()

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def pending(self) -> bool:
        return self._scheduler.pending

    def trigger(self) -> None:
        logger.debug(f"Refresh requested, waiting {self.delay}s for quiet period")
        self._scheduler.schedule(self.delay, self._callback)

    def cancel(self) -> None:
        self._scheduler.cancel()
