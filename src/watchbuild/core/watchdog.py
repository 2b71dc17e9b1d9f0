from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from watchbuild.core.ports.scheduler import Scheduler, TimerHandle
from watchbuild.scheduler.asyncio_adapter import AsyncioScheduler

logger = logging.getLogger(__name__)

T = TypeVar("T")

WARNING_LOG_INTERVAL_MS = 15000


class Watchdog:
    """Emit ``message`` every ``interval_ms`` until cancelled."""

    def __init__(
        self,
        scheduler: Scheduler,
        interval_ms: float,
        message: str,
        sink: Callable[[str], None] | None = None,
    ) -> None:
        self._scheduler = scheduler
        self._interval_ms = interval_ms
        self._message = message
        self._sink = sink or logger.warning
        self.tick_count = 0
        self.cancelled = False
        self._handle: TimerHandle | None = None

    def start(self) -> None:
        if self._handle is None and not self.cancelled:
            self._schedule()

    def cancel(self) -> None:
        if self.cancelled:
            return
        self.cancelled = True
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _schedule(self) -> None:
        self._handle = self._scheduler.call_later(self._interval_ms, self._fire)

    def _fire(self) -> None:
        if self.cancelled:
            return
        self.tick_count += 1
        self._sink(self._message)
        if self.cancelled:
            return
        self._schedule()


async def guard(
    operation: Awaitable[T],
    interval_ms: float,
    message: str,
    *,
    scheduler: Scheduler | None = None,
    sink: Callable[[str], None] | None = None,
) -> T:
    """Await ``operation`` while warning periodically that it is still pending.

    The result or exception of ``operation`` is passed through untouched.
    """
    watchdog = Watchdog(scheduler or AsyncioScheduler(), interval_ms, message, sink)
    watchdog.start()
    try:
        return await operation
    finally:
        watchdog.cancel()
