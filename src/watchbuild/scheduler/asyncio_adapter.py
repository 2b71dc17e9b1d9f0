from __future__ import annotations

import asyncio
from collections.abc import Callable


class AsyncioScheduler:
    """Schedule callbacks on the running asyncio event loop.

    Implements the ``Scheduler`` protocol.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(max(delay_ms, 0) / 1000, callback)
