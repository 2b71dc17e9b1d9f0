from __future__ import annotations

from collections.abc import Callable

from watchbuild.core.ports.scheduler import Scheduler, TimerHandle
from watchbuild.scheduler.asyncio_adapter import AsyncioScheduler

ANIMATION_LOG_INTERVAL_MS = 4000
STILL_COMPILING_FROM_TICK = 7


def render_progress_line(tick: int) -> str:
    message = "still compiling" if tick >= STILL_COMPILING_FROM_TICK else "compiling"
    return message + "." * (tick % 4)


class CompilationProgress:
    """Recurring "compiling..." ticker for one build pass."""

    def __init__(
        self,
        emit: Callable[[str], None],
        *,
        scheduler: Scheduler | None = None,
        interval_ms: float = ANIMATION_LOG_INTERVAL_MS,
    ) -> None:
        self._emit = emit
        self._scheduler = scheduler or AsyncioScheduler()
        self._interval_ms = interval_ms
        self.tick_count = 0
        self.cancelled = False
        self._handle: TimerHandle | None = None

    def start(self, elapsed_ms: float = 0) -> None:
        # Keep the cadence of a pass that has already been running.
        first_delay = max(0, self._interval_ms - (elapsed_ms or 0))
        self._handle = self._scheduler.call_later(first_delay, self._tick)

    def cancel(self) -> None:
        self.cancelled = True
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _tick(self) -> None:
        if self.cancelled:
            return
        self._emit(render_progress_line(self.tick_count))
        self.tick_count += 1
        if self.cancelled:
            return
        self._handle = self._scheduler.call_later(self._interval_ms, self._tick)


def start_compilation_progress(
    elapsed_ms: float,
    emit: Callable[[str], None],
    *,
    scheduler: Scheduler | None = None,
    interval_ms: float = ANIMATION_LOG_INTERVAL_MS,
) -> Callable[[], None]:
    """Start ticking and return a cancel function."""
    progress = CompilationProgress(emit, scheduler=scheduler, interval_ms=interval_ms)
    progress.start(elapsed_ms)
    return progress.cancel
