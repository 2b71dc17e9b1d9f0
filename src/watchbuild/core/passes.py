from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from typing import Any

from watchbuild.config import Settings
from watchbuild.core.invoker import call_plugin
from watchbuild.core.ports.scheduler import Scheduler
from watchbuild.core.progress import start_compilation_progress
from watchbuild.core.summary import summarize
from watchbuild.models import Asset, DisposedFiles, GeneratedFile, PluginFile

logger = logging.getLogger(__name__)


def _wall_clock_ms() -> float:
    return time.time() * 1000


class CompilationPass:
    """One build pass: plugin calls, the progress ticker and the closing summary line.

    The caller decides when the pass has settled; this object only makes sure
    the ticker is stopped once and the summary is rendered against a fixed
    ``start_time``.
    """

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        scheduler: Scheduler | None = None,
        clock: Callable[[], float] | None = None,
        emit: Callable[[str], None] | None = None,
        start_time: float | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._scheduler = scheduler
        self._clock = clock or _wall_clock_ms
        self._emit = emit or logger.info
        self.start_time = self._clock() if start_time is None else start_time
        self._cancel_progress: Callable[[], None] | None = None
        self.settled = False

    def start_progress(self) -> None:
        if self._cancel_progress is not None or self.settled:
            return
        self._cancel_progress = start_compilation_progress(
            self._clock() - self.start_time,
            self._emit,
            scheduler=self._scheduler,
            interval_ms=self._settings.progress_interval_ms,
        )

    async def call_plugin(self, plugin: Any, method: str, file: PluginFile) -> Any:
        return await call_plugin(
            plugin,
            method,
            file,
            interval_ms=self._settings.warning_interval_ms,
            scheduler=self._scheduler,
        )

    def settle(self) -> None:
        if self.settled:
            return
        self.settled = True
        if self._cancel_progress is not None:
            self._cancel_progress()

    def summarize(
        self,
        assets: Iterable[Asset],
        generated_files: Iterable[GeneratedFile],
        disposed: DisposedFiles,
    ) -> str:
        self.settle()
        line = summarize(self.start_time, assets, generated_files, disposed, now=self._clock())
        logger.info(line)
        return line
