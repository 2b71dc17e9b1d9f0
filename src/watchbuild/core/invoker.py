from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

from watchbuild.core.errors import PluginCallbackError
from watchbuild.core.helpers import is_awaitable
from watchbuild.core.ports.plugin import CallingConvention, calling_convention_of
from watchbuild.core.ports.scheduler import Scheduler
from watchbuild.core.watchdog import WARNING_LOG_INTERVAL_MS, guard
from watchbuild.models import PluginFile


def slow_call_message(plugin: Any, method: str, file: PluginFile) -> str:
    return f"{type(plugin).__name__} is taking too long to {method} @ {file.path}"


def _completion_callback(future: asyncio.Future[Any]) -> Callable[..., None]:
    loop = future.get_loop()

    def _settle(error: Any, result: Any) -> None:
        if future.done():
            return
        if error is None:
            future.set_result(result)
        elif isinstance(error, BaseException):
            future.set_exception(error)
        else:
            future.set_exception(PluginCallbackError(error))

    def done(error: Any = None, result: Any = None) -> None:
        loop.call_soon_threadsafe(_settle, error, result)

    return done


async def call_plugin(
    plugin: Any,
    method: str,
    file: PluginFile,
    *,
    interval_ms: float = WARNING_LOG_INTERVAL_MS,
    scheduler: Scheduler | None = None,
    sink: Callable[[str], None] | None = None,
) -> Any:
    """Run ``plugin.<method>`` on ``file`` under a watchdog.

    Direct-style hooks receive the file; callback-style hooks receive
    ``(file.data, file.path, done)``. Errors reach the caller unchanged.
    """
    hook = getattr(plugin, method)

    if calling_convention_of(plugin) is CallingConvention.CALLBACK:
        operation: Any = asyncio.get_running_loop().create_future()
        try:
            hook(file.data, file.path, _completion_callback(operation))
        except BaseException:
            operation.cancel()
            raise
    else:
        result = hook(file)
        if not is_awaitable(result):
            return result
        operation = result

    return await guard(
        operation,
        interval_ms,
        slow_call_message(plugin, method, file),
        scheduler=scheduler,
        sink=sink,
    )
