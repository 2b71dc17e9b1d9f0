from watchbuild.scheduler.asyncio_adapter import AsyncioScheduler
from watchbuild.scheduler.virtual import VirtualScheduler, VirtualTimer

__all__ = [
    "AsyncioScheduler",
    "VirtualScheduler",
    "VirtualTimer",
]
