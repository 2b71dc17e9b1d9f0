from enum import Enum
from typing import Any


class CallingConvention(Enum):
    """How a plugin's transform hooks expect to be called.

    ``DIRECT`` hooks take the file and return a value or an awaitable.
    ``CALLBACK`` hooks take ``(data, path, done)`` and report through
    ``done(error, result)``. Plugins declare theirs as a
    ``calling_convention`` class attribute.
    """

    DIRECT = "direct"
    CALLBACK = "callback"


def calling_convention_of(plugin: Any) -> CallingConvention:
    return getattr(plugin, "calling_convention", CallingConvention.DIRECT)
