import inspect
from collections.abc import Mapping
from pathlib import PurePath
from typing import Any


def is_awaitable(value: Any) -> bool:
    return inspect.isawaitable(value)


def base_name(path: str) -> str:
    return PurePath(path).name


def prettify(values: Mapping[str, Any]) -> str:
    """Render ``{"a": 1, "b": 2}`` as ``"a=1 b=2"``."""
    return " ".join(f"{key}={value}" for key, value in values.items())
