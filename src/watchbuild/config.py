from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from watchbuild.core.progress import ANIMATION_LOG_INTERVAL_MS
from watchbuild.core.watchdog import WARNING_LOG_INTERVAL_MS


@dataclass(frozen=True)
class Settings:
    warning_interval_ms: int = WARNING_LOG_INTERVAL_MS
    progress_interval_ms: int = ANIMATION_LOG_INTERVAL_MS
    log_level: str = "INFO"


def _int_env(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer number of milliseconds, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ
    return Settings(
        warning_interval_ms=_int_env(env, "WATCHBUILD_WARNING_INTERVAL_MS", WARNING_LOG_INTERVAL_MS),
        progress_interval_ms=_int_env(env, "WATCHBUILD_PROGRESS_INTERVAL_MS", ANIMATION_LOG_INTERVAL_MS),
        log_level=env.get("WATCHBUILD_LOG_LEVEL", "INFO").upper(),
    )
