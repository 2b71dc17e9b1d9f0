"""Render the one-line report of a finished build pass.

Examples of lines this module produces::

    compiled 4 files and 145 cached into app.js in 1.2 sec
    compiled controller.coffee and 32 cached files into app.js in 310 ms
    compiled _partial.styl and 22 cached files into 2 files in 94 ms
    compiled init.ls into init.js in 12 ms
    compiled 5 files into ie7.css in 40 ms
    compiled 106 files into 3 files, copied 47 in 2.8 sec
    copied img.png in 8 ms
    removed app.coffee in 3 ms
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from watchbuild.core.helpers import base_name
from watchbuild.models import Asset, DisposedFiles, GeneratedFile, PassSnapshot

_ONE_SECOND_MS = 1000


@dataclass(frozen=True)
class PassTally:
    copied: tuple[str, ...]
    generated: tuple[str, ...]
    compiled: tuple[str, ...]
    cached_count: int
    removed: tuple[str, ...]


@dataclass(frozen=True)
class _Rule:
    applies: Callable[[PassTally], bool]
    render: Callable[[PassTally], str]


def _always(_: PassTally) -> bool:
    return True


def _first_match(rules: Sequence[_Rule], tally: PassTally) -> str:
    for rule in rules:
        if rule.applies(tally):
            return rule.render(tally)
    raise LookupError("no rule matched")  # pragma: no cover - every table ends with _always


_GENERATED_RULES = (
    _Rule(lambda t: not t.generated, lambda t: ""),
    _Rule(lambda t: len(t.generated) == 1, lambda t: f" into {t.generated[0]}"),
    _Rule(_always, lambda t: f" into {len(t.generated)} files"),
)

_COMPILED_RULES = (
    _Rule(lambda t: not t.compiled and not t.removed, lambda t: ""),
    _Rule(lambda t: not t.compiled and len(t.removed) == 1, lambda t: f"removed {t.removed[0]}"),
    _Rule(lambda t: not t.compiled, lambda t: f"removed {len(t.removed)}"),
    _Rule(lambda t: len(t.compiled) == 1, lambda t: f"compiled {t.compiled[0]}"),
    _Rule(_always, lambda t: f"compiled {len(t.compiled)}"),
)

_CACHED_RULES = (
    _Rule(lambda t: t.cached_count == 0 and len(t.compiled) <= 1, lambda t: ""),
    _Rule(lambda t: t.cached_count == 0, lambda t: " files"),
    _Rule(
        lambda t: not t.compiled and len(t.generated) > 1,
        lambda t: f" and wrote {t.cached_count} cached",
    ),
    _Rule(lambda t: not t.compiled, lambda t: f" and wrote {t.cached_count} cached files"),
    _Rule(
        lambda t: len(t.compiled) == 1 and t.cached_count == 1,
        lambda t: " and 1 cached file",
    ),
    _Rule(lambda t: len(t.compiled) == 1, lambda t: f" and {t.cached_count} cached files"),
    _Rule(_always, lambda t: f" files and {t.cached_count} cached"),
)

_COPIED_RULES = (
    _Rule(lambda t: not t.copied, lambda t: ""),
    _Rule(lambda t: len(t.copied) == 1, lambda t: f"copied {t.copied[0]}"),
    _Rule(lambda t: bool(t.compiled), lambda t: f"copied {len(t.copied)}"),
    _Rule(_always, lambda t: f"copied {len(t.copied)} files"),
)


def tally_pass(
    start_time: float,
    assets: Iterable[Asset],
    generated_files: Iterable[GeneratedFile],
    disposed: DisposedFiles,
) -> PassTally:
    """Sort the files of a pass into copied, generated, compiled and cached."""
    copied = tuple(base_name(asset.path) for asset in assets if asset.copy_time > start_time)
    disposed_paths = {generated_file.path for generated_file in disposed.generated}

    generated: list[str] = []
    compiled: list[str] = []
    cached_count = 0
    for generated_file in generated_files:
        fresh = [source for source in generated_file.source_files if source.compilation_time >= start_time]
        if not fresh and generated_file.path not in disposed_paths:
            continue
        generated.append(base_name(generated_file.path))
        for source in fresh:
            name = base_name(source.path)
            if name not in compiled:
                compiled.append(name)
        cached_count += len(generated_file.source_files) - len(fresh)

    return PassTally(
        copied=copied,
        generated=tuple(generated),
        compiled=tuple(compiled),
        cached_count=cached_count,
        removed=tuple(disposed.source_paths),
    )


def render_tally(tally: PassTally) -> str:
    non_assets = (
        _first_match(_COMPILED_RULES, tally)
        + _first_match(_CACHED_RULES, tally)
        + _first_match(_GENERATED_RULES, tally)
    )
    assets = _first_match(_COPIED_RULES, tally)
    separator = ", " if non_assets and assets else ""
    return non_assets + separator + assets or "compiled"


def format_elapsed(elapsed_ms: float) -> str:
    if elapsed_ms > _ONE_SECOND_MS:
        return f"{elapsed_ms / _ONE_SECOND_MS:.1f} sec"
    return f"{int(elapsed_ms)} ms"


def summarize(
    start_time: float,
    assets: Iterable[Asset],
    generated_files: Iterable[GeneratedFile],
    disposed: DisposedFiles,
    *,
    now: float | None = None,
) -> str:
    if now is None:
        now = time.time() * 1000
    tally = tally_pass(start_time, assets, generated_files, disposed)
    return f"{render_tally(tally)} in {format_elapsed(now - start_time)}"


def summarize_snapshot(snapshot: PassSnapshot, *, now: float | None = None) -> str:
    return summarize(
        snapshot.start_time,
        snapshot.assets,
        snapshot.generated_files,
        snapshot.disposed,
        now=now,
    )
