import asyncio
import importlib
import logging
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.markup import escape

from watchbuild.config import load_settings
from watchbuild.core.errors import format_error
from watchbuild.core.passes import CompilationPass
from watchbuild.models import PluginFile

console = Console()
logger = logging.getLogger(__name__)


def _load_plugin(spec: str) -> Any:
    if ":" not in spec:
        raise typer.BadParameter("Plugin must be given as 'module:ClassName'", param_hint="PLUGIN")
    module_name, class_name = spec.split(":", 1)
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise typer.BadParameter(f"Cannot import module '{module_name}': {exc}", param_hint="PLUGIN") from exc
    try:
        plugin_cls = getattr(module, class_name)
    except AttributeError:
        raise typer.BadParameter(
            f"Plugin class '{class_name}' not found in module '{module_name}'", param_hint="PLUGIN"
        ) from None
    return plugin_cls()


def invoke(
    plugin: Annotated[str, typer.Argument(help="Plugin class in module:ClassName format.")],
    path: Annotated[Path, typer.Argument(help="Source file to hand to the plugin.")],
    method: Annotated[str, typer.Option(help="Name of the plugin hook to call.")] = "compile",
) -> None:
    """Run one plugin hook on one file and print what it returned."""
    instance = _load_plugin(plugin)
    if not callable(getattr(instance, method, None)):
        raise typer.BadParameter(f"{type(instance).__name__} has no '{method}' hook", param_hint="--method")

    try:
        data = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        console.print(f"[red]File not found:[/red] {path}")
        raise typer.Exit(1) from None

    file = PluginFile(path=str(path), data=data)

    async def _run() -> Any:
        build_pass = CompilationPass(settings=load_settings(), emit=lambda line: console.print(f"[dim]{line}[/dim]"))
        build_pass.start_progress()
        try:
            return await build_pass.call_plugin(instance, method, file)
        finally:
            build_pass.settle()

    try:
        result = asyncio.run(_run())
    except Exception as exc:
        logger.debug("Plugin call failed", exc_info=True)
        file.error = exc
        console.print(f"[red]{escape(format_error(file))}[/red]", highlight=False)
        raise typer.Exit(1) from None

    if isinstance(result, bytes):
        result = result.decode("utf-8", errors="replace")
    console.print(result if isinstance(result, str) else repr(result), markup=False, highlight=False)
