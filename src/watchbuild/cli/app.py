import logging
from dataclasses import asdict
from typing import Annotated

import typer
from rich.logging import RichHandler

from watchbuild.cli.invoke import invoke
from watchbuild.cli.summarize import summarize
from watchbuild.config import load_settings
from watchbuild.core.helpers import prettify

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="watchbuild",
    help="Run build plugins and report on build passes.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def configure(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log at DEBUG level.")] = False,
) -> None:
    try:
        settings = load_settings()
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )
    logger.debug("Settings: %s", prettify(asdict(settings)))


app.command("summarize")(summarize)
app.command("invoke")(invoke)


def main() -> None:
    app()
