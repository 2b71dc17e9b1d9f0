from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console

from watchbuild.core.summary import summarize_snapshot
from watchbuild.models import PassSnapshot

console = Console()


def summarize(
    snapshot: Annotated[Path, typer.Argument(help="JSON file with the final state of a build pass.")],
    now: Annotated[float | None, typer.Option(help="Wall clock in epoch milliseconds (defaults to now).")] = None,
) -> None:
    """Print the summary line of a finished build pass."""
    try:
        pass_snapshot = PassSnapshot.model_validate_json(snapshot.read_bytes())
    except FileNotFoundError:
        console.print(f"[red]Snapshot not found:[/red] {snapshot}")
        raise typer.Exit(1) from None
    except ValidationError as exc:
        console.print(f"[red]Invalid snapshot {snapshot}:[/red]\n{exc}")
        raise typer.Exit(1) from None

    console.print(summarize_snapshot(pass_snapshot, now=now), highlight=False, markup=False, soft_wrap=True)
