from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from gedcom_fan.cli.utils import err_console, load_gedcom, write_json
from gedcom_fan.core.exceptions import ConfigError
from gedcom_fan.exporter import build_export_dict
from gedcom_fan.hierarchy import HierarchyConfig

console = Console()


def fan_command(
    gedcom: Path = typer.Argument(..., exists=True, readable=True),
    root: str = typer.Option(
        ...,
        "--root",
        "-r",
        help="Pointer of the root individual, e.g. @I1@",
    ),
    generations: Optional[int] = typer.Option(
        None,
        "--generations",
        "-g",
        help="Number of generations, root included (config default otherwise)",
    ),
    show_missing: Optional[bool] = typer.Option(
        None,
        "--show-missing/--hide-missing",
        help="Fill unknown ancestors with placeholders",
    ),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Write output to file instead of stdout",
    ),
    pretty: bool = typer.Option(
        False,
        "--pretty",
        help="Pretty-print JSON",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable rich logging",
    ),
):
    """
    Build the ancestor fan tree of one individual and export it as JSON.
    """
    pipeline, ctx = load_gedcom(gedcom, verbose=verbose)

    try:
        config = HierarchyConfig.from_config(
            ctx.config,
            max_generations=generations,
            show_missing=show_missing,
        )
    except ConfigError as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    hierarchy = pipeline.build(root, config)
    if hierarchy is None:
        err_console.print(f"[red]Error:[/red] root individual {root} not found")
        raise typer.Exit(code=1)

    if verbose:
        console.log(f"Built {config.max_generations} generations for {root}")

    write_json(build_export_dict(ctx, hierarchy), out=out, pretty=pretty)
