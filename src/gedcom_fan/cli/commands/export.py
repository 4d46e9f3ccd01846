from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from gedcom_fan.cli.utils import load_gedcom, write_json
from gedcom_fan.exporter import build_export_dict

console = Console()


def export_command(
    gedcom: Path = typer.Argument(..., exists=True, readable=True),
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
    Export individuals and places to JSON (stdout by default).
    """
    _, ctx = load_gedcom(gedcom, verbose=verbose)

    if verbose:
        console.log("Exporting JSON")

    write_json(build_export_dict(ctx), out=out, pretty=pretty)

    if verbose:
        console.log("Export complete")
