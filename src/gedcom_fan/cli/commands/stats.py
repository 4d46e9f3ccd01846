from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from gedcom_fan.cli.utils import load_gedcom

console = Console()


def stats_command(
    gedcom: Path = typer.Argument(..., exists=True, readable=True),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable rich logging",
    ),
):
    """
    Show summary statistics for a GEDCOM file.
    """
    _, ctx = load_gedcom(gedcom, verbose=verbose)
    stats = ctx.stats

    table = Table(title="GEDCOM Statistics")
    table.add_column("Entry", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Individuals", str(stats.get("individuals", 0)))
    table.add_row("Families", str(stats.get("families", 0)))
    table.add_row("Places", str(stats.get("places", 0)))
    table.add_row("Encoding", str(stats.get("encoding", "")))
    table.add_row("Generations", str(stats.get("max_generations", 0)))

    needing = ctx.places.towns_needing_geocoding() if ctx.places is not None else []
    table.add_row("Places to geocode", str(len(needing)))

    console.print(table)
