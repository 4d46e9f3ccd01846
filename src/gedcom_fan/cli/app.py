from __future__ import annotations

import typer

from gedcom_fan.cli.commands.export import export_command
from gedcom_fan.cli.commands.fan import fan_command
from gedcom_fan.cli.commands.stats import stats_command

app = typer.Typer(
    name="gedcom-fan",
    help="GEDCOM decoder, ancestor fan tree builder and exporter",
    add_completion=False,
)

app.command("stats")(stats_command)
app.command("export")(export_command)
app.command("fan")(fan_command)


def main():
    app()


if __name__ == "__main__":
    main()
