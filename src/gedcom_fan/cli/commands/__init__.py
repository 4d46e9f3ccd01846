"""
CLI command modules for gedcom_fan.

Each command module defines a single Typer-compatible command function.
"""

from gedcom_fan.cli.commands.export import export_command
from gedcom_fan.cli.commands.fan import fan_command
from gedcom_fan.cli.commands.stats import stats_command

__all__ = [
    "export_command",
    "fan_command",
    "stats_command",
]
