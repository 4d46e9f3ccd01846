"""
CLI package for gedcom_fan.

Provides the Typer application entrypoint and shared CLI utilities.
"""

from gedcom_fan.cli.app import app, main

__all__ = [
    "app",
    "main",
]
