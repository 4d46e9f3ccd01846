"""
Logging package for ``gedcom_fan``.

Use ``get_logger("<area>.<module>")`` in modules to inherit the shared
console and master-file handlers and write to a module-specific log file.
"""

from .logger import get_logger, list_active_loggers

__all__ = [
    "get_logger",
    "list_active_loggers",
]
