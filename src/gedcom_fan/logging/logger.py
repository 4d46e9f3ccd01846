"""
Logging setup for gedcom_fan.

Every logger handed out by ``get_logger`` lives under the ``gedcom_fan``
namespace. The base logger owns two handlers (console + master log file);
each child logger adds a file of its own, ``logs/<dotted_name>.log``.

Levels, file names and rotation come from the ``logging`` section of
``config/gedcom_fan.yml``; ``debug: true`` forces DEBUG everywhere.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from logging import Logger
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, List, Optional

from gedcom_fan.config import get_config

PROJECT_ROOT = Path(__file__).resolve().parents[3]
BASE_LOGGER_NAME = "gedcom_fan"

_FORMATTER = logging.Formatter(
    "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


@dataclass(frozen=True)
class _Settings:
    level: int
    log_dir: Path
    master_file: str
    rotate: bool
    debug: bool


_settings: Optional[_Settings] = None
_loggers: Dict[str, Logger] = {}


def _read_settings() -> _Settings:
    cfg = get_config()
    section = cfg.logging
    debug = bool(cfg.debug)

    log_dir = Path(section.get("dir") or cfg.paths.get("logs_dir") or "logs")
    if not log_dir.is_absolute():
        log_dir = PROJECT_ROOT / log_dir

    level = getattr(logging, str(section.get("level", "INFO")).upper(), logging.INFO)
    return _Settings(
        level=logging.DEBUG if debug else level,
        log_dir=log_dir,
        master_file=section.get("file", "gedcom_fan.log"),
        rotate=bool(section.get("rotate", False)),
        debug=debug,
    )


def _file_handler(settings: _Settings, filename: str) -> logging.Handler:
    settings.log_dir.mkdir(parents=True, exist_ok=True)
    path = settings.log_dir / filename
    if settings.rotate:
        handler: logging.Handler = RotatingFileHandler(
            path, maxBytes=5 * 1024 * 1024, backupCount=5, encoding="utf-8"
        )
    else:
        handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(settings.level)
    handler.setFormatter(_FORMATTER)
    return handler


def _base_logger() -> Logger:
    """Configure ``gedcom_fan`` on first use; later calls are no-ops."""
    global _settings

    base = logging.getLogger(BASE_LOGGER_NAME)
    if _settings is not None:
        return base

    _settings = _read_settings()
    base.setLevel(_settings.level)
    base.propagate = False

    console = logging.StreamHandler()
    console.setLevel(logging.DEBUG if _settings.debug else logging.INFO)
    console.setFormatter(_FORMATTER)

    base.addHandler(_file_handler(_settings, _settings.master_file))
    base.addHandler(console)
    _loggers[BASE_LOGGER_NAME] = base
    return base


def _qualify(name: Optional[str]) -> str:
    if not name or name == BASE_LOGGER_NAME:
        return BASE_LOGGER_NAME
    if name.startswith(BASE_LOGGER_NAME + "."):
        return name
    return f"{BASE_LOGGER_NAME}.{name}"


def get_logger(name: str | None = None) -> Logger:
    """
    Return the project logger called ``name``.

    Names outside the ``gedcom_fan`` namespace are moved under it:
    ``get_logger("hierarchy.builder")`` -> ``gedcom_fan.hierarchy.builder``.
    """
    _base_logger()
    qualified = _qualify(name)

    if qualified in _loggers:
        return _loggers[qualified]

    logger = logging.getLogger(qualified)
    logger.setLevel(_settings.level)
    logger.addHandler(_file_handler(_settings, f"{qualified.replace('.', '_')}.log"))
    logger.propagate = True

    _loggers[qualified] = logger
    return logger


def list_active_loggers() -> List[str]:
    """Names of every logger handed out so far."""
    return list(_loggers)
