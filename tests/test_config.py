# tests/test_config.py

from __future__ import annotations

from gedcom_fan.config import GFConfig, load_config
from gedcom_fan.logging import get_logger, list_active_loggers
from gedcom_fan.utils import resolve_project_path


def test_missing_config_file_gives_defaults(tmp_path):
    cfg = load_config(tmp_path / "absent.yml")

    assert cfg.hierarchy == {}
    assert cfg.debug is False
    assert cfg.substitute_events is False


def test_config_file_is_read(tmp_path):
    path = tmp_path / "gedcom_fan.yml"
    path.write_text(
        "debug: true\n"
        "extraction:\n"
        "  substitute_events: true\n"
        "hierarchy:\n"
        "  max_generations: 4\n",
        encoding="utf-8",
    )

    cfg = load_config(path)

    assert cfg.debug is True
    assert cfg.substitute_events is True
    assert cfg.hierarchy["max_generations"] == 4


def test_empty_sections_are_dicts():
    cfg = GFConfig({"hierarchy": None, "logging": None})
    assert cfg.hierarchy == {}
    assert cfg.logging == {}


def test_shipped_config_has_hierarchy_defaults():
    cfg = load_config(resolve_project_path("config/gedcom_fan.yml"))
    assert cfg.hierarchy == {"max_generations": 8, "show_missing": True}


def test_loggers_are_namespaced():
    logger = get_logger("tests.config")

    assert logger.name == "gedcom_fan.tests.config"
    assert get_logger("gedcom_fan.places").name == "gedcom_fan.places"
    assert "gedcom_fan.tests.config" in list_active_loggers()
