# tests/test_cli.py

from __future__ import annotations

import json

from typer.testing import CliRunner

from gedcom_fan.cli.app import app
from gedcom_fan.utils import tests_data_path

runner = CliRunner()

FAMILY = str(tests_data_path("family.ged"))


def test_stats_command():
    result = runner.invoke(app, ["stats", FAMILY])

    assert result.exit_code == 0, result.output
    assert "GEDCOM Statistics" in result.stdout
    assert "Individuals" in result.stdout
    assert "utf-8" in result.stdout


def test_export_command_to_stdout():
    result = runner.invoke(app, ["export", FAMILY])

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert set(data["individuals"]) == {"@I1@", "@I2@", "@I3@", "@I4@", "@I5@", "@I6@"}
    assert "hierarchy" not in data


def test_export_command_to_file(tmp_path):
    out = tmp_path / "export.json"
    result = runner.invoke(app, ["export", FAMILY, "--out", str(out), "--pretty"])

    assert result.exit_code == 0, result.output
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["meta"]["families"] == 3


def test_fan_command():
    result = runner.invoke(app, ["fan", FAMILY, "--root", "@I1@", "-g", "3", "--hide-missing"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    hierarchy = data["hierarchy"]
    assert hierarchy["id"] == "@I1@"
    assert [c["sosa"] for c in hierarchy["children"]] == [2, 3]
    assert [c["sosa"] for c in hierarchy["children"][0]["children"]] == [4]
    assert data["timeline"]


def test_fan_command_unknown_root():
    result = runner.invoke(app, ["fan", FAMILY, "--root", "@NOBODY@"])
    assert result.exit_code == 1


def test_fan_command_rejects_too_many_generations():
    result = runner.invoke(app, ["fan", FAMILY, "--root", "@I1@", "--generations", "21"])
    assert result.exit_code == 1


def test_missing_file_is_rejected(tmp_path):
    result = runner.invoke(app, ["stats", str(tmp_path / "missing.ged")])
    assert result.exit_code != 0
