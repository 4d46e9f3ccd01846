# tests/test_pipeline.py

from __future__ import annotations

import pytest

from gedcom_fan.config import GFConfig
from gedcom_fan.core import DecodeError, PipelineContext, PipelineError
from gedcom_fan.core.pipeline import Pipeline
from gedcom_fan.hierarchy import HierarchyConfig, iter_nodes
from gedcom_fan.logging import get_logger
from gedcom_fan.utils import tests_data_path


def _context(**kwargs) -> PipelineContext:
    return PipelineContext(config=GFConfig({}), logger=get_logger("tests.pipeline"), **kwargs)


def test_run_from_path_fills_context_and_stats():
    ctx = _context(input_path=str(tests_data_path("family.ged")))
    Pipeline(ctx).run()

    assert set(ctx.individuals) == {"@I1@", "@I2@", "@I3@", "@I4@", "@I5@", "@I6@"}
    assert len(ctx.families) == 3
    assert ctx.stats == {
        "records": 11,
        "encoding": "utf-8",
        "individuals": 6,
        "families": 3,
        "places": 5,
        "max_generations": 3,
        "source": "family.ged",
    }
    assert ctx.errors == []


def test_run_from_bytes():
    data = tests_data_path("legacy_bytes.ged").read_bytes()
    ctx = Pipeline(_context()).run(data)

    assert ctx.stats["encoding"] == "ansi"
    assert "source" not in ctx.stats
    person = ctx.individuals["@I1@"]
    assert (person.name, person.surname) == ("André", "Lévy")


def test_each_run_has_its_own_context():
    first = Pipeline(_context(input_path=str(tests_data_path("family.ged")))).run()
    second = Pipeline(_context(input_path=str(tests_data_path("republican.ged")))).run()

    assert "@I3@" in first.individuals
    assert "@I3@" not in second.individuals
    assert first.places is not second.places


def test_decode_error_propagates_and_is_recorded():
    ctx = _context()
    with pytest.raises(DecodeError):
        Pipeline(ctx).run(b"")
    assert len(ctx.errors) == 1


def test_missing_input_is_an_error():
    with pytest.raises(PipelineError):
        Pipeline(_context()).run()


def test_missing_file_propagates(tmp_path):
    ctx = _context(input_path=str(tmp_path / "nope.ged"))
    with pytest.raises(FileNotFoundError):
        Pipeline(ctx).run()


def test_build_uses_context_individuals():
    ctx = _context(input_path=str(tests_data_path("family.ged")))
    pipeline = Pipeline(ctx)
    pipeline.run()

    root = pipeline.build("@I1@", HierarchyConfig(max_generations=2, show_missing=False))
    assert [n.id for n in iter_nodes(root)] == ["@I1@", "@I2@", "@I3@"]

    assert pipeline.build("@UNKNOWN@") is None


def test_build_reads_hierarchy_section_of_config():
    ctx = PipelineContext(
        config=GFConfig({"hierarchy": {"max_generations": 2, "show_missing": True}}),
        logger=get_logger("tests.pipeline"),
        input_path=str(tests_data_path("family.ged")),
    )
    pipeline = Pipeline(ctx)
    pipeline.run()

    root = pipeline.build("@I4@")
    assert [n.sosa for n in iter_nodes(root)] == [1, 2, 3]
    assert all(child.is_placeholder for child in root.children)


def test_apply_geocoding_backfills_individuals():
    ctx = _context(input_path=str(tests_data_path("family.ged")))
    pipeline = Pipeline(ctx)
    pipeline.run()

    assert pipeline.apply_geocoding("villeurbanne", latitude=45.77, longitude=4.88)

    jean = ctx.individuals["@I1@"]
    assert (jean.death_place.latitude, jean.death_place.longitude) == (45.77, 4.88)
    # birth place already had coordinates
    assert jean.birth_place.latitude == pytest.approx(45.764)
    assert "villeurbanne" not in [e.key for e in ctx.places.towns_needing_geocoding()]


def test_apply_geocoding_before_run():
    assert Pipeline(_context()).apply_geocoding("lyon", latitude=1.0) is False


def test_apply_geocoding_refreshes_individual_place_display():
    data = (
        "0 HEAD\n1 CHAR UTF-8\n"
        "0 @I1@ INDI\n1 NAME Louis /Dupont/\n1 BIRT\n2 DATE 1860\n2 PLAC Montbrison\n"
        "0 TRLR\n"
    ).encode("utf-8")
    ctx = _context()
    pipeline = Pipeline(ctx)
    pipeline.run(data)

    pipeline.apply_geocoding("montbrison", country="France", departement="Loire")

    place = ctx.individuals["@I1@"].birth_place
    assert place.display == "Montbrison, Loire, France"
    assert ctx.places.get("montbrison").place.display == "Montbrison, Loire, France"
