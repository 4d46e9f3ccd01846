# tests/test_tree_builder.py

from __future__ import annotations

from gedcom_fan.loader import GEDCOMTree, load_gedcom_file
from gedcom_fan.utils import tests_data_path


def _family_tree() -> GEDCOMTree:
    return load_gedcom_file(tests_data_path("family.ged"))


def test_tree_first_record_is_head_and_level_zero() -> None:
    tree = _family_tree()

    assert isinstance(tree, GEDCOMTree)
    first = tree.records[0]
    assert first.level == 0
    assert first.tag == "HEAD"
    assert tree.encoding == "utf-8"


def test_tree_pointer_lookup_round_trip() -> None:
    tree = _family_tree()

    target = next(node for node in tree.iter_nodes() if node.pointer)
    assert tree.find_by_pointer(target.pointer) is target


def test_tree_records_lookup_by_tag() -> None:
    tree = _family_tree()

    individuals = tree.find_records_by_tag("indi")
    assert len(individuals) == 6
    assert all(rec.level == 0 and rec.tag == "INDI" for rec in individuals)
    assert len(tree.find_records_by_tag("FAM")) == 3


def test_tree_declared_charset() -> None:
    tree = _family_tree()

    assert tree.declared_charset() == "UTF-8"
    assert len(tree) == 11
    assert [r.tag for r in tree][-1] == "TRLR"


def test_continuation_lines_are_folded_while_building() -> None:
    tree = _family_tree()

    jean = tree.find_by_pointer("@I1@")
    assert jean.first_data("NOTE") == "Born in Lyon, second son\nof Pierre."
    assert jean.find_first("NOTE").children == []
