# tests/test_reconstruct_values.py

from __future__ import annotations

from gedcom_fan.loader import RawRecordNode, reconstruct_values


def test_conc_appends_without_newline():
    parent = RawRecordNode(level=1, tag="NOTE", data="Line one", lineno=1)
    conc = RawRecordNode(level=2, tag="CONC", data=" and more", lineno=2)
    cont = RawRecordNode(level=2, tag="CONT", data="Second line", lineno=3)
    conc2 = RawRecordNode(level=2, tag="CONC", data=" more text", lineno=4)

    parent.children = [conc, cont, conc2]

    reconstruct_values([parent])

    assert parent.data == "Line one and more\nSecond line more text"
    # CONC/CONT nodes are removed
    assert parent.children == []


def test_empty_cont_adds_blank_line():
    parent = RawRecordNode(level=1, tag="NOTE", data="Top", lineno=1)
    parent.children = [RawRecordNode(level=2, tag="CONT", data="", lineno=2)]

    reconstruct_values([parent])

    assert parent.data == "Top\n"


def test_reconstruction_preserves_children_structure():
    parent = RawRecordNode(level=1, tag="NOTE", data="Base", lineno=1)
    child_event = RawRecordNode(level=2, tag="DATE", data="1900", lineno=2)
    conc = RawRecordNode(level=2, tag="CONC", data=" extra", lineno=3)

    parent.children = [child_event, conc]

    reconstruct_values([parent])

    assert parent.data == "Base extra"
    assert len(parent.children) == 1
    assert parent.children[0].tag == "DATE"


def test_nested_continuations_are_folded_at_every_level():
    record = RawRecordNode(level=0, tag="SOUR", pointer="@S1@")
    page = RawRecordNode(level=1, tag="PAGE", data="Vol. 3")
    page.children = [RawRecordNode(level=2, tag="CONT", data="p. 12")]
    text = RawRecordNode(level=2, tag="TEXT", data="Baptême")
    text.children = [RawRecordNode(level=3, tag="CONC", data=" de Jean")]
    page.children.append(text)
    record.children = [page]

    assert reconstruct_values([record]) == [record]

    assert page.data == "Vol. 3\np. 12"
    assert [c.tag for c in page.children] == ["TEXT"]
    assert text.data == "Baptême de Jean"
    assert text.children == []
