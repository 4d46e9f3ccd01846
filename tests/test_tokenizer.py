# tests/test_tokenizer.py

from __future__ import annotations

import pytest

from gedcom_fan.loader import GedcomSyntaxError, tokenize_line, tokenize_text


def test_tokenize_line_simple_head() -> None:
    token = tokenize_line("0 HEAD", lineno=1)
    assert token.lineno == 1
    assert token.level == 0
    assert token.pointer is None
    assert token.tag == "HEAD"
    assert token.value == ""


def test_tokenize_line_with_pointer_and_tag_only() -> None:
    token = tokenize_line("0 @I1@ INDI", lineno=1)
    assert token.level == 0
    assert token.pointer == "@I1@"
    assert token.tag == "INDI"
    assert token.value == ""


def test_tokenize_line_link_value_is_not_a_pointer() -> None:
    token = tokenize_line("1 FAMC @F1@", lineno=4)
    assert token.pointer is None
    assert token.tag == "FAMC"
    assert token.value == "@F1@"


def test_tokenize_line_keeps_calendar_escape_in_value() -> None:
    token = tokenize_line("2 DATE @#DFRENCH R@ 3 VEND 2", lineno=7)
    assert token.tag == "DATE"
    assert token.value == "@#DFRENCH R@ 3 VEND 2"


def test_tokenize_line_with_bom_on_first_line() -> None:
    token = tokenize_line("\ufeff0 HEAD", lineno=1)
    assert token.level == 0
    assert token.tag == "HEAD"


def test_tokenize_line_lowercase_tag_is_uppercased() -> None:
    token = tokenize_line("1 name Jean /Dupont/", lineno=2)
    assert token.tag == "NAME"
    assert token.value == "Jean /Dupont/"


def test_tokenize_line_invalid_level_raises() -> None:
    with pytest.raises(GedcomSyntaxError):
        tokenize_line("X HEAD", lineno=1)


def test_tokenize_line_missing_tag_raises() -> None:
    with pytest.raises(GedcomSyntaxError):
        tokenize_line("0 ", lineno=1)


def test_tokenize_text_accepts_mixed_line_endings_and_blank_lines() -> None:
    text = "0 HEAD\r\n1 CHAR UTF-8\r\n\n0 @I1@ INDI\r1 SEX M\n0 TRLR"
    tokens = list(tokenize_text(text))

    assert [t.tag for t in tokens] == ["HEAD", "CHAR", "INDI", "SEX", "TRLR"]
    assert tokens[2].pointer == "@I1@"
    assert tokens[3].value == "M"
