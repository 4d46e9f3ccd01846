# src/gedcom_fan/loader/tokenizer.py

"""
Line tokenizer for decoded GEDCOM text.

Grammar of one line:

    <level> [<xref>] <TAG> [<value>]

The xref is only recognised before the tag ("0 @I1@ INDI"); a pointer that
follows the tag ("1 FAMC @F1@") is part of the value.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Optional


@dataclass(frozen=True)
class Token:
    """
    One GEDCOM line.

    ``value`` is everything after the single space that follows the tag,
    kept verbatim (CONC payloads may start with a space).
    """
    lineno: int
    level: int
    pointer: Optional[str]
    tag: str
    value: str
    raw: str


class GedcomSyntaxError(ValueError):
    """Raised when a GEDCOM line cannot be parsed according to basic syntax."""


_LINE_BREAK = re.compile(r"\r\n|\r|\n")

_LINE = re.compile(
    r"""
    ^(?P<level>\S+)
    (?:\ +(?P<pointer>@[^\s]+@))?
    \ +(?P<tag>[^\s]+)
    (?:\ (?P<value>.*))?$
    """,
    re.VERBOSE,
)


def tokenize_line(line: str, lineno: int = 0) -> Token:
    raw = line.rstrip("\r\n")
    if lineno == 1:
        raw = raw.lstrip("\ufeff")

    # some exporters indent nested lines
    match = _LINE.match(raw.lstrip(" \t"))
    if match is None:
        raise GedcomSyntaxError(f"Line {lineno}: expected '<level> [<xref>] <tag> [<value>]' -> {raw!r}")

    level = match.group("level")
    if not level.isdigit():
        raise GedcomSyntaxError(f"Line {lineno}: level is not numeric -> {level!r} in {raw!r}")

    return Token(
        lineno=lineno,
        level=int(level),
        pointer=match.group("pointer"),
        tag=match.group("tag").upper(),
        value=match.group("value") or "",
        raw=raw,
    )


def tokenize_text(text: str) -> Iterator[Token]:
    """
    Yield a Token for every non-blank line of decoded text.

    CRLF, CR and LF terminators are all accepted.

    Raises:
        GedcomSyntaxError: if a line is syntactically invalid.
    """
    for lineno, line in enumerate(_LINE_BREAK.split(text), start=1):
        if line.strip().strip("\ufeff"):
            yield tokenize_line(line, lineno=lineno)
