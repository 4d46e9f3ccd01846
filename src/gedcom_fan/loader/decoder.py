# src/gedcom_fan/loader/decoder.py

"""
Byte-level entry point of the loader.

GEDCOM files rarely declare their encoding truthfully. The buffer is first
decoded as UTF-8; if that produced replacement characters, or the header
declares ``CHAR ANSI``, the bytes are decoded again through a fixed
extended-ASCII table and re-parsed. The first decode is then discarded.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

from gedcom_fan.core.exceptions import DecodeError
from gedcom_fan.logging import get_logger

from .segmenter import GEDCOMStructureError
from .tokenizer import GedcomSyntaxError, tokenize_text
from .tree_builder import GEDCOMTree, build_tree

log = get_logger("loader.decoder")

UTF8_BOM = b"\xef\xbb\xbf"
REPLACEMENT_CHAR = "\ufffd"
ANSI_CHARSET = "ANSI"

# Bytes 0x80..0xFF, indexed by (byte ^ 0x80). Windows-1252 layout; slots that
# have no printable mapping (0x81, 0x8D, 0x8F, 0x90, 0x9D, 0xA0, 0xAD) are "?".
EXTENDED_ASCII_TABLE = (
    "€?‚ƒ„…†‡ˆ‰Š‹Œ?Ž?"
    "?‘’“”•–—˜™š›œ?žŸ"
    "?¡¢£¤¥¦§¨©ª«¬?®¯"
    "°±²³´µ¶·¸¹º»¼½¾¿"
    "ÀÁÂÃÄÅÆÇÈÉÊËÌÍÎÏ"
    "ÐÑÒÓÔÕÖ×ØÙÚÛÜÝÞß"
    "àáâãäåæçèéêëìíîï"
    "ðñòóôõö÷øùúûüýþÿ"
)


def decode_legacy(buffer: bytes) -> str:
    """
    Decode a single-byte legacy buffer.

    Bytes below 0x80 are US-ASCII; bytes with the high bit set go through
    EXTENDED_ASCII_TABLE.
    """
    if buffer.startswith(UTF8_BOM):
        buffer = buffer[len(UTF8_BOM):]

    return "".join(
        chr(byte) if byte & 0x80 == 0 else EXTENDED_ASCII_TABLE[byte ^ 0x80]
        for byte in buffer
    )


def _parse(text: str, encoding: str) -> GEDCOMTree:
    try:
        tree = build_tree(tokenize_text(text), encoding=encoding)
    except (GedcomSyntaxError, GEDCOMStructureError) as exc:
        raise DecodeError(str(exc)) from exc

    if not tree.records:
        raise DecodeError("No GEDCOM records found in buffer")
    return tree


def decode_gedcom(buffer: bytes) -> GEDCOMTree:
    """
    Turn a raw GEDCOM file buffer into a record tree.

    Raises:
        DecodeError: empty buffer or malformed line structure.
    """
    if not buffer or not buffer.strip():
        raise DecodeError("Empty GEDCOM buffer")

    text = buffer.decode("utf-8", errors="replace")

    if REPLACEMENT_CHAR in text:
        log.info("Replacement characters found after UTF-8 decode; using legacy table")
        return _parse(decode_legacy(buffer), encoding="ansi")

    tree = _parse(text, encoding="utf-8")

    charset = tree.declared_charset()
    if charset is not None and charset.upper() == ANSI_CHARSET:
        log.info("Header declares CHAR %s; re-decoding with legacy table", charset)
        return _parse(decode_legacy(buffer), encoding="ansi")

    log.debug("Decoded %d records as UTF-8", len(tree.records))
    return tree


def load_gedcom_file(path: Union[str, Path]) -> GEDCOMTree:
    """
    Read a GEDCOM file from disk and decode it.

    Raises:
        FileNotFoundError: if `path` does not exist.
        DecodeError: if the content is not a GEDCOM record file.
    """
    file_path = Path(path)

    if not file_path.is_file():
        raise FileNotFoundError(f"GEDCOM file not found: {file_path}")

    log.info("Reading GEDCOM file: %s", file_path)
    return decode_gedcom(file_path.read_bytes())
