# src/gedcom_fan/loader/__init__.py

"""
Public interface for the GEDCOM loader stack.

Intended usage from other parts of the project and tests:

    from gedcom_fan.loader import (
        decode_gedcom,
        load_gedcom_file,
        GEDCOMTree,
        RawRecordNode,
    )
"""

from __future__ import annotations
from .tokenizer import Token, GedcomSyntaxError, tokenize_line, tokenize_text
from .segmenter import RawRecordNode, GEDCOMStructureError, segment_records
from .value_reconstructor import reconstruct_values
from .tree_builder import GEDCOMTree, build_tree
from .decoder import EXTENDED_ASCII_TABLE, decode_gedcom, decode_legacy, load_gedcom_file


__all__ = [
    "Token",
    "GedcomSyntaxError",
    "RawRecordNode",
    "GEDCOMStructureError",
    "GEDCOMTree",
    "EXTENDED_ASCII_TABLE",
    "tokenize_line",
    "tokenize_text",
    "segment_records",
    "build_tree",
    "reconstruct_values",
    "decode_gedcom",
    "decode_legacy",
    "load_gedcom_file",
]
