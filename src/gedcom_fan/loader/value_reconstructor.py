# src/gedcom_fan/loader/value_reconstructor.py

"""
Folding of GEDCOM continuation lines.

    1 NOTE Born in Lyon
    2 CONC , second son        -> "Born in Lyon, second son\nof Pierre."
    2 CONT of Pierre.

CONC glues its payload to the parent's data, CONT starts a new line. The
continuation nodes are removed from the tree.
"""

from __future__ import annotations

from typing import List

from .segmenter import RawRecordNode

CONTINUATION_SEPARATORS = {
    "CONC": "",
    "CONT": "\n",
}


def reconstruct_values(records: List[RawRecordNode]) -> List[RawRecordNode]:
    """Fold CONC/CONT lines in place, at every depth; returns ``records``."""
    pending = list(records)
    while pending:
        node = pending.pop()

        parts = [node.data or ""]
        kept: List[RawRecordNode] = []
        for child in node.children:
            separator = CONTINUATION_SEPARATORS.get(child.tag)
            if separator is None:
                kept.append(child)
            else:
                parts.append(separator + (child.data or ""))

        if len(kept) != len(node.children):
            node.data = "".join(parts)
            node.children = kept
        pending.extend(kept)

    return records
