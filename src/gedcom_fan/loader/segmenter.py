# src/gedcom_fan/loader/segmenter.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Iterator

from .tokenizer import Token


@dataclass
class RawRecordNode:
    """
    One GEDCOM line with its nested substructures.

    ``data`` is the line payload; on link lines (FAMC, HUSB, CHIL...) it
    holds the referenced @XREF@. ``pointer`` is the node's own @XREF@ and
    is only set on level-0 records.
    """

    level: int
    tag: str
    data: str = ""
    pointer: Optional[str] = None
    lineno: int = 0
    children: List["RawRecordNode"] = field(default_factory=list)

    def add_child(self, child: "RawRecordNode") -> None:
        self.children.append(child)

    def find_children(self, tag: str) -> List["RawRecordNode"]:
        return [c for c in self.children if c.tag == tag]

    def find_first(self, tag: str) -> Optional["RawRecordNode"]:
        return next((c for c in self.children if c.tag == tag), None)

    def first_data(self, tag: str) -> Optional[str]:
        """Payload of the first direct child with this tag, or None."""
        child = self.find_first(tag)
        return None if child is None else child.data

    def iter_subtree(self) -> Iterator["RawRecordNode"]:
        """Yield this node and all descendants in depth-first order."""
        yield self
        for child in self.children:
            yield from child.iter_subtree()

    def __repr__(self) -> str:
        ptr = f" {self.pointer}" if self.pointer else ""
        return f"<RawRecordNode {self.level}{ptr} {self.tag}: {self.data!r}>"


class GEDCOMStructureError(Exception):
    """Raised when hierarchical structure rules are violated."""



def segment_records(tokens: List[Token]) -> List[RawRecordNode]:
    """
    Nest a flat token list into records.

    A level-N line belongs to the closest preceding line of level N-1; a
    line may go at most one level deeper than the line before it. Only the
    level-0 nodes are returned.
    """
    records: List[RawRecordNode] = []
    # open_nodes[n] is the last node seen at level n
    open_nodes: List[RawRecordNode] = []

    for tok in tokens:
        node = RawRecordNode(
            level=tok.level,
            tag=tok.tag,
            data=tok.value,
            pointer=tok.pointer,
            lineno=tok.lineno,
        )

        if tok.level == 0:
            records.append(node)
            open_nodes = [node]
            continue

        if not open_nodes:
            raise GEDCOMStructureError(
                f"Line {tok.lineno}: level {tok.level} line before any level-0 record"
            )
        if tok.level > len(open_nodes):
            raise GEDCOMStructureError(
                f"Line {tok.lineno}: level jumps from {len(open_nodes) - 1} to {tok.level}"
            )

        del open_nodes[tok.level:]
        open_nodes[-1].add_child(node)
        open_nodes.append(node)

    return records
