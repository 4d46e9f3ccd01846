# src/gedcom_fan/loader/tree_builder.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional

from .tokenizer import Token
from .segmenter import RawRecordNode, segment_records
from .value_reconstructor import reconstruct_values


@dataclass
class GEDCOMTree:
    """
    A decoded GEDCOM file: its level-0 records plus lookup indexes.

    ``encoding`` names the decoding path that produced the records,
    "utf-8" or "ansi".
    """

    records: List[RawRecordNode]
    encoding: str = "utf-8"

    _by_pointer: Dict[str, RawRecordNode] = field(default_factory=dict, init=False, repr=False)
    _by_tag: Dict[str, List[RawRecordNode]] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        for record in self.records:
            self._by_tag.setdefault(record.tag.upper(), []).append(record)
        for node in self.iter_nodes():
            if node.pointer:
                self._by_pointer.setdefault(node.pointer, node)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[RawRecordNode]:
        return iter(self.records)

    def iter_nodes(self) -> Iterator[RawRecordNode]:
        """Every node of every record, depth-first."""
        for record in self.records:
            yield from record.iter_subtree()

    def find_by_pointer(self, pointer: str) -> Optional[RawRecordNode]:
        if not pointer:
            return None
        return self._by_pointer.get(pointer)

    def find_records_by_tag(self, tag: str) -> List[RawRecordNode]:
        """Level-0 records with ``tag`` (case-insensitive), in file order."""
        return list(self._by_tag.get((tag or "").upper(), []))

    def declared_charset(self) -> Optional[str]:
        """HEAD.CHAR, stripped, or None when the header does not declare one."""
        for head in self.find_records_by_tag("HEAD"):
            charset = head.first_data("CHAR")
            if charset is not None:
                return charset.strip()
        return None

    def __repr__(self) -> str:
        return f"<GEDCOMTree records={len(self.records)} encoding={self.encoding}>"


def build_tree(tokens: Iterable[Token], encoding: str = "utf-8") -> GEDCOMTree:
    """
    tokens -> GEDCOMTree

    CONC/CONT lines are folded into their parents here, so the tree handed
    downstream is final.
    """
    records = reconstruct_values(segment_records(list(tokens)))
    return GEDCOMTree(records=records, encoding=encoding)
