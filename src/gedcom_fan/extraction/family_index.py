# src/gedcom_fan/extraction/family_index.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple


@dataclass
class FamilyRecord:
    """
    One FAM record reduced to its links.

    ``husband``/``wife``/``children`` are the raw @XREF@ payloads; they may
    point at individuals that do not exist.
    """

    id: str
    husband: Optional[str] = None
    wife: Optional[str] = None
    children: List[str] = field(default_factory=list)
    node: Optional[object] = field(default=None, repr=False, compare=False)

    @property
    def marriage(self):
        """The MARR substructure, if any."""
        if self.node is None:
            return None
        return self.node.find_first("MARR")

    def partner_of(self, individual_id: str) -> Optional[str]:
        if individual_id == self.husband:
            return self.wife
        if individual_id == self.wife:
            return self.husband
        return None


def _link(node, tag: str) -> Optional[str]:
    value = node.first_data(tag)
    if value is None:
        return None
    value = value.strip()
    return value or None


class FamilyIndex:
    """
    Lookup tables over every FAM record of a tree:

        by child   -> families listing the person as CHIL (file order)
        by parent  -> families listing the person as HUSB or WIFE
        by couple  -> (husband, wife) -> family

    Built in one pass before any individual is processed.
    """

    def __init__(self, families: Iterable[FamilyRecord] = ()):
        self._records: List[FamilyRecord] = []
        self._families: Dict[str, FamilyRecord] = {}
        self._by_child: Dict[str, List[FamilyRecord]] = {}
        self._by_parent: Dict[str, List[FamilyRecord]] = {}
        self._by_couple: Dict[Tuple[Optional[str], Optional[str]], FamilyRecord] = {}

        for family in families:
            self.add(family)

    @classmethod
    def from_tree(cls, tree) -> "FamilyIndex":
        index = cls()
        for node in tree.find_records_by_tag("FAM"):
            index.add(
                FamilyRecord(
                    id=node.pointer or "",
                    husband=_link(node, "HUSB"),
                    wife=_link(node, "WIFE"),
                    children=[c.data.strip() for c in node.find_children("CHIL") if c.data.strip()],
                    node=node,
                )
            )
        return index

    def add(self, family: FamilyRecord) -> None:
        self._records.append(family)
        if family.id:
            self._families[family.id] = family

        for child in family.children:
            self._by_child.setdefault(child, []).append(family)

        for parent in (family.husband, family.wife):
            if parent:
                self._by_parent.setdefault(parent, []).append(family)

        if family.husband or family.wife:
            self._by_couple.setdefault((family.husband, family.wife), family)

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    def get(self, family_id: str) -> Optional[FamilyRecord]:
        return self._families.get(family_id)

    def parental_family(self, individual_id: str) -> Optional[FamilyRecord]:
        """First family (file order) listing the person as a child."""
        families = self._by_child.get(individual_id)
        return families[0] if families else None

    def families_as_parent(self, individual_id: str) -> List[FamilyRecord]:
        return list(self._by_parent.get(individual_id, []))

    def family_by_couple(self, husband_id: Optional[str], wife_id: Optional[str]) -> Optional[FamilyRecord]:
        return self._by_couple.get((husband_id, wife_id))

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self):
        return iter(self._records)
