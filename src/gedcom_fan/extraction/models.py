from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional

from gedcom_fan.places import ParsedPlace

if TYPE_CHECKING:
    from .family_index import FamilyIndex
    from .place_registry import PlaceRegistry

# Geo fields an external geocoder may fill in after extraction.
GEO_FIELDS = (
    "latitude",
    "longitude",
    "departement",
    "departement_color",
    "country",
    "country_code",
    "country_color",
)


def fill_empty_fields(target, fields: Dict[str, object]) -> bool:
    """
    Set each attribute of ``target`` that is currently empty.

    Non-empty values are never overwritten. Returns True if anything changed.
    """
    changed = False
    for name, value in fields.items():
        if name not in GEO_FIELDS:
            raise ValueError(f"Unknown geo field: {name}")
        if value is None or value == "":
            continue
        current = getattr(target, name)
        if current is None or current == "":
            setattr(target, name, value)
            changed = True
    return changed


def fill_place(place: ParsedPlace, fields: Dict[str, object]) -> bool:
    """fill_empty_fields for a ParsedPlace; ``display`` follows the new fields."""
    changed = fill_empty_fields(place, fields)
    if changed:
        place.refresh_display()
    return changed


# -----------------------------
# Events
# -----------------------------

@dataclass(slots=True)
class IndividualEvent:
    """
    One dated/placed fact in a person's life.

    type is one of: birth, death, burial, baptism, marriage, occupation, event
    """
    type: str
    date: str = ""
    town: str = ""
    town_display: str = ""
    place_key: str = ""
    description: str = ""


@dataclass(slots=True)
class Occupation:
    value: str
    date: str = ""
    year: Optional[int] = None
    source: str = "OCCU"


# -----------------------------
# Individuals
# -----------------------------

@dataclass
class Individual:
    """
    Flattened view of an INDI record.

    Relationships are plain @XREF@ ids resolved through the individuals
    mapping; no Individual holds a reference to another.
    """
    id: str
    name: str = ""
    surname: str = ""
    gender: Optional[str] = None

    father_id: Optional[str] = None
    mother_id: Optional[str] = None
    spouse_ids: List[str] = field(default_factory=list)
    sibling_ids: List[str] = field(default_factory=list)

    birth_date: str = ""
    death_date: str = ""
    birth_year: Optional[int] = None
    death_year: Optional[int] = None
    birth_place: ParsedPlace = field(default_factory=ParsedPlace)
    death_place: ParsedPlace = field(default_factory=ParsedPlace)

    occupations: List[Occupation] = field(default_factory=list)
    individual_events: List[IndividualEvent] = field(default_factory=list)
    age: Optional[int] = None

    @property
    def full_name(self) -> str:
        return f"{self.name} {self.surname}".strip()

    @property
    def bg_color(self) -> str:
        """Birth departement color, else birth country color."""
        return self.birth_place.departement_color or self.birth_place.country_color or ""

    def events_of_type(self, event_type: str) -> List[IndividualEvent]:
        return [e for e in self.individual_events if e.type == event_type]

    def backfill_geo(self, place_key: str, **fields) -> bool:
        """Fill empty geo fields of the birth/death place keyed ``place_key``."""
        changed = False
        if not place_key:
            return changed
        for place in (self.birth_place, self.death_place):
            if place.key == place_key:
                changed = fill_place(place, fields) or changed
        return changed


@dataclass
class ExtractionResult:
    individuals: Dict[str, Individual]
    places: PlaceRegistry
    families: FamilyIndex

