"""
Registry of every town referenced by a file.

Keyed by ``ParsedPlace.key`` (the normalized town name). Each entry keeps
the best ParsedPlace seen so far plus the list of events that happened
there. Geocoding results from an external service are merged in with
``apply_geocoding``; existing values are never overwritten.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, Iterator, List, Optional

from gedcom_fan.logging import get_logger
from gedcom_fan.places import FRANCE, ParsedPlace

from .models import GEO_FIELDS, fill_place

log = get_logger("extraction.place_registry")


@dataclass(slots=True)
class PlaceEventRef:
    type: str
    date: str = ""
    person_id: Optional[str] = None


@dataclass
class PlaceEntry:
    key: str
    place: ParsedPlace
    events: List[PlaceEventRef] = field(default_factory=list)

    @property
    def needs_geocoding(self) -> bool:
        """
        French towns need coordinates and a departement; foreign towns need
        coordinates. A town with no country at all always needs lookup.
        """
        place = self.place
        if not place.country:
            return True
        if not place.has_coordinates:
            return True
        if place.country == FRANCE:
            return not place.departement
        return False


class PlaceRegistry:
    def __init__(self):
        self._entries: Dict[str, PlaceEntry] = {}

    def register(
        self,
        place: ParsedPlace,
        event_type: str,
        date: str = "",
        person_id: Optional[str] = None,
    ) -> Optional[PlaceEntry]:
        """
        Record an event at ``place``. Places without a town are ignored.

        The first occurrence of a town provides its ParsedPlace; later
        occurrences only fill fields that are still empty.
        """
        key = place.key
        if not key:
            return None

        entry = self._entries.get(key)
        if entry is None:
            entry = PlaceEntry(key=key, place=replace(place))
            self._entries[key] = entry
        else:
            fill_place(
                entry.place,
                {name: getattr(place, name) for name in GEO_FIELDS},
            )

        entry.events.append(PlaceEventRef(type=event_type, date=date or "", person_id=person_id))
        return entry

    def get(self, key: str) -> Optional[PlaceEntry]:
        return self._entries.get(key)

    def keys(self) -> List[str]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[PlaceEntry]:
        return iter(self._entries.values())

    def apply_geocoding(self, key: str, **fields) -> bool:
        """
        Merge geocoder output into the entry for ``key``.

        Accepted fields: latitude, longitude, departement, departement_color,
        country, country_code, country_color. Returns True if any field was
        filled.
        """
        entry = self._entries.get(key)
        if entry is None:
            log.warning("Geocoding result for unknown place key %r ignored", key)
            return False
        changed = fill_place(entry.place, fields)
        if changed:
            log.debug("Geocoding filled %s", key)
        return changed

    def towns_needing_geocoding(self) -> List[PlaceEntry]:
        return [entry for entry in self._entries.values() if entry.needs_geocoding]
