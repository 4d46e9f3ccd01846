"""
Place normalization.

Turns a free-text PLAC value into a ParsedPlace:
- town (formatted for display) and the raw first segment
- country, resolved against the country table (FR or EN key)
- French departement, from a postal / parenthesised code or by position
- MAP -> LATI / LONG coordinates (N/S/E/W -> signed decimal)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from gedcom_fan.logging import get_logger

from .tables import (
    find_country,
    find_departement_by_code,
    find_departement_by_name,
)
from .towns import format_town_name, normalize_geo_string

log = get_logger("places.normalizer")

FRANCE = "France"

_DEPARTEMENT_CODE = re.compile(r"\b\d{5}\b|\(\d{2}\)")


@dataclass
class ParsedPlace:
    town: str = ""
    town_display: str = ""
    subdivision: str = ""
    departement: str = ""
    departement_color: str = ""
    region: str = ""
    country: str = ""
    country_code: str = ""
    country_color: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    display: str = ""
    raw: str = ""

    @property
    def key(self) -> str:
        """Registry key shared by every event in the same town."""
        return normalize_geo_string(self.town)

    @property
    def is_empty(self) -> bool:
        return not self.raw

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @property
    def is_french(self) -> bool:
        return self.country in ("", FRANCE)

    def refresh_display(self) -> str:
        """Rebuild ``display`` from subdivision, town, departement and country."""
        self.display = ", ".join(
            v for v in (self.subdivision, self.town, self.departement, self.country) if v
        )
        return self.display


# =====================================================================
# Coordinate parsing
# =====================================================================

def parse_coordinate(value) -> Optional[float]:
    """
    Convert a GEDCOM coordinate to a signed float.

    Accepts:
      N43.123 / S12.50 / W70.12 / E10.945 / 45.75

    Returns None for anything else.
    """
    if value is None:
        return None

    v = str(value).strip().upper()
    if not v:
        return None

    m = re.match(r"([NSWE])\s*([0-9.+-]+)$", v)
    if m:
        try:
            number = abs(float(m.group(2)))
        except ValueError:
            return None
        return -number if m.group(1) in ("S", "W") else number

    try:
        return float(v)
    except ValueError:
        return None


def _read_coordinates(map_node):
    if map_node is None:
        return None, None

    if map_node.tag != "MAP":
        map_node = map_node.find_first("MAP")
        if map_node is None:
            return None, None

    lat = parse_coordinate(map_node.first_data("LATI"))
    lon = parse_coordinate(map_node.first_data("LONG"))
    if lat is None or lon is None:
        return None, None
    return lat, lon


# =====================================================================
# MAIN ENTRY
# =====================================================================

def _find_departement_code(raw: str) -> Optional[str]:
    match = _DEPARTEMENT_CODE.search(raw)
    if not match:
        return None
    token = match.group(0)
    if token.startswith("("):
        return token[1:3]
    return token[:2]


def normalize_place(raw, map_node=None) -> ParsedPlace:
    """
    Normalize a PLAC string (and optional MAP subtree) into a ParsedPlace.

    GEDCOM commonly uses:
      Town, [Subdivision, ...] Departement, Country

    Partial forms are accepted. Never raises; empty input gives an empty
    ParsedPlace.
    """
    if not isinstance(raw, str) or not raw.strip():
        return ParsedPlace()

    text = raw.strip()
    segments = [s.strip() for s in text.split(",")]

    place = ParsedPlace(raw=text)
    place.town_display = segments[0]
    place.town = format_town_name(segments[0])

    country = find_country(normalize_geo_string(s) for s in segments)
    if country is not None:
        place.country = country.name
        place.country_code = country.code
        place.country_color = country.color

    if place.is_french:
        code = _find_departement_code(text)
        departement = find_departement_by_code(code)
        if departement is not None:
            place.departement = departement.name
            place.departement_color = departement.color
            place.region = departement.region
        elif code:
            log.debug("Unknown departement code %s in %r", code, text)

    if len(segments) >= 2:
        place.subdivision = ", ".join(s for s in segments[:-2] if s)
        if not place.departement:
            place.departement = segments[-2]
            by_name = find_departement_by_name(place.departement)
            if by_name is not None:
                place.departement_color = by_name.color
                place.region = by_name.region

    place.latitude, place.longitude = _read_coordinates(map_node)

    place.refresh_display()
    return place
