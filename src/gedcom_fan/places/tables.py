# src/gedcom_fan/places/tables.py

"""
Fixed lookup tables used by the place normalizer.

Both tables ship as YAML package data (``places/data/*.yml``) and are parsed
once per process; they are read-only after loading.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from typing import Dict, Iterable, List, Optional, Tuple

import yaml

from .towns import normalize_geo_string

DATA_PACKAGE = "gedcom_fan.places.data"


@dataclass(frozen=True)
class Departement:
    code: str
    name: str
    color: str = ""
    region: str = ""


@dataclass(frozen=True)
class Country:
    code: str
    name: str
    name_en: str
    keys: Tuple[str, ...]
    color: str = ""
    continent: str = ""


def _load_yaml(filename: str) -> dict:
    text = resources.files(DATA_PACKAGE).joinpath(filename).read_text(encoding="utf-8")
    return yaml.safe_load(text) or {}


@lru_cache(maxsize=None)
def load_departements() -> Tuple[Departement, ...]:
    data = _load_yaml("departements.yml")
    return tuple(
        Departement(
            code=str(entry["code"]),
            name=entry["name"],
            color=entry.get("color", ""),
            region=entry.get("region", ""),
        )
        for entry in data.get("departements", [])
    )


@lru_cache(maxsize=None)
def _departements_by_code() -> Dict[str, Departement]:
    return {d.code: d for d in load_departements()}


@lru_cache(maxsize=None)
def _departements_by_name() -> Dict[str, Departement]:
    return {normalize_geo_string(d.name): d for d in load_departements()}


@lru_cache(maxsize=None)
def load_countries() -> Tuple[Country, ...]:
    """Countries in table order: continent by continent."""
    data = _load_yaml("countries.yml")
    countries: List[Country] = []
    for continent in data.get("continents", []):
        for entry in continent.get("countries", []):
            keys = tuple(k for k in (entry["key"].get("FR"), entry["key"].get("EN")) if k)
            countries.append(
                Country(
                    code=entry["code"],
                    name=entry["name"]["FR"],
                    name_en=entry["name"].get("EN", ""),
                    keys=keys,
                    color=entry.get("color", ""),
                    continent=continent.get("name", ""),
                )
            )
    return tuple(countries)


def find_departement_by_code(code: Optional[str]) -> Optional[Departement]:
    if not code:
        return None
    return _departements_by_code().get(code)


def find_departement_by_name(name: Optional[str]) -> Optional[Departement]:
    if not name:
        return None
    return _departements_by_name().get(normalize_geo_string(name))


def find_country(normalized_segments: Iterable[str]) -> Optional[Country]:
    """
    First country (in table order) whose key equals one of the segments.
    Segments must already be normalized with ``normalize_geo_string``.
    """
    segments = {s for s in normalized_segments if s}
    if not segments:
        return None
    for country in load_countries():
        if any(key in segments for key in country.keys):
            return country
    return None
