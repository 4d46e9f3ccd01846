from .towns import clean_town_name, deburr, format_town_name, normalize_geo_string
from .tables import (
    Country,
    Departement,
    find_country,
    find_departement_by_code,
    find_departement_by_name,
    load_countries,
    load_departements,
)
from .normalizer import FRANCE, ParsedPlace, normalize_place, parse_coordinate

__all__ = [
    "Country",
    "Departement",
    "FRANCE",
    "ParsedPlace",
    "clean_town_name",
    "deburr",
    "find_country",
    "find_departement_by_code",
    "find_departement_by_name",
    "format_town_name",
    "load_countries",
    "load_departements",
    "normalize_geo_string",
    "normalize_place",
    "parse_coordinate",
]
