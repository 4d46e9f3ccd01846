# src/gedcom_fan/places/towns.py

"""
Town-name helpers.

``normalize_geo_string`` produces the key used to deduplicate places across
individuals; ``format_town_name`` produces the short display form used on
charts (French abbreviations: St, Ste, s/, Mt...).
"""

from __future__ import annotations

import re
import unicodedata

# Letters NFKD does not decompose.
_SPECIAL_LETTERS = str.maketrans({
    "ß": "ss",
    "æ": "ae",
    "Æ": "AE",
    "œ": "oe",
    "Œ": "OE",
    "ø": "o",
    "Ø": "O",
    "đ": "d",
    "Đ": "D",
    "ł": "l",
    "Ł": "L",
})


def deburr(value: str) -> str:
    """Strip diacritics: 'Rhône' -> 'Rhone'."""
    decomposed = unicodedata.normalize("NFKD", value.translate(_SPECIAL_LETTERS))
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def normalize_geo_string(value) -> str:
    """
    Canonical lookup key for a place fragment.

    'Saint-Étienne' -> 'saint-etienne', 'Le Puy en Velay' -> 'le_puy_en_velay'
    """
    if value is None:
        return ""
    return re.sub(r"\s", "_", deburr(str(value))).lower()


def clean_town_name(value: str) -> str:
    """Drop anything after a comma or '(' and trailing postal digits."""
    head = re.split(r",|\(.*|\s\d+\s*$", value)[0]
    return re.sub(r"\d+$", "", head).strip()


_ARRONDISSEMENT_CITIES = "(Paris|Marseille|Lyon)"

_REPLACEMENTS = [
    (re.compile(r"-Sur-| Sur | s/ "), "-s/-"),
    (re.compile(r"-S/-| S/ | s/ "), "-s/-"),
    (re.compile(r"-Sous-| Sous "), "-/s-"),
    (re.compile(r"-/S-| /S | /s "), "-/s-"),
    (re.compile(r"-La-| La | la "), "-la-"),
    (re.compile(r"-Le-| Le | le "), "-le-"),
    (re.compile(r"-Les-| Les | les "), "-les-"),
    (re.compile(r"-Lès-| Lès | lès "), "-lès-"),
    (re.compile(r"-Lez-| Lez | lez "), "-lez-"),
    (re.compile(r"-Lèz-| Lèz | lèz "), "-lèz-"),
    (re.compile(r"-Au-| Au | au "), "-au-"),
    (re.compile(r"-Du-| Du | du "), "-du-"),
    (re.compile(r"-De-| De | de "), "-de-"),
    (re.compile(r"-Des-| Des | des "), "-des-"),
    (re.compile(r"-Devant-| Devant | devant "), "-devant-"),
    (re.compile(r"-En-| En | en "), "-en-"),
    (re.compile(r"-Et-| Et | et "), "-et-"),
    (
        re.compile(r"(Sainte|Saint)-|(Sainte|Saint) "),
        lambda m: "Ste-" if m.group(0).startswith("Sainte") else "St-",
    ),
    (
        re.compile(r"-(Sainte|Saint)-| (Sainte|Saint) "),
        lambda m: "-Ste-" if "Sainte" in m.group(0) else "-St-",
    ),
    (
        re.compile(r"Mont-|Mont |^-Mont$"),
        lambda m: "-Mt" if m.group(0) == "-Mont" else "Mt-",
    ),
    (re.compile(r"-Madame$"), "-Mme"),
    (re.compile(r"-Vieux$"), "-Vx"),
    (re.compile(r"-Vieux-"), "-Vx-"),
    (re.compile(r"-Grand$"), "-Gd"),
    (re.compile(r"-Petit$"), "-Pt"),
    (re.compile(r"-Moulineaux$"), "-Mlx"),
    # Arrondissements: "Paris XVe", "Lyon-3e", "Marseille 13005", "Paris 1er"
    (
        re.compile(_ARRONDISSEMENT_CITIES + r"[-\s][IVX]+(ème|er|e)?\b", re.IGNORECASE),
        r"\1",
    ),
    (re.compile(_ARRONDISSEMENT_CITIES + r"(-|\s)\d{5}", re.IGNORECASE), r"\1"),
    (
        re.compile(_ARRONDISSEMENT_CITIES + r"(-|\s)?(\d{1,2}(er|e|ème)?)", re.IGNORECASE),
        r"\1",
    ),
]


def format_town_name(value) -> str:
    """
    Display form of a town name.

    'SAINT-ETIENNE' -> 'St-Etienne', 'Villeneuve sur Lot' -> 'Villeneuve-s/-Lot'
    """
    if not isinstance(value, str):
        value = "" if value is None else str(value)

    name = clean_town_name(value)

    name = re.sub(
        r"(^|[-\s])([a-zà-ÿ])",
        lambda m: m.group(0).upper(),
        name.lower(),
    )
    name = re.sub(
        r"(-D'|-d'| D'| d')(\w)",
        lambda m: "-d'" + m.group(2).upper(),
        name,
    )

    for pattern, replacement in _REPLACEMENTS:
        name = pattern.sub(replacement, name)

    return name
