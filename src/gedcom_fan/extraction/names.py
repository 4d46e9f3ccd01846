"""
NAME / SEX / OCCU value formatting.

    "JEAN PIERRE /DE LA FONTAINE/"   -> ("Jean Pierre", "de La Fontaine")
    "Marie /Martin ou Martinez/"     -> ("Marie", "Martin")
"""

from __future__ import annotations

import re
from typing import Optional, Tuple

_WORD_START = re.compile(r"(^|\s|-)([a-zà-ÿ])")
_SURNAME_ALTERNATIVE = re.compile(r"(\S+)\s+ou\s+\S+", re.IGNORECASE)

GENDERS = {"M": "M", "F": "F"}


def format_name(value, is_surname: bool = False) -> str:
    """
    Capitalize each word (and each part after '-'); keep the particle
    'de' lowercase. Surnames keep only the first of 'X ou Y'.
    """
    if value is None:
        return ""
    if not isinstance(value, str):
        value = str(value)

    text = _WORD_START.sub(lambda m: m.group(0).upper(), value.strip().lower())
    text = text.replace(" De ", " de ")
    if text.startswith("De "):
        text = "de " + text[3:]

    if is_surname:
        text = _SURNAME_ALTERNATIVE.sub(r"\1", text)

    return re.sub(r"\s+", " ", text)


def format_full_name(name: str, surname: str) -> str:
    return f"{name} {surname}".strip()


def format_occupation(value) -> str:
    """'LABOUREUR' -> 'Laboureur'"""
    if not value:
        return ""
    text = str(value).strip()
    return text[:1].upper() + text[1:].lower()


def _split_name_value(value: str) -> Tuple[str, str]:
    """
    Split a NAME payload:

        "Given /Surname/"   -> ("Given", "Surname")
        "/Surname/"         -> ("", "Surname")
        "Given"             -> ("Given", "")
    """
    if "/" not in value:
        return value.strip(), ""
    given, _, rest = value.partition("/")
    surname = rest.split("/")[0]
    return given.strip(), surname.strip()


def extract_basic_info(record) -> Tuple[str, str, Optional[str]]:
    """
    Return (name, surname, gender) for an INDI record.

    Structured GIVN/SURN children of the first NAME win over its payload.
    Gender is "M", "F" or None.
    """
    name = ""
    surname = ""

    name_node = record.find_first("NAME")
    if name_node is not None:
        givn = name_node.first_data("GIVN")
        surn = name_node.first_data("SURN")
        if givn or surn:
            name = format_name(givn or "")
            surname = format_name(surn or "", is_surname=True)

        if not name and not surname and name_node.data:
            given, family = _split_name_value(name_node.data)
            name = format_name(given)
            surname = format_name(family, is_surname=True)

    sex = (record.first_data("SEX") or "").strip().upper()
    return name, surname, GENDERS.get(sex)
