# src/gedcom_fan/dates/normalizer.py

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple


# ---------------------------------------------------------------------------
# Calendars and month tables
# ---------------------------------------------------------------------------

class Calendar(Enum):
    GREGORIAN = "@#DGREGORIAN@"
    REPUBLICAN = "@#DFRENCH R@"

    @property
    def marker(self) -> str:
        return self.value


MONTHS: Dict[Calendar, Dict[str, int]] = {
    Calendar.GREGORIAN: {
        name: index
        for index, name in enumerate(
            ["JAN", "FEB", "MAR", "APR", "MAY", "JUN",
             "JUL", "AUG", "SEP", "OCT", "NOV", "DEC"],
            start=1,
        )
    },
    Calendar.REPUBLICAN: {
        name: index
        for index, name in enumerate(
            ["VEND", "BRUM", "FRIM", "NIVO", "PLUV", "VENT",
             "GERM", "FLOR", "PRAI", "MESS", "THER", "FRUC", "COMP"],
            start=1,
        )
    },
}

# Year I of the Republic starts in (September) 1792. Only the year is shifted;
# months and days are kept as written.
REPUBLICAN_OFFSET = 1792

REPUBLICAN_YEARS: Dict[str, int] = {
    numeral: index
    for index, numeral in enumerate(
        ["I", "II", "III", "IV", "V", "VI", "VII",
         "VIII", "IX", "X", "XI", "XII", "XIII"],
        start=1,
    )
}


# ---------------------------------------------------------------------------
# Qualifiers
# ---------------------------------------------------------------------------

# Leading GEDCOM qualifiers that do not change which date is meant.
QUALIFIERS = {"ABT", "EST", "CAL", "BEF", "AFT", "INT"}

# Range openers -> the keyword closing the first bound.
RANGE_OPENERS: Dict[str, str] = {
    "BET": "AND",
    "FROM": "TO",
}

_LEADING_DIGITS = re.compile(r"^\d+")
_DISPLAY_FORMATS = (
    re.compile(r"^(?P<day>\d{2})/(?P<month>\d{2})/(?P<year>\d{1,4})$"),
    re.compile(r"^(?P<month>\d{2})/(?P<year>\d{1,4})$"),
    re.compile(r"^(?P<year>\d{1,4})$"),
)


@dataclass(frozen=True)
class CanonicalDate:
    """
    Result of date normalization.

    ``display`` is ``DD/MM/YYYY``, ``MM/YYYY``, ``YYYY`` or ``""``. ``year``
    is always the Gregorian-equivalent year. A day is only kept when the
    month resolved.
    """
    display: str = ""
    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None
    calendar: Calendar = Calendar.GREGORIAN
    modifier: Optional[str] = None
    raw: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.display

    def __bool__(self) -> bool:
        return not self.is_empty


EMPTY_DATE = CanonicalDate()


def pad_two_digits(number: int) -> str:
    return str(number).zfill(2)


def _format_display(year: Optional[int], month: Optional[int], day: Optional[int]) -> str:
    if not year:
        return ""
    display = str(year)
    if month:
        display = f"{pad_two_digits(month)}/{display}"
        if day:
            display = f"{pad_two_digits(day)}/{display}"
    return display


# ---------------------------------------------------------------------------
# Token helpers
# ---------------------------------------------------------------------------

def _split_calendar(text: str) -> Tuple[Calendar, str]:
    for calendar in (Calendar.REPUBLICAN, Calendar.GREGORIAN):
        if text.startswith(calendar.marker):
            return calendar, text[len(calendar.marker):].strip()
    return Calendar.GREGORIAN, text


def _strip_qualifier(tokens: List[str]) -> Tuple[Optional[str], List[str]]:
    """Drop a leading qualifier; for ranges keep only the first bound."""
    if not tokens:
        return None, tokens

    head = tokens[0].rstrip(".")
    if head in QUALIFIERS:
        return head, tokens[1:]

    if head in RANGE_OPENERS:
        closer = RANGE_OPENERS[head]
        rest = tokens[1:]
        if closer in rest:
            rest = rest[: rest.index(closer)]
        return head, rest

    return None, tokens


def _parse_int(token: str) -> Optional[int]:
    match = _LEADING_DIGITS.match(token)
    if not match:
        return None
    return int(match.group(0))


def _parse_year(token: str, calendar: Calendar) -> Optional[int]:
    year = _parse_int(token)
    if year is None and calendar is Calendar.REPUBLICAN:
        year = REPUBLICAN_YEARS.get(token)
    return year or None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def normalize_date(value) -> CanonicalDate:
    """
    Normalize a GEDCOM date token into a CanonicalDate.

    Examples:
        "1900"                 -> "1900"
        "JAN 1900"             -> "01/1900"
        "1 JAN 1900"           -> "01/01/1900"
        "@#DFRENCH R@ 3 VEND 2" -> "03/01/1794"
        "ABT 1850"             -> "1850" (modifier "ABT")

    Never raises: anything unparseable gives an empty result.
    """
    if not isinstance(value, str):
        return EMPTY_DATE

    trimmed = value.strip().upper()
    if not trimmed:
        return EMPTY_DATE

    calendar, remainder = _split_calendar(trimmed)
    marked = remainder != trimmed
    modifier, tokens = _strip_qualifier(remainder.split())

    # The marker may follow the qualifier (ABT @#DFRENCH R@ ..., BET @#DGREGORIAN@ ...).
    if modifier and tokens and tokens[0].startswith("@#D"):
        calendar, remainder = _split_calendar(" ".join(tokens))
        marked = True
        tokens = remainder.split()

    month_token = tokens[-2] if len(tokens) in (2, 3) else None

    # Unmarked dates written with a Republican month name ("3 VEND 2").
    if (
        month_token
        and calendar is Calendar.GREGORIAN
        and not marked
        and month_token not in MONTHS[Calendar.GREGORIAN]
        and month_token in MONTHS[Calendar.REPUBLICAN]
    ):
        calendar = Calendar.REPUBLICAN

    day: Optional[int] = None
    month: Optional[int] = None
    year: Optional[int] = None

    if month_token:
        month = MONTHS[calendar].get(month_token)
    if len(tokens) == 3:
        day = _parse_int(tokens[0])
    if tokens and len(tokens) <= 3:
        year = _parse_year(tokens[-1], calendar)

    if year is None:
        return CanonicalDate(calendar=calendar, modifier=modifier, raw=value)

    if calendar is Calendar.REPUBLICAN:
        year += REPUBLICAN_OFFSET

    if not month:
        month = None
        day = None
    if not day:
        day = None

    return CanonicalDate(
        display=_format_display(year, month, day),
        year=year,
        month=month,
        day=day,
        calendar=calendar,
        modifier=modifier,
        raw=value,
    )


def extract_year(display: Optional[str]) -> Optional[int]:
    """Return the year of a DD/MM/YYYY, MM/YYYY or YYYY display string."""
    if not display or not isinstance(display, str):
        return None
    last = display.split("/")[-1]
    return _parse_int(last.strip())


def parse_display_date(display: Optional[str]) -> CanonicalDate:
    """
    Parse a display string produced by normalize_date back into its parts.

    Unknown formats give an empty CanonicalDate.
    """
    if not display or not isinstance(display, str):
        return EMPTY_DATE

    text = display.strip()
    for pattern in _DISPLAY_FORMATS:
        match = pattern.match(text)
        if not match:
            continue
        parts = match.groupdict()
        year = int(parts["year"])
        month = int(parts["month"]) if parts.get("month") else None
        day = int(parts["day"]) if parts.get("day") else None
        return CanonicalDate(
            display=_format_display(year, month, day),
            year=year,
            month=month,
            day=day,
            raw=display,
        )

    return EMPTY_DATE


def calculate_age(birth_display: Optional[str], death_display: Optional[str]) -> Optional[int]:
    """
    Age in whole years between two display dates.

    Missing months/days count as January / the 1st. Returns None when either
    side has no year.
    """
    birth = parse_display_date(birth_display)
    death = parse_display_date(death_display)
    if birth.year is None or death.year is None:
        return None

    age = death.year - birth.year
    born_on = (birth.month or 1, birth.day or 1)
    reference = (death.month or 1, death.day or 1)
    if reference < born_on:
        age -= 1
    return age

