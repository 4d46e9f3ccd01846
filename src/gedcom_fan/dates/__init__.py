"""Date normalization for Gregorian and French Republican GEDCOM dates."""

from .normalizer import (
    EMPTY_DATE,
    MONTHS,
    REPUBLICAN_OFFSET,
    Calendar,
    CanonicalDate,
    calculate_age,
    extract_year,
    normalize_date,
    pad_two_digits,
    parse_display_date,
)

__all__ = [
    "EMPTY_DATE",
    "MONTHS",
    "REPUBLICAN_OFFSET",
    "Calendar",
    "CanonicalDate",
    "calculate_age",
    "extract_year",
    "normalize_date",
    "pad_two_digits",
    "parse_display_date",
]
