from .models import (
    ExtractionResult,
    GEO_FIELDS,
    Individual,
    IndividualEvent,
    Occupation,
)
from .family_index import FamilyIndex, FamilyRecord
from .place_registry import PlaceEntry, PlaceEventRef, PlaceRegistry
from .names import extract_basic_info, format_full_name, format_name, format_occupation
from .extractor import extract_individuals, max_known_generations

__all__ = [
    "ExtractionResult",
    "FamilyIndex",
    "FamilyRecord",
    "GEO_FIELDS",
    "Individual",
    "IndividualEvent",
    "Occupation",
    "PlaceEntry",
    "PlaceEventRef",
    "PlaceRegistry",
    "extract_basic_info",
    "extract_individuals",
    "format_full_name",
    "format_name",
    "format_occupation",
    "max_known_generations",
]
