"""
INDI record extraction.

Turns a decoded GEDCOMTree into a mapping of Individual objects keyed by
@XREF@, plus the registry of every town the file mentions.

Includes:
- NAME / SEX (names.py)
- parents, siblings and spouses through the FAM index
- birth / death with optional CHR/BAPM and BURI substitutes
- occupations (OCCU + EVEN with TYPE Occupation)
- place registration for every placed event
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Set, Tuple

from gedcom_fan.dates import calculate_age, normalize_date
from gedcom_fan.logging import get_logger
from gedcom_fan.places import ParsedPlace, normalize_place

from .family_index import FamilyIndex, FamilyRecord
from .models import ExtractionResult, Individual, IndividualEvent, Occupation
from .names import extract_basic_info, format_full_name, format_occupation
from .place_registry import PlaceRegistry

log = get_logger("extraction.extractor")

BIRTH_TAGS = ("BIRT",)
BIRTH_SUBSTITUTE_TAGS = ("CHR", "BAPM")
DEATH_TAGS = ("DEAT",)
DEATH_SUBSTITUTE_TAGS = ("BURI",)

# Event tags whose PLAC is registered, and the event type they map to.
PLACE_EVENT_TYPES = {
    "BIRT": "birth",
    "CHR": "baptism",
    "BAPM": "baptism",
    "DEAT": "death",
    "BURI": "burial",
    "OCCU": "occupation",
    "EVEN": "event",
    "MARR": "marriage",
}

OCCUPATION_EVENT_TYPE = "occupation"


# ==========================================================
# NODE HELPERS
# ==========================================================

def _first_of(record, tags: Iterable[str]):
    """First child matching the earliest tag in ``tags`` that is present."""
    for tag in tags:
        node = record.find_first(tag)
        if node is not None:
            return node
    return None


def _is_occupation_event(node) -> bool:
    if node.tag != "EVEN":
        return False
    kind = node.first_data("TYPE") or ""
    return kind.strip().lower() == OCCUPATION_EVENT_TYPE


def _event_date(node) -> Tuple[str, Optional[int]]:
    if node is None:
        return "", None
    date = normalize_date(node.first_data("DATE"))
    return date.display, date.year


def _event_place(node) -> ParsedPlace:
    """
    Normalize the PLAC of an event. MAP is read from under PLAC (5.5.1)
    or, failing that, from the event itself.
    """
    if node is None:
        return ParsedPlace()
    plac = node.find_first("PLAC")
    if plac is None:
        return ParsedPlace()
    map_source = plac if plac.find_first("MAP") is not None else node
    return normalize_place(plac.data, map_source)


# ==========================================================
# EXTRACTOR
# ==========================================================

class _RecordExtractor:
    """Per-call state: the FAM index, known ids and the place registry."""

    def __init__(self, tree, substitute_events: bool):
        self.substitute_events = substitute_events
        self.families = FamilyIndex.from_tree(tree)
        self.records = list(tree.find_records_by_tag("INDI"))
        self.places = PlaceRegistry()

        self.basic_info: Dict[str, Tuple[str, str, Optional[str]]] = {}
        for record in self.records:
            if record.pointer:
                self.basic_info[record.pointer] = extract_basic_info(record)

    def resolve(self, ref: Optional[str], owner: str, role: str) -> Optional[str]:
        if not ref:
            return None
        if ref in self.basic_info:
            return ref
        log.warning("%s: %s reference %s has no INDI record; ignored", owner, role, ref)
        return None

    def spouse_name(self, spouse_id: Optional[str]) -> str:
        if not spouse_id:
            return ""
        name, surname, _ = self.basic_info[spouse_id]
        return format_full_name(name, surname)

    # ------------------------------------------------------------------ #

    def parental_family(self, record) -> Optional[FamilyRecord]:
        family = self.families.parental_family(record.pointer)
        if family is not None:
            return family
        # Some producers only write FAMC on the child.
        famc = record.first_data("FAMC")
        if famc:
            family = self.families.get(famc.strip())
            if family is None:
                log.warning("%s: FAMC %s has no FAM record; ignored", record.pointer, famc)
        return family

    def register_places(self, individual_id: str, record) -> Dict[int, ParsedPlace]:
        """Normalize and register every placed event; keyed by node identity."""
        places: Dict[int, ParsedPlace] = {}
        for node in record.children:
            event_type = PLACE_EVENT_TYPES.get(node.tag)
            if event_type is None:
                continue
            if _is_occupation_event(node):
                event_type = OCCUPATION_EVENT_TYPE
            place = _event_place(node)
            places[id(node)] = place
            if place.key:
                date, _ = _event_date(node)
                self.places.register(place, event_type, date, individual_id)
        return places

    def occupations(self, record) -> List[Occupation]:
        found: List[Occupation] = []
        for node in record.children:
            if node.tag == "OCCU":
                value = format_occupation(node.data)
                source = "OCCU"
            elif _is_occupation_event(node):
                value = format_occupation(node.first_data("NOTE"))
                source = "EVEN"
            else:
                continue
            if not value:
                continue
            date, year = _event_date(node)
            found.append(Occupation(value=value, date=date, year=year, source=source))

        return sorted(found, key=lambda o: (o.year is None, o.year or 0))

    def build(self, record) -> Individual:
        individual_id = record.pointer
        name, surname, gender = self.basic_info[individual_id]
        person = Individual(id=individual_id, name=name, surname=surname, gender=gender)

        node_places = self.register_places(individual_id, record)

        # --- parents / siblings ---
        family = self.parental_family(record)
        if family is not None:
            person.father_id = self.resolve(family.husband, individual_id, "father")
            person.mother_id = self.resolve(family.wife, individual_id, "mother")
            person.sibling_ids = [
                c for c in family.children if c != individual_id and c in self.basic_info
            ]

        # --- birth / death ---
        birth_tags = BIRTH_TAGS + (BIRTH_SUBSTITUTE_TAGS if self.substitute_events else ())
        death_tags = DEATH_TAGS + (DEATH_SUBSTITUTE_TAGS if self.substitute_events else ())
        birth_node = _first_of(record, birth_tags)
        death_node = _first_of(record, death_tags)

        person.birth_date, person.birth_year = _event_date(birth_node)
        person.death_date, person.death_year = _event_date(death_node)
        if birth_node is not None:
            person.birth_place = node_places.get(id(birth_node)) or _event_place(birth_node)
        if death_node is not None:
            person.death_place = node_places.get(id(death_node)) or _event_place(death_node)

        person.occupations = self.occupations(record)

        # --- spouses / marriages ---
        marriages: List[IndividualEvent] = []
        for fam in self.families.families_as_parent(individual_id):
            spouse_id = self.resolve(fam.partner_of(individual_id), individual_id, "spouse")
            if spouse_id and spouse_id not in person.spouse_ids:
                person.spouse_ids.append(spouse_id)

            marr = fam.marriage
            if marr is None:
                continue
            place = _event_place(marr)
            date, _ = _event_date(marr)
            if place.key:
                self.places.register(place, "marriage", date, individual_id)
            marriages.append(
                IndividualEvent(
                    type="marriage",
                    date=date,
                    town=place.town,
                    town_display=place.town_display,
                    place_key=place.key,
                    description=self.spouse_name(spouse_id),
                )
            )

        # --- timeline: birth, occupations, marriages, death ---
        events: List[IndividualEvent] = []
        if birth_node is not None:
            events.append(_place_event("birth", person.birth_date, person.birth_place))
        for occ in person.occupations:
            events.append(IndividualEvent(type="occupation", date=occ.date, description=occ.value))
        events.extend(marriages)
        if death_node is not None:
            events.append(_place_event("death", person.death_date, person.death_place))
        person.individual_events = [e for e in events if e.date]

        if person.birth_year is not None and person.death_year is not None:
            person.age = calculate_age(person.birth_date, person.death_date)

        return person


def _place_event(event_type: str, date: str, place: ParsedPlace) -> IndividualEvent:
    return IndividualEvent(
        type=event_type,
        date=date,
        town=place.town,
        town_display=place.town_display,
        place_key=place.key,
    )


# ==========================================================
# PUBLIC API
# ==========================================================

def extract_individuals(tree, substitute_events: bool = False) -> ExtractionResult:
    """
    Extract every INDI record of ``tree``.

    Every FAM record is indexed before the first individual is built.
    References to missing records are logged and dropped; extraction
    never stops on them.
    """
    extractor = _RecordExtractor(tree, substitute_events)

    individuals: Dict[str, Individual] = {}
    for record in extractor.records:
        if not record.pointer:
            log.warning("INDI record without pointer at line %d skipped", record.lineno)
            continue
        individuals[record.pointer] = extractor.build(record)

    log.info(
        "Extracted %d individuals, %d families, %d places",
        len(individuals),
        len(extractor.families),
        len(extractor.places),
    )
    return ExtractionResult(
        individuals=individuals,
        places=extractor.places,
        families=extractor.families,
    )


def max_known_generations(individuals: Dict[str, Individual]) -> int:
    """
    Length of the longest known ancestor line, counting the person.

    1 for a person with no known parents, 0 for an empty mapping.
    Parent loops in malformed files are cut where they close.
    """
    depth: Dict[str, int] = {}
    best = 0

    for start in individuals:
        if start not in depth:
            on_path: Set[str] = set()
            stack: List[Tuple[str, bool]] = [(start, False)]
            while stack:
                pid, expanded = stack.pop()
                person = individuals[pid]
                parents = [p for p in (person.father_id, person.mother_id) if p in individuals]

                if expanded:
                    on_path.discard(pid)
                    depth[pid] = 1 + max((depth[p] for p in parents if p in depth), default=0)
                    continue

                if pid in depth or pid in on_path:
                    continue
                on_path.add(pid)
                stack.append((pid, True))
                for parent in parents:
                    if parent not in depth and parent not in on_path:
                        stack.append((parent, False))

        best = max(best, depth[start])

    return best
