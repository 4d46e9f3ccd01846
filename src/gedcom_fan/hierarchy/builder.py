"""
Ancestor tree (fan chart) construction with Sosa-Stradonitz numbering.

    root            sosa 1, generation 0
    father of n     sosa 2n
    mother of n     sosa 2n + 1

The tree is built from an explicit work-list of frames, not by recursion,
so its depth is bounded only by ``HierarchyConfig.max_generations``.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from gedcom_fan.core.exceptions import ConfigError
from gedcom_fan.logging import get_logger

log = get_logger("hierarchy.builder")

MAX_GENERATIONS_LIMIT = 20
DEFAULT_MAX_GENERATIONS = 8

# Individual events that are copied onto the tree nodes.
TIMELINE_EVENT_TYPES = ("birth", "death", "marriage")


@dataclass(frozen=True)
class HierarchyConfig:
    max_generations: int = DEFAULT_MAX_GENERATIONS
    show_missing: bool = True

    def __post_init__(self):
        if isinstance(self.max_generations, bool) or not isinstance(self.max_generations, int):
            raise ConfigError(f"max_generations must be an integer, got {self.max_generations!r}")
        if not 1 <= self.max_generations <= MAX_GENERATIONS_LIMIT:
            raise ConfigError(
                f"max_generations must be between 1 and {MAX_GENERATIONS_LIMIT}, "
                f"got {self.max_generations}"
            )
        if not isinstance(self.show_missing, bool):
            raise ConfigError(f"show_missing must be true or false, got {self.show_missing!r}")

    @classmethod
    def from_config(cls, cfg=None, **overrides) -> "HierarchyConfig":
        """
        Read the ``hierarchy`` section of the YAML config.

        Keyword overrides (typically CLI options) win when not None.
        """
        section: Dict[str, Any] = {}
        if cfg is not None:
            section = dict(getattr(cfg, "hierarchy", cfg) or {})

        values = {
            "max_generations": section.get("max_generations", DEFAULT_MAX_GENERATIONS),
            "show_missing": section.get("show_missing", True),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})

        try:
            max_generations = int(values["max_generations"])
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Invalid hierarchy.max_generations: {values['max_generations']!r}") from exc

        return cls(max_generations=max_generations, show_missing=values["show_missing"])


@dataclass(slots=True)
class TimelineEvent:
    type: str
    date: str
    town: str = ""
    individual_id: Optional[str] = None
    sosa: int = 0
    name: str = ""


@dataclass(eq=False)
class HierarchyNode:
    """
    One position of the fan chart.

    ``id`` is None for a placeholder (unknown ancestor). ``children`` holds
    the node's parents in the genealogical sense, father first.
    """
    id: Optional[str]
    sosa: int
    generation: int
    parent: Optional["HierarchyNode"] = field(default=None, repr=False)
    children: List["HierarchyNode"] = field(default_factory=list, repr=False)

    name: str = ""
    surname: str = ""
    gender: Optional[str] = None
    birth_date: str = ""
    death_date: str = ""
    birth_year: Optional[int] = None
    death_year: Optional[int] = None
    birth_town: str = ""
    death_town: str = ""
    bg_color: str = ""
    events: List[TimelineEvent] = field(default_factory=list, repr=False)

    @property
    def is_placeholder(self) -> bool:
        return self.id is None

    def _child_with_sosa(self, sosa: int) -> Optional["HierarchyNode"]:
        for child in self.children:
            if child.sosa == sosa:
                return child
        return None

    @property
    def father(self) -> Optional["HierarchyNode"]:
        return self._child_with_sosa(self.sosa * 2)

    @property
    def mother(self) -> Optional["HierarchyNode"]:
        return self._child_with_sosa(self.sosa * 2 + 1)

    def iter_nodes(self) -> Iterator["HierarchyNode"]:
        return iter_nodes(self)


# ==========================================================
# NODE CONSTRUCTION
# ==========================================================

def _placeholder(sosa: int, generation: int, parent: Optional[HierarchyNode]) -> HierarchyNode:
    return HierarchyNode(
        id=None,
        sosa=sosa,
        generation=generation,
        parent=parent,
        gender="M" if sosa % 2 == 0 else "F",
    )


def _materialise(individual, sosa: int, generation: int, parent: Optional[HierarchyNode]) -> HierarchyNode:
    node = HierarchyNode(
        id=individual.id,
        sosa=sosa,
        generation=generation,
        parent=parent,
        name=individual.name,
        surname=individual.surname,
        gender=individual.gender,
        birth_date=individual.birth_date,
        death_date=individual.death_date,
        birth_year=individual.birth_year,
        death_year=individual.death_year,
        birth_town=individual.birth_place.town,
        death_town=individual.death_place.town,
        bg_color=individual.bg_color,
    )
    full_name = individual.full_name
    node.events = [
        TimelineEvent(
            type=event.type,
            date=event.date,
            town=event.town,
            individual_id=individual.id,
            sosa=sosa,
            name=full_name,
        )
        for event in individual.individual_events
        if event.type in TIMELINE_EVENT_TYPES
    ]
    return node


def _parent_frame(parent_id, individuals, config, node, sosa):
    """Frame for one parent slot, or None when the branch is omitted."""
    if parent_id and parent_id in individuals:
        return (parent_id, node, sosa, node.generation + 1)
    if parent_id:
        log.debug("Parent %s of %s not found; treated as missing", parent_id, node.id)
    if config.show_missing:
        return (None, node, sosa, node.generation + 1)
    return None


# ==========================================================
# PUBLIC API
# ==========================================================

def build_hierarchy(
    root_id: Optional[str],
    individuals: Mapping[str, Any],
    config: Optional[HierarchyConfig] = None,
) -> Optional[HierarchyNode]:
    """
    Build the ancestor tree of ``root_id``.

    Returns None when the root is empty or unknown. Nodes exist for
    generations 0 .. max_generations - 1 only. With ``show_missing`` every
    unknown parent slot is filled by a placeholder (which gets placeholder
    parents of its own); without it the slot is left out.
    """
    config = config or HierarchyConfig()

    if not root_id or root_id not in individuals:
        log.warning("Root individual %r not found; no hierarchy built", root_id)
        return None

    last_generation = config.max_generations - 1
    root: Optional[HierarchyNode] = None
    stack: List[Tuple[Optional[str], Optional[HierarchyNode], int, int]] = [(root_id, None, 1, 0)]

    while stack:
        individual_id, parent, sosa, generation = stack.pop()

        if individual_id is None:
            node = _placeholder(sosa, generation, parent)
            father_id = mother_id = None
        else:
            individual = individuals[individual_id]
            node = _materialise(individual, sosa, generation, parent)
            father_id, mother_id = individual.father_id, individual.mother_id

        if parent is None:
            root = node
        else:
            parent.children.append(node)

        if generation < last_generation:
            frames = [
                _parent_frame(father_id, individuals, config, node, sosa * 2),
                _parent_frame(mother_id, individuals, config, node, sosa * 2 + 1),
            ]
            # Mother pushed first so the father's branch is built first.
            for frame in reversed(frames):
                if frame is not None:
                    stack.append(frame)

    log.debug("Built hierarchy for %s (%d generations max)", root_id, config.max_generations)
    return root


def iter_nodes(root: Optional[HierarchyNode]) -> Iterator[HierarchyNode]:
    """Breadth-first: generation 0, then 1, ..."""
    if root is None:
        return
    queue = deque([root])
    while queue:
        node = queue.popleft()
        yield node
        queue.extend(node.children)


def collect_timeline_events(root: Optional[HierarchyNode]) -> List[TimelineEvent]:
    events = [event for node in iter_nodes(root) for event in node.events]
    return sorted(events, key=lambda e: e.sosa)


def hierarchy_to_dict(root: Optional[HierarchyNode]) -> Optional[Dict[str, Any]]:
    """JSON-safe nested dict; ``parent`` links are not serialized."""
    if root is None:
        return None

    def convert(node: HierarchyNode) -> Dict[str, Any]:
        return {
            "id": node.id,
            "sosa": node.sosa,
            "generation": node.generation,
            "name": node.name,
            "surname": node.surname,
            "gender": node.gender,
            "birth_date": node.birth_date,
            "death_date": node.death_date,
            "birth_year": node.birth_year,
            "death_year": node.death_year,
            "birth_town": node.birth_town,
            "death_town": node.death_town,
            "bg_color": node.bg_color,
            "events": [
                {"type": e.type, "date": e.date, "town": e.town, "sosa": e.sosa}
                for e in node.events
            ],
            "children": [convert(child) for child in node.children],
        }

    return convert(root)
