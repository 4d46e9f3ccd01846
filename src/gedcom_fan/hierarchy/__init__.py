from .builder import (
    DEFAULT_MAX_GENERATIONS,
    MAX_GENERATIONS_LIMIT,
    HierarchyConfig,
    HierarchyNode,
    TimelineEvent,
    build_hierarchy,
    collect_timeline_events,
    hierarchy_to_dict,
    iter_nodes,
)

__all__ = [
    "DEFAULT_MAX_GENERATIONS",
    "MAX_GENERATIONS_LIMIT",
    "HierarchyConfig",
    "HierarchyNode",
    "TimelineEvent",
    "build_hierarchy",
    "collect_timeline_events",
    "hierarchy_to_dict",
    "iter_nodes",
]
