"""
json_exporter.py
Structured JSON export of a pipeline run.

This exporter:
- Converts dataclasses and objects to dictionaries (NOT strings)
- Serializes the fan tree without its parent back-links
- Is deterministic: individuals and places keep extraction order
"""

from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from gedcom_fan.hierarchy import collect_timeline_events, hierarchy_to_dict
from gedcom_fan.logging import get_logger

log = get_logger("exporter.json_exporter")


def _to_json_compatible(obj: Any) -> Any:
    """
    Recursively convert objects into JSON-compatible structures.

    Rules:
    - Primitives pass through
    - dataclasses -> dict (recursively)
    - dict -> dict (recursively)
    - list / tuple / set -> list (recursively)
    - Unknown objects -> __dict__ if present, else str(obj)
    """
    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj

    if is_dataclass(obj) and not isinstance(obj, type):
        return {k: _to_json_compatible(v) for k, v in asdict(obj).items()}

    if isinstance(obj, dict):
        return {str(k): _to_json_compatible(v) for k, v in obj.items()}

    if isinstance(obj, (list, tuple, set)):
        return [_to_json_compatible(v) for v in obj]

    if hasattr(obj, "__dict__"):
        return {k: _to_json_compatible(v) for k, v in obj.__dict__.items()}

    return str(obj)


def _individual_dict(individual) -> Dict[str, Any]:
    data = _to_json_compatible(individual)
    data["bg_color"] = individual.bg_color
    return data


def build_export_dict(ctx, hierarchy=None) -> Dict[str, Any]:
    """
    Convert the context of a finished run into a JSON-safe dict.

    ``hierarchy`` (a HierarchyNode) adds the nested fan tree and its
    timeline, ordered by sosa.
    """
    places = ctx.places if ctx.places is not None else []
    out: Dict[str, Any] = {
        "meta": _to_json_compatible(ctx.stats),
        "individuals": {
            ptr: _individual_dict(ind) for ptr, ind in (ctx.individuals or {}).items()
        },
        "places": {entry.key: _to_json_compatible(entry) for entry in places},
    }

    if hierarchy is not None:
        out["hierarchy"] = hierarchy_to_dict(hierarchy)
        out["timeline"] = _to_json_compatible(collect_timeline_events(hierarchy))

    return out


def serialize_to_json_string(ctx, hierarchy=None, indent: Optional[int] = 2) -> str:
    return json.dumps(
        build_export_dict(ctx, hierarchy),
        indent=indent,
        ensure_ascii=False,
    )


def export_to_json(ctx, output_path: str | Path, hierarchy=None, indent: Optional[int] = 2) -> Path:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    log.info(
        "Exporting JSON to: %s (INDI=%d, places=%d, hierarchy=%s)",
        output_path,
        len(ctx.individuals or {}),
        len(ctx.places) if ctx.places is not None else 0,
        "yes" if hierarchy is not None else "no",
    )

    json_str = serialize_to_json_string(ctx, hierarchy, indent=indent)

    with output_path.open("w", encoding="utf-8") as f:
        f.write(json_str)

    size_bytes = output_path.stat().st_size
    log.info("JSON export complete. size=%d bytes", size_bytes)
    return output_path
