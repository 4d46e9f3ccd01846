from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class PipelineContext:
    """
    Per-run pipeline context.

    Everything one run produces lives here; nothing is cached at module
    level, so several files can be processed side by side.
    """

    config: Any
    logger: Any

    input_path: Optional[str] = None
    output_path: Optional[str] = None

    tree: Any = None
    individuals: Dict[str, Any] = field(default_factory=dict)
    places: Any = None
    families: Any = None

    stats: Dict[str, Any] = field(default_factory=dict)
    errors: list = field(default_factory=list)

    debug: bool = False
