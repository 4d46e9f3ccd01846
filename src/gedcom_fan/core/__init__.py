"""
Pipeline orchestration: per-run context, typed errors and the Pipeline runner.

``Pipeline`` is imported from ``gedcom_fan.core.pipeline`` directly so that
the loader can depend on ``gedcom_fan.core.exceptions`` without a cycle.
"""

from .exceptions import ConfigError, DecodeError, ParseExecutionError, PipelineError
from .context import PipelineContext

__all__ = [
    "ConfigError",
    "DecodeError",
    "ParseExecutionError",
    "PipelineContext",
    "PipelineError",
]
