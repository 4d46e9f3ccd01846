class PipelineError(Exception):
    """Base exception for pipeline failures."""


class DecodeError(PipelineError):
    """Raised when a buffer is not a well-formed GEDCOM record file."""


class ConfigError(PipelineError):
    """Raised when a configuration value is out of range."""


class ParseExecutionError(PipelineError):
    """Raised when a pipeline stage fails unexpectedly."""
