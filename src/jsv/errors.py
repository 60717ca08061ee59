"""
Exception hierarchy for jsv.

Setup errors (schema, data file, config) stop a run before any record is
processed. CoercionError is raised per field and always recovered by the
record assembler.
"""


class JsvError(Exception):
    """Base class for all jsv errors."""


class SchemaError(JsvError):
    """Schema document is unreadable, malformed or declares unsupported types."""


class DataFileError(JsvError):
    """Data file cannot be opened, decoded or has no header row."""


class ConfigError(JsvError):
    """Configuration file or environment overrides are invalid."""


class CoercionError(JsvError):
    """A raw text cell cannot be turned into a typed value."""

    def __init__(self, raw: str, reason: str) -> None:
        self.raw = raw
        self.reason = reason
        super().__init__(f"cannot coerce {raw!r}: {reason}")
