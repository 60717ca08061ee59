"""Record validation module."""

from jsv.validation.backend import JsonSchemaValidator, RecordValidator, Violation
from jsv.validation.core import RecordOutcome, RunSummary, ValidationRunner
from jsv.validation.reporter import ConsoleReporter

__all__ = [
    "ConsoleReporter",
    "JsonSchemaValidator",
    "RecordOutcome",
    "RecordValidator",
    "RunSummary",
    "ValidationRunner",
    "Violation",
]
