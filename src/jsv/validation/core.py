"""
Core validation logic for CSV records.

Drives assembly and schema validation for every row of a source and
aggregates the outcomes into success and error counts.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Protocol

from jsv.ingestion.csv_source import SourceRow
from jsv.normalization.coercion import TypedValue
from jsv.normalization.records import FieldError, assemble_record
from jsv.schemas.model import Schema
from jsv.utils.logging import get_logger
from jsv.validation.backend import JsonSchemaValidator, RecordValidator, Violation

log = get_logger(__name__)


@dataclass
class RecordOutcome:
    """Result of validating a single data record."""

    index: int
    values: dict[str, TypedValue] = field(default_factory=dict)
    field_errors: list[FieldError] = field(default_factory=list)
    violations: list[Violation] = field(default_factory=list)
    read_error: str | None = None

    @property
    def skipped(self) -> bool:
        """Whether the row could not be read and was not validated."""
        return self.read_error is not None

    @property
    def passed(self) -> bool:
        """Whether the record was read and accepted by the schema."""
        return not self.skipped and not self.violations


@dataclass(frozen=True)
class RunSummary:
    """Aggregate counts for one pass over a source."""

    success_count: int
    error_count: int
    skipped_count: int = 0

    @property
    def passed(self) -> bool:
        """True if no record failed validation."""
        return self.error_count == 0

    @property
    def total(self) -> int:
        """Number of data rows seen, including skipped ones."""
        return self.success_count + self.error_count + self.skipped_count


class OutcomeSink(Protocol):
    """Receives each record outcome as soon as it is produced."""

    def record(self, outcome: RecordOutcome) -> None: ...


class ValidationRunner:
    """
    Validates every row of a source against a schema.

    The runner holds no state between runs; counters live in `run` and are
    returned as a RunSummary.
    """

    def __init__(
        self,
        schema: Schema,
        header: list[str],
        validator: RecordValidator | None = None,
    ) -> None:
        """
        Initialize validation runner.

        Args:
            schema: Loaded schema.
            header: Column names of the source.
            validator: Schema validator backend (defaults to jsonschema).
        """
        self.schema = schema
        self.header = header
        self.validator = validator if validator is not None else JsonSchemaValidator()

    def validate_row(self, row: SourceRow) -> RecordOutcome:
        """
        Validate a single source row.

        Args:
            row: Row from the tabular source.

        Returns:
            RecordOutcome for the row.
        """
        if row.cells is None:
            log.debug("Skipping malformed row", record=row.index, line=row.line, error=row.error)
            return RecordOutcome(index=row.index, read_error=row.error or "unreadable row")

        if len(row.cells) != len(self.header):
            log.warning(
                "Row length differs from header",
                record=row.index,
                cells=len(row.cells),
                columns=len(self.header),
            )

        assembled = assemble_record(self.header, row.cells, self.schema)
        for error in assembled.field_errors:
            log.debug(
                "Field coercion failed",
                record=row.index,
                column=error.column,
                error=error.message,
            )

        violations = self.validator.validate(assembled.values, self.schema)
        return RecordOutcome(
            index=row.index,
            values=assembled.values,
            field_errors=assembled.field_errors,
            violations=violations,
        )

    def iter_outcomes(self, rows: Iterable[SourceRow]) -> Iterator[RecordOutcome]:
        """
        Lazily validate rows in order.

        Args:
            rows: Rows from the tabular source.

        Yields:
            One RecordOutcome per row.
        """
        for row in rows:
            yield self.validate_row(row)

    def run(self, rows: Iterable[SourceRow], sink: OutcomeSink | None = None) -> RunSummary:
        """
        Validate all rows and count the outcomes.

        Args:
            rows: Rows from the tabular source, consumed once.
            sink: Optional receiver for each outcome (e.g. a reporter).

        Returns:
            RunSummary with success, error and skipped counts.
        """
        success_count = 0
        error_count = 0
        skipped_count = 0

        for outcome in self.iter_outcomes(rows):
            if outcome.skipped:
                skipped_count += 1
            elif outcome.passed:
                success_count += 1
            else:
                error_count += 1

            if sink is not None:
                sink.record(outcome)

        summary = RunSummary(
            success_count=success_count,
            error_count=error_count,
            skipped_count=skipped_count,
        )
        log.info(
            "Validation finished",
            succeeded=summary.success_count,
            failed=summary.error_count,
            skipped=summary.skipped_count,
        )
        return summary
