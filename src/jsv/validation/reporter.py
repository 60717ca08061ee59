"""
Console reporter for validation results.

Column summary and final counts go to stdout; per-record diagnostics go
to stderr.
"""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from jsv.schemas.model import FieldType
from jsv.validation.core import RecordOutcome, RunSummary


class ConsoleReporter:
    """Formats and displays validation results to the console."""

    def __init__(self, console: Console, err_console: Console) -> None:
        """
        Initialize console reporter.

        Args:
            console: Rich Console for the summary (stdout).
            err_console: Rich Console for diagnostics (stderr).
        """
        self.console = console
        self.err_console = err_console

    def print_columns(self, columns: dict[str, FieldType | None]) -> None:
        """
        Print the declared type of every header column.

        Args:
            columns: Column name to declared type, None if undeclared.
        """
        table = Table(title="Column types", show_header=True)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Column", style="cyan", no_wrap=True)
        table.add_column("Type", style="blue")

        for position, (name, declared) in enumerate(columns.items()):
            table.add_row(
                str(position),
                escape(name),
                declared.value if declared is not None else "[dim]-[/dim]",
            )

        self.console.print(table)

    def record(self, outcome: RecordOutcome) -> None:
        """
        Print diagnostics for one record, if it has any.

        Args:
            outcome: Outcome of a single record.
        """
        prefix = f"record {outcome.index}"

        if outcome.read_error is not None:
            self._error(f"{prefix}: skipped malformed row: {outcome.read_error}")
            return

        for error in outcome.field_errors:
            self._error(f"{prefix}: field '{error.column}': {error.message}")

        for violation in outcome.violations:
            self._error(f"{prefix}: {violation}")

    def print_summary(self, summary: RunSummary) -> None:
        """
        Print final counts.

        Args:
            summary: Result of a validation run.
        """
        self.console.print()
        self.console.print("[bold]Summary:[/bold]")
        self.console.print(f"  Records: {summary.total}")
        self.console.print(f"  [green]Passed: {summary.success_count}[/green]")
        self.console.print(f"  [red]Failed: {summary.error_count}[/red]")
        if summary.skipped_count:
            self.console.print(f"  [yellow]Skipped: {summary.skipped_count}[/yellow]")

        if summary.passed:
            self.console.print("[green]All records are valid.[/green]")
        else:
            self.console.print(f"[red]{summary.error_count} record(s) failed validation.[/red]")

    def _error(self, line: str) -> None:
        self.err_console.print(escape(line), soft_wrap=True, highlight=False)
