"""Command-line interface for jsv."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from jsv.errors import JsvError

# Exit codes: success, at least one invalid record, setup or usage error.
EXIT_OK = 0
EXIT_INVALID = 1
EXIT_SETUP_ERROR = 2

app = typer.Typer(
    name="jsv",
    help="Validate CSV records against a JSON object schema.",
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)


def _version_callback(value: bool) -> None:
    if value:
        from jsv import __version__

        console.print(f"jsv version {__version__}")
        raise typer.Exit()


@app.command()
def main(
    csv_file: Annotated[
        Path,
        typer.Argument(
            help="Path to the CSV file to validate.",
            dir_okay=False,
            show_default=False,
        ),
    ],
    schema: Annotated[
        Path | None,
        typer.Option(
            "--schema",
            "-s",
            help="Path to the JSON schema document. [default: ./schema.json]",
            dir_okay=False,
            show_default=False,
        ),
    ] = None,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show version information and exit.",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """
    Validate every record of CSV_FILE against the schema.

    Exits with 0 if all records are valid, 1 if any record fails
    validation, and 2 if the schema, data file or configuration is unusable.
    """
    from jsv.config import load_config
    from jsv.ingestion import CsvSource
    from jsv.normalization import check_header, describe_columns
    from jsv.schemas import load_schema_file
    from jsv.utils.logging import configure_logging, get_logger, log_context
    from jsv.validation import ConsoleReporter, ValidationRunner

    try:
        config = load_config()
    except JsvError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]", soft_wrap=True)
        raise typer.Exit(code=EXIT_SETUP_ERROR) from e

    configure_logging(config.log_level.value, json_output=config.json_logs)
    log = get_logger(__name__)

    schema_path = schema if schema is not None else config.schema_path
    reporter = ConsoleReporter(console, err_console)

    try:
        run_schema = load_schema_file(schema_path)
        with (
            log_context(data_file=str(csv_file)),
            CsvSource(csv_file, encoding=config.encoding, delimiter=config.delimiter) as source,
        ):
            check_header(source.header, run_schema)
            reporter.print_columns(describe_columns(source.header, run_schema))

            runner = ValidationRunner(run_schema, source.header)
            summary = runner.run(source.rows(), sink=reporter)
    except JsvError as e:
        log.debug("Setup failed", error=str(e))
        err_console.print(f"[red]Error: {escape(str(e))}[/red]", soft_wrap=True)
        raise typer.Exit(code=EXIT_SETUP_ERROR) from e

    reporter.print_summary(summary)

    if not summary.passed:
        raise typer.Exit(code=EXIT_INVALID)


if __name__ == "__main__":
    app()
