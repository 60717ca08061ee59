"""
Data ingestion layer for reading tabular records.

Rows are streamed from disk; the file is never loaded into memory at once.
"""

from jsv.ingestion.csv_source import CsvSource, SourceRow

__all__ = ["CsvSource", "SourceRow"]
