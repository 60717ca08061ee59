"""
Streaming CSV source.

Reads the header once and then yields data rows lazily, one at a time.
A row that cannot be parsed is yielded with its error instead of its cells,
so the caller can skip it and carry on.
"""

import csv
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from types import TracebackType
from typing import IO

from jsv.errors import DataFileError
from jsv.utils.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class SourceRow:
    """One data row read from the source."""

    index: int
    line: int
    cells: list[str] | None
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Whether the row was read successfully."""
        return self.error is None


class CsvSource:
    """
    Forward-only reader over a CSV file with a header row.

    Quoting is parsed strictly: a stray quote inside a field makes that row a
    read error, and so does a byte the encoding cannot decode. Rows with more
    or fewer cells than the header are passed through unchanged. Entirely
    blank lines are skipped and not counted.

    Use as a context manager:

        with CsvSource(path) as source:
            for row in source.rows():
                ...
    """

    def __init__(
        self,
        path: Path,
        encoding: str = "utf-8-sig",
        delimiter: str = ",",
    ) -> None:
        """
        Initialize CSV source.

        Args:
            path: Path to the CSV file.
            encoding: Text encoding of the file.
            delimiter: Field delimiter character.
        """
        self.path = path
        self.encoding = encoding
        self.delimiter = delimiter
        self.header: list[str] = []
        self._file: IO[str] | None = None
        self._reader: "csv._reader | None" = None

    def __enter__(self) -> "CsvSource":
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def open(self) -> None:
        """
        Open the file and read the header row.

        Raises:
            DataFileError: If the file cannot be opened or decoded, or has no
                header row.
        """
        try:
            self._file = self.path.open(encoding=self.encoding, errors="surrogateescape", newline="")
        except OSError as e:
            msg = f"failed to open csv file ({self.path}): {e.strerror or e}"
            raise DataFileError(msg) from e
        except LookupError as e:
            msg = f"unknown encoding for csv file ({self.path}): {self.encoding}"
            raise DataFileError(msg) from e

        self._reader = csv.reader(self._file, delimiter=self.delimiter, strict=True)

        try:
            self.header = next(self._reader)
        except StopIteration:
            self.close()
            msg = f"csv file has no header row ({self.path})"
            raise DataFileError(msg) from None
        except csv.Error as e:
            self.close()
            msg = f"failed to read headers from csv file ({self.path}): {e}"
            raise DataFileError(msg) from e

        undecodable = self._undecodable(self.header)
        if undecodable:
            self.close()
            msg = f"failed to read headers from csv file ({self.path}): {undecodable}"
            raise DataFileError(msg)

        log.debug("Opened csv source", path=str(self.path), columns=self.header)

    def close(self) -> None:
        """Close the underlying file."""
        if self._file is not None:
            self._file.close()
        self._file = None
        self._reader = None

    def _undecodable(self, cells: list[str]) -> str | None:
        """Describe the first byte in `cells` that the encoding could not decode."""
        for position, cell in enumerate(cells, start=1):
            for char in cell:
                if "\udc80" <= char <= "\udcff":
                    byte = ord(char) - 0xDC00
                    return f"field {position}: cannot decode byte 0x{byte:02x} as {self.encoding}"
        return None

    def rows(self) -> Iterator[SourceRow]:
        """
        Yield data rows in file order.

        Yields:
            SourceRow with a 1-based record index. Malformed rows carry an
            error message and no cells.

        Raises:
            DataFileError: If the source is not open.
        """
        if self._reader is None:
            msg = f"csv source is not open ({self.path})"
            raise DataFileError(msg)

        reader = self._reader
        index = 0
        while True:
            try:
                cells = next(reader)
            except StopIteration:
                return
            except csv.Error as e:
                index += 1
                yield SourceRow(index=index, line=reader.line_num, cells=None, error=str(e))
                continue

            if not cells:
                continue

            index += 1
            undecodable = self._undecodable(cells)
            if undecodable:
                yield SourceRow(index=index, line=reader.line_num, cells=None, error=undecodable)
                continue

            yield SourceRow(index=index, line=reader.line_num, cells=cells)
