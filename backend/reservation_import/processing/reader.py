"""
Streaming XLSX reader built on openpyxl's read-only mode.

Rows are produced lazily, one worksheet after another, in file order.
Nothing is buffered beyond the row currently being handed out, so memory
stays flat regardless of file size.

Any failure to open or decode the workbook surfaces as
SpreadsheetReadError — the orchestrator treats that as a pipeline
failure rather than a data problem.
"""

from __future__ import annotations

import zipfile
import zlib
from dataclasses import dataclass
from typing import Any, Iterator

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from reservation_import.pipeline.errors import SpreadsheetReadError

# Exceptions openpyxl lets escape for missing, truncated or malformed files.
# SyntaxError covers both ElementTree.ParseError and lxml's XMLSyntaxError;
# zlib.error and EOFError come from a corrupt or cut-off deflate stream.
READ_ERRORS = (
    OSError,
    EOFError,
    zlib.error,
    zipfile.BadZipFile,
    zipfile.LargeZipFile,
    InvalidFileException,
    SyntaxError,
    KeyError,
    IndexError,
    ValueError,
    TypeError,
)


@dataclass(frozen=True)
class SheetRow:
    """One worksheet row: its 1-based number and raw cell values."""

    number: int
    values: tuple[Any, ...]

    def cell(self, column: int) -> Any:
        """Return the raw value at a 1-based column index (None past the end)."""
        index = column - 1
        return self.values[index] if 0 <= index < len(self.values) else None

    @property
    def is_blank(self) -> bool:
        return all(value is None or (isinstance(value, str) and not value.strip()) for value in self.values)


class WorksheetStream:
    """Forward-only view over a single worksheet."""

    def __init__(self, worksheet, source: str) -> None:
        self._worksheet = worksheet
        self._source = source
        self.title: str = worksheet.title

    def rows(self) -> Iterator[SheetRow]:
        try:
            for number, values in enumerate(self._worksheet.iter_rows(values_only=True), start=1):
                yield SheetRow(number=number, values=tuple(values))
        except READ_ERRORS as exc:
            raise SpreadsheetReadError(
                f"Cannot read worksheet '{self.title}': {exc}",
                details={"file_path": self._source, "worksheet": self.title},
            ) from exc


class SpreadsheetReader:
    """
    Context manager over an .xlsx file.

    Usage::

        with SpreadsheetReader(path) as reader:
            for sheet in reader.worksheets():
                for row in sheet.rows():
                    ...
    """

    def __init__(self, file_path: str) -> None:
        self.file_path = file_path
        self._workbook = None

    def open(self) -> "SpreadsheetReader":
        try:
            self._workbook = load_workbook(
                self.file_path,
                read_only=True,
                data_only=True,
                rich_text=True,
            )
        except READ_ERRORS as exc:
            raise SpreadsheetReadError(
                f"Cannot open spreadsheet: {exc}",
                details={"file_path": self.file_path},
            ) from exc
        return self

    def close(self) -> None:
        if self._workbook is not None:
            self._workbook.close()
            self._workbook = None

    def __enter__(self) -> "SpreadsheetReader":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def worksheets(self) -> Iterator[WorksheetStream]:
        if self._workbook is None:
            raise SpreadsheetReadError("Spreadsheet is not open", details={"file_path": self.file_path})
        for worksheet in self._workbook.worksheets:
            yield WorksheetStream(worksheet, self.file_path)
