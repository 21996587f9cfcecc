"""
Cell normalization — raw openpyxl cell values to canonical strings.

Spreadsheet cells arrive as whatever openpyxl decoded: str, int/float,
bool, datetime/date, CellRichText, or None.  Every function here returns
a string and never raises; an unusable value becomes "".

Date fields are rendered as YYYY-MM-DD.  Numbers in a date column are
treated as spreadsheet serial dates (days since 1899-12-30).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Sequence

from openpyxl.cell.rich_text import CellRichText
from openpyxl.utils.datetime import from_excel

from reservation_import.core.constants import RESERVATION_COLUMNS


@dataclass(frozen=True)
class NormalizedRow:
    """One spreadsheet row after normalization, before validation."""

    reservation_id: str
    guest_name: str
    status: str
    check_in_date: str
    check_out_date: str

    def to_dict(self) -> dict[str, str]:
        return {
            "reservation_id": self.reservation_id,
            "guest_name": self.guest_name,
            "status": self.status,
            "check_in_date": self.check_in_date,
            "check_out_date": self.check_out_date,
        }


def format_date(value: date | datetime) -> str:
    """Calendar date as YYYY-MM-DD, dropping any time of day."""
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def serial_to_date(serial: float) -> date | None:
    """Convert a spreadsheet serial number to a calendar date."""
    try:
        converted = from_excel(serial)
    except (ValueError, OverflowError, TypeError):
        return None
    if isinstance(converted, datetime):
        return converted.date()
    if isinstance(converted, date):
        return converted
    # from_excel returns a time/timedelta for fractional serials below 1
    return None


def _rich_text(value: CellRichText) -> str:
    return "".join(run if isinstance(run, str) else run.text for run in value)


def _number(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def normalize_value(value: Any) -> str:
    """Canonical string for a text / identifier / status cell."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return _number(value)
    if isinstance(value, (datetime, date)):
        return format_date(value)
    if isinstance(value, CellRichText):
        return _rich_text(value).strip()
    return ""


def normalize_date(value: Any) -> str:
    """Canonical YYYY-MM-DD string for a date cell ("" when unusable)."""
    if value is None:
        return ""
    if isinstance(value, (datetime, date)):
        return format_date(value)
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, bool):
        return ""
    if isinstance(value, (int, float)):
        converted = serial_to_date(value)
        return format_date(converted) if converted else ""
    if isinstance(value, CellRichText):
        return _rich_text(value).strip()
    return ""


def _cell(values: Sequence[Any], column: int) -> Any:
    index = column - 1
    return values[index] if index < len(values) else None


def normalize_row(values: Sequence[Any]) -> NormalizedRow:
    """Map a raw row (in fixed column order) to a NormalizedRow."""
    return NormalizedRow(
        reservation_id=normalize_value(_cell(values, RESERVATION_COLUMNS["reservation_id"])),
        guest_name=normalize_value(_cell(values, RESERVATION_COLUMNS["guest_name"])),
        status=normalize_value(_cell(values, RESERVATION_COLUMNS["status"])),
        check_in_date=normalize_date(_cell(values, RESERVATION_COLUMNS["check_in_date"])),
        check_out_date=normalize_date(_cell(values, RESERVATION_COLUMNS["check_out_date"])),
    )
