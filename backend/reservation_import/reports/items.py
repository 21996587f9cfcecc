"""
Report item types.

ErrorItem is the internal diagnostic collected while a file is processed.
ReportItem is what ends up in the report artifact: the same location plus
a human-readable reason and suggestion.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from reservation_import.core.constants import ErrorCode

FILE_LEVEL_ROW = 0


@dataclass(frozen=True)
class ErrorItem:
    """One row-level (or file-level, row 0) problem."""

    row: int
    code: ErrorCode
    field: str | None = None
    message: str | None = None

    @classmethod
    def file_level(cls, message: str) -> "ErrorItem":
        return cls(row=FILE_LEVEL_ROW, code=ErrorCode.UNKNOWN, message=message)


@dataclass(frozen=True)
class ReportItem:
    """Serialized form of an ErrorItem inside the report artifact."""

    row: int
    code: str
    reason: str
    suggestion: str
    field: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ReportItem":
        return cls(
            row=int(data["row"]),
            code=str(data.get("code", ErrorCode.UNKNOWN.value)),
            reason=data["reason"],
            suggestion=data["suggestion"],
            field=data.get("field"),
        )
