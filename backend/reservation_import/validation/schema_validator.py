"""
Schema validation — required fields, status vocabulary, date formats.

Every rule runs on every row so the report lists all of a row's problems
at once.  Rules live on the ReservationRow pydantic model; this module
turns pydantic's error list into ErrorItems.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import ValidationError

from reservation_import.core.constants import ErrorCode
from reservation_import.processing.normalizer import NormalizedRow
from reservation_import.processing.schemas import ReservationRow, StatusVocabulary
from reservation_import.reports.items import ErrorItem

# Order in which fields are reported for a single row.
FIELD_ORDER = ("reservation_id", "guest_name", "status", "check_in_date", "check_out_date")

_KNOWN_CODES = {code.value for code in ErrorCode}


@dataclass
class ValidationResult:
    """Either a typed record or the list of violations for one row."""

    record: ReservationRow | None = None
    errors: list[ErrorItem] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.record is not None and not self.errors


class RowValidator:
    """Validate normalized rows against the reservation schema."""

    def __init__(self, vocabulary: StatusVocabulary | None = None) -> None:
        self.vocabulary = vocabulary or StatusVocabulary.from_settings()

    def validate(self, row_number: int, row: NormalizedRow) -> ValidationResult:
        try:
            record = ReservationRow.model_validate(
                row.to_dict(),
                context={"vocabulary": self.vocabulary},
            )
        except ValidationError as exc:
            return ValidationResult(errors=self._to_error_items(row_number, exc))
        return ValidationResult(record=record)

    @staticmethod
    def _to_error_items(row_number: int, exc: ValidationError) -> list[ErrorItem]:
        items: list[ErrorItem] = []
        for error in exc.errors():
            field_name = str(error["loc"][0]) if error["loc"] else None
            code = error["type"]
            if code in _KNOWN_CODES:
                items.append(ErrorItem(row=row_number, code=ErrorCode(code), field=field_name))
            else:
                items.append(ErrorItem(
                    row=row_number,
                    code=ErrorCode.UNKNOWN,
                    field=field_name,
                    message=f"Invalid value in field {field_name}: {error.get('msg')}",
                ))

        items.sort(key=lambda item: FIELD_ORDER.index(item.field) if item.field in FIELD_ORDER else len(FIELD_ORDER))
        return items
