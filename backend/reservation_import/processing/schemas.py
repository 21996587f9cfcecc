"""
ReservationRow — typed record for one validated spreadsheet row.

Each field validator raises a PydanticCustomError whose type is an
ErrorCode value, so the validator can turn pydantic's error list straight
into report items.  Validation needs a StatusVocabulary passed through the
validation context::

    ReservationRow.model_validate(data, context={"vocabulary": vocabulary})
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, StringConstraints, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from reservation_import.core.config import settings
from reservation_import.core.constants import (
    GUEST_NAME_MAX_LENGTH,
    RESERVATION_ID_MAX_LENGTH,
    ErrorCode,
    ReservationStatus,
)


@dataclass(frozen=True)
class StatusVocabulary:
    """Maps the literal strings used in spreadsheets to canonical statuses."""

    pending: str
    completed: str
    cancelled: str

    def __post_init__(self) -> None:
        values = self.allowed_values()
        if any(not value or not value.strip() for value in values):
            raise ValueError("Reservation status literals must not be blank")
        if len(set(values)) != len(values):
            raise ValueError(f"Reservation status literals must be distinct, got {values}")

    @classmethod
    def from_settings(cls) -> "StatusVocabulary":
        return cls(
            pending=settings.RESERVATION_STATUS_PENDING,
            completed=settings.RESERVATION_STATUS_COMPLETED,
            cancelled=settings.RESERVATION_STATUS_CANCELLED,
        )

    @property
    def literals(self) -> dict[str, ReservationStatus]:
        return {
            self.pending: ReservationStatus.PENDING,
            self.completed: ReservationStatus.COMPLETED,
            self.cancelled: ReservationStatus.CANCELLED,
        }

    def resolve(self, literal: str) -> ReservationStatus | None:
        return self.literals.get(literal)

    def allowed_values(self) -> list[str]:
        return [self.pending, self.completed, self.cancelled]


def parse_calendar_date(value: str) -> date | None:
    """Parse an ISO-8601 date (or the date part of an ISO date-time)."""
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value).date()
    except ValueError:
        return None


def _missing() -> PydanticCustomError:
    return PydanticCustomError(ErrorCode.MISSING_FIELD.value, "Missing required field")


def _require_text(value: Any) -> str:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise _missing()
    return value


class ReservationRow(BaseModel):
    """A reservation row that passed every schema rule."""

    model_config = ConfigDict(frozen=True)

    reservation_id: Annotated[str, StringConstraints(max_length=RESERVATION_ID_MAX_LENGTH)]
    guest_name: Annotated[str, StringConstraints(max_length=GUEST_NAME_MAX_LENGTH)]
    status: ReservationStatus
    check_in_date: date
    check_out_date: date

    @field_validator("reservation_id", "guest_name", mode="before")
    @classmethod
    def _required_text(cls, value: Any) -> Any:
        return _require_text(value)

    @field_validator("status", mode="before")
    @classmethod
    def _known_status(cls, value: Any, info: ValidationInfo) -> ReservationStatus:
        literal = _require_text(value)
        vocabulary = (info.context or {}).get("vocabulary") or StatusVocabulary.from_settings()
        status = vocabulary.resolve(literal)
        if status is None:
            raise PydanticCustomError(ErrorCode.INVALID_STATUS.value, "Invalid reservation status")
        return status

    @field_validator("check_in_date", "check_out_date", mode="before")
    @classmethod
    def _calendar_date(cls, value: Any) -> date:
        if isinstance(value, date):
            return value
        text = _require_text(value)
        parsed = parse_calendar_date(text) if isinstance(text, str) else None
        if parsed is None:
            raise PydanticCustomError(ErrorCode.INVALID_DATE.value, "Invalid date format")
        return parsed

    @field_validator("check_out_date")
    @classmethod
    def _after_check_in(cls, value: date, info: ValidationInfo) -> date:
        # check_in_date only appears in info.data when it validated cleanly
        check_in = info.data.get("check_in_date")
        if check_in is not None and value <= check_in:
            raise PydanticCustomError(
                ErrorCode.CHECKOUT_BEFORE_CHECKIN.value,
                "Check-out date must be after check-in date",
            )
        return value
