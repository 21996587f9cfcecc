"""Within-file duplicate detection on reservation ID."""

from __future__ import annotations

from reservation_import.core.constants import ErrorCode
from reservation_import.reports.items import ErrorItem


class DuplicateTracker:
    """
    Remembers the reservation IDs already accepted in the current file.

    A key is only remembered once its row has passed validation, so an
    invalid row does not block a later valid row with the same ID.  One
    tracker per job attempt; it is never shared between tasks.
    """

    def __init__(self) -> None:
        self._seen: set[str] = set()

    def __len__(self) -> int:
        return len(self._seen)

    def __contains__(self, key: str) -> bool:
        return key in self._seen

    def is_duplicate(self, key: str) -> bool:
        return bool(key) and key in self._seen

    def mark_seen(self, key: str) -> None:
        if key:
            self._seen.add(key)

    def check(self, row_number: int, key: str) -> ErrorItem | None:
        """Return a DUPLICATE error item if `key` was already accepted."""
        if self.is_duplicate(key):
            return ErrorItem(row=row_number, code=ErrorCode.DUPLICATE, field=key)
        return None
