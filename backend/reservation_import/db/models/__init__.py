"""
Models package — re-exports Base and all models.

Import models here so Alembic's `target_metadata = Base.metadata`
picks up every table automatically.

When adding a new model:
    1. Create `reservation_import/db/models/<table_name>.py`
    2. Import it here
"""

from reservation_import.db.models.base import Base
from reservation_import.db.models.reservation import Reservation
from reservation_import.db.models.task import ImportTask

__all__ = [
    "Base",
    "ImportTask",
    "Reservation",
]
