"""
Repositories package — data-access layer.

Each repository file handles all DB operations for one domain entity.
Repositories do NOT handle queue concerns or business logic beyond
basic data integrity.

Convention:
    - One file per aggregate root (tasks.py, reservations.py)
    - All functions accept `AsyncSession` as the first argument
    - Use `flush()` internally; commit/rollback belongs to the caller
      (the `get_db` dependency or the SQL store adapters)
"""
