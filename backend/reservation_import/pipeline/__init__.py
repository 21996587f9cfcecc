"""
Import pipeline — the orchestrator that turns an uploaded reservations
workbook into persisted reservations, an error report and task events.

Modules are imported directly (``reservation_import.pipeline.engine``);
nothing is re-exported here so the reader and validators can depend on
``pipeline.errors`` without pulling in the engine.
"""
