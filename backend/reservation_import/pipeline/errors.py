"""
Domain-specific exception hierarchy for the import pipeline.

Only failures of the pipeline itself are exceptions.  Bad spreadsheet
rows are values (ErrorItem) and never raise.  Database and broker
failures are deliberately NOT wrapped here: they propagate untouched so
the queue can redeliver the job.
"""

from __future__ import annotations


class PipelineError(Exception):
    """Base exception for all pipeline errors."""

    def __init__(
        self,
        message: str,
        *,
        task_id: str | None = None,
        execution_id: str | None = None,
        details: dict | None = None,
    ) -> None:
        self.task_id = task_id
        self.execution_id = execution_id
        self.details = details or {}
        super().__init__(message)


class SpreadsheetReadError(PipelineError):
    """The workbook could not be opened or its row stream is corrupt."""
    pass


class InvalidTransitionError(PipelineError):
    """A task status change that the lifecycle does not allow."""

    def __init__(
        self,
        message: str,
        *,
        current_status: str | None = None,
        target_status: str | None = None,
        **kwargs,
    ) -> None:
        self.current_status = current_status
        self.target_status = target_status
        super().__init__(message, **kwargs)
