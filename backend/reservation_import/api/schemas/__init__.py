"""API schema package."""

from reservation_import.api.schemas.tasks import ReportItemResponse, TaskReportResponse, TaskStatusResponse

__all__ = ["TaskStatusResponse", "TaskReportResponse", "ReportItemResponse"]
