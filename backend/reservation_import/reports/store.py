"""
Report artifact storage.

A report is addressed solely by its task ID.  "No file" means the run
had no errors; a file containing [] is a different (explicit) state.
"""

from __future__ import annotations

import asyncio
import json
from abc import ABC, abstractmethod
from pathlib import Path

from reservation_import.core.config import settings
from reservation_import.core.logging import get_logger
from reservation_import.reports.items import ReportItem

logger = get_logger(__name__)


class ReportStore(ABC):
    """Where report artifacts are written and read back."""

    @abstractmethod
    async def write(self, task_id: str, items: list[ReportItem]) -> str:
        """Persist (or overwrite) the report for a task.  Returns its reference."""
        ...

    @abstractmethod
    async def read(self, reference: str) -> list[ReportItem]:
        ...

    @abstractmethod
    async def exists(self, task_id: str) -> bool:
        ...


class FileReportStore(ReportStore):
    """JSON files named `<task_id>-report.json` under a reports directory."""

    def __init__(self, reports_dir: str | Path | None = None) -> None:
        self.reports_dir = Path(reports_dir or settings.REPORTS_DIR).resolve()

    def path_for(self, task_id: str) -> Path:
        return self.reports_dir / f"{task_id}-report.json"

    async def write(self, task_id: str, items: list[ReportItem]) -> str:
        path = self.path_for(task_id)
        payload = json.dumps([item.to_dict() for item in items], indent=2, ensure_ascii=False)
        await asyncio.to_thread(self._write_text, path, payload)
        logger.info("Report written", task_id=task_id, path=str(path), items=len(items))
        return str(path)

    async def read(self, reference: str) -> list[ReportItem]:
        text = await asyncio.to_thread(Path(reference).read_text, encoding="utf-8")
        return [ReportItem.from_dict(entry) for entry in json.loads(text)]

    async def exists(self, task_id: str) -> bool:
        return self.path_for(task_id).is_file()

    @staticmethod
    def _write_text(path: Path, payload: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        # Readers see either the previous report or the new one, never a partial file.
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(payload, encoding="utf-8")
        tmp_path.replace(path)
