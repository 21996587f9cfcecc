"""
Task notifications — status and progress events pushed to clients.

Delivery is fire-and-forget: the import never waits for, or fails on,
a subscriber.  RedisNotifier publishes to a per-task pub/sub channel
(`task:<task_id>`) that the WebSocket layer relays to browsers.
InMemoryNotifier keeps events in lists and is used when no transport
is configured and in tests.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from reservation_import.core.config import settings
from reservation_import.core.logging import get_logger

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TaskStatusUpdate:
    task_id: str
    status: str
    timestamp: datetime = field(default_factory=_utcnow)
    report_path: str | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "task_id": self.task_id,
            "status": self.status,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.report_path:
            payload["report_path"] = self.report_path
        return payload


@dataclass(frozen=True)
class TaskProgressUpdate:
    task_id: str
    rows_processed: int
    error_count: int
    timestamp: datetime = field(default_factory=_utcnow)

    def to_dict(self) -> dict[str, Any]:
        return {
            "task_id": self.task_id,
            "rows_processed": self.rows_processed,
            "error_count": self.error_count,
            "timestamp": self.timestamp.isoformat(),
        }


class Notifier(ABC):
    """Outbound channel for task events."""

    @abstractmethod
    async def emit_status(self, update: TaskStatusUpdate) -> None:
        ...

    @abstractmethod
    async def emit_progress(self, update: TaskProgressUpdate) -> None:
        ...

    async def close(self) -> None:
        """Release transport resources.  Default: nothing to release."""
        pass


class InMemoryNotifier(Notifier):
    """Collects events in memory, in emission order."""

    def __init__(self) -> None:
        self.events: list[tuple[str, TaskStatusUpdate | TaskProgressUpdate]] = []

    @property
    def status_updates(self) -> list[TaskStatusUpdate]:
        return [update for kind, update in self.events if kind == "status"]

    @property
    def progress_updates(self) -> list[TaskProgressUpdate]:
        return [update for kind, update in self.events if kind == "progress"]

    async def emit_status(self, update: TaskStatusUpdate) -> None:
        self.events.append(("status", update))

    async def emit_progress(self, update: TaskProgressUpdate) -> None:
        self.events.append(("progress", update))


class RedisNotifier(Notifier):
    """Publishes JSON events on `<prefix>:<task_id>` Redis channels."""

    def __init__(
        self,
        client: aioredis.Redis | None = None,
        *,
        redis_url: str | None = None,
        channel_prefix: str | None = None,
    ) -> None:
        self._client = client or aioredis.from_url(redis_url or settings.REDIS_URL)
        self.channel_prefix = channel_prefix or settings.NOTIFICATION_CHANNEL_PREFIX

    def channel_for(self, task_id: str) -> str:
        return f"{self.channel_prefix}:{task_id}"

    async def emit_status(self, update: TaskStatusUpdate) -> None:
        await self._publish(update.task_id, "status", update.to_dict())

    async def emit_progress(self, update: TaskProgressUpdate) -> None:
        await self._publish(update.task_id, "progress", update.to_dict())

    async def close(self) -> None:
        await self._client.aclose()

    async def _publish(self, task_id: str, event: str, data: dict[str, Any]) -> None:
        message = json.dumps({"event": event, "data": data})
        try:
            await self._client.publish(self.channel_for(task_id), message)
        except RedisError as exc:
            logger.warning("Notification not delivered", task_id=task_id, event=event, error=str(exc))
