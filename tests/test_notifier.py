import json

from redis.exceptions import ConnectionError as RedisConnectionError

from reservation_import.notifications.notifier import (
    InMemoryNotifier,
    RedisNotifier,
    TaskProgressUpdate,
    TaskStatusUpdate,
)


class FakeRedis:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.published: list[tuple[str, dict]] = []
        self.closed = False

    async def publish(self, channel: str, message: str) -> int:
        if self.fail:
            raise RedisConnectionError("connection refused")
        self.published.append((channel, json.loads(message)))
        return 1

    async def aclose(self) -> None:
        self.closed = True


async def test_status_is_published_on_task_channel():
    client = FakeRedis()
    notifier = RedisNotifier(client)

    await notifier.emit_status(TaskStatusUpdate(task_id="t-1", status="COMPLETED", report_path="/r/t-1-report.json"))

    channel, message = client.published[0]
    assert channel == "task:t-1"
    assert message["event"] == "status"
    assert message["data"]["status"] == "COMPLETED"
    assert message["data"]["report_path"] == "/r/t-1-report.json"
    assert "timestamp" in message["data"]


async def test_progress_payload_carries_counters():
    client = FakeRedis()
    notifier = RedisNotifier(client, channel_prefix="imports")

    await notifier.emit_progress(TaskProgressUpdate(task_id="t-1", rows_processed=200, error_count=3))

    channel, message = client.published[0]
    assert channel == "imports:t-1"
    assert message["event"] == "progress"
    assert message["data"]["rows_processed"] == 200
    assert message["data"]["error_count"] == 3


async def test_publish_failure_is_not_raised():
    client = FakeRedis(fail=True)
    notifier = RedisNotifier(client)

    await notifier.emit_status(TaskStatusUpdate(task_id="t-1", status="IN_PROGRESS"))
    await notifier.close()

    assert client.published == []
    assert client.closed


async def test_in_memory_notifier_keeps_emission_order():
    notifier = InMemoryNotifier()

    await notifier.emit_status(TaskStatusUpdate(task_id="t", status="IN_PROGRESS"))
    await notifier.emit_progress(TaskProgressUpdate(task_id="t", rows_processed=100, error_count=0))
    await notifier.emit_status(TaskStatusUpdate(task_id="t", status="COMPLETED"))

    assert [kind for kind, _ in notifier.events] == ["status", "progress", "status"]
    assert [update.status for update in notifier.status_updates] == ["IN_PROGRESS", "COMPLETED"]
