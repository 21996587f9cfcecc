from reservation_import.pipeline.engine import ImportResult
from reservation_import.tasks import import_tasks


def test_job_returns_engine_summary(monkeypatch):
    seen = []

    async def fake_run_import(task_id):
        seen.append(task_id)
        return ImportResult(task_id=task_id, status="COMPLETED", rows_processed=3, error_count=1)

    monkeypatch.setattr(import_tasks, "_run_import", fake_run_import)

    outcome = import_tasks.process_reservation_file.apply(args=["task-1"]).get()

    assert seen == ["task-1"]
    assert outcome["status"] == "COMPLETED"
    assert outcome["rows_processed"] == 3
    assert outcome["error_count"] == 1


def test_enqueue_dispatches_task_id(monkeypatch):
    calls = []

    class FakeAsyncResult:
        id = "message-1"

    def fake_delay(task_id):
        calls.append(task_id)
        return FakeAsyncResult()

    monkeypatch.setattr(import_tasks.process_reservation_file, "delay", fake_delay)

    assert import_tasks.enqueue_import("task-1") == "message-1"
    assert calls == ["task-1"]


def test_retry_policy_comes_from_settings():
    task = import_tasks.process_reservation_file

    assert task.max_retries == 2
    assert OSError in task.autoretry_for
    assert task.retry_backoff == 5
