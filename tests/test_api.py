import asyncio

import pytest
from fastapi.testclient import TestClient

from reservation_import.api.deps import get_report_store, get_task_store
from reservation_import.core.constants import ErrorCode, TaskStatus
from reservation_import.main import app
from reservation_import.reports.error_reporter import ErrorReporter
from reservation_import.reports.items import ErrorItem


@pytest.fixture()
def client(task_store, report_store):
    app.dependency_overrides[get_task_store] = lambda: task_store
    app.dependency_overrides[get_report_store] = lambda: report_store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_task_status(client, task_store):
    task = task_store.add("/uploads/1.xlsx")

    response = client.get(f"/api/v1/tasks/{task.id}")

    assert response.status_code == 200
    body = response.json()
    assert body["task_id"] == task.id
    assert body["status"] == TaskStatus.PENDING
    assert body["report_path"] is None


def test_unknown_task_is_404(client):
    response = client.get("/api/v1/tasks/does-not-exist")

    assert response.status_code == 404


def test_report_of_clean_task(client, task_store):
    task = task_store.add("/uploads/1.xlsx", status=TaskStatus.COMPLETED.value)

    response = client.get(f"/api/v1/tasks/{task.id}/report")

    assert response.status_code == 200
    assert response.json() == {"message": "No errors found during processing", "errors": []}


def test_report_with_errors(client, task_store, report_store, vocabulary):
    task = task_store.add("/uploads/1.xlsx", status=TaskStatus.COMPLETED.value)
    reference = asyncio.run(ErrorReporter(report_store, vocabulary).generate(
        task.id, [ErrorItem(2, ErrorCode.MISSING_FIELD, "guest_name")],
    ))
    task_store.tasks[task.id].report_path = reference

    response = client.get(f"/api/v1/tasks/{task.id}/report")

    assert response.status_code == 200
    errors = response.json()["errors"]
    assert errors == [{
        "row": 2,
        "code": "MISSING_FIELD",
        "field": "guest_name",
        "reason": "Missing required field: guest_name",
        "suggestion": 'Provide value for field "guest_name"',
    }]


def test_report_file_missing_is_404(client, task_store, tmp_path):
    task = task_store.add("/uploads/1.xlsx", status=TaskStatus.COMPLETED.value)
    task_store.tasks[task.id].report_path = str(tmp_path / "gone-report.json")

    response = client.get(f"/api/v1/tasks/{task.id}/report")

    assert response.status_code == 404
