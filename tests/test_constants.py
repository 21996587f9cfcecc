import pytest

from reservation_import.core.constants import TaskStatus, can_transition


@pytest.mark.parametrize(
    ("current", "target", "allowed"),
    [
        (TaskStatus.PENDING, TaskStatus.IN_PROGRESS, True),
        (TaskStatus.IN_PROGRESS, TaskStatus.IN_PROGRESS, True),
        (TaskStatus.IN_PROGRESS, TaskStatus.COMPLETED, True),
        (TaskStatus.IN_PROGRESS, TaskStatus.FAILED, True),
        (TaskStatus.PENDING, TaskStatus.COMPLETED, False),
        (TaskStatus.COMPLETED, TaskStatus.IN_PROGRESS, False),
        (TaskStatus.FAILED, TaskStatus.PENDING, False),
    ],
)
def test_task_transitions(current, target, allowed):
    assert can_transition(current, target) is allowed


def test_terminal_statuses():
    assert TaskStatus.COMPLETED.is_terminal
    assert TaskStatus.FAILED.is_terminal
    assert not TaskStatus.IN_PROGRESS.is_terminal
