# taskexchange/services/lifecycle.py
from enum import StrEnum
from typing import Dict, FrozenSet

from taskexchange.core.exceptions import InvalidStateError
from taskexchange.models.task import Task, TaskStatus


class TaskAction(StrEnum):
    ACCEPT = "accept"
    ASSIGN = "assign"
    COMPLETE = "complete"


# States each action may start from. Status patches bypass this table.
ALLOWED_FROM: Dict[TaskAction, FrozenSet[TaskStatus]] = {
    TaskAction.ACCEPT: frozenset({TaskStatus.OPEN, TaskStatus.PENDING_APPROVAL}),
    TaskAction.ASSIGN: frozenset({TaskStatus.OPEN, TaskStatus.PENDING_APPROVAL}),
    TaskAction.COMPLETE: frozenset(
        {TaskStatus.OPEN, TaskStatus.PENDING_APPROVAL, TaskStatus.ASSIGNED}
    ),
}

_REJECTIONS: Dict[TaskStatus, str] = {
    TaskStatus.ASSIGNED: "Task is already assigned to someone",
    TaskStatus.COMPLETED: "Task already completed",
}


def check_transition(task: Task, action: TaskAction) -> None:
    """Raise InvalidStateError if `action` is not legal from the task's status."""
    if task.status in ALLOWED_FROM[action]:
        return
    reason = _REJECTIONS.get(task.status, f"Cannot {action} a task in status {task.status}")
    raise InvalidStateError(reason)


def status_after(task: Task, action: TaskAction) -> TaskStatus:
    """
    Status the task ends in once `action` has been applied.

    For ACCEPT this must be called after the acceptance was appended: only
    the first acceptance moves the task to pending_approval.
    """
    if action == TaskAction.ACCEPT:
        if len(task.acceptances) == 1:
            return TaskStatus.PENDING_APPROVAL
        return task.status
    if action == TaskAction.ASSIGN:
        return TaskStatus.ASSIGNED
    return TaskStatus.COMPLETED
