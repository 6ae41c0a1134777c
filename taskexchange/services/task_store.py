"""Task store: task records, their lifecycle and role-based queries."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional, Sequence

from taskexchange.core.exceptions import (
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from taskexchange.database import JsonDatabase, next_id
from taskexchange.models.base import as_utc, utcnow
from taskexchange.models.document import Document
from taskexchange.models.task import Acceptance, Task, TaskStatus, Urgency
from taskexchange.models.user import User
from taskexchange.services.lifecycle import TaskAction, check_transition, status_after

logger = logging.getLogger(__name__)


def _find_task(doc: Document, task_id: int) -> Task:
    for task in doc.tasks:
        if task.id == task_id:
            return task
    raise NotFoundError("Task not found")


def _active(tasks: Sequence[Task], now: Optional[datetime]) -> List[Task]:
    now = as_utc(now) if now is not None else utcnow()
    return [t for t in tasks if not t.is_expired(now)]


class TaskStore:
    """Service layer over the tasks collection."""

    def __init__(self, db: JsonDatabase) -> None:
        self.db = db

    # ---- create / read ----

    def create_task(
        self,
        *,
        poster_id: int,
        title: str,
        description: str,
        category: str,
        urgency: Urgency | str,
        location: str,
        deadline: Optional[datetime],
        budget: Optional[float] = None,
        women_safe: bool = False,
        verified_only: bool = False,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        images: Optional[List[str]] = None,
    ) -> Task:
        required = (title, description, category, urgency, location)
        if any(not (value and str(value).strip()) for value in required) or deadline is None:
            raise ValidationError("Missing required fields")
        try:
            urgency = Urgency(urgency)
        except ValueError:
            raise ValidationError(f"Unknown urgency: {urgency}")

        with self.db.transaction() as doc:
            task = Task(
                id=next_id(doc, "taskId"),
                title=title,
                description=description,
                category=category,
                urgency=urgency,
                location=location,
                budget=budget or None,
                women_safe=bool(women_safe),
                verified_only=bool(verified_only),
                deadline=deadline,
                latitude=latitude,
                longitude=longitude,
                images=list(images or []),
                poster_id=poster_id,
                status=TaskStatus.OPEN,
            )
            doc.tasks.append(task)

        logger.info("Task created id=%s poster=%s category=%s", task.id, poster_id, category)
        return task

    def get_task(self, task_id: int) -> Task:
        return _find_task(self.db.snapshot(), task_id)

    def list_tasks(
        self,
        *,
        search: Optional[str] = None,
        category: Optional[str] = None,
        urgency: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> List[Task]:
        """
        Browse listing. Expired tasks are always left out; `category` and
        `urgency` match exactly unless empty or "all"; `search` is a
        case-insensitive substring of title or description.
        """
        tasks = _active(self.db.snapshot().tasks, now)

        if search:
            q = search.lower()
            tasks = [
                t for t in tasks
                if q in t.title.lower() or (t.description and q in t.description.lower())
            ]

        if category and category != "all":
            tasks = [t for t in tasks if t.category == category]

        if urgency and urgency != "all":
            tasks = [t for t in tasks if t.urgency == urgency]

        return tasks

    def list_tasks_by_poster(self, user_id: int, *, now: Optional[datetime] = None) -> List[Task]:
        tasks = self.db.snapshot().tasks
        return _active([t for t in tasks if t.poster_id == user_id], now)

    def list_tasks_by_assignee(self, user_id: int, *, now: Optional[datetime] = None) -> List[Task]:
        tasks = self.db.snapshot().tasks
        return _active([t for t in tasks if t.assigned_to_user_id == user_id], now)

    def list_all_tasks(self) -> List[Task]:
        """Every stored task, expired ones included."""
        return self.db.snapshot().tasks

    # ---- lifecycle ----

    def accept_task(self, task_id: int, user_id: int) -> Task:
        with self.db.transaction() as doc:
            task = _find_task(doc, task_id)

            if task.poster_id == user_id:
                raise InvalidStateError("You cannot accept your own task")
            check_transition(task, TaskAction.ACCEPT)
            if task.has_accepted(user_id):
                raise InvalidStateError("You have already accepted this task")

            task.acceptances.append(Acceptance(user_id=user_id))
            task.status = status_after(task, TaskAction.ACCEPT)

        logger.info(
            "Task %s accepted by user=%s (acceptances=%s status=%s)",
            task_id,
            user_id,
            len(task.acceptances),
            task.status,
        )
        return task

    def assign_task(self, task_id: int, poster_id: int, target_user_id: int) -> Task:
        with self.db.transaction() as doc:
            task = _find_task(doc, task_id)

            if task.poster_id != poster_id:
                raise ForbiddenError("Only task owner can assign helpers")
            check_transition(task, TaskAction.ASSIGN)
            if not task.has_accepted(target_user_id):
                raise InvalidStateError("User has not accepted this task")

            task.assigned_to_user_id = target_user_id
            task.status = status_after(task, TaskAction.ASSIGN)

        logger.info("Task %s assigned to user=%s", task_id, target_user_id)
        return task

    def complete_task(self, task_id: int, actor_id: int) -> Task:
        with self.db.transaction() as doc:
            task = _find_task(doc, task_id)

            if actor_id not in (task.assigned_to_user_id, task.poster_id):
                raise ForbiddenError("Only the helper or task owner can mark as completed")
            check_transition(task, TaskAction.COMPLETE)

            task.status = status_after(task, TaskAction.COMPLETE)
            task.completed_at = utcnow()

        logger.info("Task %s completed by user=%s", task_id, actor_id)
        return task

    def patch_task_status(self, task_id: int, status: TaskStatus | str) -> Task:
        """
        Manual override: writes `status` as-is, without ownership or
        transition checks. Assignment and acceptances are left untouched.
        """
        try:
            status = TaskStatus(status)
        except ValueError:
            raise ValidationError(f"Unknown task status: {status}")

        with self.db.transaction() as doc:
            task = _find_task(doc, task_id)
            previous = task.status
            task.status = status

        unassigned = status in (TaskStatus.OPEN, TaskStatus.PENDING_APPROVAL)
        if (unassigned and task.assigned_to_user_id is not None) or (
            status == TaskStatus.ASSIGNED and task.assigned_to_user_id is None
        ):
            logger.warning(
                "Task %s status overridden %s -> %s (assignedToUserId=%s)",
                task_id,
                previous,
                status,
                task.assigned_to_user_id,
            )
        else:
            logger.info("Task %s status overridden %s -> %s", task_id, previous, status)
        return task

    def delete_task(self, task_id: int, actor: User) -> Task:
        with self.db.transaction() as doc:
            task = _find_task(doc, task_id)
            if task.poster_id != actor.id and not actor.is_admin:
                raise ForbiddenError("Only the task owner or an admin can delete this task")
            doc.tasks.remove(task)

        logger.info("Task %s deleted by user=%s", task_id, actor.id)
        return task
