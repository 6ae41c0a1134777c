from fastapi import APIRouter, Depends, status
from typing import List, Optional

from taskexchange.database import JsonDatabase, get_db
from taskexchange.core.auth import get_current_user
from taskexchange.models.task import Task
from taskexchange.models.user import User
from taskexchange.schemas.task import TaskCreate, TaskUpdateStatus, TaskAssign
from taskexchange.services.task_store import TaskStore

router = APIRouter(prefix="/tasks", tags=["tasks"])


# Public: browse tasks with basic filters
@router.get("", response_model=List[Task])
def list_tasks(
    search: Optional[str] = None,
    category: Optional[str] = None,
    urgency: Optional[str] = None,
    db: JsonDatabase = Depends(get_db),
):
    return TaskStore(db).list_tasks(search=search, category=category, urgency=urgency)


@router.post("", response_model=Task, status_code=status.HTTP_201_CREATED)
def create_task(
    task_in: TaskCreate,
    db: JsonDatabase = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return TaskStore(db).create_task(poster_id=current_user.id, **task_in.model_dump())


# Tasks I posted
@router.get("/mine", response_model=List[Task])
def get_my_tasks(
    db: JsonDatabase = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return TaskStore(db).list_tasks_by_poster(current_user.id)


# Tasks I was assigned to
@router.get("/accepted", response_model=List[Task])
def get_my_assigned_tasks(
    db: JsonDatabase = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return TaskStore(db).list_tasks_by_assignee(current_user.id)


@router.get("/{task_id}", response_model=Task)
def get_task(task_id: int, db: JsonDatabase = Depends(get_db)):
    return TaskStore(db).get_task(task_id)


# Manual status override, no ownership or transition checks
@router.patch("/{task_id}", response_model=Task)
def patch_task_status(
    task_id: int,
    status_in: TaskUpdateStatus,
    db: JsonDatabase = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return TaskStore(db).patch_task_status(task_id, status_in.status)


@router.delete("/{task_id}", response_model=Task)
def delete_task(
    task_id: int,
    db: JsonDatabase = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return TaskStore(db).delete_task(task_id, current_user)


@router.post("/{task_id}/accept", response_model=Task)
def accept_task(
    task_id: int,
    db: JsonDatabase = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return TaskStore(db).accept_task(task_id, current_user.id)


@router.post("/{task_id}/assign", response_model=Task)
def assign_task(
    task_id: int,
    assign_in: TaskAssign,
    db: JsonDatabase = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return TaskStore(db).assign_task(task_id, current_user.id, assign_in.user_id)


@router.post("/{task_id}/complete", response_model=Task)
def complete_task(
    task_id: int,
    db: JsonDatabase = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return TaskStore(db).complete_task(task_id, current_user.id)
