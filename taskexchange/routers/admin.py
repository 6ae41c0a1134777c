from fastapi import APIRouter, Depends
from typing import List

from taskexchange.database import JsonDatabase, get_db
from taskexchange.core.auth import get_current_admin
from taskexchange.models.task import Task
from taskexchange.models.user import User
from taskexchange.schemas.user import UserResponse
from taskexchange.services.task_store import TaskStore
from taskexchange.services.users import UserService

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/users", response_model=List[UserResponse])
def list_users(
    db: JsonDatabase = Depends(get_db),
    admin: User = Depends(get_current_admin)
):
    return [UserResponse.from_user(u) for u in UserService(db).list_users()]


@router.delete("/users/{user_id}")
def delete_user(
    user_id: int,
    db: JsonDatabase = Depends(get_db),
    admin: User = Depends(get_current_admin)
):
    UserService(db).delete_user(user_id, admin.id)
    return {"message": "User deleted successfully"}


# Includes expired tasks
@router.get("/tasks", response_model=List[Task])
def list_all_tasks(
    db: JsonDatabase = Depends(get_db),
    admin: User = Depends(get_current_admin)
):
    return TaskStore(db).list_all_tasks()


@router.delete("/tasks/{task_id}")
def delete_task(
    task_id: int,
    db: JsonDatabase = Depends(get_db),
    admin: User = Depends(get_current_admin)
):
    TaskStore(db).delete_task(task_id, admin)
    return {"message": "Task deleted successfully"}
