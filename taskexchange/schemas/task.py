from pydantic import Field
from datetime import datetime
from typing import Optional, List

from taskexchange.models.base import Base
from taskexchange.models.task import TaskStatus, Urgency


class TaskCreate(Base):
    title: str
    description: str
    category: str
    urgency: Urgency
    location: str
    deadline: datetime
    budget: Optional[float] = None
    women_safe: bool = False
    verified_only: bool = False
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    images: List[str] = Field(default_factory=list)  # URLs from the upload collaborator


class TaskUpdateStatus(Base):
    status: TaskStatus


class TaskAssign(Base):
    user_id: int
