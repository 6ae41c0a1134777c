from datetime import datetime
from enum import StrEnum
from typing import List, Optional

from pydantic import Field, field_validator

from taskexchange.models.base import Base, as_utc, utcnow


class TaskStatus(StrEnum):
    OPEN = "open"
    PENDING_APPROVAL = "pending_approval"  # has acceptances waiting for the poster
    ASSIGNED = "assigned"
    COMPLETED = "completed"


class Urgency(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Acceptance(Base):
    user_id: int
    accepted_at: datetime = Field(default_factory=utcnow)


class Task(Base):
    id: int
    title: str
    description: str
    category: str
    urgency: Urgency
    location: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    budget: Optional[float] = None
    women_safe: bool = False
    verified_only: bool = False
    deadline: Optional[datetime] = None
    images: List[str] = Field(default_factory=list)

    status: TaskStatus = TaskStatus.OPEN
    poster_id: int                                # Who posted it
    assigned_to_user_id: Optional[int] = None     # Helper picked by the poster
    acceptances: List[Acceptance] = Field(default_factory=list)

    created_at: datetime = Field(default_factory=utcnow)
    completed_at: Optional[datetime] = None

    @field_validator("deadline", "created_at", "completed_at")
    @classmethod
    def _attach_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value) if value is not None else None

    def has_accepted(self, user_id: int) -> bool:
        return any(a.user_id == user_id for a in self.acceptances)

    def is_expired(self, now: datetime) -> bool:
        if self.deadline is None:
            return False
        return self.deadline <= now
