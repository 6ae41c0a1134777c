from datetime import datetime
from typing import Optional

from pydantic import Field

from taskexchange.models.base import Base, utcnow


class Rating(Base):
    id: int
    from_user_id: int
    to_user_id: int
    score: int = Field(..., ge=1, le=5)
    task_id: Optional[int] = None
    created_at: datetime = Field(default_factory=utcnow)


class Review(Base):
    id: int
    from_user_id: int
    to_user_id: int
    score: int = Field(..., ge=1, le=5)
    comment: str
    task_id: Optional[int] = None
    created_at: datetime = Field(default_factory=utcnow)
