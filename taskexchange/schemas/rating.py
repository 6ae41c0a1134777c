from typing import Optional

from taskexchange.models.base import Base


class RatingCreate(Base):
    to_user_id: int
    score: int
    comment: Optional[str] = None
    task_id: Optional[int] = None
