from datetime import datetime
from typing import Optional

from pydantic import Field

from taskexchange.models.base import Base, utcnow


class Message(Base):
    id: int
    task_id: int
    from_user_id: int
    to_user_id: int
    message: str = ""
    media_type: Optional[str] = None  # "image" / "video"
    media_url: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
