from typing import Optional

from taskexchange.models.base import Base
from taskexchange.models.message import Message


class MessageCreate(Base):
    task_id: int
    to_user_id: int
    message: Optional[str] = None
    media_type: Optional[str] = None
    media_url: Optional[str] = None


class MessageResponse(Message):
    from_user_name: str
