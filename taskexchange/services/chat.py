"""Per-task chat messages."""

from __future__ import annotations

import logging
from typing import List, Optional

from taskexchange.core.exceptions import ValidationError
from taskexchange.database import JsonDatabase, next_id
from taskexchange.models.message import Message

logger = logging.getLogger(__name__)


class ChatService:
    def __init__(self, db: JsonDatabase) -> None:
        self.db = db

    def add_message(
        self,
        *,
        task_id: int,
        from_user_id: int,
        to_user_id: int,
        text: Optional[str] = None,
        media_type: Optional[str] = None,
        media_url: Optional[str] = None,
    ) -> Message:
        if not task_id or not to_user_id:
            raise ValidationError("Task id and toUserId are required")
        if not text and not media_url:
            raise ValidationError("Message or media is required")

        with self.db.transaction() as doc:
            message = Message(
                id=next_id(doc, "messageId"),
                task_id=task_id,
                from_user_id=from_user_id,
                to_user_id=to_user_id,
                message=(text or "").strip(),
                media_type=media_type or None,
                media_url=media_url or None,
            )
            doc.messages.append(message)

        logger.debug("Message %s on task=%s from=%s to=%s", message.id, task_id, from_user_id, to_user_id)
        return message

    def get_messages_for_task(self, task_id: int) -> List[Message]:
        """Messages of one task, oldest first."""
        messages = [m for m in self.db.snapshot().messages if m.task_id == task_id]
        return sorted(messages, key=lambda m: m.created_at)
