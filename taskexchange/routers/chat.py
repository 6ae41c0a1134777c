# taskexchange/routers/chat.py
from fastapi import APIRouter, Depends, status
from typing import List

from taskexchange.database import JsonDatabase, get_db
from taskexchange.core.auth import get_current_user
from taskexchange.core.exceptions import NotFoundError
from taskexchange.models.message import Message
from taskexchange.models.user import User
from taskexchange.schemas.message import MessageCreate, MessageResponse
from taskexchange.services.chat import ChatService
from taskexchange.services.users import UserService

router = APIRouter(prefix="/chat", tags=["chat"])


def _with_sender_name(message: Message, users: UserService) -> MessageResponse:
    try:
        name = users.get_user(message.from_user_id).name
    except NotFoundError:
        name = f"User {message.from_user_id}"
    return MessageResponse(**message.model_dump(), from_user_name=name)


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def send_message(
    message_in: MessageCreate,
    db: JsonDatabase = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    message = ChatService(db).add_message(
        task_id=message_in.task_id,
        from_user_id=current_user.id,
        to_user_id=message_in.to_user_id,
        text=message_in.message,
        media_type=message_in.media_type,
        media_url=message_in.media_url,
    )
    return _with_sender_name(message, UserService(db))


@router.get("/{task_id}", response_model=List[MessageResponse])
def get_messages(
    task_id: int,
    db: JsonDatabase = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Messages exchanged on a task, oldest first, with the sender's display name.
    """
    users = UserService(db)
    return [_with_sender_name(m, users) for m in ChatService(db).get_messages_for_task(task_id)]
