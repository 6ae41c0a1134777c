from datetime import datetime
from enum import StrEnum
from typing import Optional

from pydantic import Field

from taskexchange.models.base import Base, utcnow


class Role(StrEnum):
    USER = "user"
    ADMIN = "admin"


class User(Base):
    id: int
    name: str
    email: str
    password_hash: str
    role: Role = Role.USER

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    gender: Optional[str] = None
    phone_number: Optional[str] = None
    profile_photo: Optional[str] = None

    created_at: datetime = Field(default_factory=utcnow)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


class Profile(Base):
    """Free-form profile data, one record per user."""

    model_config = {"extra": "allow"}

    id: int
    user_id: int
    updated_at: datetime = Field(default_factory=utcnow)
