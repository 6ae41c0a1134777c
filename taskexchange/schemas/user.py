from pydantic import BaseModel, EmailStr, Field
from typing import Optional

from taskexchange.models.base import Base
from taskexchange.models.user import Role, User


class UserCreate(Base):
    email: EmailStr
    name: str = Field(..., min_length=2, max_length=100)
    password: str = Field(..., min_length=8, max_length=128)


class UserLogin(Base):
    email: EmailStr
    password: str


class UserResponse(Base):
    id: int
    name: str
    email: str
    role: Role
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    gender: Optional[str] = None
    phone_number: Optional[str] = None
    profile_photo: Optional[str] = None

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        # password_hash is dropped as an unknown field
        return cls.model_validate(user.model_dump())


class UserSummaryResponse(UserResponse):
    avg_rating: Optional[float] = None
    rating_count: int = 0


class UserProfileUpdate(Base):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    gender: Optional[str] = None
    phone_number: Optional[str] = None
    profile_photo: Optional[str] = None


class Token(BaseModel):
    access_token: str
    token_type: str
    user: UserResponse
