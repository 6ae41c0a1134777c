"""Users, profiles and rating summaries."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from taskexchange.core.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from taskexchange.database import JsonDatabase, next_id
from taskexchange.models.base import utcnow
from taskexchange.models.document import Document
from taskexchange.models.user import Profile, Role, User

logger = logging.getLogger(__name__)

# Fields a user may change on their own account
PROFILE_FIELDS = ("first_name", "last_name", "gender", "phone_number", "profile_photo")


def _find_user(doc: Document, user_id: int) -> User:
    for user in doc.users:
        if user.id == user_id:
            return user
    raise NotFoundError("User not found")


class UserService:
    def __init__(self, db: JsonDatabase) -> None:
        self.db = db

    def find_user_by_email(self, email: str) -> Optional[User]:
        wanted = email.lower()
        for user in self.db.snapshot().users:
            if user.email.lower() == wanted:
                return user
        return None

    def get_user(self, user_id: int) -> User:
        return _find_user(self.db.snapshot(), user_id)

    def list_users(self) -> List[User]:
        return self.db.snapshot().users

    def create_user(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: Role = Role.USER,
    ) -> User:
        if not name or not email or not password_hash:
            raise ValidationError("Name, email, and password are required")

        with self.db.transaction() as doc:
            wanted = email.lower()
            if any(u.email.lower() == wanted for u in doc.users):
                raise ConflictError("A user with that email already exists")

            user = User(
                id=next_id(doc, "userId"),
                name=name,
                email=email,
                password_hash=password_hash,
                role=role,
            )
            doc.users.append(user)

        logger.info("User created id=%s role=%s", user.id, user.role)
        return user

    def update_profile(self, user_id: int, actor_id: int, **updates: Any) -> User:
        """
        Update the caller's own profile fields. When both first and last
        name end up set, the display name becomes "first last".
        """
        if user_id != actor_id:
            raise ForbiddenError("You can only update your own profile")

        unknown = set(updates) - set(PROFILE_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown profile fields: {', '.join(sorted(unknown))}")

        with self.db.transaction() as doc:
            user = _find_user(doc, user_id)
            for field, value in updates.items():
                setattr(user, field, value)

            if "first_name" in updates or "last_name" in updates:
                if user.first_name and user.last_name:
                    user.name = f"{user.first_name} {user.last_name}"

        return user

    def delete_user(self, user_id: int, actor_id: int) -> User:
        if user_id == actor_id:
            raise ValidationError("Cannot delete your own account")

        with self.db.transaction() as doc:
            user = _find_user(doc, user_id)
            doc.users.remove(user)

        logger.info("User %s deleted by admin=%s", user_id, actor_id)
        return user

    # ---- profiles ----

    def get_profile(self, user_id: int) -> Optional[Profile]:
        for profile in self.db.snapshot().profiles:
            if profile.user_id == user_id:
                return profile
        return None

    def upsert_profile(self, user_id: int, data: Dict[str, Any]) -> Profile:
        """Merge `data` into the user's profile record, creating it on first use."""
        data = {k: v for k, v in data.items() if k not in ("id", "user_id", "userId", "updated_at", "updatedAt")}

        with self.db.transaction() as doc:
            _find_user(doc, user_id)
            existing = next((p for p in doc.profiles if p.user_id == user_id), None)

            if existing is None:
                profile = Profile(id=next_id(doc, "profileId"), user_id=user_id, **data)
                doc.profiles.append(profile)
            else:
                merged = {**existing.model_dump(exclude={"updated_at"}), **data, "updated_at": utcnow()}
                profile = Profile(**merged)
                doc.profiles[doc.profiles.index(existing)] = profile

        return profile
