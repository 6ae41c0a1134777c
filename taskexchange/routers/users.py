from fastapi import APIRouter, Body, Depends
from typing import Any, Dict, List

from taskexchange.database import JsonDatabase, get_db
from taskexchange.core.auth import get_current_user
from taskexchange.core.exceptions import ForbiddenError, NotFoundError
from taskexchange.models.rating import Review
from taskexchange.models.user import Profile, User
from taskexchange.schemas.user import UserProfileUpdate, UserResponse, UserSummaryResponse
from taskexchange.services.ratings import RatingService
from taskexchange.services.users import UserService

router = APIRouter(prefix="/users", tags=["users"])


def _summary(user: User, db: JsonDatabase) -> UserSummaryResponse:
    avg_rating, rating_count = RatingService(db).rating_summary(user.id)
    return UserSummaryResponse(
        **UserResponse.from_user(user).model_dump(),
        avg_rating=avg_rating,
        rating_count=rating_count
    )


@router.get("/{user_id}", response_model=UserSummaryResponse)
def get_user(user_id: int, db: JsonDatabase = Depends(get_db)):
    return _summary(UserService(db).get_user(user_id), db)


@router.get("/{user_id}/summary", response_model=UserSummaryResponse)
def get_user_summary(user_id: int, db: JsonDatabase = Depends(get_db)):
    return _summary(UserService(db).get_user(user_id), db)


@router.get("/{user_id}/reviews", response_model=List[Review])
def get_user_reviews(user_id: int, db: JsonDatabase = Depends(get_db)):
    UserService(db).get_user(user_id)
    return RatingService(db).reviews_for_user(user_id)


@router.patch("/{user_id}", response_model=UserSummaryResponse)
def update_profile(
    user_id: int,
    profile_in: UserProfileUpdate,
    db: JsonDatabase = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    updated = UserService(db).update_profile(
        user_id, current_user.id, **profile_in.model_dump(exclude_unset=True)
    )
    return _summary(updated, db)


@router.get("/{user_id}/profile", response_model=Profile)
def get_profile(user_id: int, db: JsonDatabase = Depends(get_db)):
    profile = UserService(db).get_profile(user_id)
    if profile is None:
        raise NotFoundError("Profile not found")
    return profile


@router.put("/{user_id}/profile", response_model=Profile)
def upsert_profile(
    user_id: int,
    data: Dict[str, Any] = Body(...),
    db: JsonDatabase = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if user_id != current_user.id:
        raise ForbiddenError("You can only update your own profile")
    return UserService(db).upsert_profile(user_id, data)
