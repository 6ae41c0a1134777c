from fastapi import APIRouter, Depends, status

from taskexchange.database import JsonDatabase, get_db
from taskexchange.core.auth import get_current_user
from taskexchange.models.rating import Rating
from taskexchange.models.user import User
from taskexchange.schemas.rating import RatingCreate
from taskexchange.services.ratings import RatingService

router = APIRouter(prefix="/ratings", tags=["ratings"])


@router.post("", response_model=Rating, status_code=status.HTTP_201_CREATED)
def rate_user(
    rating_in: RatingCreate,
    db: JsonDatabase = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    rating, _review = RatingService(db).add_rating(
        from_user_id=current_user.id,
        to_user_id=rating_in.to_user_id,
        score=rating_in.score,
        comment=rating_in.comment,
        task_id=rating_in.task_id,
    )
    return rating
