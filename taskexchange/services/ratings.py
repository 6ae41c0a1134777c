"""Ratings and reviews (append-only)."""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from taskexchange.core.exceptions import NotFoundError, ValidationError
from taskexchange.database import JsonDatabase, next_id
from taskexchange.models.rating import Rating, Review

logger = logging.getLogger(__name__)


class RatingService:
    def __init__(self, db: JsonDatabase) -> None:
        self.db = db

    def add_rating(
        self,
        *,
        from_user_id: int,
        to_user_id: int,
        score: int,
        comment: Optional[str] = None,
        task_id: Optional[int] = None,
    ) -> Tuple[Rating, Optional[Review]]:
        """
        Record a rating, plus a review when a non-blank comment comes with it.
        Both are written in the same transaction.
        """
        if isinstance(score, bool) or not isinstance(score, int) or not 1 <= score <= 5:
            raise ValidationError("Score must be between 1 and 5")
        if to_user_id == from_user_id:
            raise ValidationError("You cannot rate yourself")

        comment = (comment or "").strip()

        with self.db.transaction() as doc:
            if not any(u.id == to_user_id for u in doc.users):
                raise NotFoundError("User to rate not found")

            rating = Rating(
                id=next_id(doc, "ratingId"),
                from_user_id=from_user_id,
                to_user_id=to_user_id,
                score=score,
                task_id=task_id,
            )
            doc.ratings.append(rating)

            review = None
            if comment:
                review = Review(
                    id=next_id(doc, "reviewId"),
                    from_user_id=from_user_id,
                    to_user_id=to_user_id,
                    score=score,
                    comment=comment,
                    task_id=task_id,
                )
                doc.reviews.append(review)

        logger.info(
            "Rating %s: user=%s -> user=%s score=%s review=%s",
            rating.id,
            from_user_id,
            to_user_id,
            score,
            review.id if review else None,
        )
        return rating, review

    def ratings_for_user(self, user_id: int) -> List[Rating]:
        return [r for r in self.db.snapshot().ratings if r.to_user_id == user_id]

    def reviews_for_user(self, user_id: int) -> List[Review]:
        return [r for r in self.db.snapshot().reviews if r.to_user_id == user_id]

    def rating_summary(self, user_id: int) -> Tuple[Optional[float], int]:
        """(average score or None, number of ratings) received by the user."""
        ratings = self.ratings_for_user(user_id)
        if not ratings:
            return None, 0
        return sum(r.score for r in ratings) / len(ratings), len(ratings)
