"""Star review endpoints."""
import logging
import math
from datetime import datetime
from typing import Optional, Union

from fastapi import APIRouter, Depends
from pydantic import BaseModel, StrictFloat, StrictInt, field_validator
from sqlalchemy.orm import Session

from benchmap.core.auth import get_current_user_id, get_optional_user_id
from benchmap.core.database import get_db
from benchmap.db.models.notification import NotificationType
from benchmap.repositories import ReviewRepository
from benchmap.services.notifications import dispatch_notifications
from benchmap.services.ratings import normalize_rating

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/entities/{bench_id}/reviews")


class ReviewRequest(BaseModel):
    """Rating submission. Any finite number is clamped to 1-5 and rounded."""

    rating: Union[StrictInt, StrictFloat]

    @field_validator("rating")
    @classmethod
    def finite(cls, value: Union[int, float]) -> Union[int, float]:
        # Integers of any size are finite and clamp to the 1-5 range
        if isinstance(value, float) and not math.isfinite(value):
            raise ValueError("rating must be a finite number")
        return value


class MyReview(BaseModel):
    rating: int
    created_at: datetime


class MyReviewResponse(BaseModel):
    myReview: Optional[MyReview] = None


class ReviewSavedResponse(BaseModel):
    ok: bool = True
    rating: int


@router.get("", response_model=MyReviewResponse)
def get_my_review(
    bench_id: str,
    user_id: Optional[str] = Depends(get_optional_user_id),
    session: Session = Depends(get_db),
):
    """The caller's review of this bench; null for anonymous callers or no review."""
    if user_id is None:
        return MyReviewResponse(myReview=None)

    review = ReviewRepository(session).get_for_user(bench_id, user_id)
    if review is None:
        return MyReviewResponse(myReview=None)
    return MyReviewResponse(myReview=MyReview(rating=review.rating, created_at=review.created_at))


@router.post("", response_model=ReviewSavedResponse)
def upsert_review(
    bench_id: str,
    request: ReviewRequest,
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_db),
):
    """
    Rate a bench. Submitting again replaces the caller's previous rating.

    The bench owner is notified on every submission by someone else.
    """
    rating = normalize_rating(request.rating)

    ReviewRepository(session).upsert(bench_id, user_id, rating)
    session.commit()
    logger.info(f"[REVIEWS] User {user_id} rated bench {bench_id}: {rating}")

    dispatch_notifications(
        session,
        actor_id=user_id,
        bench_id=bench_id,
        notification_type=NotificationType.REVIEW,
    )
    return ReviewSavedResponse(rating=rating)
