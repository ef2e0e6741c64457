"""Bench endpoints: map listing, creation and owner deletion."""
import logging
from datetime import datetime
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.orm import Session

from benchmap.core.auth import get_current_user_id
from benchmap.core.database import get_db
from benchmap.db.models.bench import Bench, normalize_category
from benchmap.repositories import BenchRepository, ProfileRepository
from benchmap.services.bench_listing import ListingFilters, list_benches, shape_bench
from benchmap.services.ratings import normalize_rating

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/entities")


class BenchRatingsIn(BaseModel):
    """Creator ratings; any number is accepted and normalized to 1-5."""

    accessibility: float = Field(allow_inf_nan=False)
    crowd: float = Field(allow_inf_nan=False)
    view: float = Field(allow_inf_nan=False)
    vibe: float = Field(allow_inf_nan=False)

    @field_validator("accessibility", "crowd", "view", "vibe")
    @classmethod
    def normalize(cls, value: float) -> int:
        return normalize_rating(value)


class CreateBenchRequest(BaseModel):
    """Request to place a new bench."""

    title: str
    description: str
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)
    category: Any = None
    ratings: BenchRatingsIn

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("title must not be empty")
        return value


class BenchRatings(BaseModel):
    accessibility: int
    crowd: int
    view: int
    vibe: int


class BenchResponse(BaseModel):
    """Bench as shown on the map."""

    id: str
    title: str
    description: str
    lat: float
    lng: float
    category: str
    ratings: BenchRatings
    created_at: Optional[datetime] = None
    user_id: Optional[str] = None
    created_by_name: Optional[str] = None
    community_rating: Optional[float] = None
    """Mean of all review ratings; omitted when the bench has no reviews."""


@router.get("", response_model=List[BenchResponse], response_model_exclude_unset=True)
def get_benches(
    min_community_rating: Optional[str] = Query(None, alias="minCommunityRating"),
    max_distance_km: Optional[str] = Query(None, alias="maxDistanceKm"),
    lat: Optional[str] = Query(None),
    lng: Optional[str] = Query(None),
    session: Session = Depends(get_db),
):
    """
    List every bench for the map.

    Optional filters compose:
    - minCommunityRating (0-5): community rating at least this; unreviewed benches count as 0
    - maxDistanceKm + lat + lng: within this great-circle distance of the point;
      ignored unless all three are given
    """
    filters = ListingFilters.from_query(min_community_rating, max_distance_km, lat, lng)
    return list_benches(session, filters)


@router.post(
    "",
    response_model=BenchResponse,
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
)
def create_bench(
    request: CreateBenchRequest,
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_db),
):
    """
    Create a bench owned by the authenticated user.

    The creator's current profile name is stored with the bench.
    """
    created_by_name = ProfileRepository(session).get_display_name(user_id)

    bench = BenchRepository(session).create(
        Bench(
            title=request.title,
            description=request.description,
            lat=request.lat,
            lng=request.lng,
            category=normalize_category(request.category),
            accessibility=request.ratings.accessibility,
            crowd=request.ratings.crowd,
            view=request.ratings.view,
            vibe=request.ratings.vibe,
            user_id=user_id,
            created_by_name=created_by_name,
        )
    )
    session.commit()
    session.refresh(bench)

    logger.info(f"[BENCHES] User {user_id} created bench {bench.id}")
    return shape_bench(bench, {})


@router.delete("/{bench_id}")
def delete_bench(
    bench_id: str,
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_db),
) -> dict:
    """
    Delete a bench with its reviews, comments and notifications.

    Missing benches and benches owned by someone else both yield 403.
    """
    deleted = BenchRepository(session).delete_owned(bench_id, user_id)
    if not deleted:
        session.rollback()
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Bench not found or you are not its owner",
        )

    session.commit()
    logger.info(f"[BENCHES] User {user_id} deleted bench {bench_id}")
    return {"ok": True}
