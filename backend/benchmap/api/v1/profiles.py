"""Profile endpoints: display names shown next to benches, comments and notifications."""
import logging
from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict, field_validator
from sqlalchemy.orm import Session

from benchmap.core.auth import get_current_user_id
from benchmap.core.database import get_db
from benchmap.repositories import BenchRepository, ProfileRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profiles")


class ProfileUpdate(BaseModel):
    """Request model for saving the caller's profile. Blank strings are stored as null."""

    full_name: Optional[str] = None
    country: Optional[str] = None
    date_of_birth: Optional[date] = None

    @field_validator("full_name", "country", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        if isinstance(value, str):
            return value.strip() or None
        return value


class ProfileResponse(BaseModel):
    """Response model for profile data."""

    model_config = ConfigDict(from_attributes=True)

    user_id: str
    full_name: Optional[str]
    country: Optional[str]
    date_of_birth: Optional[date]
    created_at: datetime
    updated_at: datetime
    bench_count: int = 0


def profile_response(session: Session, user_id: str) -> ProfileResponse:
    profile = ProfileRepository(session).get_by_id(user_id)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")

    response = ProfileResponse.model_validate(profile)
    response.bench_count = BenchRepository(session).count_by_user(user_id)
    return response


@router.get("/me", response_model=ProfileResponse)
def get_my_profile(
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_db),
):
    """The caller's profile with the number of benches they created."""
    return profile_response(session, user_id)


@router.put("/me", response_model=ProfileResponse)
def save_my_profile(
    request: ProfileUpdate,
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_db),
):
    """Create or update the caller's profile."""
    ProfileRepository(session).create_or_update(
        user_id=user_id,
        full_name=request.full_name,
        country=request.country,
        date_of_birth=request.date_of_birth,
    )
    session.commit()
    logger.info(f"[PROFILES] Saved profile for {user_id}")
    return profile_response(session, user_id)


@router.get("/{user_id}", response_model=ProfileResponse)
def get_profile(user_id: str, session: Session = Depends(get_db)):
    """Public profile of any user."""
    return profile_response(session, user_id)
