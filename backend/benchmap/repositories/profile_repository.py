"""Profile repository for display names."""
from datetime import date, datetime, timezone
from typing import Dict, Iterable, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from benchmap.db.models.profile import Profile
from benchmap.repositories.base_repository import BaseRepository


class ProfileRepository(BaseRepository[Profile]):
    """Repository for Profile model operations."""

    def __init__(self, session: Session):
        """Initialize profile repository.

        Args:
            session: Database session
        """
        super().__init__(Profile, session)

    def get_display_name(self, user_id: str) -> Optional[str]:
        profile = self.get_by_id(user_id)
        return profile.display_name if profile else None

    def get_display_names(self, user_ids: Iterable[str]) -> Dict[str, Optional[str]]:
        """Map user id to display name for every user that has a profile."""
        ids = list({uid for uid in user_ids if uid})
        if not ids:
            return {}
        result = self.session.execute(select(Profile).filter(Profile.user_id.in_(ids)))
        return {profile.user_id: profile.display_name for profile in result.scalars()}

    def create_or_update(
        self,
        user_id: str,
        full_name: Optional[str],
        country: Optional[str],
        date_of_birth: Optional[date],
    ) -> Profile:
        """Create the user's profile or overwrite its fields.

        Returns:
            Profile instance (created or updated)
        """
        profile = self.get_by_id(user_id)

        if profile:
            profile.full_name = full_name
            profile.country = country
            profile.date_of_birth = date_of_birth
            profile.updated_at = datetime.now(timezone.utc)
            self.session.flush()
            self.session.refresh(profile)
        else:
            profile = Profile(
                user_id=user_id,
                full_name=full_name,
                country=country,
                date_of_birth=date_of_birth,
            )
            self.create(profile)

        return profile
