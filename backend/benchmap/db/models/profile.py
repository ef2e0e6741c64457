"""Profile model holding display names."""
from datetime import datetime, timezone

from sqlalchemy import Column, Date, DateTime, String

from benchmap.core.database import Base


class Profile(Base):
    """Public profile of an auth-provider user."""

    __tablename__ = "profiles"

    user_id = Column(String(255), primary_key=True)
    full_name = Column(String(255), nullable=True)
    country = Column(String(100), nullable=True)
    date_of_birth = Column(Date, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    @property
    def display_name(self):
        """Trimmed full name, or None when blank."""
        name = (self.full_name or "").strip()
        return name or None

    def __repr__(self):
        return f"<Profile {self.user_id}>"
