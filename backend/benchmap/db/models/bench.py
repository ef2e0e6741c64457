"""Bench model: a user-placed point of interest on the map."""
import uuid as uuid_pkg
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, Index, Integer, String, Text

from benchmap.core.database import Base

BENCH_CATEGORIES = ("mountain", "forest", "city", "beach", "other")
DEFAULT_CATEGORY = "other"


def normalize_category(value) -> str:
    """Known category keys pass through, anything else becomes "other"."""
    if isinstance(value, str) and value in BENCH_CATEGORIES:
        return value
    return DEFAULT_CATEGORY


class Bench(Base):
    """Bench with its creator's four 1-5 ratings."""

    __tablename__ = "benches"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid_pkg.uuid4()))
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    lat = Column(Float, nullable=False)
    lng = Column(Float, nullable=False)
    category = Column(String(20), nullable=False, default=DEFAULT_CATEGORY)

    # Creator ratings, set once at creation
    accessibility = Column(Integer, nullable=False)
    crowd = Column(Integer, nullable=False)
    view = Column(Integer, nullable=False)
    vibe = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    # Nullable for rows created before ownership was tracked
    user_id = Column(String(255), nullable=True, index=True)
    created_by_name = Column(String(255), nullable=True)

    __table_args__ = (Index("idx_benches_created_at", "created_at"),)

    def __repr__(self):
        return f"<Bench {self.id} {self.title!r}>"
