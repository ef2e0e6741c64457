"""Star review model, one per (bench, user)."""
import uuid as uuid_pkg
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint

from benchmap.core.database import Base


class BenchReview(Base):
    """A user's single 1-5 rating of a bench."""

    __tablename__ = "bench_reviews"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid_pkg.uuid4()))
    bench_id = Column(String(36), ForeignKey("benches.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(255), nullable=False)
    rating = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    __table_args__ = (UniqueConstraint("bench_id", "user_id", name="uq_bench_reviews_bench_user"),)
