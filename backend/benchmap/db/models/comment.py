"""Comment model with optional parent for replies."""
import uuid as uuid_pkg
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Index, String, Text

from benchmap.core.database import Base


class BenchComment(Base):
    """Comment on a bench. A reply carries the id of the comment it answers."""

    __tablename__ = "bench_comments"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid_pkg.uuid4()))
    bench_id = Column(String(36), ForeignKey("benches.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(String(255), nullable=False)
    body = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    # No foreign key: a reply may point at a comment that is not stored
    parent_id = Column(String(36), nullable=True, index=True)

    __table_args__ = (Index("idx_bench_comments_bench_created", "bench_id", "created_at"),)
