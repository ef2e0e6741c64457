"""Notification model."""
import enum
import uuid as uuid_pkg
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Index, String

from benchmap.core.database import Base


class NotificationType(str, enum.Enum):
    COMMENT = "comment"
    REVIEW = "review"


class Notification(Base):
    """Tells a user that someone commented on or reviewed their bench, or replied to them."""

    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid_pkg.uuid4()))
    user_id = Column(String(255), nullable=False)  # recipient
    type = Column(String(20), nullable=False)  # 'comment' or 'review'
    bench_id = Column(String(36), ForeignKey("benches.id", ondelete="CASCADE"), nullable=False)
    from_user_id = Column(String(255), nullable=True)
    comment_id = Column(String(36), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    read_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (Index("idx_notifications_user_created", "user_id", "created_at"),)
