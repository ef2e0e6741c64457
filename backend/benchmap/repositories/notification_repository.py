"""Notification repository."""
from datetime import datetime, timezone
from typing import List

from sqlalchemy import and_, select
from sqlalchemy.orm import Session

from benchmap.db.models.notification import Notification
from benchmap.repositories.base_repository import BaseRepository


class NotificationRepository(BaseRepository[Notification]):
    """Repository for Notification model operations."""

    def __init__(self, session: Session):
        """Initialize notification repository.

        Args:
            session: Database session
        """
        super().__init__(Notification, session)

    def list_for_user(self, user_id: str, limit: int) -> List[Notification]:
        """Most recent notifications addressed to a user.

        Args:
            user_id: Recipient ID
            limit: Maximum number of rows

        Returns:
            Notifications, newest first; equal timestamps by descending id
        """
        result = self.session.execute(
            select(Notification)
            .filter(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc(), Notification.id.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    def mark_read(self, notification_id: str, user_id: str) -> bool:
        """Set read_at on a recipient's notification.

        A notification that is already read keeps its first read time.

        Returns:
            False if no such notification is addressed to user_id
        """
        notification = self.session.execute(
            select(Notification).filter(
                and_(Notification.id == notification_id, Notification.user_id == user_id)
            )
        ).scalar_one_or_none()
        if notification is None:
            return False

        if notification.read_at is None:
            notification.read_at = datetime.now(timezone.utc)
            self.session.flush()
        return True
