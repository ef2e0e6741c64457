"""Notification fan-out for comments, replies and reviews.

Dispatch runs after the triggering comment or review is committed and is
best-effort: failures are logged and reported in the returned
DispatchResult, never raised to the request handler.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from sqlalchemy.orm import Session

from benchmap.db.models.notification import Notification, NotificationType
from benchmap.repositories import BenchRepository, CommentRepository, NotificationRepository

logger = logging.getLogger(__name__)


def resolve_recipients(
    actor_id: str,
    owner_id: Optional[str],
    parent_author_id: Optional[str] = None,
) -> List[str]:
    """Users to notify about an action, in delivery order.

    The bench owner comes first. For replies the parent comment's author is
    added unless they are the owner. Nobody is notified about their own action.

    Args:
        actor_id: User who commented or reviewed
        owner_id: Owner of the bench, if any
        parent_author_id: Author of the comment being replied to, if any

    Returns:
        Distinct recipient ids
    """
    recipients = []
    if owner_id and owner_id != actor_id:
        recipients.append(owner_id)
    if parent_author_id and parent_author_id != actor_id and parent_author_id != owner_id:
        recipients.append(parent_author_id)
    return recipients


@dataclass
class DispatchResult:
    """Outcome of a best-effort dispatch. Callers may ignore it."""

    recipients: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def dispatch_notifications(
    session: Session,
    actor_id: str,
    bench_id: str,
    notification_type: NotificationType,
    comment_id: Optional[str] = None,
    parent_comment_id: Optional[str] = None,
) -> DispatchResult:
    """Look up who to notify about an action and store their notifications.

    Must be called after the triggering write has been committed; any failure
    here rolls back only the notification rows.

    Args:
        session: Database session
        actor_id: User who performed the action
        bench_id: Bench the action happened on
        notification_type: COMMENT for comments and replies, REVIEW for reviews
        comment_id: New comment id (comment notifications only)
        parent_comment_id: Parent comment id when the action is a reply

    Returns:
        DispatchResult with the notified users or the error message
    """
    try:
        owner_id = BenchRepository(session).get_owner_id(bench_id)
        parent_author_id = None
        if parent_comment_id:
            parent_author_id = CommentRepository(session).get_author_id(parent_comment_id)

        recipients = resolve_recipients(actor_id, owner_id, parent_author_id)
        notification_repo = NotificationRepository(session)
        for recipient_id in recipients:
            notification_repo.create(
                Notification(
                    user_id=recipient_id,
                    type=notification_type.value,
                    bench_id=bench_id,
                    from_user_id=actor_id,
                    comment_id=comment_id if notification_type == NotificationType.COMMENT else None,
                )
            )
        session.commit()
    except Exception as e:
        session.rollback()
        logger.exception(
            f"[NOTIFY] Failed to notify about {notification_type.value} on bench {bench_id} by {actor_id}"
        )
        return DispatchResult(error=str(e))

    if recipients:
        logger.info(f"[NOTIFY] {notification_type.value} on bench {bench_id}: notified {len(recipients)} user(s)")
    return DispatchResult(recipients=recipients)
