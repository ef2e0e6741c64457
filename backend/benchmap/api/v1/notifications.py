"""Notification inbox endpoints."""
import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from benchmap.core.auth import get_current_user_id
from benchmap.core.config import settings
from benchmap.core.database import get_db
from benchmap.repositories import BenchRepository, NotificationRepository, ProfileRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications")


class NotificationResponse(BaseModel):
    id: str
    user_id: str
    type: str
    bench_id: str
    from_user_id: Optional[str] = None
    comment_id: Optional[str] = None
    created_at: datetime
    read_at: Optional[datetime] = None
    bench_title: Optional[str] = None
    from_user_name: Optional[str] = None


@router.get("", response_model=List[NotificationResponse])
def get_notifications(
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_db),
):
    """The caller's latest notifications, newest first, with bench titles and actor names."""
    rows = NotificationRepository(session).list_for_user(user_id, settings.NOTIFICATIONS_LIMIT)

    titles = BenchRepository(session).get_titles(list({n.bench_id for n in rows}))
    names = ProfileRepository(session).get_display_names(n.from_user_id for n in rows)

    return [
        NotificationResponse(
            id=n.id,
            user_id=n.user_id,
            type=n.type,
            bench_id=n.bench_id,
            from_user_id=n.from_user_id,
            comment_id=n.comment_id,
            created_at=n.created_at,
            read_at=n.read_at,
            bench_title=titles.get(n.bench_id),
            from_user_name=names.get(n.from_user_id) if n.from_user_id else None,
        )
        for n in rows
    ]


@router.patch("/{notification_id}/read")
def mark_notification_read(
    notification_id: str,
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_db),
) -> dict:
    """Mark one of the caller's notifications as read."""
    if not NotificationRepository(session).mark_read(notification_id, user_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Notification not found or not addressed to you",
        )

    session.commit()
    return {"ok": True}
