"""Comment and reply endpoints."""
import logging
from datetime import datetime
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, field_validator
from sqlalchemy.orm import Session

from benchmap.core.auth import get_current_user_id
from benchmap.core.database import get_db
from benchmap.db.models.comment import BenchComment
from benchmap.db.models.notification import NotificationType
from benchmap.repositories import CommentRepository, ProfileRepository
from benchmap.services.comment_tree import build_threads
from benchmap.services.notifications import dispatch_notifications

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/entities/{bench_id}/comments")


class CreateCommentRequest(BaseModel):
    """Request to post a comment, or a reply when parent_id is set."""

    body: str
    parent_id: Optional[str] = None

    @field_validator("body")
    @classmethod
    def body_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("comment body must not be empty")
        return value

    @field_validator("parent_id", mode="before")
    @classmethod
    def blank_parent_is_none(cls, value):
        if not isinstance(value, str):
            return None
        return value.strip() or None


class CommentResponse(BaseModel):
    id: str
    bench_id: str
    user_id: str
    body: str
    created_at: datetime
    author_name: Optional[str] = None
    parent_id: Optional[str] = None


class CommentThreadResponse(CommentResponse):
    """Top-level comment with every descendant in one flat list."""

    replies: List[CommentResponse]
    reply_count: int


def comment_to_dict(comment: BenchComment, names: Dict[str, Optional[str]]) -> dict:
    return {
        "id": comment.id,
        "bench_id": comment.bench_id,
        "user_id": comment.user_id,
        "body": comment.body,
        "created_at": comment.created_at,
        "author_name": names.get(comment.user_id),
        "parent_id": comment.parent_id,
    }


def load_comments(session: Session, bench_id: str) -> List[dict]:
    """Comments of a bench, oldest first, with author display names."""
    comments = CommentRepository(session).list_for_bench(bench_id)
    names = ProfileRepository(session).get_display_names(c.user_id for c in comments)
    return [comment_to_dict(c, names) for c in comments]


@router.get("", response_model=List[CommentResponse])
def get_comments(bench_id: str, session: Session = Depends(get_db)):
    """List a bench's comments and replies as a flat, chronological list."""
    return load_comments(session, bench_id)


@router.get("/tree", response_model=List[CommentThreadResponse])
def get_comment_threads(bench_id: str, session: Session = Depends(get_db)):
    """
    List a bench's comments grouped for display.

    Each top-level comment carries all of its descendants flattened
    depth-first, plus their count. Replies whose parent is missing are
    shown as top-level comments.
    """
    return build_threads(load_comments(session, bench_id))


@router.post("", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
def create_comment(
    bench_id: str,
    request: CreateCommentRequest,
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_db),
):
    """
    Post a comment or reply.

    The bench owner and, for replies, the parent comment's author are
    notified. parent_id is not checked against existing comments.
    """
    comment = CommentRepository(session).create(
        BenchComment(
            bench_id=bench_id,
            user_id=user_id,
            body=request.body,
            parent_id=request.parent_id,
        )
    )
    session.commit()
    session.refresh(comment)
    logger.info(f"[COMMENTS] User {user_id} commented {comment.id} on bench {bench_id} (parent={comment.parent_id})")

    names = {user_id: ProfileRepository(session).get_display_name(user_id)}
    response = comment_to_dict(comment, names)

    dispatch_notifications(
        session,
        actor_id=user_id,
        bench_id=bench_id,
        notification_type=NotificationType.COMMENT,
        comment_id=comment.id,
        parent_comment_id=comment.parent_id,
    )
    return response
