"""Tests for notification recipients and dispatch."""
import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from benchmap.db.models import Bench, BenchComment, Notification, NotificationType
from benchmap.repositories import NotificationRepository
from benchmap.services.notifications import dispatch_notifications, resolve_recipients


class TestResolveRecipients:
    """Pure recipient rules."""

    def test_comment_by_stranger_notifies_owner(self):
        assert resolve_recipients("actor", "owner") == ["owner"]

    def test_own_bench_notifies_nobody(self):
        assert resolve_recipients("owner", "owner") == []

    def test_ownerless_bench_notifies_nobody(self):
        assert resolve_recipients("actor", None) == []

    def test_reply_notifies_owner_and_parent_author(self):
        assert resolve_recipients("actor", "owner", "parent") == ["owner", "parent"]

    def test_reply_to_owner_notifies_once(self):
        assert resolve_recipients("actor", "owner", "owner") == ["owner"]

    def test_reply_to_self_skips_parent(self):
        assert resolve_recipients("actor", "owner", "actor") == ["owner"]

    def test_owner_replying_to_commenter_notifies_commenter(self):
        assert resolve_recipients("owner", "owner", "commenter") == ["commenter"]

    def test_missing_parent_author(self):
        assert resolve_recipients("actor", "owner", None) == ["owner"]


@pytest.fixture
def bench(db: Session) -> Bench:
    bench = Bench(
        title="Hilltop",
        description="",
        lat=1.0,
        lng=2.0,
        category="mountain",
        accessibility=3,
        crowd=3,
        view=5,
        vibe=4,
        user_id="owner",
    )
    db.add(bench)
    db.commit()
    db.refresh(bench)
    return bench


def stored(db: Session):
    return list(db.execute(select(Notification)).scalars().all())


def test_dispatch_stores_comment_notifications(db: Session, bench: Bench):
    parent = BenchComment(bench_id=bench.id, user_id="parent", body="first")
    db.add(parent)
    db.commit()

    result = dispatch_notifications(
        db,
        actor_id="actor",
        bench_id=bench.id,
        notification_type=NotificationType.COMMENT,
        comment_id="new-comment",
        parent_comment_id=parent.id,
    )

    assert result.ok
    assert result.recipients == ["owner", "parent"]
    rows = stored(db)
    assert {n.user_id for n in rows} == {"owner", "parent"}
    assert all(n.type == "comment" and n.comment_id == "new-comment" for n in rows)
    assert all(n.from_user_id == "actor" and n.read_at is None for n in rows)


def test_dispatch_review_has_no_comment_id(db: Session, bench: Bench):
    result = dispatch_notifications(
        db,
        actor_id="actor",
        bench_id=bench.id,
        notification_type=NotificationType.REVIEW,
        comment_id="ignored",
    )

    assert result.recipients == ["owner"]
    (row,) = stored(db)
    assert row.type == "review"
    assert row.comment_id is None


def test_dispatch_unknown_bench_notifies_nobody(db: Session):
    result = dispatch_notifications(
        db, actor_id="actor", bench_id="nope", notification_type=NotificationType.REVIEW
    )
    assert result.ok
    assert result.recipients == []


def test_dispatch_failure_is_reported_not_raised(db: Session, bench: Bench, monkeypatch):
    def boom(self, obj):
        raise OperationalError("INSERT INTO notifications", {}, Exception("storage down"))

    monkeypatch.setattr(NotificationRepository, "create", boom)

    result = dispatch_notifications(
        db, actor_id="actor", bench_id=bench.id, notification_type=NotificationType.REVIEW
    )

    assert not result.ok
    assert "storage down" in result.error
    assert result.recipients == []
    assert stored(db) == []
