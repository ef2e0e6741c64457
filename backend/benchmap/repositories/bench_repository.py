"""Bench repository."""
from typing import List, Optional

from sqlalchemy import and_, delete, func, select
from sqlalchemy.orm import Session

from benchmap.db.models.bench import Bench
from benchmap.db.models.comment import BenchComment
from benchmap.db.models.notification import Notification
from benchmap.db.models.review import BenchReview
from benchmap.repositories.base_repository import BaseRepository


class BenchRepository(BaseRepository[Bench]):
    """Repository for Bench model operations."""

    def __init__(self, session: Session):
        """Initialize bench repository.

        Args:
            session: Database session
        """
        super().__init__(Bench, session)

    def list_newest_first(self) -> List[Bench]:
        """Every bench, most recently created first."""
        result = self.session.execute(select(Bench).order_by(Bench.created_at.desc()))
        return list(result.scalars().all())

    def get_owner_id(self, bench_id: str) -> Optional[str]:
        """Owner of a bench, or None for unknown or ownerless benches."""
        result = self.session.execute(select(Bench.user_id).filter(Bench.id == bench_id))
        return result.scalar_one_or_none()

    def get_titles(self, bench_ids: List[str]) -> dict:
        """Map bench id to title for the given ids."""
        if not bench_ids:
            return {}
        result = self.session.execute(select(Bench.id, Bench.title).filter(Bench.id.in_(bench_ids)))
        return {row.id: row.title for row in result}

    def count_by_user(self, user_id: str) -> int:
        result = self.session.execute(select(func.count()).select_from(Bench).filter(Bench.user_id == user_id))
        return result.scalar_one()

    def delete_owned(self, bench_id: str, user_id: str) -> bool:
        """Delete a bench owned by user_id together with its reviews, comments and notifications.

        Args:
            bench_id: Bench ID
            user_id: Actor that must own the bench

        Returns:
            True if a bench was deleted, False if it does not exist or belongs to someone else
        """
        bench = self.session.execute(
            select(Bench).filter(and_(Bench.id == bench_id, Bench.user_id == user_id))
        ).scalar_one_or_none()
        if bench is None:
            return False

        for model in (Notification, BenchComment, BenchReview):
            self.session.execute(delete(model).where(model.bench_id == bench_id))
        self.delete(bench)
        return True
