"""Review repository with per-user upsert."""
import uuid as uuid_pkg
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from sqlalchemy import and_, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from benchmap.db.models.review import BenchReview
from benchmap.repositories.base_repository import BaseRepository

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class ReviewRepository(BaseRepository[BenchReview]):
    """Repository for BenchReview model operations."""

    def __init__(self, session: Session):
        """Initialize review repository.

        Args:
            session: Database session
        """
        super().__init__(BenchReview, session)

    def get_for_user(self, bench_id: str, user_id: str) -> Optional[BenchReview]:
        """Get the review a user left on a bench.

        Args:
            bench_id: Bench ID
            user_id: Reviewer ID

        Returns:
            BenchReview or None if the user has not reviewed the bench
        """
        result = self.session.execute(
            select(BenchReview).filter(and_(BenchReview.bench_id == bench_id, BenchReview.user_id == user_id))
        )
        return result.scalar_one_or_none()

    def list_ratings(self) -> List[Tuple[str, int]]:
        """(bench_id, rating) pairs for every stored review."""
        result = self.session.execute(select(BenchReview.bench_id, BenchReview.rating))
        return [(row.bench_id, row.rating) for row in result]

    def upsert(self, bench_id: str, user_id: str, rating: int) -> None:
        """Insert the user's review or overwrite its rating.

        The (bench_id, user_id) unique constraint arbitrates concurrent
        submissions; the last write wins. created_at keeps the first value.

        Args:
            bench_id: Bench ID
            user_id: Reviewer ID
            rating: Normalized rating 1-5
        """
        dialect = self.session.get_bind().dialect.name
        insert = _UPSERT_DIALECTS.get(dialect)

        if insert is None:
            existing = self.get_for_user(bench_id, user_id)
            if existing:
                existing.rating = rating
                self.session.flush()
            else:
                self.create(BenchReview(bench_id=bench_id, user_id=user_id, rating=rating))
            return

        stmt = insert(BenchReview).values(
            id=str(uuid_pkg.uuid4()),
            bench_id=bench_id,
            user_id=user_id,
            rating=rating,
            created_at=datetime.now(timezone.utc),
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["bench_id", "user_id"],
            set_={"rating": stmt.excluded.rating},
        )
        self.session.execute(stmt)
