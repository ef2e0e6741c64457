"""Comment repository."""
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from benchmap.db.models.comment import BenchComment
from benchmap.repositories.base_repository import BaseRepository


class CommentRepository(BaseRepository[BenchComment]):
    """Repository for BenchComment model operations."""

    def __init__(self, session: Session):
        """Initialize comment repository.

        Args:
            session: Database session
        """
        super().__init__(BenchComment, session)

    def list_for_bench(self, bench_id: str) -> List[BenchComment]:
        """Comments on a bench, oldest first. Equal timestamps are ordered by id."""
        result = self.session.execute(
            select(BenchComment)
            .filter(BenchComment.bench_id == bench_id)
            .order_by(BenchComment.created_at.asc(), BenchComment.id.asc())
        )
        return list(result.scalars().all())

    def get_author_id(self, comment_id: str) -> Optional[str]:
        """Author of a comment, or None when the comment does not exist."""
        result = self.session.execute(select(BenchComment.user_id).filter(BenchComment.id == comment_id))
        return result.scalar_one_or_none()
