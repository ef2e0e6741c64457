"""Base repository shared by the bench, review, comment, notification and profile repositories."""
from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy.orm import Session

from benchmap.core.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Primary-key lookup, insert and delete for one mapped table."""

    def __init__(self, model: Type[ModelType], session: Session):
        """Bind the repository to a model and the request's session.

        Args:
            model: Mapped class the repository serves
            session: Request-scoped database session
        """
        self.model = model
        self.session = session

    def get_by_id(self, id: Any) -> Optional[ModelType]:
        """Row with the given primary key, or None."""
        return self.session.get(self.model, id)

    def create(self, obj: ModelType) -> ModelType:
        """Insert a row and load its server and default values.

        Args:
            obj: New, unsaved instance

        Returns:
            The same instance, flushed and refreshed
        """
        self.session.add(obj)
        self.session.flush()
        self.session.refresh(obj)
        return obj

    def delete(self, obj: ModelType) -> None:
        """Delete a row within the current transaction."""
        self.session.delete(obj)
        self.session.flush()
