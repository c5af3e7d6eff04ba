# roomshare/repositories/base_repository.py
"""
Base Repository for the roomshare backend

Repositories own queries; services own business rules and decide when a
unit of work is committed. Writes here only flush, except inside
``transaction()``.
"""

from contextlib import contextmanager
import logging
from typing import Any, Generic, Iterator, List, Optional, Type, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session

from ..core.exceptions import RepositoryException

T = TypeVar("T")

logger = logging.getLogger(__name__)


class BaseRepository(Generic[T]):
    """
    Typed data access for one ORM model.

    Attributes:
        db: SQLAlchemy session shared with the calling service
        model: Mapped class handled by this repository
    """

    def __init__(self, db: Session, model: Type[T]):
        self.db = db
        self.model = model
        self.logger = logging.getLogger(f"{__name__}.{model.__name__}")

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """
        Commit on success, roll back on any error.

        SQLAlchemy errors are re-raised as-is so callers can tell a unique
        index violation or a serialization failure from other failures.
        """
        try:
            yield self.db
            self.db.commit()
        except SQLAlchemyError as exc:
            self.logger.error("Repository transaction failed: %s", exc)
            self.db.rollback()
            raise
        except Exception:
            self.db.rollback()
            raise

    def get_by_id(self, id: str, load_relationships: bool = True) -> Optional[T]:
        try:
            query = self.db.query(self.model).filter(self.model.id == id)
            if load_relationships:
                query = self._apply_eager_loading(query)
            return query.first()
        except SQLAlchemyError as e:
            self.logger.error(f"Error loading {self.model.__name__} {id}: {str(e)}")
            raise RepositoryException(f"Failed to load {self.model.__name__}: {str(e)}")

    def create(self, **kwargs: Any) -> T:
        """
        Add a new row and flush it so its id and constraints are settled.

        ``IntegrityError`` propagates untouched: for bookings it means another
        request took the same slot.
        """
        try:
            entity = self.model(**kwargs)
            self.db.add(entity)
            self.db.flush()
            return entity
        except IntegrityError as exc:
            self.logger.warning("Integrity error creating %s: %s", self.model.__name__, exc)
            raise
        except SQLAlchemyError as e:
            self.logger.error(f"Error creating {self.model.__name__}: {str(e)}")
            raise RepositoryException(f"Failed to create {self.model.__name__}: {str(e)}")

    def delete(self, id: str) -> bool:
        """Remove a row. Returns False when nothing matched."""
        entity = self.get_by_id(id, load_relationships=False)
        if entity is None:
            return False
        try:
            self.db.delete(entity)
            self.db.flush()
            return True
        except SQLAlchemyError as e:
            self.logger.error(f"Error deleting {self.model.__name__} {id}: {str(e)}")
            raise RepositoryException(f"Failed to delete {self.model.__name__}: {str(e)}")

    def exists(self, **kwargs: Any) -> bool:
        try:
            return self.db.query(self.model.id).filter_by(**kwargs).first() is not None
        except SQLAlchemyError as e:
            self.logger.error(f"Error checking {self.model.__name__} existence: {str(e)}")
            raise RepositoryException(f"Failed to check existence: {str(e)}")

    def find_by(self, **kwargs: Any) -> List[T]:
        """Rows whose columns equal the given values."""
        try:
            return self.db.query(self.model).filter_by(**kwargs).all()
        except SQLAlchemyError as e:
            self.logger.error(f"Error querying {self.model.__name__}: {str(e)}")
            raise RepositoryException(f"Failed to query {self.model.__name__}: {str(e)}")

    def _apply_eager_loading(self, query: Query) -> Query:
        """Hook for subclasses that need relationships loaded with the row."""
        return query
