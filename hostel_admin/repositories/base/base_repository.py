"""
Base repository with standardized CRUD operations and error handling.

Repositories never commit on their own inside a service unit of work:
services pass ``commit=False`` and the service transaction decides.
"""

from contextlib import contextmanager
from typing import Any, Dict, Generic, Iterator, List, Optional, Type, TypeVar

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session

from hostel_admin.core.exceptions import (
    EntityAlreadyExistsError,
    RepositoryError,
    ResourceNotFoundError,
)
from hostel_admin.core.logging import get_logger
from hostel_admin.models.base import BaseModel
from hostel_admin.repositories.base.pagination import PaginatedResult, paginate

logger = get_logger(__name__)

# Type variable for model classes
ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """
    Generic repository with standardized operations.

    Provides CRUD operations and error handling for all domain repositories.
    """

    #: Human readable name used in not-found messages
    resource_name: Optional[str] = None

    def __init__(self, model: Type[ModelType], db: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            db: Database session
        """
        self.model = model
        self.db = db

    @property
    def name(self) -> str:
        return self.resource_name or self.model.__name__

    # ==================== Writes ====================

    @contextmanager
    def _writing(self, action: str, commit: bool) -> Iterator[None]:
        """
        Map database errors raised by a write.

        Unique and foreign key violations become ``EntityAlreadyExistsError``;
        other failures become ``RepositoryError``. The session is rolled back
        only when this call owns the commit.
        """
        try:
            yield
        except IntegrityError as e:
            if commit:
                self.db.rollback()
            raise EntityAlreadyExistsError(
                f"{self.name} conflicts with existing data",
                {"reason": str(e.orig)},
            ) from e
        except SQLAlchemyError as e:
            if commit:
                self.db.rollback()
            raise RepositoryError(f"{action} {self.name} failed: {e}") from e

    def _finish(self, entity: Optional[ModelType], commit: bool) -> None:
        if commit:
            self.db.commit()
            if entity is not None:
                self.db.refresh(entity)
        else:
            self.db.flush()

    def create(self, entity: ModelType, commit: bool = True) -> ModelType:
        """Add and flush (or commit) a new entity."""
        with self._writing("Create", commit):
            self.db.add(entity)
            self._finish(entity, commit)
        logger.debug(f"Created {self.model.__name__} id={entity.id}")
        return entity

    def update(self, entity: ModelType, data: Dict[str, Any], commit: bool = True) -> ModelType:
        """Apply ``data`` to an already loaded entity; unknown keys are skipped."""
        with self._writing("Update", commit):
            for key, value in data.items():
                if hasattr(entity, key):
                    setattr(entity, key, value)
            self._finish(entity, commit)
        logger.debug(f"Updated {self.model.__name__} id={entity.id}")
        return entity

    def delete(self, entity: ModelType, commit: bool = True) -> None:
        entity_id = entity.id
        with self._writing("Delete", commit):
            self.db.delete(entity)
            self._finish(None, commit)
        logger.debug(f"Deleted {self.model.__name__} id={entity_id}")

    # ==================== Reads ====================

    def find_by_id(self, id: Any) -> Optional[ModelType]:
        try:
            return self.db.get(self.model, id)
        except SQLAlchemyError as e:
            raise RepositoryError(f"Loading {self.name} {id} failed: {e}") from e

    def get_by_id(self, id: Any) -> ModelType:
        """Like ``find_by_id`` but raises ``ResourceNotFoundError`` when missing."""
        entity = self.find_by_id(id)
        if entity is None:
            raise ResourceNotFoundError(self.name, id)
        return entity

    def _apply_criteria(self, query: Query, criteria: Optional[Dict[str, Any]]) -> Query:
        for key, value in (criteria or {}).items():
            if value is None or not hasattr(self.model, key):
                continue
            column = getattr(self.model, key)
            if isinstance(value, (list, tuple, set)):
                query = query.filter(column.in_(value))
            else:
                query = query.filter(column == value)
        return query

    def find_by_criteria(
        self,
        criteria: Dict[str, Any],
        order_by: Optional[List[str]] = None,
    ) -> List[ModelType]:
        """
        Find entities matching criteria.

        ``None`` values are ignored; ordering fields prefixed with ``-``
        sort descending.
        """
        try:
            query = self._apply_criteria(self.db.query(self.model), criteria)
            for field in order_by or ["id"]:
                if field.startswith("-"):
                    query = query.order_by(getattr(self.model, field[1:]).desc())
                else:
                    query = query.order_by(getattr(self.model, field))
            return query.all()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Find by criteria failed: {str(e)}") from e

    def find_one_by_criteria(self, criteria: Dict[str, Any]) -> Optional[ModelType]:
        try:
            return self._apply_criteria(self.db.query(self.model), criteria).first()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Find one failed: {str(e)}") from e

    def count(self, criteria: Optional[Dict[str, Any]] = None) -> int:
        try:
            query = self._apply_criteria(self.db.query(func.count(self.model.id)), criteria)
            return query.scalar() or 0
        except SQLAlchemyError as e:
            raise RepositoryError(f"Count failed: {str(e)}") from e

    def exists(self, criteria: Dict[str, Any]) -> bool:
        return self.count(criteria) > 0

    def paginate_query(self, query: Query, page: int, per_page: int) -> PaginatedResult:
        try:
            return paginate(query, page, per_page)
        except SQLAlchemyError as e:
            raise RepositoryError(f"Pagination failed: {str(e)}") from e
