"""
Base Repository Implementation for the Pokemon Review API

This module provides the data access foundation shared by every entity
repository. A repository wraps one model class and one SQLAlchemy session and
exposes existence checks, lookups, listing and the write operations the
request handlers orchestrate.

Key Features:
- Constructor injection of the SQLAlchemy session, defaulting to ``db.session``
- "Not found" is represented as ``None`` or an empty list, never an exception
- Write operations report success as a boolean; store faults are rolled back
  and logged so handlers can answer 500 without leaking detail
- Natural-key lookups compare ``normalize_name(value)`` against the stored
  key columns the models maintain
"""

import logging
from typing import Generic, List, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models import db, normalize_name

# Configure logging for repository operations
logger = logging.getLogger(__name__)

ModelType = TypeVar('ModelType')


class BaseRepository(Generic[ModelType]):
    """
    Generic repository over a single model class.

    Subclasses set ``model`` and, when the natural key is a single column,
    the ``key_column`` holding its normalized form:

        class CategoryRepository(BaseRepository[Category]):
            model = Category
            key_column = 'name_key'
    """

    model: Type[ModelType] = None
    key_column: Optional[str] = None

    def __init__(self, db_session: Optional[Session] = None) -> None:
        """
        Initialize the repository with an optional injected session.

        Args:
            db_session: Session to use. If None, the Flask-SQLAlchemy scoped
                        session is used, which resolves per application context.
        """
        self.db_session = db_session if db_session is not None else db.session

    @property
    def entity_name(self) -> str:
        return self.model.__name__

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def exists(self, entity_id: int) -> bool:
        """Return True when a row with ``entity_id`` exists."""
        statement = select(self.model.id).where(self.model.id == entity_id)
        return self.db_session.execute(statement).first() is not None

    def get(self, entity_id: int) -> Optional[ModelType]:
        """Return the entity with ``entity_id`` or None."""
        return self.db_session.get(self.model, entity_id)

    def get_by_name(self, name: Optional[str], exclude_id: Optional[int] = None) -> Optional[ModelType]:
        """
        Find an entity whose natural key matches ``name`` after normalization.

        Args:
            name: Candidate name or title
            exclude_id: Id to ignore, used by updates so an entity never
                        conflicts with itself

        Returns:
            The first matching entity or None
        """
        column = getattr(self.model, self.key_column)
        statement = select(self.model).where(column == normalize_name(name))
        return self._first(statement, exclude_id)

    def list(self) -> List[ModelType]:
        """Return every entity in insertion order."""
        statement = select(self.model).order_by(self.model.id)
        return list(self.db_session.scalars(statement).all())

    def _first(self, statement, exclude_id: Optional[int] = None) -> Optional[ModelType]:
        if exclude_id is not None:
            statement = statement.where(self.model.id != exclude_id)
        return self.db_session.scalars(statement.order_by(self.model.id)).first()

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create(self, entity: ModelType) -> bool:
        """Persist a new entity; its id is populated on success."""
        self.db_session.add(entity)
        return self.save(f"create {self.entity_name}")

    def update(self, entity: ModelType) -> Optional[ModelType]:
        """
        Apply a detached full replacement to the stored row.

        Returns:
            The persistent entity on success, None when the write failed
        """
        merged = self.db_session.merge(entity)
        if not self.save(f"update {self.entity_name} {entity.id}"):
            return None
        return merged

    def delete(self, entity: ModelType) -> bool:
        """Remove the entity."""
        entity_id = entity.id
        self.db_session.delete(entity)
        return self.save(f"delete {self.entity_name} {entity_id}")

    def save(self, operation: str = 'save') -> bool:
        """
        Commit pending changes.

        Args:
            operation: Description used in the failure log line

        Returns:
            bool: True when the commit succeeded
        """
        try:
            self.db_session.commit()
            return True
        except SQLAlchemyError as e:
            self.db_session.rollback()
            logger.error(f"Failed to {operation}: {str(e)}")
            return False

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(model={self.entity_name})>"
