"""
Base Model Infrastructure for the Pokemon Review API

This module owns the Flask-SQLAlchemy instance shared by every model, the
abstract ``BaseModel`` all entities inherit from, and the name normalization
used for natural-key comparisons.

Key Features:
- Single ``db`` instance bound to the application in ``init_database``
- ``BaseModel`` with the integer primary key and ``__repr__``
- ``normalize_name`` applied before every uniqueness comparison
- Trimming validators so names are persisted without surrounding whitespace
- SQLite foreign key enforcement so referential constraints hold in tests
"""

from typing import Optional

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event
from sqlalchemy.engine import Engine

# Global SQLAlchemy instance (initialized by the application factory)
db = SQLAlchemy()


def normalize_name(value: Optional[str]) -> str:
    """
    Normalize a natural key for comparison.

    Args:
        value: Raw name, title or None

    Returns:
        str: Lower-cased value without surrounding whitespace ('' for None)
    """
    if value is None:
        return ''
    return value.strip().lower()


def strip_value(value: Optional[str]) -> Optional[str]:
    """Trim a string field, leaving None untouched."""
    if value is None:
        return None
    return value.strip()


@event.listens_for(Engine, 'connect')
def enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """Turn on foreign key enforcement for SQLite connections."""
    module_name = type(dbapi_connection).__module__
    if module_name.startswith('sqlite3'):
        cursor = dbapi_connection.cursor()
        cursor.execute('PRAGMA foreign_keys=ON')
        cursor.close()


class BaseModel(db.Model):
    """
    Base model class providing common functionality for all entities.

    Subclasses declare their own ``__tablename__`` and columns:

        class Category(BaseModel):
            __tablename__ = 'categories'
            name = db.Column(db.String(100), nullable=False)
    """

    # Mark as abstract so SQLAlchemy doesn't create a table for this class
    __abstract__ = True

    id = db.Column(db.Integer, primary_key=True)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id})>"
