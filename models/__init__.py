"""
Models Package for the Pokemon Review API

This package exposes the Flask-SQLAlchemy ``db`` instance, every entity model,
and the database lifecycle helpers used by the application factory:

- ``init_database(app)`` binds SQLAlchemy and Flask-Migrate to the app
- ``DatabaseManager.transaction()`` wraps multi-row writes in one commit
- ``get_database_health()`` backs the ``/health/database`` endpoint

Entity relationships:
- Pokemon n-n Owner (``pokemon_owners``), Pokemon n-n Category (``pokemon_categories``)
- Country 1-n Owner, Pokemon 1-n Review, Reviewer 1-n Review
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Optional

from flask import Flask
from flask_migrate import Migrate
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.base import BaseModel, db, normalize_name
from models.owner import Country, Owner
from models.pokemon import Category, Pokemon, pokemon_categories, pokemon_owners
from models.review import Review, Reviewer

# Configure logging for database operations
logger = logging.getLogger(__name__)

# Flask-Migrate instance, bound in init_database
migrate = Migrate()


class DatabaseError(Exception):
    """Custom exception for database initialization and transaction errors."""
    pass


class DatabaseManager:
    """
    Database management utilities shared by the application factory, the seed
    routine and the health endpoints.
    """

    @staticmethod
    @contextmanager
    def transaction(session: Optional[Session] = None):
        """
        Context manager committing every write made inside the block at once.

        Args:
            session: Session to use; defaults to ``db.session``

        Yields:
            Database session for transaction operations

        Raises:
            DatabaseError: If any statement or the commit fails
        """
        session = session or db.session
        try:
            yield session
            session.commit()
        except Exception as e:
            session.rollback()
            logger.error(f"Transaction rolled back: {str(e)}")
            raise DatabaseError(f"Transaction failed: {str(e)}") from e

    @staticmethod
    def check_database_health() -> Dict[str, Any]:
        """
        Run a connectivity check against the configured database.

        Returns:
            Dict containing health check results
        """
        health_status = {
            'status': 'unhealthy',
            'database_accessible': False,
            'errors': []
        }

        try:
            result = db.session.execute(text('SELECT 1')).scalar()
            health_status['database_accessible'] = (result == 1)
            if health_status['database_accessible']:
                health_status['status'] = 'healthy'
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Database health check failed: {str(e)}")
            health_status['errors'].append(str(e))

        return health_status


def init_database(app: Flask) -> None:
    """
    Initialize Flask-SQLAlchemy and Flask-Migrate for the application.

    When ``AUTO_CREATE_SCHEMA`` is set the tables are created on startup.

    Args:
        app: Flask application instance

    Raises:
        DatabaseError: If database initialization fails
    """
    try:
        db.init_app(app)
        migrate.init_app(app, db)

        if app.config.get('AUTO_CREATE_SCHEMA'):
            create_all_tables(app)

        app.logger.info(
            f"Database initialized: {app.config.get('SQLALCHEMY_DATABASE_URI', '').split('://')[0]}"
        )

    except SQLAlchemyError as e:
        error_msg = f"Database initialization failed: {str(e)}"
        app.logger.error(error_msg)
        raise DatabaseError(error_msg) from e


def create_all_tables(app: Flask) -> None:
    """
    Create all database tables defined in models.

    Args:
        app: Flask application instance
    """
    with app.app_context():
        db.create_all()
        logger.info("Database tables created")


def get_database_health() -> Dict[str, Any]:
    """Convenience wrapper used by the health endpoint."""
    return DatabaseManager.check_database_health()


__all__ = [
    'db',
    'migrate',
    'BaseModel',
    'normalize_name',
    'Pokemon',
    'Category',
    'Country',
    'Owner',
    'Review',
    'Reviewer',
    'pokemon_owners',
    'pokemon_categories',
    'DatabaseError',
    'DatabaseManager',
    'init_database',
    'create_all_tables',
    'get_database_health',
]
