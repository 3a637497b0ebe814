"""
Pytest Configuration and Fixtures for the Pokemon Review API

Provides a session-wide Flask application backed by a temporary SQLite file,
a test client sharing that application context (so handlers and tests use
the same scoped session), the CLI runner, and factory fixtures. Every table
is emptied after each test.
"""

import os
import sys
import tempfile
from pathlib import Path

import pytest

# Add project root to Python path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from flask.testing import FlaskClient

from app import create_app
from config import TestingConfig
from models import db
from tests.factories import (
    CategoryFactory,
    CountryFactory,
    OwnerFactory,
    PokemonFactory,
    ReviewFactory,
    ReviewerFactory,
)


# =============================================================================
# APPLICATION FIXTURES
# =============================================================================

@pytest.fixture(scope='session')
def test_config():
    """
    Testing configuration pointing at a throwaway SQLite database file.

    Yields:
        TestingConfig subclass with the temporary database URI
    """
    fd, test_db_path = tempfile.mkstemp(suffix='.db')
    os.close(fd)

    class CustomTestingConfig(TestingConfig):
        SQLALCHEMY_DATABASE_URI = f'sqlite:///{test_db_path}'

    yield CustomTestingConfig

    if os.path.exists(test_db_path):
        os.unlink(test_db_path)


@pytest.fixture(scope='session')
def app(test_config):
    """
    Flask application with the testing configuration and created tables.

    The application context stays pushed for the whole session.
    """
    app = create_app(config_object=test_config)

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app) -> FlaskClient:
    """Flask test client for HTTP request testing."""
    with app.test_client() as client:
        yield client


@pytest.fixture
def runner(app):
    """Flask CLI test runner for command testing."""
    return app.test_cli_runner()


# =============================================================================
# DATABASE FIXTURES
# =============================================================================

@pytest.fixture
def db_session(app):
    """The scoped session shared with request handlers."""
    return db.session


@pytest.fixture(autouse=True)
def cleanup_database(app):
    """Empty every table after each test, children before parents."""
    yield

    db.session.rollback()
    for table in reversed(db.metadata.sorted_tables):
        db.session.execute(table.delete())
    db.session.commit()
    db.session.remove()


# =============================================================================
# FACTORY FIXTURES
# =============================================================================

@pytest.fixture
def country_factory(app):
    return CountryFactory


@pytest.fixture
def category_factory(app):
    return CategoryFactory


@pytest.fixture
def owner_factory(app):
    return OwnerFactory


@pytest.fixture
def pokemon_factory(app):
    return PokemonFactory


@pytest.fixture
def reviewer_factory(app):
    return ReviewerFactory


@pytest.fixture
def review_factory(app):
    return ReviewFactory


@pytest.fixture
def owned_pokemon(owner_factory, category_factory, pokemon_factory):
    """A Pokemon linked to one owner and one category."""
    owner = owner_factory()
    category = category_factory()
    pokemon = pokemon_factory(owners=[owner], categories=[category])
    return {'pokemon': pokemon, 'owner': owner, 'category': category}
