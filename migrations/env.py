"""
Alembic environment for the Pokemon Review API.

Runs inside the application context that ``flask db`` pushes, so the
database URL and metadata come straight from Flask-SQLAlchemy.

Key Features:
- Model metadata discovered from the shared ``db`` instance
- Online and offline migration execution modes
- Batch mode on SQLite so ALTER-style operations work there too
"""

import logging
from logging.config import fileConfig

from alembic import context
from flask import current_app

# Alembic Config object for accessing configuration values
config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

logger = logging.getLogger('alembic.env')


def get_engine():
    return current_app.extensions['migrate'].db.engine


def get_database_url() -> str:
    """Database URL of the running application, with the password kept intact."""
    return get_engine().url.render_as_string(hide_password=False).replace('%', '%%')


def get_metadata():
    """Metadata holding every model table."""
    metadata = current_app.extensions['migrate'].db.metadata
    logger.info(f"Discovered {len(metadata.tables)} tables in metadata: {sorted(metadata.tables)}")
    return metadata


config.set_main_option('sqlalchemy.url', get_database_url())
target_metadata = get_metadata()


def run_migrations_offline() -> None:
    """
    Run migrations in 'offline' mode.

    Emits SQL for the configured URL without opening a connection.
    """
    context.configure(
        url=config.get_main_option('sqlalchemy.url'),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )

    logger.info("Starting offline migration execution")
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """
    Run migrations in 'online' mode against the application's engine.

    Empty autogenerate revisions are discarded.
    """

    def process_revision_directives(context, revision, directives):
        if getattr(config.cmd_opts, 'autogenerate', False):
            script = directives[0]
            if script.upgrade_ops.is_empty():
                directives[:] = []
                logger.info("No changes in schema detected")

    connectable = get_engine()

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            render_as_batch=connection.dialect.name == 'sqlite',
            process_revision_directives=process_revision_directives,
        )

        logger.info("Starting online migration execution")
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
