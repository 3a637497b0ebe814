"""
Pokemon Review API Application Factory

This module provides the Flask application factory for the Pokemon Review API.
It loads environment configuration, sets up logging, binds Flask-SQLAlchemy and
Flask-Migrate, registers the ``/api`` blueprint with its flask-restx
namespaces, installs JSON error handlers and health endpoints, and exposes the
``seed-data`` and ``init-db`` CLI commands.

Usage:
    python app.py              # development server
    python app.py seeddata     # seed an empty database, then serve
    flask --app app seed-data  # seed only
"""

import logging
import os
import sys
import time
import traceback
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

import click
from flask import Flask, g, jsonify, request
from flask.logging import default_handler
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix

# Environment and configuration management
from dotenv import load_dotenv

# Application components
from blueprints import BlueprintRegistrationError, register_all_blueprints
from blueprints.api import create_error_response
from config import get_config
from models import create_all_tables, db, get_database_health, init_database
from seed import seed_data

# Configure module-level logging
logger = logging.getLogger(__name__)

CONSOLE_HANDLER_NAME = 'pokemon_review_console'
FILE_HANDLER_NAME = 'pokemon_review_file'


class ApplicationError(Exception):
    """Raised when the application factory cannot build a working app."""

    def __init__(self, message: str, error_code: str = None, details: Dict[str, Any] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or 'APPLICATION_ERROR'
        self.details = details or {}


def load_environment_variables() -> None:
    """
    Load environment variables from .env files using python-dotenv.

    Environment Search Order (later files never override earlier values):
        1. System environment variables
        2. .env.local (local development overrides)
        3. .env.{FLASK_ENV} (environment-specific settings)
        4. .env (default environment settings)
    """
    flask_env = os.environ.get('FLASK_ENV', 'development')

    loaded_files = []
    for env_file in ('.env.local', f'.env.{flask_env}', '.env'):
        if Path(env_file).exists():
            load_dotenv(env_file, override=False)
            loaded_files.append(env_file)

    if loaded_files:
        logger.info(f"Environment variables loaded from: {', '.join(loaded_files)}")
    else:
        logger.debug("No .env files found, using system environment variables only")


def configure_logging(app: Flask) -> None:
    """
    Configure logging for the application and every module logger.

    Handlers go on the root logger so ``logging.getLogger(__name__)`` loggers
    in models, repositories and blueprints share them. Re-running the factory
    replaces the handlers instead of stacking duplicates.

    Args:
        app: Flask application instance
    """
    app.logger.removeHandler(default_handler)

    log_level_str = app.config.get('LOG_LEVEL', 'INFO')
    log_level = getattr(logging, log_level_str.upper(), logging.INFO)
    formatter = logging.Formatter(
        app.config.get('LOG_FORMAT', '%(asctime)s [%(levelname)s] %(name)s: %(message)s')
    )

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if handler.get_name() in (CONSOLE_HANDLER_NAME, FILE_HANDLER_NAME):
            root_logger.removeHandler(handler)
            handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.set_name(CONSOLE_HANDLER_NAME)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)
    root_logger.setLevel(log_level)

    # Configure file logging outside debug and testing
    if not app.debug and not app.testing:
        logs_dir = Path(app.config.get('LOG_DIR', 'logs'))
        logs_dir.mkdir(exist_ok=True)

        file_handler = RotatingFileHandler(
            logs_dir / 'pokemon_review.log',
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=10
        )
        file_handler.set_name(FILE_HANDLER_NAME)
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        root_logger.addHandler(file_handler)

    logger.info(f"Logging configured (level: {log_level_str})")


def register_error_handlers(app: Flask) -> None:
    """
    Register JSON error handlers for requests outside the resource handlers.

    Resource handlers produce their own envelopes; these cover unknown
    routes, unsupported methods, malformed requests and uncaught faults.
    The 500 paths roll back the database session.

    Args:
        app: Flask application instance
    """

    @app.errorhandler(400)
    def bad_request(error):
        logger.warning(f"Bad request: {request.url} - {error}")
        return create_error_response(
            message='The request could not be understood by the server',
            error_code='BAD_REQUEST',
            status_code=400
        )

    @app.errorhandler(404)
    def not_found(error):
        logger.debug(f"Route not found: {request.url}")
        return create_error_response(
            message='The requested resource was not found',
            error_code='NOT_FOUND',
            status_code=404
        )

    @app.errorhandler(405)
    def method_not_allowed(error):
        return create_error_response(
            message=f"Method {request.method} is not allowed for this resource",
            error_code='METHOD_NOT_ALLOWED',
            status_code=405
        )

    @app.errorhandler(500)
    def internal_error(error):
        logger.error(f"Internal server error: {error}")
        db.session.rollback()
        return create_error_response(
            message='An unexpected error occurred',
            error_code='INTERNAL_ERROR',
            status_code=500
        )

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        if isinstance(error, HTTPException):
            return error
        logger.error(f"Unexpected error: {error}", exc_info=True)
        db.session.rollback()
        return create_error_response(
            message='An unexpected error occurred',
            error_code='INTERNAL_ERROR',
            status_code=500
        )


def register_health_endpoints(app: Flask) -> None:
    """
    Register liveness and database health endpoints.

    Args:
        app: Flask application instance
    """

    @app.route('/health')
    def health():
        return jsonify({'status': 'healthy', 'service': 'pokemon-review-api'}), 200

    @app.route('/health/database')
    def database_health():
        health_status = get_database_health()
        status_code = 200 if health_status['status'] == 'healthy' else 503
        return jsonify(health_status), status_code


def register_cli_commands(app: Flask) -> None:
    """
    Register ``flask`` CLI commands for schema creation and seeding.

    Args:
        app: Flask application instance
    """

    @app.cli.command('init-db')
    def init_db_command():
        """Create all database tables."""
        create_all_tables(app)
        click.echo('Database tables created.')

    @app.cli.command('seed-data')
    def seed_data_command():
        """Populate an empty database with sample data."""
        if seed_data():
            click.echo('Sample data inserted.')
        else:
            click.echo('Database already contains data; nothing inserted.')


def configure_request_context(app: Flask) -> None:
    """
    Request timing and response headers.

    Args:
        app: Flask application instance
    """

    @app.before_request
    def before_request():
        g.request_start_time = time.time()

    @app.after_request
    def after_request(response):
        if hasattr(g, 'request_start_time'):
            request_duration = time.time() - g.request_start_time
            response.headers['X-Response-Time'] = f"{request_duration:.3f}s"

            if request_duration > 1.0:
                logger.warning(
                    f"Slow request: {request.method} {request.url} "
                    f"took {request_duration:.3f}s"
                )

        response.headers['X-Content-Type-Options'] = 'nosniff'
        return response


def create_app(config_name: Optional[str] = None, config_object: Optional[type] = None) -> Flask:
    """
    Flask application factory.

    Args:
        config_name: Environment configuration name ('development', 'testing',
                     'production'). If None, determined from FLASK_CONFIG/FLASK_ENV.
        config_object: Configuration class used instead of ``config_name``,
                       for tests that need a tailored database URI

    Returns:
        Flask: Fully configured Flask application instance

    Raises:
        ApplicationError: If critical application initialization fails
    """
    try:
        load_environment_variables()

        app = Flask(__name__)

        # Configure proxy handling for production deployment
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

        config_class = config_object or get_config(config_name)
        app.config.from_object(config_class)

        configure_logging(app)
        config_class.init_app(app)
        logger.info(f"Flask application created with {config_class.__name__} configuration")

        init_database(app)
        register_error_handlers(app)
        configure_request_context(app)
        register_health_endpoints(app)
        register_cli_commands(app)
        register_all_blueprints(app)

        logger.info(f"Application ready (Debug: {app.debug}, Testing: {app.testing})")
        return app

    except BlueprintRegistrationError as e:
        logger.error(f"Blueprint registration failed: {e.message}")
        raise ApplicationError(
            f"Critical blueprint registration failed: {e.message}",
            error_code="BLUEPRINT_REGISTRATION_FAILED",
            details={'blueprint_name': e.blueprint_name}
        ) from e
    except ApplicationError:
        raise
    except Exception as e:
        logger.error(f"Unexpected error during application factory initialization: {e}")
        raise ApplicationError(
            f"Application factory initialization failed: {str(e)}",
            error_code="FACTORY_INIT_ERROR",
            details={'error': str(e), 'traceback': traceback.format_exc()}
        ) from e


def should_seed(argv) -> bool:
    """True when the process was started with the ``seeddata`` argument."""
    return len(argv) == 2 and argv[1].lower() == 'seeddata'


# Development Server Entry Point
if __name__ == '__main__':
    try:
        dev_app = create_app()

        if should_seed(sys.argv):
            with dev_app.app_context():
                seed_data()

        dev_app.run(
            host=os.environ.get('FLASK_HOST', '0.0.0.0'),
            port=int(os.environ.get('FLASK_PORT', 5000)),
            debug=dev_app.debug,
            use_reloader=False
        )

    except ApplicationError as e:
        logger.error(f"Development server startup failed: {e.message}")
        sys.exit(1)
