"""
Flask Blueprint Package Initialization

Centralized blueprint registration for the application factory. Each entry in
``BLUEPRINTS`` names a module and the factory function that builds a fresh
blueprint for every application instance.

Blueprint Organization:
- api: ``/api`` resource namespaces (Pokemon, Category, Country, Owner,
  Review, Reviewer) and the Swagger UI at ``/api/docs/``
"""

import logging
from dataclasses import dataclass
from importlib import import_module
from typing import Any, Dict, List

from flask import Flask

# Configure logging for blueprint registration operations
logger = logging.getLogger(__name__)


@dataclass
class BlueprintConfig:
    """Registration metadata for one blueprint."""
    name: str
    module_path: str
    factory: str
    description: str = ""


class BlueprintRegistrationError(Exception):
    """Custom exception for blueprint registration failures."""

    def __init__(self, message: str, blueprint_name: str = None, error_code: str = None):
        super().__init__(message)
        self.message = message
        self.blueprint_name = blueprint_name
        self.error_code = error_code or 'BLUEPRINT_REGISTRATION_ERROR'


BLUEPRINTS: List[BlueprintConfig] = [
    BlueprintConfig(
        name='api',
        module_path='blueprints.api',
        factory='create_api_blueprint',
        description='Pokemon review resources',
    ),
]


def register_all_blueprints(app: Flask) -> Dict[str, Any]:
    """
    Build and register every configured blueprint on ``app``.

    Args:
        app: Flask application instance

    Returns:
        Dictionary mapping blueprint names to their URL prefixes

    Raises:
        BlueprintRegistrationError: If a blueprint cannot be built or registered
    """
    registered = {}

    for config in BLUEPRINTS:
        try:
            module = import_module(config.module_path)
            blueprint = getattr(module, config.factory)()
            app.register_blueprint(blueprint)
            registered[config.name] = blueprint.url_prefix
            logger.debug(f"Registered blueprint '{config.name}' at {blueprint.url_prefix}")
        except (ImportError, AttributeError, ValueError) as e:
            logger.error(f"Blueprint registration error for '{config.name}': {e}")
            raise BlueprintRegistrationError(
                f"Failed to register blueprint '{config.name}': {e}",
                blueprint_name=config.name
            ) from e

    logger.info(f"Registered {len(registered)} blueprint(s): {', '.join(registered)}")
    return registered


__all__ = [
    'BlueprintConfig',
    'BlueprintRegistrationError',
    'register_all_blueprints',
]
