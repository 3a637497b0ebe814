"""
REST API Blueprint for the Pokemon Review API

This module builds the ``/api`` blueprint and holds the plumbing shared by the
six resource namespaces:

- ``create_api_blueprint()`` creates a fresh blueprint and flask-restx ``Api``
  per application, so the factory can be called repeatedly (tests do)
- ``ApiError`` and its subclasses map handler preconditions to status codes
- ``handle_handler_exceptions`` turns those errors, marshmallow validation
  errors and unexpected faults into the JSON error envelope
- ``RepositoryResource`` wires each Resource with the repositories it calls

Status-code contract: 200 read, 201 create (with ``Location``), 204 write,
400 malformed input or id, 404 missing entity, 409 natural-key conflict,
500 store or internal fault.
"""

import logging
import uuid
from datetime import datetime, timezone
from functools import wraps
from typing import Any, Dict, Optional, Tuple

from flask import Blueprint, Response, request, url_for
from flask_restx import Api, Resource
from marshmallow import ValidationError

from models import db

# Configure logging for API operations
logger = logging.getLogger(__name__)

# Largest value an INTEGER primary key column holds on every supported backend
MAX_ID = 2 ** 31 - 1


# =============================================================================
# ERROR TAXONOMY
# =============================================================================

class ApiError(Exception):
    """Base error raised by request handlers to short-circuit with a status code."""

    status_code = 500
    error_code = 'INTERNAL_ERROR'

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class BadRequestError(ApiError):
    """Malformed input or invalid id."""
    status_code = 400
    error_code = 'VALIDATION_ERROR'


class NotFoundError(ApiError):
    """Referenced entity is absent."""
    status_code = 404
    error_code = 'NOT_FOUND'


class ConflictError(ApiError):
    """Natural key already taken by another entity."""
    status_code = 409
    error_code = 'CONFLICT'


class PersistenceError(ApiError):
    """Store reported a failed write."""
    status_code = 500
    error_code = 'PERSISTENCE_ERROR'


# =============================================================================
# RESPONSE HELPERS
# =============================================================================

def generate_request_id() -> str:
    """Generate unique request identifier for tracking."""
    return str(uuid.uuid4())


def create_error_response(
    message: str,
    error_code: str,
    status_code: int = 400,
    details: Optional[Dict[str, Any]] = None
) -> Tuple[Dict[str, Any], int]:
    """
    Create the standardized error envelope.

    Args:
        message: Human-readable error message
        error_code: Machine-readable error code
        status_code: HTTP status code
        details: Additional error context

    Returns:
        Tuple of (response_dict, status_code)
    """
    response_data = {
        'success': False,
        'message': message,
        'error_code': error_code,
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'request_id': generate_request_id()
    }

    if details:
        response_data['error_details'] = details

    log = logger.error if status_code >= 500 else logger.info
    log(f"API Error: {error_code} - {message} [{request.method} {request.path}]")

    return response_data, status_code


def created_response(schema, entity, endpoint: str, **values) -> Tuple[Dict[str, Any], int, Dict[str, str]]:
    """201 response carrying the created DTO and a ``Location`` to its get-by-id route."""
    return schema.dump(entity), 201, {'Location': url_for(endpoint, **values)}


def no_content() -> Response:
    """204 response with an empty body."""
    return Response(status=204)


# =============================================================================
# VALIDATION HELPERS
# =============================================================================

def validate_id(value: Optional[int], message: str) -> int:
    """Reject missing, non-positive or out-of-range ids before any store access."""
    if value is None or value <= 0 or value > MAX_ID:
        raise BadRequestError(message)
    return value


def query_id(name: str) -> Optional[int]:
    """Integer query parameter, or None when absent, not a number or out of range."""
    value = request.args.get(name, type=int)
    if value is not None and value > MAX_ID:
        return None
    return value


def optional_query_id(name: str, message: str) -> Optional[int]:
    """Like ``query_id``, but a parameter that is present must be a valid id."""
    if name not in request.args:
        return None
    return validate_id(request.args.get(name, type=int), message)


def require_payload(label: str) -> Any:
    """The decoded JSON body, or 400 when the request has none."""
    payload = request.get_json(silent=True)
    if payload is None:
        raise BadRequestError(f"{label} data is required")
    return payload


def require_exists(repository, entity_id: int, label: str) -> None:
    """404 naming the entity and id when the repository has no such row."""
    if not repository.exists(entity_id):
        raise NotFoundError(f"{label} with ID {entity_id} not found")


def require_matching_id(path_id: int, body_id: Optional[int], label: str) -> None:
    """Updates are full replacements of the entity at the path id."""
    if body_id != path_id:
        raise BadRequestError(f"{label} ID mismatch")


# =============================================================================
# DECORATORS AND BASE RESOURCE
# =============================================================================

def handle_handler_exceptions(operation: str):
    """
    Decorator converting handler outcomes into error responses.

    Args:
        operation: Gerund phrase used in the generic 500 message and log line,
                   e.g. ``'retrieving the pokemon'``
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)

            except ApiError as e:
                return create_error_response(
                    message=e.message,
                    error_code=e.error_code,
                    status_code=e.status_code,
                    details=e.details
                )
            except ValidationError as e:
                return create_error_response(
                    message="Request data failed validation",
                    error_code="VALIDATION_ERROR",
                    status_code=400,
                    details=e.normalized_messages()
                )
            except Exception:
                db.session.rollback()
                context = {**kwargs, **request.args.to_dict()}
                logger.exception(f"Error occurred while {operation} {context}")
                return create_error_response(
                    message=f"An error occurred while {operation}",
                    error_code="INTERNAL_ERROR",
                    status_code=500
                )

        return wrapper
    return decorator


class RepositoryResource(Resource):
    """
    Resource constructed with exactly the repositories its handlers call.

    ``repositories`` maps attribute names to repository classes. Instances can
    be injected through ``resource_class_kwargs``; otherwise a default is
    built on the request's session.
    """

    repositories: Dict[str, type] = {}

    def __init__(self, api=None, *args, **kwargs):
        injected = {name: kwargs.pop(name) for name in list(kwargs) if name in self.repositories}
        super().__init__(api, *args, **kwargs)
        for name, repository_class in self.repositories.items():
            setattr(self, name, injected.get(name) or repository_class())


# =============================================================================
# BLUEPRINT FACTORY
# =============================================================================

def create_api_blueprint() -> Blueprint:
    """
    Create the ``/api`` blueprint with every resource namespace attached.

    Returns:
        Blueprint: Ready to register on a Flask application
    """
    from blueprints.category import category_ns
    from blueprints.country import country_ns
    from blueprints.owner import owner_ns
    from blueprints.pokemon import pokemon_ns
    from blueprints.review import review_ns
    from blueprints.reviewer import reviewer_ns

    api_bp = Blueprint('api', __name__, url_prefix='/api')

    api = Api(
        api_bp,
        version='1.0',
        title='Pokemon Review API',
        description='CRUD API for Pokemon, owners, categories, countries, reviewers and reviews',
        doc='/docs/'
    )

    for namespace in (pokemon_ns, category_ns, country_ns, owner_ns, review_ns, reviewer_ns):
        api.add_namespace(namespace)

    logger.debug("API blueprint created with resource namespaces")
    return api_bp


__all__ = [
    'ApiError',
    'BadRequestError',
    'NotFoundError',
    'ConflictError',
    'PersistenceError',
    'create_api_blueprint',
    'create_error_response',
    'created_response',
    'no_content',
    'validate_id',
    'query_id',
    'optional_query_id',
    'require_payload',
    'require_exists',
    'require_matching_id',
    'handle_handler_exceptions',
    'RepositoryResource',
]
