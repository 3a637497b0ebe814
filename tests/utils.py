"""
Test utility functions shared by the API test modules.

Request helpers send JSON bodies the way a real client does, and the
assertion helpers check the standard error envelope.
"""

import json
from typing import Any, Optional

from flask.testing import FlaskClient
from sqlalchemy import func, select
from werkzeug.test import TestResponse


def post_json(client: FlaskClient, url: str, payload: Any) -> TestResponse:
    return client.post(url, data=json.dumps(payload), content_type='application/json')


def put_json(client: FlaskClient, url: str, payload: Any) -> TestResponse:
    return client.put(url, data=json.dumps(payload), content_type='application/json')


def count_rows(session, model) -> int:
    """Row count straight from the database, bypassing the identity map."""
    return session.execute(select(func.count()).select_from(model)).scalar()


def assert_error_response(response: TestResponse, status_code: int,
                          message: Optional[str] = None) -> dict:
    """
    Assert that a response carries the standard error envelope.

    Returns:
        dict: The decoded body for further assertions
    """
    assert response.status_code == status_code, response.get_data(as_text=True)
    body = response.get_json()
    assert body['success'] is False
    assert body['error_code']
    assert body['timestamp']
    assert body['request_id']
    if message is not None:
        assert body['message'] == message
    return body
