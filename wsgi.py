"""
WSGI Entry Point for Production Deployment

Gunicorn example:
    gunicorn --bind 0.0.0.0:8000 --workers 4 wsgi:application

The configuration is chosen from FLASK_CONFIG / FLASK_ENV (see config.py).
Schema changes are applied with ``flask db upgrade`` before starting workers,
and sample data is only inserted with ``flask seed-data``.
"""

import os

from app import create_app

application = create_app(config_name=os.environ.get('FLASK_CONFIG'))
