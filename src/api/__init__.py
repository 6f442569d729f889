"""HTTP API for Hellowed."""

from .http_server import create_app, REQUEST_STEPS
from .endpoints import create_api

__all__ = ["create_app", "create_api", "REQUEST_STEPS"]
