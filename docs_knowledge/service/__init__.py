"""Content server exposing a generated documentation tree over HTTP."""

from .app import create_app, resolve_request_path
from .server import ContentServer

__all__ = ["ContentServer", "create_app", "resolve_request_path"]
