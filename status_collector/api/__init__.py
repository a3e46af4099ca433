"""HTTP adapter for the collector registry."""

from .routes import build_status_router, path_to_pattern
from .server import create_app

__all__ = ["build_status_router", "create_app", "path_to_pattern"]
