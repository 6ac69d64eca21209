"""ASGI middleware utilities for the ManViewer service."""

from .request_context import RequestIdMiddleware, get_request_id

__all__ = ["RequestIdMiddleware", "get_request_id"]
