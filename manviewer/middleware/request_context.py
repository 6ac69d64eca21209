"""Request identifiers shared between the HTTP layer and log records."""

from __future__ import annotations

import contextvars
import re
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

REQUEST_ID_HEADER = "X-Request-ID"

_REQUEST_ID: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "manviewer_request_id", default=None
)

_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


def get_request_id(default: str | None = None) -> str | None:
    """Return the identifier of the request being served, if any."""

    value = _REQUEST_ID.get()
    return value if value is not None else default


def normalise_request_id(value: str | None) -> str:
    """Return ``value`` when it is a safe token, else a freshly generated one."""

    if value:
        candidate = value.strip()
        if _REQUEST_ID_PATTERN.match(candidate):
            return candidate
    return uuid.uuid4().hex


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Echo a request identifier header and expose it to log records."""

    def __init__(self, app: ASGIApp, header_name: str = REQUEST_ID_HEADER) -> None:
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next):
        request_id = normalise_request_id(request.headers.get(self.header_name))
        request.state.request_id = request_id
        token = _REQUEST_ID.set(request_id)
        try:
            response = await call_next(request)
        finally:
            _REQUEST_ID.reset(token)
        response.headers[self.header_name] = request_id
        return response


__all__ = [
    "REQUEST_ID_HEADER",
    "RequestIdMiddleware",
    "get_request_id",
    "normalise_request_id",
]
