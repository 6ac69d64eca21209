from __future__ import annotations

from typing import Any, Dict


class DocumentNotFoundError(Exception):
    """Raised when a document id is unknown to, or evicted from, the cache."""

    def __init__(self, code: str, message: str, extra: Dict[str, Any] | None = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.extra = extra or {}


class DocumentTooLargeError(Exception):
    """Raised when submitted text exceeds the configured size limit."""

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"Document has {size} characters; the limit is {limit}")
        self.code = "document_too_large"
        self.size = size
        self.limit = limit
