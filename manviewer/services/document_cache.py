"""In-memory cache of parsed documents served by the HTTP layer."""

from __future__ import annotations

import hashlib
import logging
from collections import OrderedDict
from dataclasses import dataclass
from threading import Lock

from ..models import SectionAnchor
from ..utils.errors import DocumentNotFoundError
from .lines import join_lines, normalize_lines
from .sections import detect_sections

LOGGER = logging.getLogger(__name__)

DOCUMENT_ID_CHARS = 16


@dataclass(slots=True, frozen=True)
class ParsedDocument:
    """Normalised lines and sections derived from one submitted document."""

    document_id: str
    title: str
    lines: tuple[str, ...]
    sections: tuple[SectionAnchor, ...]

    @property
    def line_count(self) -> int:
        return len(self.lines)


def document_digest(lines: list[str]) -> str:
    """Return a stable identifier for the normalised content of a document."""

    digest = hashlib.sha256(join_lines(lines).encode("utf-8")).hexdigest()
    return digest[:DOCUMENT_ID_CHARS]


def _default_title(lines: list[str]) -> str:
    for line in lines:
        stripped = line.strip()
        if stripped:
            return stripped.split()[0]
    return "untitled"


def parse_document(raw_text: str, title: str | None = None) -> ParsedDocument:
    """Normalise ``raw_text`` and detect its sections."""

    lines = normalize_lines(raw_text)
    sections = detect_sections(lines)
    return ParsedDocument(
        document_id=document_digest(lines),
        title=(title or "").strip() or _default_title(lines),
        lines=tuple(lines),
        sections=tuple(sections),
    )


class DocumentCache:
    """Bounded least-recently-used store of :class:`ParsedDocument` records."""

    def __init__(self, max_entries: int = 8) -> None:
        self._lock = Lock()
        self._max_entries = max(1, max_entries)
        self._store: "OrderedDict[str, ParsedDocument]" = OrderedDict()

    @property
    def max_entries(self) -> int:
        return self._max_entries

    def resize(self, max_entries: int) -> None:
        with self._lock:
            self._max_entries = max(1, max_entries)
            self._evict()

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    def put(self, document: ParsedDocument) -> ParsedDocument:
        with self._lock:
            self._store.pop(document.document_id, None)
            self._store[document.document_id] = document
            self._evict()
        return document

    def get(self, document_id: str) -> ParsedDocument | None:
        with self._lock:
            document = self._store.get(document_id)
            if document is not None:
                self._store.move_to_end(document_id)
            return document

    def require(self, document_id: str) -> ParsedDocument:
        """Return the cached document or raise :class:`DocumentNotFoundError`."""

        document = self.get(document_id)
        if document is None:
            raise DocumentNotFoundError(
                "document_not_found",
                "Document not found; submit it again",
                extra={"document_id": document_id},
            )
        return document

    def _evict(self) -> None:
        while len(self._store) > self._max_entries:
            evicted_id, _ = self._store.popitem(last=False)
            LOGGER.debug("Evicted document %s from cache", evicted_id)


document_cache = DocumentCache()

__all__ = [
    "DocumentCache",
    "ParsedDocument",
    "document_cache",
    "document_digest",
    "parse_document",
]
