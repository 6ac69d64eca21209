"""Endpoints for submitting documents and reading their sections and lines."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from ..config import Settings, get_settings
from ..models import SectionAnchor, TokenSegment
from ..observability import metrics_registry
from ..resources.sample_manpage import build_sample_manpage
from ..services.document_cache import ParsedDocument, document_cache, parse_document
from ..services.sections import build_section_tree
from ..services.tokens import classify_tokens
from ..utils.errors import DocumentNotFoundError, DocumentTooLargeError

LOGGER = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["documents"])


class DocumentCreateRequest(BaseModel):
    """Rendered manual page text submitted by the client."""

    text: str
    title: str | None = None


class SectionPayload(BaseModel):
    id: str
    title: str
    start_line: int
    end_line: int
    level: int
    parent_id: str | None = None


class OutlineNodePayload(SectionPayload):
    children: list["OutlineNodePayload"] = Field(default_factory=list)


OutlineNodePayload.model_rebuild()


class DocumentResponse(BaseModel):
    """Summary of a parsed document and its section hierarchy."""

    document_id: str
    title: str
    line_count: int
    sections: list[SectionPayload]
    outline: list[OutlineNodePayload]


class TokenPayload(BaseModel):
    text: str
    kind: str


class LinePayload(BaseModel):
    """Single document line split into indentation and classified tokens."""

    line_index: int
    text: str
    indent: str
    tokens: list[TokenPayload]


class LinesResponse(BaseModel):
    document_id: str
    start: int
    line_count: int
    lines: list[LinePayload]


class TokenizeRequest(BaseModel):
    line: str
    strip_indent: bool = False


class TokenizeResponse(BaseModel):
    tokens: list[TokenPayload]


class SamplePageResponse(BaseModel):
    query: str
    title: str
    source: str
    raw_text: str
    fetched_at: str


def _section_payload(anchor: SectionAnchor) -> SectionPayload:
    return SectionPayload(**anchor.to_dict())


def _token_payloads(segments: list[TokenSegment]) -> list[TokenPayload]:
    return [TokenPayload(**segment.to_dict()) for segment in segments]


def _document_response(document: ParsedDocument) -> DocumentResponse:
    outline = [
        OutlineNodePayload(**node.to_dict())
        for node in build_section_tree(document.sections)
    ]
    return DocumentResponse(
        document_id=document.document_id,
        title=document.title,
        line_count=document.line_count,
        sections=[_section_payload(anchor) for anchor in document.sections],
        outline=outline,
    )


def split_indent(line: str) -> tuple[str, str]:
    """Return ``(indent, content)`` for ``line``."""

    content = line.lstrip()
    return line[: len(line) - len(content)], content


def require_document(document_id: str) -> ParsedDocument:
    """Return the cached document or raise a 404 ``HTTPException``."""

    try:
        return document_cache.require(document_id)
    except DocumentNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=exc.message
        ) from exc


def _check_size(text: str, settings: Settings) -> None:
    if len(text) > settings.max_document_chars:
        raise DocumentTooLargeError(len(text), settings.max_document_chars)


@router.post(
    "/documents",
    response_model=DocumentResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_document(
    payload: DocumentCreateRequest,
    settings: Settings = Depends(get_settings),
) -> DocumentResponse:
    """Parse submitted text, cache it, and return its section outline."""

    try:
        _check_size(payload.text, settings)
    except DocumentTooLargeError as exc:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail=str(exc)
        ) from exc

    if document_cache.max_entries != settings.document_cache_size:
        document_cache.resize(settings.document_cache_size)

    document = document_cache.put(parse_document(payload.text, payload.title))
    metrics_registry.document_parsed(document.line_count, len(document.sections))
    LOGGER.info(
        "Parsed document %s (%r): %d lines, %d sections",
        document.document_id,
        document.title,
        document.line_count,
        len(document.sections),
    )
    return _document_response(document)


@router.get("/documents/{document_id}", response_model=DocumentResponse)
def read_document(document_id: str) -> DocumentResponse:
    return _document_response(require_document(document_id))


@router.get("/documents/{document_id}/lines", response_model=LinesResponse)
def read_document_lines(
    document_id: str,
    start: int = Query(0, ge=0),
    limit: int | None = Query(None, ge=1),
    strip_indent: bool = Query(True),
    settings: Settings = Depends(get_settings),
) -> LinesResponse:
    """Return a window of lines with their highlighting tokens."""

    document = require_document(document_id)
    page_size = min(limit or settings.lines_page_limit, settings.lines_page_limit)
    window = document.lines[start : start + page_size]

    lines: list[LinePayload] = []
    for offset, text in enumerate(window):
        indent, content = split_indent(text) if strip_indent else ("", text)
        lines.append(
            LinePayload(
                line_index=start + offset,
                text=text,
                indent=indent,
                tokens=_token_payloads(classify_tokens(content)),
            )
        )

    return LinesResponse(
        document_id=document.document_id,
        start=start,
        line_count=document.line_count,
        lines=lines,
    )


@router.post("/tokens", response_model=TokenizeResponse)
def tokenize_line(payload: TokenizeRequest) -> TokenizeResponse:
    """Classify an ad-hoc line without registering a document."""

    line = split_indent(payload.line)[1] if payload.strip_indent else payload.line
    return TokenizeResponse(tokens=_token_payloads(classify_tokens(line)))


@router.get("/sample/{topic}", response_model=SamplePageResponse)
def read_sample_page(topic: str) -> SamplePageResponse:
    """Return a generated manual page for previews without a system manual."""

    return SamplePageResponse(**build_sample_manpage(topic))


__all__ = ["router", "require_document", "split_indent"]
