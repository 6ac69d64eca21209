"""Endpoints for the find and filter search workflows."""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from ..config import Settings, get_settings
from ..observability import metrics_registry
from ..services.search import build_filter_lines, find_matches, first_match_index_by_line
from ..services.sections import section_at_line
from .documents import require_document

router = APIRouter(prefix="/api", tags=["search"])


class FindMatchPayload(BaseModel):
    """Single highlighted occurrence within a line."""

    line_index: int
    start: int
    end: int
    preview: str
    section_id: str | None = None


class FilterLinePayload(BaseModel):
    """Matching line shown in filter mode."""

    line_index: int
    text: str
    match_count: int
    first_match: int
    section_id: str | None = None


class SearchResponse(BaseModel):
    """Search results in either find or filter shape."""

    document_id: str
    query: str
    mode: Literal["find", "filter"]
    case_sensitive: bool
    total_matches: int
    capped: bool
    matches: list[FindMatchPayload] = Field(default_factory=list)
    lines: list[FilterLinePayload] = Field(default_factory=list)


@router.get("/documents/{document_id}/search", response_model=SearchResponse)
def search_document(
    document_id: str,
    q: str = Query("", alias="q"),
    mode: Literal["find", "filter"] = Query("find"),
    case_sensitive: bool = Query(False),
    settings: Settings = Depends(get_settings),
) -> SearchResponse:
    """Return every occurrence of ``q`` (find) or the lines containing it (filter).

    An empty query yields an empty result rather than an error.
    """

    document = require_document(document_id)
    limit = settings.search_match_limit
    # One extra match tells a complete result of exactly `limit` from a cut one.
    matches = find_matches(document.lines, q, case_sensitive=case_sensitive, limit=limit + 1)
    capped = len(matches) > limit
    matches = matches[:limit]
    metrics_registry.search_completed(len(matches), capped)

    section_ids: dict[int, str | None] = {}

    def _section_id(line_index: int) -> str | None:
        if line_index not in section_ids:
            anchor = section_at_line(document.sections, line_index)
            section_ids[line_index] = anchor.id if anchor else None
        return section_ids[line_index]

    response = SearchResponse(
        document_id=document.document_id,
        query=q.strip(),
        mode=mode,
        case_sensitive=case_sensitive,
        total_matches=len(matches),
        capped=capped,
    )

    if mode == "filter":
        first_match = first_match_index_by_line(matches)
        response.lines = [
            FilterLinePayload(
                **entry.to_dict(),
                first_match=first_match[entry.line_index],
                section_id=_section_id(entry.line_index),
            )
            for entry in build_filter_lines(document.lines, matches)
        ]
    else:
        response.matches = [
            FindMatchPayload(**match.to_dict(), section_id=_section_id(match.line_index))
            for match in matches
        ]

    return response


__all__ = ["router"]
