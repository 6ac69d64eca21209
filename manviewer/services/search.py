"""Exact substring search backing the find and filter workflows."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Sequence, Tuple

from ..models import FilterLine, FindMatch

LOGGER = logging.getLogger(__name__)

MAX_MATCHES = 20_000
BLANK_LINE_PREVIEW = "(blank line)"


def _fold(value: str, case_sensitive: bool) -> str:
    """Return ``value`` lower-cased without shifting character offsets."""

    if case_sensitive:
        return value
    if value.isascii():
        return value.lower()
    # Lower-case per character: some characters expand (e.g. "İ") and str.lower
    # applies context rules (final sigma) that would desynchronise offsets.
    return "".join(
        lowered if len(lowered) == 1 else char
        for char, lowered in ((char, char.lower()) for char in value)
    )


def line_preview(line: str) -> str:
    return line.strip() or BLANK_LINE_PREVIEW


def find_matches(
    lines: Sequence[str],
    query: str,
    case_sensitive: bool = False,
    limit: int = MAX_MATCHES,
) -> List[FindMatch]:
    """Return every occurrence of ``query`` in ``lines`` in reading order.

    Occurrences are found left to right without overlap. Scanning stops as
    soon as ``limit`` matches have been collected; a result of that size is
    valid but may be incomplete.
    """

    needle_raw = query.strip()
    if not needle_raw or limit <= 0:
        return []

    needle = _fold(needle_raw, case_sensitive)
    width = len(needle_raw)
    matches: List[FindMatch] = []

    for line_index, line in enumerate(lines):
        haystack = _fold(line, case_sensitive)
        offset = haystack.find(needle)
        if offset == -1:
            continue
        preview = line_preview(line)
        while offset != -1:
            matches.append(
                FindMatch(
                    line_index=line_index,
                    start=offset,
                    end=offset + width,
                    preview=preview,
                )
            )
            if len(matches) >= limit:
                LOGGER.info(
                    "Search for %r stopped at %d matches (line %d of %d)",
                    needle_raw,
                    limit,
                    line_index + 1,
                    len(lines),
                )
                return matches
            offset = haystack.find(needle, offset + max(width, 1))

    return matches


def build_filter_lines(
    lines: Sequence[str], matches: Iterable[FindMatch]
) -> List[FilterLine]:
    """Collapse ``matches`` into one entry per matching line, ordered by line."""

    counts: Dict[int, int] = {}
    for match in matches:
        counts[match.line_index] = counts.get(match.line_index, 0) + 1

    return [
        FilterLine(
            line_index=line_index,
            text=lines[line_index] if 0 <= line_index < len(lines) else "",
            match_count=count,
        )
        for line_index, count in sorted(counts.items())
    ]


def first_match_index_by_line(matches: Sequence[FindMatch]) -> Dict[int, int]:
    """Return the position of the first match on each matching line."""

    first: Dict[int, int] = {}
    for position, match in enumerate(matches):
        first.setdefault(match.line_index, position)
    return first


def step_match_index(current: int, direction: int, total: int) -> int:
    """Return the match position reached by moving ``direction`` steps, wrapping.

    Returns ``-1`` when there are no matches.
    """

    if total <= 0:
        return -1
    if not 0 <= current < total:
        return 0 if direction >= 0 else total - 1
    return (current + direction) % total


def highlight_segments(
    text: str, query: str, case_sensitive: bool = False
) -> List[Tuple[str, bool]]:
    """Split ``text`` into ``(chunk, is_match)`` runs for ``query``."""

    needle_raw = query.strip()
    if not needle_raw or not text:
        return [(text, False)] if text else []

    needle = _fold(needle_raw, case_sensitive)
    haystack = _fold(text, case_sensitive)
    width = len(needle_raw)

    runs: List[Tuple[str, bool]] = []
    cursor = 0
    while True:
        offset = haystack.find(needle, cursor)
        if offset == -1:
            break
        if offset > cursor:
            runs.append((text[cursor:offset], False))
        runs.append((text[offset : offset + width], True))
        cursor = offset + width
    if cursor < len(text):
        runs.append((text[cursor:], False))
    return runs


__all__ = [
    "BLANK_LINE_PREVIEW",
    "MAX_MATCHES",
    "build_filter_lines",
    "find_matches",
    "first_match_index_by_line",
    "highlight_segments",
    "line_preview",
    "step_match_index",
]
