"""Per-line token classification for manual page highlighting."""

from __future__ import annotations

import re
from typing import List

from ..models import TokenKind, TokenSegment

HEADING_MAX_CHARS = 72

# Alternation order matters: option flags win over identifiers, paths, literals
# and cross-references that start at the same offset.
TOKEN_PATTERN = re.compile(
    r"--?[a-zA-Z0-9][\w-]*"
    r"|\b[A-Z][A-Z0-9_]{2,}\b"
    r"|(?:~|/)[\w./-]+"
    r"|`[^`]+`"
    r"|\b[a-z]{2,}\(\d\)",
    re.ASCII,
)
ENV_RE = re.compile(r"^[A-Z][A-Z0-9_]{2,}$", re.ASCII)
COMMAND_RE = re.compile(r"^[a-z]{2,}\(\d\)$", re.ASCII)


def is_heading_line(line: str) -> bool:
    """Return True for a short caps-only line rendered as a heading."""

    trimmed = line.strip()
    return bool(trimmed) and len(trimmed) <= HEADING_MAX_CHARS and trimmed == trimmed.upper()


def classify_token(token: str) -> TokenKind:
    """Return the :class:`TokenKind` for a raw token match."""

    if token.startswith("-"):
        return TokenKind.OPTION
    if token.startswith("/") or token.startswith("~/"):
        return TokenKind.PATH
    if ENV_RE.match(token):
        return TokenKind.ENV
    if len(token) >= 2 and token.startswith("`") and token.endswith("`"):
        return TokenKind.LITERAL
    if COMMAND_RE.match(token):
        return TokenKind.COMMAND
    return TokenKind.PLAIN


def _append(segments: List[TokenSegment], text: str, kind: TokenKind) -> None:
    if not text:
        return
    if kind is TokenKind.PLAIN and segments and segments[-1].kind is TokenKind.PLAIN:
        segments[-1] = TokenSegment(segments[-1].text + text, TokenKind.PLAIN)
        return
    segments.append(TokenSegment(text, kind))


def classify_tokens(line: str) -> List[TokenSegment]:
    """Partition ``line`` into typed segments whose texts concatenate back to it.

    Indentation is a rendering concern; callers strip it before classifying
    when they want it excluded.
    """

    if is_heading_line(line):
        return [TokenSegment(line, TokenKind.HEADING)]

    segments: List[TokenSegment] = []
    cursor = 0
    for match in TOKEN_PATTERN.finditer(line):
        _append(segments, line[cursor : match.start()], TokenKind.PLAIN)
        _append(segments, match.group(0), classify_token(match.group(0)))
        cursor = match.end()
    _append(segments, line[cursor:], TokenKind.PLAIN)

    return segments or [TokenSegment(line, TokenKind.PLAIN)]


__all__ = ["TOKEN_PATTERN", "classify_token", "classify_tokens", "is_heading_line"]
