"""Utilities for splitting a rendered document into logical lines."""

from __future__ import annotations

import re
from typing import List

LINE_BREAK_RE = re.compile(r"\r\n?|\n")


def normalize_lines(raw_text: str) -> List[str]:
    """Return the logical lines of ``raw_text`` regardless of line-ending style.

    Only ``\\r\\n``, a lone ``\\r`` and a lone ``\\n`` count as breaks; form feeds
    and other separators recognised by :meth:`str.splitlines` are kept as content.
    The empty element produced by a final terminator is dropped.
    """

    if not raw_text:
        return []

    lines = LINE_BREAK_RE.split(raw_text)
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def join_lines(lines: List[str]) -> str:
    """Return ``lines`` as text with a terminator after every line."""

    return "".join(f"{line}\n" for line in lines)


__all__ = ["LINE_BREAK_RE", "join_lines", "normalize_lines"]
