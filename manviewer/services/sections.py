"""Heuristic recovery of section headings from rendered manual pages.

Manual pages carry no structural markup once rendered, so headings are
inferred from layout alone: primary sections are short ALL-CAPS lines at the
left margin next to a blank line, while subsections are either indented
ALL-CAPS lines or sparse title-case lines. Each rule below is a separate
predicate; :func:`detect_sections` composes them with the top-level test
evaluated first.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Sequence

from ..models import SectionAnchor, SectionNode
from ..utils.logging import TRACE_LEVEL

LOGGER = logging.getLogger(__name__)

KNOWN_SECTION_HEADINGS: frozenset[str] = frozenset(
    {
        "NAME",
        "SYNOPSIS",
        "DESCRIPTION",
        "OPTIONS",
        "COMMANDS",
        "EXAMPLES",
        "FILES",
        "ENVIRONMENT",
        "EXIT STATUS",
        "RETURN VALUE",
        "STANDARDS",
        "COMPATIBILITY",
        "BUGS",
        "SEE ALSO",
        "AUTHOR",
        "COPYRIGHT",
    }
)

TOP_LEVEL_MAX_CHARS = 72
SUB_LEVEL_MAX_CHARS = 64
SUB_LEVEL_MAX_WORDS = 6
SUB_LEVEL_TITLE_CASE_RATIO = 0.6
MARGIN_COLUMNS = 1
TAB_WIDTH = 8
SLUG_MAX_CHARS = 50

DOCUMENT_ANCHOR_ID = "document"
DOCUMENT_ANCHOR_TITLE = "DOCUMENT"

TITLE_MARKER_RE = re.compile(r"^[A-Za-z0-9_][\w.:+-]*\(\d+[A-Za-z]*\)$")
CROSS_REFERENCE_RE = re.compile(r"[\w.+-]+\(\d+[A-Za-z]*\)")
CAPS_SHAPE_RE = re.compile(r"^[A-Z0-9][A-Z0-9 \t\-_/(),.+]*$")
LIST_MARKER_RE = re.compile(r"^(?:[-*+•·–—]|\d+[.)](?:\s|$))")
TERMINAL_PUNCTUATION = (".", ":", ";", "!", "?")
SLUG_SEPARATOR_RE = re.compile(r"[^a-z0-9]+")


@dataclass(slots=True)
class _HeadingCandidate:
    """Heading line accepted by the first pass."""

    line_index: int
    title: str
    level: int


def _line_at(lines: Sequence[str], index: int) -> str | None:
    if 0 <= index < len(lines):
        return lines[index]
    return None


def indentation_width(line: str) -> int:
    """Return the leading indentation of ``line`` in columns (tabs count 8)."""

    width = 0
    for char in line:
        if char == "\t":
            width += TAB_WIDTH
        elif char.isspace():
            width += 1
        else:
            break
    return width


def is_title_marker(text: str) -> bool:
    """Return True for a bare page title marker such as ``LS(1)``."""

    return bool(TITLE_MARKER_RE.match(text.strip()))


def is_fully_uppercase(text: str) -> bool:
    return text == text.upper()


def is_fully_lowercase(text: str) -> bool:
    return text == text.lower()


def is_blank_adjacent(lines: Sequence[str], index: int) -> bool:
    """Return True when the line before or after ``index`` is blank.

    A neighbour outside the document counts as blank.
    """

    previous = _line_at(lines, index - 1)
    following = _line_at(lines, index + 1)
    return (previous or "").strip() == "" or (following or "").strip() == ""


def has_indented_body(lines: Sequence[str], index: int) -> bool:
    """Return True when the next non-blank line is indented further than ``index``."""

    own_indent = indentation_width(lines[index])
    for following in range(index + 1, len(lines)):
        candidate = lines[following]
        if candidate.strip():
            return indentation_width(candidate) > own_indent
    return False


def matches_known_section(text: str) -> bool:
    return text in KNOWN_SECTION_HEADINGS and is_fully_uppercase(text)


def matches_caps_shape(text: str) -> bool:
    """Return True for an "all-caps-ish" line made of capitals, digits and light punctuation."""

    return bool(CAPS_SHAPE_RE.match(text)) and is_fully_uppercase(text)


def is_top_level_heading(lines: Sequence[str], index: int) -> bool:
    """Return True when ``lines[index]`` is a primary section heading."""

    line = lines[index]
    text = line.strip()
    if not text or len(text) > TOP_LEVEL_MAX_CHARS:
        return False
    if is_title_marker(text):
        return False
    if indentation_width(line) > MARGIN_COLUMNS:
        return False
    if matches_known_section(text):
        return True
    return matches_caps_shape(text) and is_blank_adjacent(lines, index)


def starts_with_list_marker(text: str) -> bool:
    """Return True for bullets, numbered list items and option flags."""

    return bool(LIST_MARKER_RE.match(text))


def contains_cross_reference(text: str) -> bool:
    return bool(CROSS_REFERENCE_RE.search(text))


def ends_with_terminal_punctuation(text: str) -> bool:
    return text.endswith(TERMINAL_PUNCTUATION)


def is_title_case(words: Sequence[str]) -> bool:
    """Return True when most words (and the first) start with a capital letter."""

    if not words or not words[0][:1].isupper():
        return False
    capitalised = sum(1 for word in words if word[:1].isupper())
    return capitalised / len(words) >= SUB_LEVEL_TITLE_CASE_RATIO


def is_sub_level_heading(lines: Sequence[str], index: int) -> bool:
    """Return True when ``lines[index]`` is a subsection heading.

    Only meaningful for lines that already failed :func:`is_top_level_heading`.
    """

    line = lines[index]
    text = line.strip()
    if not text or len(text) > SUB_LEVEL_MAX_CHARS:
        return False
    if is_title_marker(text) or is_fully_lowercase(text):
        return False
    if starts_with_list_marker(text) or contains_cross_reference(text):
        return False
    if ends_with_terminal_punctuation(text):
        return False

    words = text.split()
    if not 1 <= len(words) <= SUB_LEVEL_MAX_WORDS:
        return False

    indent = indentation_width(line)
    if is_fully_uppercase(text):
        if indent <= MARGIN_COLUMNS:
            return False
    elif indent > MARGIN_COLUMNS or not is_title_case(words):
        return False

    return is_blank_adjacent(lines, index) or has_indented_body(lines, index)


def classify_heading(lines: Sequence[str], index: int) -> int | None:
    """Return the heading level of ``lines[index]`` or ``None`` for body text."""

    if is_top_level_heading(lines, index):
        return 1
    if is_sub_level_heading(lines, index):
        return 2
    return None


def slugify(value: str) -> str:
    """Return a lowercase, hyphen-separated identifier for ``value``."""

    slug = SLUG_SEPARATOR_RE.sub("-", value.lower()).strip("-")
    return slug[:SLUG_MAX_CHARS]


def _collect_candidates(lines: Sequence[str]) -> list[_HeadingCandidate]:
    candidates: list[_HeadingCandidate] = []
    seen_top_level = False
    for index in range(len(lines)):
        level = classify_heading(lines, index)
        if level is None:
            continue
        title = lines[index].strip()
        if level == 2 and not seen_top_level:
            LOGGER.log(TRACE_LEVEL, "Dropping orphan subsection %r at line %d", title, index)
            continue
        seen_top_level = seen_top_level or level == 1
        candidates.append(_HeadingCandidate(line_index=index, title=title, level=level))
    return candidates


def _assign_ids(candidates: Sequence[_HeadingCandidate]) -> list[str]:
    counts: dict[str, int] = {}
    ids: list[str] = []
    for position, candidate in enumerate(candidates, start=1):
        base = slugify(candidate.title) or f"section-{position}"
        seen = counts.get(base, 0)
        counts[base] = seen + 1
        ids.append(base if seen == 0 else f"{base}-{seen + 1}")
    return ids


def _link_parents(anchors: list[SectionAnchor]) -> None:
    for position, anchor in enumerate(anchors):
        if anchor.level != 2:
            continue
        for previous in range(position - 1, -1, -1):
            if anchors[previous].level == 1:
                anchor.parent_id = anchors[previous].id
                break


def _assign_ranges(anchors: list[SectionAnchor], line_count: int) -> None:
    last_line = line_count - 1
    for position, anchor in enumerate(anchors):
        end_line = last_line
        for following in anchors[position + 1 :]:
            if following.level <= anchor.level:
                end_line = following.start_line - 1
                break
        anchor.end_line = max(end_line, anchor.start_line)


def document_anchor(line_count: int) -> SectionAnchor:
    """Return the synthetic anchor spanning a document without headings."""

    return SectionAnchor(
        id=DOCUMENT_ANCHOR_ID,
        title=DOCUMENT_ANCHOR_TITLE,
        start_line=0,
        end_line=max(line_count - 1, 0),
        level=1,
    )


def detect_sections(lines: Sequence[str]) -> list[SectionAnchor]:
    """Return section anchors for ``lines`` in ascending line order."""

    if not lines:
        return []

    candidates = _collect_candidates(lines)
    if not candidates:
        LOGGER.debug("No headings detected in %d lines; using document anchor", len(lines))
        return [document_anchor(len(lines))]

    anchors = [
        SectionAnchor(
            id=anchor_id,
            title=candidate.title,
            start_line=candidate.line_index,
            end_line=candidate.line_index,
            level=candidate.level,
        )
        for anchor_id, candidate in zip(_assign_ids(candidates), candidates)
    ]
    _link_parents(anchors)
    _assign_ranges(anchors, len(lines))

    LOGGER.debug(
        "Detected %d sections (%d subsections) in %d lines",
        len(anchors),
        sum(1 for anchor in anchors if anchor.level == 2),
        len(lines),
    )
    return anchors


def build_section_tree(anchors: Sequence[SectionAnchor]) -> list[SectionNode]:
    """Nest a flat anchor list into an outline keyed by heading level."""

    roots: list[SectionNode] = []
    stack: list[SectionNode] = []

    for anchor in anchors:
        node = SectionNode(anchor=anchor)
        while stack and stack[-1].anchor.level >= anchor.level:
            stack.pop()
        if stack:
            stack[-1].children.append(node)
        else:
            roots.append(node)
        stack.append(node)

    return roots


def section_at_line(
    anchors: Sequence[SectionAnchor], line_index: int
) -> SectionAnchor | None:
    """Return the deepest anchor whose range contains ``line_index``."""

    found: SectionAnchor | None = None
    for anchor in anchors:
        if anchor.start_line > line_index:
            break
        if anchor.contains(line_index) and (found is None or anchor.level >= found.level):
            found = anchor
    return found


__all__ = [
    "KNOWN_SECTION_HEADINGS",
    "build_section_tree",
    "classify_heading",
    "detect_sections",
    "document_anchor",
    "has_indented_body",
    "indentation_width",
    "is_blank_adjacent",
    "is_sub_level_heading",
    "is_title_marker",
    "is_top_level_heading",
    "section_at_line",
    "slugify",
]
