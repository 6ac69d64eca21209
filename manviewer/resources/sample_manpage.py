"""Deterministic sample manual page used for previews, demos and tests."""

from __future__ import annotations

import re
from datetime import UTC, datetime
from typing import Callable, TypedDict

BODY_INDENT = " " * 7
SUBSECTION_INDENT = " " * 3
OPTION_BODY_INDENT = " " * 11
OPTION_REPEAT_BLOCKS = 18
COMPACT_RE = re.compile(r"\b(short|tiny|mini)\b", re.IGNORECASE)
MAN_PREFIX_RE = re.compile(r"^man\s+", re.IGNORECASE)

OPTION_ROWS: tuple[tuple[str, str, str], ...] = (
    ("-a", "--all", "show all entries, including hidden sections"),
    ("-c", "--color", "force color output for headings and options"),
    ("-f", "--filter", "filter output to matching lines only"),
    ("-j", "--jump", "jump directly to section heading"),
    ("-n", "--line-number", "show absolute line numbers in the gutter"),
    ("-s", "--section", "open man section explicitly, e.g. 2 open"),
    ("-z", "--zoom", "set initial zoom factor"),
)


class SamplePage(TypedDict):
    """Payload describing a generated sample page."""

    query: str
    title: str
    source: str
    raw_text: str
    fetched_at: str


def _name(topic: str) -> list[str]:
    return [f"{BODY_INDENT}{topic} - sample manual page for previews"]


def _synopsis(topic: str) -> list[str]:
    return [
        f"{BODY_INDENT}{topic} [OPTION]... [FILE]...",
        f"{BODY_INDENT}{topic} --help",
        f"{BODY_INDENT}{topic} --version",
    ]


def _description(topic: str) -> list[str]:
    return [
        f"{BODY_INDENT}This page is generated when no system manual is available.",
        f"{BODY_INDENT}Real pages are rendered by man and normalised with col -bx.",
        f"{BODY_INDENT}Use it to exercise navigation, search and filtering.",
        f"{BODY_INDENT}Topic selected: {topic}",
        f"{BODY_INDENT}Environment variables like PATH, MANPAGER, and PAGER are highlighted.",
    ]


def _options(topic: str, compact: bool) -> list[str]:
    blocks = 1 if compact else OPTION_REPEAT_BLOCKS
    rows = OPTION_ROWS[:3] if compact else OPTION_ROWS
    lines = [f"{SUBSECTION_INDENT}GENERAL"]
    for block in range(blocks):
        for index, (short_flag, long_flag, description) in enumerate(rows):
            number = block * len(rows) + index + 1
            lines.append(f"{BODY_INDENT}{short_flag}, {long_flag}")
            lines.append(f"{OPTION_BODY_INDENT}{description} (sample row {number})")
            lines.append("")
    lines.append(f"{SUBSECTION_INDENT}DISPLAY")
    lines.append(f"{BODY_INDENT}--theme=WHEN")
    lines.append(f"{OPTION_BODY_INDENT}choose the color theme; see `{topic} --help`")
    return lines


def _examples(topic: str) -> list[str]:
    return [
        f"{BODY_INDENT}{topic} --filter open",
        f"{BODY_INDENT}{topic} --section 3 printf",
        f"{BODY_INDENT}{topic} --zoom 1.25",
        f"{BODY_INDENT}{topic} --jump OPTIONS",
        f"{BODY_INDENT}MANPAGER=cat {topic} ls",
        f"{BODY_INDENT}command man ls  # bypass shell alias override",
        f"{BODY_INDENT}/usr/share/man/man1/{topic}.1.gz",
    ]


def _files(topic: str) -> list[str]:
    return [
        f"{BODY_INDENT}/etc/man_db.conf",
        f"{BODY_INDENT}/usr/share/man",
        f"{BODY_INDENT}~/.local/share/man",
    ]


def _see_also(topic: str) -> list[str]:
    return [f"{BODY_INDENT}man(1), col(1), less(1), groff(7), apropos(1), whatis(1)"]


SECTION_BUILDERS: tuple[tuple[str, Callable[[str], list[str]]], ...] = (
    ("NAME", _name),
    ("SYNOPSIS", _synopsis),
    ("DESCRIPTION", _description),
    ("EXAMPLES", _examples),
    ("FILES", _files),
    ("SEE ALSO", _see_also),
)
COMPACT_SKIPPED = frozenset({"FILES", "SEE ALSO"})


def build_sample_manpage(query: str) -> SamplePage:
    """Return a rendered-looking manual page for ``query``.

    Queries containing ``short``, ``tiny`` or ``mini`` produce a compact page.
    """

    normalized_query = query.strip() or "man"
    topic = MAN_PREFIX_RE.sub("", normalized_query)
    compact = bool(COMPACT_RE.search(topic))
    title = f"{topic.upper()}(1)"

    lines: list[str] = [title, ""]
    for heading, builder in SECTION_BUILDERS:
        if compact and heading in COMPACT_SKIPPED:
            continue
        lines.append(heading)
        body = builder(topic)
        lines.extend(body[:3] if compact and heading == "EXAMPLES" else body)
        lines.append("")
        if heading == "DESCRIPTION":
            lines.append("OPTIONS")
            lines.extend(_options(topic, compact))
            lines.append("")

    lines.append("NOTES")
    if compact:
        lines.append(f"{BODY_INDENT}Compact sample for short-document testing.")
    else:
        lines.append(f"{BODY_INDENT}This sample intentionally contains many repeated lines.")
        lines.append(f"{BODY_INDENT}It helps validate scrolling over long documents.")

    return SamplePage(
        query=normalized_query,
        title=title,
        source="sample",
        raw_text="\n".join(lines) + "\n",
        fetched_at=datetime.now(UTC).isoformat(),
    )


__all__ = ["SamplePage", "build_sample_manpage"]
