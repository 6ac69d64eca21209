"""Tests for logical line normalisation."""

from __future__ import annotations

import pytest

from manviewer.services.lines import join_lines, normalize_lines


def test_normalize_lines_handles_crlf_and_trailing_terminator() -> None:
    assert normalize_lines("a\r\nb\n") == ["a", "b"]


def test_normalize_lines_treats_lone_carriage_return_as_break() -> None:
    assert normalize_lines("a\rb\r\nc") == ["a", "b", "c"]


def test_normalize_lines_keeps_unterminated_last_line() -> None:
    assert normalize_lines("NAME\n\nls") == ["NAME", "", "ls"]


def test_normalize_lines_preserves_interior_and_final_blank_lines() -> None:
    assert normalize_lines("a\n\n\nb\n\n") == ["a", "", "", "b", ""]


def test_normalize_lines_empty_input() -> None:
    assert normalize_lines("") == []
    assert normalize_lines("\n") == [""]


def test_normalize_lines_keeps_form_feed_as_content() -> None:
    assert normalize_lines("page one\fpage two\n") == ["page one\fpage two"]


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "\n",
        "a",
        "a\n",
        "a\n\n",
        "a\r\n\r\nb\r",
        "\r\r\n\n",
        "LS(1)\n\nNAME\n     ls - list\n",
    ],
)
def test_normalize_lines_is_idempotent_after_rejoining(raw: str) -> None:
    lines = normalize_lines(raw)
    assert normalize_lines(join_lines(lines)) == lines
