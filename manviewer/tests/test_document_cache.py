"""Tests for document parsing and the bounded document cache."""

from __future__ import annotations

import pytest

from manviewer.services.document_cache import DocumentCache, parse_document
from manviewer.utils.errors import DocumentNotFoundError


def test_parse_document_identifies_normalised_content() -> None:
    unix = parse_document("LS(1)\n\nNAME\n\nls - list\n")
    windows = parse_document("LS(1)\r\n\r\nNAME\r\n\r\nls - list\r\n")

    assert unix.document_id == windows.document_id
    assert len(unix.document_id) == 16
    assert unix.lines == ("LS(1)", "", "NAME", "", "ls - list")
    assert unix.line_count == 5
    assert [anchor.title for anchor in unix.sections] == ["NAME"]


def test_parse_document_title_defaults_to_first_word() -> None:
    assert parse_document("\n  LS(1)  User Commands\n").title == "LS(1)"
    assert parse_document("").title == "untitled"
    assert parse_document("NAME\n", title="  ls  ").title == "ls"


def test_cache_evicts_least_recently_used() -> None:
    cache = DocumentCache(max_entries=2)
    first = cache.put(parse_document("first\n"))
    second = cache.put(parse_document("second\n"))

    assert cache.get(first.document_id) is first
    third = cache.put(parse_document("third\n"))

    assert len(cache) == 2
    assert cache.get(second.document_id) is None
    assert cache.get(first.document_id) is first
    assert cache.get(third.document_id) is third


def test_cache_resize_evicts_oldest_entries() -> None:
    cache = DocumentCache(max_entries=3)
    documents = [cache.put(parse_document(f"doc {index}\n")) for index in range(3)]

    cache.resize(1)

    assert cache.max_entries == 1
    assert len(cache) == 1
    assert cache.get(documents[-1].document_id) is documents[-1]


def test_require_raises_for_unknown_document() -> None:
    cache = DocumentCache()

    with pytest.raises(DocumentNotFoundError) as excinfo:
        cache.require("missing")

    assert excinfo.value.code == "document_not_found"
    assert excinfo.value.extra == {"document_id": "missing"}
