"""Tests for document submission, outline and line endpoints."""

from __future__ import annotations

from fastapi.testclient import TestClient

from manviewer.config import reset_settings_cache


def test_create_document_returns_sections_and_outline(client: TestClient, sample_page: str) -> None:
    response = client.post("/api/documents", json={"text": sample_page})
    assert response.status_code == 201
    payload = response.json()

    assert payload["title"] == "LS(1)"
    assert payload["line_count"] == 22
    assert [section["title"] for section in payload["sections"]] == [
        "NAME",
        "SYNOPSIS",
        "OPTIONS",
        "SEARCH",
        "DISPLAY",
        "SEE ALSO",
    ]
    options = payload["sections"][2]
    assert (options["start_line"], options["end_line"]) == (10, 18)

    outline = payload["outline"]
    assert [node["id"] for node in outline] == ["name", "synopsis", "options", "see-also"]
    assert [child["id"] for child in outline[2]["children"]] == ["search", "display"]
    assert outline[2]["children"][0]["parent_id"] == "options"


def test_create_document_accepts_explicit_title(client: TestClient) -> None:
    response = client.post("/api/documents", json={"text": "NAME\n", "title": "demo"})
    assert response.status_code == 201
    assert response.json()["title"] == "demo"


def test_resubmitting_same_text_reuses_identifier(client: TestClient, sample_page: str) -> None:
    first = client.post("/api/documents", json={"text": sample_page}).json()
    second = client.post(
        "/api/documents", json={"text": sample_page.replace("\n", "\r\n")}
    ).json()
    assert first["document_id"] == second["document_id"]


def test_read_document_round_trip(client: TestClient, document_id: str) -> None:
    response = client.get(f"/api/documents/{document_id}")
    assert response.status_code == 200
    assert response.json()["document_id"] == document_id


def test_unknown_document_returns_404(client: TestClient) -> None:
    response = client.get("/api/documents/does-not-exist")
    assert response.status_code == 404
    assert response.json()["detail"] == "Document not found; submit it again"

    lines_response = client.get("/api/documents/does-not-exist/lines")
    assert lines_response.status_code == 404


def test_oversized_document_is_rejected(client: TestClient, monkeypatch) -> None:
    monkeypatch.setenv("MANVIEWER_MAX_DOCUMENT_CHARS", "10")
    reset_settings_cache()

    response = client.post("/api/documents", json={"text": "x" * 11})
    assert response.status_code == 413
    assert "limit is 10" in response.json()["detail"]


def test_cache_capacity_follows_settings(client: TestClient, monkeypatch) -> None:
    monkeypatch.setenv("MANVIEWER_DOCUMENT_CACHE_SIZE", "1")
    reset_settings_cache()

    first = client.post("/api/documents", json={"text": "FIRST\n"}).json()
    second = client.post("/api/documents", json={"text": "SECOND\n"}).json()

    assert client.get(f"/api/documents/{first['document_id']}").status_code == 404
    assert client.get(f"/api/documents/{second['document_id']}").status_code == 200


def test_lines_endpoint_strips_indent_and_classifies_tokens(
    client: TestClient, document_id: str
) -> None:
    response = client.get(
        f"/api/documents/{document_id}/lines", params={"start": 10, "limit": 3}
    )
    assert response.status_code == 200
    payload = response.json()

    assert payload["start"] == 10
    assert payload["line_count"] == 22
    lines = payload["lines"]
    assert [line["line_index"] for line in lines] == [10, 11, 12]
    assert lines[0]["tokens"] == [{"text": "OPTIONS", "kind": "heading"}]
    assert lines[1]["indent"] == "   "
    assert lines[1]["tokens"] == [{"text": "SEARCH", "kind": "heading"}]
    assert lines[2]["text"] == "       -a, --all"
    assert lines[2]["tokens"] == [
        {"text": "-a", "kind": "option"},
        {"text": ", ", "kind": "plain"},
        {"text": "--all", "kind": "option"},
    ]


def test_lines_endpoint_can_keep_indent_in_tokens(client: TestClient, document_id: str) -> None:
    response = client.get(
        f"/api/documents/{document_id}/lines",
        params={"start": 12, "limit": 1, "strip_indent": False},
    )
    line = response.json()["lines"][0]

    assert line["indent"] == ""
    assert line["tokens"][0] == {"text": "       ", "kind": "plain"}
    assert "".join(token["text"] for token in line["tokens"]) == line["text"]


def test_lines_endpoint_respects_page_limit(client: TestClient, monkeypatch, document_id: str) -> None:
    monkeypatch.setenv("MANVIEWER_LINES_PAGE_LIMIT", "2")
    reset_settings_cache()

    response = client.get(f"/api/documents/{document_id}/lines", params={"limit": 10})
    assert len(response.json()["lines"]) == 2

    past_end = client.get(f"/api/documents/{document_id}/lines", params={"start": 500})
    assert past_end.json()["lines"] == []


def test_lines_endpoint_rejects_negative_start(client: TestClient, document_id: str) -> None:
    response = client.get(f"/api/documents/{document_id}/lines", params={"start": -1})
    assert response.status_code == 422


def test_tokens_endpoint(client: TestClient) -> None:
    response = client.post(
        "/api/tokens", json={"line": "  -a uses PATH", "strip_indent": True}
    )
    assert response.status_code == 200
    assert response.json()["tokens"] == [
        {"text": "-a", "kind": "option"},
        {"text": " uses ", "kind": "plain"},
        {"text": "PATH", "kind": "env"},
    ]


def test_sample_endpoint(client: TestClient) -> None:
    response = client.get("/api/sample/ls")
    assert response.status_code == 200
    payload = response.json()

    assert payload["title"] == "LS(1)"
    assert payload["source"] == "sample"

    created = client.post("/api/documents", json={"text": payload["raw_text"]}).json()
    titles = [section["title"] for section in created["sections"]]
    assert titles[:4] == ["NAME", "SYNOPSIS", "DESCRIPTION", "OPTIONS"]


def test_negative_page_limit_is_clamped_to_one_line(
    client: TestClient, monkeypatch, document_id: str
) -> None:
    monkeypatch.setenv("MANVIEWER_LINES_PAGE_LIMIT", "-4")
    reset_settings_cache()

    response = client.get(f"/api/documents/{document_id}/lines")
    assert [line["line_index"] for line in response.json()["lines"]] == [0]
