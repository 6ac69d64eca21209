"""Test configuration for ManViewer."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Generator

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from manviewer.config import reset_settings_cache  # noqa: E402
from manviewer.observability import metrics_registry  # noqa: E402
from manviewer.services.document_cache import document_cache  # noqa: E402

SAMPLE_PAGE = (
    "LS(1)\n\nNAME\n\nls - list directory contents\n\nSYNOPSIS\n\n"
    "ls [OPTION]...\n\nOPTIONS\n   SEARCH\n       -a, --all\n"
    "              do not ignore entries starting with .\n\n"
    "   DISPLAY\n       --color[=WHEN]\n              colorize the output; see LS_COLORS\n\n"
    "SEE ALSO\n\ndircolors(1), ls(1)\n"
)


@pytest.fixture(autouse=True)
def _isolate_environment(
    monkeypatch: pytest.MonkeyPatch,
) -> Generator[None, None, None]:
    """Provide isolated configuration and empty caches for each test."""

    for name in (
        "MANVIEWER_SEARCH_MATCH_LIMIT",
        "MANVIEWER_DOCUMENT_CACHE_SIZE",
        "MANVIEWER_MAX_DOCUMENT_CHARS",
        "MANVIEWER_LINES_PAGE_LIMIT",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_settings_cache()
    document_cache.clear()
    metrics_registry.reset()
    yield
    reset_settings_cache()
    document_cache.clear()
    metrics_registry.reset()


@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    """Return a test client for the FastAPI application."""

    from manviewer.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def sample_page() -> str:
    return SAMPLE_PAGE


@pytest.fixture()
def document_id(client: TestClient, sample_page: str) -> str:
    """Submit the sample page and return its identifier."""

    response = client.post("/api/documents", json={"text": sample_page})
    assert response.status_code == 201
    return response.json()["document_id"]
