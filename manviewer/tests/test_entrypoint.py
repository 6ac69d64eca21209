"""Tests for the ``python -m manviewer`` launcher."""

from __future__ import annotations

import pytest

from manviewer import __main__ as entrypoint
from manviewer.config import reset_settings_cache


@pytest.fixture()
def uvicorn_calls(monkeypatch: pytest.MonkeyPatch) -> list:
    calls: list = []
    monkeypatch.setattr(
        entrypoint.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs))
    )
    return calls


def test_main_uses_settings_by_default(monkeypatch, uvicorn_calls) -> None:
    monkeypatch.setenv("PORT", "8123")
    monkeypatch.delenv("HOST", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    reset_settings_cache()
    try:
        entrypoint.main([])
    finally:
        reset_settings_cache()

    assert uvicorn_calls == [
        ("manviewer.main:app", {"host": "127.0.0.1", "port": 8123, "log_level": "info"})
    ]


def test_flags_override_settings(monkeypatch, uvicorn_calls) -> None:
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    reset_settings_cache()
    try:
        entrypoint.main(["--host", "0.0.0.0", "--port", "9001", "--log-level", "debug"])
    finally:
        reset_settings_cache()

    _, kwargs = uvicorn_calls[0]
    assert kwargs == {"host": "0.0.0.0", "port": 9001, "log_level": "debug"}
