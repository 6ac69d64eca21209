"""Routes that expose operational observability data."""

from __future__ import annotations

from fastapi import APIRouter

from .. import __version__
from ..observability import metrics_registry
from ..services.document_cache import document_cache

router = APIRouter(prefix="/api", tags=["observability"])


@router.get("/metrics")
def read_metrics() -> dict[str, object]:
    """Return the current request metrics snapshot."""

    return metrics_registry.snapshot()


@router.get("/status")
def read_status() -> dict[str, object]:
    """Return an aggregated operational status payload."""

    return {
        "app": {"version": __version__},
        "documents": {
            "cached": len(document_cache),
            "capacity": document_cache.max_entries,
        },
        "metrics": metrics_registry.snapshot(),
    }


__all__ = ["router"]
