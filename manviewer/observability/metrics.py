"""Request and document-processing metrics kept in memory."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from threading import Lock
from time import perf_counter
from typing import Dict

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp


@dataclass
class RouteStats:
    """Mutable statistics for a single route."""

    count: int = 0
    total_duration_ms: float = 0.0
    max_duration_ms: float = 0.0


@dataclass
class ProcessingStats:
    """Counters for parsing and searching work done on behalf of clients."""

    documents_parsed: int = 0
    lines_parsed: int = 0
    sections_detected: int = 0
    searches: int = 0
    searches_capped: int = 0
    matches_returned: int = 0


class MetricsRegistry:
    """In-memory collector for lightweight request and processing metrics."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._in_flight = 0
        self._requests_total = 0
        self._status_families: Counter[str] = Counter()
        self._routes: Dict[str, RouteStats] = {}
        self._processing = ProcessingStats()

    def reset(self) -> None:
        """Reset all counters (useful for tests)."""

        with self._lock:
            self._in_flight = 0
            self._requests_total = 0
            self._status_families = Counter()
            self._routes = {}
            self._processing = ProcessingStats()

    def request_started(self) -> None:
        with self._lock:
            self._in_flight += 1

    def request_finished(
        self,
        method: str,
        path: str,
        status_code: int,
        duration_seconds: float,
    ) -> None:
        """Record request completion statistics."""

        duration_ms = max(duration_seconds * 1000.0, 0.0)
        route_key = f"{method.upper()} {path}"

        with self._lock:
            self._in_flight = max(0, self._in_flight - 1)
            self._requests_total += 1
            self._status_families[f"{status_code // 100}xx"] += 1

            stats = self._routes.setdefault(route_key, RouteStats())
            stats.count += 1
            stats.total_duration_ms += duration_ms
            stats.max_duration_ms = max(stats.max_duration_ms, duration_ms)

    def document_parsed(self, line_count: int, section_count: int) -> None:
        with self._lock:
            self._processing.documents_parsed += 1
            self._processing.lines_parsed += line_count
            self._processing.sections_detected += section_count

    def search_completed(self, match_count: int, capped: bool) -> None:
        with self._lock:
            self._processing.searches += 1
            self._processing.matches_returned += match_count
            if capped:
                self._processing.searches_capped += 1

    def snapshot(self) -> Dict[str, object]:
        """Return a point-in-time copy of the collected metrics."""

        with self._lock:
            routes = {
                key: {
                    "count": stats.count,
                    "avg_duration_ms": stats.total_duration_ms / (stats.count or 1),
                    "max_duration_ms": stats.max_duration_ms,
                }
                for key, stats in self._routes.items()
            }
            processing = self._processing
            return {
                "requests_total": self._requests_total,
                "in_flight": self._in_flight,
                "status_codes": dict(self._status_families),
                "routes": routes,
                "processing": {
                    "documents_parsed": processing.documents_parsed,
                    "lines_parsed": processing.lines_parsed,
                    "sections_detected": processing.sections_detected,
                    "searches": processing.searches,
                    "searches_capped": processing.searches_capped,
                    "matches_returned": processing.matches_returned,
                },
            }


UNMATCHED_ROUTE = "<unmatched>"


def _route_template(request: Request) -> str:
    """Return the matched route path so ids in URLs do not fan out the stats.

    The router records the matched route in the scope; requests that matched
    nothing share a single key.
    """

    route = request.scope.get("route")
    return getattr(route, "path", None) or UNMATCHED_ROUTE


class RequestMetricsMiddleware(BaseHTTPMiddleware):
    """ASGI middleware that records request metrics."""

    def __init__(
        self,
        app: ASGIApp,
        *,
        registry: MetricsRegistry | None = None,
    ) -> None:
        super().__init__(app)
        self._registry = registry or metrics_registry

    async def dispatch(self, request: Request, call_next):
        start = perf_counter()
        self._registry.request_started()
        try:
            response = await call_next(request)
        except Exception:
            self._registry.request_finished(
                request.method, _route_template(request), 500, perf_counter() - start
            )
            raise
        self._registry.request_finished(
            request.method,
            _route_template(request),
            getattr(response, "status_code", 200),
            perf_counter() - start,
        )
        return response


metrics_registry = MetricsRegistry()

__all__ = [
    "MetricsRegistry",
    "ProcessingStats",
    "RequestMetricsMiddleware",
    "RouteStats",
    "UNMATCHED_ROUTE",
    "metrics_registry",
]
