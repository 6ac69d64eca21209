"""ManViewer HTTP entrypoint."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .config import get_settings
from .middleware import RequestIdMiddleware
from .observability import RequestMetricsMiddleware
from .routers import api_router
from .services.document_cache import document_cache
from .utils.logging import configure_logging

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger("uvicorn.error")

cors_allow_origins = list(settings.cors_allow_origins)
allow_credentials = True
if "*" in cors_allow_origins:
    cors_allow_origins = ["*"]
    allow_credentials = False


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Size the document cache from settings for the lifetime of the app."""

    current = get_settings()
    document_cache.resize(current.document_cache_size)
    logger.info(
        "[ManViewer] %s ready (cache=%d documents, match limit=%d)",
        __version__,
        current.document_cache_size,
        current.search_match_limit,
    )
    yield
    document_cache.clear()


app = FastAPI(title="ManViewer", version=__version__, lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_allow_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
    allow_origin_regex=settings.cors_allow_origin_regex,
)
app.add_middleware(RequestIdMiddleware)
app.add_middleware(RequestMetricsMiddleware)
app.include_router(api_router)


@app.exception_handler(Exception)
async def handle_unexpected_exception(
    request: Request, exc: Exception
) -> JSONResponse:
    """Ensure unexpected exceptions return a JSON payload."""

    logger.exception(
        "Unhandled exception while processing %s %s", request.method, request.url.path
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal Server Error"},
    )


__all__ = ["app"]
