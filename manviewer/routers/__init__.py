"""API router package."""

from fastapi import APIRouter

from .documents import router as documents_router
from .health import router as health_router
from .observability import router as observability_router
from .search import router as search_router

api_router = APIRouter()
api_router.include_router(documents_router)
api_router.include_router(health_router)
api_router.include_router(observability_router)
api_router.include_router(search_router)

__all__ = ["api_router"]
