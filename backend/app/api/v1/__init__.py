"""Versioned API router."""

from fastapi import APIRouter

from . import health, quotes

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(quotes.router)

__all__ = ["router"]
