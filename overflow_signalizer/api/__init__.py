"""Routers mounted under ``/v1``: liveness and sequence overflow checks."""

from fastapi import APIRouter

from .routes import health_router
from .v1 import sequences

api_router = APIRouter()
api_router.include_router(health_router, prefix="/health", tags=["health"])
api_router.include_router(sequences.router, tags=["sequences"])

__all__ = ["api_router"]
