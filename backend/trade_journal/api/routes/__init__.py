"""Route registration helpers."""

from __future__ import annotations

from fastapi import APIRouter

from .analytics import router as analytics_router
from .benchmark import router as benchmark_router

api_router = APIRouter()
api_router.include_router(analytics_router, prefix="/analytics", tags=["analytics"])
api_router.include_router(benchmark_router, prefix="/benchmark", tags=["benchmark"])

__all__ = ["api_router"]
