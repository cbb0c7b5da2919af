"""FastAPI application entrypoint."""

from __future__ import annotations

import logging
from datetime import datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from trade_journal import __version__
from trade_journal.api.routes import api_router
from trade_journal.config import get_settings
from trade_journal.core.logging import setup_logging
from trade_journal.core.telemetry import setup_telemetry

logger = logging.getLogger(__name__)

settings = get_settings()
app = FastAPI(title=settings.app_name, version=__version__)
setup_logging(settings.log_level)
setup_telemetry(app, settings)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["traceparent", "tracestate", "x-request-id"],
)


@app.get("/health", tags=["health"])
async def health() -> dict[str, str]:
    """Return service readiness metadata."""

    return {
        "status": "ok",
        "version": __version__,
        "timestamp": datetime.now().isoformat(),
        "benchmark_symbol": settings.benchmark_symbol,
    }


def configure_app() -> FastAPI:
    """Attach routes."""

    app.include_router(api_router)
    logger.info("Configured %s with settings %s", settings.app_name, settings.model_dump())
    return app


configure_app()

__all__ = ["app", "configure_app"]
