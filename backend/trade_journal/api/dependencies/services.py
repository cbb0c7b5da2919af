"""Providers for the analytics service and its collaborators."""

from __future__ import annotations

from fastapi import Depends, HTTPException, status

from trade_journal.config import AppSettings, get_settings
from trade_journal.domain import Trade
from trade_journal.providers import PriceSource
from trade_journal.schemas import TradeListRequest
from trade_journal.services import TradeAnalyticsService, build_price_source


def get_app_settings() -> AppSettings:
    return get_settings()


def get_price_vendor() -> PriceSource | None:
    """Primary market data feed; override when wiring a vendor. ``None`` uses only the bundled table."""

    return None


def get_analytics_service(
    settings: AppSettings = Depends(get_app_settings),
    vendor: PriceSource | None = Depends(get_price_vendor),
) -> TradeAnalyticsService:
    # A fresh cache per request so quotes never outlive the call that fetched them.
    return TradeAnalyticsService(settings, build_price_source(settings, vendor))


def load_trades(payload: TradeListRequest) -> list[Trade]:
    """Convert request trades to domain records, mapping validation errors to 422."""

    try:
        return payload.to_trades()
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
