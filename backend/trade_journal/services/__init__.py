"""Service layer wiring analytics to price data."""

from .analytics import TradeAnalyticsService, build_price_source
from .benchmark import BenchmarkService
from .positions import Position, build_positions

__all__ = [
    "BenchmarkService",
    "Position",
    "TradeAnalyticsService",
    "build_positions",
    "build_price_source",
]
