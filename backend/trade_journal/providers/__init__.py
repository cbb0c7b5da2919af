"""Market data collaborators."""

from .prices import (
    CachingPriceSource,
    FallbackPriceSource,
    InMemoryPriceSource,
    MarketDataError,
    PriceSource,
    SP500_SYMBOL,
    sp500_fallback_source,
)

__all__ = [
    "CachingPriceSource",
    "FallbackPriceSource",
    "InMemoryPriceSource",
    "MarketDataError",
    "PriceSource",
    "SP500_SYMBOL",
    "sp500_fallback_source",
]
