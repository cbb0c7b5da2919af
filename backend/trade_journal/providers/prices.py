"""Pluggable price sources for benchmarking and marking open trades.

Vendor integrations live outside this package; anything implementing
:class:`PriceSource` can be injected. A bundled monthly S&P 500 close table
keeps benchmarks usable when the primary source is unavailable.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Mapping, MutableMapping, Protocol

logger = logging.getLogger(__name__)

SP500_SYMBOL = "^GSPC"

# Month-start S&P 500 closes used when no live series is available.
FALLBACK_SP500_CLOSES: dict[date, float] = {
    date(2024, 1, 1): 4769.83,
    date(2024, 2, 1): 4927.93,
    date(2024, 3, 1): 5137.08,
    date(2024, 4, 1): 5205.81,
    date(2024, 5, 1): 5035.69,
    date(2024, 6, 1): 5277.51,
    date(2024, 7, 1): 5461.27,
    date(2025, 1, 1): 5650.00,
    date(2025, 7, 26): 5670.00,
}


class MarketDataError(RuntimeError):
    """Raised when a price source cannot satisfy a request."""


class PriceSource(Protocol):
    """Daily close provider."""

    def get_price_series(
        self,
        ticker: str,
        start_date: date | None,
        end_date: date | None,
    ) -> dict[date, float]:
        ...

    def get_latest_price(self, ticker: str) -> float:
        ...


class InMemoryPriceSource:
    """Simple price source for tests and offline use."""

    def __init__(self, prices: Mapping[str, Mapping[date, float | str]]):
        self._prices: dict[str, dict[date, float]] = {
            ticker.upper(): {d: float(v) for d, v in series.items()}
            for ticker, series in prices.items()
        }

    def get_price_series(
        self,
        ticker: str,
        start_date: date | None,
        end_date: date | None,
    ) -> dict[date, float]:
        series = self._prices.get(ticker.upper(), {})
        result: dict[date, float] = {}
        for d, close in series.items():
            if start_date and d < start_date:
                continue
            if end_date and d > end_date:
                continue
            result[d] = close
        return dict(sorted(result.items()))

    def get_latest_price(self, ticker: str) -> float:
        series = self.get_price_series(ticker, None, None)
        if not series:
            raise MarketDataError(f"No prices for ticker {ticker}")
        return series[max(series)]


class CachingPriceSource:
    """Cache wrapper to avoid refetching the same price ranges.

    Entries never expire; keep one instance per request or computation.
    """

    def __init__(self, delegate: PriceSource):
        self.delegate = delegate
        self._range_cache: MutableMapping[tuple, dict[date, float]] = {}
        self._latest_cache: MutableMapping[str, float] = {}

    def get_price_series(
        self,
        ticker: str,
        start_date: date | None,
        end_date: date | None,
    ) -> dict[date, float]:
        key = (ticker.upper(), start_date, end_date)
        if key not in self._range_cache:
            self._range_cache[key] = self.delegate.get_price_series(ticker, start_date, end_date)
        return dict(self._range_cache[key])

    def get_latest_price(self, ticker: str) -> float:
        key = ticker.upper()
        if key not in self._latest_cache:
            self._latest_cache[key] = self.delegate.get_latest_price(ticker)
        return self._latest_cache[key]

    def clear(self) -> None:
        self._range_cache.clear()
        self._latest_cache.clear()


class FallbackPriceSource:
    """Try ``primary`` first and fall back when it errors or returns nothing."""

    def __init__(self, primary: PriceSource, fallback: PriceSource):
        self.primary = primary
        self.fallback = fallback

    def get_price_series(
        self,
        ticker: str,
        start_date: date | None,
        end_date: date | None,
    ) -> dict[date, float]:
        try:
            series = self.primary.get_price_series(ticker, start_date, end_date)
        except MarketDataError as exc:
            logger.warning("Primary price source failed for %s: %s", ticker, exc)
            series = {}
        if series:
            return series
        return self.fallback.get_price_series(ticker, start_date, end_date)

    def get_latest_price(self, ticker: str) -> float:
        try:
            return self.primary.get_latest_price(ticker)
        except MarketDataError as exc:
            logger.warning("Primary latest price failed for %s: %s", ticker, exc)
        return self.fallback.get_latest_price(ticker)


def sp500_fallback_source() -> InMemoryPriceSource:
    return InMemoryPriceSource({SP500_SYMBOL: FALLBACK_SP500_CLOSES})


__all__ = [
    "CachingPriceSource",
    "FALLBACK_SP500_CLOSES",
    "FallbackPriceSource",
    "InMemoryPriceSource",
    "MarketDataError",
    "PriceSource",
    "SP500_SYMBOL",
    "sp500_fallback_source",
]
