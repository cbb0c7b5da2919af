"""Benchmark trade and portfolio returns against a market index."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Literal, Sequence

import numpy as np
import pandas as pd

from trade_journal.domain import Trade, closed_trades
from trade_journal.providers import PriceSource

logger = logging.getLogger(__name__)

IndexPeriod = Literal["1M", "3M", "6M", "1Y", "YTD"]


@dataclass(frozen=True)
class TradeBenchmark:
    trade_id: int | str | None
    ticker: str
    trade_return: float
    index_return: float
    alpha: float
    outperformance: bool
    start_date: date
    end_date: date
    index_start_price: float | None
    index_end_price: float | None


@dataclass(frozen=True)
class PortfolioBenchmark:
    portfolio_return: float
    index_return: float
    alpha: float
    outperformance: bool


@dataclass(frozen=True)
class PortfolioStats:
    portfolio_return: float
    total_trades: int
    winning_trades: int
    win_rate: float
    average_return: float
    volatility: float
    sharpe_ratio: float
    max_drawdown: float


@dataclass(frozen=True)
class ComprehensiveBenchmark:
    portfolio: PortfolioStats
    index_return: float
    alpha: float
    outperformance: bool


def _as_date(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value


def trade_return_pct(trade: Trade) -> float:
    """Net P&L as a percentage of the capital committed at entry."""

    pnl = trade.profit_loss or 0.0
    return pnl / trade.notional * 100 if trade.notional > 0 else 0.0


class BenchmarkService:
    """Compare journal returns with ``symbol`` using an injected price source."""

    def __init__(
        self,
        price_source: PriceSource,
        *,
        symbol: str = "^GSPC",
        risk_free_rate_pct: float = 2.0,
        lookback_days: int = 30,
    ):
        self.price_source = price_source
        self.symbol = symbol
        self.risk_free_rate_pct = risk_free_rate_pct
        self.lookback_days = lookback_days

    def index_return(self, start: date, end: date) -> float:
        """Percent change from the first to the last close in ``[start, end]``."""

        series = self.price_source.get_price_series(self.symbol, start, end)
        if len(series) < 2:
            return 0.0
        closes = list(series.values())
        first, last = closes[0], closes[-1]
        if first == 0:
            return 0.0
        return (last - first) / first * 100

    def index_price_on(self, day: date) -> float | None:
        """Close nearest to ``day`` within the lookback window ending on it."""

        series = self.price_source.get_price_series(
            self.symbol, day - timedelta(days=self.lookback_days), day
        )
        if not series:
            return None
        nearest = min(series, key=lambda d: abs((d - day).days))
        return series[nearest]

    def trade_benchmarks(self, trades: Sequence[Trade]) -> list[TradeBenchmark]:
        benchmarks: list[TradeBenchmark] = []
        for trade in closed_trades(trades):
            start = _as_date(trade.entry_date)
            end = _as_date(trade.exit_date)  # type: ignore[arg-type]
            trade_return = trade_return_pct(trade)
            index_return = self.index_return(start, end)
            alpha = trade_return - index_return
            benchmarks.append(
                TradeBenchmark(
                    trade_id=trade.id,
                    ticker=trade.ticker,
                    trade_return=trade_return,
                    index_return=index_return,
                    alpha=alpha,
                    outperformance=alpha > 0,
                    start_date=start,
                    end_date=end,
                    index_start_price=self.index_price_on(start),
                    index_end_price=self.index_price_on(end),
                )
            )
        logger.debug("Benchmarked %d closed trades against %s", len(benchmarks), self.symbol)
        return benchmarks

    def portfolio_benchmark(
        self, total_pnl: float, total_value: float, start: date, end: date
    ) -> PortfolioBenchmark:
        if start > end:
            raise ValueError("start cannot be after end")
        portfolio_return = total_pnl / total_value * 100 if total_value > 0 else 0.0
        index_return = self.index_return(start, end)
        alpha = portfolio_return - index_return
        return PortfolioBenchmark(
            portfolio_return=portfolio_return,
            index_return=index_return,
            alpha=alpha,
            outperformance=alpha > 0,
        )

    def index_performance(self, period: IndexPeriod, today: date | None = None) -> float:
        today = today or date.today()
        if period == "YTD":
            start = date(today.year, 1, 1)
        else:
            months = {"1M": 1, "3M": 3, "6M": 6, "1Y": 12}.get(period)
            if months is None:
                raise ValueError(f"Unsupported period: {period}")
            start = (pd.Timestamp(today) - pd.DateOffset(months=months)).date()
        return self.index_return(start, today)

    def comprehensive(self, trades: Sequence[Trade], today: date | None = None) -> ComprehensiveBenchmark:
        """Whole-journal return statistics next to the index's year-to-date return."""

        closed = closed_trades(trades)
        returns = [trade_return_pct(t) for t in closed]
        total_pnl = sum(t.profit_loss for t in closed)
        total_value = sum(t.notional for t in closed)
        winners = sum(1 for t in closed if t.profit_loss > 0)

        portfolio_return = total_pnl / total_value * 100 if total_value > 0 else 0.0
        volatility = float(np.std(returns)) if returns else 0.0
        sharpe = (portfolio_return - self.risk_free_rate_pct) / volatility if volatility > 0 else 0.0
        index_return = self.index_performance("YTD", today)
        alpha = portfolio_return - index_return

        stats = PortfolioStats(
            portfolio_return=portfolio_return,
            total_trades=len(closed),
            winning_trades=winners,
            win_rate=winners / len(closed) * 100 if closed else 0.0,
            average_return=float(np.mean(returns)) if returns else 0.0,
            volatility=volatility,
            sharpe_ratio=sharpe,
            # Worst single-trade return stands in for drawdown on this view.
            max_drawdown=-min(returns) if returns else 0.0,
        )
        return ComprehensiveBenchmark(
            portfolio=stats,
            index_return=index_return,
            alpha=alpha,
            outperformance=alpha > 0,
        )


__all__ = [
    "BenchmarkService",
    "ComprehensiveBenchmark",
    "PortfolioBenchmark",
    "PortfolioStats",
    "TradeBenchmark",
    "trade_return_pct",
]
