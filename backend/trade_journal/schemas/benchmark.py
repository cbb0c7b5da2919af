"""Schemas for index benchmarking."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict


class TradeBenchmarkSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    trade_id: int | str | None = None
    ticker: str
    trade_return: float
    index_return: float
    alpha: float
    outperformance: bool
    start_date: date
    end_date: date
    index_start_price: float | None = None
    index_end_price: float | None = None


class PortfolioStatsSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    portfolio_return: float
    total_trades: int
    winning_trades: int
    win_rate: float
    average_return: float
    volatility: float
    sharpe_ratio: float
    max_drawdown: float


class ComprehensiveBenchmarkResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    symbol: str
    portfolio: PortfolioStatsSchema
    index_return: float
    alpha: float
    outperformance: bool


class TradeBenchmarkResponse(BaseModel):
    symbol: str
    benchmarks: list[TradeBenchmarkSchema]


class IndexPerformanceResponse(BaseModel):
    symbol: str
    period: str
    index_return: float


__all__ = [
    "ComprehensiveBenchmarkResponse",
    "IndexPerformanceResponse",
    "PortfolioStatsSchema",
    "TradeBenchmarkResponse",
    "TradeBenchmarkSchema",
]
