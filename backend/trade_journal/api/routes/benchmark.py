"""Index benchmarking endpoints."""

from __future__ import annotations

from datetime import date
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status

from trade_journal.api.dependencies.services import get_analytics_service, load_trades
from trade_journal.providers import MarketDataError
from trade_journal.schemas import (
    ComprehensiveBenchmarkRequest,
    ComprehensiveBenchmarkResponse,
    IndexPerformanceResponse,
    PortfolioStatsSchema,
    TradeBenchmarkResponse,
    TradeBenchmarkSchema,
    TradeListRequest,
)
from trade_journal.services import TradeAnalyticsService

router = APIRouter()


@router.post("/trades", response_model=TradeBenchmarkResponse)
async def post_trade_benchmarks(
    payload: TradeListRequest,
    service: TradeAnalyticsService = Depends(get_analytics_service),
) -> TradeBenchmarkResponse:
    """Compare each closed trade with the index over its holding window."""

    trades = load_trades(payload)
    try:
        benchmarks = service.trade_benchmarks(trades)
    except MarketDataError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    return TradeBenchmarkResponse(
        symbol=service.settings.benchmark_symbol,
        benchmarks=[TradeBenchmarkSchema.model_validate(row) for row in benchmarks],
    )


@router.post("/comprehensive", response_model=ComprehensiveBenchmarkResponse)
async def post_comprehensive_benchmark(
    payload: ComprehensiveBenchmarkRequest,
    service: TradeAnalyticsService = Depends(get_analytics_service),
) -> ComprehensiveBenchmarkResponse:
    trades = load_trades(payload)
    try:
        result = service.comprehensive_benchmark(trades, payload.today)
    except MarketDataError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    return ComprehensiveBenchmarkResponse(
        symbol=service.settings.benchmark_symbol,
        portfolio=PortfolioStatsSchema.model_validate(result.portfolio),
        index_return=result.index_return,
        alpha=result.alpha,
        outperformance=result.outperformance,
    )


@router.get("/index", response_model=IndexPerformanceResponse)
async def get_index_performance(
    period: Literal["1M", "3M", "6M", "1Y", "YTD"] = Query(default="1Y"),
    today: date | None = Query(default=None),
    service: TradeAnalyticsService = Depends(get_analytics_service),
) -> IndexPerformanceResponse:
    """Index return over a trailing period ending ``today``."""

    try:
        index_return = service.index_performance(period, today)
    except MarketDataError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    return IndexPerformanceResponse(
        symbol=service.settings.benchmark_symbol,
        period=period,
        index_return=index_return,
    )


__all__ = [
    "get_index_performance",
    "post_comprehensive_benchmark",
    "post_trade_benchmarks",
]
