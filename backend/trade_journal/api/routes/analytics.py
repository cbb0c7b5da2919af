"""Trade journal analytics endpoints.

Trades are supplied with each request; storage lives with the journal, not
with this service.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from trade_journal.analytics.performance import RollingWindow
from trade_journal.api.dependencies.services import get_analytics_service, load_trades
from trade_journal.domain import Trade
from trade_journal.patterns import TradingPattern
from trade_journal.schemas import (
    BehavioralMetricsSchema,
    BehaviorResponse,
    BucketPerformanceSchema,
    DailyReturnSchema,
    InsightsRequest,
    InsightsResponse,
    MetricsResponse,
    MetricsSchema,
    PatternMetadataSchema,
    PatternPerformanceSchema,
    PatternResponse,
    PatternSchema,
    PatternSummarySchema,
    PerformanceRequest,
    PerformanceResponse,
    PositionSchema,
    RiskAssessmentSchema,
    RollingPerformanceSchema,
    RollingWindowSchema,
    TickerPerformanceSchema,
    TradeInsightSchema,
    TradeListRequest,
    TradeSchema,
    YearlyPerformanceSchema,
)
from trade_journal.services import TradeAnalyticsService

router = APIRouter()


def _current_prices(
    payload: TradeListRequest,
    trades: list[Trade],
    service: TradeAnalyticsService,
) -> dict[str, float]:
    prices: dict[str, float] = {}
    if payload.mark_to_market:
        prices.update(service.mark_to_market(trades))
    if payload.current_prices:
        prices.update({ticker.upper(): price for ticker, price in payload.current_prices.items()})
    return prices


def _pattern_schema(pattern: TradingPattern) -> PatternSchema:
    return PatternSchema(
        id=pattern.id,
        type=pattern.type.value,
        name=pattern.name,
        confidence=pattern.confidence,
        description=pattern.description,
        trades=[TradeSchema.from_trade(trade) for trade in pattern.trades],
        performance=PatternPerformanceSchema.model_validate(pattern.performance),
        metadata=PatternMetadataSchema.model_validate(pattern.metadata),
    )


@router.post("/metrics", response_model=MetricsResponse)
async def post_metrics(
    payload: TradeListRequest,
    service: TradeAnalyticsService = Depends(get_analytics_service),
) -> MetricsResponse:
    """Aggregate performance and risk metrics for the supplied trades."""

    trades = load_trades(payload)
    prices = _current_prices(payload, trades, service)
    metrics, risk = service.metrics(trades, prices)
    return MetricsResponse(
        metrics=MetricsSchema.model_validate(metrics),
        risk=RiskAssessmentSchema.model_validate(risk),
        current_prices=prices,
    )


@router.post("/performance", response_model=PerformanceResponse)
async def post_performance(
    payload: PerformanceRequest,
    service: TradeAnalyticsService = Depends(get_analytics_service),
) -> PerformanceResponse:
    """Period metrics with daily, monthly, weekly and yearly breakdowns."""

    trades = load_trades(payload)
    try:
        result = service.period(
            trades,
            payload.period,  # type: ignore[arg-type]
            start=payload.start_date,
            end=payload.end_date,
            today=payload.today,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    year = payload.year or (payload.today.year if payload.today else None)
    monthly, weekly, yearly = service.calendar(trades, year)
    return PerformanceResponse(
        period=result.period,
        start_date=result.start_date,
        end_date=result.end_date,
        metrics=MetricsSchema.model_validate(result.metrics),
        trades=[TradeSchema.from_trade(trade) for trade in result.trades],
        daily_returns=[DailyReturnSchema.model_validate(row) for row in result.daily_returns],
        monthly=[BucketPerformanceSchema.model_validate(row) for row in monthly],
        weekly=[BucketPerformanceSchema.model_validate(row) for row in weekly],
        yearly=[YearlyPerformanceSchema.model_validate(row) for row in yearly],
    )


@router.post("/tickers", response_model=list[TickerPerformanceSchema])
async def post_tickers(
    payload: TradeListRequest,
    service: TradeAnalyticsService = Depends(get_analytics_service),
) -> list[TickerPerformanceSchema]:
    trades = load_trades(payload)
    return [TickerPerformanceSchema.model_validate(row) for row in service.tickers(trades)]


@router.post("/patterns", response_model=PatternResponse)
async def post_patterns(
    payload: TradeListRequest,
    service: TradeAnalyticsService = Depends(get_analytics_service),
) -> PatternResponse:
    """Detect recurring trade patterns and derive recommendations."""

    trades = load_trades(payload)
    result, recommendations = service.patterns(trades)
    return PatternResponse(
        patterns=[_pattern_schema(pattern) for pattern in result.patterns],
        summary=PatternSummarySchema.model_validate(result.summary),
        recommendations=recommendations,
    )


@router.post("/positions", response_model=list[PositionSchema])
async def post_positions(
    payload: TradeListRequest,
    service: TradeAnalyticsService = Depends(get_analytics_service),
) -> list[PositionSchema]:
    trades = load_trades(payload)
    prices = _current_prices(payload, trades, service)
    return [
        PositionSchema(
            ticker=position.ticker,
            total_quantity=position.total_quantity,
            open_quantity=position.open_quantity,
            average_entry_price=position.average_entry_price,
            total_investment=position.total_investment,
            total_fees=position.total_fees,
            is_short=position.is_short,
            is_open=position.is_open,
            trade_count=len(position.trades),
            current_price=position.current_price,
            current_value=position.current_value,
            unrealized_pnl=position.unrealized_pnl,
            unrealized_pnl_pct=position.unrealized_pnl_pct,
        )
        for position in service.positions(trades, prices)
    ]


def _window_schema(window: RollingWindow | None) -> RollingWindowSchema | None:
    return RollingWindowSchema.model_validate(window) if window is not None else None


@router.post("/behavior", response_model=BehaviorResponse)
async def post_behavior(
    payload: TradeListRequest,
    service: TradeAnalyticsService = Depends(get_analytics_service),
) -> BehaviorResponse:
    """Trading habits and rolling-window performance."""

    trades = load_trades(payload)
    behavior, rolling = service.behavior(trades)
    return BehaviorResponse(
        behavior=BehavioralMetricsSchema.model_validate(behavior),
        rolling=RollingPerformanceSchema(
            window_size=rolling.window_size,
            windows=[RollingWindowSchema.model_validate(window) for window in rolling.windows],
            best=_window_schema(rolling.best),
            worst=_window_schema(rolling.worst),
        ),
    )


@router.post("/insights", response_model=InsightsResponse)
async def post_insights(
    payload: InsightsRequest,
    service: TradeAnalyticsService = Depends(get_analytics_service),
) -> InsightsResponse:
    trades = load_trades(payload)
    insights, suggestions = service.insights(trades, payload.today)
    return InsightsResponse(
        insights=[TradeInsightSchema.model_validate(insight) for insight in insights],
        suggestions=suggestions,
    )


__all__ = [
    "post_behavior",
    "post_insights",
    "post_metrics",
    "post_patterns",
    "post_performance",
    "post_positions",
    "post_tickers",
]
