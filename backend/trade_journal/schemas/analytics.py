"""Response schemas for metrics, breakdowns, patterns and positions."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from trade_journal.analytics.insights import InsightType, RiskLevel, Severity
from trade_journal.schemas.trades import TradeSchema


class MetricsSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_trades: int
    open_trades: int
    closed_trades: int
    winning_trades: int
    losing_trades: int
    total_pnl: float
    unrealized_pnl: float
    win_rate: float
    average_return: float
    average_win: float
    average_loss: float
    largest_win: float
    largest_loss: float
    profit_factor: float
    max_drawdown: float
    max_drawdown_pct: float
    current_drawdown_pct: float
    volatility: float
    return_volatility: float
    sharpe_ratio: float
    sortino_ratio: float
    calmar_ratio: float
    kelly_criterion: float
    expected_value: float
    max_consecutive_wins: int
    max_consecutive_losses: int
    risk_of_ruin: float
    total_volume: float
    average_holding_period: float


class RiskAssessmentSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    drawdown: RiskLevel
    sharpe: RiskLevel
    profit_factor: RiskLevel


class MetricsResponse(BaseModel):
    metrics: MetricsSchema
    risk: RiskAssessmentSchema
    current_prices: dict[str, float] = Field(default_factory=dict)


class BucketPerformanceSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    label: str
    year: int
    total_pnl: float
    total_trades: int
    winning_trades: int
    win_rate: float
    average_return: float
    start_date: date | None = None
    end_date: date | None = None


class YearlyPerformanceSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    year: int
    total_pnl: float
    total_trades: int
    winning_trades: int
    win_rate: float
    average_return: float
    monthly_breakdown: list[BucketPerformanceSchema] = Field(default_factory=list)


class DailyReturnSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    day: date
    pnl: float
    cumulative: float


class PerformanceResponse(BaseModel):
    period: str
    start_date: date
    end_date: date
    metrics: MetricsSchema
    trades: list[TradeSchema]
    daily_returns: list[DailyReturnSchema]
    monthly: list[BucketPerformanceSchema]
    weekly: list[BucketPerformanceSchema]
    yearly: list[YearlyPerformanceSchema]


class TickerPerformanceSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    ticker: str
    total_pnl: float
    total_trades: int
    winning_trades: int
    losing_trades: int
    win_rate: float
    average_return: float
    total_volume: float
    best_trade: float
    worst_trade: float


class PatternPerformanceSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    win_rate: float
    avg_return: float
    total_trades: int


class PatternMetadataSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    start_date: datetime
    end_date: datetime
    pattern_strength: float
    market_conditions: str


class PatternSchema(BaseModel):
    id: str
    type: str
    name: str
    confidence: float
    description: str
    trades: list[TradeSchema]
    performance: PatternPerformanceSchema
    metadata: PatternMetadataSchema


class PatternSummarySchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_patterns: int
    most_profitable_pattern: str
    average_confidence: float
    pattern_distribution: dict[str, int]


class PatternResponse(BaseModel):
    patterns: list[PatternSchema]
    summary: PatternSummarySchema
    recommendations: list[str]


class PositionSchema(BaseModel):
    ticker: str
    total_quantity: float
    open_quantity: float
    average_entry_price: float
    total_investment: float
    total_fees: float
    is_short: bool
    is_open: bool
    trade_count: int
    current_price: float | None = None
    current_value: float | None = None
    unrealized_pnl: float | None = None
    unrealized_pnl_pct: float | None = None



class RollingWindowSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    start_date: datetime
    end_date: datetime
    average_return: float
    volatility: float
    sharpe_ratio: float
    max_drawdown: float
    trade_count: int


class RollingPerformanceSchema(BaseModel):
    window_size: int
    windows: list[RollingWindowSchema]
    best: RollingWindowSchema | None = None
    worst: RollingWindowSchema | None = None


class BehavioralMetricsSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    average_holding_period: float
    trade_frequency: float = Field(..., description="Trades per 30 days between first and last entry")
    position_sizing_consistency: float
    risk_tolerance: float
    emotional_control: float


class BehaviorResponse(BaseModel):
    behavior: BehavioralMetricsSchema
    rolling: RollingPerformanceSchema


class TradeInsightSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    type: InsightType
    title: str
    description: str
    severity: Severity
    actionable: bool
    action: str | None = None


class InsightsResponse(BaseModel):
    insights: list[TradeInsightSchema]
    suggestions: list[str]


__all__ = [
    "BehaviorResponse",
    "BehavioralMetricsSchema",
    "BucketPerformanceSchema",
    "DailyReturnSchema",
    "InsightsResponse",
    "MetricsResponse",
    "MetricsSchema",
    "PatternMetadataSchema",
    "PatternPerformanceSchema",
    "PatternResponse",
    "PatternSchema",
    "PatternSummarySchema",
    "PerformanceResponse",
    "PositionSchema",
    "RiskAssessmentSchema",
    "RollingPerformanceSchema",
    "RollingWindowSchema",
    "TickerPerformanceSchema",
    "TradeInsightSchema",
    "YearlyPerformanceSchema",
]
