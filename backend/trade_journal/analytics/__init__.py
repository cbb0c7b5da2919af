"""Performance and risk analytics."""

from .insights import (
    RiskAssessment,
    RiskLevel,
    TradeInsight,
    risk_levels,
    strategy_suggestions,
    trade_insights,
)
from .metrics import Metrics, compute_metrics
from .performance import (
    BehavioralMetrics,
    PeriodPerformance,
    RollingPerformance,
    TickerPerformance,
    behavioral_metrics,
    monthly_performance,
    period_performance,
    rolling_performance,
    ticker_performance,
    weekly_performance,
    yearly_performance,
)

__all__ = [
    "BehavioralMetrics",
    "Metrics",
    "PeriodPerformance",
    "RiskAssessment",
    "RiskLevel",
    "RollingPerformance",
    "TickerPerformance",
    "TradeInsight",
    "behavioral_metrics",
    "compute_metrics",
    "monthly_performance",
    "period_performance",
    "risk_levels",
    "rolling_performance",
    "strategy_suggestions",
    "ticker_performance",
    "trade_insights",
    "weekly_performance",
    "yearly_performance",
]
