"""Pydantic schema exports."""

from .analytics import (
    BehavioralMetricsSchema,
    BehaviorResponse,
    BucketPerformanceSchema,
    DailyReturnSchema,
    InsightsResponse,
    MetricsResponse,
    MetricsSchema,
    PatternMetadataSchema,
    PatternPerformanceSchema,
    PatternResponse,
    PatternSchema,
    PatternSummarySchema,
    PerformanceResponse,
    PositionSchema,
    RiskAssessmentSchema,
    RollingPerformanceSchema,
    RollingWindowSchema,
    TickerPerformanceSchema,
    TradeInsightSchema,
    YearlyPerformanceSchema,
)
from .benchmark import (
    ComprehensiveBenchmarkResponse,
    IndexPerformanceResponse,
    PortfolioStatsSchema,
    TradeBenchmarkResponse,
    TradeBenchmarkSchema,
)
from .trades import (
    ComprehensiveBenchmarkRequest,
    InsightsRequest,
    PerformanceRequest,
    TradeListRequest,
    TradeSchema,
)

__all__ = [
    "BehaviorResponse",
    "BehavioralMetricsSchema",
    "BucketPerformanceSchema",
    "ComprehensiveBenchmarkRequest",
    "ComprehensiveBenchmarkResponse",
    "DailyReturnSchema",
    "IndexPerformanceResponse",
    "InsightsRequest",
    "InsightsResponse",
    "MetricsResponse",
    "MetricsSchema",
    "PatternMetadataSchema",
    "PatternPerformanceSchema",
    "PatternResponse",
    "PatternSchema",
    "PatternSummarySchema",
    "PerformanceRequest",
    "PerformanceResponse",
    "PortfolioStatsSchema",
    "PositionSchema",
    "RiskAssessmentSchema",
    "RollingPerformanceSchema",
    "RollingWindowSchema",
    "TickerPerformanceSchema",
    "TradeBenchmarkResponse",
    "TradeBenchmarkSchema",
    "TradeInsightSchema",
    "TradeListRequest",
    "TradeSchema",
    "YearlyPerformanceSchema",
]
