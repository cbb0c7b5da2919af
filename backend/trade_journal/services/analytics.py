"""Service facade combining metrics, breakdowns, patterns and benchmarks.

The analytics functions are pure; this class only supplies collaborators
(settings and a price source), logging and tracing around them so API
handlers and scripts can share one entry point.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Mapping, Sequence

from opentelemetry import trace

from trade_journal.analytics import (
    BehavioralMetrics,
    Metrics,
    PeriodPerformance,
    RiskAssessment,
    RollingPerformance,
    TickerPerformance,
    TradeInsight,
    behavioral_metrics,
    compute_metrics,
    period_performance,
    risk_levels,
    rolling_performance,
    strategy_suggestions,
    ticker_performance,
    trade_insights,
)
from trade_journal.analytics.performance import (
    BucketPerformance,
    Period,
    YearlyPerformance,
    monthly_performance,
    weekly_performance,
    yearly_performance,
)
from trade_journal.config import AppSettings
from trade_journal.domain import Trade
from trade_journal.patterns import PatternDetectionResult, detect_patterns, pattern_recommendations
from trade_journal.providers import (
    CachingPriceSource,
    FallbackPriceSource,
    MarketDataError,
    PriceSource,
    sp500_fallback_source,
)
from trade_journal.services.benchmark import (
    BenchmarkService,
    ComprehensiveBenchmark,
    IndexPeriod,
    PortfolioBenchmark,
    TradeBenchmark,
)
from trade_journal.services.positions import Position, build_positions

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


def build_price_source(settings: AppSettings, primary: PriceSource | None = None) -> PriceSource | None:
    """Wrap ``primary`` in a cache, falling back to the bundled index table if enabled.

    Returns ``None`` when there is neither a primary source nor a fallback.
    The cache lives as long as the returned source, so build one per request.
    """

    if primary is None:
        return sp500_fallback_source() if settings.use_fallback_benchmark_prices else None
    source: PriceSource = CachingPriceSource(primary)
    if settings.use_fallback_benchmark_prices:
        source = FallbackPriceSource(source, sp500_fallback_source())
    return source


class TradeAnalyticsService:
    def __init__(self, settings: AppSettings, price_source: PriceSource | None):
        self.settings = settings
        self._price_source = price_source
        self._benchmark: BenchmarkService | None = None

    @property
    def price_source(self) -> PriceSource:
        if self._price_source is None:
            raise MarketDataError("No price source configured")
        return self._price_source

    @property
    def benchmark(self) -> BenchmarkService:
        if self._benchmark is None:
            self._benchmark = BenchmarkService(
                self.price_source,
                symbol=self.settings.benchmark_symbol,
                risk_free_rate_pct=self.settings.benchmark_risk_free_rate_pct,
                lookback_days=self.settings.benchmark_price_lookback_days,
            )
        return self._benchmark

    def metrics(
        self,
        trades: Sequence[Trade],
        current_prices: Mapping[str, float] | None = None,
    ) -> tuple[Metrics, RiskAssessment]:
        with tracer.start_as_current_span("analytics.metrics") as span:
            span.set_attribute("trades.count", len(trades))
            result = compute_metrics(trades, current_prices)
            logger.debug(
                "Computed metrics for %d trades (%d closed, total pnl %.2f)",
                result.total_trades,
                result.closed_trades,
                result.total_pnl,
            )
            return result, risk_levels(result)

    def mark_to_market(self, trades: Sequence[Trade]) -> dict[str, float]:
        """Latest prices for tickers with open trades; unavailable tickers are skipped."""

        prices: dict[str, float] = {}
        if self._price_source is None:
            logger.info("No price source configured; open trades stay unmarked")
            return prices
        for ticker in sorted({t.ticker for t in trades if t.is_open}):
            try:
                prices[ticker] = self._price_source.get_latest_price(ticker)
            except MarketDataError as exc:
                logger.info("No latest price for %s: %s", ticker, exc)
        return prices

    def period(
        self,
        trades: Sequence[Trade],
        period: Period = "month",
        *,
        start: date | None = None,
        end: date | None = None,
        today: date | None = None,
    ) -> PeriodPerformance:
        with tracer.start_as_current_span("analytics.period_performance") as span:
            span.set_attribute("analytics.period", period)
            return period_performance(trades, period, start=start, end=end, today=today)

    def tickers(self, trades: Sequence[Trade]) -> list[TickerPerformance]:
        return ticker_performance(trades)

    def calendar(
        self, trades: Sequence[Trade], year: int | None = None
    ) -> tuple[list[BucketPerformance], list[BucketPerformance], list[YearlyPerformance]]:
        return (
            monthly_performance(trades, year),
            weekly_performance(trades, year),
            yearly_performance(trades),
        )

    def behavior(self, trades: Sequence[Trade]) -> tuple[BehavioralMetrics, RollingPerformance]:
        with tracer.start_as_current_span("analytics.behavior") as span:
            rolling = rolling_performance(trades)
            span.set_attribute("rolling.windows", len(rolling.windows))
            return behavioral_metrics(trades), rolling

    def insights(
        self, trades: Sequence[Trade], today: date | None = None
    ) -> tuple[list[TradeInsight], list[str]]:
        """Graded insights and strategy suggestions sharing one metrics pass."""

        with tracer.start_as_current_span("analytics.insights") as span:
            metrics = compute_metrics(trades)
            insights = trade_insights(trades, metrics)
            span.set_attribute("insights.count", len(insights))
            logger.debug("Generated %d insights", len(insights))
            return insights, strategy_suggestions(trades, metrics, today)

    def patterns(self, trades: Sequence[Trade]) -> tuple[PatternDetectionResult, list[str]]:
        with tracer.start_as_current_span("analytics.patterns") as span:
            result = detect_patterns(trades)
            span.set_attribute("patterns.count", result.summary.total_patterns)
            logger.debug("Detected %d patterns", result.summary.total_patterns)
            return result, pattern_recommendations(result.patterns)

    def positions(
        self,
        trades: Sequence[Trade],
        current_prices: Mapping[str, float] | None = None,
    ) -> list[Position]:
        return build_positions(trades, current_prices)

    def trade_benchmarks(self, trades: Sequence[Trade]) -> list[TradeBenchmark]:
        with tracer.start_as_current_span("benchmark.trades") as span:
            span.set_attribute("benchmark.symbol", self.settings.benchmark_symbol)
            return self.benchmark.trade_benchmarks(trades)

    def portfolio_benchmark(
        self, total_pnl: float, total_value: float, start: date, end: date
    ) -> PortfolioBenchmark:
        return self.benchmark.portfolio_benchmark(total_pnl, total_value, start, end)

    def comprehensive_benchmark(
        self, trades: Sequence[Trade], today: date | None = None
    ) -> ComprehensiveBenchmark:
        with tracer.start_as_current_span("benchmark.comprehensive"):
            return self.benchmark.comprehensive(trades, today)

    def index_performance(self, period: IndexPeriod, today: date | None = None) -> float:
        return self.benchmark.index_performance(period, today)


__all__ = ["TradeAnalyticsService", "build_price_source"]
