"""Risk grading, behavior notes and coaching text derived from metrics."""

from __future__ import annotations

import enum
from collections import Counter
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Sequence

import numpy as np

from trade_journal.analytics.metrics import Metrics, compute_metrics
from trade_journal.domain import Trade

DRAWDOWN_THRESHOLDS = (10.0, 20.0)
SHARPE_THRESHOLDS = (1.0, 0.5)
PROFIT_FACTOR_THRESHOLDS = (1.5, 1.2)

LOW_WIN_RATE = 40.0
HIGH_WIN_RATE = 70.0
TARGET_PROFIT_FACTOR = 1.5
STRONG_PROFIT_FACTOR = 3.0
LARGE_DRAWDOWN = 1000.0
TARGET_SHARPE = 1.0
RECENT_DAYS = 30


class RiskLevel(str, enum.Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class InsightType(str, enum.Enum):
    PERFORMANCE = "performance"
    PATTERN = "pattern"
    RISK = "risk"


class Severity(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class RiskAssessment:
    drawdown: RiskLevel
    sharpe: RiskLevel
    profit_factor: RiskLevel


@dataclass(frozen=True)
class TradeInsight:
    type: InsightType
    title: str
    description: str
    severity: Severity
    actionable: bool
    action: str | None = None


def _grade_lower_is_better(value: float, thresholds: tuple[float, float]) -> RiskLevel:
    low, medium = thresholds
    if value <= low:
        return RiskLevel.LOW
    if value <= medium:
        return RiskLevel.MEDIUM
    return RiskLevel.HIGH


def _grade_higher_is_better(value: float, thresholds: tuple[float, float]) -> RiskLevel:
    low, medium = thresholds
    if value >= low:
        return RiskLevel.LOW
    if value >= medium:
        return RiskLevel.MEDIUM
    return RiskLevel.HIGH


def risk_levels(metrics: Metrics) -> RiskAssessment:
    return RiskAssessment(
        drawdown=_grade_lower_is_better(metrics.max_drawdown_pct, DRAWDOWN_THRESHOLDS),
        sharpe=_grade_higher_is_better(metrics.sharpe_ratio, SHARPE_THRESHOLDS),
        profit_factor=_grade_higher_is_better(metrics.profit_factor, PROFIT_FACTOR_THRESHOLDS),
    )


def behavior_patterns(trades: Sequence[Trade]) -> list[str]:
    """Habits worth flagging: sizing, holding time, ticker and weekday concentration."""

    if not trades:
        return []
    notes: list[str] = []

    quantities = [t.quantity for t in trades]
    average_quantity = float(np.mean(quantities))
    if max(quantities) / average_quantity > 3:
        notes.append("Inconsistent position sizing - some positions are much larger than average")
    if min(quantities) / average_quantity < 0.3:
        notes.append("Very small positions detected - may indicate lack of confidence")

    holding = [t.holding_period for t in trades if t.is_closed]
    if holding:
        if sum(1 for days in holding if days <= 1) / len(holding) > 0.7:
            notes.append("High frequency of day trading - consider longer-term positions")
        if sum(1 for days in holding if days >= 30) / len(holding) > 0.5:
            notes.append("Long-term holding pattern - may miss short-term opportunities")

    ticker, count = Counter(t.ticker for t in trades).most_common(1)[0]
    if count / len(trades) > 0.3:
        notes.append(f"High concentration in {ticker} - consider diversification")

    weekday, count = Counter(t.entry_date.strftime("%A") for t in trades).most_common(1)[0]
    if count / len(trades) > 0.4:
        notes.append(f"Trading concentrated on {weekday} - may miss opportunities on other days")
    return notes


def trade_insights(trades: Sequence[Trade], metrics: Metrics | None = None) -> list[TradeInsight]:
    """Graded observations on win rate, profit factor, drawdown, Sharpe and habits.

    Profit factor is only judged once the journal holds a losing trade, since
    it is reported as 0 without one.
    """

    if not trades:
        return [
            TradeInsight(
                type=InsightType.PERFORMANCE,
                title="No Trading Data",
                description="Start recording your trades to get insights and analysis.",
                severity=Severity.LOW,
                actionable=False,
            )
        ]
    metrics = metrics or compute_metrics(trades)
    insights: list[TradeInsight] = []

    if metrics.win_rate < LOW_WIN_RATE:
        insights.append(
            TradeInsight(
                type=InsightType.PERFORMANCE,
                title="Low Win Rate",
                description=(
                    f"Your win rate is {metrics.win_rate:.1f}%. "
                    "Consider improving your entry criteria or risk management."
                ),
                severity=Severity.HIGH,
                actionable=True,
                action="Review your entry signals and consider tighter stop losses",
            )
        )
    elif metrics.win_rate > HIGH_WIN_RATE:
        insights.append(
            TradeInsight(
                type=InsightType.PERFORMANCE,
                title="Excellent Win Rate",
                description=(
                    f"Your win rate of {metrics.win_rate:.1f}% is very good. "
                    "Focus on maximizing your winning trades."
                ),
                severity=Severity.LOW,
                actionable=True,
                action="Consider letting winners run longer and scaling out of positions",
            )
        )

    if metrics.losing_trades and metrics.profit_factor < TARGET_PROFIT_FACTOR:
        insights.append(
            TradeInsight(
                type=InsightType.PERFORMANCE,
                title="Low Profit Factor",
                description=(
                    f"Your profit factor is {metrics.profit_factor:.2f}. "
                    "Aim for at least 1.5 for consistent profitability."
                ),
                severity=Severity.MEDIUM,
                actionable=True,
                action="Work on improving your risk-reward ratio and cutting losses quickly",
            )
        )
    elif metrics.profit_factor > STRONG_PROFIT_FACTOR:
        insights.append(
            TradeInsight(
                type=InsightType.PERFORMANCE,
                title="Strong Profit Factor",
                description=(
                    f"Your profit factor of {metrics.profit_factor:.2f} is excellent. "
                    "Your winning trades significantly outweigh your losses."
                ),
                severity=Severity.LOW,
                actionable=False,
            )
        )

    if metrics.max_drawdown > LARGE_DRAWDOWN:
        insights.append(
            TradeInsight(
                type=InsightType.RISK,
                title="High Maximum Drawdown",
                description=(
                    f"Your maximum drawdown is ${metrics.max_drawdown:.2f}. "
                    "Consider reducing position sizes or improving risk management."
                ),
                severity=Severity.HIGH,
                actionable=True,
                action="Reduce position sizes and implement stricter stop losses",
            )
        )

    if metrics.closed_trades and metrics.sharpe_ratio < TARGET_SHARPE:
        insights.append(
            TradeInsight(
                type=InsightType.PERFORMANCE,
                title="Low Risk-Adjusted Returns",
                description=(
                    f"Your Sharpe ratio of {metrics.sharpe_ratio:.2f} indicates low risk-adjusted returns. "
                    "Consider improving your strategy."
                ),
                severity=Severity.MEDIUM,
                actionable=True,
                action="Focus on consistency and reducing volatility in your returns",
            )
        )

    for note in behavior_patterns(trades):
        insights.append(
            TradeInsight(
                type=InsightType.PATTERN,
                title="Trading Pattern Detected",
                description=note,
                severity=Severity.MEDIUM,
                actionable=True,
                action="Review your trading behavior and consider adjustments",
            )
        )
    return insights


def strategy_suggestions(
    trades: Sequence[Trade],
    metrics: Metrics | None = None,
    today: date | None = None,
) -> list[str]:
    if not trades:
        return [
            "Start with paper trading to develop your strategy",
            "Focus on one or two stocks initially to build consistency",
            "Keep detailed records of your trades and reasoning",
        ]
    metrics = metrics or compute_metrics(trades)
    suggestions: list[str] = []

    if metrics.win_rate < 50:
        suggestions += [
            "Improve your entry criteria - wait for stronger signals",
            "Consider using technical indicators for better timing",
            "Review your losing trades to identify common patterns",
        ]

    if metrics.losing_trades and metrics.profit_factor < 2:
        suggestions += [
            "Work on your risk-reward ratio - aim for 2:1 or better",
            "Let your winners run longer before taking profits",
            "Cut your losses more quickly - don't let small losses become big ones",
        ]

    quantities = [t.quantity for t in trades]
    if max(quantities) / float(np.mean(quantities)) > 2:
        suggestions += [
            "Standardize your position sizes for more consistent results",
            "Consider using a fixed percentage of your capital per trade",
        ]

    if len({t.ticker for t in trades}) < 5 and len(trades) > 10:
        suggestions += [
            "Consider diversifying across more stocks to reduce risk",
            "Look for opportunities in different sectors",
        ]

    cutoff = datetime.combine(today or date.today(), datetime.min.time()) - timedelta(days=RECENT_DAYS)
    if not any(t.entry_date > cutoff for t in trades):
        suggestions += [
            "You haven't traded recently - consider reviewing market conditions",
            "Set aside time each day to review potential opportunities",
        ]
    return suggestions


__all__ = [
    "InsightType",
    "RiskAssessment",
    "RiskLevel",
    "Severity",
    "TradeInsight",
    "behavior_patterns",
    "risk_levels",
    "strategy_suggestions",
    "trade_insights",
]
