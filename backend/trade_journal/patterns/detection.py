"""Rule-based trading pattern heuristics.

Closed trades are grouped per ticker, ordered by entry date, and matched
against four fixed-threshold rules: trend following, mean reversion,
breakout and high-volume conviction. Confidence values are heuristic scores
in ``[0, 1]``, not statistical probabilities.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Sequence

from trade_journal.domain import Trade, group_by_ticker

MIN_CLOSED_TRADES = 3
MIN_TREND_GROUP = 3
MIN_GROUP = 5

TREND_MIN_CONFIDENCE = 0.6
TREND_MIN_WIN_RATE = 0.5

OVERBOUGHT_RATIO = 1.10
OVERSOLD_RATIO = 0.90
MEAN_REVERSION_CONFIDENCE_SCALE = 2
MEAN_REVERSION_MIN_WIN_RATE = 0.6
MEAN_REVERSION_MIN_CONFIDENCE = 0.5

BREAKOUT_MARGIN = 0.02
BREAKOUT_CONFIDENCE_SCALE = 3
BREAKOUT_MIN_WIN_RATE = 0.5
BREAKOUT_MIN_CONFIDENCE = 0.4

HIGH_VOLUME_RATIO = 2
VOLUME_CONFIDENCE_SCALE = 0.5
VOLUME_MIN_WIN_RATE = 0.5
VOLUME_MIN_CONFIDENCE = 0.3

MIN_BUCKET = 2


class PatternType(str, enum.Enum):
    TREND_FOLLOWING = "trend_following"
    MEAN_REVERSION = "mean_reversion"
    BREAKOUT = "breakout"
    VOLUME = "volume"


@dataclass(frozen=True)
class PatternPerformance:
    win_rate: float
    avg_return: float
    total_trades: int


@dataclass(frozen=True)
class PatternMetadata:
    start_date: datetime
    end_date: datetime
    pattern_strength: float
    market_conditions: str


@dataclass(frozen=True)
class TradingPattern:
    id: str
    type: PatternType
    name: str
    confidence: float
    trades: tuple[Trade, ...]
    description: str
    performance: PatternPerformance
    metadata: PatternMetadata


@dataclass(frozen=True)
class PatternSummary:
    total_patterns: int = 0
    most_profitable_pattern: str = "None"
    average_confidence: float = 0.0
    pattern_distribution: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class PatternDetectionResult:
    patterns: list[TradingPattern] = field(default_factory=list)
    summary: PatternSummary = field(default_factory=PatternSummary)


def _performance(trades: Sequence[Trade]) -> PatternPerformance:
    pnls = [t.profit_loss or 0.0 for t in trades]
    winners = sum(1 for p in pnls if p > 0)
    return PatternPerformance(
        win_rate=winners / len(trades),
        avg_return=sum(pnls) / len(trades),
        total_trades=len(trades),
    )


def _build_pattern(
    pattern_type: PatternType,
    name: str,
    variant: str,
    trades: Sequence[Trade],
    confidence: float,
    performance: PatternPerformance,
    description: str,
    market_conditions: str,
) -> TradingPattern:
    return TradingPattern(
        id=f"{pattern_type.value}_{variant}_{trades[0].ticker}",
        type=pattern_type,
        name=name,
        confidence=confidence,
        trades=tuple(trades),
        description=description,
        performance=performance,
        metadata=PatternMetadata(
            start_date=trades[0].entry_date,
            end_date=trades[-1].entry_date,
            pattern_strength=confidence,
            market_conditions=market_conditions,
        ),
    )


def _longest_run(prices: Sequence[float], rising: bool) -> int:
    longest = current = 0
    for previous, price in zip(prices, prices[1:]):
        moved = price > previous if rising else price < previous
        current = current + 1 if moved else 0
        longest = max(longest, current)
    return longest


def detect_trend(trades: Sequence[Trade]) -> list[TradingPattern]:
    """Uptrend/downtrend from the longest run of rising or falling entries."""

    if len(trades) < MIN_TREND_GROUP:
        return []
    prices = [t.entry_price for t in trades]
    performance = _performance(trades)
    patterns: list[TradingPattern] = []
    for rising, name, variant, direction, conditions in (
        (True, "Uptrend Pattern", "uptrend", "increases", "Bullish trend"),
        (False, "Downtrend Pattern", "downtrend", "decreases", "Bearish trend"),
    ):
        confidence = min(_longest_run(prices, rising) / len(trades), 1.0)
        if confidence >= TREND_MIN_CONFIDENCE and performance.win_rate >= TREND_MIN_WIN_RATE:
            patterns.append(
                _build_pattern(
                    PatternType.TREND_FOLLOWING,
                    name,
                    variant,
                    trades,
                    confidence,
                    performance,
                    f"Consistent {variant} pattern with {confidence * 100:.1f}% price {direction} "
                    f"and {performance.win_rate * 100:.1f}% win rate",
                    conditions,
                )
            )
    return patterns


def detect_mean_reversion(trades: Sequence[Trade]) -> list[TradingPattern]:
    if len(trades) < MIN_GROUP:
        return []
    mean_price = sum(t.entry_price for t in trades) / len(trades)
    buckets = (
        ("Overbought", [t for t in trades if t.entry_price > mean_price * OVERBOUGHT_RATIO], "High volatility"),
        ("Oversold", [t for t in trades if t.entry_price < mean_price * OVERSOLD_RATIO], "Low volatility"),
    )
    patterns: list[TradingPattern] = []
    for label, bucket, conditions in buckets:
        if len(bucket) < MIN_BUCKET:
            continue
        performance = _performance(bucket)
        deviation = sum(abs(t.entry_price - mean_price) / mean_price for t in bucket) / len(bucket)
        confidence = min(deviation * MEAN_REVERSION_CONFIDENCE_SCALE, 1.0)
        if performance.win_rate >= MEAN_REVERSION_MIN_WIN_RATE and confidence >= MEAN_REVERSION_MIN_CONFIDENCE:
            patterns.append(
                _build_pattern(
                    PatternType.MEAN_REVERSION,
                    f"{label} Mean Reversion",
                    label.lower(),
                    bucket,
                    confidence,
                    performance,
                    f"{label} pattern with {deviation * 100:.1f}% average deviation "
                    f"and {performance.win_rate * 100:.1f}% win rate",
                    conditions,
                )
            )
    return patterns


def _split_on_breakout(trades: Sequence[Trade], upside: bool) -> tuple[list[Trade], list[Trade], float]:
    level = trades[0].entry_price
    for index in range(len(trades) - 1):
        price = trades[index].entry_price
        level = max(level, price) if upside else min(level, price)
        following = trades[index + 1].entry_price
        broke = (
            following > level * (1 + BREAKOUT_MARGIN)
            if upside
            else following < level * (1 - BREAKOUT_MARGIN)
        )
        if broke:
            return list(trades[: index + 1]), list(trades[index + 1 :]), level
    return list(trades), [], level


def detect_breakout(trades: Sequence[Trade]) -> list[TradingPattern]:
    """Resistance/support breakouts: the first entry clearing the running extreme by 2%."""

    if len(trades) < MIN_GROUP:
        return []
    patterns: list[TradingPattern] = []
    for upside, name, variant in (
        (True, "Resistance Breakout", "resistance"),
        (False, "Support Breakout", "support"),
    ):
        before, after, level = _split_on_breakout(trades, upside)
        if len(before) < MIN_BUCKET or len(after) < MIN_BUCKET:
            continue
        performance = _performance(after)
        strength = sum(abs(t.entry_price - level) / level for t in after) / len(after)
        confidence = min(strength * BREAKOUT_CONFIDENCE_SCALE, 1.0)
        if performance.win_rate >= BREAKOUT_MIN_WIN_RATE and confidence >= BREAKOUT_MIN_CONFIDENCE:
            patterns.append(
                _build_pattern(
                    PatternType.BREAKOUT,
                    name,
                    variant,
                    after,
                    confidence,
                    performance,
                    f"{name} with {strength * 100:.1f}% average breakout strength "
                    f"and {performance.win_rate * 100:.1f}% win rate",
                    "Breakout momentum",
                )
            )
    return patterns


def detect_volume(trades: Sequence[Trade]) -> list[TradingPattern]:
    if len(trades) < MIN_GROUP:
        return []
    mean_notional = sum(t.notional for t in trades) / len(trades)
    heavy = [t for t in trades if t.notional > mean_notional * HIGH_VOLUME_RATIO]
    if len(heavy) < MIN_BUCKET:
        return []
    performance = _performance(heavy)
    ratio = sum(t.notional / mean_notional for t in heavy) / len(heavy)
    confidence = min((ratio - 1) * VOLUME_CONFIDENCE_SCALE, 1.0)
    if performance.win_rate < VOLUME_MIN_WIN_RATE or confidence < VOLUME_MIN_CONFIDENCE:
        return []
    return [
        _build_pattern(
            PatternType.VOLUME,
            "High Volume Pattern",
            "high",
            heavy,
            confidence,
            performance,
            f"High volume pattern with {ratio:.1f}x average position size "
            f"and {performance.win_rate * 100:.1f}% win rate",
            "High conviction trades",
        )
    ]


def summarize_patterns(patterns: Sequence[TradingPattern]) -> PatternSummary:
    if not patterns:
        return PatternSummary()
    distribution: dict[str, int] = {}
    for pattern in patterns:
        distribution[pattern.type.value] = distribution.get(pattern.type.value, 0) + 1
    best = patterns[0]
    for pattern in patterns[1:]:
        if pattern.performance.avg_return > best.performance.avg_return:
            best = pattern
    return PatternSummary(
        total_patterns=len(patterns),
        most_profitable_pattern=best.name,
        average_confidence=sum(p.confidence for p in patterns) / len(patterns),
        pattern_distribution=distribution,
    )


def detect_patterns(trades: Sequence[Trade]) -> PatternDetectionResult:
    """Run every heuristic over the closed trades, ticker by ticker."""

    closed = [trade for trade in trades if trade.is_closed]
    if len(closed) < MIN_CLOSED_TRADES:
        return PatternDetectionResult()

    groups = {
        ticker: sorted(group, key=lambda t: t.entry_date)
        for ticker, group in group_by_ticker(closed).items()
    }
    patterns: list[TradingPattern] = []
    for detector in (detect_trend, detect_mean_reversion, detect_breakout, detect_volume):
        for group in groups.values():
            patterns.extend(detector(group))
    return PatternDetectionResult(patterns=patterns, summary=summarize_patterns(patterns))


__all__ = [
    "PatternDetectionResult",
    "PatternMetadata",
    "PatternPerformance",
    "PatternSummary",
    "PatternType",
    "TradingPattern",
    "detect_breakout",
    "detect_mean_reversion",
    "detect_patterns",
    "detect_trend",
    "detect_volume",
    "summarize_patterns",
]
