"""Human-readable advice derived from detected patterns."""

from __future__ import annotations

from typing import Sequence

from trade_journal.patterns.detection import PatternType, TradingPattern

STRONG_WIN_RATE = 0.6


def _average_win_rate(patterns: Sequence[TradingPattern]) -> float:
    return sum(p.performance.win_rate for p in patterns) / len(patterns)


def pattern_recommendations(patterns: Sequence[TradingPattern]) -> list[str]:
    if not patterns:
        return ["No clear patterns detected. Consider diversifying your trading strategies."]

    recommendations: list[str] = []
    profitable = [p for p in patterns if p.performance.avg_return > 0]
    unprofitable = [p for p in patterns if p.performance.avg_return <= 0]

    if profitable:
        best = max(profitable, key=lambda p: p.performance.avg_return)
        recommendations.append(
            f"Focus on {best.name} - your most profitable pattern with "
            f"{best.performance.avg_return:.2f} average return per trade."
        )
    if unprofitable:
        worst = min(unprofitable, key=lambda p: p.performance.avg_return)
        recommendations.append(
            f"Avoid {worst.name} - this pattern has been unprofitable with "
            f"{worst.performance.avg_return:.2f} average return per trade."
        )

    volume = [p for p in patterns if p.type == PatternType.VOLUME]
    if volume:
        if _average_win_rate(volume) > STRONG_WIN_RATE:
            recommendations.append(
                "Your high-volume trades are performing well. "
                "Consider increasing position sizes for high-conviction setups."
            )
        else:
            recommendations.append(
                "Your high-volume trades are underperforming. "
                "Consider reducing position sizes or improving entry timing."
            )

    trend = [p for p in patterns if p.type == PatternType.TREND_FOLLOWING]
    if trend:
        if _average_win_rate(trend) > STRONG_WIN_RATE:
            recommendations.append(
                "You're good at trend following. Consider adding more trend-based strategies to your portfolio."
            )
        else:
            recommendations.append(
                "Your trend following needs improvement. Consider using tighter stop losses or better entry timing."
            )

    return recommendations


__all__ = ["pattern_recommendations"]
