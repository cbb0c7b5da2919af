from __future__ import annotations

from datetime import date, timedelta

import pytest

from trade_journal.domain import Trade
from trade_journal.patterns import PatternType, detect_patterns, pattern_recommendations
from trade_journal.patterns.detection import detect_breakout, detect_trend, summarize_patterns

START = date(2024, 3, 1)


def build_trades(ticker: str, legs: list[tuple[float, float]], quantities: list[float] | None = None) -> list[Trade]:
    """Closed trades entered every other day; ``legs`` holds (entry, exit) pairs."""

    quantities = quantities or [1] * len(legs)
    return [
        Trade(
            ticker=ticker,
            entry_date=START + timedelta(days=2 * index),
            entry_price=entry,
            quantity=qty,
            exit_date=START + timedelta(days=2 * index + 1),
            exit_price=exit,
        )
        for index, ((entry, exit), qty) in enumerate(zip(legs, quantities))
    ]


def test_falling_entries_form_a_downtrend():
    trades = build_trades("AAPL", [(150, 155), (140, 145), (130, 128)])
    result = detect_patterns(trades)

    assert len(result.patterns) == 1
    pattern = result.patterns[0]
    assert pattern.type == PatternType.TREND_FOLLOWING
    assert pattern.name == "Downtrend Pattern"
    assert pattern.id == "trend_following_downtrend_AAPL"
    assert pattern.confidence == pytest.approx(2 / 3)
    assert pattern.performance.win_rate == pytest.approx(2 / 3)
    assert pattern.performance.total_trades == 3
    assert pattern.metadata.start_date == trades[0].entry_date
    assert pattern.metadata.end_date == trades[-1].entry_date
    assert pattern.metadata.market_conditions == "Bearish trend"

    assert result.summary.total_patterns == 1
    assert result.summary.most_profitable_pattern == "Downtrend Pattern"
    assert result.summary.pattern_distribution == {"trend_following": 1}


def test_trend_needs_a_winning_record():
    trades = build_trades("AAPL", [(150, 140), (140, 130), (130, 135)])
    assert detect_trend(trades) == []


def test_fewer_than_three_closed_trades_detects_nothing():
    trades = build_trades("AAPL", [(150, 160), (140, 150)])
    trades.append(Trade("AAPL", START + timedelta(days=10), 130, 1))
    result = detect_patterns(trades)

    assert result.patterns == []
    assert result.summary.total_patterns == 0
    assert result.summary.most_profitable_pattern == "None"
    assert result.summary.average_confidence == 0
    assert result.summary.pattern_distribution == {}


def test_trends_are_evaluated_per_ticker():
    trades = build_trades("AAPL", [(150, 155), (140, 145)]) + build_trades("MSFT", [(130, 135)])
    assert detect_patterns(trades).patterns == []


def test_overbought_entries_form_mean_reversion_and_breakout():
    trades = build_trades(
        "XYZ",
        [(100, 90), (100, 90), (100, 90), (100, 90), (200, 220), (210, 230)],
    )
    result = detect_patterns(trades)
    by_type = {pattern.type: pattern for pattern in result.patterns}

    assert set(by_type) == {PatternType.MEAN_REVERSION, PatternType.BREAKOUT}
    reversion = by_type[PatternType.MEAN_REVERSION]
    assert reversion.name == "Overbought Mean Reversion"
    assert reversion.id == "mean_reversion_overbought_XYZ"
    assert [t.entry_price for t in reversion.trades] == [200, 210]
    assert reversion.confidence == 1.0
    breakout = by_type[PatternType.BREAKOUT]
    assert breakout.name == "Resistance Breakout"
    assert breakout.performance.win_rate == 1.0
    assert result.summary.pattern_distribution == {"mean_reversion": 1, "breakout": 1}


def test_breakout_requires_trades_on_both_sides():
    trades = build_trades("XYZ", [(100, 110), (100, 110), (100, 110), (100, 110), (150, 160)])
    assert detect_breakout(trades) == []


def test_oversized_positions_form_volume_pattern():
    trades = build_trades(
        "VOL",
        [(100, 99), (100, 99), (100, 99), (100, 105), (100, 105)],
        quantities=[1, 1, 1, 10, 10],
    )
    result = detect_patterns(trades)

    assert [p.type for p in result.patterns] == [PatternType.VOLUME]
    pattern = result.patterns[0]
    assert pattern.name == "High Volume Pattern"
    assert pattern.performance.total_trades == 2
    assert pattern.confidence == pytest.approx((1000 / 460 - 1) * 0.5)
    assert pattern.performance.avg_return == pytest.approx(50)


def test_detection_is_deterministic():
    trades = build_trades("AAPL", [(150, 155), (140, 145), (130, 128)])
    assert detect_patterns(trades) == detect_patterns(trades)


def test_summary_picks_highest_average_return():
    volume = detect_patterns(
        build_trades("VOL", [(100, 99), (100, 99), (100, 99), (100, 105), (100, 105)], [1, 1, 1, 10, 10])
    ).patterns
    trend = detect_patterns(build_trades("AAPL", [(150, 155), (140, 145), (130, 128)])).patterns
    summary = summarize_patterns(trend + volume)
    assert summary.most_profitable_pattern == "High Volume Pattern"
    assert summary.average_confidence == pytest.approx((2 / 3 + (1000 / 460 - 1) * 0.5) / 2)


def test_recommendations_without_patterns():
    assert pattern_recommendations([]) == [
        "No clear patterns detected. Consider diversifying your trading strategies."
    ]


def test_recommendations_for_profitable_trend():
    trades = build_trades("AAPL", [(150, 155), (140, 145), (130, 128)])
    recommendations = pattern_recommendations(detect_patterns(trades).patterns)
    assert recommendations[0] == (
        "Focus on Downtrend Pattern - your most profitable pattern with 2.67 average return per trade."
    )
    assert recommendations[-1].startswith("You're good at trend following.")


def test_recommendations_flag_losing_patterns():
    trades = build_trades("AAPL", [(150, 151), (140, 141), (130, 100)])
    patterns = detect_patterns(trades).patterns
    recommendations = pattern_recommendations(patterns)
    assert recommendations[0].startswith("Avoid Downtrend Pattern")
    assert recommendations[-1].startswith("You're good at trend following.")


def test_recommendations_for_strong_volume_trades():
    trades = build_trades("VOL", [(100, 99), (100, 99), (100, 99), (100, 105), (100, 105)], [1, 1, 1, 10, 10])
    recommendations = pattern_recommendations(detect_patterns(trades).patterns)
    assert recommendations == [
        "Focus on High Volume Pattern - your most profitable pattern with 50.00 average return per trade.",
        "Your high-volume trades are performing well. "
        "Consider increasing position sizes for high-conviction setups.",
    ]
