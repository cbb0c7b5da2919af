from __future__ import annotations

import math
from datetime import date, datetime, timedelta

import pytest

from trade_journal.analytics import (
    monthly_performance,
    period_performance,
    ticker_performance,
    weekly_performance,
    yearly_performance,
)
from trade_journal.analytics.performance import (
    BehavioralMetrics,
    behavioral_metrics,
    daily_returns,
    rolling_performance,
)
from trade_journal.domain import Trade


def journal() -> list[Trade]:
    return [
        Trade("AAPL", date(2024, 1, 2), 100, 10, exit_date=date(2024, 1, 10), exit_price=110),
        Trade("AAPL", date(2024, 1, 11), 100, 10, exit_date=date(2024, 1, 12), exit_price=95),
        Trade("MSFT", date(2024, 2, 1), 50, 10, exit_date=date(2024, 2, 5), exit_price=60),
        Trade("TSLA", date(2023, 12, 1), 200, 1, exit_date=date(2023, 12, 20), exit_price=180),
        Trade("NVDA", date(2024, 1, 15), 500, 1),
    ]


def test_ticker_performance_sorted_by_total_pnl():
    rows = ticker_performance(journal())
    assert [row.ticker for row in rows] == ["MSFT", "AAPL", "NVDA", "TSLA"]
    aapl = rows[1]
    assert aapl.total_pnl == pytest.approx(50)
    assert aapl.total_trades == 2
    assert aapl.winning_trades == 1
    assert aapl.losing_trades == 1
    assert aapl.win_rate == 50
    assert aapl.best_trade == pytest.approx(100)
    assert aapl.worst_trade == pytest.approx(-50)
    assert aapl.total_volume == pytest.approx(2000)
    nvda = rows[2]
    assert nvda.total_trades == 1
    assert nvda.win_rate == 0


def test_monthly_performance_buckets_by_exit_month():
    buckets = monthly_performance(journal(), 2024)
    assert [b.label for b in buckets] == ["2024-01", "2024-02"]
    january = buckets[0]
    assert january.total_pnl == pytest.approx(50)
    assert january.total_trades == 2
    assert january.win_rate == 50
    assert january.average_return == pytest.approx(25)
    assert buckets[1].total_pnl == pytest.approx(100)


def test_weekly_performance_uses_sunday_week_start():
    buckets = weekly_performance(journal(), 2024)
    assert [b.label for b in buckets] == ["2024-01-07", "2024-02-04"]
    assert buckets[0].start_date == date(2024, 1, 7)
    assert buckets[0].end_date == date(2024, 1, 13)
    assert buckets[0].total_trades == 2


def test_yearly_performance_includes_monthly_breakdown():
    years = yearly_performance(journal())
    assert [y.year for y in years] == [2023, 2024]
    assert years[0].total_pnl == pytest.approx(-20)
    assert years[1].total_pnl == pytest.approx(150)
    assert years[1].win_rate == pytest.approx(200 / 3)
    assert [m.label for m in years[1].monthly_breakdown] == ["2024-01", "2024-02"]


def test_breakdowns_of_empty_journal_are_empty():
    assert monthly_performance([], 2024) == []
    assert weekly_performance([], 2024) == []
    assert yearly_performance([]) == []
    assert ticker_performance([]) == []


def test_month_period_selects_trades_by_exit_date():
    result = period_performance(journal(), "month", today=date(2024, 1, 20))
    assert result.period == "January 2024"
    assert result.start_date == date(2024, 1, 1)
    assert result.end_date == date(2024, 1, 31)
    # Two January exits plus the open NVDA trade entered in January.
    assert result.metrics.total_trades == 3
    assert result.metrics.closed_trades == 2
    assert result.metrics.total_pnl == pytest.approx(50)
    assert len(result.daily_returns) == 31
    assert result.daily_returns[9].pnl == pytest.approx(100)
    assert result.daily_returns[-1].cumulative == pytest.approx(50)


def test_week_and_year_period_names():
    week = period_performance(journal(), "week", today=date(2024, 1, 10))
    assert week.period == "Week of Jan 07, 2024"
    assert week.start_date == date(2024, 1, 7)
    assert week.end_date == date(2024, 1, 13)
    year = period_performance(journal(), "year", today=date(2024, 6, 1))
    assert year.period == "2024"
    assert year.metrics.closed_trades == 3


def test_explicit_range_overrides_period():
    result = period_performance(journal(), start=date(2023, 12, 1), end=date(2024, 1, 10))
    assert result.metrics.closed_trades == 2
    assert result.metrics.total_pnl == pytest.approx(80)


def test_inverted_range_is_rejected():
    with pytest.raises(ValueError):
        period_performance(journal(), start=date(2024, 2, 1), end=date(2024, 1, 1))


@pytest.mark.parametrize("bounds", [{"start": date(2024, 1, 1)}, {"end": date(2024, 1, 31)}])
def test_half_open_range_is_rejected(bounds):
    with pytest.raises(ValueError, match="together"):
        period_performance(journal(), "month", today=date(2024, 1, 10), **bounds)


def test_daily_returns_fill_quiet_days():
    rows = daily_returns(journal(), date(2024, 1, 9), date(2024, 1, 12))
    assert [row.day for row in rows] == [date(2024, 1, d) for d in range(9, 13)]
    assert [row.pnl for row in rows] == pytest.approx([0, 100, 0, -50])
    assert [row.cumulative for row in rows] == pytest.approx([0, 100, 100, 50])


def priced(pnl: float, day: int, *, ticker: str = "AAPL", qty: float = 1) -> Trade:
    start = datetime(2024, 1, 1) + timedelta(days=day)
    return Trade(ticker, start, 100, qty, exit_date=start + timedelta(days=3), exit_price=100 + pnl / qty)


def test_rolling_windows_slide_over_entry_order():
    trades = [priced(pnl, day) for day, pnl in enumerate([10, -10, 20, 0, 5, 5])]
    rolling = rolling_performance(list(reversed(trades)))

    assert rolling.window_size == 2
    assert [w.average_return for w in rolling.windows] == pytest.approx([0, 5, 10, 2.5, 5])
    assert [w.volatility for w in rolling.windows] == pytest.approx([10, 15, 10, 2.5, 0])
    assert [w.max_drawdown for w in rolling.windows] == pytest.approx([10, 10, 0, 0, 0])
    assert rolling.windows[0].sharpe_ratio == pytest.approx(-0.02 / 10)
    assert rolling.windows[4].sharpe_ratio == 0
    assert rolling.best.start_date == datetime(2024, 1, 3)
    assert rolling.best.end_date == datetime(2024, 1, 4)
    assert rolling.worst is rolling.windows[0]


def test_rolling_window_is_capped_at_ten_trades():
    trades = [priced(1 + day % 3, day) for day in range(40)]
    rolling = rolling_performance(trades)
    assert rolling.window_size == 10
    assert len(rolling.windows) == 31
    assert all(w.trade_count == 10 for w in rolling.windows)


def test_rolling_needs_three_closed_trades():
    trades = [priced(5, 0), priced(-5, 1), Trade("NVDA", date(2024, 1, 5), 500, 1)]
    rolling = rolling_performance(trades)
    assert rolling.window_size == 0
    assert rolling.windows == []
    assert rolling.best is None
    assert rolling.worst is None


def test_behavioral_metrics():
    trades = [
        Trade("AAPL", date(2024, 1, 1), 100, 10, exit_date=date(2024, 1, 11), exit_price=110),
        Trade("MSFT", date(2024, 1, 16), 50, 20, exit_date=date(2024, 1, 21), exit_price=45),
        Trade("TSLA", date(2024, 1, 31), 200, 10),
    ]
    result = behavioral_metrics(trades)

    assert result.average_holding_period == pytest.approx(7.5)
    assert result.trade_frequency == pytest.approx(3)
    assert result.position_sizing_consistency == pytest.approx(1 - math.sqrt(2) / 4)
    assert result.risk_tolerance == pytest.approx(1)
    assert result.emotional_control == 0


def test_behavioral_metrics_for_steady_winners():
    result = behavioral_metrics([priced(10, 0), priced(20, 1)])
    assert result.trade_frequency == pytest.approx(60)
    assert result.position_sizing_consistency == pytest.approx(1)
    assert result.risk_tolerance == 0
    assert result.emotional_control == pytest.approx(2 / 3)


def test_behavioral_metrics_empty():
    assert behavioral_metrics([]) == BehavioralMetrics()
