"""Ticker and calendar breakdowns, rolling windows and trading habits."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Literal, Sequence

import numpy as np
import pandas as pd

from trade_journal.analytics.metrics import Metrics, compute_metrics, drawdown, population_stdev
from trade_journal.domain import Trade, group_by_ticker

Period = Literal["week", "month", "year"]

ROLLING_WINDOW = 10
# Per-trade risk-free hurdle in percentage points for rolling Sharpe.
ROLLING_RISK_FREE_RATE = 0.02


@dataclass
class TickerPerformance:
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


@dataclass
class BucketPerformance:
    label: str
    year: int
    total_pnl: float
    total_trades: int
    winning_trades: int
    win_rate: float
    average_return: float
    start_date: date | None = None
    end_date: date | None = None


@dataclass
class YearlyPerformance:
    year: int
    total_pnl: float
    total_trades: int
    winning_trades: int
    win_rate: float
    average_return: float
    monthly_breakdown: list[BucketPerformance] = field(default_factory=list)


@dataclass
class DailyReturn:
    day: date
    pnl: float
    cumulative: float


@dataclass
class PeriodPerformance:
    period: str
    start_date: date
    end_date: date
    metrics: Metrics
    trades: list[Trade]
    daily_returns: list[DailyReturn]


def ticker_performance(trades: Sequence[Trade]) -> list[TickerPerformance]:
    rows: list[TickerPerformance] = []
    for ticker, ticker_trades in group_by_ticker(trades).items():
        pnls = [t.profit_loss for t in ticker_trades if t.is_closed]
        total_pnl = float(sum(pnls))
        winners = sum(1 for p in pnls if p > 0)
        rows.append(
            TickerPerformance(
                ticker=ticker,
                total_pnl=total_pnl,
                total_trades=len(ticker_trades),
                winning_trades=winners,
                losing_trades=sum(1 for p in pnls if p < 0),
                win_rate=winners / len(pnls) * 100 if pnls else 0.0,
                average_return=total_pnl / len(pnls) if pnls else 0.0,
                total_volume=float(sum(t.notional for t in ticker_trades)),
                best_trade=max(pnls) if pnls else 0.0,
                worst_trade=min(pnls) if pnls else 0.0,
            )
        )
    return sorted(rows, key=lambda row: row.total_pnl, reverse=True)


def _closed_frame(trades: Sequence[Trade]) -> pd.DataFrame:
    rows = [
        {"exit_date": pd.Timestamp(t.exit_date), "pnl": t.profit_loss}
        for t in trades
        if t.is_closed
    ]
    if not rows:
        return pd.DataFrame(columns=["exit_date", "pnl"])
    return pd.DataFrame(rows)


def _summarize_bucket(pnl: pd.Series) -> dict[str, float | int]:
    count = int(pnl.shape[0])
    winners = int((pnl > 0).sum())
    total = float(pnl.sum())
    return {
        "total_pnl": total,
        "total_trades": count,
        "winning_trades": winners,
        "win_rate": winners / count * 100 if count else 0.0,
        "average_return": total / count if count else 0.0,
    }


def monthly_performance(trades: Sequence[Trade], year: int | None = None) -> list[BucketPerformance]:
    """Closed trades of ``year`` (default: current year) bucketed by exit month."""

    target_year = year or date.today().year
    df = _closed_frame(trades)
    if df.empty:
        return []
    df = df[df["exit_date"].dt.year == target_year]
    buckets: list[BucketPerformance] = []
    for label, group in df.groupby(df["exit_date"].dt.strftime("%Y-%m")):
        buckets.append(BucketPerformance(label=str(label), year=target_year, **_summarize_bucket(group["pnl"])))
    return sorted(buckets, key=lambda b: b.label)


def weekly_performance(trades: Sequence[Trade], year: int | None = None) -> list[BucketPerformance]:
    """Closed trades of ``year`` bucketed by the Sunday-starting week of their exit."""

    target_year = year or date.today().year
    df = _closed_frame(trades)
    if df.empty:
        return []
    df = df[df["exit_date"].dt.year == target_year].copy()
    days_since_sunday = (df["exit_date"].dt.dayofweek + 1) % 7
    df["week_start"] = (df["exit_date"] - pd.to_timedelta(days_since_sunday, unit="D")).dt.normalize()
    buckets: list[BucketPerformance] = []
    for week_start, group in df.groupby("week_start"):
        start = week_start.date()
        buckets.append(
            BucketPerformance(
                label=f"{start.isoformat()}",
                year=target_year,
                start_date=start,
                end_date=start + timedelta(days=6),
                **_summarize_bucket(group["pnl"]),
            )
        )
    return sorted(buckets, key=lambda b: b.label)


def yearly_performance(trades: Sequence[Trade]) -> list[YearlyPerformance]:
    df = _closed_frame(trades)
    if df.empty:
        return []
    years: list[YearlyPerformance] = []
    for year, group in df.groupby(df["exit_date"].dt.year):
        years.append(
            YearlyPerformance(
                year=int(year),
                monthly_breakdown=monthly_performance(trades, int(year)),
                **_summarize_bucket(group["pnl"]),
            )
        )
    return sorted(years, key=lambda y: y.year)


def _period_window(period: Period, today: date) -> tuple[date, date, str]:
    if period == "week":
        start = today - timedelta(days=(today.weekday() + 1) % 7)
        return start, start + timedelta(days=6), f"Week of {start:%b %d, %Y}"
    if period == "month":
        start = today.replace(day=1)
        end = (pd.Timestamp(start) + pd.offsets.MonthEnd(0)).date()
        return start, end, f"{today:%B %Y}"
    if period == "year":
        return date(today.year, 1, 1), date(today.year, 12, 31), f"{today:%Y}"
    raise ValueError(f"Unsupported period: {period}")


def daily_returns(trades: Sequence[Trade], start: date, end: date) -> list[DailyReturn]:
    """Realized P&L per calendar day in ``[start, end]`` with a running total."""

    index = pd.date_range(start, end, freq="D")
    df = _closed_frame(trades)
    if df.empty:
        daily = pd.Series(0.0, index=index)
    else:
        daily = df.groupby(df["exit_date"].dt.normalize())["pnl"].sum().reindex(index, fill_value=0.0)
    cumulative = daily.cumsum()
    return [
        DailyReturn(day=ts.date(), pnl=float(daily[ts]), cumulative=float(cumulative[ts]))
        for ts in index
    ]


def period_performance(
    trades: Sequence[Trade],
    period: Period = "month",
    *,
    start: date | None = None,
    end: date | None = None,
    today: date | None = None,
) -> PeriodPerformance:
    """Metrics and daily series for a calendar period or an explicit range."""

    if (start is None) != (end is None):
        raise ValueError("start and end must be provided together")
    if start and end:
        if start > end:
            raise ValueError("start cannot be after end")
        name = f"{start:%b %d} - {end:%b %d, %Y}"
    else:
        start, end, name = _period_window(period, today or date.today())

    window_start = datetime.combine(start, datetime.min.time())
    window_end = datetime.combine(end, datetime.max.time())
    selected = [
        trade
        for trade in trades
        if window_start <= (trade.exit_date or trade.entry_date) <= window_end
    ]
    return PeriodPerformance(
        period=name,
        start_date=start,
        end_date=end,
        metrics=compute_metrics(selected),
        trades=selected,
        daily_returns=daily_returns(selected, start, end),
    )


@dataclass
class RollingWindow:
    start_date: datetime
    end_date: datetime
    average_return: float
    volatility: float
    sharpe_ratio: float
    max_drawdown: float
    trade_count: int


@dataclass
class RollingPerformance:
    window_size: int
    windows: list[RollingWindow] = field(default_factory=list)
    best: RollingWindow | None = None
    worst: RollingWindow | None = None


@dataclass
class BehavioralMetrics:
    average_holding_period: float = 0.0
    trade_frequency: float = 0.0
    position_sizing_consistency: float = 0.0
    risk_tolerance: float = 0.0
    emotional_control: float = 0.0


def rolling_performance(trades: Sequence[Trade], window: int = ROLLING_WINDOW) -> RollingPerformance:
    """Slide a window over closed trades in entry order.

    The window holds ``window`` trades, or a third of the closed trades when
    there are fewer than ``3 * window``. Returns are per-trade percentages of
    notional; the drawdown is taken on their running sum.
    """

    ordered = sorted((t for t in trades if t.is_closed), key=lambda t: t.entry_date)
    size = min(window, len(ordered) // 3)
    if size == 0:
        return RollingPerformance(window_size=0)

    returns = [t.profit_loss_pct or 0.0 for t in ordered]
    windows: list[RollingWindow] = []
    for offset in range(len(ordered) - size + 1):
        chunk = returns[offset : offset + size]
        average = float(np.mean(chunk))
        volatility = population_stdev(chunk)
        windows.append(
            RollingWindow(
                start_date=ordered[offset].entry_date,
                end_date=ordered[offset + size - 1].entry_date,
                average_return=average,
                volatility=volatility,
                sharpe_ratio=(average - ROLLING_RISK_FREE_RATE) / volatility if volatility > 0 else 0.0,
                max_drawdown=drawdown(chunk).max_drawdown,
                trade_count=size,
            )
        )
    return RollingPerformance(
        window_size=size,
        windows=windows,
        best=max(windows, key=lambda w: w.average_return),
        worst=min(windows, key=lambda w: w.average_return),
    )


def behavioral_metrics(trades: Sequence[Trade]) -> BehavioralMetrics:
    """Trading habits: frequency, sizing discipline and loss tolerance."""

    if not trades:
        return BehavioralMetrics()

    entries = sorted(t.entry_date for t in trades)
    span_days = (entries[-1] - entries[0]).total_seconds() / 86400
    frequency = len(trades) / (span_days / 30) if span_days > 0 else 0.0

    sizes = [t.notional for t in trades]
    average_size = float(np.mean(sizes))
    consistency = 1 - population_stdev(sizes) / average_size if average_size > 0 else 0.0

    closed = [t for t in trades if t.is_closed]
    pnls = [t.profit_loss for t in closed]
    wins = [p for p in pnls if p > 0]
    losses = [abs(p) for p in pnls if p < 0]
    average_win = float(np.mean(wins)) if wins else 0.0
    average_loss = float(np.mean(losses)) if losses else 0.0
    tolerance = average_loss / average_win if average_win > 0 else 0.0

    returns = [t.profit_loss_pct or 0.0 for t in closed]
    mean_return = float(np.mean(returns)) if returns else 0.0
    # Dispersion relative to the average return; 0 when the average is flat.
    control = 1 - min(1.0, population_stdev(returns) / abs(mean_return)) if mean_return else 0.0

    holding = [t.holding_period for t in closed]
    return BehavioralMetrics(
        average_holding_period=float(np.mean(holding)) if holding else 0.0,
        trade_frequency=frequency,
        position_sizing_consistency=max(0.0, consistency),
        risk_tolerance=min(1.0, tolerance),
        emotional_control=max(0.0, control),
    )


__all__ = [
    "BehavioralMetrics",
    "BucketPerformance",
    "DailyReturn",
    "PeriodPerformance",
    "RollingPerformance",
    "RollingWindow",
    "TickerPerformance",
    "YearlyPerformance",
    "behavioral_metrics",
    "daily_returns",
    "monthly_performance",
    "period_performance",
    "rolling_performance",
    "ticker_performance",
    "weekly_performance",
    "yearly_performance",
]
