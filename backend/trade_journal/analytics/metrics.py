"""Performance and risk statistics over a trade journal.

Every function here is a pure function of the trades it is given: nothing is
cached and nothing is mutated. Divisions that would produce ``NaN`` or
``inf`` are special-cased to 0 so callers can serialize results directly.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Iterable, Mapping, Sequence

import numpy as np

from trade_journal.domain import Trade, closed_trades


@dataclass(frozen=True)
class Drawdown:
    max_drawdown: float = 0.0
    max_drawdown_pct: float = 0.0
    current_drawdown_pct: float = 0.0


@dataclass(frozen=True)
class Streaks:
    max_consecutive_wins: int = 0
    max_consecutive_losses: int = 0


@dataclass(frozen=True)
class Metrics:
    total_trades: int = 0
    open_trades: int = 0
    closed_trades: int = 0
    winning_trades: int = 0
    losing_trades: int = 0
    total_pnl: float = 0.0
    unrealized_pnl: float = 0.0
    win_rate: float = 0.0
    average_return: float = 0.0
    average_win: float = 0.0
    average_loss: float = 0.0
    largest_win: float = 0.0
    largest_loss: float = 0.0
    profit_factor: float = 0.0
    max_drawdown: float = 0.0
    max_drawdown_pct: float = 0.0
    current_drawdown_pct: float = 0.0
    volatility: float = 0.0
    return_volatility: float = 0.0
    sharpe_ratio: float = 0.0
    sortino_ratio: float = 0.0
    calmar_ratio: float = 0.0
    kelly_criterion: float = 0.0
    expected_value: float = 0.0
    max_consecutive_wins: int = 0
    max_consecutive_losses: int = 0
    risk_of_ruin: float = 0.0
    total_volume: float = 0.0
    average_holding_period: float = 0.0

    def as_dict(self) -> dict[str, float | int]:
        return asdict(self)


def _mean(values: Sequence[float]) -> float:
    return float(np.mean(values)) if len(values) else 0.0


def profit_factor(pnls: Sequence[float]) -> float:
    """Gross profit over gross loss; 0 when there is no loss to divide by."""

    gross_profit = sum(p for p in pnls if p > 0)
    gross_loss = abs(sum(p for p in pnls if p < 0))
    return gross_profit / gross_loss if gross_loss > 0 else 0.0


def drawdown(pnls: Sequence[float]) -> Drawdown:
    """Peak-to-trough decline of cumulative P&L, starting from a flat book."""

    if not len(pnls):
        return Drawdown()
    cumulative = np.cumsum(np.asarray(pnls, dtype=float))
    peaks = np.maximum.accumulate(np.concatenate([[0.0], cumulative]))[1:]
    declines = peaks - cumulative
    # Percentage drawdown is only defined once the book has been in profit.
    safe_peaks = np.where(peaks > 0, peaks, 1.0)
    declines_pct = np.where(peaks > 0, declines / safe_peaks * 100.0, 0.0)
    return Drawdown(
        max_drawdown=float(declines.max()),
        max_drawdown_pct=float(declines_pct.max()),
        current_drawdown_pct=float(declines_pct[-1]),
    )


def population_stdev(values: Sequence[float]) -> float:
    return float(np.std(values)) if len(values) else 0.0


def sample_stdev(values: Sequence[float]) -> float:
    return float(np.std(values, ddof=1)) if len(values) > 1 else 0.0


def sharpe_ratio(pnls: Sequence[float]) -> float:
    volatility = population_stdev(pnls)
    return _mean(pnls) / volatility if volatility > 0 else 0.0


def sortino_ratio(pnls: Sequence[float]) -> float:
    """Mean P&L over downside deviation.

    Squared deviations from the mean are taken for losing trades only but
    averaged over every trade, matching the journal's published figures.
    """

    if not len(pnls):
        return 0.0
    mean = _mean(pnls)
    downside = sum((p - mean) ** 2 for p in pnls if p < 0) / len(pnls)
    deviation = float(np.sqrt(downside))
    return mean / deviation if deviation > 0 else 0.0


def consecutive_streaks(pnls: Iterable[float]) -> Streaks:
    max_wins = max_losses = wins = losses = 0
    for pnl in pnls:
        if pnl > 0:
            wins += 1
            losses = 0
            max_wins = max(max_wins, wins)
        else:
            # Break-even trades extend the losing streak.
            losses += 1
            wins = 0
            max_losses = max(max_losses, losses)
    return Streaks(max_consecutive_wins=max_wins, max_consecutive_losses=max_losses)


def kelly_criterion(win_rate_pct: float, average_win: float, average_loss: float) -> float:
    """Kelly fraction expressed as a percentage of capital."""

    p = win_rate_pct / 100
    if p <= 0 or average_loss <= 0 or average_win <= 0:
        return 0.0
    return (p * average_win - (1 - p) * average_loss) / average_win * 100


def expected_value(win_rate_pct: float, average_win: float, average_loss: float) -> float:
    p = win_rate_pct / 100
    return p * average_win - (1 - p) * average_loss


def risk_of_ruin(losing: int, closed: int, max_consecutive_losses: int, winning: int) -> float:
    """Simplified heuristic: loss frequency raised to the worst losing streak, in percent."""

    if losing == 0 or winning == 0 or closed == 0:
        return 0.0
    return (losing / closed) ** max_consecutive_losses * 100


def compute_metrics(
    trades: Sequence[Trade],
    current_prices: Mapping[str, float] | None = None,
) -> Metrics:
    """Aggregate performance and risk statistics for ``trades``."""

    if not trades:
        return Metrics()

    closed = closed_trades(trades)
    open_positions = [trade for trade in trades if not trade.is_closed]
    pnls = [trade.profit_loss for trade in closed]
    closed_count = len(pnls)

    wins = [p for p in pnls if p > 0]
    losses = [p for p in pnls if p < 0]
    total_pnl = float(sum(pnls))
    total_volume = float(sum(trade.notional for trade in trades))

    win_rate = len(wins) / closed_count * 100 if closed_count else 0.0
    average_win = _mean(wins)
    average_loss = abs(_mean(losses))

    # Per-trade returns as a share of everything traded, the performance-page variant.
    returns_pct = [p / total_volume * 100 if total_volume > 0 else 0.0 for p in pnls]

    dd = drawdown(pnls)
    streaks = consecutive_streaks(pnls)
    average_return = total_pnl / closed_count if closed_count else 0.0
    calmar = average_return / (dd.max_drawdown_pct / 100) if dd.max_drawdown_pct > 0 else 0.0

    unrealized = 0.0
    if current_prices:
        prices = {ticker.upper(): price for ticker, price in current_prices.items()}
        for trade in open_positions:
            price = prices.get(trade.ticker)
            if price is not None and price > 0:
                unrealized += trade.unrealized_pnl(price)

    holding_periods = [trade.holding_period for trade in closed]

    return Metrics(
        total_trades=len(trades),
        open_trades=len(open_positions),
        closed_trades=closed_count,
        winning_trades=len(wins),
        losing_trades=len(losses),
        total_pnl=total_pnl,
        unrealized_pnl=unrealized,
        win_rate=win_rate,
        average_return=average_return,
        average_win=average_win,
        average_loss=average_loss,
        largest_win=max(wins) if wins else 0.0,
        largest_loss=abs(min(losses)) if losses else 0.0,
        profit_factor=profit_factor(pnls),
        max_drawdown=dd.max_drawdown,
        max_drawdown_pct=dd.max_drawdown_pct,
        current_drawdown_pct=dd.current_drawdown_pct,
        volatility=population_stdev(pnls),
        return_volatility=sample_stdev(returns_pct),
        sharpe_ratio=sharpe_ratio(pnls),
        sortino_ratio=sortino_ratio(pnls),
        calmar_ratio=calmar,
        kelly_criterion=kelly_criterion(win_rate, average_win, average_loss),
        expected_value=expected_value(win_rate, average_win, average_loss) if closed_count else 0.0,
        max_consecutive_wins=streaks.max_consecutive_wins,
        max_consecutive_losses=streaks.max_consecutive_losses,
        risk_of_ruin=risk_of_ruin(len(losses), closed_count, streaks.max_consecutive_losses, len(wins)),
        total_volume=total_volume,
        average_holding_period=_mean(holding_periods),
    )


__all__ = [
    "Drawdown",
    "Metrics",
    "Streaks",
    "compute_metrics",
    "consecutive_streaks",
    "drawdown",
    "expected_value",
    "kelly_criterion",
    "population_stdev",
    "profit_factor",
    "risk_of_ruin",
    "sample_stdev",
    "sharpe_ratio",
    "sortino_ratio",
]
