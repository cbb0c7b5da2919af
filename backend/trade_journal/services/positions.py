"""Per-ticker position roll-ups with optional mark-to-market."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Sequence

from trade_journal.domain import Trade, group_by_ticker


@dataclass
class Position:
    ticker: str
    total_quantity: float
    average_entry_price: float
    total_investment: float
    total_fees: float
    is_short: bool
    is_open: bool
    trades: list[Trade] = field(default_factory=list)
    open_quantity: float = 0.0
    current_price: float | None = None
    current_value: float | None = None
    unrealized_pnl: float | None = None
    unrealized_pnl_pct: float | None = None


def _build_position(ticker: str, trades: Sequence[Trade], price: float | None) -> Position:
    ordered = sorted(trades, key=lambda t: t.entry_date)
    total_quantity = sum(t.quantity for t in ordered)
    total_investment = sum(t.notional for t in ordered)
    open_lots = [t for t in ordered if t.is_open]
    position = Position(
        ticker=ticker,
        total_quantity=total_quantity,
        average_entry_price=total_investment / total_quantity if total_quantity else 0.0,
        total_investment=total_investment,
        total_fees=sum(t.fees for t in ordered),
        is_short=ordered[0].is_short,
        is_open=bool(open_lots),
        trades=ordered,
        open_quantity=sum(t.quantity for t in open_lots),
    )
    if price is None or price <= 0 or not open_lots:
        return position
    open_cost = sum(t.notional for t in open_lots)
    unrealized = sum(t.unrealized_pnl(price) for t in open_lots)
    position.current_price = price
    position.current_value = price * position.open_quantity
    position.unrealized_pnl = unrealized
    position.unrealized_pnl_pct = unrealized / open_cost * 100 if open_cost else 0.0
    return position


def build_positions(
    trades: Sequence[Trade],
    current_prices: Mapping[str, float] | None = None,
) -> list[Position]:
    """Group trades into positions, sorted by ticker."""

    prices = {k.upper(): v for k, v in (current_prices or {}).items()}
    return [
        _build_position(ticker, group, prices.get(ticker))
        for ticker, group in sorted(group_by_ticker(trades).items())
    ]


__all__ = ["Position", "build_positions"]
