"""Trade records as supplied by the journal's storage layer.

A :class:`Trade` is read-only input for the analytics modules. Derived values
(profit/loss, holding period, notional) are computed on access and never
stored, so the same record always yields the same numbers.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from typing import Any, Iterable, Mapping, Sequence

_SECONDS_PER_DAY = 86400


def _to_datetime(value: date | datetime | str | None) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    return datetime.combine(value, time.min)


@dataclass(frozen=True)
class Trade:
    ticker: str
    entry_date: datetime
    entry_price: float
    quantity: float
    is_short: bool = False
    exit_date: datetime | None = None
    exit_price: float | None = None
    fees: float = 0.0
    id: int | str | None = None
    notes: str | None = None
    tags: Sequence[str] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Normalise dates to naive UTC datetimes so trades always sort together.
        object.__setattr__(self, "ticker", self.ticker.strip().upper())
        object.__setattr__(self, "entry_date", _to_datetime(self.entry_date))
        object.__setattr__(self, "exit_date", _to_datetime(self.exit_date))
        object.__setattr__(self, "fees", float(self.fees or 0.0))
        object.__setattr__(self, "tags", tuple(self.tags or ()))
        _validate_trade(self)

    @property
    def is_open(self) -> bool:
        return self.exit_date is None

    @property
    def is_closed(self) -> bool:
        return self.exit_date is not None and self.exit_price is not None

    @property
    def notional(self) -> float:
        return self.entry_price * self.quantity

    @property
    def profit_loss(self) -> float | None:
        """Realized P&L net of fees, ``None`` while the trade is open."""

        if not self.is_closed:
            return None
        return _net_pnl(self, self.exit_price)  # type: ignore[arg-type]

    @property
    def profit_loss_pct(self) -> float | None:
        pnl = self.profit_loss
        if pnl is None or self.notional == 0:
            return None
        return pnl / self.notional * 100

    @property
    def holding_period(self) -> int | None:
        if not self.is_closed:
            return None
        elapsed = (self.exit_date - self.entry_date).total_seconds()  # type: ignore[operator]
        return math.ceil(elapsed / _SECONDS_PER_DAY)

    def unrealized_pnl(self, current_price: float) -> float:
        """Mark an open trade to ``current_price``; closed trades return realized P&L."""

        if self.is_closed:
            return self.profit_loss  # type: ignore[return-value]
        return _net_pnl(self, current_price)

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "Trade":
        """Build a trade from a camelCase (journal API) or snake_case mapping."""

        def pick(*keys: str, default: Any = None) -> Any:
            for key in keys:
                if key in payload and payload[key] is not None:
                    return payload[key]
            return default

        exit_price = pick("exit_price", "exitPrice")
        tags = pick("tags", default=())
        if isinstance(tags, str):
            tags = [tag.strip() for tag in tags.split(",") if tag.strip()]
        return cls(
            id=pick("id"),
            ticker=str(pick("ticker", "symbol", default="")),
            entry_date=pick("entry_date", "entryDate"),
            entry_price=float(pick("entry_price", "entryPrice", default=0)),
            quantity=float(pick("quantity", "qty", default=0)),
            is_short=bool(pick("is_short", "isShort", default=False)),
            exit_date=pick("exit_date", "exitDate"),
            exit_price=float(exit_price) if exit_price is not None else None,
            fees=float(pick("fees", "fee", default=0)),
            notes=pick("notes"),
            tags=tags,
        )


def _net_pnl(trade: Trade, price: float) -> float:
    if trade.is_short:
        gross = (trade.entry_price - price) * trade.quantity
    else:
        gross = (price - trade.entry_price) * trade.quantity
    return gross - trade.fees


def _validate_trade(trade: Trade) -> None:
    if not trade.ticker:
        raise ValueError("ticker is required")
    if trade.entry_date is None:
        raise ValueError("entry_date is required")
    if trade.entry_price <= 0:
        raise ValueError("entry_price must be > 0")
    if trade.quantity <= 0:
        raise ValueError("quantity must be > 0")
    if trade.fees < 0:
        raise ValueError("fees must be >= 0")
    if (trade.exit_date is None) != (trade.exit_price is None):
        raise ValueError("exit_date and exit_price must be provided together")
    if trade.exit_price is not None and trade.exit_price <= 0:
        raise ValueError("exit_price must be > 0")
    if trade.exit_date is not None and trade.exit_date < trade.entry_date:
        raise ValueError("exit_date cannot be before entry_date")


def closed_trades(trades: Iterable[Trade]) -> list[Trade]:
    """Closed trades in realization order (exit date, then entry date)."""

    closed = [trade for trade in trades if trade.is_closed]
    return sorted(closed, key=lambda t: (t.exit_date, t.entry_date))


def group_by_ticker(trades: Iterable[Trade]) -> dict[str, list[Trade]]:
    grouped: dict[str, list[Trade]] = {}
    for trade in trades:
        grouped.setdefault(trade.ticker, []).append(trade)
    return grouped


__all__ = ["Trade", "closed_trades", "group_by_ticker"]
