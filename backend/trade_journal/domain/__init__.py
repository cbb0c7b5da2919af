"""Domain records consumed by the analytics modules."""

from .trades import Trade, closed_trades, group_by_ticker

__all__ = ["Trade", "closed_trades", "group_by_ticker"]
