"""Print metrics, patterns, insights and suggestions for a JSON trade export."""

from __future__ import annotations

import argparse
import json
import pathlib
import sys

from trade_journal.analytics import compute_metrics, risk_levels, strategy_suggestions, trade_insights
from trade_journal.core.logging import setup_logging
from trade_journal.domain import Trade
from trade_journal.patterns import detect_patterns, pattern_recommendations


def _load(path: pathlib.Path) -> list[Trade]:
    payload = json.loads(path.read_text())
    rows = payload.get("trades", []) if isinstance(payload, dict) else payload
    return [Trade.from_mapping(row) for row in rows]


def _parse_prices(values: list[str]) -> dict[str, float]:
    prices: dict[str, float] = {}
    for value in values:
        ticker, _, price = value.partition("=")
        if not price:
            raise ValueError(f"Expected TICKER=PRICE, got {value!r}")
        prices[ticker.upper()] = float(price)
    return prices


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Analyze a trade journal export")
    parser.add_argument("path", type=pathlib.Path, help="JSON file with a list of trades")
    parser.add_argument("--price", action="append", default=[], help="Mark an open ticker, e.g. AAPL=190.5")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)
    setup_logging(args.log_level)
    try:
        prices = _parse_prices(args.price)
    except ValueError as exc:
        parser.error(str(exc))

    try:
        trades = _load(args.path)
    except (OSError, ValueError) as exc:
        print(f"Could not load trades from {args.path}: {exc}", file=sys.stderr)
        return 1

    metrics = compute_metrics(trades, prices)
    risk = risk_levels(metrics)
    result = detect_patterns(trades)

    print(f"Trades: {metrics.total_trades} ({metrics.closed_trades} closed, {metrics.open_trades} open)")
    print(f"Total P&L: {metrics.total_pnl:.2f}  Unrealized: {metrics.unrealized_pnl:.2f}")
    print(f"Win rate: {metrics.win_rate:.1f}%  Profit factor: {metrics.profit_factor:.2f}")
    print(
        f"Max drawdown: {metrics.max_drawdown:.2f} ({metrics.max_drawdown_pct:.1f}%, {risk.drawdown.value} risk)"
    )
    print(f"Sharpe: {metrics.sharpe_ratio:.2f}  Sortino: {metrics.sortino_ratio:.2f}")
    print(f"Patterns: {result.summary.total_patterns}")
    for pattern in result.patterns:
        print(f"  - {pattern.name} [{pattern.trades[0].ticker}] confidence {pattern.confidence:.2f}")
    for recommendation in pattern_recommendations(result.patterns):
        print(f"* {recommendation}")
    for insight in trade_insights(trades, metrics):
        print(f"[{insight.severity.value}] {insight.title}: {insight.description}")
    for suggestion in strategy_suggestions(trades, metrics):
        print(f"> {suggestion}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
