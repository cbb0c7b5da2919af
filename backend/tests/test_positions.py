from __future__ import annotations

from datetime import date

import pytest

from trade_journal.domain import Trade
from trade_journal.services.positions import build_positions


def test_positions_roll_up_lots_per_ticker():
    trades = [
        Trade("MSFT", date(2024, 1, 3), 300, 2, fees=1),
        Trade("AAPL", date(2024, 1, 5), 120, 10, fees=2),
        Trade("AAPL", date(2024, 1, 1), 100, 10, exit_date=date(2024, 1, 4), exit_price=110, fees=1),
    ]
    positions = build_positions(trades, {"aapl": 130})

    assert [p.ticker for p in positions] == ["AAPL", "MSFT"]
    aapl = positions[0]
    assert aapl.total_quantity == 20
    assert aapl.total_investment == pytest.approx(2200)
    assert aapl.average_entry_price == pytest.approx(110)
    assert aapl.total_fees == pytest.approx(3)
    assert aapl.is_open
    assert aapl.open_quantity == 10
    assert [t.entry_date for t in aapl.trades] == sorted(t.entry_date for t in aapl.trades)
    assert aapl.current_price == 130
    assert aapl.current_value == pytest.approx(1300)
    assert aapl.unrealized_pnl == pytest.approx(98)
    assert aapl.unrealized_pnl_pct == pytest.approx(98 / 1200 * 100)

    msft = positions[1]
    assert msft.current_price is None
    assert msft.unrealized_pnl is None


def test_fully_closed_position_is_not_marked():
    trades = [Trade("AAPL", date(2024, 1, 1), 100, 10, exit_date=date(2024, 1, 4), exit_price=110)]
    position = build_positions(trades, {"AAPL": 130})[0]
    assert not position.is_open
    assert position.open_quantity == 0
    assert position.unrealized_pnl is None


def test_short_position_gains_when_price_falls():
    trades = [Trade("TSLA", date(2024, 1, 1), 200, 5, is_short=True)]
    position = build_positions(trades, {"TSLA": 180})[0]
    assert position.is_short
    assert position.unrealized_pnl == pytest.approx(100)
