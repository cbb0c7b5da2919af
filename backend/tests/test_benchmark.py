from __future__ import annotations

from datetime import date

import pytest

from trade_journal.domain import Trade
from trade_journal.providers import InMemoryPriceSource, SP500_SYMBOL, sp500_fallback_source
from trade_journal.services.benchmark import BenchmarkService, trade_return_pct


def build_service(closes: dict[date, float]) -> BenchmarkService:
    return BenchmarkService(InMemoryPriceSource({SP500_SYMBOL: closes}))


def test_index_return_uses_first_and_last_close():
    service = build_service({date(2024, 1, 2): 100, date(2024, 1, 5): 95, date(2024, 1, 9): 110})
    assert service.index_return(date(2024, 1, 1), date(2024, 1, 10)) == pytest.approx(10)
    assert service.index_return(date(2024, 1, 3), date(2024, 1, 10)) == pytest.approx((110 - 95) / 95 * 100)


def test_index_return_needs_two_closes():
    service = build_service({date(2024, 1, 2): 100})
    assert service.index_return(date(2024, 1, 1), date(2024, 1, 10)) == 0


def test_index_price_on_picks_nearest_prior_close():
    service = build_service({date(2024, 1, 2): 100, date(2024, 1, 5): 105})
    assert service.index_price_on(date(2024, 1, 6)) == 105
    assert service.index_price_on(date(2023, 12, 1)) is None


def test_trade_benchmarks_compare_holding_window():
    service = build_service({date(2024, 1, 1): 100, date(2024, 1, 10): 110})
    trades = [
        Trade("AAPL", date(2024, 1, 1), 150, 10, exit_date=date(2024, 1, 10), exit_price=160, fees=9.99, id=1),
        Trade("MSFT", date(2024, 1, 2), 100, 1),
    ]
    benchmarks = service.trade_benchmarks(trades)

    assert len(benchmarks) == 1
    row = benchmarks[0]
    assert row.trade_id == 1
    assert row.trade_return == pytest.approx(90.01 / 1500 * 100)
    assert row.index_return == pytest.approx(10)
    assert row.alpha == pytest.approx(90.01 / 1500 * 100 - 10)
    assert row.outperformance is False
    assert row.index_start_price == 100
    assert row.index_end_price == 110


def test_portfolio_benchmark():
    service = build_service({date(2024, 1, 1): 100, date(2024, 6, 28): 105})
    result = service.portfolio_benchmark(800, 10_000, date(2024, 1, 1), date(2024, 6, 30))
    assert result.portfolio_return == pytest.approx(8)
    assert result.index_return == pytest.approx(5)
    assert result.alpha == pytest.approx(3)
    assert result.outperformance is True

    with pytest.raises(ValueError):
        service.portfolio_benchmark(800, 10_000, date(2024, 6, 30), date(2024, 1, 1))


def test_index_performance_periods():
    service = build_service({date(2024, 1, 2): 4000, date(2024, 2, 15): 4200, date(2024, 3, 15): 4410})
    today = date(2024, 3, 15)
    assert service.index_performance("1M", today) == pytest.approx(5)
    assert service.index_performance("YTD", today) == pytest.approx(10.25)
    with pytest.raises(ValueError):
        service.index_performance("2W", today)  # type: ignore[arg-type]


def test_comprehensive_benchmark():
    service = BenchmarkService(
        InMemoryPriceSource({SP500_SYMBOL: {date(2024, 1, 2): 4000, date(2024, 6, 28): 4400}}),
        risk_free_rate_pct=2.0,
    )
    trades = [
        Trade("AAPL", date(2024, 1, 1), 100, 10, exit_date=date(2024, 1, 10), exit_price=120),
        Trade("MSFT", date(2024, 2, 1), 100, 10, exit_date=date(2024, 2, 10), exit_price=90),
    ]
    result = service.comprehensive(trades, today=date(2024, 6, 30))

    assert result.portfolio.portfolio_return == pytest.approx(5)
    assert result.portfolio.total_trades == 2
    assert result.portfolio.win_rate == 50
    assert result.portfolio.average_return == pytest.approx(5)
    assert result.portfolio.volatility == pytest.approx(15)
    assert result.portfolio.sharpe_ratio == pytest.approx((5 - 2) / 15)
    assert result.portfolio.max_drawdown == pytest.approx(10)
    assert result.index_return == pytest.approx(10)
    assert result.alpha == pytest.approx(-5)
    assert result.outperformance is False


def test_comprehensive_benchmark_without_trades():
    service = build_service({})
    result = service.comprehensive([], today=date(2024, 6, 30))
    assert result.portfolio.portfolio_return == 0
    assert result.portfolio.volatility == 0
    assert result.portfolio.sharpe_ratio == 0
    assert result.index_return == 0


def test_bundled_table_gives_first_half_2024_return():
    service = BenchmarkService(sp500_fallback_source())
    assert service.index_return(date(2024, 1, 1), date(2024, 7, 1)) == pytest.approx(
        (5461.27 - 4769.83) / 4769.83 * 100
    )


def test_trade_return_pct_of_open_trade_is_zero():
    assert trade_return_pct(Trade("AAPL", date(2024, 1, 1), 100, 1)) == 0
