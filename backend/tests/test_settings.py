from __future__ import annotations

from trade_journal.config import AppSettings, get_settings


def test_defaults():
    settings = AppSettings(_env_file=None)
    assert settings.benchmark_symbol == "^GSPC"
    assert settings.benchmark_risk_free_rate_pct == 2.0
    assert settings.use_fallback_benchmark_prices is True
    assert settings.telemetry_enabled is False


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("TRADE_JOURNAL_BENCHMARK_SYMBOL", "SPY")
    monkeypatch.setenv("TRADE_JOURNAL_BENCHMARK_RISK_FREE_RATE_PCT", "4.5")
    settings = get_settings()
    assert settings.benchmark_symbol == "SPY"
    assert settings.benchmark_risk_free_rate_pct == 4.5
    assert get_settings() is settings


def test_unknown_prefixed_variables_are_ignored(monkeypatch):
    monkeypatch.setenv("TRADE_JOURNAL_BASE_CURRENCY", "EUR")
    settings = AppSettings(_env_file=None)
    assert "base_currency" not in settings.model_dump()
    assert settings.model_dump()["benchmark_symbol"] == "^GSPC"
