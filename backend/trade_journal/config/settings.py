"""Application configuration and environment helpers."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BENCHMARK_SYMBOL = "^GSPC"


class AppSettings(BaseSettings):
    """Configuration options for the trade journal analytics service."""

    model_config = SettingsConfigDict(
        env_prefix="TRADE_JOURNAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(default="Trade Journal Analytics")
    log_level: str = Field(default="INFO")

    benchmark_symbol: str = Field(default=DEFAULT_BENCHMARK_SYMBOL)
    benchmark_risk_free_rate_pct: float = Field(
        default=2.0,
        description="Annual risk-free rate subtracted from portfolio return in benchmark Sharpe.",
    )
    benchmark_price_lookback_days: int = Field(default=30, gt=0)
    use_fallback_benchmark_prices: bool = Field(
        default=True,
        description="Serve the bundled S&P 500 table when the primary price source has no data.",
    )

    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])

    telemetry_enabled: bool = Field(default=False)
    telemetry_service_name: str = Field(default="trade-journal-analytics")
    telemetry_otlp_endpoint: str | None = Field(default=None)
    telemetry_otlp_insecure: bool = Field(default=True)
    telemetry_sample_ratio: float = Field(default=1.0, ge=0.0, le=1.0)
    telemetry_metric_interval_ms: int = Field(default=10000, gt=0)
    telemetry_export_logs: bool = Field(default=True)


@lru_cache(maxsize=1)
def get_settings(**overrides: Any) -> AppSettings:
    """Return cached application settings with optional overrides."""

    if overrides:
        return AppSettings(**overrides)
    return AppSettings()


__all__ = [
    "AppSettings",
    "DEFAULT_BENCHMARK_SYMBOL",
    "get_settings",
]
