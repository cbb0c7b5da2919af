"""Trade payloads accepted by the analytics endpoints."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import AliasChoices, BaseModel, Field

from trade_journal.domain import Trade


class TradeSchema(BaseModel):
    id: int | str | None = None
    ticker: str = Field(..., min_length=1, validation_alias=AliasChoices("ticker", "symbol"), examples=["AAPL"])
    entry_date: datetime = Field(..., validation_alias=AliasChoices("entry_date", "entryDate"))
    entry_price: float = Field(..., validation_alias=AliasChoices("entry_price", "entryPrice"))
    quantity: float
    is_short: bool = Field(default=False, validation_alias=AliasChoices("is_short", "isShort"))
    exit_date: datetime | None = Field(default=None, validation_alias=AliasChoices("exit_date", "exitDate"))
    exit_price: float | None = Field(default=None, validation_alias=AliasChoices("exit_price", "exitPrice"))
    fees: float = 0.0
    notes: str | None = None
    tags: list[str] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "id": 1,
                "ticker": "AAPL",
                "entryDate": "2024-01-01",
                "entryPrice": 100.0,
                "quantity": 10,
                "isShort": False,
                "exitDate": "2024-01-10",
                "exitPrice": 110.0,
                "fees": 9.99,
                "tags": ["swing"],
            }
        }

    def to_trade(self) -> Trade:
        """Build the domain record; raises ``ValueError`` on inconsistent fields."""

        return Trade(
            id=self.id,
            ticker=self.ticker,
            entry_date=self.entry_date,
            entry_price=self.entry_price,
            quantity=self.quantity,
            is_short=self.is_short,
            exit_date=self.exit_date,
            exit_price=self.exit_price,
            fees=self.fees,
            notes=self.notes,
            tags=self.tags,
        )

    @classmethod
    def from_trade(cls, trade: Trade) -> "TradeSchema":
        return cls.model_validate(
            {
                "id": trade.id,
                "ticker": trade.ticker,
                "entry_date": trade.entry_date,
                "entry_price": trade.entry_price,
                "quantity": trade.quantity,
                "is_short": trade.is_short,
                "exit_date": trade.exit_date,
                "exit_price": trade.exit_price,
                "fees": trade.fees,
                "notes": trade.notes,
                "tags": list(trade.tags),
            }
        )


class TradeListRequest(BaseModel):
    trades: list[TradeSchema] = Field(default_factory=list)
    current_prices: dict[str, float] | None = Field(
        default=None,
        description="Latest price per ticker used to mark open trades.",
    )
    mark_to_market: bool = Field(
        default=False,
        description="Look up latest prices for open trades through the configured price source.",
    )

    def to_trades(self) -> list[Trade]:
        return [trade.to_trade() for trade in self.trades]


class PerformanceRequest(TradeListRequest):
    period: str = Field(default="month", pattern="^(week|month|year)$")
    start_date: date | None = None
    end_date: date | None = None
    year: int | None = Field(default=None, description="Calendar year for monthly and weekly breakdowns")
    today: date | None = None


class ComprehensiveBenchmarkRequest(TradeListRequest):
    today: date | None = None


class InsightsRequest(TradeListRequest):
    today: date | None = Field(default=None, description="Reference day for the recent-activity check")


__all__ = [
    "ComprehensiveBenchmarkRequest",
    "InsightsRequest",
    "PerformanceRequest",
    "TradeListRequest",
    "TradeSchema",
]
