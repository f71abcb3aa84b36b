"""Pydantic schemas for API responses (camelCase on the wire) and OpenAPI docs."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from polymath.models import MarketSummary, Outcome, OutcomeType, PriceQuote, ShapeTag, Side


def utc_timestamp() -> str:
    """ISO-8601 UTC with millisecond precision and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class _Schema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


# --- Status (no query) ---
class StatusResponse(_Schema):
    status: str = "ok"
    message: str = "PolyMath Backend API is running"
    timestamp: str = Field(default_factory=utc_timestamp)
    endpoints: dict[str, str] = Field(
        default_factory=lambda: {
            "marketData": "/api/polymarket?type=market-data&slug=YOUR_SLUG",
            "prices": "/api/polymarket?type=prices&slug=YOUR_SLUG&outcomeIndex=0",
        }
    )


# --- Error (consistent shape for 4xx/5xx) ---
class ErrorResponse(_Schema):
    success: bool = False
    error: str = Field(..., description="Human-readable message")
    code: str = Field(..., description="Machine-readable code, e.g. not_found, unsupported_shape")
    slug: str | None = None


# --- Market data ---
class OutcomeItem(_Schema):
    index: int
    name: str
    price: float
    no_price: float | None = None
    token_id: str | None = None
    yes_token_id: str | None = None
    no_token_id: str | None = None
    type: OutcomeType

    @classmethod
    def from_outcome(cls, outcome: Outcome) -> OutcomeItem:
        return cls.model_validate(outcome.model_dump())


class MarketDataResponse(_Schema):
    success: bool = True
    market_name: str
    volume: float
    slug: str
    mid_price: float
    shape: ShapeTag
    outcomes: list[OutcomeItem]
    timestamp: str = Field(default_factory=utc_timestamp)

    @classmethod
    def from_summary(cls, summary: MarketSummary) -> MarketDataResponse:
        return cls(
            market_name=summary.title,
            volume=summary.volume,
            slug=summary.slug,
            mid_price=summary.mid_price,
            shape=summary.shape,
            outcomes=[OutcomeItem.from_outcome(o) for o in summary.outcomes],
        )


# --- Prices ---
class PricesResponse(_Schema):
    success: bool = True
    bid: float
    ask: float
    spread: float
    volume: float
    outcome_index: int | None = None
    token_id: str | None = None
    side: Side = "yes"
    source: str = "fallback"
    slug: str
    timestamp: str = Field(default_factory=utc_timestamp)

    @classmethod
    def from_quote(cls, slug: str, quote: PriceQuote) -> PricesResponse:
        return cls(slug=slug, **quote.model_dump())
