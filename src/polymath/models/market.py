"""Event, Market, Outcome - upstream snapshots and the normalized outcome."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

ShapeTag = Literal["single-market-multi-outcome", "market-per-option"]
OutcomeType = Literal["multi-outcome", "binary"]

SHAPE_MULTI_OUTCOME: ShapeTag = "single-market-multi-outcome"
SHAPE_MARKET_PER_OPTION: ShapeTag = "market-per-option"


class Market(BaseModel):
    """One Gamma market inside an event. List fields are already decoded but not aligned."""

    position: int = 0  # index within event.markets
    question: str | None = None
    volume: float = Field(0.0, ge=0)
    outcomes: list[Any] = Field(default_factory=list)
    outcome_prices: list[Any] = Field(default_factory=list)
    clob_token_ids: list[Any] = Field(default_factory=list)
    extra: dict[str, Any] = Field(default_factory=dict)


class Event(BaseModel):
    """Gamma event: one prediction question grouping one or more markets."""

    slug: str
    title: str = "Polymarket Event"
    markets: list[Market] = Field(default_factory=list)

    @property
    def total_volume(self) -> float:
        return sum(m.volume for m in self.markets)


class Outcome(BaseModel):
    """Normalized selectable choice, built from either shape."""

    index: int
    name: str
    price: float = Field(..., ge=0, le=1, description="Outcome price (multi) or yes price (binary)")
    no_price: float | None = Field(None, ge=0, le=1)
    token_id: str | None = None  # primary token; the yes token for binary outcomes
    yes_token_id: str | None = None
    no_token_id: str | None = None
    type: OutcomeType

    def matches_token(self, token_id: str) -> bool:
        return token_id in (self.token_id, self.yes_token_id, self.no_token_id)


class MarketSummary(BaseModel):
    """Event-level view returned by the market-data operation."""

    slug: str
    title: str
    volume: float = 0.0  # sum over all markets
    mid_price: float = Field(..., ge=0, le=1)  # price of the highest-priced outcome
    shape: ShapeTag
    outcomes: list[Outcome] = Field(default_factory=list)
