"""BestPrice, PriceSelector, PriceQuote - order-book side of the resolver."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

Side = Literal["yes", "no"]
QuoteSource = Literal["orderbook", "fallback"]


def parse_side(raw: Any) -> Side:
    """'no' (any case, padded) selects the no side; anything else is yes."""
    if isinstance(raw, str) and raw.strip().lower() == "no":
        return "no"
    return "yes"


def parse_outcome_index(raw: Any) -> int:
    """Lenient int parse for the outcomeIndex query value. Malformed -> 0."""
    if raw is None or isinstance(raw, bool):
        return 0
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw).strip())
    except ValueError:
        pass
    try:
        return int(float(str(raw).strip()))
    except (ValueError, OverflowError):
        return 0


class BestPrice(BaseModel):
    """CLOB /best response. None when the field was absent or not a finite number."""

    token_id: str
    best_bid: float | None = None
    best_ask: float | None = None

    @property
    def usable(self) -> bool:
        if self.best_bid is None or self.best_ask is None:
            return False
        return not (self.best_bid == 0 and self.best_ask == 0)


class PriceSelector(BaseModel):
    """Which outcome/token a prices request is about."""

    token_id: str | None = None
    outcome_index: int = 0
    side: Side = "yes"

    @classmethod
    def from_query(
        cls,
        token_id: str | None = None,
        outcome_index: Any = None,
        side: Any = None,
    ) -> PriceSelector:
        token_id = (token_id or "").strip() or None
        return cls(token_id=token_id, outcome_index=parse_outcome_index(outcome_index), side=parse_side(side))


class PriceQuote(BaseModel):
    """Bid/ask for one outcome token, either live or derived from event metadata."""

    bid: float = Field(..., ge=0, le=1)
    ask: float = Field(..., ge=0, le=1)
    spread: float  # (ask - bid) * 100
    volume: float = 0.0
    outcome_index: int | None = None
    token_id: str | None = None
    side: Side = "yes"
    source: QuoteSource = "fallback"
