"""Canonical schema (Pydantic) - Event, Market, Outcome, quotes."""

from polymath.models.market import (
    SHAPE_MARKET_PER_OPTION,
    SHAPE_MULTI_OUTCOME,
    Event,
    Market,
    MarketSummary,
    Outcome,
    OutcomeType,
    ShapeTag,
)
from polymath.models.quote import BestPrice, PriceQuote, PriceSelector, Side

__all__ = [
    "Event",
    "Market",
    "MarketSummary",
    "Outcome",
    "OutcomeType",
    "ShapeTag",
    "SHAPE_MULTI_OUTCOME",
    "SHAPE_MARKET_PER_OPTION",
    "BestPrice",
    "PriceQuote",
    "PriceSelector",
    "Side",
]
