"""Outcome building for both event shapes, plus the event-level summary."""

from __future__ import annotations

from typing import Any

import structlog

from polymath.errors import ErrorKind, ResolverError
from polymath.models import (
    SHAPE_MULTI_OUTCOME,
    Event,
    Market,
    MarketSummary,
    Outcome,
    ShapeTag,
)
from polymath.normalize.shape import classify_shape
from polymath.polymarket.decode import DEFAULT_PRICE, clamp01, has_price_at, price_at, token_at

log = structlog.get_logger(__name__)


def _label_position(labels: list[Any], target: str) -> int | None:
    for i, label in enumerate(labels):
        if isinstance(label, str) and label.strip().lower() == target:
            return i
    return None


def build_multi_outcomes(market: Market) -> list[Outcome]:
    """One Outcome per label of a single multi-outcome market."""
    return [
        Outcome(
            index=i,
            name=str(label),
            price=price_at(market.outcome_prices, i),
            token_id=token_at(market.clob_token_ids, i),
            type="multi-outcome",
        )
        for i, label in enumerate(market.outcomes)
    ]


def _is_binary_candidate(market: Market) -> bool:
    # A single declared label is one outcome, not a yes/no pair.
    if len(market.outcomes) == 1:
        return False
    return bool(market.outcome_prices or market.clob_token_ids)


def build_binary_outcome(market: Market) -> Outcome | None:
    """Read a market as one yes/no option. None when it cannot be read that way."""
    if not _is_binary_candidate(market):
        return None
    yes_pos = _label_position(market.outcomes, "yes")
    no_pos = _label_position(market.outcomes, "no")
    if yes_pos is None or no_pos is None:
        # Labels missing or not yes/no: assume price order [YES, NO].
        yes_pos = 0
        no_pos = 1 if len(market.outcome_prices) >= 2 else None

    yes_price = price_at(market.outcome_prices, yes_pos)
    if has_price_at(market.outcome_prices, no_pos):
        no_price = price_at(market.outcome_prices, no_pos)
    else:
        no_price = clamp01(1 - yes_price)
    yes_token = token_at(market.clob_token_ids, yes_pos)
    no_token = token_at(market.clob_token_ids, no_pos)
    return Outcome(
        index=market.position,
        name=market.question or f"Market {market.position + 1}",
        price=yes_price,
        no_price=no_price,
        token_id=yes_token,
        yes_token_id=yes_token,
        no_token_id=no_token,
        type="binary",
    )


def build_outcomes(event: Event) -> tuple[ShapeTag, list[Outcome]]:
    """Classify the event and build its outcomes. Raises UNSUPPORTED_SHAPE when none can be built."""
    shape = classify_shape(event.markets)
    if shape == SHAPE_MULTI_OUTCOME:
        outcomes = build_multi_outcomes(event.markets[0])
    else:
        outcomes = []
        for market in event.markets:
            outcome = build_binary_outcome(market)
            if outcome is None:
                log.debug("market_skipped", slug=event.slug, position=market.position)
                continue
            outcomes.append(outcome)
    if not outcomes:
        raise ResolverError(
            ErrorKind.UNSUPPORTED_SHAPE,
            "Event structure could not be read as multi-outcome or yes/no markets",
            slug=event.slug,
        )
    return shape, outcomes


def mid_price(outcomes: list[Outcome]) -> float:
    """Price of the highest-priced outcome; first one wins ties."""
    if not outcomes:
        return DEFAULT_PRICE
    best = outcomes[0]
    for o in outcomes[1:]:
        if o.price > best.price:
            best = o
    return best.price


def summarize(event: Event) -> MarketSummary:
    shape, outcomes = build_outcomes(event)
    return MarketSummary(
        slug=event.slug,
        title=event.title,
        volume=event.total_volume,
        mid_price=mid_price(outcomes),
        shape=shape,
        outcomes=outcomes,
    )
