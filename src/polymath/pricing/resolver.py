"""Resolve a price selector to a token and quote it, falling back to event metadata."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from polymath.models import (
    SHAPE_MULTI_OUTCOME,
    BestPrice,
    Event,
    Outcome,
    PriceQuote,
    PriceSelector,
    ShapeTag,
    Side,
)
from polymath.polymarket.decode import DEFAULT_PRICE, clamp01

log = structlog.get_logger(__name__)

FALLBACK_BID_RATIO = 0.98
PRICE_DECIMALS = 4
PRICE_STEP = 10**-PRICE_DECIMALS


@dataclass(frozen=True)
class Resolution:
    """Selected outcome (None for an unknown explicit token), token and effective side."""

    outcome: Outcome | None
    token_id: str | None
    side: Side


def resolve_selection(outcomes: list[Outcome], selector: PriceSelector) -> Resolution:
    """Pick outcome + token. Explicit token wins; otherwise the clamped outcome index."""
    if selector.token_id:
        match = next((o for o in outcomes if o.matches_token(selector.token_id)), None)
        side: Side = selector.side
        if match is not None:
            side = "no" if selector.token_id == match.no_token_id else "yes"
        return Resolution(match, selector.token_id, side)

    if not outcomes:
        return Resolution(None, None, selector.side)
    outcome = _outcome_at(outcomes, selector.outcome_index)
    if selector.side == "no" and outcome.no_price is not None:
        if outcome.no_token_id or not outcome.token_id:
            return Resolution(outcome, outcome.no_token_id, "no")
    return Resolution(outcome, outcome.token_id, "yes")


def _outcome_at(outcomes: list[Outcome], index: int) -> Outcome:
    """Outcome reporting `index`, clamped to the reported range.

    Binary outcomes keep their market position, so skipped markets leave gaps;
    a request that lands in a gap gets the next outcome up.
    """
    ordered = sorted(outcomes, key=lambda o: o.index)
    target = min(max(ordered[0].index, index), ordered[-1].index)
    return next(o for o in ordered if o.index >= target)


def fallback_mid(resolution: Resolution) -> float:
    outcome = resolution.outcome
    if outcome is None:
        return DEFAULT_PRICE
    if resolution.side == "no" and outcome.no_price is not None:
        return outcome.no_price
    return outcome.price


def quote_prices(best: BestPrice | None, mid: float) -> tuple[float, float, str]:
    """(bid, ask, source). Uses the order book when usable, else mid-derived prices; bid < ask enforced."""
    if best is not None and best.usable:
        bid, ask, source = clamp01(best.best_bid), clamp01(best.best_ask), "orderbook"
    else:
        ask = clamp01(mid)
        bid = clamp01(mid * FALLBACK_BID_RATIO)
        source = "fallback"
    if bid >= ask:
        bid = clamp01(ask * FALLBACK_BID_RATIO)
    return bid, ask, source


def round_quote(bid: float, ask: float) -> tuple[float, float]:
    """Round to PRICE_DECIMALS, keeping bid one step under ask when rounding closes the gap."""
    bid, ask = round(bid, PRICE_DECIMALS), round(ask, PRICE_DECIMALS)
    if bid >= ask:
        bid = max(0.0, round(ask - PRICE_STEP, PRICE_DECIMALS))
    return bid, ask


def resolved_volume(event: Event, shape: ShapeTag, outcome: Outcome | None) -> float:
    if shape == SHAPE_MULTI_OUTCOME:
        return event.markets[0].volume
    if outcome is not None and 0 <= outcome.index < len(event.markets):
        return event.markets[outcome.index].volume
    return 0.0


def build_quote(
    event: Event,
    shape: ShapeTag,
    resolution: Resolution,
    best: BestPrice | None,
) -> PriceQuote:
    mid = fallback_mid(resolution)
    bid, ask, source = quote_prices(best, mid)
    if source == "fallback":
        log.info("fallback_pricing", slug=event.slug, token_id=resolution.token_id, mid=mid)
    bid, ask = round_quote(bid, ask)
    return PriceQuote(
        bid=bid,
        ask=ask,
        spread=round((ask - bid) * 100, 2),
        volume=resolved_volume(event, shape, resolution.outcome),
        outcome_index=resolution.outcome.index if resolution.outcome else None,
        token_id=resolution.token_id,
        side=resolution.side,
        source=source,
    )
