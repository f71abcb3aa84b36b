"""The two request-level operations: event summary and outcome prices."""

from __future__ import annotations

import structlog

from polymath.models import MarketSummary, PriceQuote, PriceSelector
from polymath.normalize import build_outcomes, summarize
from polymath.polymarket.client import PolymarketClient
from polymath.polymarket.clob import fetch_best_price
from polymath.polymarket.gamma import fetch_event
from polymath.pricing.resolver import build_quote, resolve_selection

log = structlog.get_logger(__name__)


def get_market_data(client: PolymarketClient, slug: str) -> MarketSummary:
    """Fetch the event and return its shape, outcomes, total volume and mid price."""
    event = fetch_event(client, slug)
    return summarize(event)


def get_prices(client: PolymarketClient, slug: str, selector: PriceSelector) -> PriceQuote:
    """Resolve selector against the event's outcomes and quote the chosen token."""
    event = fetch_event(client, slug)
    shape, outcomes = build_outcomes(event)
    resolution = resolve_selection(outcomes, selector)
    log.debug("selection_resolved", slug=slug, shape=shape, resolution=repr(resolution))
    best = fetch_best_price(client, resolution.token_id) if resolution.token_id else None
    return build_quote(event, shape, resolution, best)
