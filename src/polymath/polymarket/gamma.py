"""Polymarket Gamma API - event lookup by slug."""

from __future__ import annotations

import json
from typing import Any

import httpx
import structlog

from polymath.errors import not_found, upstream_error
from polymath.models import Event, Market
from polymath.polymarket.client import PolymarketClient
from polymath.polymarket.decode import decode_list, volume_of

log = structlog.get_logger(__name__)

DEFAULT_EVENT_TITLE = "Polymarket Event"


def parse_market(raw: Any, position: int) -> Market:
    """Convert a Gamma market object to Market. Non-objects become an empty Market."""
    if not isinstance(raw, dict):
        return Market(position=position)
    question = raw.get("question")
    return Market(
        position=position,
        question=str(question) if question else None,
        volume=volume_of(raw.get("volume")),
        outcomes=decode_list(raw.get("outcomes")),
        outcome_prices=decode_list(raw.get("outcomePrices")),
        clob_token_ids=decode_list(raw.get("clobTokenIds")),
        extra={"gamma_id": raw.get("id"), "slug": raw.get("slug")},
    )


def parse_event(raw: dict[str, Any], slug: str) -> Event:
    """Convert a Gamma event object to Event. A non-list markets field reads as no markets."""
    raw_markets = raw.get("markets")
    if not isinstance(raw_markets, list):
        raw_markets = []
    return Event(
        slug=slug,
        title=str(raw.get("title") or DEFAULT_EVENT_TITLE),
        markets=[parse_market(m, i) for i, m in enumerate(raw_markets)],
    )


def fetch_event(client: PolymarketClient, slug: str) -> Event:
    """Fetch the event for slug. Raises ResolverError (not found / upstream)."""
    url = f"{client.gamma_api_base}/events"
    try:
        resp = client.get(url, params={"slug": slug})
    except httpx.TimeoutException as e:
        log.warning("gamma_timeout", slug=slug, error=str(e))
        raise upstream_error("Gamma API timeout", 504, slug=slug) from e
    except httpx.HTTPError as e:
        log.warning("gamma_unreachable", slug=slug, error=str(e))
        raise upstream_error(f"Gamma API unreachable: {e}", 502, slug=slug) from e

    if not resp.is_success:
        log.warning("gamma_error_status", slug=slug, status=resp.status_code)
        raise upstream_error(f"Gamma API error: {resp.status_code}", resp.status_code, slug=slug)

    try:
        events = resp.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise upstream_error("Gamma API returned invalid JSON", 502, slug=slug) from e

    if not isinstance(events, list) or not events or not isinstance(events[0], dict):
        raise not_found(f'Market "{slug}" not found', slug=slug)

    event = parse_event(events[0], slug)
    if not event.markets:
        raise not_found("No active markets for this event", slug=slug)
    log.info("event_fetched", slug=slug, markets=len(event.markets))
    return event
