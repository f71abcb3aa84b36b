"""Polymarket CLOB - best bid/ask for one token."""

from __future__ import annotations

import json
from typing import Any

import httpx
import structlog

from polymath.models import BestPrice
from polymath.polymarket.client import PolymarketClient
from polymath.polymarket.decode import to_float

log = structlog.get_logger(__name__)


def parse_best_price(payload: Any, token_id: str) -> BestPrice:
    if not isinstance(payload, dict):
        return BestPrice(token_id=token_id)
    return BestPrice(
        token_id=token_id,
        best_bid=to_float(payload.get("best_bid")),
        best_ask=to_float(payload.get("best_ask")),
    )


def fetch_best_price(client: PolymarketClient, token_id: str) -> BestPrice | None:
    """Query /best for token_id. Any failure is logged and returns None."""
    url = f"{client.clob_api_base}/best"
    try:
        resp = client.get(url, params={"token_id": token_id})
        if not resp.is_success:
            log.warning("orderbook_unavailable", token_id=token_id, status=resp.status_code)
            return None
        return parse_best_price(resp.json(), token_id)
    except (httpx.HTTPError, json.JSONDecodeError, UnicodeDecodeError) as e:
        log.warning("orderbook_unavailable", token_id=token_id, error=str(e))
        return None
