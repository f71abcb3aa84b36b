"""Fake Gamma/CLOB upstream behind httpx.MockTransport, and payload builders."""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx

GAMMA = "https://gamma.test"
CLOB = "https://clob.test"


class FakeUpstream:
    """Serves /events and /best. Set events/best to a payload, a status int, or an exception."""

    def __init__(self, events: Any = None, best: Any = None) -> None:
        self.events = [] if events is None else events
        self.best = {"best_bid": "0", "best_ask": "0"} if best is None else best
        self.requests: list[httpx.Request] = []
        self.on_events: Callable[[], None] | None = None

    @property
    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]

    def _respond(self, request: httpx.Request, reply: Any) -> httpx.Response:
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, int):
            return httpx.Response(reply, json={"error": "upstream"})
        if isinstance(reply, str):
            return httpx.Response(200, content=reply.encode())
        return httpx.Response(200, content=json.dumps(reply).encode(), headers={"Content-Type": "application/json"})

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/events":
            if self.on_events is not None:
                self.on_events()
            return self._respond(request, self.events)
        if request.url.path == "/best":
            return self._respond(request, self.best)
        return httpx.Response(404)


def market(
    question: str | None = None,
    outcomes: Any = None,
    prices: Any = None,
    tokens: Any = None,
    volume: Any = 0,
    encode: bool = True,
) -> dict[str, Any]:
    """Gamma market object. List fields are JSON-encoded strings like the live API when encode=True."""
    raw: dict[str, Any] = {"volume": volume}
    if question is not None:
        raw["question"] = question
    for key, value in (("outcomes", outcomes), ("outcomePrices", prices), ("clobTokenIds", tokens)):
        if value is not None:
            raw[key] = json.dumps(value) if encode else value
    return raw


def event(*markets: dict[str, Any], title: str = "Test Event") -> list[dict[str, Any]]:
    return [{"title": title, "slug": "test-event", "markets": list(markets)}]
