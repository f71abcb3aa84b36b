"""Shared fixtures."""

from __future__ import annotations

from typing import Any

import httpx
import pytest

from fakes import CLOB, GAMMA, FakeUpstream, event, market
from polymath.polymarket.client import PolymarketClient


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def client(upstream: FakeUpstream):
    c = PolymarketClient(
        gamma_api_base=GAMMA,
        clob_api_base=CLOB,
        timeout=10.0,
        transport=httpx.MockTransport(upstream.handler),
    )
    yield c
    c.close()


@pytest.fixture
def yes_no_event() -> list[dict[str, Any]]:
    return event(
        market("Will it rain?", ["Yes", "No"], ["0.4", "0.6"], ["tok-yes", "tok-no"], volume="1500.5")
    )


@pytest.fixture
def five_way_event() -> list[dict[str, Any]]:
    return event(
        market(
            "Who wins?",
            ["Alice", "Bob", "Carol", "Dan", "Eve"],
            ["0.1", "0.2", "0.3", "0.25", "0.15"],
            ["t0", "t1", "t2", "t3", "t4"],
            volume=9000,
        )
    )


@pytest.fixture
def three_candidate_event() -> list[dict[str, Any]]:
    return event(
        market("Candidate A?", ["Yes", "No"], ["0.55", "0.45"], ["a-yes", "a-no"], volume="100"),
        market("Candidate B?", ["Yes", "No"], ["0.30", "0.70"], ["b-yes", "b-no"], volume="200"),
        market("Candidate C?", ["Yes", "No"], ["0.15", "0.85"], ["c-yes", "c-no"], volume="300"),
    )
