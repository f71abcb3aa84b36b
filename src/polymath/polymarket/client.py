"""Per-request HTTP client for Gamma and CLOB with one shared deadline."""

from __future__ import annotations

import time
from typing import Any

import httpx
import structlog

from polymath.config.settings import Settings

log = structlog.get_logger(__name__)


class PolymarketClient:
    """Thin wrapper around Polymarket public endpoints.

    Every call made through one instance shares a single deadline that starts
    when the instance is created; a call issued after it has passed fails with
    httpx.TimeoutException without touching the network.
    """

    def __init__(
        self,
        *,
        gamma_api_base: str = "https://gamma-api.polymarket.com",
        clob_api_base: str = "https://clob.polymarket.com",
        timeout: float = 10.0,
        user_agent: str = "PolyMath/0.1",
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.gamma_api_base = gamma_api_base.rstrip("/")
        self.clob_api_base = clob_api_base.rstrip("/")
        self.timeout = timeout
        self._deadline = time.monotonic() + timeout
        self.client = httpx.Client(
            timeout=timeout,
            headers={"User-Agent": user_agent, "Accept": "application/json"},
            follow_redirects=True,
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: httpx.BaseTransport | None = None
    ) -> PolymarketClient:
        return cls(
            gamma_api_base=settings.gamma_api_base,
            clob_api_base=settings.clob_api_base,
            timeout=settings.timeout_sec,
            user_agent=settings.user_agent,
            transport=transport,
        )

    def remaining(self) -> float:
        return self._deadline - time.monotonic()

    def get(self, url: str, params: dict[str, Any] | None = None) -> httpx.Response:
        remaining = self.remaining()
        if remaining <= 0:
            raise httpx.TimeoutException("request deadline exceeded")
        log.debug("upstream_get", url=url, params=params, timeout=round(remaining, 3))
        return self.client.get(url, params=params, timeout=remaining)

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> PolymarketClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
