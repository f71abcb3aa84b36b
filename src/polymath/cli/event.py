"""Event subcommand: data, prices. Prints the same JSON the API returns."""

from __future__ import annotations

import json
from typing import NoReturn

import typer

from polymath.api.schemas import ErrorResponse, MarketDataResponse, PricesResponse
from polymath.errors import ResolverError
from polymath.models import PriceSelector
from polymath.polymarket.client import PolymarketClient
from polymath.service import get_market_data, get_prices

app = typer.Typer(help="Look up an event by slug")


def _echo_json(payload: dict) -> None:
    typer.echo(json.dumps(payload, indent=2))


def _fail(err: ResolverError) -> NoReturn:
    body = ErrorResponse(error=err.message, code=err.code, slug=err.slug)
    typer.echo(json.dumps(body.to_json(), indent=2), err=True)
    raise typer.Exit(1)


@app.command("data")
def data(
    ctx: typer.Context,
    slug: str = typer.Argument(..., help="Event slug"),
) -> None:
    """Event title, total volume, mid price, shape and outcomes."""
    settings = ctx.obj["settings"]
    with PolymarketClient.from_settings(settings) as client:
        try:
            summary = get_market_data(client, slug)
        except ResolverError as e:
            _fail(e)
    _echo_json(MarketDataResponse.from_summary(summary).to_json())


@app.command("prices")
def prices(
    ctx: typer.Context,
    slug: str = typer.Argument(..., help="Event slug"),
    token_id: str | None = typer.Option(None, "--token-id", "-t", help="Quote this token directly"),
    outcome_index: str | None = typer.Option(None, "--outcome-index", "-i", help="Outcome index (clamped)"),
    side: str | None = typer.Option(None, "--side", "-s", help="yes | no"),
) -> None:
    """Bid, ask, spread and volume for one outcome."""
    settings = ctx.obj["settings"]
    selector = PriceSelector.from_query(token_id=token_id, outcome_index=outcome_index, side=side)
    with PolymarketClient.from_settings(settings) as client:
        try:
            quote = get_prices(client, slug, selector)
        except ResolverError as e:
            _fail(e)
    _echo_json(PricesResponse.from_quote(slug, quote).to_json())
