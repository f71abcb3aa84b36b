"""FastAPI backend: CORS-enabled proxy in front of Polymarket for the web front end."""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Iterator

import structlog
from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from polymath import __version__
from polymath.api.schemas import (
    ErrorResponse,
    MarketDataResponse,
    PricesResponse,
    StatusResponse,
)
from polymath.config import Settings, configure_logging, get_settings
from polymath.errors import ErrorKind, ResolverError
from polymath.models import PriceSelector
from polymath.polymarket.client import PolymarketClient
from polymath.service import get_market_data, get_prices

log = structlog.get_logger(__name__)

# Set by run_api() so the app and request handlers read the same config as the CLI.
_config_profile: str | None = None
_config_dir: Path | None = None

ALLOWED_METHODS = ["GET", "OPTIONS", "PATCH", "DELETE", "POST", "PUT"]

router = APIRouter()


def current_settings() -> Settings:
    return get_settings(_config_profile, _config_dir)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(current_settings())
    yield


def get_client() -> Iterator[PolymarketClient]:
    """One upstream client (and one deadline) per request."""
    with PolymarketClient.from_settings(current_settings()) as client:
        yield client


def _error_json(err: ResolverError) -> JSONResponse:
    """Return consistent error JSON: { success, error, code, slug }."""
    body = ErrorResponse(error=err.message, code=err.code, slug=err.slug)
    return JSONResponse(status_code=err.status_code, content=body.to_json())


async def _method_not_allowed(request: Request, exc: Exception) -> JSONResponse:
    """Methods the route does not list at all (TRACE, ...) get the same envelope."""
    slug = request.query_params.get("slug") or None
    return _error_json(ResolverError(ErrorKind.METHOD_NOT_ALLOWED, f"Method {request.method} not allowed", slug=slug))


@router.api_route(
    "/api/polymarket",
    methods=ALLOWED_METHODS + ["HEAD"],
    responses={
        200: {"description": "Market data, prices or API status"},
        404: {"description": "Event not found or without markets", "model": ErrorResponse},
        405: {"description": "Method other than GET/OPTIONS", "model": ErrorResponse},
        422: {"description": "Event shape not understood", "model": ErrorResponse},
    },
)
def polymarket(
    request: Request,
    request_type: str | None = Query(None, alias="type", description="market-data | prices"),
    slug: str | None = Query(None, description="Event slug"),
    token_id: str | None = Query(None, alias="tokenId"),
    outcome_index: str | None = Query(None, alias="outcomeIndex"),
    side: str | None = Query(None, description="yes | no"),
    client: PolymarketClient = Depends(get_client),
) -> Response:
    """Route by ?type=: market-data, prices, or a status payload when neither applies."""
    if request.method == "OPTIONS":
        return Response(status_code=200)
    try:
        if request.method != "GET":
            raise ResolverError(ErrorKind.METHOD_NOT_ALLOWED, f"Method {request.method} not allowed")
        slug = (slug or "").strip() or None
        if request_type == "market-data" and slug:
            summary = get_market_data(client, slug)
            return JSONResponse(content=MarketDataResponse.from_summary(summary).to_json())
        if request_type == "prices" and slug:
            selector = PriceSelector.from_query(token_id=token_id, outcome_index=outcome_index, side=side)
            quote = get_prices(client, slug, selector)
            return JSONResponse(content=PricesResponse.from_quote(slug, quote).to_json())
        return JSONResponse(content=StatusResponse().to_json())
    except ResolverError as e:
        log.warning("request_failed", kind=e.kind.name, status=e.status_code, slug=e.slug, error=e.message)
        return _error_json(e)
    except Exception as e:
        log.exception("request_failed", kind=ErrorKind.INTERNAL.name, slug=slug)
        return _error_json(ResolverError(ErrorKind.INTERNAL, str(e) or "Internal Server Error", slug=slug))


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the app; CORS comes from the given settings (default: current profile and config dir)."""
    settings = settings or current_settings()
    app = FastAPI(title="PolyMath Backend", version=__version__, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_credentials=True,
        allow_origins=settings.cors_allow_origins,
        allow_methods=ALLOWED_METHODS,
        allow_headers=settings.cors_allow_headers,
    )
    app.add_exception_handler(405, _method_not_allowed)
    app.include_router(router)
    return app


app = create_app()


def run_api(
    host: str = "127.0.0.1",
    port: int = 8000,
    profile: str | None = None,
    config_dir: Path | None = None,
) -> None:
    global _config_profile, _config_dir
    _config_profile = profile
    _config_dir = config_dir
    import uvicorn

    uvicorn.run(create_app(), host=host, port=port, reload=False)
