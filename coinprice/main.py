# coinprice/main.py
from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from coinprice.cache import CacheLayerSource
from coinprice.data_client import CoinMarketCapSource
from coinprice.errors import http_exception_handler
from coinprice.logging_conf import build_logging_config, setup_logging

# --- Observability ---
from coinprice.observability import metrics_endpoint, timing_middleware

# --- Routers ---
from coinprice.routers import coins
from coinprice.schemas import HealthResponse, VersionResponse
from coinprice.settings import Settings
from coinprice.sources import PriceSource
from coinprice.utils import utc_now_iso
from coinprice.version import API_TITLE, SERVICE_NAME, SERVICE_VERSION, version_payload

log = logging.getLogger(__name__)


def build_price_source(settings: Settings) -> PriceSource:
    """CoinMarketCap behind the TTL cache."""
    vendor = CoinMarketCapSource(
        settings.require_api_key(),
        base_url=settings.cmc_base_url,
        timeout_sec=settings.cmc_timeout_sec,
    )
    return CacheLayerSource(vendor, ttl_sec=settings.cache_ttl_sec)


def create_app(settings: Settings | None = None, source: PriceSource | None = None) -> FastAPI:
    """
    Build the API. `source` overrides the default CoinMarketCap+cache stack,
    which lets tests plug in a stub without touching the network.
    """
    settings = settings or Settings.from_env()
    if source is None:
        source = build_price_source(settings)

    app = FastAPI(title=API_TITLE, version=SERVICE_VERSION)
    app.state.settings = settings
    app.state.price_source = source
    app.state.allowed_tickers = frozenset(settings.allowed_tickers)
    app.state.allowed_currencies = frozenset(settings.allowed_currencies)

    # --- Include routers ---
    app.include_router(coins.router)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    # --- Middleware ---
    app.middleware("http")(timing_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- Utility endpoints ---
    @app.get("/health", response_model=HealthResponse)
    def health():
        src = app.state.price_source
        return HealthResponse(
            as_of=utc_now_iso(),
            service=SERVICE_NAME,
            cached_keys=len(src) if isinstance(src, CacheLayerSource) else None,
        )

    @app.get("/version", response_model=VersionResponse)
    def version():
        return VersionResponse(**version_payload())

    @app.get("/metrics")
    def metrics():
        return metrics_endpoint()

    return app


def main() -> None:
    """Console entry point: load env, configure logging, serve."""
    setup_logging()
    settings = Settings.from_env()
    app = create_app(settings)
    log.info(
        "serving on http://%s:%s (docs at /docs, cache ttl %ss)",
        settings.host,
        settings.port,
        settings.cache_ttl_sec,
    )
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=build_logging_config())


if __name__ == "__main__":
    main()
