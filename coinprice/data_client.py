"""
CoinMarketCap price client.

Returns the latest quote of one ticker in one currency as a string, e.g. "64123.51".

Upstream call:
  GET {base_url}/v2/cryptocurrency/quotes/latest?symbol=BTC&convert=USD
  header X-CMC_PRO_API_KEY: <key>

Response shape we read:
  {"data": {"BTC": [ {"quote": {"USD": {"price": 64123.51, ...}}, ...} ]}}

Notes / Pitfalls:
- CMC returns a list per symbol; several coins can share a ticker. We refuse to guess.
- Non-2xx answers carry no "data", so they surface as "Price not found".
- No caching here; wrap in coinprice.cache.CacheLayerSource.
"""

from __future__ import annotations

import json
import logging
import math
from typing import Any

import httpx

from coinprice.observability import UPSTREAM_LATENCY
from coinprice.sources import PriceSource, PriceSourceError

log = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://pro-api.coinmarketcap.com"
QUOTES_PATH = "/v2/cryptocurrency/quotes/latest"


def _reject_constant(token: str) -> Any:
    raise ValueError(f"invalid JSON token {token!r}")


def extract_price(payload: Any, ticker: str, currency: str) -> float:
    """Pull data[ticker][0].quote[currency].price out of a quotes response."""
    data = payload.get("data") if isinstance(payload, dict) else None
    listings = data.get(ticker) if isinstance(data, dict) else None
    if isinstance(listings, list) and len(listings) > 1:
        raise PriceSourceError("Maybe duplicated ticker.")

    try:
        price = listings[0]["quote"][currency]["price"]
    except (TypeError, KeyError, IndexError):
        raise PriceSourceError("Price not found") from None

    # bool is an int subclass; a JSON true is not a price
    if isinstance(price, bool) or not isinstance(price, int | float):
        raise PriceSourceError("Price not found")
    try:
        value = float(price)
    except OverflowError:
        raise PriceSourceError("Price not found") from None
    # 1e400 decodes to inf
    if not math.isfinite(value):
        raise PriceSourceError("Price not found")
    return value


class CoinMarketCapSource(PriceSource):
    """PriceSource backed by the CoinMarketCap Pro API."""

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout_sec: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout_sec = timeout_sec
        self._transport = transport

    async def get_price(self, ticker: str, currency: str) -> str:
        url = f"{self.base_url}{QUOTES_PATH}"
        params = {"symbol": ticker, "convert": currency}
        headers = {"X-CMC_PRO_API_KEY": self.api_key}

        with UPSTREAM_LATENCY.labels(vendor="coinmarketcap").time():
            async with httpx.AsyncClient(
                timeout=self.timeout_sec, transport=self._transport
            ) as client:
                try:
                    async with client.stream(
                        "GET", url, params=params, headers=headers
                    ) as response:
                        try:
                            body = await response.aread()
                        except httpx.HTTPError as e:
                            raise PriceSourceError(f"Response error: {e}") from e
                except httpx.HTTPError as e:
                    raise PriceSourceError(f"Request error: {e}") from e

        if response.status_code >= 400:
            log.warning("coinmarketcap http %s for %s/%s", response.status_code, ticker, currency)

        try:
            payload = json.loads(body, parse_constant=_reject_constant)
        except ValueError as e:
            raise PriceSourceError(f"JSON parse error: {e}") from e

        return str(extract_price(payload, ticker, currency))
