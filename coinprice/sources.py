# coinprice/sources.py
# Purpose: The one capability every price provider exposes.
# Implementations: CoinMarketCapSource (data_client), CacheLayerSource (cache), test stubs.

from __future__ import annotations

from abc import ABC, abstractmethod


class PriceSourceError(RuntimeError):
    """Upstream price lookup failed. str(exc) is the human-readable cause."""


class PriceSource(ABC):
    """Async lookup of the current price of `ticker` quoted in `currency`."""

    @abstractmethod
    async def get_price(self, ticker: str, currency: str) -> str:
        """Return the price rendered as a string, or raise on failure."""
