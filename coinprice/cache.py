# coinprice/cache.py
# Purpose: In-memory TTL cache layered over any PriceSource.
# Why: Reduce calls to the quote vendor, which bills per request.
# Pitfalls: Not persistent; resets if the process restarts.
#           Concurrent misses on one key all go upstream; the last write wins.

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from coinprice.observability import CACHE_LOOKUPS
from coinprice.sources import PriceSource

log = logging.getLogger(__name__)

DEFAULT_TTL_SEC = 600.0


@dataclass(slots=True)
class CacheEntry:
    value: str
    expires_at: float


class CacheLayerSource(PriceSource):
    """
    Wrap a PriceSource and replay its answers until they expire.

    - Keys are (ticker, currency), compared as-is (no case folding).
    - A hit requires expires_at > now; an entry expiring exactly now is refetched.
    - Failures from the wrapped source propagate unchanged and are never stored.
    - The lock guards the table only; it is released before the upstream await.
    """

    def __init__(
        self,
        source: PriceSource,
        ttl_sec: float = DEFAULT_TTL_SEC,
        *,
        clock: Callable[[], float] = time.time,
    ):
        self._source = source
        self._ttl_sec = float(ttl_sec)
        self._clock = clock
        # store: (ticker, currency) -> CacheEntry
        self._entries: dict[tuple[str, str], CacheEntry] = {}
        self._lock = asyncio.Lock()

    @property
    def ttl_sec(self) -> float:
        return self._ttl_sec

    def __len__(self) -> int:
        return len(self._entries)

    async def get_price(self, ticker: str, currency: str) -> str:
        key = (ticker, currency)

        async with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry.expires_at > self._clock():
                CACHE_LOOKUPS.labels(result="hit").inc()
                return entry.value

        CACHE_LOOKUPS.labels(result="miss").inc()
        log.debug("cache miss for %s/%s", ticker, currency)

        price = await self._source.get_price(ticker, currency)

        expires_at = self._clock() + self._ttl_sec
        async with self._lock:
            self._entries[key] = CacheEntry(value=price, expires_at=expires_at)
        return price
