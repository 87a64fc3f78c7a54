"""
Shared fixtures: an in-memory price source and a controllable clock.
"""

from __future__ import annotations

import pytest

from coinprice.sources import PriceSource


class StubSource(PriceSource):
    """Returns a fixed price (or raises a fixed error) and records every call."""

    def __init__(self, value: str = "100.0", error: Exception | None = None):
        self.value = value
        self.error = error
        self.calls: list[tuple[str, str]] = []

    async def get_price(self, ticker: str, currency: str) -> str:
        self.calls.append((ticker, currency))
        if self.error is not None:
            raise self.error
        return self.value


class FakeClock:
    """Callable clock; tests move time with advance()."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def stub_source() -> StubSource:
    return StubSource()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
