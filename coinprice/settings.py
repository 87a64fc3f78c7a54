# coinprice/settings.py
# Purpose: One place that reads the process environment.
# Pitfalls: Allow-lists are case-sensitive; "btc" and "BTC" are different tickers.

from __future__ import annotations

import os
from dataclasses import dataclass, field

from coinprice.cache import DEFAULT_TTL_SEC
from coinprice.data_client import DEFAULT_BASE_URL


class ConfigError(RuntimeError):
    """Required configuration is missing or malformed."""


def parse_csv(raw: str | None) -> list[str]:
    """Split a comma-separated env value, dropping blanks."""
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from e


@dataclass(frozen=True)
class Settings:
    cmc_api_key: str | None = None
    cmc_base_url: str = DEFAULT_BASE_URL
    cmc_timeout_sec: float = 10.0
    allowed_tickers: list[str] = field(default_factory=list)
    allowed_currencies: list[str] = field(default_factory=list)
    cache_ttl_sec: float = DEFAULT_TTL_SEC
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    host: str = "0.0.0.0"
    port: int = 3000

    @classmethod
    def from_env(cls) -> Settings:
        port_raw = os.getenv("PORT", "3000")
        try:
            port = int(port_raw)
        except ValueError as e:
            raise ConfigError(f"PORT must be an integer, got {port_raw!r}") from e

        return cls(
            cmc_api_key=os.getenv("CMC_API_KEY") or None,
            cmc_base_url=os.getenv("CMC_BASE_URL", DEFAULT_BASE_URL),
            cmc_timeout_sec=_float_env("CMC_TIMEOUT_SEC", 10.0),
            allowed_tickers=parse_csv(os.getenv("ALLOWED_TICKERS")),
            allowed_currencies=parse_csv(os.getenv("ALLOWED_CURRENCIES")),
            cache_ttl_sec=_float_env("CP_CACHE_TTL_SEC", DEFAULT_TTL_SEC),
            cors_origins=parse_csv(os.getenv("CORS_ORIGINS", "*")) or ["*"],
            host=os.getenv("HOST", "0.0.0.0"),
            port=port,
        )

    def require_api_key(self) -> str:
        if not self.cmc_api_key:
            raise ConfigError("CMC_API_KEY is not set")
        return self.cmc_api_key
