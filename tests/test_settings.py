import json
import logging

import pytest

from coinprice.logging_conf import JsonFormatter, build_logging_config
from coinprice.settings import ConfigError, Settings, parse_csv


def test_parse_csv_strips_and_drops_blanks() -> None:
    assert parse_csv(" BTC, ETH,,SOL ") == ["BTC", "ETH", "SOL"]
    assert parse_csv("") == []
    assert parse_csv(None) == []


def test_from_env_defaults(monkeypatch) -> None:
    for name in (
        "CMC_API_KEY",
        "CMC_BASE_URL",
        "CMC_TIMEOUT_SEC",
        "ALLOWED_TICKERS",
        "ALLOWED_CURRENCIES",
        "CP_CACHE_TTL_SEC",
        "CORS_ORIGINS",
        "HOST",
        "PORT",
    ):
        monkeypatch.delenv(name, raising=False)

    s = Settings.from_env()

    assert s.cmc_api_key is None
    assert s.allowed_tickers == []
    assert s.allowed_currencies == []
    assert s.cache_ttl_sec == 600.0
    assert s.cors_origins == ["*"]
    assert s.port == 3000


def test_from_env_reads_values(monkeypatch) -> None:
    monkeypatch.setenv("CMC_API_KEY", "secret")
    monkeypatch.setenv("ALLOWED_TICKERS", "BTC,ETH")
    monkeypatch.setenv("ALLOWED_CURRENCIES", "USD")
    monkeypatch.setenv("CP_CACHE_TTL_SEC", "30")
    monkeypatch.setenv("PORT", "8080")

    s = Settings.from_env()

    assert s.require_api_key() == "secret"
    assert s.allowed_tickers == ["BTC", "ETH"]
    assert s.allowed_currencies == ["USD"]
    assert s.cache_ttl_sec == 30.0
    assert s.port == 8080


@pytest.mark.parametrize("name,value", [("CP_CACHE_TTL_SEC", "ten"), ("PORT", "http")])
def test_from_env_rejects_bad_numbers(monkeypatch, name, value) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(ConfigError, match=name):
        Settings.from_env()


def test_require_api_key_missing() -> None:
    with pytest.raises(ConfigError):
        Settings().require_api_key()


def test_logging_config_routes_app_loggers(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "debug")
    cfg = build_logging_config()

    assert cfg["root"]["level"] == "DEBUG"
    assert cfg["loggers"]["coinprice"]["handlers"] == ["console"]
    assert cfg["loggers"]["uvicorn.access"]["level"] == "WARNING"


def test_json_formatter_emits_one_object() -> None:
    record = logging.LogRecord(
        "coinprice.cache", logging.INFO, __file__, 1, "miss %s", ("BTC",), None
    )
    out = json.loads(JsonFormatter().format(record))

    assert out["level"] == "INFO"
    assert out["logger"] == "coinprice.cache"
    assert out["message"] == "miss BTC"
