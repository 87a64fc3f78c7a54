# coinprice/logging_conf.py
from __future__ import annotations

import json
import logging
import os
from logging.config import dictConfig
from typing import Any


class JsonFormatter(logging.Formatter):
    """Minimal JSON formatter for structured logs to stdout."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "time": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        for extra_key in ("module", "funcName"):
            val = getattr(record, extra_key, None)
            if val:
                payload[extra_key] = val
        return json.dumps(payload, ensure_ascii=False)


def build_logging_config(log_level: str | None = None) -> dict[str, Any]:
    """dictConfig payload: JSON to stdout for the app, uvicorn and request logs."""
    level = (log_level or os.getenv("LOG_LEVEL", "INFO")).upper()

    def _routed(lvl: str = level) -> dict[str, Any]:
        return {"level": lvl, "handlers": ["console"], "propagate": False}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {"()": JsonFormatter},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json",
                "stream": "ext://sys.stdout",
            },
        },
        "root": {"level": level, "handlers": ["console"]},
        "loggers": {
            "uvicorn": _routed(),
            "uvicorn.error": _routed(),
            # the timing middleware emits one JSON line per request instead
            "uvicorn.access": _routed("WARNING"),
            "fastapi": _routed(),
            "httpx": _routed("WARNING"),
            "coinprice": _routed(),
            "request": _routed(),
        },
    }


def setup_logging(log_level: str | None = None) -> None:
    """Configure JSON logging for coinprice + uvicorn, suppress duplicate access logs."""
    dictConfig(build_logging_config(log_level))
