from enum import Enum
from typing import Literal

from pydantic import BaseModel


# --- Health payload ---
class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"
    as_of: str
    service: str = "coinprice"
    cached_keys: int | None = None


# --- Version payload ---
class VersionResponse(BaseModel):
    service: str  # "coinprice:1.0.0"
    service_version: str


# --- Error taxonomy ---
class ErrorCode(str, Enum):
    TICKER_NOT_ALLOWED = "TICKER_NOT_ALLOWED"
    CURRENCY_NOT_ALLOWED = "CURRENCY_NOT_ALLOWED"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorDetail(BaseModel):
    code: ErrorCode
    message: str
    hint: str | None = None


class ErrorResponse(BaseModel):
    error: ErrorDetail
