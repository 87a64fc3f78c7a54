# coinprice/routers/coins.py

import logging

from fastapi import APIRouter, Path, Query, Request, status
from fastapi.responses import PlainTextResponse

from coinprice.errors import http_error
from coinprice.schemas import ErrorCode, ErrorResponse
from coinprice.sources import PriceSourceError

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Coin Prices"])


@router.get(
    "/coins/{ticker}/price",
    response_class=PlainTextResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Ticker or currency not allowed"},
        502: {"model": ErrorResponse, "description": "Quote vendor failed"},
    },
)
async def get_coin_price(
    request: Request,
    ticker: str = Path(..., description="Coin ticker, e.g. BTC"),
    currency: str = Query("USD", description="Quote currency, e.g. USD or EUR"),
) -> PlainTextResponse:
    """Return the current price of `ticker` in `currency` as plain text."""
    state = request.app.state
    if ticker not in state.allowed_tickers:
        raise http_error(ErrorCode.TICKER_NOT_ALLOWED, "Ticker not allowed")
    if currency not in state.allowed_currencies:
        raise http_error(ErrorCode.CURRENCY_NOT_ALLOWED, "Currency not allowed")

    try:
        price = await state.price_source.get_price(ticker, currency)
    except PriceSourceError as e:
        log.warning("price lookup failed for %s/%s: %s", ticker, currency, e)
        raise http_error(
            ErrorCode.UPSTREAM_ERROR, str(e), http_status=status.HTTP_502_BAD_GATEWAY
        ) from e

    return PlainTextResponse(price)
