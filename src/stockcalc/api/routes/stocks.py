"""Stock quote and range endpoints (YH Finance data)."""

from __future__ import annotations

from typing import Any, NoReturn

from fastapi import APIRouter, HTTPException, Query

from stockcalc.core.dependencies import LookupServiceDep, QuoteClientDep, SettingsDep
from stockcalc.core.exceptions import (
    InvalidInputError,
    MalformedRequestError,
    ProviderAuthError,
    ProviderError,
    ProviderRateLimitError,
    ProviderResponseError,
    ProviderTransportError,
)
from stockcalc.core.logging import get_logger
from stockcalc.pricing.calculator import percent_for_target, project
from stockcalc.providers.yh_finance.models import ChartRange
from stockcalc.services.lookup import normalize_symbol
from stockcalc.services.session import alerts_for

logger = get_logger(__name__)

router = APIRouter()


def _raise_for_provider_error(error: ProviderError) -> NoReturn:
    """Translate a provider failure into an HTTP error."""
    if isinstance(error, ProviderAuthError):
        raise HTTPException(status_code=502, detail="Quote provider rejected the API key")
    if isinstance(error, ProviderRateLimitError):
        raise HTTPException(status_code=429, detail="Quote provider rate limit exceeded")
    if isinstance(error, ProviderTransportError):
        raise HTTPException(status_code=503, detail="Quote provider unreachable")
    if isinstance(error, MalformedRequestError):
        raise HTTPException(status_code=500, detail="Quote provider URL misconfigured")
    if isinstance(error, ProviderResponseError):
        raise HTTPException(status_code=502, detail="Quote provider returned invalid JSON")
    raise HTTPException(status_code=502, detail=error.message)


def _symbol_or_400(symbol: str) -> str:
    try:
        return normalize_symbol(symbol)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.get("/{symbol}/quote")
async def get_quote(symbol: str, client: QuoteClientDep) -> dict[str, Any]:
    """Get the current quote for a single symbol."""
    symbol = _symbol_or_400(symbol)
    try:
        quote = await client.get_quote(symbol)
    except ProviderError as e:
        _raise_for_provider_error(e)
    if quote is None:
        raise HTTPException(status_code=404, detail=f"No quote available for {symbol}")
    return quote.model_dump(mode="json")


@router.get("/{symbol}/range")
async def get_range(
    symbol: str,
    client: QuoteClientDep,
    settings: SettingsDep,
    chart_range: ChartRange | None = Query(
        default=None, alias="range", description="History window (defaults to config)"
    ),
) -> dict[str, Any]:
    """Get the lowest and highest daily close over a range."""
    symbol = _symbol_or_400(symbol)
    chart_range = chart_range or settings.default_range
    try:
        summary = await client.get_range_summary(symbol, chart_range)
    except ProviderError as e:
        _raise_for_provider_error(e)
    if summary is None:
        raise HTTPException(
            status_code=404,
            detail=f"No price history for {symbol} over {chart_range.value}",
        )
    return {
        "symbol": symbol,
        "range": chart_range.value,
        **summary.model_dump(mode="json"),
    }


@router.get("/{symbol}")
async def get_stock(
    symbol: str,
    service: LookupServiceDep,
    settings: SettingsDep,
    chart_range: ChartRange | None = Query(
        default=None, alias="range", description="History window (defaults to config)"
    ),
    percent: float = Query(0.0, description="Hypothetical percent move"),
    target: float | None = Query(
        default=None, ge=0, description="Target price; overrides percent when set"
    ),
) -> dict[str, Any]:
    """Quote, range and projected price in one call.

    Each part carries its own status, so a failed range fetch still returns
    the quote (and the other way round).
    """
    symbol = _symbol_or_400(symbol)
    if abs(percent) > settings.percent_change_limit:
        raise HTTPException(
            status_code=400,
            detail=f"percent must be within +/-{settings.percent_change_limit:g}",
        )

    snapshot = await service.lookup(symbol, chart_range or settings.default_range)

    projection = None
    if snapshot.quote is not None:
        try:
            if target is not None:
                percent = percent_for_target(snapshot.quote.price, target)
            projection = project(snapshot.quote.price, percent, snapshot.range_summary)
        except InvalidInputError as e:
            # Zero price: the snapshot is still worth returning
            logger.info("No projection for snapshot", symbol=symbol, reason=e.message)

    return {
        **snapshot.model_dump(mode="json"),
        "projection": projection.model_dump(mode="json") if projection else None,
        "alerts": alerts_for(snapshot),
    }
