"""Concurrent quote + range lookup.

Runs the quote and chart fetches side by side and merges them into one
StockSnapshot. Each fetch fails on its own: a chart outage still returns
the quote, and vice versa.
"""

from __future__ import annotations

import asyncio
import itertools
from collections.abc import Awaitable
from datetime import UTC, datetime
from enum import StrEnum
from typing import TypeVar

from pydantic import BaseModel

from stockcalc.core.exceptions import (
    InvalidInputError,
    ProviderAuthError,
    ProviderError,
    ProviderRateLimitError,
    ProviderResponseError,
)
from stockcalc.core.logging import get_logger
from stockcalc.providers.base import QuoteProvider
from stockcalc.providers.yh_finance.models import ChartRange, Quote, RangeSummary

logger = get_logger(__name__)

T = TypeVar("T")

_request_ids = itertools.count(1)


class FetchStatus(StrEnum):
    """Outcome of one provider fetch."""

    OK = "ok"
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    RATE_LIMITED = "rate_limited"
    UNAVAILABLE = "unavailable"
    INVALID_RESPONSE = "invalid_response"


class StockSnapshot(BaseModel):
    """Merged result of one quote + range lookup."""

    request_id: int
    symbol: str
    range: ChartRange
    quote: Quote | None = None
    quote_status: FetchStatus
    range_summary: RangeSummary | None = None
    range_status: FetchStatus
    fetched_at: datetime


def status_for_error(error: ProviderError) -> FetchStatus:
    """Map a provider exception to the FetchStatus callers see."""
    if isinstance(error, ProviderAuthError):
        return FetchStatus.UNAUTHORIZED
    if isinstance(error, ProviderRateLimitError):
        return FetchStatus.RATE_LIMITED
    if isinstance(error, ProviderResponseError):
        return FetchStatus.INVALID_RESPONSE
    return FetchStatus.UNAVAILABLE


def normalize_symbol(symbol: str) -> str:
    """Strip and upper-case a ticker symbol.

    Raises:
        InvalidInputError: If the symbol is blank.
    """
    cleaned = symbol.strip().upper()
    if not cleaned:
        raise InvalidInputError("Symbol cannot be empty")
    return cleaned


class StockLookupService:
    """Fetch a quote and a range summary for a symbol concurrently.

    Usage:
        service = StockLookupService(provider=client)
        snapshot = await service.lookup("NFLX", ChartRange.ONE_MONTH)
    """

    def __init__(self, provider: QuoteProvider) -> None:
        self._provider = provider

    async def _guarded(
        self, what: str, symbol: str, call: Awaitable[T | None]
    ) -> tuple[T | None, FetchStatus]:
        try:
            value = await call
        except ProviderError as e:
            status = status_for_error(e)
            logger.warning(
                "Lookup fetch failed",
                fetch=what,
                symbol=symbol,
                status=status.value,
                error=e.message,
            )
            return None, status
        return value, FetchStatus.OK if value is not None else FetchStatus.NOT_FOUND

    async def lookup(
        self,
        symbol: str,
        chart_range: ChartRange = ChartRange.ONE_MONTH,
    ) -> StockSnapshot:
        """Fetch quote and range for ``symbol`` and merge them.

        Args:
            symbol: Ticker symbol (case-insensitive, surrounding spaces ignored)
            chart_range: History window for the low/high scan

        Returns:
            StockSnapshot with a status for each fetch

        Raises:
            InvalidInputError: If the symbol is blank (no request is made)
        """
        symbol = normalize_symbol(symbol)
        chart_range = ChartRange(chart_range)
        request_id = next(_request_ids)

        (quote, quote_status), (summary, range_status) = await asyncio.gather(
            self._guarded("quote", symbol, self._provider.get_quote(symbol)),
            self._guarded(
                "range", symbol, self._provider.get_range_summary(symbol, chart_range)
            ),
        )

        logger.info(
            "Lookup complete",
            request_id=request_id,
            symbol=symbol,
            range=chart_range.value,
            quote_status=quote_status.value,
            range_status=range_status.value,
        )
        return StockSnapshot(
            request_id=request_id,
            symbol=symbol,
            range=chart_range,
            quote=quote,
            quote_status=quote_status,
            range_summary=summary,
            range_status=range_status,
            fetched_at=datetime.now(UTC),
        )
