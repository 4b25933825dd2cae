"""YH Finance (RapidAPI) client for quotes and daily chart history.

Requires a RapidAPI key.
- Quotes: https://yh-finance.p.rapidapi.com/market/v2/get-quotes?region=US&symbols=NFLX
- Chart:  https://yh-finance.p.rapidapi.com/stock/v3/get-chart?interval=1d&range=1mo&region=US&symbol=NFLX
"""

from __future__ import annotations

from typing import Any

import httpx
import orjson

from stockcalc.core.constants import (
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    RAPIDAPI_HOST_HEADER,
    RAPIDAPI_KEY_HEADER,
    YH_FINANCE_BASE_URL,
    YH_FINANCE_CHART_INTERVAL,
    YH_FINANCE_CHART_PATH,
    YH_FINANCE_HOST,
    YH_FINANCE_QUOTES_PATH,
    YH_FINANCE_REGION,
)
from stockcalc.core.exceptions import (
    MalformedRequestError,
    ProviderAuthError,
    ProviderHTTPError,
    ProviderRateLimitError,
    ProviderResponseError,
    ProviderTransportError,
)
from stockcalc.core.logging import get_logger
from stockcalc.pricing.range import epoch_or_none, summarize_closes
from stockcalc.providers.yh_finance.models import ChartRange, Quote, RangeSummary

logger = get_logger(__name__)

# Longest response body excerpt kept in warning logs
_BODY_EXCERPT = 500


class YHFinanceClient:
    """Client for the YH Finance quote and chart endpoints.

    Every method issues exactly one request and never retries. Transport and
    HTTP failures raise a ProviderError subclass; a well-formed response that
    lacks the expected fields returns None.

    Usage:
        client = YHFinanceClient(api_key="...")
        quote = await client.get_quote("NFLX")
        summary = await client.get_range_summary("NFLX", ChartRange.ONE_MONTH)
        await client.close()
    """

    def __init__(
        self,
        api_key: str,
        host: str = YH_FINANCE_HOST,
        base_url: str = YH_FINANCE_BASE_URL,
        region: str = YH_FINANCE_REGION,
        timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
    ) -> None:
        self._api_key = api_key
        self._host = host
        self._base_url = base_url.rstrip("/")
        self._region = region
        self._timeout = timeout
        self._http_client: httpx.AsyncClient | None = None

    def _get_http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=self._timeout,
                headers={
                    RAPIDAPI_HOST_HEADER: self._host,
                    RAPIDAPI_KEY_HEADER: self._api_key,
                    "Accept": "application/json",
                },
            )
        return self._http_client

    async def _fetch(self, path: str, params: dict[str, str]) -> Any:
        """GET ``path`` and decode the JSON body.

        Raises:
            MalformedRequestError: URL could not be built
            ProviderTransportError: network failure or timeout
            ProviderAuthError: HTTP 401
            ProviderRateLimitError: HTTP 429
            ProviderHTTPError: any other non-2xx status
            ProviderResponseError: body is not JSON
        """
        url = f"{self._base_url}{path}"
        client = self._get_http_client()
        logger.debug("YH Finance request", url=url, params=params)

        try:
            response = await client.get(url, params=params)
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
            logger.error("Invalid YH Finance URL", url=url, error=str(e))
            raise MalformedRequestError(f"Cannot build request URL {url!r}: {e}") from e
        except httpx.HTTPError as e:
            logger.warning("YH Finance request failed", path=path, error=str(e))
            raise ProviderTransportError(f"Request to {path} failed: {e}") from e

        status = response.status_code
        if not 200 <= status < 300:
            logger.warning(
                "YH Finance API error",
                path=path,
                status=status,
                body=response.text[:_BODY_EXCERPT],
            )
            if status == 401:
                raise ProviderAuthError("YH Finance rejected the API key", status)
            if status == 429:
                raise ProviderRateLimitError("YH Finance rate limit exceeded", status)
            raise ProviderHTTPError(f"YH Finance returned HTTP {status}", status)

        try:
            return orjson.loads(response.content)
        except orjson.JSONDecodeError as e:
            logger.warning("YH Finance returned invalid JSON", path=path, error=str(e))
            raise ProviderResponseError(f"Invalid JSON from {path}: {e}") from e

    async def get_quote(self, symbol: str) -> Quote | None:
        """Get the current quote for a symbol.

        Args:
            symbol: Ticker symbol (e.g., "NFLX"). Not validated; an unknown
                symbol comes back as an empty result.

        Returns:
            Quote, or None when the response carries no usable quote
        """
        data = await self._fetch(
            YH_FINANCE_QUOTES_PATH,
            {"region": self._region, "symbols": symbol},
        )
        quote = _parse_quote(data, symbol)
        if quote is None:
            logger.info("No quote in response, likely invalid symbol", symbol=symbol)
        else:
            logger.debug("Fetched quote", symbol=quote.symbol, price=quote.price)
        return quote

    async def get_range_summary(
        self,
        symbol: str,
        chart_range: ChartRange = ChartRange.ONE_MONTH,
    ) -> RangeSummary | None:
        """Get the lowest and highest daily close over a range.

        Args:
            symbol: Ticker symbol
            chart_range: History window to scan

        Returns:
            RangeSummary, or None when the chart has no valid closes
        """
        data = await self._fetch(
            YH_FINANCE_CHART_PATH,
            {
                "interval": YH_FINANCE_CHART_INTERVAL,
                "range": ChartRange(chart_range).value,
                "region": self._region,
                "symbol": symbol,
            },
        )
        series = _parse_chart(data)
        if series is None:
            logger.info("No chart in response", symbol=symbol, range=str(chart_range))
            return None

        summary = summarize_closes(*series)
        if summary is None:
            logger.info("Chart has no closes", symbol=symbol, range=str(chart_range))
        return summary

    async def close(self) -> None:
        """Clean up resources."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None
        logger.debug("YHFinanceClient closed")


def _first(value: Any) -> dict[str, Any] | None:
    """First element of a list if it is a JSON object."""
    if isinstance(value, list) and value and isinstance(value[0], dict):
        return value[0]
    return None


def _number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    return float(value)


def _parse_quote(data: Any, symbol: str) -> Quote | None:
    """Extract a Quote from ``quoteResponse.result[0]``."""
    if not isinstance(data, dict):
        return None
    quote_response = data.get("quoteResponse")
    if not isinstance(quote_response, dict):
        return None
    first = _first(quote_response.get("result"))
    if first is None:
        return None

    price = _number(first.get("regularMarketPrice"))
    market_time = _number(first.get("regularMarketTime"))
    as_of = epoch_or_none(market_time) if market_time is not None else None
    if price is None or as_of is None:
        return None

    earnings_ts = _number(first.get("earningsTimestampStart"))
    return Quote(
        symbol=str(first.get("symbol") or symbol),
        price=price,
        as_of=as_of,
        earnings_date=epoch_or_none(earnings_ts) if earnings_ts is not None else None,
    )


def _parse_chart(data: Any) -> tuple[list[Any], list[Any]] | None:
    """Extract the parallel timestamp/close arrays from ``chart.result[0]``."""
    if not isinstance(data, dict):
        return None
    chart = data.get("chart")
    if not isinstance(chart, dict):
        return None
    result = _first(chart.get("result"))
    if result is None:
        return None

    timestamps = result.get("timestamp")
    indicators = result.get("indicators")
    if not isinstance(timestamps, list) or not isinstance(indicators, dict):
        return None
    quote = _first(indicators.get("quote"))
    if quote is None:
        return None
    closes = quote.get("close")
    if not isinstance(closes, list):
        return None
    return timestamps, closes
