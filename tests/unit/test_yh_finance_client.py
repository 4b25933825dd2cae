"""Tests for the YH Finance quote/chart client."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import orjson
import pytest

from stockcalc.core.exceptions import (
    MalformedRequestError,
    ProviderAuthError,
    ProviderHTTPError,
    ProviderRateLimitError,
    ProviderResponseError,
    ProviderTransportError,
)
from stockcalc.pricing.range import from_epoch
from stockcalc.providers.yh_finance.client import YHFinanceClient, _parse_chart, _parse_quote
from stockcalc.providers.yh_finance.models import ChartRange


def _response(status: int = 200, body: Any = None, raw: bytes | None = None) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    resp.content = raw if raw is not None else orjson.dumps(body)
    resp.text = resp.content.decode(errors="replace")
    return resp


@pytest.fixture()
def client() -> YHFinanceClient:
    return YHFinanceClient(api_key="test-key")


# ---------------------------------------------------------------------------
# HTTP client setup
# ---------------------------------------------------------------------------


class TestHttpClient:
    async def test_headers_and_timeout(self) -> None:
        client = YHFinanceClient(api_key="secret", host="example.rapidapi.com", timeout=5.0)
        http = client._get_http_client()
        try:
            assert http.headers["x-rapidapi-key"] == "secret"
            assert http.headers["x-rapidapi-host"] == "example.rapidapi.com"
            assert http.timeout.read == 5.0
            assert client._get_http_client() is http
        finally:
            await client.close()
        assert client._http_client is None

    async def test_close_without_client(self, client: YHFinanceClient) -> None:
        await client.close()
        assert client._http_client is None


# ---------------------------------------------------------------------------
# get_quote
# ---------------------------------------------------------------------------


class TestGetQuote:
    async def test_get_quote(self, client: YHFinanceClient, quote_payload: dict[str, Any]) -> None:
        with patch.object(client, "_get_http_client") as mock_http:
            mock_http.return_value.get = AsyncMock(return_value=_response(body=quote_payload))
            quote = await client.get_quote("NFLX")

        assert quote is not None
        assert quote.symbol == "NFLX"
        assert quote.price == 612.5
        first = quote_payload["quoteResponse"]["result"][0]
        assert quote.as_of == from_epoch(first["regularMarketTime"])
        assert quote.earnings_date == from_epoch(first["earningsTimestampStart"])

        call = mock_http.return_value.get.await_args
        assert call.args[0] == "https://yh-finance.p.rapidapi.com/market/v2/get-quotes"
        assert call.kwargs["params"] == {"region": "US", "symbols": "NFLX"}

    async def test_quote_without_earnings(
        self, client: YHFinanceClient, quote_payload: dict[str, Any]
    ) -> None:
        del quote_payload["quoteResponse"]["result"][0]["earningsTimestampStart"]
        with patch.object(client, "_get_http_client") as mock_http:
            mock_http.return_value.get = AsyncMock(return_value=_response(body=quote_payload))
            quote = await client.get_quote("NFLX")

        assert quote is not None
        assert quote.earnings_date is None

    async def test_integer_price_accepted(
        self, client: YHFinanceClient, quote_payload: dict[str, Any]
    ) -> None:
        quote_payload["quoteResponse"]["result"][0]["regularMarketPrice"] = 600
        with patch.object(client, "_get_http_client") as mock_http:
            mock_http.return_value.get = AsyncMock(return_value=_response(body=quote_payload))
            quote = await client.get_quote("NFLX")

        assert quote is not None
        assert quote.price == 600.0

    async def test_empty_result_is_not_found(self, client: YHFinanceClient) -> None:
        """Unknown symbols come back as an empty result list."""
        body = {"quoteResponse": {"result": [], "error": None}}
        with patch.object(client, "_get_http_client") as mock_http:
            mock_http.return_value.get = AsyncMock(return_value=_response(body=body))
            assert await client.get_quote("ZZZZZZ") is None

    async def test_unauthorized_raises_auth_error(self, client: YHFinanceClient) -> None:
        body = {"message": "You are not subscribed to this API."}
        with patch.object(client, "_get_http_client") as mock_http:
            mock_http.return_value.get = AsyncMock(return_value=_response(401, body))
            with pytest.raises(ProviderAuthError) as exc_info:
                await client.get_quote("NFLX")

        assert exc_info.value.status_code == 401

    async def test_rate_limited(self, client: YHFinanceClient) -> None:
        with patch.object(client, "_get_http_client") as mock_http:
            mock_http.return_value.get = AsyncMock(return_value=_response(429, {"message": "x"}))
            with pytest.raises(ProviderRateLimitError):
                await client.get_quote("NFLX")

    async def test_server_error(self, client: YHFinanceClient) -> None:
        with patch.object(client, "_get_http_client") as mock_http:
            mock_http.return_value.get = AsyncMock(return_value=_response(500, {"message": "x"}))
            with pytest.raises(ProviderHTTPError) as exc_info:
                await client.get_quote("NFLX")

        assert exc_info.value.status_code == 500
        assert not isinstance(exc_info.value, ProviderAuthError)

    async def test_connection_failure(self, client: YHFinanceClient) -> None:
        with patch.object(client, "_get_http_client") as mock_http:
            mock_http.return_value.get = AsyncMock(
                side_effect=httpx.ConnectError("Connection refused")
            )
            with pytest.raises(ProviderTransportError):
                await client.get_quote("NFLX")

    async def test_timeout(self, client: YHFinanceClient) -> None:
        with patch.object(client, "_get_http_client") as mock_http:
            mock_http.return_value.get = AsyncMock(side_effect=httpx.ReadTimeout("timed out"))
            with pytest.raises(ProviderTransportError):
                await client.get_quote("NFLX")

    async def test_invalid_url(self, client: YHFinanceClient) -> None:
        with patch.object(client, "_get_http_client") as mock_http:
            mock_http.return_value.get = AsyncMock(side_effect=httpx.InvalidURL("bad url"))
            with pytest.raises(MalformedRequestError):
                await client.get_quote("NFLX")

    async def test_invalid_json(self, client: YHFinanceClient) -> None:
        with patch.object(client, "_get_http_client") as mock_http:
            mock_http.return_value.get = AsyncMock(return_value=_response(raw=b"<html>oops"))
            with pytest.raises(ProviderResponseError):
                await client.get_quote("NFLX")


# ---------------------------------------------------------------------------
# get_range_summary
# ---------------------------------------------------------------------------


class TestGetRangeSummary:
    async def test_summary(self, client: YHFinanceClient, chart_payload: dict[str, Any]) -> None:
        with patch.object(client, "_get_http_client") as mock_http:
            mock_http.return_value.get = AsyncMock(return_value=_response(body=chart_payload))
            summary = await client.get_range_summary("NFLX", ChartRange.ONE_MONTH)

        assert summary is not None
        assert summary.min.timestamp == from_epoch(100)
        assert summary.min.close == 10.0
        assert summary.max.timestamp == from_epoch(300)
        assert summary.max.close == 30.0

        call = mock_http.return_value.get.await_args
        assert call.args[0] == "https://yh-finance.p.rapidapi.com/stock/v3/get-chart"
        assert call.kwargs["params"] == {
            "interval": "1d",
            "range": "1mo",
            "region": "US",
            "symbol": "NFLX",
        }

    async def test_range_token_passed_through(
        self, client: YHFinanceClient, chart_payload: dict[str, Any]
    ) -> None:
        with patch.object(client, "_get_http_client") as mock_http:
            mock_http.return_value.get = AsyncMock(return_value=_response(body=chart_payload))
            await client.get_range_summary("NFLX", ChartRange.YEAR_TO_DATE)

        assert mock_http.return_value.get.await_args.kwargs["params"]["range"] == "ytd"

    async def test_all_closes_missing(
        self, client: YHFinanceClient, chart_payload: dict[str, Any]
    ) -> None:
        chart_payload["chart"]["result"][0]["indicators"]["quote"][0]["close"] = [None] * 3
        with patch.object(client, "_get_http_client") as mock_http:
            mock_http.return_value.get = AsyncMock(return_value=_response(body=chart_payload))
            assert await client.get_range_summary("NFLX") is None

    async def test_out_of_range_timestamps_skipped(
        self, client: YHFinanceClient, chart_payload: dict[str, Any]
    ) -> None:
        result = chart_payload["chart"]["result"][0]
        result["timestamp"] = [1e20, 200, -1e20]
        result["indicators"]["quote"][0]["close"] = [1.0, 50.0, 99.0]
        with patch.object(client, "_get_http_client") as mock_http:
            mock_http.return_value.get = AsyncMock(return_value=_response(body=chart_payload))
            summary = await client.get_range_summary("NFLX")

        assert summary is not None
        assert summary.min == summary.max
        assert summary.min.close == 50.0

    async def test_only_out_of_range_timestamps_is_no_data(
        self, client: YHFinanceClient, chart_payload: dict[str, Any]
    ) -> None:
        chart_payload["chart"]["result"][0]["timestamp"] = [1e20, 1e20, 1e20]
        with patch.object(client, "_get_http_client") as mock_http:
            mock_http.return_value.get = AsyncMock(return_value=_response(body=chart_payload))
            assert await client.get_range_summary("NFLX") is None

    async def test_missing_chart_is_no_data(self, client: YHFinanceClient) -> None:
        body = {"chart": {"result": None, "error": {"code": "Not Found"}}}
        with patch.object(client, "_get_http_client") as mock_http:
            mock_http.return_value.get = AsyncMock(return_value=_response(body=body))
            assert await client.get_range_summary("ZZZZZZ") is None

    async def test_unauthorized(self, client: YHFinanceClient) -> None:
        with patch.object(client, "_get_http_client") as mock_http:
            mock_http.return_value.get = AsyncMock(return_value=_response(401, {"message": "x"}))
            with pytest.raises(ProviderAuthError):
                await client.get_range_summary("NFLX")


# ---------------------------------------------------------------------------
# Response parsing
# ---------------------------------------------------------------------------


class TestParsing:
    @pytest.mark.parametrize(
        "body",
        [
            None,
            [],
            {},
            {"quoteResponse": None},
            {"quoteResponse": {"result": "nope"}},
            {"quoteResponse": {"result": [None]}},
            {"quoteResponse": {"result": [{"regularMarketTime": 1}]}},
            {"quoteResponse": {"result": [{"regularMarketPrice": 1.0}]}},
            {"quoteResponse": {"result": [{"regularMarketPrice": "1.0", "regularMarketTime": 1}]}},
            {"quoteResponse": {"result": [{"regularMarketPrice": True, "regularMarketTime": 1}]}},
        ],
    )
    def test_quote_missing_fields(self, body: Any) -> None:
        assert _parse_quote(body, "NFLX") is None

    def test_quote_symbol_falls_back_to_request(self) -> None:
        body = {"quoteResponse": {"result": [{"regularMarketPrice": 1.0, "regularMarketTime": 1}]}}
        quote = _parse_quote(body, "AAPL")
        assert quote is not None
        assert quote.symbol == "AAPL"

    def test_quote_ignores_non_numeric_earnings(self) -> None:
        body = {
            "quoteResponse": {
                "result": [
                    {
                        "regularMarketPrice": 1.0,
                        "regularMarketTime": 1,
                        "earningsTimestampStart": "soon",
                    }
                ]
            }
        }
        quote = _parse_quote(body, "AAPL")
        assert quote is not None
        assert quote.earnings_date is None

    @pytest.mark.parametrize(
        "body",
        [
            None,
            {"chart": []},
            {"chart": {"result": []}},
            {"chart": {"result": [{"timestamp": [1], "indicators": None}]}},
            {"chart": {"result": [{"timestamp": None, "indicators": {"quote": [{"close": [1]}]}}]}},
            {"chart": {"result": [{"timestamp": [1], "indicators": {"quote": []}}]}},
            {"chart": {"result": [{"timestamp": [1], "indicators": {"quote": [{"close": 5}]}}]}},
        ],
    )
    def test_chart_missing_fields(self, body: Any) -> None:
        assert _parse_chart(body) is None

    def test_chart_arrays(self, chart_payload: dict[str, Any]) -> None:
        assert _parse_chart(chart_payload) == ([100, 200, 300], [10.0, None, 30.0])

    def test_quote_with_unrepresentable_time_is_not_found(self) -> None:
        first = {"regularMarketPrice": 1.0, "regularMarketTime": 1e20}
        body = {"quoteResponse": {"result": [first]}}
        assert _parse_quote(body, "AAPL") is None

    def test_quote_drops_unrepresentable_earnings(self) -> None:
        body = {
            "quoteResponse": {
                "result": [
                    {
                        "regularMarketPrice": 1.0,
                        "regularMarketTime": 1,
                        "earningsTimestampStart": 1e20,
                    }
                ]
            }
        }
        quote = _parse_quote(body, "AAPL")
        assert quote is not None
        assert quote.earnings_date is None
