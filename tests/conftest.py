"""Pytest fixtures and configuration."""

from __future__ import annotations

from typing import Any

import pytest


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip integration tests by default unless -m integration is specified."""
    markexpr = config.getoption("-m", default="")
    if "integration" in markexpr:
        return

    skip_integration = pytest.mark.skip(reason="Integration test - run with: pytest -m integration")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


# ---------------------------------------------------------------------------
# Sample provider payloads
# ---------------------------------------------------------------------------

QUOTE_TIME = 1718400000
EARNINGS_TIME = 1721160000


@pytest.fixture
def quote_payload() -> dict[str, Any]:
    """Trimmed /market/v2/get-quotes response for NFLX."""
    return {
        "quoteResponse": {
            "result": [
                {
                    "language": "en-US",
                    "region": "US",
                    "quoteType": "EQUITY",
                    "symbol": "NFLX",
                    "regularMarketPrice": 612.5,
                    "regularMarketTime": QUOTE_TIME,
                    "earningsTimestampStart": EARNINGS_TIME,
                }
            ],
            "error": None,
        }
    }


@pytest.fixture
def chart_payload() -> dict[str, Any]:
    """Trimmed /stock/v3/get-chart response with one missing close."""
    return {
        "chart": {
            "result": [
                {
                    "meta": {"symbol": "NFLX", "range": "1mo", "dataGranularity": "1d"},
                    "timestamp": [100, 200, 300],
                    "indicators": {"quote": [{"close": [10.0, None, 30.0]}]},
                }
            ],
            "error": None,
        }
    }
