"""Abstract provider protocol for quote data.

Consumers (lookup service, API, CLI) depend on QuoteProvider rather than on a
concrete client, so the YH Finance client can be swapped or faked in tests.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from stockcalc.providers.yh_finance.models import ChartRange, Quote, RangeSummary


@runtime_checkable
class QuoteProvider(Protocol):
    """Protocol for current quotes and historical close ranges."""

    async def get_quote(self, symbol: str) -> Quote | None:
        """Get the current quote for a symbol.

        Args:
            symbol: Stock ticker symbol (e.g., "NFLX")

        Returns:
            Quote, or None if the provider has no data for the symbol.

        Raises:
            ProviderError: On transport, authorization or decoding failure.
        """
        ...

    async def get_range_summary(
        self, symbol: str, chart_range: ChartRange = ChartRange.ONE_MONTH
    ) -> RangeSummary | None:
        """Get the lowest and highest daily close over a range.

        Args:
            symbol: Stock ticker symbol
            chart_range: History window

        Returns:
            RangeSummary, or None if no valid close exists in the window.

        Raises:
            ProviderError: On transport, authorization or decoding failure.
        """
        ...

    async def close(self) -> None:
        """Clean up resources."""
        ...
