"""Caller-side calculator state.

CalculatorSession holds what the calculator form shows: the symbol, the
history range, the chosen percent move and the latest lookup. Starting a
refresh cancels the one in flight, and only the most recent refresh may
replace the snapshot.
"""

from __future__ import annotations

import asyncio
import contextlib

from stockcalc.core.constants import (
    ALERT_INVALID_RESPONSE,
    ALERT_INVALID_SYMBOL,
    ALERT_NO_RANGE_DATA,
    ALERT_RATE_LIMITED,
    ALERT_UNAUTHORIZED,
    ALERT_UNAVAILABLE,
    DEFAULT_PERCENT_CHANGE_LIMIT,
    DEFAULT_SYMBOL,
)
from stockcalc.core.exceptions import InvalidInputError
from stockcalc.core.logging import get_logger
from stockcalc.pricing.calculator import PriceProjection, percent_for_target, project
from stockcalc.providers.yh_finance.models import ChartRange
from stockcalc.services.lookup import (
    FetchStatus,
    StockLookupService,
    StockSnapshot,
    normalize_symbol,
)

logger = get_logger(__name__)

_FAILURE_ALERTS: dict[FetchStatus, str] = {
    FetchStatus.UNAUTHORIZED: ALERT_UNAUTHORIZED,
    FetchStatus.RATE_LIMITED: ALERT_RATE_LIMITED,
    FetchStatus.UNAVAILABLE: ALERT_UNAVAILABLE,
    FetchStatus.INVALID_RESPONSE: ALERT_INVALID_RESPONSE,
}


def alerts_for(snapshot: StockSnapshot) -> list[str]:
    """User-facing messages for a snapshot's failed or empty fetches.

    An unknown symbol yields the invalid-symbol alert; authorization,
    rate-limit, transport and decoding failures each get their own message.
    """
    alerts: list[str] = []
    if snapshot.quote_status == FetchStatus.NOT_FOUND:
        alerts.append(ALERT_INVALID_SYMBOL)
    elif snapshot.range_status == FetchStatus.NOT_FOUND:
        alerts.append(ALERT_NO_RANGE_DATA)

    for status in (snapshot.quote_status, snapshot.range_status):
        message = _FAILURE_ALERTS.get(status)
        if message and message not in alerts:
            alerts.append(message)
    return alerts


class CalculatorSession:
    """Stateful calculator for one user.

    Usage:
        session = CalculatorSession(StockLookupService(client), symbol="NFLX")
        await session.refresh()
        session.set_percent(5)
        print(session.projection)
        await session.aclose()
    """

    def __init__(
        self,
        service: StockLookupService,
        symbol: str = DEFAULT_SYMBOL,
        chart_range: ChartRange = ChartRange.ONE_MONTH,
        percent_limit: float = DEFAULT_PERCENT_CHANGE_LIMIT,
    ) -> None:
        self._service = service
        self.symbol = normalize_symbol(symbol)
        self.chart_range = ChartRange(chart_range)
        self._percent_limit = percent_limit
        self._percent = 0.0
        self._snapshot: StockSnapshot | None = None
        self._task: asyncio.Task[StockSnapshot] | None = None
        # Bumped on every refresh; only the latest generation may apply results
        self._generation = 0

    @property
    def snapshot(self) -> StockSnapshot | None:
        return self._snapshot

    @property
    def percent(self) -> float:
        return self._percent

    @property
    def is_loading(self) -> bool:
        return self._task is not None and not self._task.done()

    async def refresh(
        self,
        symbol: str | None = None,
        chart_range: ChartRange | None = None,
    ) -> StockSnapshot | None:
        """Look up the current symbol/range, superseding any refresh in flight.

        Args:
            symbol: New symbol, or None to keep the current one
            chart_range: New range, or None to keep the current one

        Returns:
            The applied snapshot, or None if a newer refresh superseded this one
        """
        if symbol is not None:
            self.symbol = normalize_symbol(symbol)
        if chart_range is not None:
            self.chart_range = ChartRange(chart_range)

        if self._task is not None and not self._task.done():
            logger.debug("Cancelling superseded refresh", generation=self._generation)
            self._task.cancel()

        self._generation += 1
        generation = self._generation
        self._snapshot = None
        task = asyncio.create_task(self._service.lookup(self.symbol, self.chart_range))
        self._task = task

        try:
            snapshot = await task
        except asyncio.CancelledError:
            if generation != self._generation:
                return None
            raise

        if generation != self._generation:
            logger.debug(
                "Discarding stale snapshot",
                request_id=snapshot.request_id,
                symbol=snapshot.symbol,
            )
            return None

        self._snapshot = snapshot
        self._task = None
        return snapshot

    def set_percent(self, percent: float) -> PriceProjection | None:
        """Set the hypothetical percent move (the slider value).

        Raises:
            InvalidInputError: If ``percent`` is outside +/- percent_limit
        """
        if abs(percent) > self._percent_limit:
            raise InvalidInputError(
                f"Percent change must be within +/-{self._percent_limit:g}%"
            )
        self._percent = float(percent)
        return self.projection

    def set_target_price(self, target: float) -> PriceProjection:
        """Set the percent move implied by a directly entered target price.

        Raises:
            InvalidInputError: If there is no quote yet or the target is negative
        """
        snapshot = self._snapshot
        if snapshot is None or snapshot.quote is None:
            raise InvalidInputError("No current price to compare the target against")
        self._percent = percent_for_target(snapshot.quote.price, target)
        return project(snapshot.quote.price, self._percent, snapshot.range_summary)

    @property
    def projection(self) -> PriceProjection | None:
        """New price for the current percent, or None without a quote."""
        if self._snapshot is None or self._snapshot.quote is None:
            return None
        return project(
            self._snapshot.quote.price,
            self._percent,
            self._snapshot.range_summary,
        )

    @property
    def alerts(self) -> list[str]:
        """User-visible problems with the latest snapshot."""
        if self._snapshot is None:
            return []
        return alerts_for(self._snapshot)

    async def aclose(self) -> None:
        """Cancel any refresh in flight."""
        task = self._task
        self._generation += 1
        self._task = None
        if task is not None and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
