"""Hypothetical price calculations.

A projection answers two questions for the current quote:
- what is the price after a given percent move, and
- how far below/above the current price did the range low/high close.
"""

from __future__ import annotations

from pydantic import BaseModel

from stockcalc.core.exceptions import InvalidInputError
from stockcalc.providers.yh_finance.models import RangeSummary


class PriceProjection(BaseModel):
    """Hypothetical new price plus the range's distance from the current price."""

    current_price: float
    percent_change: float
    new_price: float
    min_change_pct: float | None = None
    max_change_pct: float | None = None


def new_price(current: float, percent: float) -> float:
    """Price after moving ``current`` by ``percent`` percent."""
    return current * (1 + percent / 100)


def percent_change(current: float, value: float) -> float:
    """Percent difference of ``value`` relative to ``current``.

    Raises:
        InvalidInputError: If ``current`` is zero.
    """
    if current == 0:
        raise InvalidInputError("Cannot compute a percent change from a zero price")
    return (value - current) / current * 100


def percent_for_target(current: float, target: float) -> float:
    """Percent move that takes ``current`` to ``target`` (direct price entry)."""
    if target < 0:
        raise InvalidInputError("Target price cannot be negative")
    return percent_change(current, target)


def project(
    current: float,
    percent: float,
    summary: RangeSummary | None = None,
) -> PriceProjection:
    """Build a PriceProjection for a current price and percent move."""
    min_pct = max_pct = None
    if summary is not None and current != 0:
        min_pct = percent_change(current, summary.min.close)
        max_pct = percent_change(current, summary.max.close)

    return PriceProjection(
        current_price=current,
        percent_change=percent,
        new_price=new_price(current, percent),
        min_change_pct=min_pct,
        max_change_pct=max_pct,
    )
