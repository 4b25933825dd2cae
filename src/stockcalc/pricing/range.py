"""Reduction of a chart series to its low and high close."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import UTC, datetime
from operator import attrgetter
from typing import TypeGuard

from stockcalc.providers.yh_finance.models import PricePoint, RangeSummary


def _is_number(value: object) -> TypeGuard[float]:
    return isinstance(value, int | float) and not isinstance(value, bool)


def from_epoch(seconds: float) -> datetime:
    """Convert Unix epoch seconds to an aware UTC datetime."""
    return datetime.fromtimestamp(seconds, tz=UTC)


def epoch_or_none(seconds: float) -> datetime | None:
    """Like from_epoch, but None for values the platform clock cannot represent."""
    try:
        return from_epoch(seconds)
    except (OverflowError, OSError, ValueError):
        return None


def pair_closes(timestamps: Sequence[object], closes: Sequence[object]) -> list[PricePoint]:
    """Pair timestamps with closes positionally, dropping gaps.

    The provider pads missing sessions with ``null`` closes. Pairs whose
    timestamp or close is not a number, or whose timestamp is out of range,
    are skipped; the longer array is truncated to the shorter one.
    """
    points: list[PricePoint] = []
    for ts, close in zip(timestamps, closes):
        if _is_number(ts) and _is_number(close):
            timestamp = epoch_or_none(ts)
            if timestamp is not None:
                points.append(PricePoint(timestamp=timestamp, close=float(close)))
    return points


def summarize(points: Iterable[PricePoint]) -> RangeSummary | None:
    """Return the lowest and highest close, or None for an empty series.

    Ties keep the earliest point.
    """
    series = list(points)
    if not series:
        return None
    # min/max return the first extreme element they meet
    return RangeSummary(
        min=min(series, key=attrgetter("close")),
        max=max(series, key=attrgetter("close")),
    )


def summarize_closes(
    timestamps: Sequence[object], closes: Sequence[object]
) -> RangeSummary | None:
    """Pair the parallel chart arrays and reduce them to a RangeSummary."""
    return summarize(pair_closes(timestamps, closes))
