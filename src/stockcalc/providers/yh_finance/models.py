"""Pydantic models for YH Finance quote and chart data."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, model_validator


class ChartRange(StrEnum):
    """Relative history windows accepted by the chart endpoint."""

    ONE_DAY = "1d"
    FIVE_DAYS = "5d"
    ONE_MONTH = "1mo"
    THREE_MONTHS = "3mo"
    SIX_MONTHS = "6mo"
    ONE_YEAR = "1y"
    YEAR_TO_DATE = "ytd"


class Quote(BaseModel):
    """Current price snapshot for a symbol."""

    model_config = ConfigDict(frozen=True)

    symbol: str
    price: float
    as_of: datetime
    earnings_date: datetime | None = None


class PricePoint(BaseModel):
    """One daily close observation."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    close: float


class RangeSummary(BaseModel):
    """Lowest and highest close over a chart range."""

    model_config = ConfigDict(frozen=True)

    min: PricePoint
    max: PricePoint

    @model_validator(mode="after")
    def check_order(self) -> RangeSummary:
        if self.min.close > self.max.close:
            raise ValueError("min close must not exceed max close")
        return self
