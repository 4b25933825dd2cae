"""Lookup orchestration and caller-side calculator state."""

from stockcalc.services.lookup import FetchStatus, StockLookupService, StockSnapshot
from stockcalc.services.session import CalculatorSession, alerts_for

__all__ = [
    "CalculatorSession",
    "alerts_for",
    "FetchStatus",
    "StockLookupService",
    "StockSnapshot",
]
