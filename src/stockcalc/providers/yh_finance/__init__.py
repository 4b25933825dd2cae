"""YH Finance provider for quotes and daily chart history.

Uses the YH Finance API on RapidAPI; requires RAPIDAPI_KEY.
"""

from stockcalc.providers.yh_finance.client import YHFinanceClient
from stockcalc.providers.yh_finance.models import ChartRange, PricePoint, Quote, RangeSummary

__all__ = [
    "YHFinanceClient",
    "ChartRange",
    "PricePoint",
    "Quote",
    "RangeSummary",
]
