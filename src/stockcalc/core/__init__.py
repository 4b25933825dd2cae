"""Core utilities: logging, exceptions, constants."""

from stockcalc.core.exceptions import StockCalcError
from stockcalc.core.logging import get_logger, setup_logging

__all__ = [
    "StockCalcError",
    "get_logger",
    "setup_logging",
]
