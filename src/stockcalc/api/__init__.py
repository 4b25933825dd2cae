"""HTTP API."""

from stockcalc.api.router import api_router

__all__ = ["api_router"]
