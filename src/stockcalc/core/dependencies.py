"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request

from stockcalc.config import Settings, get_settings
from stockcalc.providers.base import QuoteProvider
from stockcalc.services.lookup import StockLookupService

# Type aliases for cleaner dependency injection
SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_quote_client(request: Request) -> QuoteProvider:
    """Get the quote client built during lifespan (set on app.state)."""
    client: QuoteProvider | None = getattr(request.app.state, "quote_client", None)
    if client is None:
        raise HTTPException(
            status_code=503, detail="Quote provider not available (no RAPIDAPI_KEY)"
        )
    return client


def get_lookup_service(
    client: QuoteProvider = Depends(get_quote_client),
) -> StockLookupService:
    """Lookup service bound to the app's quote client."""
    return StockLookupService(provider=client)


# Annotated dependencies for use in route handlers
QuoteClientDep = Annotated[QuoteProvider, Depends(get_quote_client)]
LookupServiceDep = Annotated[StockLookupService, Depends(get_lookup_service)]
