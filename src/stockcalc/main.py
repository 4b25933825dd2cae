"""FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from stockcalc.api import api_router
from stockcalc.config import get_settings
from stockcalc.core.exceptions import ConfigurationError
from stockcalc.core.logging import get_logger, setup_logging
from stockcalc.providers.factory import create_quote_client

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the quote client on startup and close it on shutdown."""
    settings = get_settings()
    setup_logging(settings)

    try:
        app.state.quote_client = create_quote_client(settings)
    except ConfigurationError as e:
        # Calculator endpoint still works without a key
        logger.warning("Quote provider disabled", reason=e.message)
        app.state.quote_client = None

    logger.info("stockcalc ready", env=settings.env)
    try:
        yield
    finally:
        if app.state.quote_client is not None:
            await app.state.quote_client.close()


app = FastAPI(
    title="stockcalc",
    description="Stock quotes, recent low/high range and hypothetical price moves",
    version="0.1.0",
    lifespan=lifespan,
)


@app.get("/health")
async def health() -> dict[str, str]:
    """Liveness check, always ok while the process is running."""
    return {"status": "ok"}


@app.get("/ready")
async def ready(request: Request) -> dict[str, str]:
    """Readiness check: reports whether the quote provider is configured."""
    provider = "ok" if getattr(request.app.state, "quote_client", None) else "disabled"
    status = "ready" if provider == "ok" else "not_ready"
    return {"status": status, "quote_provider": provider}


# Domain API
app.include_router(api_router, prefix="/api/v1")
