"""Provider factory.

Builds the quote provider from settings so the credential and host are
injected explicitly instead of living in a process-wide singleton.

Usage:
    from stockcalc.providers import create_quote_client

    client = create_quote_client(get_settings())
    quote = await client.get_quote("NFLX")
    await client.close()
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from stockcalc.core.exceptions import ConfigurationError
from stockcalc.core.logging import get_logger
from stockcalc.providers.yh_finance import YHFinanceClient

if TYPE_CHECKING:
    from stockcalc.config import Settings

logger = get_logger(__name__)


def create_quote_client(settings: Settings, api_key: str | None = None) -> YHFinanceClient:
    """Create a YH Finance client from settings.

    Args:
        settings: Application settings
        api_key: Optional API key override (uses settings if not provided)

    Raises:
        ConfigurationError: If no API key is available
    """
    key = api_key or (
        settings.rapidapi_key.get_secret_value() if settings.rapidapi_key else None
    )
    if not key:
        raise ConfigurationError("RAPIDAPI_KEY is required for the YH Finance provider")

    logger.debug("Creating YHFinanceClient", host=settings.yh_finance_host)
    return YHFinanceClient(
        api_key=key,
        host=settings.yh_finance_host,
        base_url=settings.yh_finance_base_url,
        region=settings.yh_finance_region,
        timeout=settings.http_timeout,
    )
