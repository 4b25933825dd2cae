"""Shared fixtures for integration tests.

These tests hit the live YH Finance API and need RAPIDAPI_KEY in the
environment (or .env). They are skipped when the key is missing.
"""

from collections.abc import AsyncIterator

import pytest

from stockcalc.config import Settings
from stockcalc.providers.yh_finance import YHFinanceClient


@pytest.fixture
def live_settings() -> Settings:
    settings = Settings()
    if settings.rapidapi_key is None:
        pytest.skip("RAPIDAPI_KEY not set")
    return settings


@pytest.fixture
async def live_client(live_settings: Settings) -> AsyncIterator[YHFinanceClient]:
    assert live_settings.rapidapi_key is not None
    client = YHFinanceClient(
        api_key=live_settings.rapidapi_key.get_secret_value(),
        host=live_settings.yh_finance_host,
        base_url=live_settings.yh_finance_base_url,
        region=live_settings.yh_finance_region,
        timeout=live_settings.http_timeout,
    )
    yield client
    await client.close()
