"""Application configuration via pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from stockcalc.core.constants import (
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    DEFAULT_PERCENT_CHANGE_LIMIT,
    DEFAULT_RANGE,
    DEFAULT_SYMBOL,
    YH_FINANCE_BASE_URL,
    YH_FINANCE_HOST,
    YH_FINANCE_REGION,
)
from stockcalc.providers.yh_finance.models import ChartRange


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Core
    env: Literal["development", "staging", "production"] = Field(
        default="development", alias="STOCKCALC_ENV"
    )
    debug: bool = Field(default=False, alias="STOCKCALC_DEBUG")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", alias="STOCKCALC_LOG_LEVEL"
    )

    # YH Finance (RapidAPI)
    rapidapi_key: SecretStr | None = Field(
        default=None,
        description="RapidAPI key sent as x-rapidapi-key",
    )
    yh_finance_host: str = Field(default=YH_FINANCE_HOST)
    yh_finance_base_url: str = Field(default=YH_FINANCE_BASE_URL)
    yh_finance_region: str = Field(default=YH_FINANCE_REGION)
    http_timeout: float = Field(
        default=DEFAULT_HTTP_TIMEOUT_SECONDS,
        gt=0,
        description="Timeout in seconds for each provider request",
    )

    # Calculator defaults
    default_symbol: str = Field(default=DEFAULT_SYMBOL)
    default_range: ChartRange = Field(default=ChartRange(DEFAULT_RANGE))
    percent_change_limit: float = Field(
        default=DEFAULT_PERCENT_CHANGE_LIMIT,
        gt=0,
        description="Largest absolute percent change the calculator session accepts",
    )

    @field_validator("default_symbol")
    @classmethod
    def normalize_default_symbol(cls, v: str) -> str:
        v = v.strip().upper()
        if not v:
            raise ValueError("DEFAULT_SYMBOL cannot be empty")
        return v

    @field_validator("yh_finance_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def is_production(self) -> bool:
        return self.env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
