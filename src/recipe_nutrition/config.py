"""Application configuration."""

import os

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    fdc_api_key: str
    fdc_base_url: str = "https://api.nal.usda.gov/fdc/v1"
    fdc_min_interval_seconds: float = Field(default=0.1, ge=0)
    fdc_timeout_seconds: float | None = None
    fdc_page_size: int = Field(default=10, ge=1)
    fdc_data_types: str = "Foundation,SR Legacy,Branded"
    ingredient_batch_size: int = Field(default=3, ge=1)
    match_cache_ttl_seconds: int | None = None
    debug_nutrition: bool = Field(
        default=False,
        validation_alias=AliasChoices("DEBUG_NUTRITION", "debug_nutrition"),
    )
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_data_types(raw: str | None) -> tuple[str, ...]:
    """Parse a comma-separated list of FDC data types."""
    if raw is None:
        return ()
    return tuple(chunk.strip() for chunk in raw.split(",") if chunk.strip())
