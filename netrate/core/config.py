from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Ignore unrelated env keys so a shared .env can hold other tools' settings.
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "netrate"
    environment: str = Field(default="development", alias="NETRATE_ENVIRONMENT")
    log_level: str = Field(default="INFO", alias="NETRATE_LOG_LEVEL")
    calculation_version: str = Field(default="v1", alias="NETRATE_CALCULATION_VERSION")

    default_currency: str = Field(default="EUR", alias="NETRATE_DEFAULT_CURRENCY")
    default_holiday_multiplier: float = Field(
        default=1.4, ge=1.0, le=3.0, alias="NETRATE_DEFAULT_HOLIDAY_MULTIPLIER"
    )
    default_max_buffer_days: int = Field(default=2, ge=0, le=3, alias="NETRATE_MAX_BUFFER_DAYS")
    divisor_floor: float = Field(default=0.0001, gt=0.0, alias="NETRATE_DIVISOR_FLOOR")
    preview_daily_price: float = Field(default=100.0, gt=0.0, alias="NETRATE_PREVIEW_DAILY_PRICE")


@lru_cache
def get_settings() -> Settings:
    return Settings()
