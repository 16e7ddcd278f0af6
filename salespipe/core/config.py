from __future__ import annotations

from decimal import Decimal
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Ignore unrelated env keys so a shared .env can carry other services' settings.
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "SalesPipe Engine"
    environment: str = "development"
    api_prefix: str = "/api/v1"
    cors_allow_origins: str = "http://localhost:3000,http://127.0.0.1:3000"
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    currency_code: str = Field(default="RUB", alias="CURRENCY_CODE")

    # Stored settings. JSON blobs are parsed leniently by the settings service and
    # fall back to the built-in presets when absent or invalid.
    conversion_benchmarks: Optional[str] = Field(default=None, alias="CONVERSION_BENCHMARKS")
    motivation_grades: Optional[str] = Field(default=None, alias="MOTIVATION_GRADES")
    north_star_target: Optional[Decimal] = Field(default=None, alias="NORTH_STAR_TARGET")
    sales_per_deal: Optional[Decimal] = Field(default=None, alias="SALES_PER_DEAL")
    forecast_weight: Optional[Decimal] = Field(default=None, alias="FORECAST_WEIGHT")
    department_goal: Optional[Decimal] = Field(default=None, alias="DEPARTMENT_GOAL")


@lru_cache
def get_settings() -> Settings:
    return Settings()


def get_cors_origins() -> list[str]:
    settings = get_settings()
    return [origin.strip() for origin in settings.cors_allow_origins.split(",") if origin.strip()]
