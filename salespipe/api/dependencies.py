from __future__ import annotations

from functools import lru_cache

from salespipe.core.config import get_settings
from salespipe.services.forecast_service import ForecastService
from salespipe.services.funnel_service import FunnelService
from salespipe.services.motivation_service import MotivationService
from salespipe.services.settings_service import SettingsService
from salespipe.shared.time import Clock, system_clock


def get_clock() -> Clock:
    return system_clock


@lru_cache
def get_settings_service() -> SettingsService:
    return SettingsService(settings=get_settings())


def get_funnel_service() -> FunnelService:
    return FunnelService(settings_service=get_settings_service())


def get_motivation_service() -> MotivationService:
    return MotivationService(settings_service=get_settings_service())


def get_forecast_service() -> ForecastService:
    return ForecastService(settings_service=get_settings_service())
