from __future__ import annotations

from datetime import date

import pytest
from fastapi.testclient import TestClient

from salespipe.api.dependencies import get_clock, get_settings_service
from salespipe.core.config import Settings
from salespipe.main import create_app
from salespipe.services.settings_service import SettingsService

FIXED_TODAY = date(2025, 1, 15)


def fixed_clock() -> date:
    return FIXED_TODAY


@pytest.fixture()
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture()
def settings_service(settings: Settings) -> SettingsService:
    return SettingsService(settings=settings)


@pytest.fixture()
def client(settings_service: SettingsService) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_clock] = lambda: fixed_clock
    app.dependency_overrides[get_settings_service] = lambda: settings_service
    return TestClient(app)
