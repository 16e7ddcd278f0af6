from __future__ import annotations

from fastapi import APIRouter, Depends

from salespipe.api.dependencies import get_clock, get_settings_service
from salespipe.schemas.settings import EffectiveSettings, SettingsPayload
from salespipe.services.settings_service import SettingsService
from salespipe.shared.response import ResponseEnvelope, build_meta
from salespipe.shared.time import Clock, resolve_today


router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/effective")
def effective_settings(
    service: SettingsService = Depends(get_settings_service),
    clock: Clock = Depends(get_clock),
) -> ResponseEnvelope[EffectiveSettings]:
    data = service.get_effective_settings()
    return ResponseEnvelope(data=data, meta=build_meta(resolve_today(clock), source="settings"))


@router.post("/preview")
def preview_settings(
    payload: SettingsPayload,
    service: SettingsService = Depends(get_settings_service),
    clock: Clock = Depends(get_clock),
) -> ResponseEnvelope[EffectiveSettings]:
    data = service.preview(payload)
    return ResponseEnvelope(data=data, meta=build_meta(resolve_today(clock), source="settings"))
