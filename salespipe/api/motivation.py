from __future__ import annotations

from fastapi import APIRouter, Depends

from salespipe.api.dependencies import get_clock, get_motivation_service
from salespipe.core.config import get_settings
from salespipe.schemas.motivation import (
    CommissionRateRequest,
    CommissionRateResult,
    IncomeForecast,
    IncomeForecastRequest,
    MotivationCalculationResult,
    MotivationRequest,
)
from salespipe.services.motivation_service import MotivationService
from salespipe.shared.response import Meta, ResponseEnvelope, build_meta
from salespipe.shared.time import Clock, resolve_today


router = APIRouter(prefix="/motivation", tags=["motivation"])


def _meta(clock: Clock) -> Meta:
    return build_meta(resolve_today(clock), source="motivation", currency=get_settings().currency_code)


@router.post("/calculate")
def motivation_calculate(
    request: MotivationRequest,
    service: MotivationService = Depends(get_motivation_service),
    clock: Clock = Depends(get_clock),
) -> ResponseEnvelope[MotivationCalculationResult]:
    return ResponseEnvelope(data=service.calculate(request), meta=_meta(clock))


@router.post("/commission-rate")
def motivation_commission_rate(
    request: CommissionRateRequest,
    service: MotivationService = Depends(get_motivation_service),
    clock: Clock = Depends(get_clock),
) -> ResponseEnvelope[CommissionRateResult]:
    return ResponseEnvelope(data=service.commission_rate(request), meta=_meta(clock))


@router.post("/income-forecast")
def motivation_income_forecast(
    request: IncomeForecastRequest,
    service: MotivationService = Depends(get_motivation_service),
    clock: Clock = Depends(get_clock),
) -> ResponseEnvelope[IncomeForecast]:
    return ResponseEnvelope(data=service.income_forecast(request, clock), meta=_meta(clock))
