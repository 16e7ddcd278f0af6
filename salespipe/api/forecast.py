from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends

from salespipe.api.dependencies import get_clock, get_forecast_service
from salespipe.core.config import get_settings
from salespipe.schemas.forecast import (
    DepartmentForecast,
    DepartmentForecastRequest,
    MonthlyForecast,
    MonthlyForecastRequest,
    WeightedForecastMetrics,
    WeightedForecastRequest,
)
from salespipe.services.forecast_service import ForecastService
from salespipe.shared.response import Meta, ResponseEnvelope, build_meta
from salespipe.shared.time import Clock, resolve_today


router = APIRouter(prefix="/forecast", tags=["forecast"])


def _meta(as_of: Optional[date], clock: Clock) -> Meta:
    today = as_of if as_of is not None else resolve_today(clock)
    return build_meta(today, source="forecast", currency=get_settings().currency_code)


# Chart points carry either ``actual`` or ``forecast``; the other key is omitted.
@router.post("/monthly", response_model_exclude_none=True)
def forecast_monthly(
    request: MonthlyForecastRequest,
    service: ForecastService = Depends(get_forecast_service),
    clock: Clock = Depends(get_clock),
) -> ResponseEnvelope[MonthlyForecast]:
    return ResponseEnvelope(data=service.monthly(request, clock), meta=_meta(request.as_of, clock))


@router.post("/weighted")
def forecast_weighted(
    request: WeightedForecastRequest,
    service: ForecastService = Depends(get_forecast_service),
    clock: Clock = Depends(get_clock),
) -> ResponseEnvelope[WeightedForecastMetrics]:
    return ResponseEnvelope(data=service.weighted(request, clock), meta=_meta(request.as_of, clock))


@router.post("/department", response_model_exclude_none=True)
def forecast_department(
    request: DepartmentForecastRequest,
    service: ForecastService = Depends(get_forecast_service),
    clock: Clock = Depends(get_clock),
) -> ResponseEnvelope[DepartmentForecast]:
    return ResponseEnvelope(data=service.department(request, clock), meta=_meta(request.as_of, clock))
