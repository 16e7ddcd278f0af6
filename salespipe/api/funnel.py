from __future__ import annotations

from fastapi import APIRouter, Depends

from salespipe.api.dependencies import get_clock, get_funnel_service
from salespipe.core.config import get_settings
from salespipe.schemas.funnel import FunnelAnalysis, FunnelRequest, ManagerStats, ManagerStatsRequest
from salespipe.services.funnel_service import FunnelService
from salespipe.shared.response import ResponseEnvelope, build_meta
from salespipe.shared.time import Clock, resolve_today


router = APIRouter(prefix="/funnel", tags=["funnel"])


@router.post("")
def funnel_analysis(
    request: FunnelRequest,
    service: FunnelService = Depends(get_funnel_service),
    clock: Clock = Depends(get_clock),
) -> ResponseEnvelope[FunnelAnalysis]:
    data = service.analyze(request)
    return ResponseEnvelope(data=data, meta=build_meta(resolve_today(clock), source="funnel"))


@router.post("/manager-stats")
def manager_stats(
    request: ManagerStatsRequest,
    service: FunnelService = Depends(get_funnel_service),
    clock: Clock = Depends(get_clock),
) -> ResponseEnvelope[ManagerStats]:
    data = service.manager_stats(request)
    meta = build_meta(resolve_today(clock), source="funnel", currency=get_settings().currency_code)
    return ResponseEnvelope(data=data, meta=meta)
