from __future__ import annotations

from fastapi import APIRouter, Depends

from salespipe.api.dependencies import get_clock
from salespipe.shared.response import ResponseEnvelope, build_meta
from salespipe.shared.time import Clock, resolve_today


router = APIRouter(tags=["health"])


@router.get("/health")
def health_check(clock: Clock = Depends(get_clock)) -> ResponseEnvelope[dict]:
    return ResponseEnvelope(data={"status": "ok"}, meta=build_meta(resolve_today(clock), source="system"))


@router.get("/healthz")
def health_check_liveness(clock: Clock = Depends(get_clock)) -> ResponseEnvelope[dict]:
    return ResponseEnvelope(data={"status": "ok"}, meta=build_meta(resolve_today(clock), source="system"))
