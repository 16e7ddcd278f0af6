from __future__ import annotations

from fastapi import APIRouter

from salespipe.api.forecast import router as forecast_router
from salespipe.api.funnel import router as funnel_router
from salespipe.api.health import router as health_router
from salespipe.api.motivation import router as motivation_router
from salespipe.api.settings import router as settings_router


api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(funnel_router)
api_router.include_router(motivation_router)
api_router.include_router(forecast_router)
api_router.include_router(settings_router)
