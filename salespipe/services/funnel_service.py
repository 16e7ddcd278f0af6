from __future__ import annotations

from salespipe.analytics.funnel import analyze_red_zones, calculate_full_funnel, calculate_manager_stats
from salespipe.schemas.funnel import FunnelAnalysis, FunnelRequest, ManagerStats, ManagerStatsRequest
from salespipe.schemas.settings import SettingsPayload
from salespipe.services.settings_service import SettingsService


class FunnelService:
    def __init__(self, settings_service: SettingsService) -> None:
        self.settings_service = settings_service

    def analyze(self, request: FunnelRequest) -> FunnelAnalysis:
        effective = self.settings_service.get_effective_settings(
            SettingsPayload(
                conversion_benchmarks=request.benchmarks,
                north_star_target=request.north_star_target,
            )
        )
        result = calculate_full_funnel(
            request.totals,
            benchmarks=effective.conversion_benchmarks,
            north_star_target=effective.north_star_target,
        )
        return FunnelAnalysis(
            funnel=result.funnel,
            side_flow=result.side_flow,
            north_star_kpi=result.north_star_kpi,
            total_conversion=result.total_conversion,
            red_zones=analyze_red_zones(result.funnel),
        )

    def manager_stats(self, request: ManagerStatsRequest) -> ManagerStats:
        effective = self.settings_service.get_effective_settings(
            SettingsPayload(conversion_benchmarks=request.benchmarks)
        )
        return calculate_manager_stats(
            request.totals,
            plan_sales=request.plan_sales,
            plan_deals=request.plan_deals,
            sales_per_deal=effective.sales_per_deal,
            benchmarks=effective.conversion_benchmarks,
        )
