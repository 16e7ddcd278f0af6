from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from salespipe.analytics.forecast_chart import aggregate_daily_sales, generate_forecast_chart_data
from salespipe.analytics.sales_forecast import calculate_monthly_forecast, calculate_weighted_forecast
from salespipe.schemas.forecast import (
    DepartmentForecast,
    DepartmentForecastRequest,
    MonthlyForecast,
    MonthlyForecastRequest,
    SalesEntry,
    WeightedForecastMetrics,
    WeightedForecastRequest,
)
from salespipe.services.settings_service import SettingsService
from salespipe.shared.money import sum_decimals
from salespipe.shared.time import Now, resolve_today

logger = logging.getLogger(__name__)


class ForecastService:
    def __init__(self, settings_service: SettingsService) -> None:
        self.settings_service = settings_service

    @staticmethod
    def _today(as_of: Optional[date], now: Now) -> date:
        return as_of if as_of is not None else resolve_today(now)

    def monthly(self, request: MonthlyForecastRequest, now: Now) -> MonthlyForecast:
        today = self._today(request.as_of, now)
        return MonthlyForecast(
            metrics=calculate_monthly_forecast(request.current_sales, request.monthly_goal, today),
            chart_data=generate_forecast_chart_data(
                request.current_sales,
                request.monthly_goal,
                today,
                daily_sales=request.daily_sales,
            ),
        )

    def weighted(self, request: WeightedForecastRequest, now: Now) -> WeightedForecastMetrics:
        today = self._today(request.as_of, now)
        _, daily = aggregate_daily_sales(request.daily_sales, today)
        # One observation per calendar day of the current month.
        observations: List[SalesEntry] = [
            SalesEntry(report_date=today.replace(day=item.day), amount=item.sales) for item in daily
        ]
        return calculate_weighted_forecast(observations, request.monthly_goal, today)

    def department(self, request: DepartmentForecastRequest, now: Now) -> DepartmentForecast:
        today = self._today(request.as_of, now)
        goal = request.department_goal
        if goal is None:
            goal = self.settings_service.get_effective_settings().department_goal
        if goal is None:
            goal = sum_decimals(member.monthly_goal for member in request.members)

        current, daily = aggregate_daily_sales(request.entries, today)
        logger.info(
            "Department forecast for %s members, %s sales days", len(request.members), len(daily)
        )
        return DepartmentForecast(
            metrics=calculate_monthly_forecast(current, goal, today),
            chart_data=generate_forecast_chart_data(current, goal, today, daily_sales=daily),
            team_size=len(request.members),
        )
