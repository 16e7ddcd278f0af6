from __future__ import annotations

from typing import Optional, Sequence

from salespipe.analytics.commission import GradeTable
from salespipe.analytics.motivation import calculate_income_forecast, calculate_motivation, commission_for
from salespipe.schemas.motivation import (
    CommissionRateRequest,
    CommissionRateResult,
    IncomeForecast,
    IncomeForecastRequest,
    MotivationGrade,
    MotivationCalculationResult,
    MotivationRequest,
)
from salespipe.services.settings_service import SettingsService
from salespipe.shared.money import to_decimal, to_money, to_rate
from salespipe.shared.time import Now


class MotivationService:
    def __init__(self, settings_service: SettingsService) -> None:
        self.settings_service = settings_service

    def _grade_table(self, grades: Optional[Sequence[MotivationGrade]] = None) -> GradeTable:
        return GradeTable(self.settings_service.resolve_grades(grades))

    def calculate(self, request: MotivationRequest) -> MotivationCalculationResult:
        weight = request.forecast_weight
        if weight is None:
            weight = self.settings_service.get_effective_settings().forecast_weight
        return calculate_motivation(
            request.fact_turnover,
            request.hot_turnover,
            grades=self._grade_table(request.grades),
            forecast_weight=weight,
        )

    def commission_rate(self, request: CommissionRateRequest) -> CommissionRateResult:
        turnover = to_decimal(request.turnover)
        table = self._grade_table(request.grades)
        rate = table.resolve(turnover)
        return CommissionRateResult(
            turnover=to_money(turnover),
            commission_rate=to_rate(rate),
            commission=to_money(commission_for(turnover, table)),
        )

    def income_forecast(self, request: IncomeForecastRequest, now: Now) -> IncomeForecast:
        return calculate_income_forecast(
            request.current_sales,
            request.monthly_goal,
            request.focus_deals_amount,
            now,
            grades=self._grade_table(request.grades),
        )
