from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from salespipe.shared.base import BaseSchema, DecimalNumber, FrozenSchema


class MotivationGrade(FrozenSchema):
    min_turnover: DecimalNumber = Field(..., ge=0)
    max_turnover: Optional[DecimalNumber] = Field(default=None, ge=0)
    commission_rate: DecimalNumber = Field(..., ge=0, le=1)


class MotivationCalculationResult(FrozenSchema):
    fact_turnover: int
    hot_turnover: int
    forecast_turnover: int
    total_potential_turnover: int
    fact_rate: float
    forecast_rate: float
    salary_fact: int
    salary_forecast: int
    potential_gain: int


class CommissionRateResult(BaseSchema):
    turnover: int
    commission_rate: float
    commission: int


class IncomeForecastSales(BaseSchema):
    current: int
    projected: int
    optimistic: int
    goal: int
    focus_deals_amount: int


class IncomeForecastRates(BaseSchema):
    current: float
    projected: float
    optimistic: float


class IncomeForecastIncome(BaseSchema):
    current: int
    projected: int
    optimistic: int
    projected_growth: int
    potential_growth: int


class IncomeForecast(BaseSchema):
    sales: IncomeForecastSales
    rates: IncomeForecastRates
    income: IncomeForecastIncome
    grades: List[MotivationGrade]


class MotivationRequest(BaseSchema):
    fact_turnover: Decimal = Field(default=Decimal("0"))
    hot_turnover: Decimal = Field(default=Decimal("0"))
    forecast_weight: Optional[Decimal] = Field(default=None, ge=0, le=1)
    grades: Optional[List[MotivationGrade]] = None


class CommissionRateRequest(BaseSchema):
    turnover: Decimal
    grades: Optional[List[MotivationGrade]] = None


class IncomeForecastRequest(BaseSchema):
    current_sales: Decimal = Field(default=Decimal("0"))
    monthly_goal: Decimal = Field(default=Decimal("0"))
    focus_deals_amount: Decimal = Field(default=Decimal("0"))
    grades: Optional[List[MotivationGrade]] = None
