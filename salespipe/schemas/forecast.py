from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from salespipe.shared.base import BaseSchema, FrozenSchema


class ForecastMetrics(FrozenSchema):
    current: int
    goal: int
    projected: int
    completion: int
    pacing: int
    is_pacing_good: bool
    days_in_month: int
    days_passed: int
    days_remaining: int
    daily_average: int
    daily_required: int
    expected_by_now: int


class WeightedForecastMetrics(ForecastMetrics):
    recent_average: int = 0
    older_average: int = 0
    recent_days_count: int = 0
    older_days_count: int = 0


class ForecastChartPoint(FrozenSchema):
    day: int
    plan: int
    actual: Optional[int] = None
    forecast: Optional[int] = None


class DailySales(BaseSchema):
    day: int = Field(..., ge=1, le=31)
    sales: Decimal = Field(default=Decimal("0"))


class SalesEntry(BaseSchema):
    report_date: date
    amount: Decimal = Field(default=Decimal("0"))


class MonthlyForecast(BaseSchema):
    metrics: ForecastMetrics
    chart_data: List[ForecastChartPoint]


class DepartmentForecast(BaseSchema):
    metrics: ForecastMetrics
    chart_data: List[ForecastChartPoint]
    team_size: int


class MonthlyForecastRequest(BaseSchema):
    current_sales: Decimal = Field(default=Decimal("0"))
    monthly_goal: Decimal = Field(default=Decimal("0"))
    daily_sales: Optional[List[DailySales]] = None
    as_of: Optional[date] = None


class WeightedForecastRequest(BaseSchema):
    daily_sales: List[SalesEntry] = Field(default_factory=list)
    monthly_goal: Decimal = Field(default=Decimal("0"))
    as_of: Optional[date] = None


class TeamMember(BaseSchema):
    id: str
    monthly_goal: Optional[Decimal] = Field(default=None, ge=0)


class DepartmentForecastRequest(BaseSchema):
    members: List[TeamMember] = Field(default_factory=list)
    entries: List[SalesEntry] = Field(default_factory=list)
    department_goal: Optional[Decimal] = Field(default=None, ge=0)
    as_of: Optional[date] = None
