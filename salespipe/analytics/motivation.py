from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence, Union

from salespipe.analytics.commission import GradeLike, GradeTable
from salespipe.analytics.presets import DEFAULT_FORECAST_WEIGHT
from salespipe.analytics.sales_forecast import project_month
from salespipe.schemas.motivation import (
    IncomeForecast,
    IncomeForecastIncome,
    IncomeForecastRates,
    IncomeForecastSales,
    MotivationCalculationResult,
)
from salespipe.shared.money import round_money, to_decimal, to_money, to_rate
from salespipe.shared.time import Now

GradesArg = Optional[Union[GradeTable, Sequence[GradeLike]]]


def _grade_table(grades: GradesArg) -> GradeTable:
    return grades if isinstance(grades, GradeTable) else GradeTable.from_config(grades)


def calculate_motivation(
    fact_turnover: object,
    hot_turnover: object,
    grades: GradesArg = None,
    forecast_weight: object = DEFAULT_FORECAST_WEIGHT,
) -> MotivationCalculationResult:
    """Commission on closed turnover and on closed plus damped hot turnover.

    Hot (open, high-confidence) turnover only counts at ``forecast_weight``. The
    fact and forecast rates are resolved independently, so ``potential_gain``
    compares two scenarios rather than giving a marginal delta.
    """
    table = _grade_table(grades)
    fact = to_decimal(fact_turnover)
    hot = to_decimal(hot_turnover)
    weight = DEFAULT_FORECAST_WEIGHT if forecast_weight is None else to_decimal(forecast_weight)

    forecast_turnover = hot * weight
    total_potential_turnover = fact + forecast_turnover

    fact_rate = table.resolve(fact)
    forecast_rate = table.resolve(total_potential_turnover)

    salary_fact = fact * fact_rate
    salary_forecast = total_potential_turnover * forecast_rate
    potential_gain = salary_forecast - salary_fact

    return MotivationCalculationResult(
        fact_turnover=to_money(fact),
        hot_turnover=to_money(hot),
        forecast_turnover=to_money(forecast_turnover),
        total_potential_turnover=to_money(total_potential_turnover),
        fact_rate=to_rate(fact_rate),
        forecast_rate=to_rate(forecast_rate),
        salary_fact=to_money(salary_fact),
        salary_forecast=to_money(salary_forecast),
        potential_gain=to_money(potential_gain),
    )


def calculate_income_forecast(
    current_sales: object,
    monthly_goal: object,
    focus_deals_amount: object,
    now: Now,
    grades: GradesArg = None,
) -> IncomeForecast:
    """Current, projected and optimistic income for one salesperson.

    ``projected`` is the linear month-end run-rate in whole units, so its bracket
    matches the reported figure; ``optimistic`` adds the open focus deals on top
    of it. Each scenario resolves its own bracket.
    """
    table = _grade_table(grades)
    current = to_decimal(current_sales)
    goal = to_decimal(monthly_goal)
    focus = to_decimal(focus_deals_amount)

    projected = round_money(project_month(current, goal, now).projected)
    optimistic = projected + focus

    current_rate = table.resolve(current)
    projected_rate = table.resolve(projected)
    optimistic_rate = table.resolve(optimistic)

    current_income = current * current_rate
    projected_income = projected * projected_rate
    optimistic_income = optimistic * optimistic_rate

    return IncomeForecast(
        sales=IncomeForecastSales(
            current=to_money(current),
            projected=to_money(projected),
            optimistic=to_money(optimistic),
            goal=to_money(goal),
            focus_deals_amount=to_money(focus),
        ),
        rates=IncomeForecastRates(
            current=to_rate(current_rate),
            projected=to_rate(projected_rate),
            optimistic=to_rate(optimistic_rate),
        ),
        income=IncomeForecastIncome(
            current=to_money(current_income),
            projected=to_money(projected_income),
            optimistic=to_money(optimistic_income),
            projected_growth=to_money(projected_income - current_income),
            potential_growth=to_money(optimistic_income - projected_income),
        ),
        grades=list(table.grades),
    )


def commission_for(turnover: object, grades: GradesArg = None) -> Decimal:
    amount = to_decimal(turnover)
    return amount * _grade_table(grades).resolve(amount)
