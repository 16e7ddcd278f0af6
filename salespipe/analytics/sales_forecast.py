"""Month-end sales projection from the current run-rate.

Every function takes ``now`` explicitly (a date, a datetime, or a zero-argument
clock), so results only depend on their arguments.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, NamedTuple, Optional

from salespipe.schemas.forecast import ForecastMetrics, SalesEntry, WeightedForecastMetrics
from salespipe.shared.money import HUNDRED, ZERO, sum_decimals, to_decimal, to_money, to_whole
from salespipe.shared.time import Now, days_in_month, resolve_today

PACING_TOLERANCE = Decimal("-5")
RECENT_DAYS = 7
RECENT_WEIGHT = Decimal("0.7")
OLDER_WEIGHT = Decimal("0.3")


class MonthProjection(NamedTuple):
    current: Decimal
    goal: Decimal
    days_in_month: int
    days_passed: int
    days_remaining: int
    daily_average: Decimal
    projected: Decimal


class PaceMetrics(NamedTuple):
    completion: Decimal
    expected_by_now: Decimal
    pacing: Decimal
    is_pacing_good: bool
    daily_required: Decimal


def project_month(current_sales: object, monthly_goal: object, now: Now) -> MonthProjection:
    today = resolve_today(now)
    current = to_decimal(current_sales)
    goal = to_decimal(monthly_goal)
    month_days = days_in_month(today)
    days_passed = today.day
    daily_average = current / days_passed if days_passed > 0 else ZERO
    return MonthProjection(
        current=current,
        goal=goal,
        days_in_month=month_days,
        days_passed=days_passed,
        days_remaining=month_days - days_passed,
        daily_average=daily_average,
        projected=daily_average * month_days,
    )


def _pace(
    current: Decimal,
    goal: Decimal,
    projected: Decimal,
    month_days: int,
    days_passed: int,
    days_remaining: int,
) -> PaceMetrics:
    completion = projected / goal * HUNDRED if goal > ZERO else ZERO
    expected_by_now = goal / month_days * days_passed
    pacing = (current - expected_by_now) / expected_by_now * HUNDRED if expected_by_now > ZERO else ZERO
    daily_required = (goal - current) / days_remaining if days_remaining > 0 else ZERO
    return PaceMetrics(
        completion=completion,
        expected_by_now=expected_by_now,
        pacing=pacing,
        is_pacing_good=pacing >= PACING_TOLERANCE,
        daily_required=daily_required,
    )


def calculate_monthly_forecast(
    current_sales: object, monthly_goal: object, now: Now
) -> ForecastMetrics:
    projection = project_month(current_sales, monthly_goal, now)
    pace = _pace(
        projection.current,
        projection.goal,
        projection.projected,
        projection.days_in_month,
        projection.days_passed,
        projection.days_remaining,
    )
    return ForecastMetrics(
        current=to_money(projection.current),
        goal=to_money(projection.goal),
        projected=to_money(projection.projected),
        completion=to_whole(pace.completion),
        pacing=to_whole(pace.pacing),
        is_pacing_good=pace.is_pacing_good,
        days_in_month=projection.days_in_month,
        days_passed=projection.days_passed,
        days_remaining=projection.days_remaining,
        daily_average=to_money(projection.daily_average),
        daily_required=to_money(pace.daily_required),
        expected_by_now=to_money(pace.expected_by_now),
    )


def calculate_weighted_forecast(
    daily_sales: Iterable[SalesEntry], monthly_goal: object, now: Now
) -> WeightedForecastMetrics:
    """Projection where the last seven observed days weigh 70% of the daily rate.

    Falls back to the plain linear forecast when nothing has been observed yet.
    """
    today = resolve_today(now)
    entries = sorted(daily_sales, key=lambda entry: entry.report_date)
    total = sum_decimals(entry.amount for entry in entries)

    if not entries:
        linear = calculate_monthly_forecast(total, monthly_goal, today)
        return WeightedForecastMetrics(**linear.model_dump())

    recent_count = min(RECENT_DAYS, len(entries))
    recent = entries[-recent_count:]
    older = entries[:-recent_count]

    recent_average = sum_decimals(entry.amount for entry in recent) / len(recent)
    older_average: Optional[Decimal] = (
        sum_decimals(entry.amount for entry in older) / len(older) if older else None
    )
    if older_average is None:
        weighted_average = recent_average
        older_average = recent_average
    else:
        weighted_average = recent_average * RECENT_WEIGHT + older_average * OLDER_WEIGHT

    goal = to_decimal(monthly_goal)
    month_days = days_in_month(today)
    days_passed = today.day
    days_remaining = month_days - days_passed
    projected = total + weighted_average * days_remaining
    pace = _pace(total, goal, projected, month_days, days_passed, days_remaining)

    return WeightedForecastMetrics(
        current=to_money(total),
        goal=to_money(goal),
        projected=to_money(projected),
        completion=to_whole(pace.completion),
        pacing=to_whole(pace.pacing),
        is_pacing_good=pace.is_pacing_good,
        days_in_month=month_days,
        days_passed=days_passed,
        days_remaining=days_remaining,
        daily_average=to_money(weighted_average),
        daily_required=to_money(pace.daily_required),
        expected_by_now=to_money(pace.expected_by_now),
        recent_average=to_money(recent_average),
        older_average=to_money(older_average),
        recent_days_count=len(recent),
        older_days_count=len(older),
    )
