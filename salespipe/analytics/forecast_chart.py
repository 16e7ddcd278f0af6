from __future__ import annotations

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from salespipe.analytics.sales_forecast import project_month
from salespipe.schemas.forecast import DailySales, ForecastChartPoint, SalesEntry
from salespipe.shared.money import ZERO, to_decimal, to_money
from salespipe.shared.time import Now, resolve_today


def generate_forecast_chart_data(
    current_sales: object,
    monthly_goal: object,
    now: Now,
    daily_sales: Optional[Sequence[DailySales]] = None,
) -> List[ForecastChartPoint]:
    projection = project_month(current_sales, monthly_goal, now)
    current_day = projection.days_passed
    daily_plan = projection.goal / projection.days_in_month

    observed: Dict[int, Decimal] = defaultdict(lambda: ZERO)
    for item in daily_sales or []:
        observed[item.day] += to_decimal(item.sales)

    points: List[ForecastChartPoint] = []
    cumulative = ZERO
    for day in range(1, projection.days_in_month + 1):
        plan = to_money(daily_plan * day)
        if day <= current_day:
            if observed:
                cumulative += observed.get(day, ZERO)
            else:
                cumulative = projection.daily_average * day
            points.append(ForecastChartPoint(day=day, plan=plan, actual=to_money(cumulative)))
        else:
            forecast = projection.current + projection.daily_average * (day - current_day)
            points.append(ForecastChartPoint(day=day, plan=plan, forecast=to_money(forecast)))
    return points


def aggregate_daily_sales(entries: Iterable[SalesEntry], now: Now) -> Tuple[Decimal, List[DailySales]]:
    """Group dated sales of the current month (up to today) into per-day totals."""
    today = resolve_today(now)
    buckets: Dict[int, Decimal] = defaultdict(lambda: ZERO)
    for entry in entries:
        if not _in_current_month(entry.report_date, today):
            continue
        buckets[entry.report_date.day] += to_decimal(entry.amount)

    total = sum(buckets.values(), ZERO)
    daily = [DailySales(day=day, sales=buckets[day]) for day in sorted(buckets.keys())]
    return total, daily


def _in_current_month(value: date, today: date) -> bool:
    return value.year == today.year and value.month == today.month and value <= today
