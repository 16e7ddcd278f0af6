from __future__ import annotations

from decimal import Decimal
from typing import List, Optional, Sequence

from salespipe.analytics.presets import (
    DEFAULT_CONVERSION_BENCHMARKS,
    DEFAULT_NORTH_STAR_TARGET,
    DEFAULT_SALES_PER_DEAL,
    ENTRY_STAGE_BENCHMARK,
    FUNNEL_STAGES,
    RED_ZONE_RECOMMENDATIONS,
    RED_ZONE_TOLERANCE,
    stage_benchmark,
    stage_label,
)
from salespipe.analytics.side_flow import calculate_side_flow
from salespipe.schemas.funnel import (
    ConversionsResult,
    FullFunnelResult,
    FunnelStage,
    FunnelTotals,
    ManagerStats,
    NorthStarKpi,
    RedZone,
    StageConversion,
)
from salespipe.schemas.settings import ConversionBenchmarkConfig
from salespipe.shared.money import (
    HUNDRED,
    ZERO,
    percent,
    round_percent,
    safe_divide,
    to_decimal,
    to_money,
    to_percent,
    to_whole,
)

ENTRY_CONVERSION = Decimal("100")
TREND_UP_PROGRESS = Decimal("80")
TREND_FLAT_PROGRESS = Decimal("50")


def compute_conversions(
    totals: FunnelTotals, benchmarks: Optional[ConversionBenchmarkConfig] = None
) -> ConversionsResult:
    config = benchmarks or DEFAULT_CONVERSION_BENCHMARKS
    values = totals.stage_values()

    entry = FUNNEL_STAGES[0]
    stages: List[StageConversion] = [
        StageConversion(
            id=entry.id,
            value=values[entry.id],
            from_value=values[entry.id],
            conversion=ENTRY_CONVERSION,
            benchmark=ENTRY_STAGE_BENCHMARK,
            is_red_zone=False,
        )
    ]
    for previous, stage in zip(FUNNEL_STAGES, FUNNEL_STAGES[1:]):
        conversion = percent(values[stage.id], values[previous.id])
        benchmark = stage_benchmark(stage.id, config)
        stages.append(
            StageConversion(
                id=stage.id,
                value=values[stage.id],
                from_value=values[previous.id],
                conversion=conversion,
                benchmark=benchmark,
                is_red_zone=conversion < benchmark,
            )
        )

    # Fall back to bookings when no first meeting happened, instead of 0/0.
    north_star_base = values["meeting1"] if values["meeting1"] > 0 else values["booked"]
    return ConversionsResult(
        stages=stages,
        north_star=percent(values["deal"], north_star_base),
        total_conversion=percent(values["deal"], values["booked"]),
    )


def resolve_north_star_status(value: Decimal, target: Optional[object] = None) -> NorthStarKpi:
    goal = DEFAULT_NORTH_STAR_TARGET if target is None else to_decimal(target)
    return NorthStarKpi(
        value=to_percent(value),
        target=to_percent(goal),
        delta=to_percent(value - goal),
        is_on_track=value >= goal,
    )


def calculate_full_funnel(
    totals: FunnelTotals,
    benchmarks: Optional[ConversionBenchmarkConfig] = None,
    north_star_target: Optional[object] = None,
) -> FullFunnelResult:
    conversions = compute_conversions(totals, benchmarks)
    funnel = [
        FunnelStage(
            id=stage.id,
            label=stage_label(stage.id),
            value=stage.value,
            conversion=to_percent(stage.conversion),
            benchmark=to_percent(stage.benchmark),
            is_red_zone=stage.is_red_zone,
        )
        for stage in conversions.stages
    ]
    side_flow = calculate_side_flow(
        totals.stage_values(),
        refusals=totals.refusals,
        refusal_by_stage=totals.refusal_by_stage,
        warming=totals.warming,
    )
    return FullFunnelResult(
        funnel=funnel,
        side_flow=side_flow,
        north_star_kpi=resolve_north_star_status(conversions.north_star, north_star_target),
        total_conversion=to_percent(conversions.total_conversion),
    )


def analyze_red_zones(stages: Sequence[FunnelStage]) -> List[RedZone]:
    """Red stages in pipeline order; more than 10 points under benchmark is critical."""
    zones: List[RedZone] = []
    for stage in stages:
        if not stage.is_red_zone:
            continue
        conversion = to_decimal(stage.conversion)
        benchmark = to_decimal(stage.benchmark)
        severity = "critical" if conversion < benchmark - RED_ZONE_TOLERANCE else "warning"
        zones.append(
            RedZone(
                stage_id=stage.id,
                label=stage.label,
                severity=severity,
                conversion=stage.conversion,
                benchmark=stage.benchmark,
                gap=to_percent(round_percent(benchmark - conversion)),
                recommendation=RED_ZONE_RECOMMENDATIONS.get(stage.id, ""),
            )
        )
    return zones


def calculate_manager_stats(
    totals: FunnelTotals,
    plan_sales: object = ZERO,
    plan_deals: Optional[int] = None,
    sales_per_deal: object = DEFAULT_SALES_PER_DEAL,
    benchmarks: Optional[ConversionBenchmarkConfig] = None,
) -> ManagerStats:
    conversions = compute_conversions(totals, benchmarks)
    by_id = {stage.id: stage.conversion for stage in conversions.stages}
    plan = to_decimal(plan_sales)
    sales = to_decimal(totals.sales)

    if not plan_deals:
        per_deal = to_decimal(sales_per_deal)
        plan_deals = max(1, to_whole(safe_divide(plan, per_deal)))

    expected_activity = HUNDRED if totals.booked > 0 else ZERO
    meeting_ratio = safe_divide(totals.meeting1 * HUNDRED, max(1, totals.booked))
    actual_activity = min(HUNDRED, Decimal(to_whole(meeting_ratio)))
    activity_score = to_whole((expected_activity + actual_activity) / 2)

    progress = sales / plan * HUNDRED if plan > ZERO else ZERO
    if progress >= TREND_UP_PROGRESS:
        trend = "up"
    elif progress >= TREND_FLAT_PROGRESS:
        trend = "flat"
    else:
        trend = "down"

    return ManagerStats(
        booked=totals.booked,
        meeting1=totals.meeting1,
        meeting2=totals.meeting2,
        contract_review=totals.contract_review,
        push=totals.push,
        deal=totals.deal,
        sales_amount=to_money(sales),
        booked_to_meeting1=to_percent(by_id["meeting1"]),
        meeting1_to_meeting2=to_percent(by_id["meeting2"]),
        meeting2_to_contract=to_percent(by_id["contractReview"]),
        contract_to_push=to_percent(by_id["push"]),
        push_to_deal=to_percent(by_id["deal"]),
        north_star=to_percent(conversions.north_star),
        total_conversion=to_percent(conversions.total_conversion),
        plan_sales=to_money(plan),
        plan_deals=plan_deals,
        activity_score=activity_score,
        trend=trend,
    )
