from __future__ import annotations

from decimal import Decimal
from typing import Dict, List, NamedTuple, Tuple

from salespipe.schemas.motivation import MotivationGrade
from salespipe.schemas.settings import ConversionBenchmarkConfig


class StageMeta(NamedTuple):
    id: str
    label: str
    benchmark_key: str


# Fixed pipeline order; the entry stage has no inbound transition.
FUNNEL_STAGES: Tuple[StageMeta, ...] = (
    StageMeta("booked", "Booked", ""),
    StageMeta("meeting1", "1st meeting", "booked_to_meeting1"),
    StageMeta("meeting2", "2nd meeting", "meeting1_to_meeting2"),
    StageMeta("contractReview", "Contract review", "meeting2_to_contract"),
    StageMeta("push", "Final push", "contract_to_push"),
    StageMeta("deal", "Paid deal", "push_to_deal"),
)

STAGE_IDS: Tuple[str, ...] = tuple(stage.id for stage in FUNNEL_STAGES)
REFUSAL_STAGE_IDS: Tuple[str, ...] = STAGE_IDS[:-1]
_STAGES_BY_ID: Dict[str, StageMeta] = {stage.id: stage for stage in FUNNEL_STAGES}

ENTRY_STAGE_BENCHMARK = Decimal("100")
DEFAULT_CONVERSION_BENCHMARKS = ConversionBenchmarkConfig()
DEFAULT_NORTH_STAR_TARGET = Decimal("5")
DEFAULT_SALES_PER_DEAL = Decimal("100000")
DEFAULT_FORECAST_WEIGHT = Decimal("0.5")
RED_ZONE_TOLERANCE = Decimal("10")

MOTIVATION_GRADE_PRESETS: List[MotivationGrade] = [
    MotivationGrade(min_turnover=Decimal("0"), max_turnover=Decimal("600000"), commission_rate=Decimal("0")),
    MotivationGrade(
        min_turnover=Decimal("600000"), max_turnover=Decimal("1000000"), commission_rate=Decimal("0.05")
    ),
    MotivationGrade(
        min_turnover=Decimal("1000000"), max_turnover=Decimal("2000000"), commission_rate=Decimal("0.07")
    ),
    MotivationGrade(
        min_turnover=Decimal("2000000"), max_turnover=Decimal("3500000"), commission_rate=Decimal("0.08")
    ),
    MotivationGrade(
        min_turnover=Decimal("3500000"), max_turnover=Decimal("4000000"), commission_rate=Decimal("0.09")
    ),
    MotivationGrade(min_turnover=Decimal("4000000"), max_turnover=None, commission_rate=Decimal("0.1")),
]

RED_ZONE_RECOMMENDATIONS: Dict[str, str] = {
    "meeting1": "Confirm bookings and send reminders 2-3 hours before the slot.",
    "meeting2": "Close the first meeting with a fixed value statement and a calendar invite for the next step.",
    "contractReview": "Qualify budget and decision makers before the second meeting ends.",
    "push": "Schedule the follow-up during the contract review instead of after it.",
    "deal": "Work through objections after the contract; add deadlines and limited offers.",
}


def stage_label(stage_id: str) -> str:
    meta = _STAGES_BY_ID.get(stage_id)
    return meta.label if meta else stage_id


def stage_benchmark(stage_id: str, benchmarks: ConversionBenchmarkConfig) -> Decimal:
    meta = _STAGES_BY_ID.get(stage_id)
    if meta is None or not meta.benchmark_key:
        return ENTRY_STAGE_BENCHMARK
    return getattr(benchmarks, meta.benchmark_key)
