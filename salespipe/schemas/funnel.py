from __future__ import annotations

from decimal import Decimal
from typing import Dict, List, Literal, Optional

from pydantic import Field

from salespipe.schemas.settings import ConversionBenchmarkOverrides
from salespipe.shared.base import BaseSchema, FrozenSchema

StageId = Literal["booked", "meeting1", "meeting2", "contractReview", "push", "deal"]
RefusalStageId = Literal["booked", "meeting1", "meeting2", "contractReview", "push"]


class FunnelTotals(BaseSchema):
    booked: int = 0
    meeting1: int = 0
    meeting2: int = 0
    contract_review: int = 0
    push: int = 0
    deal: int = 0
    sales: Optional[Decimal] = None
    refusals: Optional[int] = None
    warming: Optional[int] = None
    refusal_by_stage: Optional[Dict[RefusalStageId, int]] = None

    def stage_values(self) -> Dict[str, int]:
        return {
            "booked": self.booked or 0,
            "meeting1": self.meeting1 or 0,
            "meeting2": self.meeting2 or 0,
            "contractReview": self.contract_review or 0,
            "push": self.push or 0,
            "deal": self.deal or 0,
        }


class StageConversion(FrozenSchema):
    id: StageId
    value: int
    from_value: int
    conversion: Decimal
    benchmark: Decimal
    is_red_zone: bool


class ConversionsResult(FrozenSchema):
    stages: List[StageConversion]
    north_star: Decimal
    total_conversion: Decimal


class FunnelStage(FrozenSchema):
    id: StageId
    label: str
    value: int
    conversion: float
    benchmark: float
    is_red_zone: bool


class RefusalBreakdown(FrozenSchema):
    stage_id: RefusalStageId
    label: str
    count: int
    rate: float


class RefusalSummary(FrozenSchema):
    total: int
    rate_from_first_meeting: float
    by_stage: List[RefusalBreakdown]


class WarmingSummary(FrozenSchema):
    count: int


class SideFlow(FrozenSchema):
    refusals: RefusalSummary
    warming: WarmingSummary


class NorthStarKpi(FrozenSchema):
    value: float
    target: float
    delta: float
    is_on_track: bool


class FullFunnelResult(FrozenSchema):
    funnel: List[FunnelStage]
    side_flow: SideFlow
    north_star_kpi: NorthStarKpi
    total_conversion: float


class RedZone(FrozenSchema):
    stage_id: StageId
    label: str
    severity: Literal["critical", "warning"]
    conversion: float
    benchmark: float
    gap: float
    recommendation: str


class FunnelAnalysis(BaseSchema):
    funnel: List[FunnelStage]
    side_flow: SideFlow
    north_star_kpi: NorthStarKpi
    total_conversion: float
    red_zones: List[RedZone]


class ManagerStats(BaseSchema):
    booked: int
    meeting1: int
    meeting2: int
    contract_review: int
    push: int
    deal: int
    sales_amount: int
    booked_to_meeting1: float
    meeting1_to_meeting2: float
    meeting2_to_contract: float
    contract_to_push: float
    push_to_deal: float
    north_star: float
    total_conversion: float
    plan_sales: int
    plan_deals: int
    activity_score: int
    trend: Literal["up", "flat", "down"]


class FunnelRequest(BaseSchema):
    totals: FunnelTotals
    benchmarks: Optional[ConversionBenchmarkOverrides] = None
    north_star_target: Optional[Decimal] = Field(default=None, ge=0, le=100)


class ManagerStatsRequest(BaseSchema):
    totals: FunnelTotals
    plan_sales: Decimal = Field(default=Decimal("0"), ge=0)
    plan_deals: Optional[int] = Field(default=None, ge=0)
    benchmarks: Optional[ConversionBenchmarkOverrides] = None
