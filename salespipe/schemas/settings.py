from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from pydantic import ConfigDict, Field

from salespipe.schemas.motivation import MotivationGrade
from salespipe.shared.base import BaseSchema, DecimalNumber, FrozenSchema, to_camel


class ConversionBenchmarkConfig(FrozenSchema):
    """Minimum acceptable conversion, in percent, for each stage transition."""

    booked_to_meeting1: DecimalNumber = Field(default=Decimal("60"), ge=0, le=100)
    meeting1_to_meeting2: DecimalNumber = Field(default=Decimal("50"), ge=0, le=100)
    meeting2_to_contract: DecimalNumber = Field(default=Decimal("40"), ge=0, le=100)
    contract_to_push: DecimalNumber = Field(default=Decimal("60"), ge=0, le=100)
    push_to_deal: DecimalNumber = Field(default=Decimal("70"), ge=0, le=100)


class ConversionBenchmarkOverrides(BaseSchema):
    # Unknown keys are rejected rather than ignored.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    booked_to_meeting1: Optional[DecimalNumber] = Field(default=None, ge=0, le=100)
    meeting1_to_meeting2: Optional[DecimalNumber] = Field(default=None, ge=0, le=100)
    meeting2_to_contract: Optional[DecimalNumber] = Field(default=None, ge=0, le=100)
    contract_to_push: Optional[DecimalNumber] = Field(default=None, ge=0, le=100)
    push_to_deal: Optional[DecimalNumber] = Field(default=None, ge=0, le=100)


class EffectiveSettings(FrozenSchema):
    conversion_benchmarks: ConversionBenchmarkConfig
    north_star_target: DecimalNumber
    sales_per_deal: DecimalNumber
    forecast_weight: DecimalNumber
    motivation_grades: List[MotivationGrade]
    department_goal: Optional[DecimalNumber] = None


class SettingsPayload(BaseSchema):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    conversion_benchmarks: Optional[ConversionBenchmarkOverrides] = None
    north_star_target: Optional[Decimal] = Field(default=None, ge=0, le=100)
    sales_per_deal: Optional[Decimal] = Field(default=None, ge=0)
    forecast_weight: Optional[Decimal] = Field(default=None, ge=0, le=1)
    motivation_grades: Optional[List[MotivationGrade]] = None
    department_goal: Optional[Decimal] = Field(default=None, ge=0)
