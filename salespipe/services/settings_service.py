"""Effective configuration for the calculators.

Stored values come from the environment (see ``core.config.Settings``) and are
parsed leniently: anything missing or malformed falls back to the built-in
presets, each concern independently. Per-request overrides are layered on top.
"""

from __future__ import annotations

import json
import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence

from pydantic import TypeAdapter, ValidationError

from salespipe.analytics.presets import (
    DEFAULT_CONVERSION_BENCHMARKS,
    DEFAULT_FORECAST_WEIGHT,
    DEFAULT_NORTH_STAR_TARGET,
    DEFAULT_SALES_PER_DEAL,
    MOTIVATION_GRADE_PRESETS,
)
from salespipe.core.config import Settings
from salespipe.core.errors import BadRequestError
from salespipe.schemas.motivation import MotivationGrade
from salespipe.schemas.settings import (
    ConversionBenchmarkConfig,
    ConversionBenchmarkOverrides,
    EffectiveSettings,
    SettingsPayload,
)

logger = logging.getLogger(__name__)

GRADE_TABLE_RULES = (
    "Motivation grades must start at 0, be sorted ascending, and the last grade must have no upper limit"
)

_GRADE_LIST = TypeAdapter(List[MotivationGrade])


def _load_json(raw: Any) -> Any:
    if not isinstance(raw, (str, bytes)):
        return raw
    text = raw.strip()
    if not text:
        return None
    try:
        return json.loads(text, parse_float=Decimal)
    except ValueError as exc:
        logger.warning("Stored setting is not valid JSON: %s", exc)
        return None


def parse_conversion_benchmarks(raw: Any) -> Optional[Dict[str, Decimal]]:
    """Partial benchmark overrides keyed by field name, or ``None`` if unusable."""
    data = _load_json(raw)
    if not isinstance(data, dict):
        return None
    try:
        overrides = ConversionBenchmarkOverrides.model_validate(data)
    except ValidationError as exc:
        logger.warning("Ignoring invalid conversion benchmarks: %s", exc)
        return None
    return overrides.model_dump(exclude_none=True)


def is_valid_grade_table(grades: Sequence[MotivationGrade]) -> bool:
    if not grades:
        return False
    if grades[0].min_turnover != 0:
        return False
    for previous, current in zip(grades, grades[1:]):
        if current.min_turnover < previous.min_turnover:
            return False
    return grades[-1].max_turnover is None


def parse_motivation_grades(raw: Any) -> Optional[List[MotivationGrade]]:
    """Validated grade table, accepting both a bare list and ``{"grades": [...]}``."""
    data = _load_json(raw)
    if isinstance(data, dict) and "grades" in data:
        data = data["grades"]
    if not isinstance(data, list):
        return None
    try:
        grades = _GRADE_LIST.validate_python(data)
    except ValidationError as exc:
        logger.warning("Ignoring invalid motivation grades: %s", exc)
        return None
    if not is_valid_grade_table(grades):
        logger.warning("Ignoring motivation grades: %s", GRADE_TABLE_RULES)
        return None
    return grades


def _first_set(*values: Optional[Decimal]) -> Optional[Decimal]:
    for value in values:
        if value is not None:
            return value
    return None


class SettingsService:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def stored_benchmarks(self) -> Dict[str, Decimal]:
        return parse_conversion_benchmarks(self.settings.conversion_benchmarks) or {}

    def stored_grades(self) -> Optional[List[MotivationGrade]]:
        return parse_motivation_grades(self.settings.motivation_grades)

    def resolve_benchmarks(
        self, overrides: Optional[ConversionBenchmarkOverrides] = None
    ) -> ConversionBenchmarkConfig:
        values = DEFAULT_CONVERSION_BENCHMARKS.model_dump()
        values.update(self.stored_benchmarks())
        if overrides is not None:
            values.update(overrides.model_dump(exclude_none=True))
        return ConversionBenchmarkConfig.model_validate(values)

    def resolve_grades(self, grades: Optional[Sequence[MotivationGrade]] = None) -> List[MotivationGrade]:
        if grades:
            return list(grades)
        return self.stored_grades() or list(MOTIVATION_GRADE_PRESETS)

    def get_effective_settings(self, overrides: Optional[SettingsPayload] = None) -> EffectiveSettings:
        overrides = overrides or SettingsPayload()
        grades = overrides.motivation_grades
        if grades and not is_valid_grade_table(grades):
            logger.warning("Ignoring motivation grade override: %s", GRADE_TABLE_RULES)
            grades = None

        return EffectiveSettings(
            conversion_benchmarks=self.resolve_benchmarks(overrides.conversion_benchmarks),
            north_star_target=_first_set(
                overrides.north_star_target, self.settings.north_star_target, DEFAULT_NORTH_STAR_TARGET
            ),
            sales_per_deal=_first_set(
                overrides.sales_per_deal, self.settings.sales_per_deal, DEFAULT_SALES_PER_DEAL
            ),
            forecast_weight=_first_set(
                overrides.forecast_weight, self.settings.forecast_weight, DEFAULT_FORECAST_WEIGHT
            ),
            motivation_grades=self.resolve_grades(grades),
            department_goal=_first_set(overrides.department_goal, self.settings.department_goal),
        )

    def preview(self, payload: SettingsPayload) -> EffectiveSettings:
        """Effective settings after applying ``payload``; rejects an invalid grade table."""
        if payload.motivation_grades is not None and not is_valid_grade_table(payload.motivation_grades):
            raise BadRequestError(
                GRADE_TABLE_RULES,
                details={"field": "motivationGrades"},
            )
        return self.get_effective_settings(payload)
