"""Commission bracket lookup shared by every motivation and income calculation.

A grade table maps half-open turnover ranges ``[min, max)`` to a single flat
commission rate. The rate of the bracket that contains the turnover applies to
the *whole* amount; this is bracket membership, not a marginal blend across
brackets.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import ValidationError

from salespipe.analytics.presets import MOTIVATION_GRADE_PRESETS
from salespipe.schemas.motivation import MotivationGrade
from salespipe.shared.money import to_decimal

logger = logging.getLogger(__name__)

GradeLike = Union[MotivationGrade, Mapping[str, Any]]


class GradeTable:
    """Sorted, normalized grade table; only the last grade may be open-ended."""

    __slots__ = ("_grades",)

    def __init__(self, grades: Iterable[MotivationGrade]) -> None:
        # An empty table resolves against the presets.
        ordered = sorted(list(grades) or MOTIVATION_GRADE_PRESETS, key=lambda grade: grade.min_turnover)
        normalized: List[MotivationGrade] = []
        for index, grade in enumerate(ordered):
            is_last = index == len(ordered) - 1
            if grade.max_turnover is None and not is_last:
                # An open-ended grade in the middle would swallow every later bracket.
                grade = grade.model_copy(update={"max_turnover": ordered[index + 1].min_turnover})
            normalized.append(grade)
        self._grades: Tuple[MotivationGrade, ...] = tuple(normalized)

    @classmethod
    def from_config(cls, grades: Optional[Sequence[GradeLike]] = None) -> "GradeTable":
        parsed = _coerce_grades(grades)
        return cls(parsed if parsed else MOTIVATION_GRADE_PRESETS)

    @property
    def grades(self) -> Tuple[MotivationGrade, ...]:
        return self._grades

    def __len__(self) -> int:
        return len(self._grades)

    def resolve(self, turnover: object) -> Decimal:
        amount = to_decimal(turnover)
        for grade in self._grades:
            upper = grade.max_turnover
            if amount >= grade.min_turnover and (upper is None or amount < upper):
                return grade.commission_rate
        # Gaps in the table or turnover beyond every explicit upper bound.
        return self._grades[-1].commission_rate


def resolve_commission_rate(
    turnover: object, grades: Optional[Union[GradeTable, Sequence[GradeLike]]] = None
) -> Decimal:
    table = grades if isinstance(grades, GradeTable) else GradeTable.from_config(grades)
    return table.resolve(turnover)


def _coerce_grades(grades: Optional[Sequence[GradeLike]]) -> Optional[List[MotivationGrade]]:
    if not grades:
        return None
    parsed: List[MotivationGrade] = []
    try:
        for grade in grades:
            if isinstance(grade, MotivationGrade):
                parsed.append(grade)
            else:
                parsed.append(MotivationGrade.model_validate(grade))
    except (ValidationError, TypeError) as exc:
        logger.warning("Malformed motivation grade table, using presets: %s", exc)
        return None
    return parsed
