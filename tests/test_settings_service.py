from __future__ import annotations

from decimal import Decimal

import pytest

from salespipe.core.config import Settings
from salespipe.core.errors import BadRequestError
from salespipe.schemas.motivation import MotivationGrade
from salespipe.schemas.settings import ConversionBenchmarkOverrides, SettingsPayload
from salespipe.services.settings_service import (
    SettingsService,
    is_valid_grade_table,
    parse_conversion_benchmarks,
    parse_motivation_grades,
)


def _service(**env) -> SettingsService:
    return SettingsService(settings=Settings(_env_file=None, **env))


def test_defaults(settings_service):
    effective = settings_service.get_effective_settings()
    assert effective.conversion_benchmarks.push_to_deal == 70
    assert effective.north_star_target == 5
    assert effective.sales_per_deal == 100000
    assert effective.forecast_weight == Decimal("0.5")
    assert len(effective.motivation_grades) == 6
    assert effective.department_goal is None


def test_parse_conversion_benchmarks():
    assert parse_conversion_benchmarks('{"pushToDeal": 55}') == {"push_to_deal": Decimal("55")}
    assert parse_conversion_benchmarks('{"push_to_deal": 55.5}') == {"push_to_deal": Decimal("55.5")}
    assert parse_conversion_benchmarks('{"unknownKey": 1}') is None
    assert parse_conversion_benchmarks('{"pushToDeal": 150}') is None
    assert parse_conversion_benchmarks("not json") is None
    assert parse_conversion_benchmarks("[1, 2]") is None
    assert parse_conversion_benchmarks(None) is None


def test_parse_motivation_grades_formats():
    flat = '[{"minTurnover": 0, "maxTurnover": null, "commissionRate": 0.03}]'
    legacy = '{"grades": [{"minTurnover": 0, "maxTurnover": null, "commissionRate": 0.03}]}'
    for raw in (flat, legacy):
        grades = parse_motivation_grades(raw)
        assert grades is not None
        assert grades[0].commission_rate == Decimal("0.03")


def test_parse_motivation_grades_rejects_broken_tables():
    assert parse_motivation_grades("[]") is None
    assert parse_motivation_grades('[{"minTurnover": 10, "maxTurnover": null, "commissionRate": 0.1}]') is None
    assert (
        parse_motivation_grades(
            '[{"minTurnover": 0, "maxTurnover": 100, "commissionRate": 0.1},'
            ' {"minTurnover": 100, "maxTurnover": 200, "commissionRate": 0.2}]'
        )
        is None
    )
    assert parse_motivation_grades('[{"minTurnover": 0, "commissionRate": 2}]') is None
    assert parse_motivation_grades('{"other": []}') is None


def test_grade_table_rules():
    grades = [
        MotivationGrade(min_turnover=0, max_turnover=100, commission_rate=Decimal("0.01")),
        MotivationGrade(min_turnover=100, max_turnover=None, commission_rate=Decimal("0.02")),
    ]
    assert is_valid_grade_table(grades)
    assert not is_valid_grade_table(list(reversed(grades)))
    assert not is_valid_grade_table([])


def test_stored_settings_merge_onto_presets():
    service = _service(
        CONVERSION_BENCHMARKS='{"bookedToMeeting1": 65}',
        MOTIVATION_GRADES='[{"minTurnover": 0, "maxTurnover": null, "commissionRate": 0.04}]',
        NORTH_STAR_TARGET="8",
        DEPARTMENT_GOAL="900000",
    )
    effective = service.get_effective_settings()
    assert effective.conversion_benchmarks.booked_to_meeting1 == 65
    assert effective.conversion_benchmarks.meeting1_to_meeting2 == 50
    assert [grade.commission_rate for grade in effective.motivation_grades] == [Decimal("0.04")]
    assert effective.north_star_target == 8
    assert effective.department_goal == 900000


def test_invalid_stored_settings_fall_back_independently():
    service = _service(CONVERSION_BENCHMARKS="{broken", MOTIVATION_GRADES='{"grades": "nope"}', SALES_PER_DEAL="50000")
    effective = service.get_effective_settings()
    assert effective.conversion_benchmarks.booked_to_meeting1 == 60
    assert len(effective.motivation_grades) == 6
    assert effective.sales_per_deal == 50000


def test_request_overrides_win_over_stored_values():
    service = _service(CONVERSION_BENCHMARKS='{"pushToDeal": 65}', FORECAST_WEIGHT="0.4")
    effective = service.get_effective_settings(
        SettingsPayload(
            conversion_benchmarks=ConversionBenchmarkOverrides(push_to_deal=Decimal("45")),
            forecast_weight=Decimal("0.8"),
        )
    )
    assert effective.conversion_benchmarks.push_to_deal == 45
    assert effective.forecast_weight == Decimal("0.8")


def test_preview_rejects_invalid_grade_table(settings_service):
    payload = SettingsPayload(
        motivation_grades=[MotivationGrade(min_turnover=100, max_turnover=None, commission_rate=Decimal("0.1"))]
    )
    with pytest.raises(BadRequestError) as exc_info:
        settings_service.preview(payload)
    assert exc_info.value.status_code == 400


def test_preview_applies_valid_payload(settings_service):
    payload = SettingsPayload(
        forecast_weight=Decimal("0.3"),
        motivation_grades=[MotivationGrade(min_turnover=0, max_turnover=None, commission_rate=Decimal("0.1"))],
    )
    effective = settings_service.preview(payload)
    assert effective.forecast_weight == Decimal("0.3")
    assert len(effective.motivation_grades) == 1
