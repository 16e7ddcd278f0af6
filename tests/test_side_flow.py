from __future__ import annotations

from salespipe.analytics.side_flow import calculate_side_flow

VALUES = {"booked": 10, "meeting1": 8, "meeting2": 4, "contractReview": 3, "push": 2, "deal": 1}


def _counts(result):
    return {item.stage_id: item.count for item in result.refusals.by_stage}


def test_aggregate_refusals_land_on_first_meeting():
    result = calculate_side_flow(VALUES, refusals=3)
    assert _counts(result) == {"booked": 0, "meeting1": 3, "meeting2": 0, "contractReview": 0, "push": 0}
    meeting1 = result.refusals.by_stage[1]
    assert meeting1.rate == 37.5
    assert result.refusals.total == 3
    assert result.refusals.rate_from_first_meeting == 30.0


def test_explicit_breakdown_wins_per_stage():
    result = calculate_side_flow(VALUES, refusals=3, refusal_by_stage={"meeting2": 1, "push": 1})
    counts = _counts(result)
    assert counts["meeting1"] == 3
    assert counts["meeting2"] == 1
    assert counts["push"] == 1
    assert result.refusals.total == 5


def test_explicit_zero_is_kept():
    result = calculate_side_flow(VALUES, refusals=4, refusal_by_stage={"meeting1": 0})
    assert _counts(result)["meeting1"] == 0
    # Nothing attributed per stage, so the aggregate is reported as the total.
    assert result.refusals.total == 4


def test_empty_input():
    result = calculate_side_flow({})
    assert result.refusals.total == 0
    assert result.refusals.rate_from_first_meeting == 0
    assert all(item.rate == 0 for item in result.refusals.by_stage)
    assert result.warming.count == 0


def test_warming_count():
    assert calculate_side_flow(VALUES, warming=6).warming.count == 6
