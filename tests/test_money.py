from __future__ import annotations

from decimal import Decimal

from salespipe.shared.money import (
    percent,
    round_money,
    round_percent,
    safe_divide,
    sum_decimals,
    to_decimal,
    to_money,
    to_percent,
    to_whole,
)


def test_to_decimal_parses_floats_through_their_string_form():
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal(0.1) + to_decimal(0.2) == Decimal("0.3")


def test_to_decimal_falls_back_to_zero():
    assert to_decimal(None) == 0
    assert to_decimal("not a number") == 0
    assert to_decimal(float("nan")) == 0
    assert to_decimal(float("inf")) == 0
    assert to_decimal(object()) == 0


def test_to_decimal_accepts_padded_strings_and_bools():
    assert to_decimal(" 12.50 ") == Decimal("12.50")
    assert to_decimal(True) == 1


def test_rounding_is_half_up():
    assert round_money(Decimal("2.5")) == Decimal("3")
    assert round_money(Decimal("-2.5")) == Decimal("-3")
    assert round_percent("0.125") == Decimal("0.13")
    assert to_whole(Decimal("102.5")) == 103


def test_percent_guards_non_positive_base():
    assert percent(5, 0) == 0
    assert percent(5, -1) == 0
    assert percent(1, 3) == Decimal("33.33")
    assert percent(2, 3) == Decimal("66.67")


def test_safe_divide_and_sum():
    assert safe_divide(10, 0) == 0
    assert safe_divide(10, 0, fallback=Decimal("-1")) == Decimal("-1")
    assert safe_divide(10, 4) == Decimal("2.5")
    assert sum_decimals([1, "2.5", None, 0.5]) == Decimal("4.0")


def test_output_conversions():
    assert to_money(Decimal("35000.00")) == 35000
    assert isinstance(to_money("1.4"), int)
    assert to_percent(Decimal("66.666")) == 66.67
