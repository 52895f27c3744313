"""Tests for number parsing, arithmetic and result formatting."""

import pytest

from calcpad.formatting import (
    ComputationError,
    evaluate,
    format_result,
    negate,
    parse_operand,
    percent_of,
    plain_number,
    scientific_number,
)
from calcpad.models import Operator


# --- parse_operand ---

@pytest.mark.parametrize("text, expected", [
    ("12", 12.0),
    ("-0.5", -0.5),
    ("3.", 3.0),
    ("0.", 0.0),
    ("1.23456712e+6", 1234567.12),
    ("-1.00000000e+16", -1e16),
])
def test_parse_operand_accepts_display_numerals(text, expected):
    assert parse_operand(text) == pytest.approx(expected)


@pytest.mark.parametrize("text", ["Error", "inf", "nan", "", "1..2", "--1", " 1", "1,5", "-"])
def test_parse_operand_rejects_everything_else(text):
    with pytest.raises(ComputationError):
        parse_operand(text)


# --- plain_number / scientific_number ---

@pytest.mark.parametrize("value, expected", [
    (5.0, "5"),
    (-0.0, "0"),
    (0.1, "0.1"),
    (-2.5, "-2.5"),
    (1.5e-07, "0.00000015"),
    (1e16, "10000000000000000"),
])
def test_plain_number(value, expected):
    assert plain_number(value) == expected


def test_plain_number_rejects_non_finite():
    with pytest.raises(ComputationError):
        plain_number(float("inf"))
    with pytest.raises(ComputationError):
        plain_number(float("nan"))


def test_scientific_number_has_unpadded_exponent():
    assert scientific_number(1234567.12345678) == "1.23456712e+6"
    assert scientific_number(0.000123, 2) == "1.23e-4"
    assert scientific_number(-1e16) == "-1.00000000e+16"


# --- format_result ---

@pytest.mark.parametrize("value, expected", [
    (1 / 3, "0.33333333"),
    (2 / 3, "0.66666667"),
    (0.1 + 0.2, "0.3"),
    (3.75, "3.75"),
    (-0.0, "0"),
    (100000000000000.0, "100000000000000"),
    (123456.123456789, "123456.12345679"),
])
def test_format_result_rounds_long_fractions(value, expected):
    assert format_result(value) == expected


def test_format_result_falls_back_to_scientific_when_too_long():
    assert format_result(1e16) == "1.00000000e+16"
    # Rounded to 8 places first, still 16 characters.
    assert format_result(1234567.123456789) == "1.23456712e+6"


def test_format_result_honours_custom_limits():
    assert format_result(1 / 3, fraction_digits=2) == "0.33"
    assert format_result(123456.0, max_length=5) == "1.23456000e+5"


def test_format_result_rejects_overflow():
    with pytest.raises(ComputationError):
        format_result(float("inf"))


# --- evaluate ---

@pytest.mark.parametrize("left, op, right, expected", [
    ("2", Operator.ADD, "3", "5"),
    ("10", Operator.SUBTRACT, "4", "6"),
    ("3", Operator.MULTIPLY, "7", "21"),
    ("15", Operator.DIVIDE, "4", "3.75"),
    ("1", Operator.DIVIDE, "3", "0.33333333"),
    ("0.1", Operator.ADD, "0.2", "0.3"),
    ("-2.5", Operator.MULTIPLY, "4", "-10"),
    ("100000000", Operator.MULTIPLY, "100000000", "1.00000000e+16"),
])
def test_evaluate(left, op, right, expected):
    assert evaluate(left, op, right) == expected


@pytest.mark.parametrize("a, b", [(7, 2), (-3.5, 0.25), (123, 456), (0.3, 0.1), (1e7, 3)])
@pytest.mark.parametrize("op, fn", [
    (Operator.ADD, lambda a, b: a + b),
    (Operator.SUBTRACT, lambda a, b: a - b),
    (Operator.MULTIPLY, lambda a, b: a * b),
    (Operator.DIVIDE, lambda a, b: a / b),
])
def test_evaluate_matches_float_arithmetic(a, b, op, fn):
    assert evaluate(plain_number(a), op, plain_number(b)) == format_result(fn(a, b))


@pytest.mark.parametrize("divisor", ["0", "0.", "-0", "0.000"])
def test_evaluate_division_by_zero(divisor):
    with pytest.raises(ComputationError, match="Division by zero"):
        evaluate("5", Operator.DIVIDE, divisor)


def test_evaluate_unparseable_operand():
    with pytest.raises(ComputationError):
        evaluate("Error", Operator.ADD, "1")


def test_evaluate_overflow():
    with pytest.raises(ComputationError):
        evaluate("1e+200", Operator.MULTIPLY, "1e+200")


# --- percent_of / negate ---

def test_percent_of_pending_operand():
    assert percent_of("50", "100") == "50"
    assert percent_of("5", "200") == "10"


def test_percent_without_pending_operand():
    assert percent_of("50") == "0.5"
    assert percent_of("-7") == "-0.07"


def test_percent_is_formatted_like_a_result():
    assert percent_of("1.1") == "0.011"
    assert percent_of("99999999999999", "99999999999999") == "1.00000000e+26"
    assert percent_of("1", "1", fraction_digits=3) == "0.01"
    assert percent_of("1", "2", fraction_digits=1) == "0"


@pytest.mark.parametrize("text, expected", [("2.5", "-2.5"), ("-7", "7"), ("5.", "-5"), ("0.", "0")])
def test_negate(text, expected):
    assert negate(text) == expected
