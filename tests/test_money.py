"""Tests for money helpers"""
import pytest
from decimal import Decimal

from core.services.money import (
    divide,
    format_money,
    parse_money,
    round_money,
    to_decimal,
    to_float,
)


def test_to_decimal_from_float_keeps_text_value():
    assert to_decimal(0.1) == Decimal("0.1")


def test_to_decimal_invalid_is_zero():
    assert to_decimal(None) == Decimal("0")
    assert to_decimal("abc") == Decimal("0")


@pytest.mark.parametrize("value", [None, True, "abc", -1, "NaN", float("inf")])
def test_parse_money_rejects(value):
    with pytest.raises(ValueError):
        parse_money(value)


def test_parse_money_accepts_numeric_text():
    assert parse_money("45.50") == Decimal("45.50")


def test_round_money_half_up():
    assert round_money("2.345") == Decimal("2.35")


def test_format_money():
    assert format_money(Decimal("1234.5")) == "$1,234.50"
    assert format_money(3, symbol="€") == "€3.00"


def test_divide_by_zero():
    assert divide(10, 0) == Decimal("0")


def test_to_float():
    assert to_float(Decimal("10.25")) == 10.25
