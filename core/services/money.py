"""
Money Utilities - Safe Decimal operations for monetary values.

Prices come from Supabase `numeric` columns as floats or strings; every
calculation goes through Decimal so cart and sale totals never drift.
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

Number = Union[str, int, float, Decimal]

# Default precision for money operations (2 decimal places)
MONEY_PRECISION = Decimal("0.01")


def to_decimal(value: Union[Number, None]) -> Decimal:
    """
    Convert any value to Decimal safely.

    Args:
        value: Value to convert (str, int, float, Decimal, or None)

    Returns:
        Decimal representation of the value, or Decimal("0") if None/invalid
    """
    if value is None:
        return Decimal("0")

    if isinstance(value, Decimal):
        return value

    try:
        if isinstance(value, float):
            # Go through str so 0.1 stays 0.1
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")


def parse_money(value: Number) -> Decimal:
    """
    Strict variant of to_decimal for data read back from storage.

    Raises:
        ValueError: value is missing, not numeric, not finite or negative
    """
    if value is None or isinstance(value, bool):
        raise ValueError(f"Invalid monetary value: {value!r}")
    try:
        result = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
    except (InvalidOperation, ValueError, TypeError) as e:
        raise ValueError(f"Invalid monetary value: {value!r}") from e
    if not result.is_finite() or result < 0:
        raise ValueError(f"Invalid monetary value: {value!r}")
    return result


def round_money(value: Number) -> Decimal:
    """Round monetary value to two decimal places (half up)."""
    return to_decimal(value).quantize(MONEY_PRECISION, rounding=ROUND_HALF_UP)


def format_money(value: Number, symbol: str = "$") -> str:
    """
    Format monetary value with the store's currency symbol.

    Args:
        value: Value to format
        symbol: Currency symbol from AppSettings.currency_symbol

    Returns:
        Formatted string, e.g. "$1,234.50"
    """
    return f"{symbol}{round_money(value):,.2f}"


def to_float(value: Number) -> float:
    """
    Convert Decimal to float for JSON serialization.

    Use only at API and storage boundaries, not for internal calculations.
    """
    return float(to_decimal(value))


def divide(value: Number, divisor: Number) -> Decimal:
    """Safe division of monetary value; dividing by zero yields 0."""
    d = to_decimal(divisor)
    if d == 0:
        return Decimal("0")
    return to_decimal(value) / d
