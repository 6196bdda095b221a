"""Decimal helpers shared by the domain records and the cost calculator."""
import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

from mealbudget.utilities.constants import MONEY_PLACES

ZERO = Decimal("0")
_NUMBER = re.compile(r'^[+-]?(\d+(\.\d*)?|\.\d+)$')


def parse_decimal(value: Any) -> Decimal:
    """Coerce draft input to a non-negative Decimal.

    Locale-agnostic: '.' is the decimal point, a single ',' is accepted as one
    when no '.' is present ("2,50" -> 2.50). Anything non-numeric, non-finite
    or negative becomes 0 instead of raising.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(repr(value))
    else:
        text = str(value).strip()
        if text.count(',') == 1 and '.' not in text:
            text = text.replace(',', '.')
        if not _NUMBER.match(text):
            return ZERO
        try:
            result = Decimal(text)
        except InvalidOperation:
            return ZERO
    if not result.is_finite() or result < 0:
        return ZERO
    return result


def parse_strict_decimal(value: Any) -> Decimal:
    """Like parse_decimal but raises ValueError instead of degrading to 0."""
    if value is None or isinstance(value, bool):
        raise ValueError(f"Not a number: {value!r}")
    if isinstance(value, (int, float, Decimal)):
        text = repr(value) if isinstance(value, float) else str(value)
    else:
        text = str(value).strip()
        if text.count(',') == 1 and '.' not in text:
            text = text.replace(',', '.')
        if not _NUMBER.match(text):
            raise ValueError(f"Not a number: {value!r}")
    try:
        result = Decimal(text)
    except InvalidOperation as e:
        raise ValueError(f"Not a number: {value!r}") from e
    if not result.is_finite():
        raise ValueError(f"Not a finite number: {value!r}")
    return result


def round_money(value: Decimal) -> Decimal:
    return Decimal(value).quantize(Decimal(MONEY_PLACES), rounding=ROUND_HALF_UP)


def plain(value: Decimal) -> str:
    """Decimal as plain text without exponent or trailing zeros ('1.50' -> '1.5', '10' -> '10')."""
    return format(Decimal(value).normalize(), 'f')


__all__ = ['ZERO', 'parse_decimal', 'parse_strict_decimal', 'round_money', 'plain']
