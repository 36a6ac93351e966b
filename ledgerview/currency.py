"""
Currency Formatting Module

Formats Decimal amounts for tooltips, legends and axis ticks. Amounts are
never converted to float before formatting.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

from .config import get_config

Number = Union[Decimal, int, float, str]

# (threshold, suffix) for compact tick labels, largest first
COMPACT_UNITS = (
    (Decimal('1000000000'), "B"),
    (Decimal('1000000'), "M"),
    (Decimal('1000'), "k"),
)


def to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def quantize(value: Number, precision: int) -> Decimal:
    return to_decimal(value).quantize(Decimal('0.1') ** precision, rounding=ROUND_HALF_UP)


def format_currency(amount: Number, symbol: Optional[str] = None,
                    precision: Optional[int] = None) -> str:
    """-1234.5 -> '-₹1,234.50'"""
    config = get_config()
    symbol = config.currency_symbol if symbol is None else symbol
    precision = config.currency_precision if precision is None else precision

    value = quantize(amount, precision)
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.{precision}f}"


def format_currency_crude(amount: Number) -> str:
    """Compact label for axis ticks: 950, 1.2k, 3.4M"""
    value = to_decimal(amount)
    magnitude = abs(value)
    sign = "-" if value < 0 else ""

    for threshold, suffix in COMPACT_UNITS:
        if magnitude >= threshold:
            scaled = quantize(magnitude / threshold, 1).normalize()
            return f"{sign}{scaled:f}{suffix}"

    return f"{sign}{quantize(magnitude, 0):f}"


def format_fixed_width_float(value: Number, width: int) -> str:
    """Right aligned with two decimals, like printf('%6.2f')"""
    return f"{quantize(value, 2):>{width}.2f}"


def format_percentage(value: Number) -> str:
    return f"{quantize(to_decimal(value) * 100, 2):.2f}%"
