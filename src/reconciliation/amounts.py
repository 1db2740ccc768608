"""
Amount Conversion

The ledger stores money as integers in minor units (cents); clients work
in major units. These two functions are the only place the scale is
applied, in both directions.

Rounding: amounts finer than one cent are rounded half away from zero
(ROUND_HALF_UP in decimal terms). Whole-cent amounts always round-trip:
amount_to_integer(integer_to_amount(x)) == x for every int x.

Both conversions run in a decimal context sized to the operand, so no
digit is ever dropped however large the amount.
"""

from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Union

DECIMAL_PLACES = 2

_MIN_PRECISION = 28


def _exact_context(value: Decimal) -> Context:
    """A context wide enough to rescale `value` by DECIMAL_PLACES without rounding."""
    sign, digits, exponent = value.as_tuple()
    precision = len(digits) + abs(exponent) + DECIMAL_PLACES + 1
    return Context(prec=max(_MIN_PRECISION, precision), rounding=ROUND_HALF_UP)


def integer_to_amount(minor_units: int) -> Decimal:
    """
    Convert minor units to a decimal amount.

        >>> integer_to_amount(100000)
        Decimal('1000.00')
    """
    if isinstance(minor_units, bool) or not isinstance(minor_units, int):
        raise TypeError(f"minor units must be an int, got {type(minor_units).__name__}")
    value = Decimal(minor_units)
    return value.scaleb(-DECIMAL_PLACES, context=_exact_context(value))


def amount_to_integer(amount: Union[Decimal, float, int]) -> int:
    """
    Convert a decimal amount to minor units.

    Floats go through their shortest repr so 0.29 becomes 29, not 28.
    """
    if isinstance(amount, bool):
        raise TypeError("amount must be a number, got bool")
    if isinstance(amount, float):
        value = Decimal(repr(amount))
    elif isinstance(amount, (Decimal, int)):
        value = Decimal(amount)
    else:
        raise TypeError(f"amount must be a number, got {type(amount).__name__}")

    if not value.is_finite():
        raise ValueError(f"amount must be finite, got {amount}")

    context = _exact_context(value)
    scaled = value.scaleb(DECIMAL_PLACES, context=context)
    return int(scaled.quantize(Decimal(1), context=context))
