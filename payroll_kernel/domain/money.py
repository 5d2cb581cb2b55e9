"""
Money -- Decimal coercion and rounding for roster amounts.

Responsibility:
    Turns caller-supplied amounts (text, ints, floats, Decimals) into
    ``Decimal`` and provides the single rounding function used when
    totals leave the engine.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - No float arithmetic.  Floats are converted through ``str()`` so
      ``0.1`` becomes ``Decimal("0.1")``, not its binary expansion.
    - Unparseable input becomes ``Decimal("NaN")`` instead of raising,
      so the validator can report it as a violation.  So do magnitudes of
      ``1e309`` and above, which no double-precision client can carry.
    - Amount arithmetic and rounding run in ``MONEY_CONTEXT``, whose
      precision covers every accepted magnitude to the cent.  The ambient
      28-digit context is never relied on.
    - ``round_money`` rounds half-up to the cent and is applied once at
      output, never mid-sum.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Context, Decimal, InvalidOperation
from typing import Any

ZERO = Decimal("0")
NAN = Decimal("NaN")

CURRENCY_DECIMAL_PLACES = 2
DEFAULT_ROUNDING = ROUND_HALF_UP

# Largest accepted adjusted exponent; 1e309 overflows a double
MAX_AMOUNT_EXPONENT = 308

# 308 integer digits, the leave-rate multiplier, summation carries and cents
MONEY_CONTEXT = Context(prec=400, rounding=ROUND_HALF_UP)


def coerce_amount(value: Any) -> Decimal:
    """
    Coerce a caller-supplied amount to ``Decimal``.

    Postconditions:
        - Returns a finite ``Decimal`` for ints, numeric strings (surrounding
          whitespace ignored), finite floats and finite Decimals whose
          magnitude is below ``1e309``.
        - Returns ``Decimal("NaN")`` for everything else: ``None``,
          booleans, empty or non-numeric text, NaN, infinities and
          out-of-range magnitudes.
    """
    if value is None or isinstance(value, bool):
        return NAN
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return NAN
        try:
            result = Decimal(text)
        except InvalidOperation:
            return NAN
    else:
        return NAN

    if not result.is_finite():
        return NAN
    if result and result.adjusted() > MAX_AMOUNT_EXPONENT:
        return NAN
    return result


def is_number(value: Any) -> bool:
    """True when ``value`` is a finite Decimal."""
    return isinstance(value, Decimal) and value.is_finite()


def round_money(
    value: Decimal,
    decimal_places: int = CURRENCY_DECIMAL_PLACES,
    rounding: str = DEFAULT_ROUNDING,
) -> Decimal:
    """
    Round a monetary value to the given number of decimal places.

    This is the ONLY sanctioned rounding function for roster totals.

    Preconditions: ``value`` is a finite Decimal.
    Postconditions: Returns ``value`` quantized half-up (by default).
    """
    exponent = Decimal(1).scaleb(-decimal_places)
    return value.quantize(exponent, rounding=rounding, context=MONEY_CONTEXT)


def format_amount(value: Decimal) -> str:
    """
    Render an amount for the wire without float conversion.

    Integral values render without a fractional part (``"800"``), other
    values keep their own digits (``"12.50"``).  NaN renders as ``"NaN"``.
    """
    if not value.is_finite():
        return "NaN"
    if value == value.to_integral_value():
        return str(value.quantize(Decimal(1), context=MONEY_CONTEXT))
    return str(value)
