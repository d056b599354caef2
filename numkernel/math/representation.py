"""
Representation tags and exact decimal helpers.

Int and Float values are closed tagged unions: the tag says which payload is
meaningful and every arithmetic site routes on it. This module holds the tags,
the width limits that drive small/big promotion, and the exact conversions
between ``Decimal``, ``Fraction`` and recurring-decimal storage that the rest
of the kernel builds on.
"""

from __future__ import annotations

import math
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Optional, Tuple

from sympy import multiplicity

# 64-bit signed range for Small integers
I64_MIN = -(2 ** 63)
I64_MAX = 2 ** 63 - 1
U64_MAX = 2 ** 64 - 1

# Fractional digits kept for non-terminating (irrational) results
IRRATIONAL_DIGITS = 137

# Extra working digits used during refinement before truncation
GUARD_DIGITS = 12

_IRRATIONAL_SCALE = 10 ** IRRATIONAL_DIGITS


class IntKind(str, Enum):
    """Storage tag of an Int."""

    SMALL = "small"  # machine 64-bit signed integer
    BIG = "big"  # unbounded integer


class FloatKind(str, Enum):
    """Storage tag of a Float."""

    SMALL = "small"  # machine double
    BIG = "big"  # exact terminating decimal
    RECURRING = "recurring"  # decimal + repeating cycle length
    IRRATIONAL = "irrational"  # decimal truncated to IRRATIONAL_DIGITS
    NAN = "nan"
    INFINITY = "infinity"
    NEG_INFINITY = "neg_infinity"
    COMPLEX = "complex"

    @property
    def is_finite(self) -> bool:
        """Terminating stored value (SMALL or BIG)."""
        return self in (FloatKind.SMALL, FloatKind.BIG)

    @property
    def is_exact(self) -> bool:
        """Value known exactly as a rational number."""
        return self in (FloatKind.SMALL, FloatKind.BIG, FloatKind.RECURRING)

    @property
    def is_real(self) -> bool:
        """Finite real value (anything with a decimal payload)."""
        return self in (
            FloatKind.SMALL, FloatKind.BIG, FloatKind.RECURRING, FloatKind.IRRATIONAL
        )

    @property
    def is_infinite(self) -> bool:
        return self in (FloatKind.INFINITY, FloatKind.NEG_INFINITY)


def fits_small(value: int) -> bool:
    """True if an integer lies in the 64-bit signed range."""
    return I64_MIN <= value <= I64_MAX


def make_decimal(coefficient: int, exponent: int = 0) -> Decimal:
    """
    Build ``coefficient * 10**exponent`` as a Decimal without context rounding.

    Decimal arithmetic rounds to the active context precision, so exact
    values are always assembled from an integer and an exponent instead.
    """
    sign, digits, _ = Decimal(coefficient).as_tuple()
    return Decimal((sign, digits, exponent))


def int_digits(value: int) -> str:
    """Decimal digits of ``abs(value)`` (no int/str digit limit)."""
    return str(Decimal(abs(value)))


def parse_int_digits(digits: str) -> int:
    """Inverse of int_digits for a validated string of decimal digits."""
    return int(Decimal(digits))


def decimal_scale(value: Decimal) -> int:
    """Number of fractional digits stored in a Decimal (0 for integers)."""
    exponent = value.as_tuple().exponent
    return -exponent if exponent < 0 else 0


def decimal_to_fraction(value: Decimal) -> Fraction:
    return Fraction(value)


def float_to_fraction(value: float) -> Fraction:
    """Exact value of a double read through its shortest repr."""
    return Fraction(Decimal(repr(value)))


def fraction_to_float(value: Fraction) -> float:
    """Nearest double, saturating to an infinity on overflow."""
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def split_denominator(denominator: int) -> Tuple[int, int]:
    """
    Split a positive denominator into (pre-period length, coprime rest).

    The pre-period length is the larger of the powers of 2 and 5; the rest
    has every factor of 2 and 5 removed. A rest of 1 means the fraction
    terminates after the returned number of digits.
    """
    twos = multiplicity(2, denominator)
    fives = multiplicity(5, denominator)
    rest = denominator // (2 ** twos * 5 ** fives)
    return max(twos, fives), rest


def multiplicative_order_of_ten(modulus: int, limit: int) -> Optional[int]:
    """
    Smallest L with 10**L == 1 (mod modulus), searching L = 1, 2, ... up to limit.

    Returns None when the cycle is longer than the limit.
    """
    if modulus == 1:
        return 0
    remainder = 10 % modulus
    length = 1
    while remainder != 1:
        if length >= limit:
            return None
        remainder = remainder * 10 % modulus
        length += 1
    return length


def fraction_to_decimal(value: Fraction) -> Optional[Decimal]:
    """Exact terminating Decimal for a fraction, or None if it recurs."""
    scale, rest = split_denominator(value.denominator)
    if rest != 1:
        return None
    coefficient = value.numerator * 10 ** scale // value.denominator
    return make_decimal(coefficient, -scale)


def truncate_fraction(value: Fraction, digits: int) -> Decimal:
    """Truncate toward zero to exactly ``digits`` fractional digits."""
    scaled = abs(value.numerator) * 10 ** digits // value.denominator
    if value < 0:
        scaled = -scaled
    return make_decimal(scaled, -digits)


def truncate_irrational(value: Fraction) -> Decimal:
    """Truncate toward zero to IRRATIONAL_DIGITS fractional digits."""
    return truncate_fraction(value, IRRATIONAL_DIGITS)


def recurring_to_fraction(value: Decimal, period: int) -> Fraction:
    """
    Exact value of a recurring decimal.

    ``value`` holds the digits up to and including one full cycle, the last
    ``period`` fractional digits being the cycle. With y the value truncated
    before the cycle the exact number is ``y + (value - y) * 10**p / (10**p - 1)``.
    """
    exact = Fraction(value)
    if period <= 0:
        return exact
    scale = decimal_scale(value)
    head = truncate_fraction(exact, scale - period)
    head_fraction = Fraction(head)
    cycle = exact - head_fraction
    return head_fraction + cycle * Fraction(10 ** period, 10 ** period - 1)


def fraction_to_recurring(value: Fraction, limit: int) -> Optional[Tuple[Decimal, int]]:
    """
    Minimal recurring storage (decimal through one cycle, period) for a fraction.

    Returns None when the fraction terminates or its cycle exceeds ``limit``.
    """
    pre_period, rest = split_denominator(value.denominator)
    if rest == 1:
        return None
    period = multiplicative_order_of_ten(rest, limit)
    if period is None:
        return None
    return truncate_fraction(value, pre_period + period), period


def recurring_parts(value: Fraction, limit: int) -> Optional[Tuple[int, str, str]]:
    """
    Integer part, non-repeating prefix and minimal cycle of ``abs(value)``.

    The cycle is empty for terminating fractions. Returns None when the
    cycle is longer than ``limit``.
    """
    value = abs(value)
    whole, remainder = divmod(value.numerator, value.denominator)
    pre_period, rest = split_denominator(value.denominator)
    period = multiplicative_order_of_ten(rest, limit)
    if period is None:
        return None
    width = pre_period + period
    if width == 0:
        return whole, "", ""
    fractional = remainder * 10 ** width // value.denominator
    text = int_digits(fractional).rjust(width, "0")
    return whole, text[:pre_period], text[pre_period:]
