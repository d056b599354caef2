"""
Display formatter.

Produces the canonical text of kernel values. Every output parses back to a
value equal to the one printed:

- integers: signed digits, no leading zeros
- terminating floats: minimal exact decimal, scientific past the threshold
- recurring floats: ``<prefix>.(cycle)`` with the cycle recomputed here
- irrational floats: their stored digits without trailing zeros
- specials: ``NaN``, ``Infinity``, ``-Infinity``
- complex: ``a+bi``, ``a-bi``, ``bi``, ``i``, ``-i``
"""

from __future__ import annotations

import string
from fractions import Fraction
from typing import Optional

from ..core.config import get_settings
from ..core.errors import InvalidFormatError
from ..core.logging import get_context_logger
from .numeric import Float
from .representation import (
    FloatKind,
    decimal_scale,
    int_digits,
    recurring_parts,
    split_denominator,
)

logger = get_context_logger(__name__, component="formatter")

NAN_TEXT = "NaN"
INFINITY_TEXT = "Infinity"
NEG_INFINITY_TEXT = "-Infinity"

_RADIX_DIGITS = string.digits + string.ascii_lowercase


def format_int(value: int) -> str:
    sign = "-" if value < 0 else ""
    return sign + int_digits(value)


def format_int_radix(value: int, radix: int) -> str:
    """Digits of an integer in radix 2..36 (lowercase letters, leading '-')."""
    if not 2 <= radix <= 36:
        raise InvalidFormatError(f"Radix must be between 2 and 36, got {radix}")
    if radix == 10:
        return format_int(value)
    magnitude = abs(value)
    if magnitude == 0:
        return "0"
    digits = []
    while magnitude:
        magnitude, digit = divmod(magnitude, radix)
        digits.append(_RADIX_DIGITS[digit])
    sign = "-" if value < 0 else ""
    return sign + "".join(reversed(digits))


def format_terminating(value: Fraction, threshold: Optional[int] = None) -> str:
    """
    Minimal decimal text of a terminating fraction.

    Switches to ``d.ddde<exp>`` once the decimal exponent is beyond the
    threshold in either direction.
    """
    if threshold is None:
        threshold = get_settings().SCIENTIFIC_THRESHOLD
    if value == 0:
        return "0"
    scale, rest = split_denominator(value.denominator)
    if rest != 1:
        raise InvalidFormatError("Value does not terminate", details={"denominator": value.denominator})
    sign = "-" if value < 0 else ""
    coefficient = abs(value.numerator) * 10 ** scale // value.denominator
    digits = int_digits(coefficient)
    exponent = len(digits) - 1 - scale

    if abs(exponent) > threshold:
        mantissa = digits.rstrip("0")
        if len(mantissa) > 1:
            mantissa = f"{mantissa[0]}.{mantissa[1:]}"
        return f"{sign}{mantissa}e{exponent}"

    if scale == 0:
        return sign + digits
    padded = digits.rjust(scale + 1, "0")
    return f"{sign}{padded[:-scale]}.{padded[-scale:]}"


def format_fraction(value: Fraction) -> Optional[str]:
    """
    Terminating text when the fraction terminates, recurring text otherwise.

    Returns None when the cycle is longer than MAX_RECURRING_PERIOD.
    """
    limit = get_settings().MAX_RECURRING_PERIOD
    parts = recurring_parts(value, limit)
    if parts is None:
        return None
    whole, prefix, cycle = parts
    if not cycle:
        return format_terminating(value)
    sign = "-" if value < 0 else ""
    return f"{sign}{int_digits(whole)}.{prefix}({cycle})"


def _format_stored_recurring(value: Float) -> str:
    # Cycle too long to search: print the digits exactly as stored
    text = format(value.decimal.copy_abs(), "f")
    split = len(text) - value.period
    sign = "-" if value.decimal.is_signed() else ""
    return f"{sign}{text[:split]}({text[split:]})"


def format_real(value: Float) -> str:
    kind = value.kind
    if kind is FloatKind.NAN:
        return NAN_TEXT
    if kind is FloatKind.INFINITY:
        return INFINITY_TEXT
    if kind is FloatKind.NEG_INFINITY:
        return NEG_INFINITY_TEXT
    if kind is FloatKind.RECURRING:
        text = format_fraction(value.exact_value())
        if text is None:
            logger.warning(
                "Recurring cycle longer than limit, printing stored digits",
                extra_data={"period": value.period, "scale": decimal_scale(value.decimal)},
            )
            return _format_stored_recurring(value)
        return text
    return format_terminating(value.exact_value())


def format_complex(real: Float, imag: Float) -> str:
    if imag.is_zero():
        return format_real(real)

    if imag.kind.is_exact and abs(imag.exact_value()) == 1:
        coefficient = "-" if imag.is_negative() else ""
    else:
        coefficient = format_real(imag)

    if real.is_zero():
        return f"{coefficient}i"
    if imag.is_negative():
        magnitude = coefficient[1:]
        return f"{format_real(real)}-{magnitude}i"
    return f"{format_real(real)}+{coefficient}i"


def format_float(value: Float) -> str:
    if value.kind is FloatKind.COMPLEX:
        return format_complex(value.real, value.imag)
    return format_real(value)
