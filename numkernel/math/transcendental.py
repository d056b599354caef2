"""
Transcendental approximator.

Each function takes a double seed of its argument for domain checks, poles,
overflow guards and exact shortcuts, then makes one refinement pass with
mpmath at 137 digits plus guard digits. The refined value is truncated to
exactly 137 fractional digits and tagged IRRATIONAL.

Complex arguments are evaluated by mpmath on ``mpc`` values and come back
as COMPLEX Floats with IRRATIONAL parts.
"""

from __future__ import annotations

import math
from decimal import Decimal
from fractions import Fraction
from typing import Callable, Optional

import mpmath

from ..core.config import get_settings
from ..core.errors import InfiniteResultError, NumberTooLargeError
from ..core.logging import get_context_logger
from .numeric import Float
from .representation import GUARD_DIGITS, IRRATIONAL_DIGITS, FloatKind

logger = get_context_logger(__name__, component="transcendental")

WORKING_DIGITS = IRRATIONAL_DIGITS + GUARD_DIGITS

# |cos x| below this is treated as a pole of tan
POLE_THRESHOLD = Fraction(1, 10 ** IRRATIONAL_DIGITS)

_LN_10 = math.log(10)

# Results below 10**-UNDERFLOW_DIGITS truncate to zero at 137 digits
UNDERFLOW_DIGITS = IRRATIONAL_DIGITS + GUARD_DIGITS


# mpmath conversion

def to_mp(value: Float):
    """mpf (or mpc for complex values) at the active working precision."""
    kind = value.kind
    if kind is FloatKind.NAN:
        return mpmath.mpf("nan")
    if kind is FloatKind.INFINITY:
        return mpmath.mpf("inf")
    if kind is FloatKind.NEG_INFINITY:
        return mpmath.mpf("-inf")
    if kind is FloatKind.COMPLEX:
        return mpmath.mpc(to_mp(value.real), to_mp(value.imag))
    exact = value.exact_value()
    return mpmath.mpf(exact.numerator) / exact.denominator


def _mpf_to_float(value, digits: int) -> Float:
    if mpmath.isnan(value):
        return Float.nan()
    if mpmath.isinf(value):
        return Float.infinity(negative=value < 0)
    return Float.irrational(Decimal(mpmath.nstr(value, digits)))


def from_mp(value, digits: int = WORKING_DIGITS) -> Float:
    """Float from an mpmath result, truncated to 137 digits."""
    if isinstance(value, mpmath.mpc):
        return Float.complex(_mpf_to_float(value.real, digits), _mpf_to_float(value.imag, digits))
    return _mpf_to_float(value, digits)


def refine(func: Callable, *args: Float) -> Float:
    """
    Evaluate ``func`` on mpmath arguments in one controlled pass.

    The working precision covers 137 fractional digits plus guard digits
    plus the integer digits of the arguments; when the result itself is
    large the pass is repeated once with room for its integer digits.
    """
    digits = WORKING_DIGITS + sum(_argument_digits(a) for a in args)
    with mpmath.workdps(digits):
        result = func(*(to_mp(a) for a in args))
        extra = _result_digits(result)
    if extra:
        digits += extra
        with mpmath.workdps(digits):
            result = func(*(to_mp(a) for a in args))
    logger.debug(
        "Refined transcendental value",
        extra_data={"function": getattr(func, "__name__", str(func)), "working_digits": digits},
    )
    return from_mp(result, digits)


def _argument_digits(value: Float) -> int:
    if value.kind is FloatKind.COMPLEX:
        return _argument_digits(value.real) + _argument_digits(value.imag)
    if not value.kind.is_real:
        return 0
    exact = abs(value.exact_value())
    whole = exact.numerator // exact.denominator
    # bit_length * log10(2) bounds the digit count from above
    return whole.bit_length() * 30103 // 100000 + 1 if whole else 0


def _result_digits(result) -> int:
    if isinstance(result, mpmath.mpc):
        return max(_result_digits(result.real), _result_digits(result.imag))
    if mpmath.isnan(result) or mpmath.isinf(result) or result == 0:
        return 0
    magnitude = mpmath.mag(result)
    return int(magnitude * 0.30103) + 1 if magnitude > 0 else 0


def _seed(value: Float) -> float:
    return value.to_double()


def _exact_value(value: Float) -> Optional[Fraction]:
    if value.kind.is_exact:
        return value.exact_value()
    return None


# Trigonometric

def sin(x: Float) -> Float:
    if x.kind is FloatKind.COMPLEX:
        return refine(mpmath.sin, x)
    if x.kind is FloatKind.NAN or x.kind.is_infinite:
        return Float.nan()
    if x.is_zero():
        return Float.zero()
    return refine(mpmath.sin, x)


def cos(x: Float) -> Float:
    if x.kind is FloatKind.COMPLEX:
        return refine(mpmath.cos, x)
    if x.kind is FloatKind.NAN or x.kind.is_infinite:
        return Float.nan()
    if x.is_zero():
        return Float.one()
    return refine(mpmath.cos, x)


def tan(x: Float) -> Float:
    """
    Tangent.

    Raises:
        InfiniteResultError: at odd multiples of pi/2
    """
    if x.kind is FloatKind.COMPLEX:
        return refine(mpmath.tan, x)
    if x.kind is FloatKind.NAN or x.kind.is_infinite:
        return Float.nan()
    if x.is_zero():
        return Float.zero()
    cosine = cos(x)
    if abs(cosine.exact_value()) < POLE_THRESHOLD:
        raise InfiniteResultError("tan is infinite at odd multiples of pi/2", details={"value": x.to_string()})
    return refine(mpmath.tan, x)


# Exponential and logarithms

def exp(x: Float) -> Float:
    """
    Exponential.

    Raises:
        NumberTooLargeError: when the result exceeds the configured digit limit
    """
    if x.kind is FloatKind.COMPLEX:
        if _exp_digits(x.real) < -UNDERFLOW_DIGITS:
            return Float.complex(Float.zero(), Float.zero())
        return refine(mpmath.exp, x)
    if x.kind is FloatKind.NAN or x.kind is FloatKind.INFINITY:
        return x
    if x.kind is FloatKind.NEG_INFINITY:
        return Float.zero()
    if x.is_zero():
        return Float.one()
    if _exp_digits(x) < -UNDERFLOW_DIGITS:
        return Float.zero()
    return refine(mpmath.exp, x)


def _exp_digits(x: Float) -> float:
    """Decimal exponent of exp(x), refused past the configured digit limit."""
    limit = get_settings().MAX_RESULT_DIGITS
    digits = _seed(x) / _LN_10
    if digits > limit:
        raise NumberTooLargeError(details={"exponent": x.to_string(), "limit": limit})
    return digits


def ln(x: Float) -> Float:
    """Natural logarithm: ln(0) is -Infinity, negative reals give NaN."""
    if x.kind is FloatKind.COMPLEX:
        if x.is_zero():
            return Float.infinity(negative=True)
        return refine(mpmath.log, x)
    if x.kind is FloatKind.NAN or x.kind is FloatKind.NEG_INFINITY:
        return Float.nan()
    if x.kind is FloatKind.INFINITY:
        return x
    if x.is_zero():
        return Float.infinity(negative=True)
    if x.is_negative():
        return Float.nan()
    if _exact_value(x) == 1:
        return Float.zero()
    return refine(mpmath.log, x)


def log10(x: Float) -> Float:
    """Base-10 logarithm; exact powers of ten give exact integers."""
    if x.kind is FloatKind.COMPLEX:
        if x.is_zero():
            return Float.infinity(negative=True)
        return refine(mpmath.log10, x)
    if x.kind is FloatKind.NAN or x.kind is FloatKind.NEG_INFINITY:
        return Float.nan()
    if x.kind is FloatKind.INFINITY:
        return x
    if x.is_zero():
        return Float.infinity(negative=True)
    if x.is_negative():
        return Float.nan()
    exponent = _exact_log(x, Fraction(10))
    if exponent is not None:
        return Float.from_fraction(Fraction(exponent), prefer_small=True)
    return refine(mpmath.log10, x)


def log(x: Float, base: Float) -> Float:
    """
    Logarithm in an arbitrary base.

    Exact integer powers of an exact base give exact results; a base that
    is not a positive real other than 1 gives NaN.
    """
    if x.kind is FloatKind.COMPLEX or base.kind is FloatKind.COMPLEX:
        return refine(mpmath.log, x, base)
    if not base.kind.is_real or base.is_negative() or base.is_zero():
        return Float.nan()
    if base.kind.is_exact and base.exact_value() == 1:
        return Float.nan()
    if x.kind is FloatKind.NAN or x.kind is FloatKind.NEG_INFINITY:
        return Float.nan()
    if x.kind is FloatKind.INFINITY:
        return Float.infinity(negative=_seed(base) < 1)
    if x.is_zero():
        return Float.infinity(negative=_seed(base) > 1)
    if x.is_negative():
        return Float.nan()
    if base.kind.is_exact:
        exponent = _exact_log(x, base.exact_value())
        if exponent is not None:
            return Float.from_fraction(Fraction(exponent), prefer_small=True)
    return refine(mpmath.log, x, base)


def _exact_log(x: Float, base: Fraction) -> Optional[int]:
    """Integer k with base**k == x exactly, if one exists."""
    value = _exact_value(x)
    if value is None or value <= 0 or base <= 0 or base == 1:
        return None
    base_log = _log10(base)
    if base_log == 0:
        return None
    k = round(_log10(value) / base_log)
    if abs(k) > get_settings().MAX_RESULT_DIGITS:
        return None
    if base ** k == value:
        return k
    return None


def _log10(value: Fraction) -> float:
    """log10 of a positive rational, taken on its integer parts so it never overflows."""
    return (math.log(value.numerator) - math.log(value.denominator)) / _LN_10


# Powers and roots

def power(base: Float, exponent: Float) -> Float:
    """
    Real power for a positive base refined with mpmath.

    Raises:
        NumberTooLargeError: when the result exceeds the configured digit limit
    """
    value = base.exact_value()
    if value == 1:
        return Float.one()
    limit = get_settings().MAX_RESULT_DIGITS
    # decimal exponent of the result, from the exact base
    estimate = _seed(exponent) * _log10(value)
    if estimate > limit:
        raise NumberTooLargeError(details={"estimated_digits": str(estimate), "limit": limit})
    if estimate < -UNDERFLOW_DIGITS:
        return Float.zero()
    return refine(mpmath.power, base, exponent)


def complex_power(base: Float, exponent: Float) -> Float:
    """z ** w as exp(w * ln z) on the principal branch."""
    result = refine(mpmath.power, _as_complex(base), _as_complex(exponent))
    return result if result.is_complex() else Float.complex(result, Float.zero())


def complex_sqrt(value: Float) -> Float:
    result = refine(mpmath.sqrt, _as_complex(value))
    return result if result.is_complex() else Float.complex(result, Float.zero())


def _as_complex(value: Float) -> Float:
    return value if value.is_complex() else Float.complex(value, Float.zero())
