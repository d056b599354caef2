"""
Canonical equality and ordering.

Values compare by the real number they denote, never by representation:
recurring expansions are turned into exact rationals (repeating block over
10**period - 1) and compared with terminating and integer values exactly.
NaN equals nothing, itself included. Hashes agree with equality.
"""

from __future__ import annotations

import math
from fractions import Fraction

from ..core.errors import InvalidFormatError
from .integer import Int
from .numeric import Float
from .representation import FloatKind
from .value import NumberValue


def values_equal(a: NumberValue, b: NumberValue) -> bool:
    if isinstance(a, Int) and isinstance(b, Int):
        return a.value == b.value
    if isinstance(a, Int):
        return int_float_equal(a, b)
    if isinstance(b, Int):
        return int_float_equal(b, a)
    return float_equal(a, b)


def float_equal(a: Float, b: Float) -> bool:
    """
    Value equality of two Floats.

    A complex value equals a real one when its imaginary part is zero.
    """
    if a.kind is FloatKind.COMPLEX or b.kind is FloatKind.COMPLEX:
        return float_equal(a.real_part(), b.real_part()) and float_equal(a.imag_part(), b.imag_part())
    if a.kind is FloatKind.NAN or b.kind is FloatKind.NAN:
        return False
    if a.kind.is_infinite or b.kind.is_infinite:
        return a.kind is b.kind
    return a.exact_value() == b.exact_value()


def int_float_equal(i: Int, f: Float) -> bool:
    """
    Int/Float equality: the Float must be exactly integral.

    IRRATIONAL, NaN and infinite Floats never equal an Int; a complex Float
    does only when its imaginary part is zero.
    """
    if f.kind is FloatKind.COMPLEX:
        if not f.imag.is_zero():
            return False
        f = f.real
    if not f.kind.is_exact:
        return False
    value = f.exact_value()
    return value.denominator == 1 and value.numerator == i.value


def _ordering_key(value: NumberValue) -> Fraction | float:
    if isinstance(value, Int):
        return Fraction(value.value)
    if value.kind is FloatKind.COMPLEX:
        if not value.imag.is_zero():
            raise InvalidFormatError(
                "Complex values are not ordered", details={"value": value.to_string()}
            )
        value = value.real
    if value.kind is FloatKind.NAN:
        raise InvalidFormatError("NaN is not ordered")
    if value.kind is FloatKind.INFINITY:
        return math.inf
    if value.kind is FloatKind.NEG_INFINITY:
        return -math.inf
    return value.exact_value()


def compare_values(a: NumberValue, b: NumberValue) -> int:
    """
    Three-way comparison of two values.

    Raises:
        InvalidFormatError: if either side is NaN or has an imaginary part
    """
    left = _ordering_key(a)
    right = _ordering_key(b)
    return (left > right) - (left < right)


def approx_equal(a: NumberValue, b: NumberValue, epsilon: NumberValue) -> bool:
    """True when |a - b| <= epsilon (componentwise for complex values)."""
    a = a.to_float()
    b = b.to_float()
    tolerance = abs(_ordering_key(epsilon))
    if a.kind is FloatKind.COMPLEX or b.kind is FloatKind.COMPLEX:
        return (
            approx_equal(a.real_part(), b.real_part(), epsilon)
            and approx_equal(a.imag_part(), b.imag_part(), epsilon)
        )
    if a.kind is FloatKind.NAN or b.kind is FloatKind.NAN:
        return False
    if a.kind.is_infinite or b.kind.is_infinite:
        return a.kind is b.kind
    return abs(a.exact_value() - b.exact_value()) <= tolerance


def hash_float(value: Float) -> int:
    kind = value.kind
    if kind is FloatKind.COMPLEX:
        if value.imag.is_zero():
            return hash_float(value.real)
        return hash((hash_float(value.real), hash_float(value.imag)))
    if kind is FloatKind.NAN:
        return object.__hash__(value)
    if kind is FloatKind.INFINITY:
        return hash(math.inf)
    if kind is FloatKind.NEG_INFINITY:
        return hash(-math.inf)
    return hash(value.exact_value())
