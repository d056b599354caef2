"""
Public constructors.

These are the entry points hosts use to build kernel values from literals
and Python numbers.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from ..core.errors import InvalidFormatError
from .integer import Int
from .numeric import Float, as_float
from .parser import parse_float, parse_int, parse_real


def create_int(text: str) -> Int:
    """
    Create an Int from a literal.

    Examples:
        >>> create_int("42")
        Int(42)
        >>> create_int("-0xff")
        Int(-255)
    """
    return parse_int(text)


def create_float(text: str) -> Float:
    """
    Create a Float from a literal.

    Examples:
        >>> create_float("0.(3)")
        Float(0.(3))
        >>> create_float("3-4i")
        Float(3-4i)
    """
    return parse_float(text)


def _component(value: Any) -> Float:
    if isinstance(value, str):
        return parse_real(value.strip())
    component = as_float(value)
    if component.is_complex():
        raise InvalidFormatError(
            "Complex components must be real", details={"value": component.to_string()}
        )
    return component


def create_complex(real: Any, imag: Any) -> Float:
    """Create a complex Float from real and imaginary parts (literals or numbers)."""
    return Float.complex(_component(real), _component(imag))


def create_imaginary(imag: Any) -> Float:
    """Create a purely imaginary Float ``0+bi``."""
    return Float.complex(Float.zero(), _component(imag))


def create_irrational(text: str) -> Float:
    """
    Create an IRRATIONAL Float from decimal digits.

    The digits are padded or truncated to exactly 137 fractional digits.
    """
    value = parse_real(text.strip())
    if not value.kind.is_real:
        raise InvalidFormatError(f"Irrational literal must be finite: {text!r}", details={"text": text})
    return Float.irrational(value.exact_value())


def create_from_decimal(value: Decimal) -> Float:
    """Create a Float holding an exact Decimal."""
    return Float.from_decimal(value)
