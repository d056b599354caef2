"""
Number values for the kernel.

Int and Float are immutable tagged values; see representation.py for the
tags and numeric.py for the Float payloads.
"""

from .value import NumberValue, TypePrecedence, promote_types, to_number
from .representation import IRRATIONAL_DIGITS, FloatKind, IntKind
from .integer import Int
from .numeric import Float
from .parser import parse_float, parse_int, parse_number
from .functions import (
    create_complex,
    create_float,
    create_from_decimal,
    create_imaginary,
    create_int,
    create_irrational,
)

__all__ = [
    "NumberValue",
    "TypePrecedence",
    "promote_types",
    "to_number",
    "IRRATIONAL_DIGITS",
    "FloatKind",
    "IntKind",
    "Int",
    "Float",
    "parse_float",
    "parse_int",
    "parse_number",
    "create_complex",
    "create_float",
    "create_from_decimal",
    "create_imaginary",
    "create_int",
    "create_irrational",
]
