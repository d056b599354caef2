"""
numkernel: arbitrary-precision numeric values for language runtimes.

Immutable Int and Float values with exact rational arithmetic, recurring
decimals, 137-digit irrational results, complex numbers and IEEE-like
NaN/Infinity.

Example:
    >>> from numkernel import create_int, create_float
    >>> str(create_int("1") / create_int("3"))
    '0.(3)'
    >>> create_float("0.(9)") == create_int("1")
    True
"""

from .core.errors import (
    ErrorCode,
    NumError,
    UnimplementedError,
    InvalidFormatError,
    DivisionByZeroError,
    NegativeResultError,
    NegativeSqrtError,
    NumberTooLargeError,
    InfiniteResultError,
    WrongSyntaxError,
    get_error_message,
    get_error_code,
)
from .math import (
    IRRATIONAL_DIGITS,
    Float,
    FloatKind,
    Int,
    IntKind,
    NumberValue,
    create_complex,
    create_float,
    create_from_decimal,
    create_imaginary,
    create_int,
    create_irrational,
)

__version__ = "0.1.0"

__all__ = [
    "ErrorCode",
    "NumError",
    "UnimplementedError",
    "InvalidFormatError",
    "DivisionByZeroError",
    "NegativeResultError",
    "NegativeSqrtError",
    "NumberTooLargeError",
    "InfiniteResultError",
    "WrongSyntaxError",
    "get_error_message",
    "get_error_code",
    "IRRATIONAL_DIGITS",
    "Float",
    "FloatKind",
    "Int",
    "IntKind",
    "NumberValue",
    "create_complex",
    "create_float",
    "create_from_decimal",
    "create_imaginary",
    "create_int",
    "create_irrational",
]
