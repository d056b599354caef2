"""
Kernel exceptions and error codes.

Every fallible kernel operation either returns a value or raises a NumError
whose ``code`` is one member of the closed ErrorCode set. Each subclass also
derives from the closest builtin exception so hosts can catch either way.
"""

from enum import IntEnum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Type


class ErrorCode(IntEnum):
    """Closed set of kernel error codes."""

    UNIMPLEMENTED = -1
    INVALID_FORMAT = 1
    DIV_BY_ZERO = 2
    NEGATIVE_RESULT = 3
    NEGATIVE_SQRT = 4
    NUMBER_TOO_LARGE = 5
    INFINITE_RESULT = 6
    WRONG_SYNTAX = 7


ERROR_MESSAGES: Mapping[ErrorCode, str] = MappingProxyType({
    ErrorCode.UNIMPLEMENTED: "Operation not implemented",
    ErrorCode.INVALID_FORMAT: "Invalid format",
    ErrorCode.DIV_BY_ZERO: "Division by zero",
    ErrorCode.NEGATIVE_RESULT: "Negative result",
    ErrorCode.NEGATIVE_SQRT: "Square root of a negative number",
    ErrorCode.NUMBER_TOO_LARGE: "Number too large",
    ErrorCode.INFINITE_RESULT: "Infinite result",
    ErrorCode.WRONG_SYNTAX: "Wrong syntax",
})

UNKNOWN_ERROR_MESSAGE = "Unknown error"


def get_error_message(code: int) -> str:
    """Human-readable message for an error code ("Unknown error" if unrecognized)."""
    try:
        return ERROR_MESSAGES[ErrorCode(code)]
    except ValueError:
        return UNKNOWN_ERROR_MESSAGE


def get_error_code(message: str) -> Optional[ErrorCode]:
    """Reverse lookup of get_error_message; None when nothing matches."""
    for code, text in ERROR_MESSAGES.items():
        if text == message:
            return code
    return None


class NumError(Exception):
    """Base exception for kernel errors"""

    code: ErrorCode = ErrorCode.UNIMPLEMENTED

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message or get_error_message(self.code)
        self.details = details or {}
        super().__init__(self.message)


class UnimplementedError(NumError, NotImplementedError):
    """Raised for operations the kernel does not support"""

    code = ErrorCode.UNIMPLEMENTED


class InvalidFormatError(NumError, ValueError):
    """Raised when text or a value cannot be interpreted"""

    code = ErrorCode.INVALID_FORMAT


class DivisionByZeroError(NumError, ZeroDivisionError):
    """Raised when an exact division has a zero divisor"""

    code = ErrorCode.DIV_BY_ZERO


class NegativeResultError(NumError, ArithmeticError):
    """Raised when an operation would produce a disallowed negative value"""

    code = ErrorCode.NEGATIVE_RESULT


class NegativeSqrtError(NumError, ValueError):
    """Raised for the real square root of a negative number"""

    code = ErrorCode.NEGATIVE_SQRT


class NumberTooLargeError(NumError, OverflowError):
    """Raised when a result cannot be represented"""

    code = ErrorCode.NUMBER_TOO_LARGE


class InfiniteResultError(NumError, ArithmeticError):
    """Raised when a finite result was required but the value is infinite"""

    code = ErrorCode.INFINITE_RESULT


class WrongSyntaxError(NumError, ValueError):
    """Raised for literals using syntax that is wrong for the target type"""

    code = ErrorCode.WRONG_SYNTAX


_ERROR_CLASSES: Mapping[ErrorCode, Type[NumError]] = MappingProxyType({
    cls.code: cls
    for cls in (
        UnimplementedError,
        InvalidFormatError,
        DivisionByZeroError,
        NegativeResultError,
        NegativeSqrtError,
        NumberTooLargeError,
        InfiniteResultError,
        WrongSyntaxError,
    )
})


def error_for_code(code: int, message: Optional[str] = None, **details: Any) -> NumError:
    """Build the exception matching an error code."""
    cls = _ERROR_CLASSES.get(ErrorCode(code), UnimplementedError)
    return cls(message, details or None)
