"""Core utilities package"""

from .config import settings, get_settings, Settings
from .logging import setup_logging, get_logger, get_context_logger
from .errors import (
    ErrorCode,
    ERROR_MESSAGES,
    NumError,
    UnimplementedError,
    InvalidFormatError,
    DivisionByZeroError,
    NegativeResultError,
    NegativeSqrtError,
    NumberTooLargeError,
    InfiniteResultError,
    WrongSyntaxError,
    error_for_code,
    get_error_message,
    get_error_code,
)

__all__ = [
    "settings",
    "get_settings",
    "Settings",
    "setup_logging",
    "get_logger",
    "get_context_logger",
    "ErrorCode",
    "ERROR_MESSAGES",
    "NumError",
    "UnimplementedError",
    "InvalidFormatError",
    "DivisionByZeroError",
    "NegativeResultError",
    "NegativeSqrtError",
    "NumberTooLargeError",
    "InfiniteResultError",
    "WrongSyntaxError",
    "error_for_code",
    "get_error_message",
    "get_error_code",
]
