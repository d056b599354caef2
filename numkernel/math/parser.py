"""
Literal parser: text -> Int / Float.

Failures raise a NumError subclass and never return a partial value:
InvalidFormatError for text that is not a number at all, WrongSyntaxError
for number-like text whose syntax is wrong for the requested type (a float
literal given to the Int parser, a malformed recurring suffix).
"""

from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Optional, Tuple

from ..core.config import get_settings
from ..core.errors import InvalidFormatError, NumberTooLargeError, WrongSyntaxError
from .integer import Int
from .numeric import Float
from .representation import FloatKind, parse_int_digits
from .value import NumberValue

_RADIX_PREFIXES = {"0x": 16, "0b": 2, "0o": 8}

_DIGIT_GROUPS = re.compile(r"[0-9a-z]+(?:_[0-9a-z]+)*", re.IGNORECASE)

_REAL_LITERAL = re.compile(
    r"""
    (?P<sign>[+-])?
    (?P<int>\d*)
    (?:\.(?P<frac>\d*))?
    (?:[eE](?P<exp>[+-]?\d+))?
    """,
    re.VERBOSE | re.ASCII,
)

_RECURRING_LITERAL = re.compile(
    r"""
    (?P<sign>[+-])?
    (?P<int>\d*)
    \.(?P<frac>\d*)
    \((?P<rep>[^()]*)\)
    """,
    re.VERBOSE | re.ASCII,
)

_INFINITY_TOKENS = {"inf", "infinity"}
_NAN_TOKENS = {"nan"}


def _split_sign(text: str) -> Tuple[bool, str]:
    if text and text[0] in "+-":
        return text[0] == "-", text[1:]
    return False, text


def _digits_value(digits: str, radix: int, source: str) -> int:
    if not digits.isascii() or not _DIGIT_GROUPS.fullmatch(digits):
        raise InvalidFormatError(f"Invalid integer literal: {source!r}", details={"text": source})
    clean = digits.replace("_", "").lower()
    for char in clean:
        if int(char, 36) >= radix:
            raise InvalidFormatError(
                f"Digit {char!r} is invalid in base {radix}",
                details={"text": source, "radix": radix},
            )
    if radix == 10:
        return parse_int_digits(clean)
    try:
        return int(clean, radix)
    except ValueError as exc:
        # int() refuses very long non power-of-two radix strings
        raise NumberTooLargeError(details={"text_length": len(clean), "radix": radix}) from exc


def _looks_like_float(text: str) -> bool:
    try:
        parse_float(text)
    except NumberTooLargeError:
        return True
    except (InvalidFormatError, WrongSyntaxError):
        return "(" in text or ")" in text
    return True


def parse_int(text: str) -> Int:
    """
    Parse an Int literal.

    Accepts an optional sign, decimal digits or a 0x/0b/0o prefixed body,
    and single underscores between digits; surrounding whitespace is
    trimmed.

    Raises:
        InvalidFormatError: empty input or digits invalid for the base
        WrongSyntaxError: float-only syntax (point, exponent, recurring
            suffix, imaginary unit, inf/nan)
    """
    stripped = text.strip()
    if not stripped:
        raise InvalidFormatError("Empty integer literal")
    negative, body = _split_sign(stripped)
    if not body:
        raise InvalidFormatError(f"Invalid integer literal: {text!r}", details={"text": text})

    radix = _RADIX_PREFIXES.get(body[:2].lower())
    if radix is not None:
        value = _digits_value(body[2:], radix, text)
        return Int(-value if negative else value)

    if not _DIGIT_GROUPS.fullmatch(body) or not body.replace("_", "").isdigit():
        if _looks_like_float(stripped):
            raise WrongSyntaxError(
                f"Float syntax in integer literal: {text!r}", details={"text": text}
            )
    value = _digits_value(body, 10, text)
    return Int(-value if negative else value)


def parse_int_radix(text: str, radix: int, allow_prefix: bool = False) -> Int:
    """
    Parse digits in radix 2..36.

    Args:
        text: Optional sign followed by digits (underscores allowed)
        radix: Base of the digits
        allow_prefix: Accept the 0x/0b/0o prefix matching ``radix``
    """
    if not 2 <= radix <= 36:
        raise InvalidFormatError(f"Radix must be between 2 and 36, got {radix}")
    stripped = text.strip()
    if not stripped:
        raise InvalidFormatError("Empty integer literal")
    negative, body = _split_sign(stripped)
    if allow_prefix and _RADIX_PREFIXES.get(body[:2].lower()) == radix:
        body = body[2:]
    value = _digits_value(body, radix, text)
    return Int(-value if negative else value)


def _special_float(token: str) -> Optional[Float]:
    negative, body = _split_sign(token)
    lowered = body.lower()
    if lowered in _INFINITY_TOKENS:
        return Float.infinity(negative=negative)
    if lowered in _NAN_TOKENS:
        return Float.nan()
    return None


def _classify_terminating(value: Decimal) -> Float:
    # SMALL when the nearest double prints back as exactly this value
    candidate = float(value)
    if math.isfinite(candidate) and Decimal(repr(candidate)) == value:
        return Float(kind=FloatKind.SMALL, small=candidate)
    return Float.from_decimal(value)


def parse_real(text: str) -> Float:
    """Parse a real (non-complex) float literal."""
    special = _special_float(text)
    if special is not None:
        return special

    if "(" in text or ")" in text:
        match = _RECURRING_LITERAL.fullmatch(text)
        if match is None:
            raise WrongSyntaxError(f"Malformed recurring literal: {text!r}", details={"text": text})
        rep = match.group("rep")
        if not rep or not rep.isdigit() or not rep.isascii():
            raise WrongSyntaxError(
                f"Recurring part must be one or more digits: {text!r}", details={"text": text}
            )
        sign = match.group("sign") or ""
        whole = match.group("int") or "0"
        digits = Decimal(f"{sign}{whole}.{match.group('frac')}{rep}")
        return Float.recurring(digits, len(rep))

    match = _REAL_LITERAL.fullmatch(text)
    if match is None or not (match.group("int") or match.group("frac")):
        raise InvalidFormatError(f"Invalid float literal: {text!r}", details={"text": text})
    exponent = match.group("exp")
    if exponent is not None and abs(int(exponent)) > get_settings().MAX_RESULT_DIGITS:
        raise NumberTooLargeError(details={"text": text, "exponent": exponent})
    return _classify_terminating(Decimal(text))


def _split_complex(body: str) -> Tuple[Optional[str], str]:
    """Split ``a+bi`` into (real text, imaginary coefficient text)."""
    for index in range(len(body) - 1, 0, -1):
        if body[index] in "+-" and body[index - 1] not in "eE":
            return body[:index], body[index:]
    return None, body


def _imaginary_coefficient(text: str) -> Float:
    if text in ("", "+"):
        return Float.one()
    if text == "-":
        return Float.one().neg()
    return parse_real(text)


def parse_float(text: str) -> Float:
    """
    Parse a Float literal.

    Accepts decimal literals with optional fraction and exponent, recurring
    literals such as ``0.(3)`` or ``1.2(45)``, the case-insensitive tokens
    ``inf``, ``infinity`` and ``nan`` with an optional sign, and complex
    forms ``a+bi``, ``a-bi``, ``bi``, ``i``, ``-i``.

    Raises:
        InvalidFormatError: text that is not a float literal
        WrongSyntaxError: malformed recurring suffix
    """
    stripped = text.strip()
    if not stripped:
        raise InvalidFormatError("Empty float literal")
    if any(char.isspace() for char in stripped):
        raise InvalidFormatError(f"Whitespace inside float literal: {text!r}", details={"text": text})

    if stripped.endswith("i") and _special_float(stripped) is None:
        real_text, imag_text = _split_complex(stripped[:-1])
        imag = _imaginary_coefficient(imag_text)
        real = parse_real(real_text) if real_text is not None else Float.zero()
        return Float.complex(real, imag)

    return parse_real(stripped)


def parse_number(text: str) -> NumberValue:
    """Int when the text is an integer literal, Float otherwise."""
    try:
        return parse_int(text)
    except WrongSyntaxError:
        return parse_float(text)
