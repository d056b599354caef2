"""
Int: arbitrary-precision integer value.

An Int is stored Small (64-bit signed range) or Big (unbounded). Every
operation computes the exact result and tags it Small only when all of its
Int operands were Small and the result still fits; otherwise the result is
promoted to Big. Arithmetic never demotes; normalize() does.
"""

from __future__ import annotations

from decimal import Decimal
from fractions import Fraction
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..core.config import get_settings
from ..core.errors import (
    DivisionByZeroError,
    InvalidFormatError,
    NegativeResultError,
    NegativeSqrtError,
    NumberTooLargeError,
)
from ..core.logging import get_context_logger
from .representation import IntKind, fits_small
from .value import NumberValue, TypePrecedence, to_number

logger = get_context_logger(__name__, component="integer")

# Shifts beyond this many bits are refused outright
MAX_SHIFT_BITS = 2 ** 32

_LOG10_2 = 0.30103


class Int(BaseModel, NumberValue):
    """
    Integer value tagged Small or Big.

    Examples:
        >>> Int(7) + Int(5)
        Int(12)
        >>> Int(2 ** 63 - 1).add(Int(1)).kind
        <IntKind.BIG: 'big'>
    """

    model_config = ConfigDict(frozen=True)

    value: int = Field(description="The exact integer value")
    kind: IntKind = Field(description="Storage tag (small or big)")

    type_precedence: ClassVar[TypePrecedence] = TypePrecedence.INT

    def __init__(self, value: int = 0, kind: IntKind | None = None, **kwargs):
        """
        Initialize an Int.

        Args:
            value: The integer value
            kind: Storage tag; chosen from the value's magnitude when omitted
        """
        if kind is None:
            kind = IntKind.SMALL if fits_small(value) else IntKind.BIG
        super().__init__(value=value, kind=kind, **kwargs)

    @model_validator(mode="after")
    def _check_small_range(self) -> Int:
        if self.kind is IntKind.SMALL and not fits_small(self.value):
            raise ValueError(f"Small Int out of 64-bit range: {self.value}")
        return self

    # Construction

    @classmethod
    def from_int(cls, value: int) -> Int:
        return cls(value)

    @classmethod
    def big(cls, value: int) -> Int:
        """Int stored Big regardless of magnitude."""
        return cls(value, IntKind.BIG)

    @classmethod
    def from_str_radix(cls, text: str, radix: int) -> Int:
        """Parse digits in the given radix (2..36); underscores separate digits."""
        from .parser import parse_int_radix
        return parse_int_radix(text, radix)

    @classmethod
    def from_hex(cls, text: str) -> Int:
        """Parse hexadecimal text with an optional sign and 0x prefix."""
        from .parser import parse_int_radix
        return parse_int_radix(text, 16, allow_prefix=True)

    def _result(self, value: int, *operands: Int, operation: str) -> Int:
        if all(o.kind is IntKind.SMALL for o in (self, *operands)):
            if fits_small(value):
                return Int(value, IntKind.SMALL)
            logger.debug(
                "Small integer overflow, promoting to big",
                extra_data={"operation": operation},
            )
        return Int(value, IntKind.BIG)

    # Type promotion

    def promote(self, other: NumberValue) -> NumberValue:
        if other.type_precedence > self.type_precedence:
            return self.to_float()
        return self

    # Predicates

    def is_small(self) -> bool:
        return self.kind is IntKind.SMALL

    def is_big(self) -> bool:
        return self.kind is IntKind.BIG

    def is_zero(self) -> bool:
        return self.value == 0

    def is_negative(self) -> bool:
        return self.value < 0

    # Arithmetic

    def add(self, other: Int) -> Int:
        return self._result(self.value + other.value, other, operation="add")

    def sub(self, other: Int) -> Int:
        return self._result(self.value - other.value, other, operation="sub")

    def mul(self, other: Int) -> Int:
        return self._result(self.value * other.value, other, operation="mul")

    def div(self, other: Int) -> Int:
        """Quotient truncated toward zero."""
        if other.value == 0:
            raise DivisionByZeroError(details={"dividend": self.to_string()})
        quotient = abs(self.value) // abs(other.value)
        if (self.value < 0) != (other.value < 0):
            quotient = -quotient
        return self._result(quotient, other, operation="div")

    def rem(self, other: Int) -> Int:
        """Remainder carrying the dividend's sign (a == b * q + r)."""
        if other.value == 0:
            raise DivisionByZeroError(details={"dividend": self.to_string()})
        remainder = abs(self.value) % abs(other.value)
        if self.value < 0:
            remainder = -remainder
        return self._result(remainder, other, operation="rem")

    def pow(self, other: NumberValue) -> NumberValue:
        """
        Raise to a power.

        A negative Int exponent raises NegativeResultError; a Float exponent
        promotes the base and uses Float.pow.
        """
        if not isinstance(other, Int):
            return self.to_float().pow(to_number(other))
        exponent = other.value
        if exponent < 0:
            raise NegativeResultError(
                "Negative exponent for an integer power",
                details={"exponent": other.to_string()},
            )
        base = self.value
        if abs(base) > 1 and exponent > 1:
            digits = exponent * base.bit_length() * _LOG10_2
            limit = get_settings().MAX_RESULT_DIGITS
            if digits > limit:
                raise NumberTooLargeError(details={"estimated_digits": int(digits), "limit": limit})
        return self._result(base ** exponent, other, operation="pow")

    def neg(self) -> Int:
        return self._result(-self.value, operation="neg")

    def abs(self) -> Int:
        return self._result(abs(self.value), operation="abs")

    def sqrt(self):
        """Square root as a Float (exact when the root is an integer)."""
        if self.value < 0:
            raise NegativeSqrtError(details={"value": self.to_string()})
        return self.to_float().sqrt()

    def floor(self) -> Int:
        return self

    def ceil(self) -> Int:
        return self

    def normalize(self) -> Int:
        """Demote a Big value to Small when it fits."""
        if self.kind is IntKind.BIG and fits_small(self.value):
            return Int(self.value, IntKind.SMALL)
        return self

    # Transcendentals (evaluated as Float)

    def sin(self):
        return self.to_float().sin()

    def cos(self):
        return self.to_float().cos()

    def tan(self):
        return self.to_float().tan()

    def ln(self):
        return self.to_float().ln()

    def exp(self):
        return self.to_float().exp()

    def log10(self):
        return self.to_float().log10()

    def log(self, base: Any):
        return self.to_float().log(base)

    # Bitwise

    def bit_and(self, other: Int) -> Int:
        return self._result(self.value & other.value, other, operation="and")

    def bit_or(self, other: Int) -> Int:
        return self._result(self.value | other.value, other, operation="or")

    def bit_xor(self, other: Int) -> Int:
        return self._result(self.value ^ other.value, other, operation="xor")

    def bit_xnor(self, other: Int) -> Int:
        return self._result(~(self.value ^ other.value), other, operation="xnor")

    def bit_not(self) -> Int:
        return self._result(~self.value, operation="not")

    def _shift_amount(self, other: Int) -> int:
        if other.value < 0:
            raise NegativeResultError("Negative shift count", details={"shift": other.to_string()})
        if other.value >= MAX_SHIFT_BITS:
            raise NumberTooLargeError("Shift count too large", details={"shift": other.to_string()})
        return other.value

    def shl(self, other: Int) -> Int:
        return self._result(self.value << self._shift_amount(other), other, operation="shl")

    def shr(self, other: Int) -> Int:
        return self._result(self.value >> self._shift_amount(other), other, operation="shr")

    # Conversion

    def to_float(self):
        """Exact Float with the same value (Small when the double round-trips)."""
        from .numeric import Float
        return Float.from_fraction(Fraction(self.value), prefer_small=self.is_small())

    def to_int(self) -> Int:
        return self

    def to_double(self) -> float:
        from .representation import fraction_to_float
        return fraction_to_float(Fraction(self.value))

    def to_fixed(self, bits: int, signed: bool = True) -> int:
        """
        Convert to a fixed-width machine integer.

        Raises:
            NegativeResultError: negative value into an unsigned width
            NumberTooLargeError: value outside the width's range
        """
        if signed:
            low, high = -(2 ** (bits - 1)), 2 ** (bits - 1) - 1
        else:
            if self.value < 0:
                raise NegativeResultError(details={"value": self.to_string(), "bits": bits})
            low, high = 0, 2 ** bits - 1
        if not low <= self.value <= high:
            raise NumberTooLargeError(details={"value": self.to_string(), "bits": bits, "signed": signed})
        return self.value

    def to_i64(self) -> int:
        return self.to_fixed(64, signed=True)

    def to_u64(self) -> int:
        return self.to_fixed(64, signed=False)

    def to_usize(self) -> int:
        return self.to_fixed(64, signed=False)

    def to_decimal(self) -> Decimal:
        return Decimal(self.value)

    def to_string(self) -> str:
        from .formatter import format_int
        return format_int(self.value)

    def to_str_radix(self, radix: int) -> str:
        from .formatter import format_int_radix
        return format_int_radix(self.value, radix)

    def __str__(self) -> str:
        """String representation (for str() builtin)."""
        return self.to_string()

    def __repr__(self) -> str:
        return f"Int({self.to_string()})"

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value

    def __float__(self) -> float:
        return self.to_double()

    # Operators not covered by NumberValue

    def __truediv__(self, other: Any) -> NumberValue:
        """
        Exact quotient as a Float (1 / 3 -> 0.(3)).

        Dividing by an Int zero raises DivisionByZeroError; dividing by a
        Float zero follows the Float rules.
        """
        other = to_number(other)
        if isinstance(other, Int) and other.value == 0:
            raise DivisionByZeroError(details={"dividend": self.to_string()})
        return self.to_float().div(other.promote(self.to_float()))

    def __rtruediv__(self, other: Any) -> NumberValue:
        other = to_number(other)
        if isinstance(other, Int) and self.value == 0:
            raise DivisionByZeroError(details={"dividend": other.to_string()})
        return other.promote(self.to_float()).div(self.to_float())

    def __floordiv__(self, other: Any) -> NumberValue:
        other = to_number(other)
        if isinstance(other, Int):
            return self.div(other)
        return self.to_float().div(other).floor()

    def __rfloordiv__(self, other: Any) -> NumberValue:
        other = to_number(other)
        if isinstance(other, Int):
            return other.div(self)
        return other.div(self.to_float()).floor()

    def __and__(self, other: Any) -> Int:
        return self.bit_and(_as_int(other))

    def __rand__(self, other: Any) -> Int:
        return _as_int(other).bit_and(self)

    def __or__(self, other: Any) -> Int:
        return self.bit_or(_as_int(other))

    def __ror__(self, other: Any) -> Int:
        return _as_int(other).bit_or(self)

    def __xor__(self, other: Any) -> Int:
        return self.bit_xor(_as_int(other))

    def __rxor__(self, other: Any) -> Int:
        return _as_int(other).bit_xor(self)

    def __invert__(self) -> Int:
        return self.bit_not()

    def __lshift__(self, other: Any) -> Int:
        return self.shl(_as_int(other))

    def __rshift__(self, other: Any) -> Int:
        return self.shr(_as_int(other))

    # Comparison

    def __eq__(self, other: Any) -> bool:
        from .equality import values_equal
        try:
            return values_equal(self, to_number(other))
        except (TypeError, ValueError):
            return NotImplemented

    def __ne__(self, other: Any) -> bool:
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    def __hash__(self) -> int:
        return hash(self.value)

    def __lt__(self, other: Any) -> bool:
        from .equality import compare_values
        return compare_values(self, to_number(other)) < 0

    def __le__(self, other: Any) -> bool:
        from .equality import compare_values
        return compare_values(self, to_number(other)) <= 0

    def __gt__(self, other: Any) -> bool:
        from .equality import compare_values
        return compare_values(self, to_number(other)) > 0

    def __ge__(self, other: Any) -> bool:
        from .equality import compare_values
        return compare_values(self, to_number(other)) >= 0

    def cmp(self, other: Any) -> int:
        """Three-way comparison: -1, 0 or 1."""
        from .equality import compare_values
        return compare_values(self, to_number(other))

    def approx_eq(self, other: Any, epsilon: Any = 0) -> bool:
        from .equality import approx_equal
        return approx_equal(self, to_number(other), to_number(epsilon))


def _as_int(value: Any) -> Int:
    value = to_number(value)
    if not isinstance(value, Int):
        raise InvalidFormatError(
            "Bitwise operations need integer operands",
            details={"operand": value.to_string()},
        )
    return value
