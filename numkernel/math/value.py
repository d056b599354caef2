"""
Base NumberValue class for kernel values.

This module provides the foundation shared by Int and Float:
- Type promotion hierarchy (Int promotes to Float in mixed operations)
- Operator overloading routed through one entry point per operation
- Conversion of plain Python numbers into kernel values
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from enum import IntEnum
from fractions import Fraction
from typing import Any, ClassVar, Tuple


class TypePrecedence(IntEnum):
    """
    Type promotion precedence hierarchy.

    Lower values promote to higher values.
    """

    INT = 0  # Int (small or big)
    FLOAT = 1  # Float (every FloatKind, complex included)


class NumberValue(ABC):
    """
    Base class for all kernel number values.

    Provides:
    - Type promotion system
    - Operator overloading (delegating to the named operations)
    - Canonical text output

    Subclasses must implement:
    - type_precedence: Class variable defining promotion order
    - All abstract methods

    Note: Concrete subclasses inherit from both BaseModel and NumberValue,
    e.g., `class Int(BaseModel, NumberValue):`. NumberValue itself is abstract
    and does not inherit from BaseModel to avoid MRO conflicts.
    """

    type_precedence: ClassVar[TypePrecedence]

    @abstractmethod
    def promote(self, other: NumberValue) -> NumberValue:
        """
        Promote this value to be compatible with another type.

        Example:
            Int(2).promote(Float(1.5)) -> Float(2)
        """

    @abstractmethod
    def to_string(self) -> str:
        """Canonical text form (parses back to the same value)."""

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.to_string()})"

    # Named operations (operators below delegate to these)

    @abstractmethod
    def add(self, other: NumberValue) -> NumberValue:
        pass

    @abstractmethod
    def sub(self, other: NumberValue) -> NumberValue:
        pass

    @abstractmethod
    def mul(self, other: NumberValue) -> NumberValue:
        pass

    @abstractmethod
    def div(self, other: NumberValue) -> NumberValue:
        pass

    @abstractmethod
    def rem(self, other: NumberValue) -> NumberValue:
        pass

    @abstractmethod
    def pow(self, other: NumberValue) -> NumberValue:
        pass

    @abstractmethod
    def neg(self) -> NumberValue:
        pass

    @abstractmethod
    def abs(self) -> NumberValue:
        pass

    @abstractmethod
    def is_zero(self) -> bool:
        pass

    @abstractmethod
    def is_negative(self) -> bool:
        pass

    # Operator overloading

    def __add__(self, other: Any) -> NumberValue:
        a, b = promote_types(self, other)
        return a.add(b)

    def __radd__(self, other: Any) -> NumberValue:
        b, a = promote_types(self, other)
        return a.add(b)

    def __sub__(self, other: Any) -> NumberValue:
        a, b = promote_types(self, other)
        return a.sub(b)

    def __rsub__(self, other: Any) -> NumberValue:
        b, a = promote_types(self, other)
        return a.sub(b)

    def __mul__(self, other: Any) -> NumberValue:
        a, b = promote_types(self, other)
        return a.mul(b)

    def __rmul__(self, other: Any) -> NumberValue:
        b, a = promote_types(self, other)
        return a.mul(b)

    def __mod__(self, other: Any) -> NumberValue:
        a, b = promote_types(self, other)
        return a.rem(b)

    def __rmod__(self, other: Any) -> NumberValue:
        b, a = promote_types(self, other)
        return a.rem(b)

    def __pow__(self, other: Any) -> NumberValue:
        return self.pow(to_number(other))

    def __rpow__(self, other: Any) -> NumberValue:
        return to_number(other).pow(self)

    def __neg__(self) -> NumberValue:
        return self.neg()

    def __pos__(self) -> NumberValue:
        return self

    def __abs__(self) -> NumberValue:
        return self.abs()

    def __bool__(self) -> bool:
        return not self.is_zero()


def to_number(value: Any) -> NumberValue:
    """
    Convert a Python value into a kernel value.

    Kernel values pass through; ints become Int; floats, Decimals and
    Fractions become Float; strings are parsed as Int when possible and
    as Float otherwise.
    """
    if isinstance(value, NumberValue):
        return value

    from .integer import Int
    from .numeric import Float

    if isinstance(value, bool):
        raise TypeError(f"Cannot convert {type(value).__name__} to a kernel number")
    if isinstance(value, int):
        return Int.from_int(value)
    if isinstance(value, float):
        return Float.from_double(value)
    if isinstance(value, Decimal):
        return Float.from_decimal(value)
    if isinstance(value, Fraction):
        return Float.from_fraction(value)
    if isinstance(value, complex):
        return Float.from_complex(value)
    if isinstance(value, str):
        from .parser import parse_number
        return parse_number(value)
    raise TypeError(f"Cannot convert {type(value).__name__} to a kernel number")


def promote_types(a: Any, b: Any) -> Tuple[NumberValue, NumberValue]:
    """
    Promote two values to a common type.

    Returns:
        Tuple of (promoted_a, promoted_b) with the same precedence
    """
    a = to_number(a)
    b = to_number(b)
    if a.type_precedence < b.type_precedence:
        return a.promote(b), b
    if b.type_precedence < a.type_precedence:
        return a, b.promote(a)
    return a, b
