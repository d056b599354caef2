"""
Float: the kernel's real and complex value type.

A Float is a single frozen model tagged by FloatKind; the tag says which
payload field is meaningful:

- SMALL: ``small`` holds a double, read through its shortest repr
- BIG: ``decimal`` holds an exact terminating decimal
- RECURRING: ``decimal`` holds the digits through one cycle, ``period`` the cycle length
- IRRATIONAL: ``decimal`` holds the value truncated to 137 fractional digits
- NAN / INFINITY / NEG_INFINITY: no payload
- COMPLEX: ``real`` and ``imag`` hold non-complex Floats

Finite arithmetic is carried out on exact rationals and the result is
classified back into the narrowest tag that represents it. Any Irrational
operand makes the result Irrational.
"""

from __future__ import annotations

import math
from decimal import Decimal
from fractions import Fraction
from typing import Any, Callable, ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from sympy import integer_nthroot

from ..core.config import get_settings
from ..core.errors import (
    DivisionByZeroError,
    InfiniteResultError,
    InvalidFormatError,
    NegativeSqrtError,
    NumberTooLargeError,
)
from ..core.logging import get_context_logger
from .representation import (
    IRRATIONAL_DIGITS,
    FloatKind,
    decimal_scale,
    float_to_fraction,
    fraction_to_decimal,
    fraction_to_float,
    fraction_to_recurring,
    make_decimal,
    recurring_to_fraction,
    split_denominator,
    truncate_fraction,
    truncate_irrational,
)
from .value import NumberValue, TypePrecedence, to_number

logger = get_context_logger(__name__, component="numeric")

# Largest root degree tried exactly for rational exponents
MAX_ROOT_DEGREE = 200

_LOG10_2 = 0.30103


class Float(BaseModel, NumberValue):
    """
    Real or complex number tagged by its representation.

    Examples:
        >>> Float.from_fraction(Fraction(1, 3))
        Float(0.(3))
        >>> Float.from_double(0.5).add(Float.from_double(0.25))
        Float(0.75)
    """

    model_config = ConfigDict(frozen=True)

    kind: FloatKind = Field(description="Representation tag")
    small: Optional[float] = Field(default=None, description="Machine double (SMALL)")
    decimal: Optional[Decimal] = Field(
        default=None, description="Decimal payload (BIG, RECURRING, IRRATIONAL)"
    )
    period: int = Field(default=0, ge=0, description="Repeating cycle length (RECURRING)")
    real: Optional[Float] = Field(default=None, description="Real component (COMPLEX)")
    imag: Optional[Float] = Field(default=None, description="Imaginary component (COMPLEX)")

    type_precedence: ClassVar[TypePrecedence] = TypePrecedence.FLOAT

    @model_validator(mode="after")
    def _check_payload(self) -> Float:
        kind = self.kind
        if kind is FloatKind.SMALL:
            if self.small is None or not math.isfinite(self.small):
                raise ValueError("SMALL Float needs a finite double")
        elif kind in (FloatKind.BIG, FloatKind.RECURRING, FloatKind.IRRATIONAL):
            if self.decimal is None or not self.decimal.is_finite():
                raise ValueError(f"{kind.name} Float needs a finite decimal")
            if kind is FloatKind.RECURRING:
                if not 0 < self.period <= decimal_scale(self.decimal):
                    raise ValueError("Recurring period must cover stored fractional digits")
        elif kind is FloatKind.COMPLEX:
            if self.real is None or self.imag is None:
                raise ValueError("COMPLEX Float needs real and imaginary parts")
            if self.real.kind is FloatKind.COMPLEX or self.imag.kind is FloatKind.COMPLEX:
                raise ValueError("Complex components must not be complex")
        return self

    # Construction

    @classmethod
    def from_double(cls, value: float) -> Float:
        """Float from a machine double (NaN and infinities map to their tags)."""
        if math.isnan(value):
            return cls.nan()
        if math.isinf(value):
            return cls.infinity(negative=value < 0)
        return cls(kind=FloatKind.SMALL, small=float(value))

    @classmethod
    def from_decimal(cls, value: Decimal) -> Float:
        """BIG Float holding an exact decimal."""
        if value.is_nan():
            return cls.nan()
        if value.is_infinite():
            return cls.infinity(negative=value.is_signed())
        return cls(kind=FloatKind.BIG, decimal=value)

    @classmethod
    def from_fraction(cls, value: Fraction, prefer_small: bool = False) -> Float:
        """
        Classify an exact rational.

        Terminating values become SMALL (when ``prefer_small`` and the
        double's shortest repr is exact) or BIG; non-terminating values
        become RECURRING, or IRRATIONAL when the cycle is longer than the
        configured limit.
        """
        exact = fraction_to_decimal(value)
        if exact is not None:
            if prefer_small:
                candidate = fraction_to_float(value)
                if math.isfinite(candidate) and float_to_fraction(candidate) == value:
                    return cls(kind=FloatKind.SMALL, small=candidate)
            return cls(kind=FloatKind.BIG, decimal=exact)

        limit = get_settings().MAX_RECURRING_PERIOD
        stored = fraction_to_recurring(value, limit)
        if stored is None:
            logger.warning(
                "Recurring cycle too long, truncating to irrational",
                extra_data={"limit": limit},
            )
            return cls.irrational(value)
        digits, period = stored
        return cls(kind=FloatKind.RECURRING, decimal=digits, period=period)

    @classmethod
    def recurring(cls, value: Decimal, period: int) -> Float:
        """RECURRING Float whose last ``period`` fractional digits repeat."""
        return cls(kind=FloatKind.RECURRING, decimal=value, period=period)

    @classmethod
    def irrational(cls, value: Fraction | Decimal) -> Float:
        """Truncate to 137 fractional digits and tag IRRATIONAL (exact zero stays SMALL)."""
        digits = truncate_irrational(Fraction(value))
        if digits.is_zero():
            return cls.zero()
        return cls(kind=FloatKind.IRRATIONAL, decimal=digits)

    @classmethod
    def complex(cls, real: Float, imag: Float) -> Float:
        return cls(kind=FloatKind.COMPLEX, real=real, imag=imag)

    @classmethod
    def from_complex(cls, value: complex) -> Float:
        return cls.complex(cls.from_double(value.real), cls.from_double(value.imag))

    @classmethod
    def nan(cls) -> Float:
        return cls(kind=FloatKind.NAN)

    @classmethod
    def infinity(cls, negative: bool = False) -> Float:
        return cls(kind=FloatKind.NEG_INFINITY if negative else FloatKind.INFINITY)

    @classmethod
    def zero(cls) -> Float:
        return cls(kind=FloatKind.SMALL, small=0.0)

    @classmethod
    def one(cls) -> Float:
        return cls(kind=FloatKind.SMALL, small=1.0)

    # Type promotion

    def promote(self, other: NumberValue) -> NumberValue:
        """Float is the top of the hierarchy."""
        return self

    # Predicates

    def is_small(self) -> bool:
        return self.kind is FloatKind.SMALL

    def is_big(self) -> bool:
        return self.kind is FloatKind.BIG

    def is_finite(self) -> bool:
        """Terminating stored value (SMALL or BIG)."""
        return self.kind.is_finite

    def is_recurring(self) -> bool:
        return self.kind is FloatKind.RECURRING

    def is_irrational(self) -> bool:
        return self.kind is FloatKind.IRRATIONAL

    def is_nan(self) -> bool:
        return self.kind is FloatKind.NAN

    def is_infinity(self) -> bool:
        """True for either infinity."""
        return self.kind.is_infinite

    def is_complex(self) -> bool:
        return self.kind is FloatKind.COMPLEX

    def is_zero(self) -> bool:
        if self.kind is FloatKind.COMPLEX:
            return self.real.is_zero() and self.imag.is_zero()
        if not self.kind.is_real:
            return False
        return self.exact_value() == 0

    def is_negative(self) -> bool:
        if self.kind is FloatKind.NEG_INFINITY:
            return True
        if not self.kind.is_real:
            return False
        return self.exact_value() < 0

    def is_integer_like(self) -> bool:
        """Exactly integral value (never true for IRRATIONAL, NaN or infinities)."""
        if self.kind is FloatKind.COMPLEX:
            return self.imag.is_zero() and self.real.is_integer_like()
        return self.kind.is_exact and self.exact_value().denominator == 1

    # Exact views

    def exact_value(self) -> Fraction:
        """
        Exact rational value of a real finite Float.

        IRRATIONAL values yield their truncated digits.

        Raises:
            InvalidFormatError: for NaN, infinities and complex values
        """
        kind = self.kind
        if kind is FloatKind.SMALL:
            return float_to_fraction(self.small)
        if kind is FloatKind.RECURRING:
            return recurring_to_fraction(self.decimal, self.period)
        if kind in (FloatKind.BIG, FloatKind.IRRATIONAL):
            return Fraction(self.decimal)
        raise InvalidFormatError(
            f"{kind.name} has no exact rational value", details={"kind": kind.value}
        )

    def real_part(self) -> Float:
        return self.real if self.kind is FloatKind.COMPLEX else self

    def imag_part(self) -> Float:
        return self.imag if self.kind is FloatKind.COMPLEX else Float.zero()

    # Arithmetic

    def _binary(
        self,
        other: Any,
        exact_op: Callable[[Fraction, Fraction], Fraction],
        special_op: Callable[[float, float], float],
        complex_op: Callable[[Float, Float], Float],
    ) -> Float:
        other = _as_float(other)
        if self.kind is FloatKind.COMPLEX or other.kind is FloatKind.COMPLEX:
            return complex_op(self, other)
        if self.kind is FloatKind.NAN or other.kind is FloatKind.NAN:
            return Float.nan()
        if self.kind.is_infinite or other.kind.is_infinite:
            return Float.from_double(special_op(self._sign_seed(), other._sign_seed()))
        result = exact_op(self.exact_value(), other.exact_value())
        if self.kind is FloatKind.IRRATIONAL or other.kind is FloatKind.IRRATIONAL:
            return Float.irrational(result)
        return Float.from_fraction(
            result, prefer_small=self.kind is FloatKind.SMALL and other.kind is FloatKind.SMALL
        )

    def _sign_seed(self) -> float:
        # Infinities stay infinite; finite values reduce to their sign
        if self.kind is FloatKind.INFINITY:
            return math.inf
        if self.kind is FloatKind.NEG_INFINITY:
            return -math.inf
        value = self.exact_value()
        return float((value > 0) - (value < 0))

    def add(self, other: Any) -> Float:
        from . import complexnum
        return self._binary(other, lambda a, b: a + b, lambda a, b: a + b, complexnum.add)

    def sub(self, other: Any) -> Float:
        from . import complexnum
        return self._binary(other, lambda a, b: a - b, lambda a, b: a - b, complexnum.sub)

    def mul(self, other: Any) -> Float:
        from . import complexnum
        return self._binary(other, lambda a, b: a * b, lambda a, b: a * b, complexnum.mul)

    def div(self, other: Any) -> Float:
        """
        Divide.

        Real division by zero follows IEEE: 0/0 is NaN and x/0 is an
        infinity carrying the numerator's sign. Complex division by zero
        raises DivisionByZeroError.
        """
        from . import complexnum
        other = _as_float(other)
        if self.kind is FloatKind.COMPLEX or other.kind is FloatKind.COMPLEX:
            return complexnum.div(self, other)
        if self.kind is FloatKind.NAN or other.kind is FloatKind.NAN:
            return Float.nan()
        if other.is_zero():
            if self.is_zero():
                return Float.nan()
            return Float.infinity(negative=self.is_negative())
        return self._binary(other, lambda a, b: a / b, lambda a, b: a / b, complexnum.div)

    def rem(self, other: Any) -> Float:
        """Remainder of truncated division, carrying the dividend's sign."""
        other = _as_float(other)
        if self.kind is FloatKind.COMPLEX or other.kind is FloatKind.COMPLEX:
            raise InvalidFormatError("Remainder is undefined for complex values")
        if self.kind is FloatKind.NAN or other.kind is FloatKind.NAN:
            return Float.nan()
        if self.kind.is_infinite or other.is_zero():
            return Float.nan()
        if other.kind.is_infinite:
            return self

        def exact_rem(a: Fraction, b: Fraction) -> Fraction:
            return a - b * int(a / b)

        return self._binary(other, exact_rem, math.fmod, _unsupported_complex)

    def pow(self, other: Any) -> Float:
        """
        Raise to a power.

        Integer exponents are exact; rational exponents p/q try an exact
        q-th root first; everything else is refined with mpmath and
        tagged IRRATIONAL. A negative real base with a non-integer
        exponent gives NaN.
        """
        other = _as_float(other)
        if other.is_zero():
            return Float.one()
        if self.kind is FloatKind.COMPLEX or other.kind is FloatKind.COMPLEX:
            from . import complexnum
            return complexnum.power(self, other)
        if not (self.kind.is_real and other.kind.is_real):
            return Float.from_double(math.pow(self.to_double(), other.to_double()))

        base = self.exact_value()
        if other.is_integer_like():
            return self._int_pow(int(other.exact_value()), other)
        if base == 0:
            return Float.infinity() if other.is_negative() else Float.zero()
        if base < 0:
            return Float.nan()

        if self.kind.is_exact and other.kind.is_exact:
            exponent = other.exact_value()
            if exponent.denominator <= MAX_ROOT_DEGREE:
                num_root, num_exact = integer_nthroot(base.numerator, exponent.denominator)
                den_root, den_exact = integer_nthroot(base.denominator, exponent.denominator)
                if num_exact and den_exact:
                    root = Float.from_fraction(
                        Fraction(int(num_root), int(den_root)),
                        prefer_small=self.kind is FloatKind.SMALL,
                    )
                    return root._int_pow(exponent.numerator, other)

        from .transcendental import power
        return power(self, other)

    def _int_pow(self, exponent: int, other: Float) -> Float:
        base = self.exact_value()
        if base == 0:
            return Float.infinity() if exponent < 0 else Float.zero()
        magnitude = max(base.numerator.bit_length(), base.denominator.bit_length())
        digits = abs(exponent) * magnitude * _LOG10_2
        limit = get_settings().MAX_RESULT_DIGITS
        if abs(exponent) > 1 and digits > limit:
            raise NumberTooLargeError(details={"estimated_digits": int(digits), "limit": limit})
        result = base ** exponent
        if self.kind is FloatKind.IRRATIONAL:
            return Float.irrational(result)
        return Float.from_fraction(
            result, prefer_small=self.kind is FloatKind.SMALL and other.kind is FloatKind.SMALL
        )

    def neg(self) -> Float:
        kind = self.kind
        if kind is FloatKind.SMALL:
            return Float(kind=kind, small=-self.small)
        if kind in (FloatKind.BIG, FloatKind.RECURRING, FloatKind.IRRATIONAL):
            return Float(kind=kind, decimal=self.decimal.copy_negate(), period=self.period)
        if kind is FloatKind.INFINITY:
            return Float.infinity(negative=True)
        if kind is FloatKind.NEG_INFINITY:
            return Float.infinity()
        if kind is FloatKind.COMPLEX:
            return Float.complex(self.real.neg(), self.imag.neg())
        return self

    def abs(self) -> Float:
        """Absolute value; the modulus for complex values."""
        if self.kind is FloatKind.COMPLEX:
            from . import complexnum
            return complexnum.modulus(self)
        if self.kind is FloatKind.NEG_INFINITY:
            return Float.infinity()
        if self.kind.is_real and self.is_negative():
            return self.neg()
        if self.kind is FloatKind.SMALL:
            return Float(kind=FloatKind.SMALL, small=abs(self.small))
        return self

    def conj(self) -> Float:
        """Complex conjugate (identity for real values)."""
        if self.kind is FloatKind.COMPLEX:
            return Float.complex(self.real, self.imag.neg())
        return self

    def sqrt(self, allow_complex: bool = False) -> Float:
        """
        Square root.

        Perfect squares give an exact result; other roots are truncated
        to 137 digits and tagged IRRATIONAL.

        Args:
            allow_complex: Return ``0+sqrt(|x|)i`` for a negative argument
                instead of raising NegativeSqrtError
        """
        kind = self.kind
        if kind is FloatKind.COMPLEX:
            from . import complexnum
            return complexnum.sqrt(self)
        if kind in (FloatKind.NAN, FloatKind.INFINITY):
            return self
        if self.is_negative():
            if not allow_complex:
                raise NegativeSqrtError(details={"value": self.to_string()})
            return Float.complex(Float.zero(), self.neg().sqrt())
        if self.is_zero():
            return Float.zero()

        value = self.exact_value()
        if kind.is_exact:
            num_root, num_exact = integer_nthroot(value.numerator, 2)
            den_root, den_exact = integer_nthroot(value.denominator, 2)
            if num_exact and den_exact:
                return Float.from_fraction(
                    Fraction(int(num_root), int(den_root)), prefer_small=kind is FloatKind.SMALL
                )

        scaled = value * 10 ** (2 * IRRATIONAL_DIGITS)
        root = math.isqrt(scaled.numerator // scaled.denominator)
        logger.debug("Irrational square root", extra_data={"digits": IRRATIONAL_DIGITS})
        return Float(kind=FloatKind.IRRATIONAL, decimal=make_decimal(root, -IRRATIONAL_DIGITS))

    def round(self, digits: int = 0) -> Float:
        """Round half away from zero to ``digits`` fractional digits."""

        def half_away(value: Fraction) -> int:
            rounded = math.floor(abs(value) + Fraction(1, 2))
            return -rounded if value < 0 else rounded

        return self._quantize(digits, half_away)

    def truncate(self, digits: int = 0) -> Float:
        """Drop fractional digits beyond ``digits`` (toward zero)."""
        return self._quantize(digits, int)

    def floor(self) -> Float:
        return self._quantize(0, math.floor)

    def ceil(self) -> Float:
        return self._quantize(0, math.ceil)

    def _quantize(self, digits: int, to_integer: Callable[[Fraction], int]) -> Float:
        if self.kind is FloatKind.COMPLEX:
            return Float.complex(
                self.real._quantize(digits, to_integer), self.imag._quantize(digits, to_integer)
            )
        if not self.kind.is_real:
            return self
        scale = Fraction(10) ** digits
        result = Fraction(to_integer(self.exact_value() * scale)) / scale
        return Float.from_fraction(result, prefer_small=self.kind is FloatKind.SMALL)

    def normalize(self) -> Float:
        """
        Rewrite to the minimal exact form.

        Recurring values that terminate and BIG values that fit a double
        become SMALL; an IRRATIONAL whose digits end inside the 137-digit
        window becomes exact; a complex value with a zero imaginary part
        becomes its real part.
        """
        kind = self.kind
        if kind in (FloatKind.BIG, FloatKind.RECURRING):
            return Float.from_fraction(self.exact_value(), prefer_small=True)
        if kind is FloatKind.IRRATIONAL:
            value = self.exact_value()
            if split_denominator(value.denominator)[0] < IRRATIONAL_DIGITS:
                return Float.from_fraction(value, prefer_small=True)
            return self
        if kind is FloatKind.COMPLEX:
            real = self.real.normalize()
            imag = self.imag.normalize()
            if imag.is_zero():
                return real
            return Float.complex(real, imag)
        return self

    # Transcendentals

    def sin(self) -> Float:
        from .transcendental import sin
        return sin(self)

    def cos(self) -> Float:
        from .transcendental import cos
        return cos(self)

    def tan(self) -> Float:
        from .transcendental import tan
        return tan(self)

    def ln(self) -> Float:
        from .transcendental import ln
        return ln(self)

    def exp(self) -> Float:
        from .transcendental import exp
        return exp(self)

    def log10(self) -> Float:
        from .transcendental import log10
        return log10(self)

    def log(self, base: Any) -> Float:
        from .transcendental import log
        return log(self, _as_float(base))

    # Conversion

    def to_float(self) -> Float:
        return self

    def to_double(self) -> float:
        """Nearest double (complex values give their real part)."""
        kind = self.kind
        if kind is FloatKind.SMALL:
            return self.small
        if kind is FloatKind.NAN:
            return math.nan
        if kind is FloatKind.INFINITY:
            return math.inf
        if kind is FloatKind.NEG_INFINITY:
            return -math.inf
        if kind is FloatKind.COMPLEX:
            return self.real.to_double()
        return fraction_to_float(self.exact_value())

    def to_decimal(self) -> Decimal:
        """
        Decimal value (RECURRING values truncated to 137 digits).

        Raises:
            InvalidFormatError: for NaN, infinities and complex values
        """
        if self.kind is FloatKind.RECURRING:
            return truncate_fraction(self.exact_value(), IRRATIONAL_DIGITS)
        if self.kind in (FloatKind.BIG, FloatKind.IRRATIONAL):
            return self.decimal
        if self.kind is FloatKind.SMALL:
            return Decimal(repr(self.small))
        raise InvalidFormatError(f"{self.kind.name} has no decimal value")

    def to_int(self):
        """
        Int truncated toward zero.

        Raises:
            InvalidFormatError: for NaN and complex values with an imaginary part
            InfiniteResultError: for infinities
        """
        from .integer import Int

        value = self.normalize() if self.kind is FloatKind.COMPLEX else self
        if value.kind is FloatKind.NAN or value.kind is FloatKind.COMPLEX:
            raise InvalidFormatError(
                f"Cannot convert {value.kind.name} to an integer", details={"value": self.to_string()}
            )
        if value.kind.is_infinite:
            raise InfiniteResultError(details={"value": self.to_string()})
        return Int(int(value.exact_value()))

    def to_fixed(self, bits: int, signed: bool = True) -> int:
        return self.to_int().to_fixed(bits, signed)

    def to_i64(self) -> int:
        return self.to_int().to_i64()

    def to_u64(self) -> int:
        return self.to_int().to_u64()

    def to_usize(self) -> int:
        return self.to_int().to_usize()

    def to_string(self) -> str:
        from .formatter import format_float
        return format_float(self)

    def __str__(self) -> str:
        """String representation (for str() builtin)."""
        return self.to_string()

    def __repr__(self) -> str:
        return f"Float({self.to_string()})"

    def __float__(self) -> float:
        return self.to_double()

    def __complex__(self) -> complex:
        return complex(self.real_part().to_double(), self.imag_part().to_double())

    def __round__(self, ndigits: Optional[int] = None):
        if ndigits is None:
            return self.round(0).to_int()
        return self.round(ndigits)

    def __trunc__(self):
        return self.to_int()

    def __floor__(self) -> Float:
        return self.floor()

    def __ceil__(self) -> Float:
        return self.ceil()

    # Operators not covered by NumberValue

    def __truediv__(self, other: Any) -> Float:
        return self.div(other)

    def __rtruediv__(self, other: Any) -> Float:
        return _as_float(other).div(self)

    def __floordiv__(self, other: Any) -> Float:
        return self.div(other).floor()

    def __rfloordiv__(self, other: Any) -> Float:
        return _as_float(other).div(self).floor()

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
        from .equality import hash_float
        return hash_float(self)

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


Float.model_rebuild()


def _as_float(value: Any) -> Float:
    value = to_number(value)
    if isinstance(value, Float):
        return value
    return value.to_float()


def _unsupported_complex(a: Float, b: Float) -> Float:
    raise InvalidFormatError("Operation is undefined for complex values")


def as_float(value: Any) -> Float:
    """Coerce an Int, Python number or literal into a Float."""
    return _as_float(value)


def check_division(divisor: Float) -> None:
    """Raise DivisionByZeroError for a zero complex divisor."""
    if divisor.is_zero():
        raise DivisionByZeroError(details={"divisor": divisor.to_string()})
