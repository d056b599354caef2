"""
Pseudo-random adapter.

Wraps an injected ``random.Random`` so hosts control seeding and sharing;
nothing here touches the module-level generator.
"""

from __future__ import annotations

import math
import random
from fractions import Fraction
from typing import Any, Optional

from ..core.errors import InvalidFormatError
from ..math.integer import Int
from ..math.numeric import Float, as_float
from ..math.value import to_number

# Fractional digits produced by randfloat
RANDFLOAT_DIGITS = 16


class RandomSource:
    """
    Random kernel values from an injected generator.

    Examples:
        >>> source = RandomSource(random.Random(7))
        >>> 1 <= source.randint(1, 6) <= 6
        True
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def rand(self) -> Float:
        """Uniform Float in [0, 1)."""
        return Float.from_double(self.rng.random())

    def randint(self, low: Any, high: Any) -> Int:
        """Uniform Int in the inclusive range [low, high]."""
        low_value = self._int_bound(low)
        high_value = self._int_bound(high)
        if low_value > high_value:
            raise InvalidFormatError(
                "Empty range for randint", details={"min": str(low_value), "max": str(high_value)}
            )
        return Int(self.rng.randint(low_value, high_value))

    def randdecimal(self, low: Any, high: Any, precision: int) -> Float:
        """Uniform Float in [low, high] with ``precision`` fractional digits."""
        if precision < 0:
            raise InvalidFormatError("Precision must not be negative", details={"precision": precision})
        low_value, high_value = self._real_bounds(low, high)
        scale = 10 ** precision
        first = math.ceil(low_value * scale)
        last = math.floor(high_value * scale)
        if first > last:
            raise InvalidFormatError(
                "No value with the requested precision in range", details={"precision": precision}
            )
        return Float.from_fraction(Fraction(self.rng.randint(first, last), scale), prefer_small=True)

    def randfloat(self, low: Any, high: Any) -> Float:
        """Uniform Float in [low, high] with 16 fractional digits."""
        return self.randdecimal(low, high, RANDFLOAT_DIGITS)

    def randcomplex(self, low: Any, high: Any) -> Float:
        """Complex Float whose parts are independent randfloat draws."""
        return Float.complex(self.randfloat(low, high), self.randfloat(low, high))

    @staticmethod
    def _int_bound(value: Any) -> int:
        value = to_number(value)
        if not isinstance(value, Int):
            value = value.to_int()
        return value.value

    @staticmethod
    def _real_bounds(low: Any, high: Any):
        low_float = as_float(low)
        high_float = as_float(high)
        for bound in (low_float, high_float):
            if not bound.kind.is_real:
                raise InvalidFormatError(
                    "Random bounds must be finite reals", details={"bound": bound.to_string()}
                )
        low_value = low_float.exact_value()
        high_value = high_float.exact_value()
        if low_value > high_value:
            raise InvalidFormatError(
                "Empty range", details={"min": low_float.to_string(), "max": high_float.to_string()}
            )
        return low_value, high_value
