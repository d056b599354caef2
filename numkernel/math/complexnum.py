"""
Complex layer: field arithmetic on (real, imag) pairs of non-complex Floats.

Real operands are promoted to ``x+0i``. Components go through the ordinary
Float arithmetic, so exactness, recurring digits and irrational truncation
apply to each part independently. Results stay tagged COMPLEX even when the
imaginary part is zero; Float.normalize() demotes explicitly.
"""

from __future__ import annotations

from typing import Tuple

from .numeric import Float, check_division


def parts(value: Float) -> Tuple[Float, Float]:
    """(real, imag) of any Float; reals get a zero imaginary part."""
    return value.real_part(), value.imag_part()


def add(a: Float, b: Float) -> Float:
    ar, ai = parts(a)
    br, bi = parts(b)
    return Float.complex(ar.add(br), ai.add(bi))


def sub(a: Float, b: Float) -> Float:
    ar, ai = parts(a)
    br, bi = parts(b)
    return Float.complex(ar.sub(br), ai.sub(bi))


def mul(a: Float, b: Float) -> Float:
    """(a+bi)(c+di) = (ac-bd) + (ad+bc)i"""
    ar, ai = parts(a)
    br, bi = parts(b)
    return Float.complex(
        ar.mul(br).sub(ai.mul(bi)),
        ar.mul(bi).add(ai.mul(br)),
    )


def div(a: Float, b: Float) -> Float:
    """
    Divide by multiplying through with the conjugate.

    Raises:
        DivisionByZeroError: when the divisor's squared modulus is zero
    """
    ar, ai = parts(a)
    br, bi = parts(b)
    denominator = br.mul(br).add(bi.mul(bi))
    check_division(denominator)
    return Float.complex(
        ar.mul(br).add(ai.mul(bi)).div(denominator),
        ai.mul(br).sub(ar.mul(bi)).div(denominator),
    )


def conj(value: Float) -> Float:
    real, imag = parts(value)
    return Float.complex(real, imag.neg())


def modulus(value: Float) -> Float:
    """|a+bi| = sqrt(a^2 + b^2), exact when the sum is a perfect square."""
    real, imag = parts(value)
    return real.mul(real).add(imag.mul(imag)).sqrt()


def sqrt(value: Float) -> Float:
    """Principal square root."""
    real, imag = parts(value)
    if imag.is_zero():
        root = real.sqrt(allow_complex=True)
        return root if root.is_complex() else Float.complex(root, Float.zero())

    from .transcendental import complex_sqrt
    return complex_sqrt(value)


# Integer exponents up to this size are multiplied out exactly
MAX_EXACT_EXPONENT = 64


def power(base: Float, exponent: Float) -> Float:
    """
    Complex power.

    Small integer exponents use repeated multiplication so results such
    as (1+i)^2 = 2i stay exact; everything else is exp(w * ln z).
    """
    if exponent.is_integer_like():
        n = int(exponent.real_part().exact_value())
        if abs(n) <= MAX_EXACT_EXPONENT:
            result = Float.complex(Float.one(), Float.zero())
            factor = base if base.is_complex() else Float.complex(base, Float.zero())
            for _ in range(abs(n)):
                result = mul(result, factor)
            if n < 0:
                result = div(Float.complex(Float.one(), Float.zero()), result)
            return result

    if base.is_zero():
        if exponent.real_part().is_negative() or exponent.real_part().is_zero():
            return Float.complex(Float.nan(), Float.nan())
        return Float.complex(Float.zero(), Float.zero())

    from .transcendental import complex_power
    return complex_power(base, exponent)
