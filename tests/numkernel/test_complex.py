"""Tests for the complex layer."""

import pytest

from numkernel.core.errors import DivisionByZeroError, InvalidFormatError
from numkernel.math import (
    FloatKind,
    create_complex,
    create_float,
    create_imaginary,
    create_int,
)


class TestComplexConstruction:
    """Test complex constructors."""

    def test_create_complex_from_literals(self):
        """Test parts given as literals."""
        value = create_complex("1.5", "-2")
        assert value.kind is FloatKind.COMPLEX
        assert str(value) == "1.5-2i"

    def test_create_complex_from_numbers(self):
        """Test parts given as Python numbers and kernel values."""
        assert create_complex(1, create_float("0.(3)")) == create_float("1+0.(3)i")

    def test_create_imaginary(self):
        """Test a purely imaginary value."""
        assert str(create_imaginary("3")) == "3i"

    def test_complex_component_rejected(self):
        """Test a complex part is refused."""
        with pytest.raises(InvalidFormatError):
            create_complex(create_float("1+i"), 0)


class TestComplexArithmetic:
    """Test field operations."""

    def test_addition(self):
        """Test componentwise addition."""
        assert create_float("1+2i") + create_float("3-5i") == create_float("4-3i")

    def test_mixed_real_addition(self):
        """Test a real operand is promoted to x+0i."""
        assert create_float("1+2i") + create_int("1") == create_float("2+2i")

    def test_multiplication(self):
        """Test (a+bi)(c+di)."""
        assert create_float("3+4i") * create_float("3-4i") == create_float("25+0i")
        assert create_float("i") * create_float("i") == create_int("-1")

    def test_product_keeps_tag(self):
        """Test results stay complex even with a zero imaginary part."""
        assert (create_float("i") * create_float("i")).kind is FloatKind.COMPLEX

    def test_division(self):
        """Test division by conjugate multiplication."""
        assert create_float("4+2i") / create_float("3-i") == create_float("1+i")
        assert str(create_int("10") / create_float("3+4i")) == "1.2-1.6i"

    def test_division_by_zero(self):
        """Test a zero complex divisor raises."""
        with pytest.raises(DivisionByZeroError):
            create_float("1+i") / create_float("0+0i")
        with pytest.raises(DivisionByZeroError):
            create_float("1+i") / create_int("0")

    def test_conjugate(self):
        """Test conj flips the imaginary sign."""
        assert create_float("2+3i").conj() == create_float("2-3i")
        assert create_float("2").conj() == create_int("2")

    def test_modulus(self):
        """Test abs is the modulus."""
        assert abs(create_float("3+4i")) == create_int("5")
        assert abs(create_float("1+i")).kind is FloatKind.IRRATIONAL


class TestComplexRoots:
    """Test square roots and powers."""

    def test_sqrt_of_negative_real(self):
        """Test sqrt of a complex negative real."""
        assert create_float("-9+0i").sqrt() == create_float("3i")

    def test_sqrt_general(self):
        """Test the principal root of a general complex value."""
        root = create_float("3+4i").sqrt()
        assert root.approx_eq(create_float("2+i"), create_float("1e-100"))

    def test_integer_power_exact(self):
        """Test small integer powers are exact."""
        assert create_float("1+i") ** create_int("2") == create_float("2i")
        assert create_float("i") ** create_int("4") == create_int("1")
        assert create_float("2i") ** create_int("-1") == create_float("-0.5i")

    def test_zero_base(self):
        """Test powers of a complex zero."""
        assert create_float("0+0i") ** create_float("0.5+i") == create_float("0+0i")
        assert (create_float("0+0i") ** create_float("-0.5+i")).real.is_nan()

    def test_general_power(self):
        """Test e.g. i ** i = exp(-pi/2)."""
        result = create_float("i") ** create_float("i")
        assert result.real.to_string().startswith("0.20787957635076190854695561983497877")
        assert result.imag.is_zero()
