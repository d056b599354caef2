"""Tests for Float representation and arithmetic."""

from decimal import Decimal
from fractions import Fraction

import pytest

from numkernel.core.errors import InfiniteResultError, InvalidFormatError, NegativeSqrtError, NumberTooLargeError
from numkernel.math import (
    IRRATIONAL_DIGITS,
    Float,
    FloatKind,
    Int,
    create_float,
    create_int,
    create_irrational,
)
from numkernel.math.representation import decimal_scale


class TestFloatConstruction:
    """Test constructors and payload validation."""

    def test_from_double_specials(self):
        """Test NaN and infinities map to their tags."""
        assert Float.from_double(float("nan")).is_nan()
        assert Float.from_double(float("inf")).kind is FloatKind.INFINITY
        assert Float.from_double(float("-inf")).kind is FloatKind.NEG_INFINITY

    def test_from_fraction_classification(self):
        """Test exact rationals are tagged by their decimal expansion."""
        assert Float.from_fraction(Fraction(1, 8)).kind is FloatKind.BIG
        assert Float.from_fraction(Fraction(1, 8), prefer_small=True).kind is FloatKind.SMALL
        assert Float.from_fraction(Fraction(1, 3)).kind is FloatKind.RECURRING
        assert Float.from_fraction(Fraction(1, 7)).period == 6

    def test_long_cycle_becomes_irrational(self, override_settings):
        """Test cycles longer than the limit are truncated."""
        override_settings(MAX_RECURRING_PERIOD=5)
        value = Float.from_fraction(Fraction(1, 7))
        assert value.kind is FloatKind.IRRATIONAL
        assert decimal_scale(value.decimal) == IRRATIONAL_DIGITS

    def test_recurring_period_validated(self, assert_validation_error):
        """Test a recurring period longer than the stored digits is rejected."""
        assert_validation_error(
            Float, {"kind": FloatKind.RECURRING, "decimal": Decimal("0.3"), "period": 2}
        )

    def test_small_payload_validated(self, assert_validation_error):
        """Test SMALL needs a finite double."""
        assert_validation_error(Float, {"kind": FloatKind.SMALL})
        assert_validation_error(Float, {"kind": FloatKind.SMALL, "small": float("inf")})

    def test_nested_complex_rejected(self, assert_validation_error):
        """Test complex components must be real."""
        inner = create_float("1+i")
        assert_validation_error(
            Float, {"kind": FloatKind.COMPLEX, "real": inner, "imag": Float.zero()}
        )

    def test_irrational_of_zero_is_small(self):
        """Test an exactly zero irrational collapses."""
        assert Float.irrational(Fraction(0)).kind is FloatKind.SMALL

    def test_create_irrational_pads_digits(self):
        """Test create_irrational stores exactly 137 fractional digits."""
        value = create_irrational("3.14")
        assert value.kind is FloatKind.IRRATIONAL
        assert decimal_scale(value.decimal) == IRRATIONAL_DIGITS
        assert value.to_string() == "3.14"

    def test_predicates(self):
        """Test classification predicates."""
        assert create_float("0").is_zero()
        assert create_float("-2.5").is_negative()
        assert create_float("0.(3)").is_recurring()
        assert create_float("2").sqrt().is_irrational()
        assert create_float("-inf").is_infinity()
        assert create_float("nan").is_nan()
        assert create_float("1+i").is_complex()
        assert not create_float("nan").is_zero()


class TestFloatArithmetic:
    """Test exact arithmetic across representations."""

    def test_small_addition_is_exact(self):
        """Test 0.1 + 0.2 is exactly 0.3."""
        result = create_float("0.1") + create_float("0.2")
        assert result == create_float("0.3")
        assert str(result) == "0.3"
        assert result.kind is FloatKind.SMALL

    def test_recurring_addition(self):
        """Test 1/3 + 1 keeps the cycle."""
        third = create_int("1") / create_int("3")
        assert str(third + create_int("1")) == "1.(3)"

    def test_thirds_sum_to_one(self):
        """Test 1/3 + 1/3 + 1/3 == 1."""
        third = create_int("1") / create_int("3")
        assert third + third + third == create_int("1")

    def test_recurring_times_integer(self):
        """Test 0.(3) * 3 is exactly 1."""
        assert str(create_float("0.(3)") * create_int("3")) == "1"

    def test_sevenths(self):
        """Test a six-digit cycle."""
        assert str(create_int("1") / create_int("7")) == "0.(142857)"
        assert str(create_int("22") / create_int("7")) == "3.(142857)"

    def test_mixed_prefix_cycle(self):
        """Test a cycle after a non-repeating prefix."""
        assert str(create_int("1") / create_int("6")) == "0.1(6)"
        assert str(create_int("7") / create_int("12")) == "0.58(3)"

    def test_commutative_and_associative(self):
        """Test algebraic laws on exact values."""
        a = create_float("0.(3)")
        b = create_float("1.25")
        c = create_float("123456789012345678901234567890.5")
        assert a + b == b + a
        assert (a + b) + c == a + (b + c)
        assert a * b == b * a

    def test_irrational_is_sticky(self):
        """Test an irrational operand gives an irrational result."""
        root = create_float("2").sqrt()
        assert (root + create_int("1")).kind is FloatKind.IRRATIONAL
        assert (root * create_int("0")).kind is FloatKind.SMALL

    def test_division_by_zero_is_ieee(self):
        """Test real Float division by zero gives specials."""
        assert str(create_float("1") / create_float("0")) == "Infinity"
        assert str(create_float("-1") / create_float("0")) == "-Infinity"
        assert (create_float("0") / create_float("0")).is_nan()

    def test_specials_propagate(self):
        """Test NaN and infinity arithmetic."""
        inf = create_float("inf")
        assert (inf + create_int("1")).kind is FloatKind.INFINITY
        assert (inf - inf).is_nan()
        assert (inf * create_float("-2")).kind is FloatKind.NEG_INFINITY
        assert (create_float("nan") + create_int("1")).is_nan()
        assert (create_int("1") / inf).is_zero()

    def test_remainder(self):
        """Test remainder carries the dividend's sign."""
        assert create_float("7.5") % create_float("2") == create_float("1.5")
        assert create_float("-7.5") % create_float("2") == create_float("-1.5")
        assert (create_float("1") % create_float("0")).is_nan()

    def test_complex_remainder_rejected(self):
        """Test remainder is undefined for complex values."""
        with pytest.raises(InvalidFormatError):
            create_float("1+i") % create_float("2")

    def test_product_beyond_double_range(self):
        """Test a SMALL product too large for a double becomes BIG."""
        value = create_float("1e300") * create_float("1e300")
        assert value.kind is FloatKind.BIG
        assert value == create_float("1e600")
        assert (create_float("-1e300") * create_float("1e300")).to_string() == "-1e600"


class TestFloatPower:
    """Test pow across exponent kinds."""

    def test_integer_exponent(self):
        """Test exact integer powers."""
        assert create_float("1.5") ** create_int("2") == create_float("2.25")
        assert create_float("2") ** create_int("-2") == create_float("0.25")
        assert str(create_float("3") ** create_int("-1")) == "0.(3)"

    def test_zero_exponent(self):
        """Test x ** 0 is 1."""
        assert create_float("nan") ** create_int("0") == create_int("1")

    def test_exact_rational_root(self):
        """Test rational exponents with an exact root."""
        third = create_float("1") / create_float("3")
        assert create_float("27") ** third == create_int("3")
        assert create_float("4") ** create_float("1.5") == create_int("8")

    def test_irrational_power(self):
        """Test powers with no exact value are irrational."""
        result = create_float("2") ** create_float("2.5")
        assert result.kind is FloatKind.IRRATIONAL
        assert result.to_string().startswith("5.656854249492380195206754896838")

    def test_negative_base_fractional_exponent(self):
        """Test a negative base with a non-integer exponent is NaN."""
        assert (create_float("-8") ** create_float("0.5")).is_nan()

    def test_zero_base(self):
        """Test powers of zero."""
        assert (create_float("0") ** create_int("2")).is_zero()
        assert (create_float("0") ** create_int("-1")).kind is FloatKind.INFINITY

    def test_too_large(self):
        """Test the digit guard."""
        with pytest.raises(NumberTooLargeError):
            create_float("10") ** create_int("1000000")

    def test_too_large_outside_double_range(self):
        """Test the digit guard for bases a double cannot hold."""
        with pytest.raises(NumberTooLargeError):
            create_float("2e-400") ** create_float("-1000000.5")
        with pytest.raises(NumberTooLargeError):
            create_float("1e400") ** (create_int("2").sqrt() * create_int("1000"))

    def test_vanishing_result(self):
        """Test a result below the 137-digit window is zero."""
        assert (create_float("2e-400") ** create_float("1000000.5")).is_zero()

    def test_base_outside_double_range(self):
        """Test a real power of a huge base within the digit limit."""
        value = create_float("1e400") ** create_float("0.(3)")
        assert value.kind is FloatKind.IRRATIONAL
        assert create_float("2.1544346900e133") < value < create_float("2.1544346901e133")
    """Test square roots."""

    def test_sqrt_two_irrational(self):
        """Test sqrt(2) has exactly 137 fractional digits."""
        root = create_int("2").sqrt()
        assert root.kind is FloatKind.IRRATIONAL
        assert decimal_scale(root.decimal) == IRRATIONAL_DIGITS
        assert root.to_string().startswith("1.414213562373095048801688724209698")

    def test_sqrt_deterministic(self):
        """Test repeated calls give identical digits."""
        assert create_int("2").sqrt().decimal == create_int("2").sqrt().decimal

    def test_perfect_squares_exact(self):
        """Test exact roots are never irrational."""
        assert create_float("2.25").sqrt() == create_float("1.5")
        assert create_float("2.25").sqrt().kind is FloatKind.SMALL
        assert create_float("0.(4)").sqrt() == create_float("0.(6)")

    def test_negative_sqrt(self):
        """Test the real root of a negative number."""
        with pytest.raises(NegativeSqrtError):
            create_float("-4").sqrt()

    def test_negative_sqrt_complex(self):
        """Test the complex root when requested."""
        root = create_float("-4").sqrt(allow_complex=True)
        assert root.is_complex()
        assert root == create_float("2i")


class TestFloatRounding:
    """Test round, truncate, floor, ceil and normalize."""

    def test_round_half_away_from_zero(self):
        """Test ties round away from zero."""
        assert create_float("2.5").round() == create_int("3")
        assert create_float("-2.5").round() == create_int("-3")
        assert create_float("1.245").round(2) == create_float("1.25")
        assert round(create_float("0.(6)"), 3) == create_float("0.667")

    def test_truncate(self):
        """Test truncation drops digits."""
        assert create_float("1.999").truncate(2) == create_float("1.99")
        assert create_float("-1.5").truncate() == create_int("-1")

    def test_floor_and_ceil(self):
        """Test floor and ceil."""
        assert create_float("-1.5").floor() == create_int("-2")
        assert create_float("-1.5").ceil() == create_int("-1")

    def test_normalize_recurring(self):
        """Test an integral recurring value collapses."""
        value = create_float("0.(9)").normalize()
        assert value.kind is FloatKind.SMALL
        assert value == create_int("1")

    def test_normalize_complex(self):
        """Test a zero imaginary part is dropped."""
        value = (create_float("3+4i") * create_float("3-4i")).normalize()
        assert not value.is_complex()
        assert value == create_int("25")

    def test_normalize_irrational_keeps_tag(self):
        """Test a genuinely irrational value is unchanged."""
        third = create_irrational("0.(3)")
        assert third.normalize().kind is FloatKind.IRRATIONAL
        assert create_irrational("0.5").normalize().kind is FloatKind.SMALL

    def test_normalize_beyond_double_range(self):
        """Test a BIG value no double can hold stays BIG."""
        value = create_float("1e400").normalize()
        assert value.kind is FloatKind.BIG
        assert value == create_float("1e400")

    def test_builtin_round(self):
        """Test round() without digits gives an Int, with digits a Float."""
        result = round(create_float("2.5"))
        assert isinstance(result, Int)
        assert result == Int(3)
        assert round(create_float("-0.(6)")) == Int(-1)
        assert isinstance(round(create_float("2.5"), 0), Float)


class TestFloatConversion:
    """Test conversions to Int, machine types and Decimal."""

    def test_to_int_truncates(self):
        """Test conversion toward zero."""
        assert create_float("2.9").to_int() == Int(2)
        assert create_float("-2.9").to_int() == Int(-2)

    def test_to_int_specials(self):
        """Test conversion of specials."""
        with pytest.raises(InvalidFormatError):
            create_float("nan").to_int()
        with pytest.raises(InfiniteResultError):
            create_float("inf").to_int()
        with pytest.raises(InvalidFormatError):
            create_float("1+i").to_int()

    def test_fixed_width(self):
        """Test fixed-width conversion through Int."""
        assert create_float("0").to_u64() == 0
        assert create_float("255.5").to_fixed(8, signed=False) == 255

    def test_to_double(self):
        """Test nearest-double conversion."""
        assert float(create_float("0.(3)")) == 1 / 3
        assert create_float("1e400").to_double() == float("inf")
        assert float(create_float("-1e400")) == float("-inf")
        assert float(create_float("1e400") / create_int("3")) == float("inf")

    def test_to_decimal(self):
        """Test Decimal output."""
        assert create_float("1.25").to_decimal() == Decimal("1.25")
        assert decimal_scale(create_float("0.(3)").to_decimal()) == IRRATIONAL_DIGITS
