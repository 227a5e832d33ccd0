"""Tests for FixedPointDecimal checked arithmetic."""

from decimal import Decimal

import pytest

from liquidity.constants import FACTOR, U64_MAX
from liquidity.math.fixed_point import (
    DivisionByZero,
    FixedPointDecimal,
    FixedPointError,
    Overflow,
    Underflow,
)
from tests.helpers import MAX_WHOLE_TOKENS

D = FixedPointDecimal


class TestConstruction:
    """Tests for building decimals from ints, floats and strings."""

    def test_raw_value(self):
        """The constructor takes the raw scaled magnitude."""
        assert D(1_500_000).value == 1_500_000

    def test_raw_value_out_of_range_raises(self):
        """Raw magnitudes outside the 64-bit range overflow."""
        with pytest.raises(Overflow):
            D(U64_MAX + 1)
        with pytest.raises(Overflow):
            D(-1)

    def test_raw_value_invalid_type_raises(self):
        """Only ints are accepted as raw magnitudes."""
        with pytest.raises(TypeError):
            D(1.5)  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            D(True)  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            D("1")  # type: ignore[arg-type]

    def test_from_int(self):
        """from_int scales by 10^6."""
        assert D.from_int(12345).value == 12345 * FACTOR

    def test_from_int_largest_whole_number(self):
        """The largest whole number that fits is accepted."""
        assert D.from_int(MAX_WHOLE_TOKENS).value == MAX_WHOLE_TOKENS * FACTOR

    def test_from_int_overflow_raises(self):
        """Scaling past 2^64-1 overflows."""
        with pytest.raises(Overflow):
            D.from_int(MAX_WHOLE_TOKENS + 1)

    def test_from_int_negative_raises(self):
        """Negative whole numbers are not representable."""
        with pytest.raises(Overflow):
            D.from_int(-1)

    def test_from_int_rejects_float(self):
        with pytest.raises(TypeError):
            D.from_int(1.5)  # type: ignore[arg-type]

    def test_from_float(self):
        """from_float rounds to 6 decimals."""
        assert D.from_float(123.456789).value == 123_456_789

    def test_from_float_uses_shortest_repr(self):
        """0.001 scales to exactly 1000 raw units."""
        assert D.from_float(0.001).value == 1000
        assert D.from_float(9.9991).value == 9_999_100

    def test_from_float_rounds_half_up(self):
        assert D.from_float(0.0000005).value == 1
        assert D.from_float(0.0000004).value == 0

    def test_from_float_zero(self):
        assert D.from_float(0.0) == D.zero()
        assert D.from_float(-0.0) == D.zero()

    @pytest.mark.parametrize("value", [-123.456789, -0.000001, float("nan"), float("inf"), 1e20])
    def test_from_float_invalid_raises_overflow(self, value):
        """Negative, non-finite and oversized floats are all Overflow."""
        with pytest.raises(Overflow):
            D.from_float(value)

    def test_from_str(self):
        assert D.from_str("91.009").value == 91_009_000
        assert D.from_str(" 1.5 ").value == 1_500_000

    def test_from_str_invalid_raises(self):
        with pytest.raises(ValueError):
            D.from_str("not a number")

    def test_from_str_negative_raises(self):
        with pytest.raises(Overflow):
            D.from_str("-1")

    def test_from_str_huge_raises(self):
        with pytest.raises(Overflow):
            D.from_str("1e40")

    @pytest.mark.parametrize("text", ["1e999999", "9.99e999999999"])
    def test_from_str_exponent_beyond_context_raises_overflow(self, text):
        """Exponents past the Decimal context limit are still our Overflow."""
        with pytest.raises(Overflow):
            D.from_str(text)

    def test_from_str_zero_with_huge_exponent(self):
        assert D.from_str("0e999999") == D.zero()

    def test_from_str_tiny_exponent_rounds_to_zero(self):
        assert D.from_str("1e-999999999") == D.zero()

    def test_from_str_long_mantissa_rounds_once(self):
        """Digits past the context precision take part in the half-up rounding."""
        assert D.from_str("0.1234564999999999999999999999999").value == 123_456
        assert D.from_str("0.1234565000000000000000000000001").value == 123_457

    def test_from_str_rejects_non_str(self):
        with pytest.raises(TypeError, match="from_str requires str"):
            D.from_str(1.5)  # type: ignore[arg-type]

    def test_from_decimal(self):
        assert D.from_decimal(Decimal("0.09")).value == 90_000

    def test_from_decimal_just_above_range_raises(self):
        with pytest.raises(Overflow):
            D.from_decimal(D(U64_MAX).to_decimal() + Decimal("0.0000005"))

    def test_from_decimal_upper_bound(self):
        """The exact maximum magnitude round-trips through Decimal."""
        top = D(U64_MAX)
        assert D.from_decimal(top.to_decimal()) == top

    def test_zero(self):
        assert D.zero().value == 0


class TestArithmetic:
    """Tests for checked add, sub, mul and div."""

    def test_addition(self):
        a = D.from_str("12.345678")
        b = D.from_str("7.654321")
        assert (a + b).value == 19_999_999

    def test_addition_overflow_raises(self):
        with pytest.raises(Overflow):
            D(U64_MAX) + D(1)

    def test_subtraction(self):
        assert D.from_int(10) - D.from_int(5) == D.from_int(5)

    def test_subtraction_to_zero(self):
        assert D.from_int(5) - D.from_int(5) == D.zero()

    def test_subtraction_underflow_raises(self):
        """Negative results raise instead of clamping to zero."""
        with pytest.raises(Underflow) as exc_info:
            D.from_int(5) - D.from_int(10)
        assert "Underflow" in str(exc_info.value)

    def test_multiplication(self):
        a = D.from_str("1.234567")
        b = D.from_str("2.345678")
        assert (a * b).value == 2_895_896

    def test_multiplication_truncates(self):
        """Products below one raw unit truncate to zero."""
        assert D(1) * D(1) == D.zero()

    def test_multiplication_overflow_raises(self):
        with pytest.raises(Overflow):
            D.from_int(10**7) * D.from_int(10**7)

    def test_division(self):
        a = D.from_str("2.345678")
        b = D.from_str("1.234567")
        assert (a / b).value == 1_900_000

    def test_division_truncates(self):
        assert (D.from_int(1) / D.from_int(3)).value == 333_333

    def test_division_overflow_raises(self):
        """Dividing a large value by a tiny one overflows."""
        with pytest.raises(Overflow):
            D.from_int(10**13) / D(1)

    @pytest.mark.parametrize("numerator", [D.zero(), D(1), D.from_int(5), D(U64_MAX)])
    def test_division_by_zero_raises(self, numerator):
        """Division by zero is DivisionByZero whatever the numerator."""
        with pytest.raises(DivisionByZero):
            numerator / D.zero()

    def test_named_methods_match_operators(self):
        a, b = D.from_int(6), D.from_int(3)
        assert a.add(b) == a + b
        assert a.sub(b) == a - b
        assert a.mul(b) == a * b
        assert a.div(b) == a / b

    def test_arithmetic_with_int_raises_typeerror(self):
        """Operands must both be FixedPointDecimal."""
        with pytest.raises(TypeError):
            D.from_int(1) + 1  # type: ignore[operator]
        with pytest.raises(TypeError):
            D.from_int(1) * 2.0  # type: ignore[operator]

    @pytest.mark.parametrize(
        ("x", "y"),
        [
            ("10", "3"),
            ("0.000001", "0.000001"),
            ("18446744073709.551615", "0.000001"),
            ("985.015", "14.985"),
        ],
    )
    def test_sub_then_add_round_trips(self, x, y):
        """(x - y) + y == x whenever x >= y."""
        dx, dy = D.from_str(x), D.from_str(y)
        assert (dx - dy) + dy == dx

    def test_errors_are_arithmetic_errors(self):
        assert issubclass(FixedPointError, ArithmeticError)
        for error in (Overflow, Underflow, DivisionByZero):
            assert issubclass(error, FixedPointError)


class TestComparison:
    """Tests for equality and ordering."""

    def test_equal_decimals(self):
        assert D.from_int(123) == D.from_int(123)
        assert D.from_int(123) != D.from_int(124)

    def test_eq_with_int(self):
        """Decimals compare equal to plain whole numbers."""
        assert D.from_int(100) == 100
        assert 100 == D.from_int(100)
        assert D.from_int(123456) == 123456
        assert D.from_int(999) != 998
        assert 998 != D.from_int(999)

    def test_eq_with_int_fractional(self):
        assert D.from_str("0.5") != 0
        assert D.zero() == 0

    def test_eq_with_negative_int(self):
        assert D.zero() != -1

    def test_eq_with_other_type(self):
        assert D.from_int(1) != "1.000000"

    def test_never_equal_to_bool(self):
        assert D.from_int(1) != True  # noqa: E712
        assert D.zero() != False  # noqa: E712
        assert True != D.from_int(1)  # noqa: E712

    def test_ordering(self):
        a = D.from_float(5.0)
        b = D.from_float(10.0)
        assert a < b
        assert not b < a
        assert b > a
        assert a <= D.from_float(5.0)
        assert b >= D.from_float(10.0)

    def test_ordering_with_int_raises(self):
        with pytest.raises(TypeError):
            D.from_int(1) < 2  # noqa: B015

    def test_hash_consistent_with_equality(self):
        assert hash(D.from_int(3)) == hash(3)
        assert {D.from_int(1): "one"}[D.from_str("1.0")] == "one"

    def test_bool(self):
        assert not D.zero()
        assert D(1)


class TestDisplay:
    """Tests for string rendering."""

    @pytest.mark.parametrize("whole", [0, 1, 42, 1000, MAX_WHOLE_TOKENS])
    def test_whole_numbers_show_six_zero_digits(self, whole):
        assert str(D.from_int(whole)) == f"{whole}.000000"

    def test_fraction(self):
        assert str(D.from_float(123.456789)) == "123.456789"

    def test_zero_padding(self):
        assert str(D(1)) == "0.000001"
        assert str(D.from_str("1.5")) == "1.500000"

    def test_max_value(self):
        assert str(D(U64_MAX)) == "18446744073709.551615"

    def test_repr(self):
        assert repr(D.from_str("1.5")) == "FixedPointDecimal('1.500000')"

    def test_to_decimal(self):
        assert D.from_str("1.5").to_decimal() == Decimal("1.5")
