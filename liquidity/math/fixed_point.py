"""Six-decimal fixed-point arithmetic with checked operations.

All values are stored as non-negative integers scaled by 10^6 and must fit
an unsigned 64-bit magnitude. Multiplication and division go through an
unsigned 128-bit intermediate, then truncate back to 6 decimals.

Every operation is checked:
- Results above the 64-bit range raise Overflow
- Subtraction below zero raises Underflow
- Division by a zero magnitude raises DivisionByZero

There are no saturating or wrapping variants. Negative quantities are not
representable, so a negative input to any constructor is an Overflow.

Usage:
    from liquidity.math import FixedPointDecimal as D

    price = D.from_str("1.5")
    amount = D.from_int(10)
    owed = price * amount          # 15.000000
    ratio = owed / D.from_int(90)  # 0.166666 (truncated)
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from fractions import Fraction
from typing import ClassVar

from liquidity.constants import DECIMALS, FACTOR, U64_MAX, U128_MAX

__all__ = [
    "FixedPointDecimal",
    "FixedPointError",
    "Overflow",
    "Underflow",
    "DivisionByZero",
]


# =============================================================================
# Error classes
# =============================================================================


class FixedPointError(ArithmeticError):
    """Base class for fixed-point arithmetic errors."""

    pass


class Overflow(FixedPointError):
    """Magnitude exceeds the representable range (or input is negative)."""

    pass


class Underflow(FixedPointError):
    """Subtraction would produce a negative result."""

    pass


class DivisionByZero(FixedPointError):
    """Divisor has a zero magnitude."""

    pass


# =============================================================================
# FixedPointDecimal
# =============================================================================


# Whole-number digits beyond which a Decimal cannot fit, however it rounds
_MAX_WHOLE_DIGITS = 20


def _check_u64(value: int, context: str) -> int:
    if value < 0 or value > U64_MAX:
        raise Overflow(f"Overflow: {context} = {value} outside [0, 2^64-1]")
    return value


class FixedPointDecimal:
    """Exact non-negative decimal with 6 fractional digits.

    Example: 1.5 is stored as 1_500_000.

    Instances are immutable; every operation returns a new value or raises
    a FixedPointError.

    Attributes:
        value: The raw scaled magnitude (read-only)
    """

    DECIMALS: ClassVar[int] = DECIMALS
    ONE: ClassVar[int] = FACTOR

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int) -> None:
        """Create from a raw scaled magnitude.

        Raises:
            TypeError: If value is not an int
            Overflow: If value is outside [0, 2^64-1]
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"FixedPointDecimal requires int, got {type(value).__name__}")
        self._value = _check_u64(value, "raw value")

    # --- Construction ---

    @classmethod
    def zero(cls) -> FixedPointDecimal:
        return cls(0)

    @classmethod
    def from_int(cls, n: int) -> FixedPointDecimal:
        """Create from a whole number (scaled by 10^6).

        Raises:
            TypeError: If n is not an int
            Overflow: If n is negative or n * 10^6 exceeds 2^64-1
        """
        if isinstance(n, bool) or not isinstance(n, int):
            raise TypeError(f"from_int requires int, got {type(n).__name__}")
        return cls(_check_u64(n * FACTOR, f"{n} * {FACTOR}"))

    @classmethod
    def from_decimal(cls, d: Decimal) -> FixedPointDecimal:
        """Create from a Decimal, rounding half-up to 6 fractional digits.

        Raises:
            Overflow: If d is negative, not finite, or too large
        """
        if not d.is_finite():
            raise Overflow(f"Overflow: non-finite input {d}")
        if d < 0:
            raise Overflow(f"Overflow: negative input {d}")
        if d and d.adjusted() >= _MAX_WHOLE_DIGITS:
            raise Overflow(f"Overflow: {d} exceeds representable range")
        # Wide enough that scaling is exact and only the quantize rounds
        with localcontext() as ctx:
            ctx.prec = len(d.as_tuple().digits) + _MAX_WHOLE_DIGITS + DECIMALS
            scaled = d.scaleb(DECIMALS)
            rounded = int(scaled.quantize(Decimal(1), rounding=ROUND_HALF_UP))
        return cls(_check_u64(rounded, f"{d} scaled"))

    @classmethod
    def from_float(cls, x: float) -> FixedPointDecimal:
        """Create from a float, rounding half-up to 6 fractional digits.

        The float goes through its shortest repr, so 0.001 becomes exactly
        1000 raw units rather than the binary approximation.

        Raises:
            TypeError: If x is not a float or int
            Overflow: If x is negative, NaN, infinite or too large
        """
        if isinstance(x, bool) or not isinstance(x, (float, int)):
            raise TypeError(f"from_float requires float, got {type(x).__name__}")
        if not math.isfinite(x):
            raise Overflow(f"Overflow: non-finite input {x}")
        return cls.from_decimal(Decimal(repr(x)))

    @classmethod
    def from_str(cls, s: str) -> FixedPointDecimal:
        """Parse a decimal string such as "91.009".

        Raises:
            TypeError: If s is not a str
            ValueError: If s is not a decimal number
            Overflow: If the number is negative or too large
        """
        if not isinstance(s, str):
            raise TypeError(f"from_str requires str, got {type(s).__name__}")
        try:
            d = Decimal(s.strip())
        except InvalidOperation as err:
            raise ValueError(f"Invalid decimal string: '{s}'") from err
        return cls.from_decimal(d)

    # --- Accessors ---

    @property
    def value(self) -> int:
        """The raw scaled magnitude."""
        return self._value

    def to_decimal(self) -> Decimal:
        """Convert to Decimal (exact)."""
        return Decimal(self._value).scaleb(-DECIMALS)

    # --- Arithmetic ---

    def add(self, other: FixedPointDecimal) -> FixedPointDecimal:
        """Add two values.

        Raises:
            Overflow: If the sum exceeds 2^64-1
        """
        return FixedPointDecimal(_check_u64(self._value + other._value, f"{self} + {other}"))

    def sub(self, other: FixedPointDecimal) -> FixedPointDecimal:
        """Subtract other from self.

        Raises:
            Underflow: If other > self
        """
        result = self._value - other._value
        if result < 0:
            raise Underflow(f"Underflow: {self} - {other}")
        return FixedPointDecimal(result)

    def mul(self, other: FixedPointDecimal) -> FixedPointDecimal:
        """Multiply with truncation: (a * b) // 10^6.

        Raises:
            Overflow: If the 128-bit product or the 64-bit result overflows
        """
        product = self._value * other._value
        if product > U128_MAX:
            raise Overflow(f"Overflow: {self} * {other} exceeds 128-bit intermediate")
        return FixedPointDecimal(_check_u64(product // FACTOR, f"{self} * {other}"))

    def div(self, other: FixedPointDecimal) -> FixedPointDecimal:
        """Divide with truncation: (a * 10^6) // b.

        Raises:
            DivisionByZero: If other is zero
            Overflow: If the quotient exceeds 2^64-1
        """
        if other._value == 0:
            raise DivisionByZero(f"Division by zero: {self} / 0")
        numerator = self._value * FACTOR
        if numerator > U128_MAX:
            raise Overflow(f"Overflow: {self} scaled exceeds 128-bit intermediate")
        return FixedPointDecimal(_check_u64(numerator // other._value, f"{self} / {other}"))

    def __add__(self, other: object) -> FixedPointDecimal:
        if not isinstance(other, FixedPointDecimal):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> FixedPointDecimal:
        if not isinstance(other, FixedPointDecimal):
            return NotImplemented
        return self.sub(other)

    def __mul__(self, other: object) -> FixedPointDecimal:
        if not isinstance(other, FixedPointDecimal):
            return NotImplemented
        return self.mul(other)

    def __truediv__(self, other: object) -> FixedPointDecimal:
        if not isinstance(other, FixedPointDecimal):
            return NotImplemented
        return self.div(other)

    # --- Comparison ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FixedPointDecimal):
            return self._value == other._value
        if isinstance(other, int) and not isinstance(other, bool):
            return other >= 0 and self._value == other * FACTOR
        return NotImplemented

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return NotImplemented
        return not result

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, FixedPointDecimal):
            return NotImplemented
        return self._value < other._value

    def __le__(self, other: object) -> bool:
        if not isinstance(other, FixedPointDecimal):
            return NotImplemented
        return self._value <= other._value

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, FixedPointDecimal):
            return NotImplemented
        return self._value > other._value

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, FixedPointDecimal):
            return NotImplemented
        return self._value >= other._value

    def __hash__(self) -> int:
        # Must agree with __eq__ against plain ints: D.from_int(3) == 3
        return hash(Fraction(self._value, FACTOR))

    def __bool__(self) -> bool:
        """True if non-zero."""
        return self._value != 0

    # --- Display ---

    def __str__(self) -> str:
        whole, frac = divmod(self._value, FACTOR)
        return f"{whole}.{frac:0{DECIMALS}d}"

    def __repr__(self) -> str:
        return f"FixedPointDecimal('{self}')"
