"""Mathematical primitives for pool accounting.

This package provides:
- FixedPointDecimal: 6-decimal checked fixed-point arithmetic
- The error taxonomy raised by every checked operation
"""

from liquidity.math.fixed_point import (
    DivisionByZero,
    FixedPointDecimal,
    FixedPointError,
    Overflow,
    Underflow,
)

__all__ = [
    "FixedPointDecimal",
    "FixedPointError",
    "Overflow",
    "Underflow",
    "DivisionByZero",
]
