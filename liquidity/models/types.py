"""Typed quantities used by the liquidity pool.

Each quantity kind wraps a FixedPointDecimal in its own class so that a
token amount can never be passed where a percentage or a share amount is
expected. Wrappers of different kinds never compare equal and carry no
arithmetic: unwrap with `.value`, compute, and wrap the result explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeVar

from liquidity.math.fixed_point import FixedPointDecimal

Q = TypeVar("Q", bound="_Quantity")


@dataclass(frozen=True)
class _Quantity:
    """Single-field wrapper around a FixedPointDecimal."""

    value: FixedPointDecimal

    def __post_init__(self) -> None:
        if not isinstance(self.value, FixedPointDecimal):
            raise TypeError(
                f"{type(self).__name__} requires FixedPointDecimal, "
                f"got {type(self.value).__name__}"
            )

    @classmethod
    def zero(cls: type[Q]) -> Q:
        return cls(FixedPointDecimal.zero())

    @classmethod
    def from_int(cls: type[Q], n: int) -> Q:
        return cls(FixedPointDecimal.from_int(n))

    @classmethod
    def from_float(cls: type[Q], x: float) -> Q:
        return cls(FixedPointDecimal.from_float(x))

    @classmethod
    def from_str(cls: type[Q], s: str) -> Q:
        return cls(FixedPointDecimal.from_str(s))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class TokenAmount(_Quantity):
    """Amount of the pool-native token."""


@dataclass(frozen=True)
class StakedTokenAmount(_Quantity):
    """Amount of the staked token accepted in swaps."""


@dataclass(frozen=True)
class LpTokenAmount(_Quantity):
    """Amount of pool share (LP) tokens."""


@dataclass(frozen=True)
class Price(_Quantity):
    """Price of one staked token in pool-native tokens."""


@dataclass(frozen=True)
class Percentage(_Quantity):
    """Fraction expressed as a decimal (0.01 = 1%)."""
