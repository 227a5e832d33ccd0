"""Staked liquidity pool with exact fixed-point accounting."""

from liquidity.math import (
    DivisionByZero,
    FixedPointDecimal,
    FixedPointError,
    Overflow,
    Underflow,
)
from liquidity.models import (
    LpTokenAmount,
    Percentage,
    Price,
    StakedTokenAmount,
    TokenAmount,
)
from liquidity.pool import LiquidityPool, PoolConfig, PoolState

__version__ = "0.1.0"
__all__ = [
    "FixedPointDecimal",
    "FixedPointError",
    "Overflow",
    "Underflow",
    "DivisionByZero",
    "TokenAmount",
    "StakedTokenAmount",
    "LpTokenAmount",
    "Price",
    "Percentage",
    "LiquidityPool",
    "PoolConfig",
    "PoolState",
    "__version__",
]
