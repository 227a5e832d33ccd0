"""Typed quantity models for the liquidity pool."""

from liquidity.models.types import (
    LpTokenAmount,
    Percentage,
    Price,
    StakedTokenAmount,
    TokenAmount,
)

__all__ = [
    "TokenAmount",
    "StakedTokenAmount",
    "LpTokenAmount",
    "Price",
    "Percentage",
]
