"""Liquidity pool state machine, fee curve and configuration."""

from liquidity.pool.config import DEFAULT_POOL_CONFIG, PoolConfig
from liquidity.pool.fees import apply_fee, calculate_fee
from liquidity.pool.liquidity_pool import LiquidityPool, PoolState

__all__ = [
    "LiquidityPool",
    "PoolState",
    "PoolConfig",
    "DEFAULT_POOL_CONFIG",
    "calculate_fee",
    "apply_fee",
]
