"""Pytest configuration and fixtures."""

from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog

from liquidity.models.types import TokenAmount
from liquidity.pool.config import PoolConfig
from liquidity.pool.liquidity_pool import LiquidityPool
from tests.helpers.constants import LIQUIDITY_TARGET, MAX_FEE, MIN_FEE, PRICE

REPO_ROOT = Path(__file__).parent.parent


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    """Undo any structlog.configure() a test (e.g. a CLI entry point) performed."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def repo_root() -> Path:
    """Return the repository root path."""
    return REPO_ROOT


@pytest.fixture
def default_config() -> PoolConfig:
    """The demonstration pool configuration."""
    return PoolConfig()


@pytest.fixture
def empty_pool() -> LiquidityPool:
    """A freshly initialized pool with the demonstration parameters."""
    return LiquidityPool.init(PRICE, LIQUIDITY_TARGET, MIN_FEE, MAX_FEE)


@pytest.fixture
def funded_pool(empty_pool: LiquidityPool) -> LiquidityPool:
    """A pool holding 1000 pool-native tokens against 1000 shares."""
    empty_pool.add_liquidity(TokenAmount.from_int(1000))
    return empty_pool
