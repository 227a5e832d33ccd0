"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Demonstration pool parameters
- factories: Pool and decimal factory functions
"""

from tests.helpers.constants import (
    LIQUIDITY_TARGET,
    MAX_FEE,
    MAX_WHOLE_TOKENS,
    MIN_FEE,
    PRICE,
)
from tests.helpers.factories import dec, make_pool

__all__ = [
    # Constants
    "PRICE",
    "MIN_FEE",
    "MAX_FEE",
    "LIQUIDITY_TARGET",
    "MAX_WHOLE_TOKENS",
    # Factories
    "dec",
    "make_pool",
]
