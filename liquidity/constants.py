"""Numeric limits and default pool parameters.

Centralizes the fixed-point precision and the parameters used by the
demonstration scenario.
"""

# Fixed-point precision: every decimal carries exactly 6 fractional digits
DECIMALS = 6
FACTOR = 10**DECIMALS

# Storage is an unsigned 64-bit magnitude; multiply/divide widen to 128 bits
U64_MAX = 2**64 - 1
U128_MAX = 2**128 - 1

# Demonstration pool parameters (decimal strings, parsed without float drift)
DEFAULT_PRICE = "1.5"
DEFAULT_LIQUIDITY_TARGET = "90"
DEFAULT_MIN_FEE = "0.001"  # 0.1%
DEFAULT_MAX_FEE = "0.09"  # 9%
