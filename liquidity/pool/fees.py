"""Liquidity-sensitive fee curve.

The fee depends on the pool-native reserve left *after* an operation:

    final >= target:  fee = min_fee
    final <  target:  fee = max_fee - (max_fee - min_fee) * (final / target)

so the fee rises linearly from min_fee at the target to max_fee at an empty
reserve. Withdrawals and swaps share this curve.
"""

from liquidity.math.fixed_point import FixedPointDecimal
from liquidity.models.types import Percentage, TokenAmount


def calculate_fee(
    final_liquidity: TokenAmount,
    liquidity_target: TokenAmount,
    min_fee: Percentage,
    max_fee: Percentage,
) -> Percentage:
    """Fee percentage for a projected post-operation reserve.

    The minimum fee applies exactly at the target (>= comparison).

    Args:
        final_liquidity: Pool-native reserve after the operation
        liquidity_target: Reserve level at or above which min_fee applies
        min_fee: Floor of the curve
        max_fee: Fee charged when the projected reserve is zero

    Returns:
        Fee as a Percentage

    Raises:
        Underflow: If min_fee > max_fee and the reserve is below target
    """
    if final_liquidity.value >= liquidity_target.value:
        return min_fee

    spread = max_fee.value - min_fee.value
    fill_ratio = final_liquidity.value / liquidity_target.value
    return Percentage(max_fee.value - spread * fill_ratio)


def apply_fee(amount: FixedPointDecimal, fee: Percentage) -> FixedPointDecimal:
    """Deduct fee from amount: amount - fee * amount."""
    return amount - fee.value * amount
