"""Two-asset liquidity pool with a liquidity-sensitive fee.

The pool holds a pool-native token reserve and a staked token reserve, and
issues LP (share) tokens against deposits of the pool-native token:

- add_liquidity: deposit pool-native tokens, receive shares
- remove_liquidity: burn shares, receive both assets minus a fee
- swap: sell staked tokens for pool-native tokens minus a fee

Staked tokens are valued at a fixed reference price. Fees follow the curve in
liquidity.pool.fees, evaluated on the reserve the operation would leave
behind.

Every operation computes its full set of new balances before committing any
of them, so a FixedPointError leaves the pool untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from liquidity.math.fixed_point import FixedPointError
from liquidity.models.types import (
    LpTokenAmount,
    Percentage,
    Price,
    StakedTokenAmount,
    TokenAmount,
)
from liquidity.pool.fees import apply_fee, calculate_fee

if TYPE_CHECKING:
    from liquidity.pool.config import PoolConfig

logger = structlog.get_logger()


@dataclass(frozen=True)
class PoolState:
    """Snapshot of the mutable pool balances."""

    token_amount: TokenAmount
    staked_token_amount: StakedTokenAmount
    lp_token_amount: LpTokenAmount


class LiquidityPool:
    """Pool-native / staked token pool.

    Configuration (price, target, fee bounds) is fixed at construction and
    assumed valid; use PoolConfig / from_config() to validate it. Balances
    start at zero and change only through the public operations.
    """

    def __init__(
        self,
        price: Price,
        liquidity_target: TokenAmount,
        min_fee: Percentage,
        max_fee: Percentage,
    ) -> None:
        self._price = price
        self._liquidity_target = liquidity_target
        self._min_fee = min_fee
        self._max_fee = max_fee

        self._token_amount = TokenAmount.zero()
        self._staked_token_amount = StakedTokenAmount.zero()
        self._lp_token_amount = LpTokenAmount.zero()

    @classmethod
    def init(
        cls,
        price: Price,
        liquidity_target: TokenAmount,
        min_fee: Percentage,
        max_fee: Percentage,
    ) -> LiquidityPool:
        """Create an empty pool. Alias of the constructor."""
        return cls(price, liquidity_target, min_fee, max_fee)

    @classmethod
    def from_config(cls, config: PoolConfig) -> LiquidityPool:
        """Create an empty pool from validated configuration."""
        return cls(
            price=config.typed_price(),
            liquidity_target=config.typed_liquidity_target(),
            min_fee=config.typed_min_fee(),
            max_fee=config.typed_max_fee(),
        )

    # --- Read-only state ---

    @property
    def price(self) -> Price:
        return self._price

    @property
    def liquidity_target(self) -> TokenAmount:
        return self._liquidity_target

    @property
    def min_fee(self) -> Percentage:
        return self._min_fee

    @property
    def max_fee(self) -> Percentage:
        return self._max_fee

    @property
    def token_amount(self) -> TokenAmount:
        return self._token_amount

    @property
    def staked_token_amount(self) -> StakedTokenAmount:
        return self._staked_token_amount

    @property
    def lp_token_amount(self) -> LpTokenAmount:
        return self._lp_token_amount

    def state(self) -> PoolState:
        """Snapshot of the current balances."""
        return PoolState(
            token_amount=self._token_amount,
            staked_token_amount=self._staked_token_amount,
            lp_token_amount=self._lp_token_amount,
        )

    def current_pool_value(self) -> TokenAmount:
        """Total pool value in pool-native tokens (staked reserve at price).

        Raises:
            Overflow: If the valuation exceeds the representable range
        """
        staked_value = self._staked_token_value(self._staked_token_amount)
        return TokenAmount(self._token_amount.value + staked_value.value)

    # --- Operations ---

    def add_liquidity(self, amount: TokenAmount) -> LpTokenAmount:
        """Deposit pool-native tokens and mint shares.

        The first deposit into a pool without shares mints 1:1. Later deposits
        mint amount * (share supply / pool value), so existing holders keep
        their share price.

        Args:
            amount: Pool-native tokens deposited

        Returns:
            Shares minted

        Raises:
            DivisionByZero: If shares exist but the pool value is zero
            Overflow: If any intermediate exceeds the representable range
        """
        try:
            if not self._lp_token_amount.value:
                minted = amount.value
            else:
                pool_value = self.current_pool_value()
                ownership_ratio = self._lp_token_amount.value / pool_value.value
                minted = amount.value * ownership_ratio

            new_token_amount = self._token_amount.value + amount.value
            new_lp_token_amount = self._lp_token_amount.value + minted
        except FixedPointError as err:
            self._log_failure("add_liquidity", err, amount=str(amount))
            raise

        self._token_amount = TokenAmount(new_token_amount)
        self._lp_token_amount = LpTokenAmount(new_lp_token_amount)

        logger.debug(
            "liquidity_added",
            amount=str(amount),
            minted=str(minted),
            token_amount=str(self._token_amount),
            lp_token_amount=str(self._lp_token_amount),
        )
        return LpTokenAmount(minted)

    def remove_liquidity(
        self, lp_token_amount: LpTokenAmount
    ) -> tuple[TokenAmount, StakedTokenAmount]:
        """Burn shares and withdraw a proportional part of both reserves.

        The fee is taken from the curve at the pool-native reserve left after
        the withdrawal and applied to both returned amounts.

        Args:
            lp_token_amount: Shares to burn

        Returns:
            Tuple of (pool-native tokens returned, staked tokens returned)

        Raises:
            DivisionByZero: If the pool has no shares
            Underflow: If more shares are burned than exist
            Overflow: If any intermediate exceeds the representable range
        """
        try:
            share = lp_token_amount.value / self._lp_token_amount.value
            base_token = share * self._token_amount.value
            base_staked = share * self._staked_token_amount.value

            final_liquidity = TokenAmount(self._token_amount.value - base_token)
            fee = self._calculate_fee(final_liquidity)

            token_out = apply_fee(base_token, fee)
            staked_out = apply_fee(base_staked, fee)

            new_lp_token_amount = self._lp_token_amount.value - lp_token_amount.value
            new_token_amount = self._token_amount.value - token_out
            new_staked_token_amount = self._staked_token_amount.value - staked_out
        except FixedPointError as err:
            self._log_failure("remove_liquidity", err, lp_token_amount=str(lp_token_amount))
            raise

        self._lp_token_amount = LpTokenAmount(new_lp_token_amount)
        self._token_amount = TokenAmount(new_token_amount)
        self._staked_token_amount = StakedTokenAmount(new_staked_token_amount)

        logger.debug(
            "liquidity_removed",
            burned=str(lp_token_amount),
            fee=str(fee),
            token_out=str(token_out),
            staked_out=str(staked_out),
        )
        return TokenAmount(token_out), StakedTokenAmount(staked_out)

    def swap(self, staked_token_amount: StakedTokenAmount) -> TokenAmount:
        """Sell staked tokens to the pool for pool-native tokens.

        The staked tokens are valued at the reference price; the fee is taken
        from the curve at the pool-native reserve left after paying out that
        value.

        Args:
            staked_token_amount: Staked tokens sold to the pool

        Returns:
            Pool-native tokens paid out, after fee

        Raises:
            Underflow: If the value owed exceeds the pool-native reserve
            Overflow: If any intermediate exceeds the representable range
        """
        try:
            owed = self._staked_token_value(staked_token_amount)
            final_liquidity = TokenAmount(self._token_amount.value - owed.value)

            fee = self._calculate_fee(final_liquidity)
            token_out = apply_fee(owed.value, fee)

            new_staked_token_amount = (
                self._staked_token_amount.value + staked_token_amount.value
            )
            new_token_amount = self._token_amount.value - token_out
        except FixedPointError as err:
            self._log_failure("swap", err, staked_token_amount=str(staked_token_amount))
            raise

        self._staked_token_amount = StakedTokenAmount(new_staked_token_amount)
        self._token_amount = TokenAmount(new_token_amount)

        logger.debug(
            "tokens_swapped",
            staked_in=str(staked_token_amount),
            fee=str(fee),
            token_out=str(token_out),
        )
        return TokenAmount(token_out)

    # --- Internals ---

    def _calculate_fee(self, final_liquidity: TokenAmount) -> Percentage:
        return calculate_fee(
            final_liquidity, self._liquidity_target, self._min_fee, self._max_fee
        )

    def _staked_token_value(self, staked_token_amount: StakedTokenAmount) -> TokenAmount:
        return TokenAmount(self._price.value * staked_token_amount.value)

    def _log_failure(self, operation: str, err: FixedPointError, **context: str) -> None:
        logger.warning(
            "pool_operation_failed",
            operation=operation,
            error_type=type(err).__name__,
            error=str(err),
            **context,
        )

    def __str__(self) -> str:
        return (
            "> LiquidityPool\n"
            f"\t const Price: {self._price}\n"
            f"\t const Min fee: {self._min_fee}\n"
            f"\t const Max fee: {self._max_fee}\n"
            f"\t const Target liquidity: {self._liquidity_target}\n"
            f"\t - Token amount: {self._token_amount}\n"
            f"\t - Liquidity token amount: {self._lp_token_amount}\n"
            f"\t - Staked token amount: {self._staked_token_amount}\n"
        )

    def __repr__(self) -> str:
        return (
            f"LiquidityPool(price={self._price}, token_amount={self._token_amount}, "
            f"staked_token_amount={self._staked_token_amount}, "
            f"lp_token_amount={self._lp_token_amount})"
        )
