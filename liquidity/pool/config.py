"""Validated construction parameters for a liquidity pool.

LiquidityPool itself performs no validation; callers are expected to build
it from a PoolConfig, which rejects inconsistent parameters up front.
"""

from decimal import Decimal
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator

from liquidity.constants import (
    DECIMALS,
    DEFAULT_LIQUIDITY_TARGET,
    DEFAULT_MAX_FEE,
    DEFAULT_MIN_FEE,
    DEFAULT_PRICE,
)
from liquidity.math.fixed_point import FixedPointDecimal, Overflow
from liquidity.models.types import Percentage, Price, TokenAmount


def validate_fixed_point(value: Any) -> Decimal:
    """Validate that a value is a non-negative decimal with at most 6 fractional digits.

    Floats are converted through their repr so that 0.001 stays 0.001.

    Raises:
        ValueError: If value is not a finite non-negative decimal or is too precise
    """
    if isinstance(value, bool):
        raise ValueError("Fixed-point value cannot be a boolean")
    if isinstance(value, float):
        value = repr(value)
    try:
        d = Decimal(value)
    except (ArithmeticError, TypeError, ValueError) as err:
        raise ValueError(f"Fixed-point value must be a decimal number: {value!r}") from err

    if not d.is_finite():
        raise ValueError(f"Fixed-point value must be finite: {value!r}")
    if d < 0:
        raise ValueError(f"Fixed-point value cannot be negative: {value!r}")
    try:
        fixed = FixedPointDecimal.from_decimal(d)
    except Overflow as err:
        raise ValueError(f"Fixed-point value exceeds representable range: {value!r}") from err
    if fixed.to_decimal() != d:
        raise ValueError(f"Fixed-point value has more than {DECIMALS} decimals: {value!r}")
    return d


# Non-negative decimal with at most DECIMALS fractional digits
FixedPointInput = Annotated[Decimal, BeforeValidator(validate_fixed_point)]


class PoolConfig(BaseModel):
    """Configuration of a liquidity pool.

    Attributes:
        price: Price of one staked token in pool-native tokens
        liquidity_target: Pool-native reserve at or above which min_fee applies
        min_fee: Fee floor, as a fraction (0.001 = 0.1%)
        max_fee: Fee charged when an operation would empty the reserve
    """

    model_config = ConfigDict(frozen=True)

    price: FixedPointInput = Field(default=Decimal(DEFAULT_PRICE))
    liquidity_target: FixedPointInput = Field(default=Decimal(DEFAULT_LIQUIDITY_TARGET))
    min_fee: FixedPointInput = Field(default=Decimal(DEFAULT_MIN_FEE))
    max_fee: FixedPointInput = Field(default=Decimal(DEFAULT_MAX_FEE))

    @model_validator(mode="after")
    def check_consistency(self) -> "PoolConfig":
        if self.liquidity_target <= 0:
            raise ValueError("liquidity_target must be positive")
        if self.min_fee > self.max_fee:
            raise ValueError(f"min_fee ({self.min_fee}) exceeds max_fee ({self.max_fee})")
        if self.max_fee > 1:
            raise ValueError(f"max_fee ({self.max_fee}) exceeds 100%")
        return self

    def typed_price(self) -> Price:
        return Price(FixedPointDecimal.from_decimal(self.price))

    def typed_liquidity_target(self) -> TokenAmount:
        return TokenAmount(FixedPointDecimal.from_decimal(self.liquidity_target))

    def typed_min_fee(self) -> Percentage:
        return Percentage(FixedPointDecimal.from_decimal(self.min_fee))

    def typed_max_fee(self) -> Percentage:
        return Percentage(FixedPointDecimal.from_decimal(self.max_fee))


DEFAULT_POOL_CONFIG = PoolConfig()
