"""Scripted demonstration of the pool lifecycle.

Runs a fixed sequence against a fresh pool: two deposits, two swaps and a
withdrawal of every share, recording the result and pool state after each
step.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from liquidity.models.types import LpTokenAmount, StakedTokenAmount, TokenAmount
from liquidity.pool.config import DEFAULT_POOL_CONFIG, PoolConfig
from liquidity.pool.liquidity_pool import LiquidityPool

logger = structlog.get_logger()


@dataclass(frozen=True)
class ScenarioStep:
    """One executed step: what was done, what it returned, the pool afterwards."""

    description: str
    result: str
    pool: str


@dataclass
class ScenarioResult:
    """Outcome of a scenario run."""

    pool: LiquidityPool
    steps: list[ScenarioStep] = field(default_factory=list)

    def record(self, description: str, result: str) -> None:
        self.steps.append(ScenarioStep(description=description, result=result, pool=str(self.pool)))
        logger.info("scenario_step", step=len(self.steps), description=description, result=result)


def run_demo_scenario(config: PoolConfig | None = None) -> ScenarioResult:
    """Run the demonstration sequence.

    Args:
        config: Pool parameters (default: DEFAULT_POOL_CONFIG)

    Returns:
        ScenarioResult with the final pool and every recorded step

    Raises:
        FixedPointError: If a step fails (the remaining steps are not run)
    """
    config = config or DEFAULT_POOL_CONFIG
    pool = LiquidityPool.from_config(config)
    result = ScenarioResult(pool=pool)
    result.record("Liquidity pool init done", "")

    minted = pool.add_liquidity(TokenAmount.from_int(100))
    result.record("100 tokens have been added", str(minted))

    swapped = pool.swap(StakedTokenAmount.from_int(6))
    result.record("6 staked tokens have been swapped", str(swapped))

    minted = pool.add_liquidity(TokenAmount.from_int(10))
    result.record("10 tokens have been added", str(minted))

    swapped = pool.swap(StakedTokenAmount.from_int(30))
    result.record("30 staked tokens have been swapped", str(swapped))

    burned = LpTokenAmount.from_str("109.9991")
    token_out, staked_out = pool.remove_liquidity(burned)
    result.record(
        f"{burned} lp tokens have been removed",
        f"returned_token_amount: {token_out} returned_staked_token_amount: {staked_out}",
    )

    return result
