"""Tests for the scripted demonstration scenario."""

import pytest

from liquidity.math.fixed_point import FixedPointError
from liquidity.models.types import LpTokenAmount, StakedTokenAmount, TokenAmount
from liquidity.pool.config import PoolConfig
from liquidity.scenario import run_demo_scenario


class TestDemoScenario:
    def test_records_every_step(self):
        result = run_demo_scenario()

        assert [step.description for step in result.steps] == [
            "Liquidity pool init done",
            "100 tokens have been added",
            "6 staked tokens have been swapped",
            "10 tokens have been added",
            "30 staked tokens have been swapped",
            "109.999100 lp tokens have been removed",
        ]

    def test_step_results(self):
        results = [step.result for step in run_demo_scenario().steps]

        assert results[1] == "100.000000"
        assert results[2] == "8.991000"  # min fee: 91 left >= 90
        assert results[3] == "9.999100"
        assert results[4] == "43.442370"  # curve fee 0.034614
        assert results[5] == (
            "returned_token_amount: 52.385634 returned_staked_token_amount: 32.760000"
        )

    def test_final_pool_state(self):
        pool = run_demo_scenario().pool

        assert pool.lp_token_amount == LpTokenAmount.zero()
        assert pool.token_amount == TokenAmount.from_str("5.180996")
        assert pool.staked_token_amount == StakedTokenAmount.from_str("3.24")

    def test_steps_capture_pool_rendering(self):
        steps = run_demo_scenario().steps
        assert "\t - Token amount: 100.000000\n" in steps[1].pool
        assert "\t - Staked token amount: 6.000000\n" in steps[2].pool

    def test_failing_step_propagates(self):
        """At price 10 the second swap owes more than the reserve holds."""
        with pytest.raises(FixedPointError):
            run_demo_scenario(PoolConfig(price="10"))
