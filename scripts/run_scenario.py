#!/usr/bin/env python3
"""Run the demonstration pool scenario and print each step.

Usage:
    python -m scripts.run_scenario
    python -m scripts.run_scenario --price 2 --min-fee 0.002 --max-fee 0.05 -v

Exit codes:
    0 - Scenario completed
    1 - Invalid configuration or an arithmetic error during a step
"""

import argparse
import logging
import sys

import structlog
from pydantic import ValidationError

from liquidity.constants import (
    DEFAULT_LIQUIDITY_TARGET,
    DEFAULT_MAX_FEE,
    DEFAULT_MIN_FEE,
    DEFAULT_PRICE,
)
from liquidity.math.fixed_point import FixedPointError
from liquidity.pool.config import PoolConfig
from liquidity.scenario import run_demo_scenario

logger = structlog.get_logger()


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run the liquidity pool demonstration")
    parser.add_argument("--price", default=DEFAULT_PRICE, help="Staked token price")
    parser.add_argument(
        "--liquidity-target",
        default=DEFAULT_LIQUIDITY_TARGET,
        help="Reserve level at or above which the minimum fee applies",
    )
    parser.add_argument("--min-fee", default=DEFAULT_MIN_FEE, help="Minimum fee (0.001 = 0.1%%)")
    parser.add_argument("--max-fee", default=DEFAULT_MAX_FEE, help="Maximum fee (0.09 = 9%%)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log pool operations")
    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    try:
        config = PoolConfig(
            price=args.price,
            liquidity_target=args.liquidity_target,
            min_fee=args.min_fee,
            max_fee=args.max_fee,
        )
        result = run_demo_scenario(config)
    except ValidationError as err:
        logger.error("invalid_pool_config", errors=err.errors(include_url=False))
        return 1
    except FixedPointError as err:
        logger.error("scenario_failed", error_type=type(err).__name__, error=str(err))
        return 1

    for step in result.steps:
        print(f"{step.description}: {step.result}" if step.result else step.description)
        print(step.pool)

    return 0


if __name__ == "__main__":
    sys.exit(main())
