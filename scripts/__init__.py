"""Command-line tools for the liquidity pool."""
