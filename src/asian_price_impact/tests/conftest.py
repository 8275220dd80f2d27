"""Shared pytest fixtures for asian_price_impact tests."""

import pytest

from asian_price_impact.params import EnumerationParams


# ---------------------------------------------------------------------------
# Scalar constants
# ---------------------------------------------------------------------------

SPOT = 100.0
STRIKE = 100.0
GROSS_RATE = 1.05
UP = 1.2
DOWN = 0.8
IMPACT = 0.1
VOLUME_UP = 1.0
VOLUME_DOWN = 1.0
NUM_STEPS = 6


@pytest.fixture()
def lattice_inputs() -> dict:
    """Base factors, impact coefficient and hedging volumes."""
    return {
        "r": GROSS_RATE,
        "u": UP,
        "d": DOWN,
        "lambda_": IMPACT,
        "v_u": VOLUME_UP,
        "v_d": VOLUME_DOWN,
    }


@pytest.fixture()
def pricing_args() -> tuple:
    """Positional arguments (S0, K, r, u, d, lambda, v_u, v_d, n) of the pricers."""
    return (SPOT, STRIKE, GROSS_RATE, UP, DOWN, IMPACT, VOLUME_UP, VOLUME_DOWN, NUM_STEPS)


@pytest.fixture()
def small_blocks() -> EnumerationParams:
    """Enumeration settings that force many partial blocks."""
    return EnumerationParams(block_size=5)
