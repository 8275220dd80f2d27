"""Helper functions shared by the lattice pricers."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable
from collections.abc import Iterator
import time
import numpy as np
from scipy.stats import binom

from .enums import OptionType
from .exceptions import ConfigurationError, ValidationError

__all__ = [
    "log_timing",
    "check_option_type",
    "intrinsic_value",
    "binomial_pmf",
    "expected_binomial",
]


@contextmanager
def log_timing(logger, label: str, enabled: bool) -> Iterator[None]:
    """Log timing for a code block when enabled is True."""
    if not enabled:
        yield
        return
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        logger.debug("Timing %s: %.6fs", label, elapsed)


def check_option_type(option_type) -> OptionType:
    """Return option_type unchanged, or raise ConfigurationError for non-enum values."""
    if not isinstance(option_type, OptionType):
        raise ConfigurationError(
            f"option_type must be OptionType.CALL or OptionType.PUT, got {option_type!r}"
        )
    return option_type


def intrinsic_value(
    underlying: np.ndarray | float, strike: float, option_type: OptionType
) -> np.ndarray:
    """Vanilla payoff max(0, S - K) for calls or max(0, K - S) for puts."""
    if option_type is OptionType.CALL:
        return np.maximum(underlying - strike, 0.0)
    return np.maximum(strike - underlying, 0.0)


def _check_binomial(n: int, p: float) -> float:
    if n < 0:
        raise ValidationError("n must be >= 0")
    p = float(p)
    if not (0.0 <= p <= 1.0):
        raise ValidationError(f"p must be in [0, 1], got {p}")
    return p


def binomial_pmf(k: np.ndarray | int, n: int, p: float) -> np.ndarray:
    """Probability of ``k`` up moves in ``n`` steps with up probability ``p``.

    Zero for ``k`` outside ``0..n``.
    """
    p = _check_binomial(n, p)
    return np.asarray(binom.pmf(np.asarray(k), n, p), dtype=float)


def expected_binomial(n: int, p: float, f: Callable[[np.ndarray], np.ndarray]) -> float:
    """Expectation of ``f(k)`` over the terminal up-move count ``k ~ Binomial(n, p)``.

    ``f`` receives the array ``0..n`` and must return one value per entry.
    """
    p = _check_binomial(n, p)
    ups = np.arange(n + 1)
    values = np.asarray(f(ups), dtype=float)
    if values.shape != ups.shape:
        raise ValidationError(f"f must return shape {ups.shape}, got {values.shape}")
    return float(binomial_pmf(ups, n, p) @ values)
