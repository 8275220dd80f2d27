"""Averages of price trajectories.

Both functions reduce along the last axis, so a single trajectory gives a
float and a block of trajectories gives one value per row.
"""

from __future__ import annotations

import numpy as np

from .exceptions import EmptyInputError, NonPositivePriceError

__all__ = ["geometric_mean", "arithmetic_mean"]


def _as_prices(prices) -> np.ndarray:
    arr = np.atleast_1d(np.asarray(prices, dtype=float))
    if arr.shape[-1] == 0:
        raise EmptyInputError("Cannot compute the average of an empty price sequence")
    return arr


def _scalar_or_array(values: np.ndarray) -> np.ndarray | float:
    if values.ndim == 0:
        return float(values)
    return values


def geometric_mean(prices) -> np.ndarray | float:
    """Geometric mean ``(x_0 * ... * x_m) ** (1 / (m + 1))`` along the last axis.

    Computed in log space relative to the first observation,
    ``x_0 * exp(mean(log(x_i / x_0)))``, so long trajectories cannot overflow
    and a single observation is returned unchanged.

    Raises
    ======
    EmptyInputError
        If the sequence is empty.
    NonPositivePriceError
        If any element is <= 0.
    """
    arr = _as_prices(prices)
    if np.any(arr <= 0.0):
        raise NonPositivePriceError("All prices must be positive for a geometric mean")
    base = arr[..., :1]
    gm = base[..., 0] * np.exp(np.mean(np.log(arr / base), axis=-1))
    return _scalar_or_array(gm)


def arithmetic_mean(prices) -> np.ndarray | float:
    """Plain average along the last axis.

    Raises
    ======
    EmptyInputError
        If the sequence is empty.
    """
    arr = _as_prices(prices)
    return _scalar_or_array(np.mean(arr, axis=-1))
