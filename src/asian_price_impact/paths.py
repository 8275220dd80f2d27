"""Exhaustive enumeration of binomial move sequences and their price paths.

A move sequence of length ``n`` is a row of 0/1 values (1 = up, 0 = down).
Row ``i`` of the full enumeration is the binary expansion of the integer
``i`` with the most significant bit as the first step, so path ``0`` is
all-down and path ``2**n - 1`` is all-up. The order is fixed, which keeps
every downstream summation reproducible.

The full enumeration has ``2**n`` rows; :func:`iter_move_blocks` hands it out
in contiguous blocks so callers never hold more than ``block_size`` rows.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

import numpy as np

from .exceptions import ValidationError

if TYPE_CHECKING:
    from .lattice import LatticeFactors

__all__ = [
    "count_paths",
    "enumerate_move_sequences",
    "iter_move_blocks",
    "build_price_paths",
    "path_probabilities",
]

# Path indices are held in int64.
_MAX_STEPS = 62


def _check_steps(n: int) -> int:
    n = int(n)
    if n < 0:
        raise ValidationError(f"n must be a non-negative integer, got {n}")
    if n > _MAX_STEPS:
        raise ValidationError(f"n must be <= {_MAX_STEPS} for exhaustive enumeration, got {n}")
    return n


def count_paths(n: int) -> int:
    """Number of distinct move sequences of length n."""
    return 2 ** _check_steps(n)


def enumerate_move_sequences(n: int, start: int = 0, stop: int | None = None) -> np.ndarray:
    """Return move sequences ``start .. stop-1`` of the full length-n enumeration.

    Parameters
    ==========
    n:
        Number of steps (>= 0).
    start, stop:
        Half-open range of path indices. ``stop=None`` means ``2**n``.

    Returns
    =======
    np.ndarray
        Shape ``(stop - start, n)``, dtype int8, one move sequence per row.
    """
    n = _check_steps(n)
    total = 2**n
    stop = total if stop is None else int(stop)
    if not (0 <= start <= stop <= total):
        raise ValidationError(f"path index range [{start}, {stop}) outside [0, {total})")

    idx = np.arange(start, stop, dtype=np.int64)
    shifts = np.arange(n - 1, -1, -1, dtype=np.int64)
    return ((idx[:, None] >> shifts[None, :]) & 1).astype(np.int8)


def iter_move_blocks(n: int, block_size: int) -> Iterator[np.ndarray]:
    """Yield the full enumeration of length-n move sequences in index order.

    Each block has at most ``block_size`` rows; concatenating the blocks gives
    ``enumerate_move_sequences(n)``.
    """
    if block_size < 1:
        raise ValidationError(f"block_size must be >= 1, got {block_size}")
    total = count_paths(n)
    for start in range(0, total, block_size):
        yield enumerate_move_sequences(n, start, min(start + block_size, total))


def build_price_paths(S0: float, moves: np.ndarray, factors: LatticeFactors) -> np.ndarray:
    """Expand move sequences into price trajectories.

    ``price[0] = S0`` and ``price[i] = S0 * u_tilde**ups * d_tilde**downs`` where
    ``ups``/``downs`` count the moves among the first ``i`` steps.

    Parameters
    ==========
    S0:
        Initial price.
    moves:
        One sequence of shape ``(n,)`` or a block of shape ``(b, n)``.
    factors:
        Adjusted lattice factors.

    Returns
    =======
    np.ndarray
        Shape ``(n + 1,)`` or ``(b, n + 1)``.
    """
    moves = np.asarray(moves)
    n = moves.shape[-1]
    ups = np.cumsum(moves, axis=-1, dtype=np.int64)
    downs = np.arange(1, n + 1, dtype=np.int64) - ups
    later = S0 * np.power(factors.u_tilde, ups) * np.power(factors.d_tilde, downs)
    first = np.full(moves.shape[:-1] + (1,), float(S0))
    return np.concatenate([first, later], axis=-1)


def path_probabilities(moves: np.ndarray, p: float) -> np.ndarray | float:
    """Risk-neutral probability ``p**ups * (1 - p)**downs`` of each move sequence."""
    moves = np.asarray(moves)
    n = moves.shape[-1]
    ups = moves.sum(axis=-1, dtype=np.int64)
    probs = np.power(p, ups) * np.power(1.0 - p, n - ups)
    if moves.ndim == 1:
        return float(probs)
    return probs
