"""Exact valuation of geometric-average Asian options on the price-impact lattice.

The payoff of a geometric Asian call after ``n`` steps is

    V_n = max(0, G_n - K),   G_n = (S_0 * S_1 * ... * S_n) ** (1 / (n + 1))

``G_n`` depends on the order of the moves, not only on the terminal node, so
the lattice does not recombine for this payoff. The price is obtained by
enumerating all ``2**n`` move sequences:

    V_0 = r**(-n) * sum_paths p**k (1 - p)**(n - k) * V_n(path)

with ``k`` the number of up moves on the path. Cost is Θ(2^n · n); keep
``n`` around 20 or below.

References
----------
Cox, J. C., Ross, S. A., and Rubinstein, M. (1979). "Option Pricing:
A Simplified Approach", *Journal of Financial Economics*, 7(3), 229–263.
"""

from __future__ import annotations

import logging

import numpy as np

from .enums import OptionType
from .lattice import LatticeFactors, compute_lattice_factors
from .params import DEFAULT_PARAMS, EnumerationParams
from .paths import build_price_paths, count_paths, iter_move_blocks, path_probabilities
from .statistics import geometric_mean
from .utils import check_option_type, intrinsic_value, log_timing
from .validation import validate_inputs, validate_steps

logger = logging.getLogger(__name__)

__all__ = ["price_geometric_asian"]


def _setup_lattice(
    S0: float,
    K: float,
    r: float,
    u: float,
    d: float,
    lambda_: float,
    v_u: float,
    v_d: float,
    n: int,
    *,
    validate: bool,
    params: EnumerationParams,
) -> tuple[LatticeFactors, int]:
    """Return lattice factors and the step count, validating inputs if requested."""
    if validate:
        factors = validate_inputs(
            S0, K, r, u, d, lambda_, v_u, v_d, n, params=params, stacklevel=4
        )
    else:
        factors = compute_lattice_factors(r, u, d, lambda_, v_u, v_d)
    return factors, validate_steps(n)


def _ordered_sum(total: float, terms: np.ndarray) -> float:
    # cumsum accumulates strictly left to right, unlike sum or a dot product
    return float(np.cumsum(np.concatenate(([total], terms)))[-1])


def _expected_path_values(
    S0: float,
    K: float,
    n: int,
    factors: LatticeFactors,
    option_type: OptionType,
    block_size: int,
) -> tuple[float, float]:
    """Undiscounted risk-neutral expectations of the geometric payoff and of G_n.

    Paths are visited in index order, one block at a time. Each path's
    contribution is added to the running totals in path-index order, so the
    result is the same for every block size.

    Returns
    =======
    tuple of (expected_payoff, expected_geometric_average)
    """
    expected_payoff = 0.0
    expected_g = 0.0
    for moves in iter_move_blocks(n, block_size):
        prices = build_price_paths(S0, moves, factors)
        g = geometric_mean(prices)
        probs = path_probabilities(moves, factors.p)
        expected_payoff = _ordered_sum(expected_payoff, probs * intrinsic_value(g, K, option_type))
        expected_g = _ordered_sum(expected_g, probs * g)
    return expected_payoff, expected_g


def price_geometric_asian(
    S0: float,
    K: float,
    r: float,
    u: float,
    d: float,
    lambda_: float,
    v_u: float,
    v_d: float,
    n: int,
    *,
    option_type: OptionType = OptionType.CALL,
    validate: bool = True,
    params: EnumerationParams | None = None,
) -> float:
    """Exact price of a geometric-average Asian option under price impact.

    Parameters
    ----------
    S0 : float
        Initial stock price (> 0)
    K : float
        Strike price (> 0)
    r : float
        Gross risk-free rate per period, e.g. 1.05
    u, d : float
        Base CRR up and down factors, u > d > 0
    lambda_ : float
        Price impact coefficient (>= 0)
    v_u, v_d : float
        Hedging volumes on up and down moves (>= 0)
    n : int
        Number of time steps (>= 0). The average is over the n + 1 prices
        S_0, ..., S_n.
    option_type : OptionType
        CALL (default) or PUT
    validate : bool
        Run :func:`validate_inputs` on the scalar inputs first
    params : EnumerationParams, optional
        Enumeration block size and logging switches

    Returns
    -------
    float
        Present value of the geometric Asian option
    """
    option_type = check_option_type(option_type)
    params = DEFAULT_PARAMS if params is None else params
    factors, n = _setup_lattice(
        S0, K, r, u, d, lambda_, v_u, v_d, n, validate=validate, params=params
    )
    logger.debug("Geometric Asian %s n=%d paths=%d", option_type.value, n, count_paths(n))

    with log_timing(logger, "Geometric Asian price", params.log_timings):
        expected_payoff, _ = _expected_path_values(
            float(S0), float(K), n, factors, option_type, params.block_size
        )
    discount = float(r) ** (-n)
    return float(discount * expected_payoff)
