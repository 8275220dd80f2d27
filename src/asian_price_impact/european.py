"""European option valuation on the price-impact adjusted CRR lattice.

A European payoff depends only on the terminal node, so the lattice
recombines and the price is a single sum over the Binomial(n, p) number of
up moves, in O(n):

    V_0 = r**(-n) * sum_k C(n, k) p**k (1 - p)**(n - k) * payoff(S_0 u_tilde**k d_tilde**(n - k))
"""

from __future__ import annotations

import logging

import numpy as np

from .enums import OptionType
from .lattice import compute_lattice_factors
from .utils import check_option_type, expected_binomial, intrinsic_value
from .validation import validate_inputs, validate_steps

logger = logging.getLogger(__name__)

__all__ = ["price_european"]


def price_european(
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
) -> float:
    """Price a European call or put on the impact-adjusted binomial lattice.

    Takes the same inputs as :func:`~asian_price_impact.geometric.price_geometric_asian`;
    no paths are enumerated, so large ``n`` is cheap and never warns.
    """
    option_type = check_option_type(option_type)
    if validate:
        factors = validate_inputs(S0, K, r, u, d, lambda_, v_u, v_d, n, enumerates_paths=False)
        n = validate_steps(n)
    else:
        factors = compute_lattice_factors(r, u, d, lambda_, v_u, v_d)
        n = validate_steps(n)
    logger.debug("European %s n=%d p=%.6f", option_type.value, n, factors.p)

    S0 = float(S0)
    K = float(K)

    def payoff_from_k(ks: np.ndarray) -> np.ndarray:
        terminal = S0 * np.power(factors.u_tilde, ks) * np.power(factors.d_tilde, n - ks)
        return intrinsic_value(terminal, K, option_type)

    expected_payoff = expected_binomial(n=n, p=factors.p, f=payoff_from_k)
    return float(float(r) ** (-n) * expected_payoff)
