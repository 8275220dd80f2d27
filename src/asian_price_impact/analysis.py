"""Sensitivity of Asian option values to the hedging price-impact coefficient."""

from __future__ import annotations

from collections.abc import Iterable
import logging

import pandas as pd

from .bounds import arithmetic_asian_bounds
from .enums import OptionType
from .lattice import compute_lattice_factors
from .params import EnumerationParams

logger = logging.getLogger(__name__)

__all__ = ["price_impact_sweep"]

SWEEP_COLUMNS = [
    "lambda",
    "u_tilde",
    "d_tilde",
    "p",
    "price_geometric",
    "bound_lower",
    "bound_upper",
    "bound_midpoint",
    "rho_star",
    "spread",
]


def price_impact_sweep(
    S0: float,
    K: float,
    r: float,
    u: float,
    d: float,
    n: int,
    lambdas: Iterable[float],
    *,
    v_u: float = 1.0,
    v_d: float = 1.0,
    option_type: OptionType = OptionType.CALL,
    params: EnumerationParams | None = None,
) -> pd.DataFrame:
    """Tabulate geometric prices and arithmetic bounds over impact coefficients.

    Parameters
    ==========
    S0, K, r, u, d, n:
        Lattice and contract inputs, as for ``price_geometric_asian``.
    lambdas:
        Impact coefficients to evaluate, one row each (in the given order).
    v_u, v_d:
        Hedging volumes held fixed across the sweep.
    option_type:
        CALL (default) or PUT.
    params:
        Enumeration settings passed to every pricing call.

    Returns
    =======
    pd.DataFrame
        Columns ``lambda, u_tilde, d_tilde, p, price_geometric, bound_lower,
        bound_upper, bound_midpoint, rho_star, spread``.

    Raises
    ======
    InvalidProbabilityError
        If any coefficient in the sweep breaks no-arbitrage.
    """
    rows = []
    for lambda_ in lambdas:
        lambda_ = float(lambda_)
        bounds = arithmetic_asian_bounds(
            S0, K, r, u, d, lambda_, v_u, v_d, n, option_type=option_type, params=params
        )
        factors = compute_lattice_factors(r, u, d, lambda_, v_u, v_d)
        rows.append(
            {
                "lambda": lambda_,
                "u_tilde": factors.u_tilde,
                "d_tilde": factors.d_tilde,
                "p": factors.p,
                "price_geometric": bounds.V0_G,
                "bound_lower": bounds.lower_bound,
                "bound_upper": bounds.upper_bound,
                "bound_midpoint": bounds.midpoint,
                "rho_star": bounds.rho_star,
                "spread": bounds.spread,
            }
        )
    logger.debug("Price impact sweep over %d coefficients", len(rows))
    return pd.DataFrame(rows, columns=SWEEP_COLUMNS)
