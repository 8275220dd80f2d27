"""Price-impact adjusted CRR lattice factors.

Delta-hedging trades move the market: buying ``v_u`` shares after an up move
pushes the price further up, selling ``v_d`` shares after a down move pushes it
further down. With a linear impact coefficient ``lambda`` in log-price the
one-period multipliers become

    u_tilde = u * exp(lambda * v_u)
    d_tilde = d * exp(-lambda * v_d)

and the effective risk-neutral up probability for a gross per-period rate ``r``
is

    p = (r - d_tilde) / (u_tilde - d_tilde)

Every pricer in the package derives its factors through
:func:`compute_lattice_factors`.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging

import numpy as np

from .exceptions import DegenerateLatticeError, InvalidProbabilityError

logger = logging.getLogger(__name__)

__all__ = [
    "LatticeFactors",
    "compute_lattice_factors",
    "effective_factors",
    "effective_probability",
    "check_no_arbitrage",
]


@dataclass(frozen=True, slots=True)
class LatticeFactors:
    """Impact-adjusted one-period multipliers and risk-neutral up probability.

    Attributes
    ==========
    u_tilde:
        Adjusted up factor.
    d_tilde:
        Adjusted down factor.
    p:
        Effective risk-neutral probability of an up move, in [0, 1].
    """

    u_tilde: float
    d_tilde: float
    p: float


def effective_factors(
    u: float, d: float, lambda_: float, v_u: float, v_d: float
) -> tuple[float, float]:
    """Return ``(u_tilde, d_tilde)`` after applying hedging price impact."""
    u_tilde = float(u * np.exp(lambda_ * v_u))
    d_tilde = float(d * np.exp(-lambda_ * v_d))
    return u_tilde, d_tilde


def _implied_probability(r: float, u_tilde: float, d_tilde: float) -> float:
    if u_tilde == d_tilde:
        raise DegenerateLatticeError(
            f"Adjusted up and down factors coincide (u_tilde = d_tilde = {u_tilde:.6g}); "
            "the risk-neutral probability is undefined."
        )
    return float((r - d_tilde) / (u_tilde - d_tilde))


def effective_probability(
    r: float, u: float, d: float, lambda_: float, v_u: float, v_d: float
) -> float:
    """Effective risk-neutral probability without the [0, 1] check.

    Useful for diagnostics and sensitivity tables where an out-of-range value
    should be reported rather than raised.
    """
    u_tilde, d_tilde = effective_factors(u, d, lambda_, v_u, v_d)
    return _implied_probability(float(r), u_tilde, d_tilde)


def compute_lattice_factors(
    r: float, u: float, d: float, lambda_: float, v_u: float, v_d: float
) -> LatticeFactors:
    """Derive the impact-adjusted lattice factors and risk-neutral probability.

    Parameters
    ==========
    r:
        Gross risk-free rate per period (e.g. 1.05).
    u, d:
        Base CRR up and down factors.
    lambda_:
        Price impact coefficient (>= 0).
    v_u, v_d:
        Hedging volumes traded after an up and a down move (>= 0).

    Returns
    =======
    LatticeFactors

    Raises
    ======
    DegenerateLatticeError
        If ``u_tilde == d_tilde``.
    InvalidProbabilityError
        If the implied probability lies outside [0, 1] (no-arbitrage violation).
    """
    u_tilde, d_tilde = effective_factors(u, d, lambda_, v_u, v_d)
    p = _implied_probability(float(r), u_tilde, d_tilde)
    if not (0.0 <= p <= 1.0):
        raise InvalidProbabilityError(
            f"Invalid risk-neutral probability: p = {p:.6g} must be in [0, 1] "
            f"(r = {r:.6g}, u_tilde = {u_tilde:.6g}, d_tilde = {d_tilde:.6g})"
        )
    logger.debug("Lattice factors u_tilde=%.6f d_tilde=%.6f p=%.6f", u_tilde, d_tilde, p)
    return LatticeFactors(u_tilde=u_tilde, d_tilde=d_tilde, p=p)


def check_no_arbitrage(
    r: float, u: float, d: float, lambda_: float, v_u: float, v_d: float
) -> bool:
    """Return True when the strict no-arbitrage condition ``d_tilde < r < u_tilde`` holds."""
    u_tilde, d_tilde = effective_factors(u, d, lambda_, v_u, v_d)
    return d_tilde < r < u_tilde
