"""Bounds for the arithmetic-average Asian option on the price-impact lattice.

The arithmetic Asian payoff ``max(0, A_n - K)`` with
``A_n = (S_0 + ... + S_n) / (n + 1)`` has no tractable exact price, but it is
bracketed by the geometric option, which is priced exactly.

Lower bound (AM-GM, ``A_n >= G_n``)::

    V_0^A >= V_0^G

Upper bound (reverse AM-GM, ``A_n <= rho* G_n``)::

    V_0^A <= V_0^G + r**(-n) * (rho* - 1) * E^Q[G_n]

    rho* = exp((u_tilde**n - d_tilde**n)**2 / (4 * u_tilde**n * d_tilde**n))

``rho*`` depends only on the terminal adjusted factors, never on a single
path. ``E^Q[G_n]`` is accumulated undiscounted and discounted only when the
upper bound is assembled.

For puts the roles flip: ``max(0, K - A_n) <= max(0, K - G_n)`` so the
geometric put is the upper bound, and the same spread term gives the lower
bound.

References
----------
Budimir, I., Dragomir, S. S., and Pečarić, J. (2000). "Further reverse results
for Jensen's discrete inequality and applications in information theory",
*Journal of Inequalities in Pure and Applied Mathematics*, 2(1).
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
import logging

import numpy as np

from .enums import OptionType
from .geometric import _expected_path_values, _setup_lattice
from .params import DEFAULT_PARAMS, EnumerationParams
from .paths import count_paths
from .utils import check_option_type, log_timing

logger = logging.getLogger(__name__)

__all__ = ["ArithmeticAsianBounds", "arithmetic_asian_bounds", "spread_parameter"]


@dataclass(frozen=True, slots=True)
class ArithmeticAsianBounds:
    """Price bracket for an arithmetic-average Asian option.

    Attributes
    ==========
    lower_bound:
        Lower bound for the arithmetic option value.
    upper_bound:
        Upper bound for the arithmetic option value.
    rho_star:
        Reverse AM-GM spread parameter (>= 1).
    EQ_G:
        Undiscounted risk-neutral expectation of the geometric average.
    V0_G:
        Geometric Asian option price (the lower bound for calls, the upper
        bound for puts).
    """

    lower_bound: float
    upper_bound: float
    rho_star: float
    EQ_G: float
    V0_G: float

    @property
    def midpoint(self) -> float:
        """Midpoint of the bracket, a simple point estimate of the arithmetic price."""
        return 0.5 * (self.lower_bound + self.upper_bound)

    @property
    def spread(self) -> float:
        return self.upper_bound - self.lower_bound

    def to_dict(self) -> dict[str, float]:
        return asdict(self)

    def __str__(self) -> str:
        return "\n".join(
            [
                "Arithmetic Asian Option Bounds",
                "================================",
                f"Lower bound:         {self.lower_bound:.6f}",
                f"Upper bound:         {self.upper_bound:.6f}",
                f"Midpoint estimate:   {self.midpoint:.6f}",
                f"Spread (rho*):       {self.rho_star:.6f}",
                f"E^Q[G_n]:            {self.EQ_G:.6f}",
                f"Geometric (V0_G):    {self.V0_G:.6f}",
            ]
        )


def spread_parameter(u_tilde: float, d_tilde: float, n: int) -> float:
    """Global spread parameter rho* for n steps of the adjusted lattice.

    ``(U - D)**2 / (4 U D)`` with ``U = u_tilde**n``, ``D = d_tilde**n`` equals
    ``sinh(n log(u_tilde / d_tilde) / 2)**2``, which is evaluated instead so
    that ``U`` and ``D`` never overflow or underflow. Wide lattices give
    ``inf``.
    """
    half_log_ratio = 0.5 * n * np.log(u_tilde / d_tilde)
    with np.errstate(over="ignore"):
        rho_star = float(np.exp(np.sinh(half_log_ratio) ** 2))
    if np.isinf(rho_star):
        logger.debug("rho* overflows for n=%d, u_tilde=%g, d_tilde=%g", n, u_tilde, d_tilde)
    return rho_star


def arithmetic_asian_bounds(
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
) -> ArithmeticAsianBounds:
    """Lower and upper bounds for the arithmetic Asian option under price impact.

    Takes the same inputs as :func:`~asian_price_impact.geometric.price_geometric_asian`.

    Returns
    -------
    ArithmeticAsianBounds
        ``lower_bound``, ``upper_bound``, ``rho_star``, ``EQ_G``, ``V0_G``
        When ``rho_star`` overflows, the call ``upper_bound`` is ``inf`` and the
        put ``lower_bound`` is 0.
    """
    option_type = check_option_type(option_type)
    params = DEFAULT_PARAMS if params is None else params
    factors, n = _setup_lattice(
        S0, K, r, u, d, lambda_, v_u, v_d, n, validate=validate, params=params
    )
    logger.debug("Arithmetic Asian bounds %s n=%d paths=%d", option_type.value, n, count_paths(n))

    with log_timing(logger, "Arithmetic Asian bounds", params.log_timings):
        expected_payoff, EQ_G = _expected_path_values(
            float(S0), float(K), n, factors, option_type, params.block_size
        )

    discount = float(r) ** (-n)
    V0_G = float(discount * expected_payoff)
    rho_star = spread_parameter(factors.u_tilde, factors.d_tilde, n)
    spread_term = discount * (rho_star - 1.0) * EQ_G

    if option_type is OptionType.CALL:
        lower_bound = V0_G
        upper_bound = V0_G + spread_term
    else:
        lower_bound = max(0.0, V0_G - spread_term)
        upper_bound = V0_G

    logger.debug(
        "Bounds lower=%.6f upper=%.6f rho_star=%.6f EQ_G=%.6f",
        lower_bound,
        upper_bound,
        rho_star,
        EQ_G,
    )
    return ArithmeticAsianBounds(
        lower_bound=float(lower_bound),
        upper_bound=float(upper_bound),
        rho_star=rho_star,
        EQ_G=float(EQ_G),
        V0_G=V0_G,
    )
