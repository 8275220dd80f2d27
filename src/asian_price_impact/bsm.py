"""Black-Scholes closed form, used as the continuous-time reference for the lattice."""

from __future__ import annotations

import numpy as np
from scipy.stats import norm

from .enums import OptionType
from .exceptions import ValidationError
from .utils import check_option_type
from .validation import validate_steps

__all__ = ["black_scholes_price", "lattice_to_continuous", "black_scholes_from_lattice"]


def _calculate_d_values(
    spot: float,
    strike: float,
    rate: float,
    volatility: float,
    time_to_maturity: float,
) -> tuple[float, float]:
    """Calculate d1 and d2, with the deterministic limit for zero volatility."""
    forward = spot * np.exp(rate * time_to_maturity)
    denominator = volatility * np.sqrt(time_to_maturity)

    if denominator < 1e-300:
        # Zero vol: N(d) = 1 if forward > strike, 0 if below, 0.5 at the money
        if forward > strike:
            return np.inf, np.inf
        elif forward < strike:
            return -np.inf, -np.inf
        else:
            return 0.0, 0.0

    d1 = (np.log(forward / strike) + 0.5 * volatility**2 * time_to_maturity) / denominator
    d2 = d1 - denominator
    return d1, d2


def black_scholes_price(
    spot: float,
    strike: float,
    rate: float,
    volatility: float,
    time_to_maturity: float,
    *,
    option_type: OptionType = OptionType.CALL,
) -> float:
    """Black-Scholes price of a European option without dividends.

    Parameters
    ----------
    spot
        Current spot price (> 0).
    strike
        Strike price (> 0).
    rate
        Continuously compounded risk-free rate.
    volatility
        Annualised volatility (>= 0).
    time_to_maturity
        Time to maturity in years (> 0).
    option_type
        CALL (default) or PUT.
    """
    option_type = check_option_type(option_type)
    if spot <= 0:
        raise ValidationError("spot must be positive")
    if strike <= 0:
        raise ValidationError("strike must be positive")
    if volatility < 0:
        raise ValidationError("volatility must be non-negative")
    if time_to_maturity <= 0:
        raise ValidationError("time_to_maturity must be positive")

    d1, d2 = _calculate_d_values(spot, strike, rate, volatility, time_to_maturity)
    df = np.exp(-rate * time_to_maturity)

    if option_type is OptionType.CALL:
        return float(spot * norm.cdf(d1) - strike * df * norm.cdf(d2))
    return float(strike * df * norm.cdf(-d2) - spot * norm.cdf(-d1))


def lattice_to_continuous(r_gross: float, u: float, d: float, n: int) -> tuple[float, float, float]:
    """Map gross per-period lattice parameters onto ``(rate, volatility, T)``.

    The lattice is read as n steps over one year (``dt = 1/n``):
    ``rate = log(r_gross)`` and ``volatility = log(u / d) / (2 * sqrt(dt))``.
    """
    n = validate_steps(n)
    if n < 1:
        raise ValidationError("n must be a positive integer")
    if r_gross <= 0:
        raise ValidationError("r_gross must be positive")
    if d <= 0 or u <= d:
        raise ValidationError("Up factor u must be greater than down factor d > 0")

    dt = 1.0 / n
    rate = float(np.log(r_gross))
    volatility = float(np.log(u / d) / (2.0 * np.sqrt(dt)))
    return rate, volatility, 1.0


def black_scholes_from_lattice(
    S0: float,
    K: float,
    r_gross: float,
    u: float,
    d: float,
    n: int,
    *,
    option_type: OptionType = OptionType.CALL,
) -> float:
    """Black-Scholes price using volatility and rate implied by lattice parameters."""
    rate, volatility, T = lattice_to_continuous(r_gross, u, d, n)
    return black_scholes_price(S0, K, rate, volatility, T, option_type=option_type)
