"""Validation of the scalar inputs accepted by the public pricing functions."""

from __future__ import annotations

from numbers import Integral, Real
import logging
import warnings

import numpy as np

from .exceptions import ValidationError
from .lattice import LatticeFactors, compute_lattice_factors
from .params import DEFAULT_PARAMS, EnumerationParams

logger = logging.getLogger(__name__)

__all__ = ["validate_steps", "validate_inputs"]


def _check_real(name: str, value) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValidationError(f"{name} must be a real number, got {value!r}")
    value = float(value)
    if not np.isfinite(value):
        raise ValidationError(f"{name} must be finite, got {value}")
    return value


def validate_steps(n) -> int:
    """Return n as an int, or raise ValidationError unless it is a non-negative integer."""
    if isinstance(n, bool):
        raise ValidationError("n must be a non-negative integer")
    if isinstance(n, Integral):
        n = int(n)
    elif isinstance(n, Real) and np.isfinite(n) and float(n).is_integer():
        n = int(n)
    else:
        raise ValidationError("n must be a non-negative integer")
    if n < 0:
        raise ValidationError("n must be a non-negative integer")
    return n


def validate_inputs(
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
    params: EnumerationParams | None = None,
    enumerates_paths: bool = True,
    stacklevel: int = 2,
) -> LatticeFactors:
    """Validate pricing inputs and return the derived lattice factors.

    Checks positivity of ``S0``, ``K``, ``r``, ``u``, ``d``; non-negativity of
    ``lambda_``, ``v_u``, ``v_d``; ``n`` a non-negative integer; ``u > d``; and
    finally the no-arbitrage condition via :func:`compute_lattice_factors`.

    Emits a ``RuntimeWarning`` when ``enumerates_paths`` is set and ``n``
    exceeds ``params.warn_steps``, since 2^n paths will be visited. Pricers that
    call this through helpers raise ``stacklevel`` so the warning names their
    caller.

    Raises
    ======
    ValidationError
        For out-of-range or non-finite scalar inputs.
    InvalidProbabilityError, DegenerateLatticeError
        From the lattice factor derivation.
    """
    params = DEFAULT_PARAMS if params is None else params

    S0 = _check_real("S0", S0)
    K = _check_real("K", K)
    r = _check_real("r", r)
    u = _check_real("u", u)
    d = _check_real("d", d)
    lambda_ = _check_real("lambda", lambda_)
    v_u = _check_real("v_u", v_u)
    v_d = _check_real("v_d", v_d)

    if S0 <= 0:
        raise ValidationError("S0 must be positive")
    if K <= 0:
        raise ValidationError("K must be positive")
    if r <= 0:
        raise ValidationError("r must be positive (use gross rate, e.g., 1.05)")
    if u <= 0:
        raise ValidationError("u must be positive")
    if d <= 0:
        raise ValidationError("d must be positive")
    if lambda_ < 0:
        raise ValidationError("lambda must be non-negative")
    if v_u < 0:
        raise ValidationError("v_u must be non-negative")
    if v_d < 0:
        raise ValidationError("v_d must be non-negative")

    n = validate_steps(n)

    if u <= d:
        raise ValidationError("Up factor u must be greater than down factor d")

    if enumerates_paths and n > params.warn_steps:
        warnings.warn(
            f"n = {n} will enumerate 2^{n} = {2.0**n:.3g} paths. This may be slow.",
            RuntimeWarning,
            stacklevel=stacklevel,
        )

    return compute_lattice_factors(r, u, d, lambda_, v_u, v_d)
