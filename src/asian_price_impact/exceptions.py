"""Custom exception hierarchy for the asian_price_impact library.

All library-specific exceptions inherit from :class:`PriceImpactAsianError`,
enabling callers to catch *any* library error with a single ``except`` clause::

    try:
        pv = price_geometric_asian(100, 100, 1.05, 1.2, 0.8, 0.1, 1, 1, 10)
    except PriceImpactAsianError as exc:
        log.error("Library error: %s", exc)
"""

from __future__ import annotations


class PriceImpactAsianError(Exception):
    """Base exception for all library errors."""


# ── Input validation ────────────────────────────────────────────────


class ValidationError(PriceImpactAsianError):
    """Invalid input values (out-of-range, non-finite, non-integer step count, etc.)."""


class EmptyInputError(ValidationError):
    """A statistic was requested for an empty sequence."""


class ConfigurationError(PriceImpactAsianError):
    """Wrong types passed to a public API (e.g. a raw string instead of OptionType)."""


# ── Numerical issues ────────────────────────────────────────────────


class NumericalError(PriceImpactAsianError):
    """Base for errors arising from numerical computation."""


class ArbitrageViolationError(NumericalError):
    """Model parameters imply an arbitrage."""


class InvalidProbabilityError(ArbitrageViolationError):
    """Effective risk-neutral probability falls outside [0, 1]."""


class DegenerateLatticeError(NumericalError):
    """Adjusted up and down factors coincide, so no probability can be implied."""


class NonPositivePriceError(NumericalError):
    """A non-positive price reached a geometric average."""
