"""Asian option pricing on a binomial lattice with hedging price impact.

Public API
----------
Pricing:
    price_geometric_asian: exact geometric-average Asian option price
    arithmetic_asian_bounds: lower/upper bounds for the arithmetic-average option
    price_european: European option on the same lattice
    black_scholes_price, black_scholes_from_lattice: continuous-time reference

Lattice:
    LatticeFactors, compute_lattice_factors, effective_factors,
    effective_probability, check_no_arbitrage

Analysis:
    price_impact_sweep: pandas table of prices and bounds over impact coefficients
"""

from .analysis import price_impact_sweep
from .bounds import ArithmeticAsianBounds, arithmetic_asian_bounds
from .bsm import black_scholes_from_lattice, black_scholes_price, lattice_to_continuous
from .enums import OptionType
from .european import price_european
from .exceptions import (
    ArbitrageViolationError,
    ConfigurationError,
    DegenerateLatticeError,
    EmptyInputError,
    InvalidProbabilityError,
    NonPositivePriceError,
    NumericalError,
    PriceImpactAsianError,
    ValidationError,
)
from .geometric import price_geometric_asian
from .lattice import (
    LatticeFactors,
    check_no_arbitrage,
    compute_lattice_factors,
    effective_factors,
    effective_probability,
)
from .params import EnumerationParams
from .validation import validate_inputs

__all__ = [
    # Pricing
    "price_geometric_asian",
    "arithmetic_asian_bounds",
    "ArithmeticAsianBounds",
    "price_european",
    "black_scholes_price",
    "black_scholes_from_lattice",
    "lattice_to_continuous",
    # Lattice
    "LatticeFactors",
    "compute_lattice_factors",
    "effective_factors",
    "effective_probability",
    "check_no_arbitrage",
    "validate_inputs",
    # Configuration
    "EnumerationParams",
    "OptionType",
    # Analysis
    "price_impact_sweep",
    # Exceptions
    "PriceImpactAsianError",
    "ValidationError",
    "EmptyInputError",
    "ConfigurationError",
    "NumericalError",
    "ArbitrageViolationError",
    "InvalidProbabilityError",
    "DegenerateLatticeError",
    "NonPositivePriceError",
]
