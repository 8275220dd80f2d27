"""Tests for arithmetic Asian option bounds."""

import warnings

import numpy as np
import pytest

from asian_price_impact.bounds import (
    ArithmeticAsianBounds,
    arithmetic_asian_bounds,
    spread_parameter,
)
from asian_price_impact.enums import OptionType
from asian_price_impact.exceptions import InvalidProbabilityError
from asian_price_impact.geometric import price_geometric_asian
from asian_price_impact.params import EnumerationParams
from asian_price_impact.tests.helpers import impact_factors, reference_asian_price

CASES = [
    # S0, K, r, u, d, lambda, v_u, v_d, n
    (100.0, 100.0, 1.05, 1.2, 0.8, 0.1, 1.0, 1.0, 3),
    (100.0, 100.0, 1.05, 1.2, 0.8, 0.0, 0.0, 0.0, 5),
    (100.0, 90.0, 1.02, 1.1, 0.9, 0.05, 0.5, 1.5, 8),
    (100.0, 115.0, 1.01, 1.05, 0.96, 0.02, 1.0, 1.0, 10),
]


class TestArithmeticBoundsCall:
    def test_record_structure(self, pricing_args):
        bounds = arithmetic_asian_bounds(*pricing_args)

        assert isinstance(bounds, ArithmeticAsianBounds)
        assert set(bounds.to_dict()) == {"lower_bound", "upper_bound", "rho_star", "EQ_G", "V0_G"}
        assert all(isinstance(v, float) for v in bounds.to_dict().values())

    def test_lower_bound_equals_geometric_price(self, pricing_args):
        bounds = arithmetic_asian_bounds(*pricing_args)
        geometric = price_geometric_asian(*pricing_args)

        assert np.isclose(bounds.lower_bound, geometric, rtol=1e-14)
        assert bounds.V0_G == bounds.lower_bound

    @pytest.mark.parametrize("case", CASES)
    def test_bounds_bracket_arithmetic_price(self, case):
        S0, K, r, u, d, lambda_, v_u, v_d, n = case
        bounds = arithmetic_asian_bounds(*case)

        u_tilde, d_tilde = impact_factors(u, d, lambda_, v_u, v_d)
        arithmetic = reference_asian_price(S0, K, r, u_tilde, d_tilde, n, averaging="arithmetic")

        assert bounds.lower_bound <= arithmetic + 1e-12
        assert arithmetic <= bounds.upper_bound + 1e-12

    @pytest.mark.parametrize("case", CASES)
    def test_rho_star_at_least_one(self, case):
        assert arithmetic_asian_bounds(*case).rho_star >= 1.0

    def test_rho_star_formula(self, pricing_args):
        S0, K, r, u, d, lambda_, v_u, v_d, n = pricing_args
        bounds = arithmetic_asian_bounds(*pricing_args)

        u_tilde, d_tilde = impact_factors(u, d, lambda_, v_u, v_d)
        u_n, d_n = u_tilde**n, d_tilde**n
        expected = np.exp((u_n - d_n) ** 2 / (4 * u_n * d_n))
        assert np.isclose(bounds.rho_star, expected, rtol=1e-12)

    def test_upper_bound_discounts_expected_average_once(self, pricing_args):
        r, n = pricing_args[2], pricing_args[-1]
        bounds = arithmetic_asian_bounds(*pricing_args)

        expected = bounds.lower_bound + r ** (-n) * (bounds.rho_star - 1.0) * bounds.EQ_G
        assert bounds.upper_bound == expected

    def test_expected_geometric_average_below_expected_arithmetic(self, pricing_args):
        # Under Q, E[S_i] = S0 * r^i on the adjusted lattice
        S0, r, n = pricing_args[0], pricing_args[2], pricing_args[-1]
        bounds = arithmetic_asian_bounds(*pricing_args)

        expected_arithmetic = S0 * np.mean([r**i for i in range(n + 1)])
        assert 0 < bounds.EQ_G <= expected_arithmetic

    def test_zero_steps_collapses_bounds(self):
        bounds = arithmetic_asian_bounds(120, 100, 1.05, 1.2, 0.8, 0.1, 1, 1, 0)

        assert bounds.rho_star == 1.0
        assert bounds.lower_bound == bounds.upper_bound == 20.0
        assert bounds.EQ_G == 120.0
        assert bounds.spread == 0.0

    def test_zero_steps_out_of_the_money(self):
        bounds = arithmetic_asian_bounds(80, 100, 1.05, 1.2, 0.8, 0.1, 1, 1, 0)
        assert bounds.lower_bound == bounds.upper_bound == 0.0

    def test_bounds_tighten_with_lower_volatility(self):
        wide = arithmetic_asian_bounds(100, 100, 1.05, 1.3, 0.7, 0.1, 1, 1, 3)
        narrow = arithmetic_asian_bounds(100, 100, 1.05, 1.1, 0.95, 0.1, 1, 1, 3)
        assert narrow.spread < wide.spread
        assert narrow.rho_star < wide.rho_star

    def test_bounds_scale_with_spot_and_strike(self):
        base = arithmetic_asian_bounds(100, 100, 1.05, 1.2, 0.8, 0.1, 1, 1, 4)
        doubled = arithmetic_asian_bounds(200, 200, 1.05, 1.2, 0.8, 0.1, 1, 1, 4)
        assert np.isclose(doubled.lower_bound, 2 * base.lower_bound, rtol=1e-12)
        assert np.isclose(doubled.upper_bound, 2 * base.upper_bound, rtol=1e-12)
        assert doubled.rho_star == base.rho_star

    def test_midpoint_lies_between_bounds(self, pricing_args):
        bounds = arithmetic_asian_bounds(*pricing_args)
        assert bounds.lower_bound <= bounds.midpoint <= bounds.upper_bound

    def test_invalid_probability_raises(self):
        with pytest.raises(InvalidProbabilityError):
            arithmetic_asian_bounds(100, 100, 1.5, 1.2, 0.8, 0.0, 0, 0, 3)

    def test_text_rendering(self, pricing_args):
        text = str(arithmetic_asian_bounds(*pricing_args))
        assert "Arithmetic Asian Option Bounds" in text
        for label in ("Lower bound", "Upper bound", "Midpoint", "Spread", "E^Q[G_n]"):
            assert label in text


class TestArithmeticBoundsPut:
    @pytest.mark.parametrize("case", CASES)
    def test_put_bounds_bracket_arithmetic_price(self, case):
        S0, K, r, u, d, lambda_, v_u, v_d, n = case
        bounds = arithmetic_asian_bounds(*case, option_type=OptionType.PUT)

        u_tilde, d_tilde = impact_factors(u, d, lambda_, v_u, v_d)
        arithmetic = reference_asian_price(
            S0, K, r, u_tilde, d_tilde, n, averaging="arithmetic", call=False
        )

        assert 0.0 <= bounds.lower_bound <= arithmetic + 1e-12
        assert arithmetic <= bounds.upper_bound + 1e-12

    def test_put_upper_bound_is_geometric_put(self, pricing_args):
        bounds = arithmetic_asian_bounds(*pricing_args, option_type=OptionType.PUT)
        geometric_put = price_geometric_asian(*pricing_args, option_type=OptionType.PUT)

        assert np.isclose(bounds.upper_bound, geometric_put, rtol=1e-14)
        assert bounds.V0_G == bounds.upper_bound

    def test_put_and_call_share_spread_parameter(self, pricing_args):
        call = arithmetic_asian_bounds(*pricing_args)
        put = arithmetic_asian_bounds(*pricing_args, option_type=OptionType.PUT)
        assert call.rho_star == put.rho_star
        assert call.EQ_G == put.EQ_G


class TestSpreadParameter:
    def test_zero_steps(self):
        assert spread_parameter(1.3, 0.7, 0) == 1.0

    def test_equal_terminal_factors(self):
        assert spread_parameter(1.0, 1.0, 5) == 1.0

    def test_increases_with_factor_spread(self):
        assert spread_parameter(1.3, 0.7, 3) > spread_parameter(1.2, 0.8, 3) > 1.0

    def test_wide_lattice_overflows_to_infinity_quietly(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert spread_parameter(1.2 * np.exp(0.1), 0.8 * np.exp(-0.1), 20) == np.inf

    def test_tiny_down_factor_does_not_divide_by_zero(self):
        # d_tilde**n underflows to 0.0 here
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert spread_parameter(2.0, 1e-200, 2) == np.inf

    def test_matches_terminal_factor_formula(self):
        u_n, d_n = 1.3**4, 0.7**4
        expected = np.exp((u_n - d_n) ** 2 / (4 * u_n * d_n))
        assert np.isclose(spread_parameter(1.3, 0.7, 4), expected, rtol=1e-12)


class TestBoundsNumerics:
    def test_overflowing_spread_gives_infinite_call_upper_bound(self):
        args = (100.0, 100.0, 1.05, 3.0, 0.2, 0.0, 0.0, 0.0, 4)
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            call = arithmetic_asian_bounds(*args)
            put = arithmetic_asian_bounds(*args, option_type=OptionType.PUT)

        assert call.rho_star == np.inf
        assert call.upper_bound == np.inf
        assert np.isfinite(call.lower_bound)
        assert put.lower_bound == 0.0
        assert put.upper_bound == put.V0_G

    def test_expected_average_does_not_depend_on_block_size(self, pricing_args):
        results = [
            arithmetic_asian_bounds(*pricing_args, params=EnumerationParams(block_size=size))
            for size in (1, 5, 16_384)
        ]
        assert len({b.EQ_G for b in results}) == 1
        assert len({b.upper_bound for b in results}) == 1
