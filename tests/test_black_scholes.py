"""Tests for the closed-form Black-Scholes-Merton pricer."""

import math

import numpy as np
import pytest
from optgreeks import CALL, PUT, InvalidInputError, price

TAU_12W = 12 / 52


class TestKnownValues:
    def test_textbook_call_put(self):
        assert abs(price(100, 100, 1.0, 0.2, r=0.05, kind=CALL) - 10.4506) < 1e-3
        assert abs(price(100, 100, 1.0, 0.2, r=0.05, kind=PUT) - 5.5735) < 1e-3

    def test_twelve_week_atm(self):
        call = price(100, 100, TAU_12W, 0.25, r=0.046, d=0.0, kind=CALL)
        put = price(100, 100, TAU_12W, 0.25, r=0.046, d=0.0, kind=PUT)
        assert abs(call - 5.3095) < 1e-3
        assert abs(put - 4.2536) < 1e-3

    def test_defaults_are_call_at_default_rate(self):
        assert price(100, 100, TAU_12W, 0.25) == price(
            100, 100, TAU_12W, 0.25, r=0.046, d=0.0, kind=CALL)

    def test_scalar_returns_float(self):
        assert isinstance(price(100, 100, 0.5, 0.2), float)


class TestAtMaturity:
    def test_itm_call_exact(self):
        assert price(110, 100, 0.0, 0.25, kind=CALL) == 10.0
        assert price(110, 100, 0.0, 0.25, kind=PUT) == 0.0

    @pytest.mark.parametrize("sigma", [0.0, 0.1, 2.0])
    def test_intrinsic_for_any_vol(self, sigma):
        spots = np.array([0.0, 50.0, 100.0, 150.0])
        np.testing.assert_array_equal(
            price(spots, 100, 0.0, sigma, kind=CALL), np.maximum(spots - 100, 0))
        np.testing.assert_array_equal(
            price(spots, 100, 0.0, sigma, kind=PUT), np.maximum(100 - spots, 0))


class TestPutCallParity:
    @pytest.mark.parametrize("tau", [0.01, 0.25, 1.0, 3.0])
    @pytest.mark.parametrize("d", [0.0, 0.03])
    def test_parity(self, tau, d):
        spots = np.linspace(20, 200, 37)
        K, sigma, r = 95.0, 0.3, 0.046
        call = price(spots, K, tau, sigma, r=r, d=d, kind=CALL)
        put = price(spots, K, tau, sigma, r=r, d=d, kind=PUT)
        forward = spots * math.exp(-d * tau) - K * math.exp(-r * tau)
        np.testing.assert_allclose(call - put, forward, rtol=0, atol=1e-9)


class TestVectorised:
    def test_matches_pointwise(self):
        spots = [90.0, 100.0, 110.0]
        prices = price(spots, 100, 0.5, 0.2, kind=PUT)
        assert prices.shape == (3,)
        for i, s in enumerate(spots):
            assert prices[i] == pytest.approx(price(s, 100, 0.5, 0.2, kind=PUT), abs=1e-12)

    def test_call_monotone_in_spot(self):
        prices = price(np.linspace(80, 120, 9), 100, 0.5, 0.2)
        assert np.all(np.diff(prices) > 0)

    def test_zero_spot(self):
        assert price(0.0, 100, 0.5, 0.2, kind=CALL) == 0.0
        expected = 100 * math.exp(-0.046 * 0.5)
        assert price(0.0, 100, 0.5, 0.2, kind=PUT) == pytest.approx(expected)


class TestZeroVol:
    def test_degenerates_to_discounted_forward(self):
        # d1 -> +inf, both normal CDFs saturate at 1
        expected = 110 - 100 * math.exp(-0.046 * 0.5)
        assert price(110, 100, 0.5, 0.0) == pytest.approx(expected)

    def test_zero_over_zero_propagates_nan(self):
        assert math.isnan(price(100, 100, 0.5, 0.0, r=0.0, d=0.0))


class TestValidation:
    @pytest.mark.parametrize("K", [0.0, -1.0])
    def test_bad_strike(self, K):
        with pytest.raises(InvalidInputError):
            price(100, K, 0.5, 0.2)

    def test_negative_vol(self):
        with pytest.raises(InvalidInputError):
            price(100, 100, 0.5, -0.01)

    def test_negative_tau(self):
        with pytest.raises(InvalidInputError):
            price(100, 100, -0.1, 0.2)

    def test_negative_spot(self):
        with pytest.raises(InvalidInputError):
            price([100, -1], 100, 0.5, 0.2)

    def test_unknown_kind(self):
        with pytest.raises(InvalidInputError):
            price(100, 100, 0.5, 0.2, kind="straddle")

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            price(100, 100, float("nan"), 0.2)
