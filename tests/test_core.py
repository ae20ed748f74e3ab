"""Tests for the value types and their validation."""

import dataclasses

import pytest
from optgreeks import (
    CALL, PUT, DEFAULT_RATE, InvalidInputError, MarketState, OptionContract, StepSizes,
)


class TestOptionContract:
    def test_defaults_to_call(self):
        assert OptionContract(K=100).kind == CALL

    def test_rejects_bad_strike(self):
        with pytest.raises(InvalidInputError):
            OptionContract(K=0)

    def test_rejects_bad_kind(self):
        with pytest.raises(InvalidInputError):
            OptionContract(K=100, kind="Call")

    def test_frozen(self):
        c = OptionContract(K=100, kind=PUT)
        with pytest.raises(dataclasses.FrozenInstanceError):
            c.K = 90


class TestMarketState:
    def test_defaults(self):
        m = MarketState(S=100, sigma=0.2)
        assert m.r == DEFAULT_RATE == 0.046
        assert m.d == 0.0

    def test_zero_vol_allowed(self):
        assert MarketState(S=100, sigma=0.0).sigma == 0.0

    @pytest.mark.parametrize("S,sigma", [(-1, 0.2), (100, -0.2), (float("inf"), 0.2)])
    def test_rejects_bad_values(self, S, sigma):
        with pytest.raises(InvalidInputError):
            MarketState(S=S, sigma=sigma)


class TestStepSizes:
    def test_defaults(self):
        s = StepSizes()
        assert (s.delta, s.gamma, s.vega) == (0.01, 0.005, 0.001)
        assert s.theta == pytest.approx(1 / 365)

    def test_for_measure(self):
        assert StepSizes(vega=0.01).for_measure("vega") == 0.01
        with pytest.raises(InvalidInputError):
            StepSizes().for_measure("price")

    def test_rejects_non_positive(self):
        with pytest.raises(InvalidInputError):
            StepSizes(gamma=0.0)
