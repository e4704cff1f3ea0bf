"""
pointtrack - Low-Pass Filter Test Suite
=======================================
"""

import pytest

from pointtrack import lowpass
from pointtrack.errors import InvalidParameter
from pointtrack.types import Coordinates


class TestLowPass:

    def test_initial_state_empty(self):
        state = lowpass.init()
        assert state.previous_estimate is None
        assert not state.initialized

    def test_first_measurement_passes_through(self):
        m = Coordinates(100.0, 200.0)
        est, state = lowpass.apply(lowpass.init(), m, 0.5)
        assert est == m
        assert state.previous_estimate == m
        assert state.initialized

    def test_half_alpha_averages(self):
        _, state = lowpass.apply(lowpass.init(), Coordinates(100.0, 100.0), 0.5)
        est, state = lowpass.apply(state, Coordinates(200.0, 200.0), 0.5)
        assert est.x == pytest.approx(150.0)
        assert est.y == pytest.approx(150.0)
        assert state.previous_estimate == est

    def test_higher_alpha_is_more_responsive(self):
        _, high = lowpass.apply(lowpass.init(), Coordinates(0.0, 0.0), 0.9)
        _, low = lowpass.apply(lowpass.init(), Coordinates(0.0, 0.0), 0.1)
        high_est, _ = lowpass.apply(high, Coordinates(100.0, 100.0), 0.9)
        low_est, _ = lowpass.apply(low, Coordinates(100.0, 100.0), 0.1)
        assert high_est.x > low_est.x
        assert high_est.y > low_est.y

    def test_converges_to_constant_input(self):
        _, state = lowpass.apply(lowpass.init(), Coordinates(0.0, 0.0), 0.3)
        for _ in range(20):
            est, state = lowpass.apply(state, Coordinates(100.0, 100.0), 0.3)
        assert est.x == pytest.approx(100.0, abs=0.5)
        assert est.y == pytest.approx(100.0, abs=0.5)

    def test_alpha_one_returns_latest(self):
        _, state = lowpass.apply(lowpass.init(), Coordinates(0.0, 0.0), 1.0)
        est, _ = lowpass.apply(state, Coordinates(100.0, -7.5), 1.0)
        assert est == Coordinates(100.0, -7.5)

    def test_alpha_zero_holds_previous(self):
        _, state = lowpass.apply(lowpass.init(), Coordinates(50.0, 50.0), 0.0)
        for m in (Coordinates(100.0, 100.0), Coordinates(-3.0, 8.0)):
            est, state = lowpass.apply(state, m, 0.0)
            assert est == Coordinates(50.0, 50.0)

    def test_state_not_mutated(self):
        state = lowpass.init()
        lowpass.apply(state, Coordinates(100.0, 100.0), 0.5)
        assert state.previous_estimate is None

    @pytest.mark.parametrize("alpha", [-0.1, 1.5])
    def test_invalid_alpha(self, alpha):
        with pytest.raises(InvalidParameter):
            lowpass.apply(lowpass.init(), Coordinates(0.0, 0.0), alpha)
