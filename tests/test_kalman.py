"""
pointtrack - Linear Kalman Filter Test Suite
============================================
Timestamps are passed explicitly so every run is deterministic.
"""

from dataclasses import replace

import numpy as np
import pytest

from pointtrack import kalman
from pointtrack.errors import SingularMatrix
from pointtrack.types import Coordinates


def track(state, points, start=0.0, step=16.0):
    est = None
    for k, p in enumerate(points):
        est, state = kalman.apply(state, p, now=start + k * step)
    return est, state


class TestKalmanInit:

    def test_initial_state(self):
        state = kalman.init(0.1, 4.0)
        assert state.first_run is True
        assert state.last_timestamp is None
        assert state.x.shape == (4, 1)
        assert state.P.shape == (4, 4)
        assert state.A.shape == (4, 4)
        assert state.H.shape == (2, 4)
        np.testing.assert_array_equal(state.P, np.eye(4))
        np.testing.assert_array_equal(state.H, [[1, 0, 0, 0], [0, 1, 0, 0]])

    def test_noise_matrices(self):
        state = kalman.init(0.5, 2.0)
        np.testing.assert_array_equal(state.Q, 0.5 * np.eye(4))
        np.testing.assert_array_equal(state.R, 2.0 * np.eye(2))

    def test_state_arrays_are_read_only(self):
        state = kalman.init(0.1, 4.0)
        with pytest.raises(ValueError):
            state.P[0, 0] = 10.0


class TestKalmanApply:

    def test_first_measurement_is_exact(self):
        est, state = kalman.apply(kalman.init(0.1, 4.0), Coordinates(100.0, 200.0), now=1000.0)
        assert est == Coordinates(100.0, 200.0)
        assert state.first_run is False
        assert state.last_timestamp == 1000.0
        assert state.velocity == (0.0, 0.0)

    def test_stationary_target(self):
        est, _ = track(kalman.init(0.1, 1.0), [Coordinates(100.0, 100.0)] * 10)
        assert est.x == pytest.approx(100.0, abs=1.0)
        assert est.y == pytest.approx(100.0, abs=1.0)

    def test_moving_target(self):
        points = [Coordinates(2.0 * i, 2.0 * i) for i in range(21)]
        est, state = track(kalman.init(0.1, 1.0), points, step=15.0)
        assert est.x == pytest.approx(40.0, abs=5.0)
        assert est.y == pytest.approx(40.0, abs=5.0)
        vx, vy = state.velocity
        assert vx > 0 and vy > 0

    def test_smooths_noisy_measurements(self):
        points = [
            Coordinates(100.0, 100.0),
            Coordinates(120.0, 80.0),
            Coordinates(90.0, 110.0),
            Coordinates(110.0, 90.0),
            Coordinates(95.0, 105.0),
        ]
        state = kalman.init(0.01, 10.0)
        results = []
        for k, p in enumerate(points):
            est, state = kalman.apply(state, p, now=k * 16.0)
            results.append(est)
        in_var = sum((p.x - 100.0) ** 2 for p in points)
        out_var = sum((e.x - 100.0) ** 2 for e in results[1:])
        assert out_var <= in_var

    def test_dt_from_timestamps(self):
        _, state = kalman.apply(kalman.init(0.1, 4.0), Coordinates(0.0, 0.0), now=1000.0)
        assert state.A[0, 2] == 1.0

        _, state = kalman.apply(state, Coordinates(1.0, 1.0), now=1030.0)
        assert state.A[0, 2] == pytest.approx(2.0)
        assert state.A[1, 3] == pytest.approx(2.0)

    def test_custom_tick(self):
        _, state = kalman.apply(kalman.init(0.1, 4.0), Coordinates(0.0, 0.0), now=0.0)
        _, state = kalman.apply(state, Coordinates(1.0, 1.0), now=100.0, tick_ms=50.0)
        assert state.A[0, 2] == pytest.approx(2.0)

    def test_wall_clock_default(self):
        _, state = kalman.apply(kalman.init(0.1, 4.0), Coordinates(0.0, 0.0))
        assert state.last_timestamp is not None

    def test_input_state_not_mutated(self):
        state = kalman.init(0.1, 4.0)
        x0 = state.x.copy()
        A0 = state.A.copy()
        kalman.apply(state, Coordinates(100.0, 100.0), now=1000.0)
        assert state.first_run is True
        assert state.last_timestamp is None
        np.testing.assert_array_equal(state.x, x0)
        np.testing.assert_array_equal(state.A, A0)

    def test_covariance_shrinks(self):
        _, state = track(kalman.init(0.1, 1.0), [Coordinates(5.0, 5.0)] * 5)
        assert state.P[0, 0] < 1.0

    def test_singular_innovation(self):
        _, state = kalman.apply(kalman.init(0.1, 1.0), Coordinates(0.0, 0.0), now=0.0)
        zero = np.zeros((4, 4))
        broken = replace(state, P=zero, Q=zero, R=np.zeros((2, 2)))
        with pytest.raises(SingularMatrix):
            kalman.apply(broken, Coordinates(1.0, 1.0), now=15.0)
