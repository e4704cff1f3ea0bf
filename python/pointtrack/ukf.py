"""
pointtrack - Unscented Kalman Filter (UKF)
==========================================
Copyright (C) 2026 pointtrack contributors
License: AGPL-3.0-or-later

Coordinated-turn UKF over x = [px, py, v, theta, omega]^T (position,
speed, heading, turn rate) with a 2-D position observation.

Theory:
    The scaled unscented transform (Van der Merwe) picks 2n+1 sigma points
    around the mean, pushes each through the nonlinear motion model, and
    re-aggregates them with fixed weights. No Jacobian is needed.

    lambda = alpha^2 (n + kappa) - n
    Wm[0]  = lambda / (n + lambda)
    Wc[0]  = Wm[0] + (1 - alpha^2 + beta)
    Wm[i]  = Wc[i] = 1 / (2 (n + lambda)),  i = 1..2n

Motion model (turn rate omega, time step dt):
    |omega| > 1e-4:
        px' = px + v/omega (sin(theta + omega dt) - sin(theta))
        py' = py + v/omega (cos(theta) - cos(theta + omega dt))
    otherwise (straight line):
        px' = px + v cos(theta) dt
        py' = py + v sin(theta) dt
    v' = v, theta' = theta + omega dt, omega' = omega
"""

import logging
import math
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

import numpy as np

from .config import DEFAULT_TICK_MS
from .matrix import (
    Matrix,
    add,
    as_matrix,
    cholesky,
    column,
    column_vector,
    identity,
    inverse_2x2,
    mul,
    outer,
    readonly,
    scalar_mul,
    sub,
    transpose,
)
from .types import Coordinates, elapsed_ticks, now_ms

logger = logging.getLogger(__name__)

STATE_DIM = 5
MEAS_DIM = 2

# Van der Merwe scaling
ALPHA = 0.01
BETA = 2.0    # Optimal for Gaussian priors
KAPPA = 0.0

# Below this turn rate the straight-line model is used
TURN_RATE_EPS = 1e-4

# Process noise on position and heading; q covers speed and turn rate
FIXED_PROCESS_NOISE = 0.1


def _frozen_vector(values) -> np.ndarray:
    v = np.array(values, dtype=np.float64)
    v.setflags(write=False)
    return v


@dataclass(frozen=True, eq=False)
class UKFState:
    """UKF state container"""
    x: Matrix                          # State estimate (5x1)
    P: Matrix                          # Covariance (5x5)
    Q: Matrix                          # Process noise covariance (5x5)
    R: Matrix                          # Measurement noise covariance (2x2)
    weights_m: np.ndarray              # Mean weights [2n+1]
    weights_c: np.ndarray              # Covariance weights [2n+1]
    lambda_: float
    n: int = STATE_DIM
    m: int = MEAS_DIM
    alpha: float = ALPHA
    beta: float = BETA
    kappa: float = KAPPA
    last_timestamp: Optional[float] = None
    last_measurement: Optional[Coordinates] = None

    def __post_init__(self):
        for name in ("x", "P", "Q", "R"):
            object.__setattr__(self, name, readonly(getattr(self, name)))
        object.__setattr__(self, "weights_m", _frozen_vector(self.weights_m))
        object.__setattr__(self, "weights_c", _frozen_vector(self.weights_c))

    @property
    def n_sigma(self) -> int:
        return 2 * self.n + 1

    @property
    def position(self) -> Coordinates:
        return Coordinates(float(self.x[0, 0]), float(self.x[1, 0]))

    @property
    def speed(self) -> float:
        return float(self.x[2, 0])

    @property
    def heading(self) -> float:
        return float(self.x[3, 0])

    @property
    def turn_rate(self) -> float:
        return float(self.x[4, 0])


def compute_weights(
    n: int,
    alpha: float,
    beta: float,
    kappa: float
) -> Tuple[float, np.ndarray, np.ndarray]:
    """
    Scaled unscented transform weights.

    Returns:
        lambda_: Scaling parameter
        Wm: [2n+1] weights for the mean
        Wc: [2n+1] weights for the covariance
    """
    lambda_ = alpha**2 * (n + kappa) - n

    Wm = np.zeros(2 * n + 1)
    Wc = np.zeros(2 * n + 1)
    Wm[0] = lambda_ / (n + lambda_)
    Wc[0] = lambda_ / (n + lambda_) + (1 - alpha**2 + beta)
    for i in range(1, 2 * n + 1):
        Wm[i] = 1 / (2 * (n + lambda_))
        Wc[i] = 1 / (2 * (n + lambda_))

    return lambda_, Wm, Wc


def init(q: float, r: float) -> UKFState:
    """
    Fresh UKF with process noise ``q`` on speed and turn rate and
    measurement noise ``R = r*I2``.
    """
    lambda_, Wm, Wc = compute_weights(STATE_DIM, ALPHA, BETA, KAPPA)

    Q = identity(STATE_DIM)
    Q[0, 0] = FIXED_PROCESS_NOISE
    Q[1, 1] = FIXED_PROCESS_NOISE
    Q[2, 2] = q
    Q[3, 3] = FIXED_PROCESS_NOISE
    Q[4, 4] = q

    return UKFState(
        x=np.zeros((STATE_DIM, 1)),
        P=identity(STATE_DIM),
        Q=Q,
        R=scalar_mul(identity(MEAS_DIM), r),
        weights_m=Wm,
        weights_c=Wc,
        lambda_=lambda_,
    )


def sigma_points(x, P, lambda_: float) -> List[Matrix]:
    """
    Generate the 2n+1 sigma points around (x, P).

    Point 0 is the mean; points 1..n and n+1..2n step along the columns of
    ``cholesky((n + lambda) * P)`` in the positive and negative direction.
    """
    x = as_matrix(x)
    n = x.shape[0]
    P_sqrt = cholesky(scalar_mul(P, n + lambda_))

    plus = []
    minus = []
    for i in range(n):
        col = column(P_sqrt, i)
        plus.append(add(x, col))
        minus.append(sub(x, col))

    return [x] + plus + minus


def propagate(point, dt: float) -> Matrix:
    """Push one state through the coordinated-turn model."""
    px, py, v, theta, omega = (float(c) for c in as_matrix(point).ravel())

    if abs(omega) > TURN_RATE_EPS:
        px_p = px + (v / omega) * (math.sin(theta + omega * dt) - math.sin(theta))
        py_p = py + (v / omega) * (-math.cos(theta + omega * dt) + math.cos(theta))
    else:
        px_p = px + v * math.cos(theta) * dt
        py_p = py + v * math.sin(theta) * dt

    return column_vector([px_p, py_p, v, theta + omega * dt, omega])


def _weighted_mean(points: List[Matrix], weights: np.ndarray) -> Matrix:
    mean = np.zeros_like(points[0])
    for w, p in zip(weights, points):
        mean += w * p
    return mean


def _weighted_cov(a_pts, a_mean, b_pts, b_mean, weights) -> Matrix:
    cov = np.zeros((a_mean.shape[0], b_mean.shape[0]))
    for w, a, b in zip(weights, a_pts, b_pts):
        cov = add(cov, scalar_mul(outer(sub(a, a_mean), sub(b, b_mean)), w))
    return cov


def apply(
    state: UKFState,
    measurement: Coordinates,
    now: Optional[float] = None,
    tick_ms: float = DEFAULT_TICK_MS
) -> Tuple[Coordinates, UKFState]:
    """
    One UKF cycle.

    The first call only seeds the position. When speed is still exactly
    zero and a previous measurement exists, speed and heading are
    bootstrapped from the finite difference of the last two measurements
    before the transform runs.

    Args:
        state: Current UKF state
        measurement: Observed position
        now: Timestamp in milliseconds (wall clock if omitted)
        tick_ms: Milliseconds per nominal tick

    Returns:
        Tuple of (estimated_position, new_state)

    Raises:
        SingularMatrix: if the innovation covariance cannot be inverted.
    """
    if now is None:
        now = now_ms()
    dt = elapsed_ticks(state.last_timestamp, now, tick_ms)

    prev = state.last_measurement
    if prev is None:
        x = as_matrix(state.x)
        x[0, 0] = measurement.x
        x[1, 0] = measurement.y
        logger.debug("UKF seeded at (%.3f, %.3f)", measurement.x, measurement.y)
        return measurement, replace(
            state, x=x, last_timestamp=now, last_measurement=measurement
        )

    x = as_matrix(state.x)
    if state.last_timestamp is not None and x[2, 0] == 0 and dt > 0:
        dx = measurement.x - prev.x
        dy = measurement.y - prev.y
        x[2, 0] = math.sqrt(dx * dx + dy * dy) / dt
        x[3, 0] = math.atan2(dy, dx)
        logger.debug("UKF bootstrapped speed=%.4f heading=%.4f", x[2, 0], x[3, 0])

    Wm, Wc = state.weights_m, state.weights_c

    # 1. Sigma points
    sigma = sigma_points(x, state.P, state.lambda_)

    # 2. Propagate through the motion model
    sigma_pred = [propagate(p, dt) for p in sigma]

    # 3. Predicted mean and covariance
    x_pred = _weighted_mean(sigma_pred, Wm)
    P_pred = add(_weighted_cov(sigma_pred, x_pred, sigma_pred, x_pred, Wc), state.Q)

    # 4. Measurement sigma points
    sigma_z = [p[:state.m].copy() for p in sigma_pred]
    z_pred = _weighted_mean(sigma_z, Wm)
    S = add(_weighted_cov(sigma_z, z_pred, sigma_z, z_pred, Wc), state.R)
    T = _weighted_cov(sigma_pred, x_pred, sigma_z, z_pred, Wc)

    # 5. Update
    K = mul(T, inverse_2x2(S))
    z = column_vector([measurement.x, measurement.y])
    x_new = add(x_pred, mul(K, sub(z, z_pred)))
    P_new = sub(P_pred, mul(mul(K, S), transpose(K)))

    new_state = replace(
        state,
        x=x_new,
        P=P_new,
        last_timestamp=now,
        last_measurement=measurement,
    )
    return new_state.position, new_state
