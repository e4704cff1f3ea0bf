"""
pointtrack - Linear Kalman Filter
=================================
Copyright (C) 2026 pointtrack contributors
License: AGPL-3.0-or-later

Constant-velocity Kalman filter over x = [px, py, vx, vy]^T with a 2-D
position observation.

The transition matrix is rebuilt each call with the elapsed time step:

    A = [[1, 0, dt, 0],
         [0, 1, 0, dt],
         [0, 0, 1,  0],
         [0, 0, 0,  1]]

Q and R are fixed at construction. Changing q or r means building a new
state with ``init``.
"""

import logging
from dataclasses import dataclass, replace
from typing import Optional, Tuple

import numpy as np

from .config import DEFAULT_TICK_MS
from .matrix import (
    Matrix,
    add,
    as_matrix,
    column_vector,
    identity,
    inverse_2x2,
    mul,
    readonly,
    scalar_mul,
    sub,
    transpose,
)
from .types import Coordinates, elapsed_ticks, now_ms

logger = logging.getLogger(__name__)

STATE_DIM = 4
MEAS_DIM = 2


@dataclass(frozen=True, eq=False)
class KalmanState:
    """Kalman filter state container"""
    x: Matrix                 # State estimate [px, py, vx, vy] (4x1)
    P: Matrix                 # Covariance (4x4)
    A: Matrix                 # Transition matrix (4x4)
    H: Matrix                 # Observation matrix (2x4)
    Q: Matrix                 # Process noise covariance (4x4)
    R: Matrix                 # Measurement noise covariance (2x2)
    first_run: bool = True
    last_timestamp: Optional[float] = None

    def __post_init__(self):
        for name in ("x", "P", "A", "H", "Q", "R"):
            object.__setattr__(self, name, readonly(getattr(self, name)))

    @property
    def position(self) -> Coordinates:
        return Coordinates(float(self.x[0, 0]), float(self.x[1, 0]))

    @property
    def velocity(self) -> Tuple[float, float]:
        return float(self.x[2, 0]), float(self.x[3, 0])


def init(q: float, r: float) -> KalmanState:
    """
    Fresh filter with ``Q = q*I4`` and ``R = r*I2``.

    Velocity is unknown until the first measurement arrives; ``P`` starts
    at the identity.
    """
    return KalmanState(
        x=np.zeros((STATE_DIM, 1)),
        P=identity(STATE_DIM),
        A=[[1, 0, 1, 0], [0, 1, 0, 1], [0, 0, 1, 0], [0, 0, 0, 1]],
        H=[[1, 0, 0, 0], [0, 1, 0, 0]],
        Q=scalar_mul(identity(STATE_DIM), q),
        R=scalar_mul(identity(MEAS_DIM), r),
    )


def apply(
    state: KalmanState,
    measurement: Coordinates,
    now: Optional[float] = None,
    tick_ms: float = DEFAULT_TICK_MS
) -> Tuple[Coordinates, KalmanState]:
    """
    One predict/update cycle.

    Args:
        state: Current filter state
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

    A = as_matrix(state.A)
    A[0, 2] = dt
    A[1, 3] = dt

    x = state.x
    if state.first_run:
        # Velocity is assumed zero at first contact
        x = column_vector([measurement.x, measurement.y, 0.0, 0.0])
        logger.debug("Kalman filter seeded at (%.3f, %.3f)", measurement.x, measurement.y)

    H, P, Q, R = state.H, state.P, state.Q, state.R

    # Predict
    x_pred = mul(A, x)
    P_pred = add(mul(mul(A, P), transpose(A)), Q)

    # Update
    z = column_vector([measurement.x, measurement.y])
    y = sub(z, mul(H, x_pred))
    S = add(mul(mul(H, P_pred), transpose(H)), R)
    K = mul(mul(P_pred, transpose(H)), inverse_2x2(S))
    x_new = add(x_pred, mul(K, y))
    P_new = mul(sub(identity(STATE_DIM), mul(K, H)), P_pred)

    new_state = replace(
        state,
        x=x_new,
        P=P_new,
        A=A,
        first_run=False,
        last_timestamp=now,
    )
    return new_state.position, new_state
