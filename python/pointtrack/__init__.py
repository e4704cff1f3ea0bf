"""
pointtrack - 2-D point tracking filters
=======================================
Copyright (C) 2026 pointtrack contributors
License: AGPL-3.0-or-later

Three estimators of a moving point's position from noisy, irregularly
timed observations:
- lowpass: exponential smoothing
- kalman: constant-velocity linear Kalman filter
- ukf: coordinated-turn Unscented Kalman Filter

Each filter is a pair of pure functions, ``init(...) -> state`` and
``apply(state, measurement, now) -> (estimate, new_state)``.

Example:
    >>> from pointtrack import Coordinates, kalman
    >>> state = kalman.init(q=0.1, r=4.0)
    >>> estimate, state = kalman.apply(state, Coordinates(100.0, 200.0), now=0.0)
"""

from . import kalman, lowpass, matrix, ukf
from .bank import BankEstimate, FilterBank
from .config import (
    DEFAULT_TICK_MS,
    FilterSettings,
    FilterStates,
    KalmanSettings,
    LowPassSettings,
    NoiseSettings,
    UKFSettings,
)
from .errors import (
    DimensionMismatch,
    FilterError,
    IncompatibleDimensions,
    InvalidMatrix,
    InvalidParameter,
    MatrixError,
    PointTrackError,
    SingularMatrix,
)
from .kalman import KalmanState
from .lowpass import LowPassState
from .metrics import ErrorHistory, position_error, rmse
from .noise import add_noise, gaussian_noise
from .types import Coordinates
from .ukf import UKFState

__version__ = "1.0.0"
__license__ = "AGPL-3.0-or-later"

__all__ = [
    # Filters
    'lowpass',
    'kalman',
    'ukf',
    'matrix',
    'LowPassState',
    'KalmanState',
    'UKFState',

    # Driver
    'FilterBank',
    'BankEstimate',

    # Configuration
    'DEFAULT_TICK_MS',
    'FilterSettings',
    'FilterStates',
    'LowPassSettings',
    'KalmanSettings',
    'UKFSettings',
    'NoiseSettings',

    # Errors
    'PointTrackError',
    'MatrixError',
    'InvalidMatrix',
    'DimensionMismatch',
    'IncompatibleDimensions',
    'SingularMatrix',
    'InvalidParameter',
    'FilterError',

    # Utilities
    'Coordinates',
    'add_noise',
    'gaussian_noise',
    'position_error',
    'rmse',
    'ErrorHistory',
]
