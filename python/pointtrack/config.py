"""
pointtrack - Configuration
==========================
Copyright (C) 2026 pointtrack contributors
License: AGPL-3.0-or-later

Filter parameters and the tick constant used to normalize elapsed time.

A parameter change is applied by re-initializing the affected filter;
settings objects are never patched into a running filter state.
"""

from dataclasses import dataclass, field

from .errors import InvalidParameter

# Milliseconds per nominal tick; dt = 1 for calls exactly one tick apart.
DEFAULT_TICK_MS = 15.0


@dataclass(frozen=True)
class LowPassSettings:
    """Exponential smoothing factor (1 disables smoothing)"""
    alpha: float = 0.1

    def validate(self) -> "LowPassSettings":
        if not 0.0 <= self.alpha <= 1.0:
            raise InvalidParameter(f"alpha must lie in [0, 1], got {self.alpha}")
        return self


@dataclass(frozen=True)
class KalmanSettings:
    """Linear Kalman filter noise levels"""
    q: float = 0.1   # Process noise
    r: float = 4.0   # Measurement noise

    def validate(self) -> "KalmanSettings":
        _check_noise(self.q, self.r)
        return self


@dataclass(frozen=True)
class UKFSettings:
    """UKF noise levels (q drives velocity and turn-rate noise)"""
    q: float = 0.05
    r: float = 4.0

    def validate(self) -> "UKFSettings":
        _check_noise(self.q, self.r)
        return self


@dataclass(frozen=True)
class NoiseSettings:
    """Synthetic Gaussian noise added to measurements before filtering"""
    enabled: bool = True
    sigma: float = 10.0

    def validate(self) -> "NoiseSettings":
        if self.sigma < 0:
            raise InvalidParameter(f"sigma must be non-negative, got {self.sigma}")
        return self


@dataclass(frozen=True)
class FilterStates:
    """Which filters run on each tick"""
    low_pass: bool = True
    kalman: bool = True
    ukf: bool = True


@dataclass(frozen=True)
class FilterSettings:
    """
    Complete configuration of a filter bank.

    Args:
        low_pass: Low-pass smoothing factor
        kalman: Linear Kalman filter q/r
        ukf: Unscented Kalman filter q/r
        noise: Synthetic measurement noise
        states: Active filters
        tick_ms: Milliseconds per nominal tick
    """
    low_pass: LowPassSettings = field(default_factory=LowPassSettings)
    kalman: KalmanSettings = field(default_factory=KalmanSettings)
    ukf: UKFSettings = field(default_factory=UKFSettings)
    noise: NoiseSettings = field(default_factory=NoiseSettings)
    states: FilterStates = field(default_factory=FilterStates)
    tick_ms: float = DEFAULT_TICK_MS

    def validate(self) -> "FilterSettings":
        self.low_pass.validate()
        self.kalman.validate()
        self.ukf.validate()
        self.noise.validate()
        if self.tick_ms <= 0:
            raise InvalidParameter(f"tick_ms must be positive, got {self.tick_ms}")
        return self


def _check_noise(q: float, r: float) -> None:
    if q < 0:
        raise InvalidParameter(f"q must be non-negative, got {q}")
    if r <= 0:
        raise InvalidParameter(f"r must be positive, got {r}")
