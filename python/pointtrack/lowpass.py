"""
pointtrack - Low-Pass Filter
============================
Copyright (C) 2026 pointtrack contributors
License: AGPL-3.0-or-later

Single-state exponential smoother:

    estimate_k = alpha * z_k + (1 - alpha) * estimate_{k-1}

The first measurement is taken as the initial estimate without smoothing.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .errors import InvalidParameter
from .types import Coordinates


@dataclass(frozen=True)
class LowPassState:
    """Low-pass filter state (empty until the first measurement)"""
    previous_estimate: Optional[Coordinates] = None

    @property
    def initialized(self) -> bool:
        return self.previous_estimate is not None


def init() -> LowPassState:
    return LowPassState()


def apply(
    state: LowPassState,
    measurement: Coordinates,
    alpha: float
) -> Tuple[Coordinates, LowPassState]:
    """
    Smooth one measurement.

    Args:
        state: Current filter state
        measurement: New observation
        alpha: Weight of the new observation in [0, 1]

    Returns:
        Tuple of (estimate, new_state)
    """
    if not 0.0 <= alpha <= 1.0:
        raise InvalidParameter(f"alpha must lie in [0, 1], got {alpha}")

    prev = state.previous_estimate
    if prev is None:
        return measurement, LowPassState(previous_estimate=measurement)

    estimate = Coordinates(
        x=alpha * measurement.x + (1 - alpha) * prev.x,
        y=alpha * measurement.y + (1 - alpha) * prev.y,
    )
    return estimate, LowPassState(previous_estimate=estimate)
