"""
pointtrack - Shared value types
===============================
Copyright (C) 2026 pointtrack contributors
License: AGPL-3.0-or-later
"""

import math
import time
from dataclasses import dataclass
from typing import Optional

import numpy as np


@dataclass(frozen=True)
class Coordinates:
    """A point in screen/world space."""
    x: float
    y: float

    def distance_to(self, other: "Coordinates") -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=np.float64)

    @classmethod
    def from_array(cls, v) -> "Coordinates":
        v = np.asarray(v, dtype=np.float64).ravel()
        return cls(float(v[0]), float(v[1]))


def now_ms() -> float:
    """Wall-clock time in milliseconds."""
    return time.time() * 1000.0


def elapsed_ticks(last_timestamp: Optional[float], now: float, tick_ms: float) -> float:
    """
    Normalized time step between two calls.

    One nominal tick of ``tick_ms`` milliseconds maps to ``dt = 1``. Without
    a previous timestamp the step is exactly one tick.
    """
    if last_timestamp is None:
        return 1.0
    return (now - last_timestamp) / tick_ms
