"""
pointtrack - Error Metrics
==========================
Copyright (C) 2026 pointtrack contributors
License: AGPL-3.0-or-later

Distance-to-truth metrics for comparing the filters, plus a bounded
per-tick error history for live displays.
"""

from collections import deque
from typing import Dict, Iterable, Mapping, Optional

import numpy as np

from .types import Coordinates

DEFAULT_HISTORY_LENGTH = 200


def position_error(estimate: Coordinates, truth: Coordinates) -> float:
    """Euclidean distance between an estimate and the reference position."""
    return estimate.distance_to(truth)


def rmse(estimates, truths, start: int = 0) -> float:
    """
    Root-mean-square position error over a trajectory.

    Args:
        estimates: [N, 2] estimated positions
        truths: [N, 2] reference positions
        start: Number of leading samples to skip
    """
    est = np.asarray(estimates, dtype=np.float64)
    ref = np.asarray(truths, dtype=np.float64)
    n = min(len(est), len(ref))
    if n <= start:
        return float("nan")
    errs = np.linalg.norm(est[start:n, :2] - ref[start:n, :2], axis=1)
    return float(np.sqrt(np.mean(errs**2)))


class ErrorHistory:
    """
    Sliding window of per-filter position errors.

    Each call to ``record`` appends one sample holding the error of every
    filter that produced an estimate on that tick. The oldest sample is
    dropped once ``max_length`` samples are held.
    """

    def __init__(self, max_length: int = DEFAULT_HISTORY_LENGTH):
        if max_length < 1:
            raise ValueError(f"max_length must be positive, got {max_length}")
        self.max_length = max_length
        self._samples = deque(maxlen=max_length)

    def __len__(self) -> int:
        return len(self._samples)

    def clear(self) -> None:
        self._samples.clear()

    def record(
        self,
        truth: Coordinates,
        estimates: Mapping[str, Optional[Coordinates]]
    ) -> Dict[str, float]:
        """Append the errors of ``estimates`` against ``truth``."""
        sample = {
            name: position_error(est, truth)
            for name, est in estimates.items()
            if est is not None
        }
        self._samples.append(sample)
        return sample

    def latest(self) -> Dict[str, float]:
        return dict(self._samples[-1]) if self._samples else {}

    def series(self, name: str) -> np.ndarray:
        """Recorded errors of one filter, oldest first."""
        return np.array([s[name] for s in self._samples if name in s])

    def _names(self) -> Iterable[str]:
        names = []
        for s in self._samples:
            for name in s:
                if name not in names:
                    names.append(name)
        return names

    def mean(self) -> Dict[str, float]:
        return {name: float(np.mean(self.series(name))) for name in self._names()}

    def rmse(self) -> Dict[str, float]:
        return {
            name: float(np.sqrt(np.mean(self.series(name) ** 2)))
            for name in self._names()
        }

    def max_error(self) -> float:
        """Largest error held across all filters (0 when empty)."""
        return max((v for s in self._samples for v in s.values()), default=0.0)
