"""
pointtrack - Measurement Noise
==============================
Copyright (C) 2026 pointtrack contributors
License: AGPL-3.0-or-later

Zero-mean Gaussian noise used to stress-test the filters with synthetic
measurements. Pass a seeded ``numpy.random.Generator`` for repeatable runs.
"""

from typing import Optional

import numpy as np

from .errors import InvalidParameter
from .types import Coordinates

_rng = np.random.default_rng()


def _check_sigma(sigma: float) -> None:
    if sigma < 0:
        raise InvalidParameter(f"sigma must be non-negative, got {sigma}")


def gaussian_noise(sigma: float, rng: Optional[np.random.Generator] = None) -> float:
    """Single draw from N(0, sigma^2)."""
    _check_sigma(sigma)
    rng = rng or _rng
    return float(rng.standard_normal()) * sigma


def add_noise(
    coords: Coordinates,
    sigma: float,
    rng: Optional[np.random.Generator] = None
) -> Coordinates:
    """Perturb x and y with independent N(0, sigma^2) draws."""
    _check_sigma(sigma)
    if sigma == 0:
        return coords
    rng = rng or _rng
    nx, ny = rng.standard_normal(2)
    return Coordinates(coords.x + float(nx) * sigma, coords.y + float(ny) * sigma)
