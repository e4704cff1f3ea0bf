"""
pointtrack - Filter Bank
========================
Copyright (C) 2026 pointtrack contributors
License: AGPL-3.0-or-later

Drives the three filters side by side, one measurement per tick.

The bank holds the current state of each filter and swaps in the state
returned by every ``apply`` call. A filter that fails on a tick keeps its
previous state and previous estimate; nothing is retried.

Example:
    >>> bank = FilterBank(FilterSettings(noise=NoiseSettings(enabled=False)))
    >>> out = bank.step(Coordinates(100.0, 100.0), now=0.0)
    >>> out.estimates["kalman"]
    Coordinates(x=100.0, y=100.0)
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence, Tuple

import numpy as np

from . import kalman, lowpass, ukf
from .config import FilterSettings
from .errors import FilterError
from .noise import add_noise
from .types import Coordinates, now_ms

logger = logging.getLogger(__name__)

LOW_PASS = "low_pass"
KALMAN = "kalman"
UKF = "ukf"
FILTER_NAMES = (LOW_PASS, KALMAN, UKF)


@dataclass(frozen=True)
class BankEstimate:
    """Result of one tick"""
    raw: Coordinates                                 # Position handed to the bank
    measurement: Coordinates                         # Position the filters saw
    estimates: Dict[str, Optional[Coordinates]]      # Latest estimate per filter
    failed: Tuple[str, ...] = field(default=())      # Filters that dropped this tick


class FilterBank:
    """
    Low-pass, Kalman and UKF estimators fed from one measurement stream.

    Args:
        settings: Bank configuration (defaults if omitted)
        rng: Random generator for synthetic noise
    """

    def __init__(
        self,
        settings: Optional[FilterSettings] = None,
        rng: Optional[np.random.Generator] = None
    ):
        self.settings = (settings or FilterSettings()).validate()
        self.rng = rng
        self.reset()

    def reset(self):
        """Discard every filter state and estimate."""
        s = self.settings
        self.low_pass_state = lowpass.init()
        self.kalman_state = kalman.init(s.kalman.q, s.kalman.r)
        self.ukf_state = ukf.init(s.ukf.q, s.ukf.r)
        self.estimates: Dict[str, Optional[Coordinates]] = {
            name: None for name in FILTER_NAMES
        }
        self.tick_count = 0
        self.dropped = {name: 0 for name in FILTER_NAMES}

    def update_settings(self, settings: FilterSettings):
        """
        Apply new settings.

        Kalman and UKF states are rebuilt from scratch when their q or r
        change. The low-pass filter reads alpha on every call and keeps its
        state.
        """
        settings.validate()
        old = self.settings
        self.settings = settings

        if settings.kalman != old.kalman:
            self.kalman_state = kalman.init(settings.kalman.q, settings.kalman.r)
            logger.info("Kalman filter re-initialized with q=%g r=%g",
                        settings.kalman.q, settings.kalman.r)
        if settings.ukf != old.ukf:
            self.ukf_state = ukf.init(settings.ukf.q, settings.ukf.r)
            logger.info("UKF re-initialized with q=%g r=%g",
                        settings.ukf.q, settings.ukf.r)

    def active(self) -> Tuple[str, ...]:
        states = self.settings.states
        flags = {LOW_PASS: states.low_pass, KALMAN: states.kalman, UKF: states.ukf}
        return tuple(name for name in FILTER_NAMES if flags[name])

    def step(self, position: Coordinates, now: Optional[float] = None) -> BankEstimate:
        """
        Feed one measurement to every active filter.

        Args:
            position: Observed (or true) position for this tick
            now: Timestamp in milliseconds shared by all filters

        Returns:
            BankEstimate for this tick
        """
        if now is None:
            now = now_ms()
        s = self.settings
        tick_ms = s.tick_ms

        measurement = position
        if s.noise.enabled:
            measurement = add_noise(position, s.noise.sigma, self.rng)

        active = self.active()
        failed = []
        for name in active:
            try:
                if name == LOW_PASS:
                    est, self.low_pass_state = lowpass.apply(
                        self.low_pass_state, measurement, s.low_pass.alpha)
                elif name == KALMAN:
                    est, self.kalman_state = kalman.apply(
                        self.kalman_state, measurement, now, tick_ms)
                else:
                    est, self.ukf_state = ukf.apply(
                        self.ukf_state, measurement, now, tick_ms)
            except FilterError as exc:
                self.dropped[name] += 1
                failed.append(name)
                logger.warning("%s dropped tick %d: %s", name, self.tick_count, exc)
                continue
            self.estimates[name] = est

        self.tick_count += 1
        return BankEstimate(
            raw=position,
            measurement=measurement,
            estimates={name: self.estimates[name] for name in active},
            failed=tuple(failed),
        )

    def run(
        self,
        positions,
        timestamps: Optional[Sequence[float]] = None,
        start: float = 0.0
    ) -> Dict[str, np.ndarray]:
        """
        Process a whole trajectory.

        Args:
            positions: [N, 2] positions, one per tick
            timestamps: [N] timestamps in ms (one nominal tick apart if omitted)
            start: First timestamp when ``timestamps`` is omitted

        Returns:
            Dict with "measurement" and one [N, 2] array per active filter;
            rows are NaN where a filter had no estimate yet.
        """
        positions = np.asarray(positions, dtype=np.float64)
        n = len(positions)
        if timestamps is None:
            timestamps = start + self.settings.tick_ms * np.arange(n)

        active = self.active()
        out = {"measurement": np.full((n, 2), np.nan)}
        for name in active:
            out[name] = np.full((n, 2), np.nan)

        for k in range(n):
            result = self.step(Coordinates.from_array(positions[k]), float(timestamps[k]))
            out["measurement"][k] = result.measurement.as_array()
            for name, est in result.estimates.items():
                if est is not None:
                    out[name][k] = est.as_array()

        return out
