"""
pointtrack - Configuration Test Suite
=====================================
"""

import pytest

from pointtrack.config import (
    DEFAULT_TICK_MS,
    FilterSettings,
    KalmanSettings,
    LowPassSettings,
    NoiseSettings,
    UKFSettings,
)
from pointtrack.errors import InvalidParameter


class TestDefaults:

    def test_default_settings(self):
        s = FilterSettings()
        assert s.low_pass.alpha == 0.1
        assert (s.kalman.q, s.kalman.r) == (0.1, 4.0)
        assert (s.ukf.q, s.ukf.r) == (0.05, 4.0)
        assert s.noise.enabled is True
        assert s.noise.sigma == 10.0
        assert s.states.low_pass and s.states.kalman and s.states.ukf
        assert s.tick_ms == DEFAULT_TICK_MS == 15.0

    def test_validate_returns_self(self):
        s = FilterSettings()
        assert s.validate() is s

    def test_settings_compare_by_value(self):
        assert KalmanSettings(q=0.2, r=1.0) == KalmanSettings(q=0.2, r=1.0)
        assert UKFSettings(q=0.2) != UKFSettings(q=0.3)


class TestValidation:

    @pytest.mark.parametrize("settings", [
        FilterSettings(low_pass=LowPassSettings(alpha=1.2)),
        FilterSettings(kalman=KalmanSettings(q=-0.1)),
        FilterSettings(kalman=KalmanSettings(r=0.0)),
        FilterSettings(ukf=UKFSettings(r=-1.0)),
        FilterSettings(noise=NoiseSettings(sigma=-2.0)),
        FilterSettings(tick_ms=0.0),
    ])
    def test_rejects_out_of_range(self, settings):
        with pytest.raises(InvalidParameter):
            settings.validate()

    def test_boundaries_accepted(self):
        FilterSettings(
            low_pass=LowPassSettings(alpha=1.0),
            kalman=KalmanSettings(q=0.0, r=0.1),
            noise=NoiseSettings(enabled=False, sigma=0.0),
        ).validate()
