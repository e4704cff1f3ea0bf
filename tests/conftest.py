"""Shared fixtures for the pointtrack test suite."""

import sys
from pathlib import Path

import numpy as np
import pytest

# Allow running the suite from a source checkout
sys.path.insert(0, str(Path(__file__).parent.parent / "python"))


@pytest.fixture
def rng():
    return np.random.default_rng(42)
