"""Shared fixtures for the Urban CO2 Capture Twin test suite."""

import sys
import os
import pytest
import numpy as np

# Ensure project root is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from models.entities import EmissionSource, device_catalog
from models.propagation import PropagationConfig


@pytest.fixture
def default_config():
    """The full 25x25 city configuration."""
    return PropagationConfig()


@pytest.fixture
def small_config():
    """A 9x9 grid for fast, hand-checkable tests."""
    return PropagationConfig(grid_size=9)


@pytest.fixture
def single_source():
    """factory-1 on its own: (4, 5) emitting 250."""
    return EmissionSource("factory-1", 4, 5, "factory", 250.0)


@pytest.fixture
def center_source():
    """A single source at the exact center of the 25x25 grid."""
    return EmissionSource("center", 12, 12, "factory", 250.0)


@pytest.fixture
def catalog():
    """The configured capture unit catalog."""
    return device_catalog()


@pytest.fixture
def flat_grid():
    """A 5x5 field with 10 units everywhere."""
    return np.full((5, 5), 10.0)


@pytest.fixture
def city_sources():
    """The full built-in emission source catalog."""
    from data.city_layout import get_emission_sources
    return get_emission_sources()
