"""
City Layout for the Urban CO2 Capture Twin.

Provides the fixed catalog of emission sources: two factories, a
commercial district and three traffic corridors.
"""

import numpy as np
from typing import List

from config import BASE_EMISSION_RATE, GRID_SIZE, LANDMARK_CATEGORIES, TRAFFIC_SEED
from models.entities import EmissionSource


def get_emission_sources(
    seed: int = TRAFFIC_SEED,
    base_rate: float = BASE_EMISSION_RATE,
    grid_size: int = GRID_SIZE,
) -> List[EmissionSource]:
    """
    Return the static emission source catalog.

    Traffic cells get a small random variation in emission rate; the
    generator is seeded so the catalog is identical between runs.

    Args:
        seed: Seed for the traffic rate variation.
        base_rate: Reference emission rate the catalog is scaled from.
        grid_size: Length of the main roads (they span the full grid).

    Returns:
        List of EmissionSource, landmarks first, then traffic cells.
    """
    rng = np.random.default_rng(seed)

    sources = [
        EmissionSource("factory-1", 4, 5, "factory", base_rate * 2.5),
        EmissionSource("factory-2", 20, 21, "factory", base_rate * 2.2),
        EmissionSource("commercial-1", 18, 6, "commercial", base_rate * 1.8),
    ]

    # Main east-west highway
    for i in range(grid_size):
        rate = base_rate * (0.8 + rng.random() * 0.4)
        sources.append(EmissionSource(f"traffic-h-main-{i}", i, 12, "traffic", rate))

    # Main north-south highway
    for i in range(grid_size):
        rate = base_rate * (0.9 + rng.random() * 0.5)
        sources.append(EmissionSource(f"traffic-v-main-{i}", 10, i, "traffic", rate))

    # Secondary road in the north-east
    for i in range(10):
        sources.append(
            EmissionSource(f"traffic-h-secondary-{i}", 15 + i, 3, "traffic", base_rate * 0.6)
        )

    return sources


def get_landmark_sources(sources: List[EmissionSource]) -> List[EmissionSource]:
    """Factories and commercial districts: drawn with icons, never built over."""
    return [s for s in sources if s.category in LANDMARK_CATEGORIES]
