"""
Concentration Propagation Engine.

Spreads CO2 outward from point sources with a directional decay flood-fill.
This is a relaxation on the grid, not a diffusion solver: every cell keeps
the strongest value that reaches it, and a cell is re-expanded whenever it
is reached with a strictly higher value.

Convention:
  - Grids are indexed ``grid[y, x]``; North is ``y - 1``, East is ``x + 1``.
  - Neighbors are visited East, West, South, North so results are reproducible.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Tuple

import numpy as np

from config import GRID_SIZE, DISPERSION_FACTOR, WIND_STRENGTH, PROPAGATION_CUTOFF
from models.entities import EmissionSource, WindDirection

logger = logging.getLogger(__name__)

NEIGHBOR_ORDER = (
    WindDirection.EAST,
    WindDirection.WEST,
    WindDirection.SOUTH,
    WindDirection.NORTH,
)


@dataclass(frozen=True)
class PropagationConfig:
    """Tunable constants for a propagation run.

    Args:
        grid_size: Cells per side of the square grid.
        decay_factor: Fraction of concentration a neighbor inherits (< 1).
        wind_strength: Downwind boost / upwind damping applied to the decay.
        cutoff: Values at or below this never spread further.
    """

    grid_size: int = GRID_SIZE
    decay_factor: float = DISPERSION_FACTOR
    wind_strength: float = WIND_STRENGTH
    cutoff: float = PROPAGATION_CUTOFF

    def __post_init__(self):
        if self.grid_size <= 0:
            raise ValueError("grid_size must be positive")
        if not 0.0 < self.decay_factor < 1.0:
            raise ValueError("decay_factor must be in (0, 1)")
        if not 0.0 <= self.wind_strength <= 1.0:
            raise ValueError("wind_strength must be in [0, 1]")


def in_bounds(x: int, y: int, grid_size: int) -> bool:
    return 0 <= x < grid_size and 0 <= y < grid_size


def directional_decay(
    step: WindDirection,
    wind: WindDirection,
    config: PropagationConfig,
) -> float:
    """Decay factor for one step toward ``step`` under the given wind."""
    decay = config.decay_factor
    if wind is WindDirection.CALM:
        return decay
    if step is wind:
        return decay * (1.0 + config.wind_strength)
    if step is wind.opposite:
        return decay * (1.0 - config.wind_strength)
    return decay


def propagate(
    sources: Iterable[EmissionSource],
    wind: WindDirection = WindDirection.CALM,
    config: PropagationConfig = PropagationConfig(),
) -> np.ndarray:
    """
    Compute the unmitigated concentration field for a set of sources.

    Each in-bounds source seeds its cell with its base rate.  A FIFO work
    queue then pushes values outward: a neighbor receives
    ``value * directional_decay`` and is enqueued only if that strictly
    exceeds what it already holds.  Expansion from a cell stops once
    ``value * decay_factor`` drops to the cutoff, and individual candidates
    at or below the cutoff are discarded.

    Args:
        sources: Emission sources.  Sources outside the grid are ignored.
        wind: Prevailing wind direction (CALM for no bias).
        config: Grid size and decay constants.

    Returns:
        grid: (grid_size, grid_size) float array indexed [y, x], all >= 0.
    """
    n = config.grid_size
    grid = np.zeros((n, n), dtype=float)

    # Array-backed queue; ``head`` advances instead of popping from the front
    queue: List[Tuple[int, int, float]] = []
    for src in sources:
        if not in_bounds(src.x, src.y, n):
            logger.debug("Ignoring out-of-bounds source %s at (%d, %d)", src.id, src.x, src.y)
            continue
        grid[src.y, src.x] = max(grid[src.y, src.x], src.base_rate)
        queue.append((src.x, src.y, src.base_rate))

    steps = [
        (direction.offset, directional_decay(direction, wind, config))
        for direction in NEIGHBOR_ORDER
    ]

    head = 0
    while head < len(queue):
        x, y, value = queue[head]
        head += 1
        if value * config.decay_factor <= config.cutoff:
            continue
        for (dx, dy), decay in steps:
            candidate = value * decay
            if candidate <= config.cutoff:
                continue
            nx, ny = x + dx, y + dy
            if in_bounds(nx, ny, n) and grid[ny, nx] < candidate:
                grid[ny, nx] = candidate
                queue.append((nx, ny, candidate))

    logger.debug("Propagation (%s wind) processed %d queue entries", wind.name, len(queue))
    return grid
