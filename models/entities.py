"""
Data model for the Urban CO2 Capture Twin.

Grid coordinates are integer cell indices: ``x`` is the column (East grows
with x) and ``y`` is the row (South grows with y).  Grids are stored as 2D
numpy arrays indexed ``grid[y, x]``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from config import CAPTURE_UNITS, SOURCE_CATEGORIES


class WindDirection(Enum):
    """Prevailing wind for a propagation run.

    The value names the direction the wind pushes CO2 toward: an EAST wind
    favours spreading into the cell at ``x + 1``.
    """

    NORTH = "N"
    SOUTH = "S"
    EAST = "E"
    WEST = "W"
    CALM = "calm"

    @property
    def offset(self) -> Optional[Tuple[int, int]]:
        """(dx, dy) cell step the wind points toward, or None when calm."""
        return _WIND_OFFSETS.get(self)

    @property
    def opposite(self) -> "WindDirection":
        return _WIND_OPPOSITES[self]

    @classmethod
    def parse(cls, label: Optional[str]) -> "WindDirection":
        """Parse 'N', 'north', None, 'calm', ... into a WindDirection."""
        if label is None:
            return cls.CALM
        key = str(label).strip().lower()
        for member in cls:
            if key in (member.value.lower(), member.name.lower()):
                return member
        if key in ("", "none"):
            return cls.CALM
        raise ValueError(f"Unknown wind direction '{label}'. Use N, S, E, W or calm.")


_WIND_OFFSETS = {
    WindDirection.EAST: (1, 0),
    WindDirection.WEST: (-1, 0),
    WindDirection.SOUTH: (0, 1),
    WindDirection.NORTH: (0, -1),
}

_WIND_OPPOSITES = {
    WindDirection.NORTH: WindDirection.SOUTH,
    WindDirection.SOUTH: WindDirection.NORTH,
    WindDirection.EAST: WindDirection.WEST,
    WindDirection.WEST: WindDirection.EAST,
    WindDirection.CALM: WindDirection.CALM,
}


@dataclass(frozen=True)
class EmissionSource:
    """A fixed-location CO2 emitter.

    Args:
        id: Unique identifier (e.g. 'factory-1').
        x: Column index.
        y: Row index.
        category: One of 'factory', 'commercial', 'traffic'.
        base_rate: Emission at the source cell (CO2 units, > 0).
    """

    id: str
    x: int
    y: int
    category: str
    base_rate: float

    def __post_init__(self):
        if self.category not in SOURCE_CATEGORIES:
            raise ValueError(f"Unknown source category: {self.category}")
        if self.base_rate <= 0:
            raise ValueError("base_rate must be > 0")


@dataclass(frozen=True)
class CaptureDevice:
    """A placed capture unit.  ``kind`` keys into the device catalog."""

    x: int
    y: int
    kind: str


@dataclass(frozen=True)
class DeviceSpec:
    """Static parameters shared by every device of one kind."""

    name: str
    capture_rate: float
    radius: int
    cost: float
    color: str = "#888888"

    def __post_init__(self):
        if self.capture_rate <= 0:
            raise ValueError("capture_rate must be > 0")
        if self.cost <= 0:
            raise ValueError("cost must be > 0")


def device_catalog(units: Optional[Dict[str, dict]] = None) -> Dict[str, DeviceSpec]:
    """Build a kind -> DeviceSpec mapping from a CAPTURE_UNITS-style dict."""
    units = CAPTURE_UNITS if units is None else units
    return {
        kind: DeviceSpec(
            name=params.get("name", kind),
            capture_rate=float(params["capture_rate"]),
            radius=int(params["radius"]),
            cost=float(params["cost"]),
            color=params.get("color", "#888888"),
        )
        for kind, params in units.items()
    }
