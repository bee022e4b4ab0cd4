"""
Device placement rules.

The engine accepts any device list; these checks are what the interactive
layer enforces before a device is appended.  Placement is append-only:
devices are never moved or removed individually.
"""

from typing import Dict, List, Optional, Sequence

from config import GRID_SIZE, LANDMARK_CATEGORIES
from models.entities import CaptureDevice, DeviceSpec, EmissionSource, device_catalog


def placement_error(
    x: int,
    y: int,
    devices: Sequence[CaptureDevice],
    sources: Sequence[EmissionSource],
    grid_size: int = GRID_SIZE,
) -> Optional[str]:
    """
    Check whether a device may be placed at (x, y).

    Traffic cells are placeable; factory and commercial cells are not.

    Returns:
        None if the cell is free, otherwise a human-readable reason.
    """
    if not (0 <= x < grid_size and 0 <= y < grid_size):
        return f"Cell ({x}, {y}) is outside the {grid_size}x{grid_size} grid."
    if any(d.x == x and d.y == y for d in devices):
        return f"Cell ({x}, {y}) already holds a capture unit."
    for s in sources:
        if s.x == x and s.y == y and s.category in LANDMARK_CATEGORIES:
            return f"Cell ({x}, {y}) is occupied by {s.id}."
    return None


def place_device(
    devices: Sequence[CaptureDevice],
    x: int,
    y: int,
    kind: str,
    sources: Sequence[EmissionSource],
    grid_size: int = GRID_SIZE,
    catalog: Optional[Dict[str, DeviceSpec]] = None,
) -> List[CaptureDevice]:
    """
    Return a new device list with a ``kind`` device appended at (x, y).

    Raises:
        ValueError: If the kind is unknown or the cell is not placeable.
    """
    catalog = device_catalog() if catalog is None else catalog
    if kind not in catalog:
        raise ValueError(f"Unknown capture unit kind '{kind}'.")
    reason = placement_error(x, y, devices, sources, grid_size)
    if reason is not None:
        raise ValueError(reason)
    return list(devices) + [CaptureDevice(x=x, y=y, kind=kind)]
