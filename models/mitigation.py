"""
Mitigation Overlay.

Subtracts the attenuation of placed capture devices from a propagated
concentration field.  Each device removes ``capture_rate`` at its own cell,
falling off linearly with Euclidean distance to zero at its radius.

Devices are applied in placement order.  For the per-kind attribution the
order matters: a later device can only claim what earlier devices left.
"""

import logging
from typing import Dict, Iterable, Optional, Tuple

import numpy as np
from scipy.spatial.distance import cdist

from models.entities import CaptureDevice, DeviceSpec, device_catalog

logger = logging.getLogger(__name__)


def _resolve_spec(
    device: CaptureDevice,
    catalog: Dict[str, DeviceSpec],
) -> Optional[DeviceSpec]:
    spec = catalog.get(device.kind)
    if spec is None:
        logger.debug("Ignoring device of unknown kind '%s' at (%d, %d)", device.kind, device.x, device.y)
        return None
    if spec.radius <= 0:
        logger.debug("Ignoring '%s' device with non-positive radius %d", device.kind, spec.radius)
        return None
    return spec


def device_reduction(
    device: CaptureDevice,
    spec: DeviceSpec,
    shape: Tuple[int, int],
) -> np.ndarray:
    """
    Potential reduction a single device exerts on every cell of a grid.

    Args:
        device: The placed device.
        spec: Its kind's parameters (radius must be positive).
        shape: (rows, cols) of the target grid.

    Returns:
        Array of the grid's shape: ``capture_rate * (1 - d / radius)`` where
        ``d <= radius``, 0 elsewhere.
    """
    rows, cols = shape
    yy, xx = np.mgrid[0:rows, 0:cols]
    cells = np.column_stack([xx.ravel(), yy.ravel()]).astype(float)
    dist = cdist(cells, np.array([[device.x, device.y]], dtype=float)).reshape(shape)

    reduction = spec.capture_rate * (1.0 - dist / spec.radius)
    reduction[dist > spec.radius] = 0.0
    return reduction


def apply_devices(
    grid: np.ndarray,
    devices: Iterable[CaptureDevice],
    catalog: Optional[Dict[str, DeviceSpec]] = None,
) -> np.ndarray:
    """
    Return a mitigated copy of ``grid``.

    Reductions from overlapping devices compound: each device is subtracted
    from the running result and the cell is clamped at zero.

    Args:
        grid: Propagated concentration field (not modified).
        devices: Placed devices, in placement order.
        catalog: kind -> DeviceSpec.  Defaults to the configured capture units.

    Returns:
        New array of the same shape with every cell >= 0.
    """
    catalog = device_catalog() if catalog is None else catalog
    result = np.array(grid, dtype=float, copy=True)

    for device in devices:
        spec = _resolve_spec(device, catalog)
        if spec is None:
            continue
        reduction = device_reduction(device, spec, result.shape)
        result = np.maximum(0.0, result - reduction)

    return result


def capture_breakdown(
    grid: np.ndarray,
    devices: Iterable[CaptureDevice],
    catalog: Optional[Dict[str, DeviceSpec]] = None,
) -> Dict[str, float]:
    """
    Attribute captured CO2 to each device kind.

    Works on a copy of ``grid``.  A device's actual reduction at a cell is
    ``min(potential, remaining)``; it is credited to the device's kind and
    removed from the working copy so later devices cannot count it again.

    Args:
        grid: Reference field the capture is measured against (not modified).
        devices: Placed devices, in placement order.
        catalog: kind -> DeviceSpec.  Defaults to the configured capture units.

    Returns:
        Dict mapping every catalog kind to its captured amount (0.0 if unused).
    """
    catalog = device_catalog() if catalog is None else catalog
    remaining = np.array(grid, dtype=float, copy=True)
    captured = {kind: 0.0 for kind in catalog}

    for device in devices:
        spec = _resolve_spec(device, catalog)
        if spec is None:
            continue
        potential = device_reduction(device, spec, remaining.shape)
        actual = np.minimum(potential, np.maximum(remaining, 0.0))
        captured[device.kind] += float(actual.sum())
        remaining -= actual

    return captured
