"""
Pre-defined device layout scenarios for comparing mitigation strategies.

Each scenario function returns a dict with:
    - devices: list of CaptureDevice in placement order
    - wind: WindDirection the layout was designed for
    - description: human-readable summary
"""

from models.entities import CaptureDevice, WindDirection


def scenario_a_factory_scrubbers() -> dict:
    """Scenario A: Scrubbers ring factory-1.

    Four roadside scrubbers on the cells adjacent to the (4, 5) factory.
    Tests overlapping devices on a single strong source.
    """
    return {
        "devices": [
            CaptureDevice(5, 5, "scrubber"),
            CaptureDevice(3, 5, "scrubber"),
            CaptureDevice(4, 6, "scrubber"),
            CaptureDevice(4, 4, "scrubber"),
        ],
        "wind": WindDirection.CALM,
        "description": "Four scrubbers around factory-1, calm wind",
    }


def scenario_b_highway_gardens() -> dict:
    """Scenario B: Vertical gardens along the east-west highway."""
    return {
        "devices": [CaptureDevice(x, 13, "garden") for x in (2, 6, 14, 18, 22)],
        "wind": WindDirection.SOUTH,
        "description": "Five gardens just south of the main highway, southward wind",
    }


def scenario_c_biofilters() -> dict:
    """Scenario C: One biofilter per landmark emitter."""
    return {
        "devices": [
            CaptureDevice(5, 5, "biofilter"),
            CaptureDevice(19, 21, "biofilter"),
            CaptureDevice(17, 6, "biofilter"),
        ],
        "wind": WindDirection.CALM,
        "description": "A biofilter beside each factory and the commercial district",
    }


def scenario_d_intersection_mix() -> dict:
    """Scenario D: Mixed units around the main highway intersection.

    Overlapping units of different kinds; the per-kind attribution depends
    on placement order.
    """
    return {
        "devices": [
            CaptureDevice(11, 11, "biofilter"),
            CaptureDevice(9, 13, "scrubber"),
            CaptureDevice(11, 13, "garden"),
            CaptureDevice(9, 11, "garden"),
        ],
        "wind": WindDirection.EAST,
        "description": "Mixed units at the highway intersection, eastward wind",
    }


def scenario_e_empty() -> dict:
    """Scenario E: No devices (control)."""
    return {
        "devices": [],
        "wind": WindDirection.CALM,
        "description": "No capture units",
    }
