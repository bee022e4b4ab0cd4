"""
Mitigation Metrics for the Urban CO2 Capture Twin.

Compares an unmitigated run with a mitigated run and derives capture,
efficiency and cost statistics.

Two reference fields are involved:
  - ``total_baseline`` always comes from a CALM-wind run, so efficiency is
    comparable across wind settings.
  - ``per_kind_breakdown`` is measured against the run for the CURRENT wind.
The per-kind totals therefore need not add up to ``total_captured`` when a
wind is selected.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

import numpy as np

from models.entities import CaptureDevice, DeviceSpec, EmissionSource, WindDirection, device_catalog
from models.mitigation import apply_devices, capture_breakdown
from models.propagation import PropagationConfig, propagate


@dataclass
class MitigationStats:
    """Aggregate statistics for one device configuration.

    Args:
        total_baseline: Sum of the calm-wind, device-free field.
        total_captured: max(0, total_baseline - sum of mitigated field).
        efficiency_pct: 100 * captured / baseline (0 when baseline is 0).
        total_investment: Summed cost of all recognised devices.
        cost_per_unit_captured: investment / captured (0 when nothing captured).
        per_kind_breakdown: Captured amount per device kind (current wind).
        per_kind_counts: Number of placed devices per kind.
        mitigated_field: The mitigated grid the statistics came from.
    """

    total_baseline: float
    total_captured: float
    efficiency_pct: float
    total_investment: float
    cost_per_unit_captured: float
    per_kind_breakdown: Dict[str, float] = field(default_factory=dict)
    per_kind_counts: Dict[str, int] = field(default_factory=dict)
    mitigated_field: Optional[np.ndarray] = None

    @property
    def device_count(self) -> int:
        return sum(self.per_kind_counts.values())


def total_investment(
    devices: Sequence[CaptureDevice],
    catalog: Dict[str, DeviceSpec],
) -> float:
    """Summed installation cost; devices of unknown kind cost nothing."""
    return float(sum(catalog[d.kind].cost for d in devices if d.kind in catalog))


def count_by_kind(
    devices: Sequence[CaptureDevice],
    catalog: Dict[str, DeviceSpec],
) -> Dict[str, int]:
    counts = {kind: 0 for kind in catalog}
    for d in devices:
        if d.kind in counts:
            counts[d.kind] += 1
    return counts


def aggregate(
    sources: Sequence[EmissionSource],
    devices: Sequence[CaptureDevice],
    wind: WindDirection = WindDirection.CALM,
    config: PropagationConfig = PropagationConfig(),
    catalog: Optional[Dict[str, DeviceSpec]] = None,
) -> MitigationStats:
    """
    Compute capture statistics for a device configuration.

    Args:
        sources: Emission sources.
        devices: Placed devices, in placement order.
        wind: Currently selected wind.
        config: Propagation constants.
        catalog: kind -> DeviceSpec.  Defaults to the configured capture units.

    Returns:
        MitigationStats for the configuration.
    """
    catalog = device_catalog() if catalog is None else catalog
    devices = list(devices)

    baseline = propagate(sources, WindDirection.CALM, config)
    current = baseline if wind is WindDirection.CALM else propagate(sources, wind, config)
    mitigated = apply_devices(current, devices, catalog)

    total_baseline = float(baseline.sum())
    total_captured = max(0.0, total_baseline - float(mitigated.sum()))
    investment = total_investment(devices, catalog)

    return MitigationStats(
        total_baseline=total_baseline,
        total_captured=total_captured,
        efficiency_pct=(total_captured / total_baseline * 100.0) if total_baseline > 0 else 0.0,
        total_investment=investment,
        cost_per_unit_captured=(investment / total_captured) if total_captured > 0 else 0.0,
        per_kind_breakdown=capture_breakdown(current, devices, catalog),
        per_kind_counts=count_by_kind(devices, catalog),
        mitigated_field=mitigated,
    )


def breakdown_share_pct(stats: MitigationStats) -> Dict[str, float]:
    """Each kind's captured amount as a percentage of ``total_captured``."""
    if stats.total_captured <= 0:
        return {kind: 0.0 for kind in stats.per_kind_breakdown}
    return {
        kind: captured / stats.total_captured * 100.0
        for kind, captured in stats.per_kind_breakdown.items()
    }


def summary_rows(stats: MitigationStats, catalog: Optional[Dict[str, DeviceSpec]] = None) -> List[dict]:
    """Per-kind rows (name, count, captured, share) for kinds actually placed."""
    catalog = device_catalog() if catalog is None else catalog
    shares = breakdown_share_pct(stats)
    rows = []
    for kind, count in stats.per_kind_counts.items():
        if count == 0:
            continue
        rows.append({
            "kind": kind,
            "name": catalog[kind].name if kind in catalog else kind,
            "count": count,
            "captured": stats.per_kind_breakdown.get(kind, 0.0),
            "share_pct": shares.get(kind, 0.0),
        })
    return rows
