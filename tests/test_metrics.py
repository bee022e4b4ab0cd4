"""Tests for the mitigation statistics aggregator."""

import numpy as np
import pytest

from analysis.metrics import (
    aggregate,
    breakdown_share_pct,
    count_by_kind,
    summary_rows,
    total_investment,
)
from models.entities import CaptureDevice, WindDirection
from models.mitigation import apply_devices, capture_breakdown
from models.propagation import propagate


class TestInvestmentAndCounts:
    def test_total_investment(self, catalog):
        devices = [
            CaptureDevice(1, 1, "scrubber"),
            CaptureDevice(3, 3, "scrubber"),
            CaptureDevice(5, 5, "garden"),
        ]
        assert total_investment(devices, catalog) == pytest.approx(125000.0)

    def test_unknown_kind_costs_nothing(self, catalog):
        devices = [CaptureDevice(1, 1, "solar-tree"), CaptureDevice(2, 2, "biofilter")]
        assert total_investment(devices, catalog) == pytest.approx(120000.0)

    def test_count_by_kind(self, catalog):
        devices = [
            CaptureDevice(1, 1, "garden"),
            CaptureDevice(2, 2, "garden"),
            CaptureDevice(3, 3, "solar-tree"),
        ]
        counts = count_by_kind(devices, catalog)
        assert counts == {"scrubber": 0, "garden": 2, "biofilter": 0}


class TestAggregate:
    """Tests for aggregate()."""

    def test_no_devices_calm(self, city_sources):
        stats = aggregate(city_sources, [], WindDirection.CALM)
        assert stats.total_baseline > 0
        assert stats.total_captured == 0.0
        assert stats.efficiency_pct == 0.0
        assert stats.total_investment == 0.0
        assert stats.cost_per_unit_captured == 0.0
        assert stats.device_count == 0

    def test_no_sources(self):
        stats = aggregate([], [CaptureDevice(3, 3, "scrubber")], WindDirection.EAST)
        assert stats.total_baseline == 0.0
        assert stats.total_captured == 0.0
        assert stats.efficiency_pct == 0.0
        assert stats.total_investment == pytest.approx(50000.0)
        assert stats.cost_per_unit_captured == 0.0

    def test_single_scrubber_on_source(self, single_source):
        devices = [CaptureDevice(4, 5, "scrubber")]
        stats = aggregate([single_source], devices, WindDirection.CALM)

        baseline = propagate([single_source], WindDirection.CALM)
        mitigated = apply_devices(baseline, devices)
        expected_captured = baseline.sum() - mitigated.sum()

        assert stats.total_baseline == pytest.approx(baseline.sum())
        assert stats.total_captured == pytest.approx(expected_captured)
        assert stats.efficiency_pct == pytest.approx(100.0 * expected_captured / baseline.sum())
        assert stats.cost_per_unit_captured == pytest.approx(50000.0 / expected_captured)
        np.testing.assert_allclose(stats.mitigated_field, mitigated)

    def test_baseline_is_always_calm(self, city_sources):
        """Efficiency is measured against the calm field whatever the wind."""
        calm_total = propagate(city_sources, WindDirection.CALM).sum()
        for wind in WindDirection:
            stats = aggregate(city_sources, [], wind)
            assert stats.total_baseline == pytest.approx(calm_total)

    def test_mitigated_field_uses_current_wind(self, city_sources):
        devices = [CaptureDevice(11, 11, "biofilter")]
        stats = aggregate(city_sources, devices, WindDirection.NORTH)
        expected = apply_devices(propagate(city_sources, WindDirection.NORTH), devices)
        np.testing.assert_allclose(stats.mitigated_field, expected)

    def test_breakdown_uses_current_wind(self, city_sources):
        """Per-kind capture is measured against the current-wind field."""
        devices = [CaptureDevice(11, 11, "biofilter"), CaptureDevice(9, 13, "scrubber")]
        stats = aggregate(city_sources, devices, WindDirection.WEST)
        expected = capture_breakdown(propagate(city_sources, WindDirection.WEST), devices)
        for kind, captured in expected.items():
            assert stats.per_kind_breakdown[kind] == pytest.approx(captured)

    def test_calm_breakdown_sums_to_total(self, city_sources):
        devices = [
            CaptureDevice(5, 5, "biofilter"),
            CaptureDevice(9, 13, "scrubber"),
            CaptureDevice(14, 12, "garden"),
        ]
        stats = aggregate(city_sources, devices, WindDirection.CALM)
        assert sum(stats.per_kind_breakdown.values()) == pytest.approx(stats.total_captured)

    @pytest.mark.parametrize("wind", list(WindDirection))
    def test_never_over_captures(self, city_sources, wind):
        devices = [
            CaptureDevice(x, y, "biofilter")
            for x in range(2, 25, 4) for y in range(1, 25, 4)
        ]
        stats = aggregate(city_sources, devices, wind)
        assert 0.0 <= stats.total_captured <= stats.total_baseline
        assert 0.0 <= stats.efficiency_pct <= 100.0
        assert np.all(stats.mitigated_field >= 0.0)

    def test_cost_per_unit_definition(self, city_sources):
        devices = [CaptureDevice(9, 11, "scrubber"), CaptureDevice(11, 13, "garden")]
        stats = aggregate(city_sources, devices, WindDirection.CALM)
        assert stats.total_captured > 0
        assert stats.cost_per_unit_captured == pytest.approx(
            stats.total_investment / stats.total_captured
        )

    def test_counts(self, city_sources):
        devices = [CaptureDevice(9, 11, "scrubber"), CaptureDevice(11, 13, "scrubber")]
        stats = aggregate(city_sources, devices, WindDirection.CALM)
        assert stats.per_kind_counts["scrubber"] == 2
        assert stats.device_count == 2


class TestBreakdownShare:
    def test_zero_when_nothing_captured(self, city_sources):
        stats = aggregate(city_sources, [], WindDirection.CALM)
        assert all(v == 0.0 for v in breakdown_share_pct(stats).values())

    def test_shares_sum_to_100_under_calm(self, city_sources):
        devices = [CaptureDevice(5, 5, "biofilter"), CaptureDevice(14, 12, "garden")]
        stats = aggregate(city_sources, devices, WindDirection.CALM)
        shares = breakdown_share_pct(stats)
        assert sum(shares.values()) == pytest.approx(100.0)

    def test_summary_rows_only_placed_kinds(self, city_sources):
        devices = [CaptureDevice(5, 5, "biofilter")]
        stats = aggregate(city_sources, devices, WindDirection.CALM)
        rows = summary_rows(stats)
        assert [r["kind"] for r in rows] == ["biofilter"]
        assert rows[0]["name"] == "Industrial Biofilter"
        assert rows[0]["count"] == 1
        assert rows[0]["share_pct"] == pytest.approx(100.0)
