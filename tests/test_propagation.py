"""Tests for the concentration propagation engine."""

import numpy as np
import pytest

from models.entities import EmissionSource, WindDirection
from models.propagation import PropagationConfig, directional_decay, propagate


ALL_WINDS = list(WindDirection)


class TestPropagationConfig:
    """Tests for configuration validation."""

    def test_defaults_match_city(self):
        config = PropagationConfig()
        assert config.grid_size == 25
        assert config.decay_factor == pytest.approx(0.85)
        assert config.wind_strength == pytest.approx(0.5)
        assert config.cutoff == pytest.approx(1.0)

    def test_decay_must_be_below_one(self):
        with pytest.raises(ValueError, match="decay_factor"):
            PropagationConfig(decay_factor=1.0)

    def test_grid_size_must_be_positive(self):
        with pytest.raises(ValueError, match="grid_size"):
            PropagationConfig(grid_size=0)

    def test_wind_strength_range(self):
        with pytest.raises(ValueError, match="wind_strength"):
            PropagationConfig(wind_strength=1.5)


class TestDirectionalDecay:
    """Tests for the wind-adjusted per-step decay."""

    def test_calm_is_plain_decay(self, default_config):
        for step in (WindDirection.EAST, WindDirection.NORTH):
            assert directional_decay(step, WindDirection.CALM, default_config) == pytest.approx(0.85)

    def test_downwind_is_boosted(self, default_config):
        decay = directional_decay(WindDirection.EAST, WindDirection.EAST, default_config)
        assert decay == pytest.approx(0.85 * 1.5)

    def test_upwind_is_damped(self, default_config):
        decay = directional_decay(WindDirection.WEST, WindDirection.EAST, default_config)
        assert decay == pytest.approx(0.85 * 0.5)

    def test_crosswind_unchanged(self, default_config):
        decay = directional_decay(WindDirection.NORTH, WindDirection.EAST, default_config)
        assert decay == pytest.approx(0.85)


class TestPropagate:
    """Tests for the flood-fill propagation."""

    @pytest.mark.parametrize("wind", ALL_WINDS)
    def test_no_sources_gives_zero_grid(self, wind, default_config):
        grid = propagate([], wind, default_config)
        assert grid.shape == (25, 25)
        assert np.all(grid == 0.0)

    def test_single_source_values(self, single_source, default_config):
        """Source cell keeps its rate; each calm step multiplies by 0.85."""
        grid = propagate([single_source], WindDirection.CALM, default_config)
        assert grid[5, 4] == pytest.approx(250.0)
        assert grid[5, 5] == pytest.approx(212.5)
        assert grid[5, 6] == pytest.approx(180.625)
        # Vertical neighbors decay the same way under calm wind
        assert grid[4, 4] == pytest.approx(212.5)
        assert grid[6, 4] == pytest.approx(212.5)

    def test_calm_values_follow_manhattan_distance(self, single_source, default_config):
        grid = propagate([single_source], WindDirection.CALM, default_config)
        for x, y in [(7, 5), (4, 9), (8, 8), (0, 0)]:
            d = abs(x - 4) + abs(y - 5)
            assert grid[y, x] == pytest.approx(250.0 * 0.85 ** d)

    def test_negligible_values_are_not_spread(self, single_source, default_config):
        """Every cell is either untouched or above the cutoff."""
        grid = propagate([single_source], WindDirection.CALM, default_config)
        assert np.all((grid == 0.0) | (grid > 1.0))
        # 250 * 0.85**d <= 1 from d = 34 on
        assert grid[18, 24] == pytest.approx(250.0 * 0.85 ** 33)
        assert grid[19, 24] == 0.0
        assert grid[24, 24] == 0.0

    @pytest.mark.parametrize("wind", ALL_WINDS)
    def test_non_negative(self, city_sources, wind, default_config):
        grid = propagate(city_sources, wind, default_config)
        assert np.all(grid >= 0.0)

    def test_out_of_bounds_sources_ignored(self, default_config):
        sources = [
            EmissionSource("west-edge", -1, 3, "traffic", 100.0),
            EmissionSource("east-edge", 25, 0, "traffic", 100.0),
            EmissionSource("south-edge", 3, 30, "traffic", 100.0),
        ]
        grid = propagate(sources, WindDirection.EAST, default_config)
        assert np.all(grid == 0.0)

    def test_colocated_sources_take_maximum(self, small_config):
        sources = [
            EmissionSource("a", 4, 4, "traffic", 50.0),
            EmissionSource("b", 4, 4, "factory", 120.0),
        ]
        grid = propagate(sources, WindDirection.CALM, small_config)
        assert grid[4, 4] == pytest.approx(120.0)
        assert grid[4, 5] == pytest.approx(102.0)

    def test_calm_rotation_symmetry(self, center_source, default_config):
        """A centered source under calm wind is invariant under 90 degree rotation."""
        grid = propagate([center_source], WindDirection.CALM, default_config)
        np.testing.assert_allclose(np.rot90(grid), grid)
        np.testing.assert_allclose(np.rot90(grid, 2), grid)

    @pytest.mark.parametrize("wind", [
        WindDirection.NORTH, WindDirection.SOUTH, WindDirection.EAST, WindDirection.WEST,
    ])
    def test_downwind_neighbor_exceeds_upwind(self, center_source, wind, default_config):
        grid = propagate([center_source], wind, default_config)
        dx, dy = wind.offset
        downwind = grid[12 + dy, 12 + dx]
        upwind = grid[12 - dy, 12 - dx]
        assert downwind > upwind

    def test_east_wind_boosts_first_step(self, center_source, default_config):
        grid = propagate([center_source], WindDirection.EAST, default_config)
        assert grid[12, 13] == pytest.approx(250.0 * 0.85 * 1.5)

    def test_wind_changes_field(self, single_source, default_config):
        calm = propagate([single_source], WindDirection.CALM, default_config)
        windy = propagate([single_source], WindDirection.SOUTH, default_config)
        assert not np.allclose(calm, windy)

    @pytest.mark.parametrize("wind", ALL_WINDS)
    def test_monotonic_in_source_strength(self, wind, default_config):
        """Raising a source's rate never lowers any cell."""
        weak = [
            EmissionSource("a", 6, 6, "factory", 80.0),
            EmissionSource("b", 15, 10, "commercial", 120.0),
        ]
        strong = [
            EmissionSource("a", 6, 6, "factory", 160.0),
            EmissionSource("b", 15, 10, "commercial", 120.0),
        ]
        grid_weak = propagate(weak, wind, default_config)
        grid_strong = propagate(strong, wind, default_config)
        assert np.all(grid_strong >= grid_weak)

    def test_monotonic_in_source_count(self, city_sources, default_config):
        """Adding sources never lowers any cell."""
        fewer = propagate(city_sources[:10], WindDirection.WEST, default_config)
        more = propagate(city_sources, WindDirection.WEST, default_config)
        assert np.all(more >= fewer)

    def test_independent_of_source_order(self, city_sources, default_config):
        forward = propagate(city_sources, WindDirection.NORTH, default_config)
        backward = propagate(list(reversed(city_sources)), WindDirection.NORTH, default_config)
        np.testing.assert_allclose(forward, backward)

    def test_repeat_runs_identical(self, city_sources, default_config):
        first = propagate(city_sources, WindDirection.EAST, default_config)
        second = propagate(city_sources, WindDirection.EAST, default_config)
        np.testing.assert_array_equal(first, second)
        assert first is not second

    def test_small_grid(self, small_config):
        grid = propagate(
            [EmissionSource("s", 2, 2, "factory", 10.0)], WindDirection.CALM, small_config,
        )
        assert grid.shape == (9, 9)
        assert grid[2, 3] == pytest.approx(8.5)
        assert grid[2, 4] == pytest.approx(7.225)
