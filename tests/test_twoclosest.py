"""Tests for firijax.profiles.twoclosest."""

import jax.numpy as jnp
import pytest

from firijax.constants import CHI_VALUES, LAT_VALUES
from firijax.profiles import twoclosest


class TestOnGrid:
    @pytest.mark.parametrize("v", CHI_VALUES)
    def test_grid_value_is_degenerate(self, v):
        assert twoclosest(CHI_VALUES, v) == (v, v)

    @pytest.mark.parametrize("v", LAT_VALUES)
    def test_lat_grid_value_is_degenerate(self, v):
        assert twoclosest(LAT_VALUES, v) == (v, v)

    def test_duplicates_ignored(self):
        """Header columns repeat each grid value many times."""
        column = jnp.array([0.0, 30.0, 0.0, 30.0, 60.0, 60.0])
        assert twoclosest(column, 30.0) == (30.0, 30.0)
        assert twoclosest(column, 40.0) == (30.0, 60.0)


class TestInterpolating:
    def test_firi_chi_examples(self):
        assert twoclosest(CHI_VALUES, 90) == (90, 90)
        assert twoclosest(CHI_VALUES, 89) == (85, 90)

    @pytest.mark.parametrize("v", [0.5, 14.9, 29.999, 31.0, 77.0, 99.0, 101.0, 129.0])
    def test_straddles_target(self, v):
        low, high = twoclosest(CHI_VALUES, v)
        assert low < v < high
        assert low in CHI_VALUES and high in CHI_VALUES

    def test_uneven_spacing(self):
        assert twoclosest(CHI_VALUES, 92) == (90, 95)
        assert twoclosest(CHI_VALUES, 88) == (85, 90)

    def test_asymmetric_spacing(self):
        """Both nearest values can lie on the same side; the bracket must not."""
        grid = [0.0, 10.0, 11.0, 100.0]
        assert twoclosest(grid, 12.0) == (11.0, 100.0)

    def test_sorted_ascending(self):
        low, high = twoclosest([60.0, 0.0, 30.0], 40.0)
        assert (low, high) == (30.0, 60.0)


class TestExtrapolating:
    def test_above_grid(self):
        assert twoclosest(CHI_VALUES, 135) == (100, 130)

    def test_far_above_grid(self):
        assert twoclosest(LAT_VALUES, 82.3) == (45, 60)

    def test_below_grid(self):
        assert twoclosest([10.0, 20.0, 40.0], 5.0) == (10.0, 20.0)

    def test_does_not_straddle(self):
        low, high = twoclosest(LAT_VALUES, 70.0)
        assert low < high < 70.0


class TestErrors:
    def test_single_value_grid_raises(self):
        with pytest.raises(ValueError, match="two distinct"):
            twoclosest([30.0, 30.0], 40.0)

    def test_single_value_grid_on_value(self):
        assert twoclosest([30.0, 30.0], 30.0) == (30.0, 30.0)
