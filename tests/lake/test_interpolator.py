import numpy as np
import pytest

pytestmark = pytest.mark.unit

from lakestrat.contracts import InvalidInputError
from lakestrat.lake.interpolator import fine_grid, resample_profile, extend_profile


class TestFineGrid:

    def test_keeps_measured_depths(self):
        depths = np.array([0.0, 0.75, 2.0, 3.3])
        grid = fine_grid(depths, 0.5)

        assert np.all(np.isin(depths, grid))
        assert grid[0] == 0.0 and grid[-1] == 3.3
        assert np.all(np.diff(grid) > 0)

    def test_no_near_duplicate_nodes(self):
        # 0.1 * 3 is not exactly 0.3 in floating point
        grid = fine_grid(np.array([0.0, 0.3, 1.0]), 0.1)

        assert np.min(np.diff(grid)) > 0.05

    def test_nonpositive_resolution_raises(self):
        with pytest.raises(InvalidInputError, match="resolution"):
            fine_grid(np.array([0.0, 1.0]), 0.0)


class TestResampleProfile:

    def test_linear_values_reproduced(self):
        grid, values = resample_profile([10.0, 20.0], [0.0, 10.0], 0.5)

        assert grid.size == 21
        np.testing.assert_allclose(values, 10.0 + grid)

    def test_no_extrapolation(self, summer_temps):
        depths = np.array([1.0, 2.0, 4.0, 6.0, 8.0, 9.0])
        grid, _ = resample_profile(summer_temps, depths)

        assert grid[0] == 1.0
        assert grid[-1] == 9.0

    def test_rejects_unsorted_depths(self):
        with pytest.raises(InvalidInputError, match="increasing"):
            resample_profile([1, 2, 3], [0, 2, 1])

    def test_rejects_single_point(self):
        with pytest.raises(InvalidInputError, match="at least 2"):
            resample_profile([1.0], [0.0])


class TestExtendProfile:

    def test_pads_with_end_values(self):
        depths, values = extend_profile([20.0, 10.0], [2.0, 6.0], 0.0, 10.0)

        np.testing.assert_allclose(depths, [0.0, 2.0, 6.0, 10.0])
        np.testing.assert_allclose(values, [20.0, 20.0, 10.0, 10.0])

    def test_drops_points_outside(self):
        depths, values = extend_profile([20.0, 15.0, 10.0], [0.0, 4.0, 8.0], 0.0, 6.0)

        np.testing.assert_allclose(depths, [0.0, 4.0, 6.0])
        np.testing.assert_allclose(values, [20.0, 15.0, 12.5])
