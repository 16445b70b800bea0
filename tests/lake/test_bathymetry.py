import numpy as np
import pytest

pytestmark = pytest.mark.unit

from lakestrat.contracts import InvalidInputError, OutOfRangeError, EmptyLayerError
from lakestrat.lake.bathymetry import Bathymetry


class TestBathymetryConstruction:
    """Table validation."""

    def test_valid_table(self, cone_bathymetry):
        assert cone_bathymetry.max_depth == 10.0
        assert cone_bathymetry.surface_area == 1e6

    def test_must_start_at_surface(self):
        with pytest.raises(InvalidInputError):
            Bathymetry([1, 5], [1e5, 1e4])

    def test_depths_must_increase(self):
        with pytest.raises(InvalidInputError):
            Bathymetry([0, 5, 5], [1e5, 5e4, 1e4])

    def test_areas_must_not_increase(self):
        with pytest.raises(InvalidInputError):
            Bathymetry([0, 5, 10], [1e5, 2e5, 1e4])

    def test_zero_surface_area_rejected(self):
        with pytest.raises(InvalidInputError):
            Bathymetry([0, 5], [0, 0])

    def test_length_mismatch_rejected(self):
        with pytest.raises(InvalidInputError):
            Bathymetry([0, 5, 10], [1e5, 1e4])

    def test_is_immutable(self, cone_bathymetry):
        with pytest.raises(AttributeError):
            cone_bathymetry.foo = 1
        with pytest.raises(ValueError):
            cone_bathymetry.areas[0] = 0.0


class TestBathymetryQueries:
    """Area interpolation and volume integration."""

    def test_area_at_interpolates(self, cone_bathymetry):
        assert cone_bathymetry.area_at(1.0) == pytest.approx(9e5)
        np.testing.assert_allclose(cone_bathymetry.area_at([0, 3, 10]), [1e6, 7e5, 0])

    def test_area_at_outside_range_raises(self, cone_bathymetry):
        with pytest.raises(OutOfRangeError):
            cone_bathymetry.area_at(10.5)
        with pytest.raises(OutOfRangeError):
            cone_bathymetry.area_at(-0.1)

    def test_volume_of_box(self, box_bathymetry):
        assert box_bathymetry.volume_between(2, 7) == pytest.approx(5e5)
        assert box_bathymetry.total_volume == pytest.approx(1e6)

    def test_volume_of_cone_is_exact(self, cone_bathymetry):
        # linear area from 1e6 to 0 over 10 m
        assert cone_bathymetry.total_volume == pytest.approx(5e6)
        assert cone_bathymetry.volume_between(1, 3) == pytest.approx(2 * 8e5)

    def test_zero_thickness_layer_has_zero_volume(self, cone_bathymetry):
        assert cone_bathymetry.volume_between(4, 4) == 0.0

    def test_inverted_layer_raises(self, cone_bathymetry):
        with pytest.raises(EmptyLayerError):
            cone_bathymetry.volume_between(5, 4)

    def test_center_of_volume(self, box_bathymetry, cone_bathymetry):
        assert box_bathymetry.center_of_volume() == pytest.approx(5.0)
        # cone: integral z (1 - z/10) / integral (1 - z/10) over [0, 10]
        assert cone_bathymetry.center_of_volume() == pytest.approx(10 / 3, rel=1e-3)

    def test_characteristic_length(self, box_bathymetry):
        assert box_bathymetry.characteristic_length == pytest.approx(np.sqrt(1e5))
