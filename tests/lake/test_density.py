import numpy as np
import pytest

pytestmark = pytest.mark.unit

from lakestrat.contracts import DomainError
from lakestrat.lake.density import water_density


def test_fresh_water_matches_standard_polynomial():
    t = np.array([0.0, 4.0, 10.0, 20.0, 30.0])
    expected = (999.842594 + 6.793952e-2 * t - 9.095290e-3 * t ** 2
                + 1.001685e-4 * t ** 3 - 1.120083e-6 * t ** 4 + 6.536336e-9 * t ** 5)

    np.testing.assert_allclose(water_density(t), expected, rtol=1e-9)


def test_scalar_input_returns_float():
    rho = water_density(25.0)

    assert isinstance(rho, float)
    assert rho == pytest.approx(997.048, abs=1e-3)


def test_density_maximum_near_four_degrees():
    t = np.linspace(0, 10, 1001)
    rho = water_density(t)

    assert t[np.argmax(rho)] == pytest.approx(3.98, abs=0.05)


def test_salinity_increases_density():
    assert water_density(15.0, salinity=5.0) > water_density(15.0)


def test_out_of_range_temperature_raises():
    with pytest.raises(DomainError, match="valid range"):
        water_density([10.0, 45.0])


def test_range_check_can_be_disabled():
    rho = water_density(45.0, valid_range=None)

    assert np.isfinite(rho)


def test_negative_salinity_raises():
    with pytest.raises(DomainError, match="salinity"):
        water_density(10.0, salinity=-1.0)


def test_nan_passes_through():
    rho = water_density([10.0, np.nan])

    assert np.isfinite(rho[0])
    assert np.isnan(rho[1])
