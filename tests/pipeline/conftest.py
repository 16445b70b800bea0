import numpy as np
import pandas as pd
import pytest
import xarray as xr


@pytest.fixture
def times():
    return pd.date_range("2024-07-01", periods=3, freq="D", name="time")


@pytest.fixture
def series_depths():
    return np.array([0.0, 2.0, 4.0, 6.0, 8.0, 10.0])


@pytest.fixture
def temperature_frame(times, series_depths):
    """Three daily summer profiles; the second has a failed sensor at 4 m."""
    values = np.array([
        [25.0, 24.0, 20.0, 12.0, 8.0, 7.0],
        [24.5, 24.0, np.nan, 13.0, 8.5, 7.2],
        [24.0, 23.5, 21.0, 14.0, 9.0, 7.5],
    ])
    return pd.DataFrame(values, index=times, columns=series_depths)


@pytest.fixture
def temperature_array(temperature_frame):
    """Same series as an xarray.DataArray with dims (time, depth)."""
    return xr.DataArray(
        temperature_frame.to_numpy(),
        dims=("time", "depth"),
        coords={"time": temperature_frame.index.values,
                "depth": temperature_frame.columns.to_numpy(dtype=float)},
    )


@pytest.fixture
def wind(times):
    return pd.Series([3.0, 6.0, 4.0], index=times)
