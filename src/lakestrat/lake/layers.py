"""Volume-weighted layer averages.

A layer average weights each sub-layer by its volume, so a shallow, wide
epilimnion dominates a narrow, deep hypolimnion of the same thickness.
"""

import logging

import numpy as np

from lakestrat.contracts import require, assert_profile, EmptyLayerError
from lakestrat.lake.bathymetry import Bathymetry
from lakestrat.lake.density import water_density

__all__ = ['layer_average', 'layer_temperature', 'layer_density']

logger = logging.getLogger(__name__)


def layer_average(values, depths, top: float, bottom: float,
                  bathymetry: Bathymetry, dz: float = 0.1) -> float:
    """Volume-weighted mean of a profile field between top and bottom.

    The layer is clipped to the measured depth range and to the bathymetry.
    The field is linearly interpolated onto a grid of bathymetry rows,
    measured depths and a dz sub-grid; each sub-layer contributes its mean
    value times its volume (trapezoid of the area).

    Parameters
    ----------
    values : array_like
        Field values (temperature, density, ...) at each depth.
    depths : array_like
        Measurement depths [m], strictly increasing.
    top, bottom : float
        Layer bounds [m].
    bathymetry : Bathymetry
        Lake hypsography.
    dz : float, optional
        Sub-grid step [m] (default 0.1).

    Returns
    -------
    float
        Volume-weighted mean of the field over the layer.

    Raises
    ------
    EmptyLayerError
        If bottom <= top, the layer does not overlap the measured range, or
        the clipped layer has zero volume.
    """
    values, depths = assert_profile(values, depths, min_points=1)

    require(bottom > top,
            f"Layer: bottom {bottom} must be below top {top}", EmptyLayerError)
    require(bottom >= depths[0] and top <= depths[-1],
            f"Layer: [{top}, {bottom}] outside measured range "
            f"[{depths[0]}, {depths[-1]}]", EmptyLayerError)

    upper = max(top, depths[0])
    lower = min(bottom, depths[-1], bathymetry.max_depth)
    require(lower > upper,
            f"Layer: [{top}, {bottom}] has no thickness inside the data",
            EmptyLayerError)

    grid = bathymetry.layer_grid(
        upper, lower, extra=np.concatenate((depths, np.arange(upper, lower, dz)))
    )
    area = bathymetry.area_at(grid)
    field = np.interp(grid, depths, values)

    # per sub-layer: trapezoid volume and mean value
    volume = 0.5 * (area[1:] + area[:-1]) * np.diff(grid)
    mid_value = 0.5 * (field[1:] + field[:-1])

    total = volume.sum()
    require(total > 0,
            f"Layer: [{upper}, {lower}] has zero volume", EmptyLayerError)

    # a constant field returns the constant exactly
    if np.ptp(values) == 0:
        return float(values[0])
    return float(np.average(mid_value, weights=volume))


def layer_temperature(temps, depths, top, bottom, bathymetry, dz=0.1) -> float:
    """Volume-weighted mean temperature [°C] of a layer."""
    return layer_average(temps, depths, top, bottom, bathymetry, dz)


def layer_density(temps, depths, top, bottom, bathymetry, dz=0.1,
                  density=water_density) -> float:
    """Volume-weighted mean density [kg/m^3] of a layer.

    Density is computed at the measured depths, then averaged.
    """
    temps, depths = assert_profile(temps, depths, min_points=1)
    return layer_average(density(temps), depths, top, bottom, bathymetry, dz)
