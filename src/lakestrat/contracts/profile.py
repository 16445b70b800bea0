"""Depth profile and bathymetry contracts.

Enforce the structural guarantees every per-profile algorithm relies on:
1-D, equal length, finite, depths strictly increasing and non-negative.
"""

import numpy as np

from lakestrat.contracts.base import require
from lakestrat.contracts.failure import InvalidInputError


def assert_profile(values, depths, min_points: int = 2):
    """Validate a depth profile and return it as float arrays.

    Parameters
    ----------
    values : array_like
        Measurements (temperature, density, ...) at each depth.
    depths : array_like
        Depths in meters, positive downward.
    min_points : int, optional
        Minimum number of points required (default 2).

    Returns
    -------
    values, depths : np.ndarray
        Float copies of the inputs.

    Raises
    ------
    InvalidInputError
        If any structural requirement is violated.
    """
    values = np.asarray(values, dtype=float)
    depths = np.asarray(depths, dtype=float)

    require(values.ndim == 1 and depths.ndim == 1,
            f"Profile: expected 1-D arrays, got {values.ndim}-D values "
            f"and {depths.ndim}-D depths", InvalidInputError)
    require(values.size == depths.size,
            f"Profile: {values.size} values for {depths.size} depths",
            InvalidInputError)
    require(values.size >= min_points,
            f"Profile: need at least {min_points} points, got {values.size}",
            InvalidInputError)
    require(np.all(np.isfinite(values)) and np.all(np.isfinite(depths)),
            "Profile: non-finite values or depths", InvalidInputError)
    require(depths[0] >= 0,
            f"Profile: depths must be >= 0, got {depths[0]}", InvalidInputError)
    require(np.all(np.diff(depths) > 0),
            "Profile: depths must be strictly increasing", InvalidInputError)

    return values, depths


def assert_bathymetry(depths, areas):
    """Validate a bathymetry table and return it as float arrays.

    Depths must start at the surface (0 m) and increase strictly; areas must
    be non-negative and non-increasing, with a positive surface area.

    Raises
    ------
    InvalidInputError
        If any structural requirement is violated.
    """
    areas, depths = assert_profile(areas, depths, min_points=2)

    require(depths[0] == 0,
            f"Bathymetry: first depth must be 0 (surface), got {depths[0]}",
            InvalidInputError)
    require(areas[0] > 0,
            "Bathymetry: surface area must be positive", InvalidInputError)
    require(np.all(areas >= 0),
            "Bathymetry: areas must be non-negative", InvalidInputError)
    require(np.all(np.diff(areas) <= 0),
            "Bathymetry: areas must be non-increasing with depth",
            InvalidInputError)

    return depths, areas
