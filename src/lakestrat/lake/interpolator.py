"""Resample and extend depth profiles.

Sparse measurements (thermistor chains, CTD casts averaged to fixed depths)
are resampled onto a fine grid so that gradient and extremum searches are
not limited to the raw sampling.
"""

import numpy as np

from lakestrat.contracts import require, assert_profile, InvalidInputError

__all__ = ['resample_profile', 'extend_profile', 'fine_grid']


def fine_grid(depths, resolution: float = 0.1) -> np.ndarray:
    """Regular grid over [min(depths), max(depths)] that keeps every measured depth.

    Keeping the measured depths as nodes means no fine interval straddles a
    measurement, so the linear model has a constant gradient per interval.
    """
    require(resolution > 0,
            f"Interpolator: resolution must be positive, got {resolution}",
            InvalidInputError)
    depths = np.asarray(depths, dtype=float)
    n_steps = int(np.floor((depths[-1] - depths[0]) / resolution)) + 1
    regular = depths[0] + resolution * np.arange(n_steps)
    # drop regular nodes that only differ from a measured depth by rounding
    gap = np.min(np.abs(regular[:, None] - depths[None, :]), axis=1)
    regular = regular[gap > resolution * 1e-6]
    return np.union1d(regular[regular < depths[-1]], depths)


def resample_profile(values, depths, resolution: float = 0.1):
    """Linearly resample a profile onto a fine depth grid.

    Parameters
    ----------
    values : array_like
        Measured values.
    depths : array_like
        Measured depths [m], strictly increasing.
    resolution : float, optional
        Grid step [m] (default 0.1).

    Returns
    -------
    fine_depths, fine_values : np.ndarray
        Resampled profile spanning [min(depths), max(depths)]. No
        extrapolation beyond the measured range.

    Raises
    ------
    InvalidInputError
        If the profile is malformed or resolution is not positive.
    """
    values, depths = assert_profile(values, depths, min_points=2)
    grid = fine_grid(depths, resolution)
    return grid, np.interp(grid, depths, values)


def extend_profile(values, depths, top: float, bottom: float):
    """Pad a profile with its end values so that it spans [top, bottom].

    Points outside [top, bottom] are dropped and the bounds become nodes,
    interpolated when they fall inside the measured range.

    Returns
    -------
    depths, values : np.ndarray
        Extended profile.
    """
    values, depths = assert_profile(values, depths, min_points=1)
    require(bottom > top,
            f"Interpolator: bottom {bottom} must be below top {top}",
            InvalidInputError)

    inside = (depths > top) & (depths < bottom)
    out_depths = np.concatenate(([top], depths[inside], [bottom]))
    # np.interp holds the end values constant outside the measured range
    out_values = np.interp(out_depths, depths, values)
    return out_depths, out_values
