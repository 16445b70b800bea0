"""Thermocline and metalimnion detection from a single temperature profile.

Both searches run on the density gradient of the profile resampled to a fine
grid. Density (not temperature) is used so the same thresholds hold for warm
and cold stratification, including inverse winter stratification below 4 °C.

Linear resampling gives a constant gradient across each measured interval,
so consecutive fine intervals are grouped into runs of equal gradient before
peaks are searched; the thermocline is then placed inside the steepest run
by weighting its edges with the drop in gradient on either side. Metalimnion
bounds interpolate the cutoff crossing between run midpoints, so they are not
tied to measured depths.
"""

import logging
from typing import NamedTuple

import numpy as np
from scipy.signal import find_peaks

from lakestrat.contracts import assert_profile
from lakestrat.lake.density import water_density
from lakestrat.lake.interpolator import resample_profile

__all__ = ['Layer', 'thermocline_depth', 'metalimnion_depths', 'density_gradient']

logger = logging.getLogger(__name__)


class Layer(NamedTuple):
    """Depth interval [top, bottom] in meters."""
    top: float
    bottom: float


def density_gradient(temps, depths, resolution=0.1, density=water_density):
    """Density gradient d(rho)/dz on the fine grid.

    Density is computed at the measured depths, then resampled.

    Returns
    -------
    fine_depths : np.ndarray
        Fine grid nodes (n + 1).
    gradient : np.ndarray
        Gradient on each fine interval (n) [kg/m^3/m], positive when
        density increases with depth (stable).
    """
    temps, depths = assert_profile(temps, depths, min_points=2)
    rho = density(temps)
    fine_depths, fine_rho = resample_profile(rho, depths, resolution)
    return fine_depths, np.diff(fine_rho) / np.diff(fine_depths)


def _gradient_runs(gradient):
    """Group consecutive intervals with numerically equal gradient.

    Returns start (inclusive) and end (exclusive) interval indices of each
    run, and the run gradient values.
    """
    breaks = ~np.isclose(gradient[1:], gradient[:-1], rtol=1e-6, atol=1e-10)
    starts = np.concatenate(([0], np.nonzero(breaks)[0] + 1))
    ends = np.concatenate((starts[1:], [gradient.size]))
    values = np.array([gradient[s:e].mean() for s, e in zip(starts, ends)])
    return starts, ends, values


def _refine(fine_depths, starts, ends, values, k):
    """Depth of the gradient maximum inside run k.

    The gradient is modelled as rising linearly into the run from the run
    above and falling linearly out of it into the run below; the returned
    depth is where the two lines' slopes balance. Edge runs use the midpoint.
    """
    up = fine_depths[starts[k]]
    dn = fine_depths[ends[k]]
    if k == 0 or k == values.size - 1:
        return 0.5 * (up + dn)

    rise = values[k] - values[k - 1]
    fall = values[k] - values[k + 1]
    if rise <= 0 or fall <= 0:
        return 0.5 * (up + dn)

    weight = rise / (rise + fall)
    return float(dn * weight + up * (1.0 - weight))


def _locate_thermocline(temps, depths, seasonal, resolution, min_gradient,
                        peak_fraction, mixed_cutoff, density):
    """Thermocline depth plus the fine grid and gradient it was found on.

    Depth is nan when the column is mixed or has no stable gradient.
    """
    temps, depths = assert_profile(temps, depths, min_points=2)

    if np.ptp(temps) < mixed_cutoff:
        logger.debug("Thermocline: temperature range %.3f below mixed cutoff %.3f",
                     np.ptp(temps), mixed_cutoff)
        return np.nan, None, None

    fine_depths, gradient = density_gradient(temps, depths, resolution, density)
    starts, ends, values = _gradient_runs(gradient)

    k = int(np.argmax(values))
    if values[k] <= 0:
        logger.debug("Thermocline: no stable density gradient")
        return np.nan, fine_depths, gradient

    thermo = _refine(fine_depths, starts, ends, values, k)
    if not seasonal:
        return thermo, fine_depths, gradient

    cutoff = max(peak_fraction * values[k], min_gradient)
    peaks, _ = find_peaks(values, height=cutoff)
    if peaks.size == 0 or peaks[-1] <= k:
        return thermo, fine_depths, gradient

    seasonal_thermo = _refine(fine_depths, starts, ends, values, int(peaks[-1]))
    return max(seasonal_thermo, thermo), fine_depths, gradient


def thermocline_depth(temps, depths, seasonal=False, resolution=0.1,
                      min_gradient=0.1, peak_fraction=0.15, mixed_cutoff=1.0,
                      density=water_density):
    """Calculate the depth of the thermocline.

    Parameters
    ----------
    temps : array_like
        Water temperature [°C] at each depth.
    depths : array_like
        Measurement depths [m], strictly increasing.
    seasonal : bool, optional
        If True, return the seasonal thermocline: the deepest local gradient
        peak above the cutoff max(peak_fraction * max gradient, min_gradient),
        when it lies below the steepest gradient.
    resolution : float, optional
        Fine-grid step [m].
    min_gradient : float, optional
        Floor of the seasonal peak cutoff [kg/m^3/m].
    peak_fraction : float, optional
        Seasonal peak cutoff as a fraction of the maximum gradient.
    mixed_cutoff : float, optional
        Temperature range [°C] below which the column is considered mixed.
    density : callable, optional
        Temperature to density function.

    Returns
    -------
    float
        Thermocline depth [m], or nan if the column is not stratified.

    Examples
    --------
    >>> thermocline_depth([25, 24, 20, 12, 8, 7], [0, 2, 4, 6, 8, 10])
    4.58...
    """
    thermo, _, _ = _locate_thermocline(temps, depths, seasonal, resolution,
                                       min_gradient, peak_fraction,
                                       mixed_cutoff, density)
    return float(thermo)


def _crossing(centers, values, strong, weak, cutoff):
    """Depth where the gradient falls to cutoff between two adjacent runs.

    values[strong] >= cutoff > values[weak].
    """
    frac = (values[strong] - cutoff) / (values[strong] - values[weak])
    return float(centers[strong] + frac * (centers[weak] - centers[strong]))


def metalimnion_depths(temps, depths, seasonal=True, slope_fraction=0.1,
                       resolution=0.1, min_gradient=0.1, peak_fraction=0.15,
                       mixed_cutoff=1.0, density=water_density):
    """Calculate the top and bottom of the metalimnion.

    The cutoff is slope_fraction * max gradient. From the gradient run that
    holds the thermocline, the profile is scanned upward and downward for
    the first run whose gradient is below the cutoff. The bound is where the
    gradient, taken at the run midpoints and linearly interpolated between
    them, crosses the cutoff. Without such a run the bound is the shallowest
    or deepest measurement.

    Parameters
    ----------
    temps, depths : array_like
        Temperature profile.
    seasonal : bool, optional
        Anchor on the seasonal thermocline (default True).
    slope_fraction : float, optional
        Gradient cutoff as a fraction of the maximum gradient (default 0.1).
    resolution, min_gradient, peak_fraction, mixed_cutoff, density
        Passed to the thermocline search.

    Returns
    -------
    Layer
        (top, bottom) with top <= thermocline <= bottom, or (nan, nan) when
        there is no thermocline.
    """
    thermo, fine_depths, gradient = _locate_thermocline(
        temps, depths, seasonal, resolution, min_gradient, peak_fraction,
        mixed_cutoff, density,
    )
    if np.isnan(thermo):
        return Layer(np.nan, np.nan)

    starts, ends, values = _gradient_runs(gradient)
    centers = 0.5 * (fine_depths[starts] + fine_depths[ends])
    cutoff = slope_fraction * values.max()

    k = int(np.clip(np.searchsorted(fine_depths[ends], thermo, side="left"),
                    0, values.size - 1))
    weak = values < cutoff

    above = np.nonzero(weak[:k])[0]
    if above.size:
        top = _crossing(centers, values, above[-1] + 1, above[-1], cutoff)
    else:
        top = fine_depths[0]

    below = np.nonzero(weak[k + 1:])[0]
    if below.size:
        j = k + 1 + below[0]
        bottom = _crossing(centers, values, j - 1, j, cutoff)
    else:
        bottom = fine_depths[-1]

    return Layer(float(min(top, thermo)), float(max(bottom, thermo)))
