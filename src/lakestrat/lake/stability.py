"""Water-column stability indices.

Schmidt stability, buoyancy frequency and center of buoyancy describe how
strongly a single profile is stratified. Friction velocity, Lake Number and
Wedderburn Number compare that stratification with wind forcing.

References
----------
Hicks, B.B. (1972): drag coefficient regimes.
Fischer, H.B. et al. (1979): log wind profile correction.
Imberger, J. & Patterson, J.C. (1990): Lake and Wedderburn Numbers.
Read, J.S. et al. (2011): Lake Analyzer formulations.
"""

import logging
from typing import NamedTuple

import numpy as np
from scipy.integrate import trapezoid

from lakestrat.contracts import (
    require,
    assert_profile,
    DomainError,
    UndefinedIndexError,
)
from lakestrat.lake.bathymetry import Bathymetry
from lakestrat.lake.density import water_density
from lakestrat.lake.interpolator import extend_profile
from lakestrat.lake.stratification import metalimnion_depths

__all__ = [
    'GRAVITY',
    'REFERENCE_HEIGHT',
    'BuoyancyProfile',
    'schmidt_stability',
    'buoyancy_frequency',
    'metalimnion_buoyancy_frequency',
    'center_of_buoyancy',
    'u_star',
    'lake_number',
    'wedderburn_number',
]

logger = logging.getLogger(__name__)

GRAVITY = 9.81  # m/s^2
REFERENCE_HEIGHT = 10.0  # wind reference height, m


class BuoyancyProfile(NamedTuple):
    """Squared buoyancy frequency at midpoints between measured depths."""
    depths: np.ndarray
    n2: np.ndarray


def schmidt_stability(temps, depths, bathymetry: Bathymetry, dz=0.1,
                      density=water_density) -> float:
    """Calculate Schmidt stability of the water column.

    The profile is extended with its end values to cover the whole basin
    [0, max_depth] and integrated on the bathymetry rows refined to a dz grid:

        St = g / A0 * integral((z - z_cv) (rho(z) - rho_mean) A(z) dz)

    where rho_mean is the volume-weighted mean density and z_cv the center of
    volume evaluated on the same grid.

    Parameters
    ----------
    temps : array_like
        Water temperature [°C].
    depths : array_like
        Measurement depths [m], strictly increasing.
    bathymetry : Bathymetry
        Lake hypsography.
    dz : float, optional
        Integration step [m] (default 0.1).
    density : callable, optional
        Temperature to density function.

    Returns
    -------
    float
        Schmidt stability [J/m^2]. Exactly 0 for a constant-density column.
    """
    temps, depths = assert_profile(temps, depths, min_points=1)
    require(dz > 0, f"Schmidt: dz must be positive, got {dz}", DomainError)

    rho = density(temps)
    if np.ptp(rho) == 0:
        return 0.0

    ext_depths, ext_rho = extend_profile(rho, depths, 0.0, bathymetry.max_depth)
    grid = bathymetry.layer_grid(
        0.0, bathymetry.max_depth,
        extra=np.concatenate((ext_depths, np.arange(0.0, bathymetry.max_depth, dz))),
    )
    area = bathymetry.area_at(grid)
    rho_grid = np.interp(grid, ext_depths, ext_rho)

    volume = trapezoid(area, grid)
    z_cv = trapezoid(grid * area, grid) / volume
    rho_mean = trapezoid(rho_grid * area, grid) / volume

    st = GRAVITY / bathymetry.surface_area * trapezoid(
        (grid - z_cv) * (rho_grid - rho_mean) * area, grid
    )
    return float(st)


def buoyancy_frequency(temps, depths, density=water_density) -> BuoyancyProfile:
    """Calculate the squared buoyancy (Brunt-Väisälä) frequency profile.

    N^2 = g / rho_i * (rho_{i+1} - rho_i) / (z_{i+1} - z_i), placed at the
    midpoint of each measured interval. Positive for stable stratification.

    Returns
    -------
    BuoyancyProfile
        (depths, n2) with one entry per measured interval [1/s^2].
    """
    temps, depths = assert_profile(temps, depths, min_points=2)
    rho = density(temps)
    n2 = GRAVITY / rho[:-1] * np.diff(rho) / np.diff(depths)
    mid = 0.5 * (depths[1:] + depths[:-1])
    return BuoyancyProfile(mid, n2)


def metalimnion_buoyancy_frequency(temps, depths, slope_fraction=0.1,
                                   resolution=0.1, min_gradient=0.1,
                                   peak_fraction=0.15, mixed_cutoff=1.0,
                                   density=water_density) -> float:
    """Bulk squared buoyancy frequency across the seasonal metalimnion.

    N^2 = g / rho_mean * (rho(bottom) - rho(top)) / (bottom - top)

    Raises
    ------
    UndefinedIndexError
        If there is no metalimnion or it has zero thickness.
    """
    temps, depths = assert_profile(temps, depths, min_points=2)
    top, bottom = metalimnion_depths(
        temps, depths, seasonal=True, slope_fraction=slope_fraction,
        resolution=resolution, min_gradient=min_gradient,
        peak_fraction=peak_fraction, mixed_cutoff=mixed_cutoff, density=density,
    )
    require(np.isfinite(top) and np.isfinite(bottom),
            "Buoyancy: no metalimnion in profile", UndefinedIndexError)
    require(bottom > top,
            f"Buoyancy: metalimnion [{top}, {bottom}] has zero thickness",
            UndefinedIndexError)

    rho_top, rho_bottom = np.interp([top, bottom], depths, density(temps))
    rho_mean = 0.5 * (rho_top + rho_bottom)
    return float(GRAVITY / rho_mean * (rho_bottom - rho_top) / (bottom - top))


def center_of_buoyancy(temps, depths, density=water_density) -> float:
    """N^2-weighted mean depth of the stably stratified intervals.

    Returns
    -------
    float
        Depth [m], or nan when no interval has positive N^2.
    """
    mid, n2 = buoyancy_frequency(temps, depths, density)
    stable = n2 > 0
    if not np.any(stable):
        return np.nan
    return float(np.sum(mid[stable] * n2[stable]) / np.sum(n2[stable]))


def u_star(wind_speed, wind_height, epilimnion_density, air_density=1.2,
           von_karman=0.4, drag_low=0.001, drag_high=0.0015,
           drag_threshold=5.0) -> float:
    """Calculate water-side friction velocity from wind speed.

    The drag coefficient is drag_low below drag_threshold [m/s] and drag_high
    otherwise. Wind measured at wind_height is corrected to the 10 m
    reference height with the neutral log profile

        u10 = u / (1 - sqrt(C_D) / kappa * ln(10 / h))

    and u* = sqrt(rho_air * C_D * u10^2 / rho_epi).

    Parameters
    ----------
    wind_speed : float
        Wind speed [m/s] at wind_height.
    wind_height : float
        Anemometer height above the water [m].
    epilimnion_density : float
        Mean density of the surface mixed layer [kg/m^3].

    Returns
    -------
    float
        Friction velocity [m/s]; positive for any positive wind speed.

    Raises
    ------
    DomainError
        On negative or non-finite wind, non-positive height or density, or
        when the log correction is not positive.

    Examples
    --------
    >>> round(u_star(3.0, 2.0, 997.0), 5)
    0.00377
    """
    require(np.isfinite(wind_speed) and wind_speed >= 0,
            f"uStar: wind speed must be finite and non-negative, got {wind_speed}",
            DomainError)
    require(wind_height > 0,
            f"uStar: wind height must be positive, got {wind_height}", DomainError)
    require(np.isfinite(epilimnion_density) and epilimnion_density > 0,
            f"uStar: epilimnion density must be positive, got {epilimnion_density}",
            DomainError)

    drag = drag_low if wind_speed < drag_threshold else drag_high
    correction = 1.0 - np.sqrt(drag) / von_karman * np.log(REFERENCE_HEIGHT / wind_height)
    require(correction > 0,
            f"uStar: log wind correction not positive at height {wind_height} m",
            DomainError)

    u10 = wind_speed / correction
    tau = air_density * drag * u10 ** 2
    return float(np.sqrt(tau / epilimnion_density))


def lake_number(bathymetry: Bathymetry, u_star, schmidt, meta_top, meta_bottom,
                hypolimnion_density, dz=0.1) -> float:
    """Calculate the Lake Number.

    Ln = g * St_uC * (meta_top + meta_bottom)
         / (2 * rho_hypo * u*^2 * A0^(3/2) * z_cv)

    with St_uC = St * A0 / g the uncorrected Schmidt stability and z_cv the
    basin center of volume, evaluated with the same dz step as St.

    Raises
    ------
    UndefinedIndexError
        When St <= 0, u* == 0, any input is nan, or meta_top >= meta_bottom.
    DomainError
        On non-positive hypolimnion density or negative u*.
    """
    values = (u_star, schmidt, meta_top, meta_bottom, hypolimnion_density)
    require(bool(np.all(np.isfinite(values))),
            "Lake Number: undefined for nan inputs", UndefinedIndexError)
    require(u_star >= 0, f"Lake Number: negative u* {u_star}", DomainError)
    require(hypolimnion_density > 0,
            f"Lake Number: hypolimnion density must be positive, got "
            f"{hypolimnion_density}", DomainError)
    require(meta_top < meta_bottom,
            f"Lake Number: degenerate metalimnion [{meta_top}, {meta_bottom}]",
            UndefinedIndexError)
    require(schmidt > 0,
            f"Lake Number: undefined for Schmidt stability {schmidt}",
            UndefinedIndexError)
    require(u_star > 0, "Lake Number: undefined without wind stress",
            UndefinedIndexError)

    area0 = bathymetry.surface_area
    z_cv = bathymetry.center_of_volume(dz)
    st_uc = schmidt * area0 / GRAVITY
    ln = (GRAVITY * st_uc * (meta_top + meta_bottom)
          / (2 * hypolimnion_density * u_star ** 2 * area0 ** 1.5 * z_cv))
    return float(ln)


def wedderburn_number(delta_rho, meta_top, u_star, hypolimnion_density,
                      lake_length) -> float:
    """Calculate the Wedderburn Number.

    W = g * delta_rho * h^2 / (rho_hypo * u*^2 * L)

    Parameters
    ----------
    delta_rho : float
        Hypolimnion minus epilimnion density [kg/m^3].
    meta_top : float
        Depth of the metalimnion top, i.e. mixed layer thickness h [m].
    u_star : float
        Friction velocity [m/s].
    hypolimnion_density : float
        Density of the hypolimnion [kg/m^3].
    lake_length : float
        Lake fetch length L [m].

    Raises
    ------
    UndefinedIndexError
        On nan inputs or u* == 0.
    DomainError
        On non-positive lake length or density, or negative u*.
    """
    values = (delta_rho, meta_top, u_star, hypolimnion_density, lake_length)
    require(bool(np.all(np.isfinite(values))),
            "Wedderburn: undefined for nan inputs", UndefinedIndexError)
    require(lake_length > 0,
            f"Wedderburn: lake length must be positive, got {lake_length}",
            DomainError)
    require(hypolimnion_density > 0,
            f"Wedderburn: hypolimnion density must be positive, got "
            f"{hypolimnion_density}", DomainError)
    require(u_star >= 0, f"Wedderburn: negative u* {u_star}", DomainError)
    require(u_star > 0, "Wedderburn: undefined without wind stress",
            UndefinedIndexError)

    return float(GRAVITY * delta_rho * meta_top ** 2
                 / (hypolimnion_density * u_star ** 2 * lake_length))
