# src/lakestrat/lake/analyzer.py
"""Config-bound analysis of a single temperature profile.

ProfileAnalyzer binds an InternalConfig (and optionally a Bathymetry) to the
pure functions of :mod:`lakestrat.lake` and composes them into the
quantities that need more than one step: epilimnion and hypolimnion
densities, friction velocity from a profile, Lake Number and Wedderburn
Number from a profile plus a wind speed.

Layer conventions:
- epilimnion  = [shallowest measurement, metalimnion top]
- hypolimnion = [metalimnion bottom, deepest measurement]
- a layer with zero thickness (bound at a profile end) takes the end-point
  density
- without a thermocline the whole column is treated as epilimnion
"""

import logging
from functools import partial
from typing import TYPE_CHECKING, Optional

import numpy as np

from lakestrat.contracts import (
    require,
    assert_profile,
    InvalidInputError,
    UndefinedIndexError,
)
from lakestrat.lake import stability, stratification
from lakestrat.lake.bathymetry import Bathymetry
from lakestrat.lake.density import water_density
from lakestrat.lake.layers import layer_average
from lakestrat.lake.stratification import Layer

if TYPE_CHECKING:
    from lakestrat.schemas import InternalConfig

__all__ = ['ProfileAnalyzer']

logger = logging.getLogger(__name__)


class ProfileAnalyzer:
    """Compute stratification and stability indices for one profile.

    Stateless after construction; a single instance may be shared across
    worker threads.

    Parameters
    ----------
    config : InternalConfig
        Fully validated runtime configuration.
    bathymetry : Bathymetry, optional
        Lake hypsography. Required for layer averages, Schmidt stability,
        Lake Number and Wedderburn Number.

    Examples
    --------
    >>> from lakestrat.schemas import resolve_config
    >>> analyzer = ProfileAnalyzer(resolve_config(), Bathymetry([0, 10], [1e6, 0]))
    >>> analyzer.thermocline_depth([25, 24, 20, 12, 8, 7], [0, 2, 4, 6, 8, 10])
    4.58...
    """

    def __init__(self, config: "InternalConfig", bathymetry: Optional[Bathymetry] = None):
        self.config = config
        self.bathymetry = bathymetry

        valid_range = None
        if config.density.check_range:
            valid_range = (config.density.min_temperature, config.density.max_temperature)
        self._density = partial(water_density, salinity=config.density.salinity,
                                valid_range=valid_range)

        self.resolution = config.interpolation.resolution
        self.dz = config.integration.dz
        self.lake_length = config.lake.lake_length

        logger.debug("ProfileAnalyzer: resolution=%.3f m, dz=%.3f m, salinity=%.2f, bathymetry=%s",
                     self.resolution, self.dz, config.density.salinity, bathymetry)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require_bathymetry(self) -> Bathymetry:
        require(self.bathymetry is not None,
                "ProfileAnalyzer: bathymetry is required for this index",
                InvalidInputError)
        return self.bathymetry

    def _detector_options(self):
        thermo = self.config.thermocline
        return dict(resolution=self.resolution,
                    min_gradient=thermo.min_gradient,
                    peak_fraction=thermo.peak_fraction,
                    mixed_cutoff=thermo.mixed_cutoff,
                    density=self._density)

    def _layer_density(self, temps, depths, top, bottom):
        """Layer density, or the end-point density for a zero-thickness layer."""
        if bottom <= top:
            rho = self._density(temps)
            return float(np.interp(top, depths, rho))
        return layer_average(self._density(temps), depths, top, bottom,
                             self._require_bathymetry(), self.dz)

    # ------------------------------------------------------------------
    # Single-step indices
    # ------------------------------------------------------------------

    def density(self, temps):
        """Water density [kg/m^3] with the configured salinity and range check."""
        return self._density(temps)

    def thermocline_depth(self, temps, depths, seasonal: Optional[bool] = None) -> float:
        """Thermocline depth [m], or nan if the column is not stratified."""
        if seasonal is None:
            seasonal = self.config.thermocline.seasonal
        return stratification.thermocline_depth(temps, depths, seasonal=seasonal,
                                                **self._detector_options())

    def metalimnion_depths(self, temps, depths, seasonal: Optional[bool] = None) -> Layer:
        """Metalimnion (top, bottom) [m], or (nan, nan)."""
        if seasonal is None:
            seasonal = self.config.metalimnion.seasonal
        return stratification.metalimnion_depths(
            temps, depths, seasonal=seasonal,
            slope_fraction=self.config.metalimnion.slope_fraction,
            **self._detector_options(),
        )

    def layer_temperature(self, temps, depths, top, bottom) -> float:
        """Volume-weighted mean temperature [°C] of [top, bottom]."""
        return layer_average(temps, depths, top, bottom,
                             self._require_bathymetry(), self.dz)

    def layer_density(self, temps, depths, top, bottom) -> float:
        """Volume-weighted mean density [kg/m^3] of [top, bottom]."""
        temps, depths = assert_profile(temps, depths, min_points=1)
        return layer_average(self._density(temps), depths, top, bottom,
                             self._require_bathymetry(), self.dz)

    def schmidt_stability(self, temps, depths) -> float:
        """Schmidt stability [J/m^2] over the whole basin."""
        return stability.schmidt_stability(temps, depths, self._require_bathymetry(),
                                           dz=self.dz, density=self._density)

    def buoyancy_frequency(self, temps, depths) -> stability.BuoyancyProfile:
        """N^2 profile [1/s^2] at midpoints between measured depths."""
        return stability.buoyancy_frequency(temps, depths, density=self._density)

    def metalimnion_buoyancy_frequency(self, temps, depths) -> float:
        """Bulk N^2 [1/s^2] across the seasonal metalimnion."""
        return stability.metalimnion_buoyancy_frequency(
            temps, depths, slope_fraction=self.config.metalimnion.slope_fraction,
            **self._detector_options(),
        )

    def center_of_buoyancy(self, temps, depths) -> float:
        """N^2-weighted mean depth [m], or nan without stable intervals."""
        return stability.center_of_buoyancy(temps, depths, density=self._density)

    # ------------------------------------------------------------------
    # Composite indices
    # ------------------------------------------------------------------

    def _seasonal_layer(self, temps, depths) -> Layer:
        return self.metalimnion_depths(temps, depths, seasonal=True)

    def _require_layer(self, layer: Layer, index: str) -> Layer:
        require(not (np.isnan(layer.top) or np.isnan(layer.bottom)),
                f"ProfileAnalyzer: {index} undefined without a metalimnion",
                UndefinedIndexError)
        return layer

    def _epilimnion_density(self, temps, depths, layer: Layer) -> float:
        if np.isnan(layer.top):
            return self._layer_density(temps, depths, depths[0], depths[-1])
        return self._layer_density(temps, depths, depths[0], layer.top)

    def _hypolimnion_density(self, temps, depths, layer: Layer) -> float:
        require(not np.isnan(layer.bottom),
                "ProfileAnalyzer: no hypolimnion without a thermocline",
                UndefinedIndexError)
        return self._layer_density(temps, depths, layer.bottom, depths[-1])

    def _u_star(self, wind_speed, epilimnion_density) -> float:
        wind = self.config.wind
        return stability.u_star(
            wind_speed, wind.height, epilimnion_density,
            air_density=wind.air_density, von_karman=wind.von_karman,
            drag_low=wind.drag_low, drag_high=wind.drag_high,
            drag_threshold=wind.drag_threshold,
        )

    def epilimnion_density(self, temps, depths) -> float:
        """Mean density of the surface mixed layer [kg/m^3].

        Uses the seasonal metalimnion top; the whole column when there is no
        thermocline.
        """
        temps, depths = assert_profile(temps, depths, min_points=2)
        return self._epilimnion_density(temps, depths, self._seasonal_layer(temps, depths))

    def hypolimnion_density(self, temps, depths) -> float:
        """Mean density of the bottom layer [kg/m^3].

        Raises
        ------
        UndefinedIndexError
            If the profile has no thermocline.
        """
        temps, depths = assert_profile(temps, depths, min_points=2)
        return self._hypolimnion_density(temps, depths, self._seasonal_layer(temps, depths))

    def u_star(self, temps, depths, wind_speed) -> float:
        """Friction velocity [m/s] for the profile's epilimnion and a wind speed."""
        return self._u_star(wind_speed, self.epilimnion_density(temps, depths))

    def lake_number(self, temps, depths, wind_speed) -> float:
        """Lake Number for the profile and a wind speed.

        Raises
        ------
        UndefinedIndexError
            Without a metalimnion, stability or wind stress.
        """
        bathymetry = self._require_bathymetry()
        temps, depths = assert_profile(temps, depths, min_points=2)
        layer = self._require_layer(self._seasonal_layer(temps, depths), "Lake Number")

        rho_epi = self._epilimnion_density(temps, depths, layer)
        return stability.lake_number(
            bathymetry,
            self._u_star(wind_speed, rho_epi),
            self.schmidt_stability(temps, depths),
            layer.top, layer.bottom,
            self._hypolimnion_density(temps, depths, layer),
            dz=self.dz,
        )

    def wedderburn_number(self, temps, depths, wind_speed) -> float:
        """Wedderburn Number for the profile and a wind speed.

        The fetch length is the configured lake_length, or sqrt(surface area).
        """
        bathymetry = self._require_bathymetry()
        temps, depths = assert_profile(temps, depths, min_points=2)
        layer = self._require_layer(self._seasonal_layer(temps, depths),
                                    "Wedderburn Number")

        rho_epi = self._epilimnion_density(temps, depths, layer)
        rho_hypo = self._hypolimnion_density(temps, depths, layer)
        length = self.lake_length
        if length is None:
            length = bathymetry.characteristic_length

        return stability.wedderburn_number(
            rho_hypo - rho_epi, layer.top,
            self._u_star(wind_speed, rho_epi),
            rho_hypo, length,
        )
