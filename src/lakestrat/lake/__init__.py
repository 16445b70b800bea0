"""Profile analysis core.

Pure functions over a single depth-indexed temperature profile plus an
immutable Bathymetry, and the config-bound ProfileAnalyzer facade.
"""

from lakestrat.lake.bathymetry import Bathymetry
from lakestrat.lake.density import water_density
from lakestrat.lake.interpolator import resample_profile, extend_profile
from lakestrat.lake.stratification import (
    Layer,
    thermocline_depth,
    metalimnion_depths,
)
from lakestrat.lake.layers import layer_average, layer_temperature, layer_density
from lakestrat.lake.stability import (
    BuoyancyProfile,
    schmidt_stability,
    buoyancy_frequency,
    metalimnion_buoyancy_frequency,
    center_of_buoyancy,
    u_star,
    lake_number,
    wedderburn_number,
)
from lakestrat.lake.analyzer import ProfileAnalyzer

__all__ = [
    "Bathymetry",
    "water_density",
    "resample_profile",
    "extend_profile",
    "Layer",
    "thermocline_depth",
    "metalimnion_depths",
    "layer_average",
    "layer_temperature",
    "layer_density",
    "BuoyancyProfile",
    "schmidt_stability",
    "buoyancy_frequency",
    "metalimnion_buoyancy_frequency",
    "center_of_buoyancy",
    "u_star",
    "lake_number",
    "wedderburn_number",
    "ProfileAnalyzer",
]
