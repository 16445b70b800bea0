"""InternalConfig: Authoritative runtime configuration.

This is the ONLY config schema that runtime code sees. It is fully validated,
normalized, and frozen. Runtime code reads fields directly: no .get(), no
fallback defaults.
"""

from typing import Literal, Optional
from pydantic import Field, ConfigDict
from lakestrat.schemas.base import LakeStratBaseModel


# =============================================================================
# Nested Configuration Models (Runtime)
# =============================================================================

class InternalDensityConfig(LakeStratBaseModel):
    """Runtime density model configuration."""
    min_temperature: float
    max_temperature: float
    check_range: bool
    salinity: float = Field(ge=0)


class InternalInterpolationConfig(LakeStratBaseModel):
    """Runtime resampling configuration."""
    resolution: float = Field(gt=0)


class InternalThermoclineConfig(LakeStratBaseModel):
    """Runtime thermocline configuration."""
    seasonal: bool
    min_gradient: float
    peak_fraction: float
    mixed_cutoff: float


class InternalMetalimnionConfig(LakeStratBaseModel):
    """Runtime metalimnion configuration."""
    seasonal: bool
    slope_fraction: float = Field(gt=0, lt=1.0)


class InternalIntegrationConfig(LakeStratBaseModel):
    """Runtime integration configuration."""
    dz: float = Field(gt=0)


class InternalWindConfig(LakeStratBaseModel):
    """Runtime wind stress configuration."""
    height: float = Field(gt=0)
    air_density: float
    von_karman: float
    drag_low: float
    drag_high: float
    drag_threshold: float


class InternalLakeConfig(LakeStratBaseModel):
    """Runtime lake geometry overrides."""
    lake_length: Optional[float]  # None means sqrt(surface area)


class InternalTimeSeriesConfig(LakeStratBaseModel):
    """Runtime orchestration configuration."""
    alignment: Literal["exact", "left", "interpolate"]
    max_workers: int = Field(ge=1)
    drop_missing_depths: bool
    failure_policy: Literal["mark_missing", "fail_fast"]


class InternalCoordNamesConfig(LakeStratBaseModel):
    """Runtime coordinate name mappings."""
    time: str
    depth: str


class InternalLoggingConfig(LakeStratBaseModel):
    """Runtime logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


# =============================================================================
# Main InternalConfig
# =============================================================================

class InternalConfig(LakeStratBaseModel):
    """Authoritative runtime configuration.

    Usage
    -----
    Runtime modules receive InternalConfig and access fields directly:

        def __init__(self, config: InternalConfig):
            self.resolution = config.interpolation.resolution  # NOT .get()
            self.wind_height = config.wind.height

    Shared read-only across worker threads, hence frozen.
    """

    density: InternalDensityConfig
    interpolation: InternalInterpolationConfig
    thermocline: InternalThermoclineConfig
    metalimnion: InternalMetalimnionConfig
    integration: InternalIntegrationConfig
    wind: InternalWindConfig
    lake: InternalLakeConfig
    timeseries: InternalTimeSeriesConfig
    coord_names: InternalCoordNamesConfig
    logging: InternalLoggingConfig

    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        use_enum_values=True,
        str_strip_whitespace=True,
        frozen=True,  # Immutable after construction
    )
