"""ParamConfig: Expert defaults for lakestrat analyses.

This module defines the complete default configuration. ALL tunable
parameters must have defaults here. Runtime code never reads from
ParamConfig directly - it only receives InternalConfig.

Empirical constants and their sources:
- thermocline.min_gradient, thermocline.peak_fraction: seasonal thermocline
  thresholds of Lake Analyzer (Read et al. 2011).
- wind.drag_low / drag_high / drag_threshold: two-regime drag coefficient
  of Hicks (1972).
- wind.von_karman, 10 m reference height: log wind profile correction
  (Fischer et al. 1979).
"""

from typing import Literal, Optional
from pydantic import Field, field_validator, model_validator
from lakestrat.schemas.base import LakeStratBaseModel


# =============================================================================
# Nested Configuration Models
# =============================================================================

class DensityConfig(LakeStratBaseModel):
    """Water density model configuration."""
    min_temperature: float = Field(0.0, description="Lower valid temperature in °C")
    max_temperature: float = Field(40.0, description="Upper valid temperature in °C")
    check_range: bool = True
    salinity: float = Field(0.0, ge=0, description="Practical salinity")

    @model_validator(mode="after")
    def check_temperature_order(self):
        if self.min_temperature >= self.max_temperature:
            raise ValueError("min_temperature must be below max_temperature")
        return self


class InterpolationConfig(LakeStratBaseModel):
    """Profile resampling configuration."""
    resolution: float = Field(0.1, gt=0, description="Fine-grid step in meters")


class ThermoclineConfig(LakeStratBaseModel):
    """Thermocline detection configuration."""
    seasonal: bool = False
    min_gradient: float = Field(0.1, ge=0, description="Seasonal peak floor in kg/m^3/m")
    peak_fraction: float = Field(0.15, gt=0, le=1.0)
    mixed_cutoff: float = Field(1.0, ge=0, description="Minimum temperature range in °C")


class MetalimnionConfig(LakeStratBaseModel):
    """Metalimnion bounds configuration."""
    seasonal: bool = True
    slope_fraction: float = Field(0.1, gt=0, lt=1.0)


class IntegrationConfig(LakeStratBaseModel):
    """Vertical integration grid configuration."""
    dz: float = Field(0.1, gt=0, description="Integration step in meters")


class WindConfig(LakeStratBaseModel):
    """Wind stress configuration."""
    height: float = Field(10.0, gt=0, description="Anemometer height in meters")
    air_density: float = Field(1.2, gt=0)
    von_karman: float = Field(0.4, gt=0)
    drag_low: float = Field(0.001, gt=0)
    drag_high: float = Field(0.0015, gt=0)
    drag_threshold: float = Field(5.0, ge=0, description="Wind speed in m/s")


class LakeConfig(LakeStratBaseModel):
    """Lake geometry overrides."""
    lake_length: Optional[float] = Field(
        None, gt=0, description="Fetch in meters; sqrt(surface area) if None"
    )


class TimeSeriesConfig(LakeStratBaseModel):
    """Time-series orchestration configuration."""
    alignment: Literal["exact", "left", "interpolate"] = "exact"
    max_workers: int = Field(1, ge=1)
    drop_missing_depths: bool = False
    failure_policy: Literal["mark_missing", "fail_fast"] = "mark_missing"

    @field_validator("alignment", "failure_policy", mode="before")
    @classmethod
    def normalize_policy_name(cls, v):
        """Normalize policy names to lowercase."""
        if isinstance(v, str):
            return v.lower().strip()
        return v


class CoordNamesConfig(LakeStratBaseModel):
    """Coordinate name mappings for xarray inputs."""
    time: str = "time"
    depth: str = "depth"


class LoggingConfig(LakeStratBaseModel):
    """Logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"


# =============================================================================
# Main ParamConfig
# =============================================================================

class ParamConfig(LakeStratBaseModel):
    """Complete expert configuration with all defaults.

    Usage
    -----
    This config is NOT used directly by runtime code. It serves as the
    base layer in config resolution:

        internal_cfg = resolve_config(param_cfg, user_cfg)
    """

    density: DensityConfig = Field(default_factory=DensityConfig)
    interpolation: InterpolationConfig = Field(default_factory=InterpolationConfig)
    thermocline: ThermoclineConfig = Field(default_factory=ThermoclineConfig)
    metalimnion: MetalimnionConfig = Field(default_factory=MetalimnionConfig)
    integration: IntegrationConfig = Field(default_factory=IntegrationConfig)
    wind: WindConfig = Field(default_factory=WindConfig)
    lake: LakeConfig = Field(default_factory=LakeConfig)
    timeseries: TimeSeriesConfig = Field(default_factory=TimeSeriesConfig)
    coord_names: CoordNamesConfig = Field(default_factory=CoordNamesConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
