"""UserConfig: Forgiving, minimal user-facing configuration.

This schema accepts user inputs in a variety of formats, with aliases
for common naming patterns (e.g., WIND_HEIGHT → wind_height).

UserConfig is intentionally minimal - users only specify what they want
to override from the expert defaults. Validation is lenient to accept
both uppercase and lowercase keys, integers where floats are expected, etc.
"""

from typing import Literal, Optional
from pydantic import Field, field_validator
from lakestrat.schemas.base import LakeStratBaseModel


class UserThermoclineConfig(LakeStratBaseModel):
    """User-facing thermocline config."""
    seasonal: Optional[bool] = None
    min_gradient: Optional[float] = None
    peak_fraction: Optional[float] = None
    mixed_cutoff: Optional[float] = None


class UserMetalimnionConfig(LakeStratBaseModel):
    """User-facing metalimnion config."""
    seasonal: Optional[bool] = None
    slope_fraction: Optional[float] = None


class UserDensityConfig(LakeStratBaseModel):
    """User-facing density config."""
    min_temperature: Optional[float] = None
    max_temperature: Optional[float] = None
    check_range: Optional[bool] = None
    salinity: Optional[float] = None


class UserWindConfig(LakeStratBaseModel):
    """User-facing wind config."""
    height: Optional[float] = None
    air_density: Optional[float] = None
    von_karman: Optional[float] = None
    drag_low: Optional[float] = None
    drag_high: Optional[float] = None
    drag_threshold: Optional[float] = None


class UserTimeSeriesConfig(LakeStratBaseModel):
    """User-facing orchestration config."""
    alignment: Optional[str] = None
    max_workers: Optional[int] = None
    drop_missing_depths: Optional[bool] = None
    failure_policy: Optional[str] = None

    @field_validator("alignment", "failure_policy", mode="before")
    @classmethod
    def normalize_policy(cls, v):
        """Normalize policy names to lowercase."""
        if isinstance(v, str):
            return v.lower().strip()
        return v


class UserConfig(LakeStratBaseModel):
    """User-facing configuration schema.

    Minimal, forgiving, and uses common aliases. Users only specify
    what they want to override from ParamConfig defaults.

    Usage
    -----
        user_cfg = UserConfig(
            wind_height=2,
            seasonal=True,
            alignment="interpolate",
        )

        internal = resolve_config(param_cfg, user_cfg)
    """

    # Stratification settings (flat aliases)
    seasonal: Optional[bool] = Field(None, alias="SEASONAL")
    resolution: Optional[float] = Field(None, alias="RESOLUTION")
    min_gradient: Optional[float] = Field(None, alias="MIN_GRADIENT")
    mixed_cutoff: Optional[float] = Field(None, alias="MIXED_CUTOFF")
    slope_fraction: Optional[float] = Field(None, alias="SLOPE_FRACTION")

    # Physics settings (flat aliases)
    salinity: Optional[float] = Field(None, alias="SALINITY")
    check_density_range: Optional[bool] = Field(None, alias="CHECK_DENSITY_RANGE")
    wind_height: Optional[float] = Field(None, alias="WIND_HEIGHT")
    lake_length: Optional[float] = Field(None, alias="LAKE_LENGTH")
    dz: Optional[float] = Field(None, alias="DZ")

    # Orchestration settings (flat aliases)
    alignment: Optional[str] = Field(None, alias="ALIGNMENT")
    max_workers: Optional[int] = Field(None, alias="MAX_WORKERS")
    drop_missing_depths: Optional[bool] = Field(None, alias="DROP_MISSING_DEPTHS")
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = Field(
        None, alias="LOG_LEVEL"
    )

    # Nested overrides (advanced users)
    density: Optional[UserDensityConfig] = None
    thermocline: Optional[UserThermoclineConfig] = None
    metalimnion: Optional[UserMetalimnionConfig] = None
    wind: Optional[UserWindConfig] = None
    timeseries: Optional[UserTimeSeriesConfig] = None

    model_config = LakeStratBaseModel.model_config.copy()
    # Allow forgiving input dictionaries (ignore unknown legacy keys)
    model_config.update({"populate_by_name": True, "extra": "ignore"})

    @field_validator("resolution", "min_gradient", "mixed_cutoff", "slope_fraction",
                     "salinity", "wind_height", "lake_length", "dz", mode="before")
    @classmethod
    def coerce_numeric_fields(cls, v):
        """Accept int or float for numeric fields."""
        if v is not None:
            return float(v)
        return v

    @field_validator("alignment", mode="before")
    @classmethod
    def normalize_alignment(cls, v):
        """Normalize policy names to lowercase."""
        if isinstance(v, str):
            return v.lower().strip()
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept lowercase level names."""
        if isinstance(v, str):
            return v.upper().strip()
        return v

    def to_internal_overrides(self) -> dict:
        """Convert flat UserConfig to nested InternalConfig structure.

        Nested sections are merged after the flat aliases, so they win.

        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides = {}

        # Density section
        density = {}
        if self.salinity is not None:
            density["salinity"] = self.salinity
        if self.check_density_range is not None:
            density["check_range"] = self.check_density_range
        if self.density is not None:
            density.update(self.density.model_dump(exclude_none=True))
        if density:
            overrides["density"] = density

        if self.resolution is not None:
            overrides["interpolation"] = {"resolution": self.resolution}

        if self.dz is not None:
            overrides["integration"] = {"dz": self.dz}

        # Thermocline section
        thermocline = {}
        if self.seasonal is not None:
            thermocline["seasonal"] = self.seasonal
        if self.min_gradient is not None:
            thermocline["min_gradient"] = self.min_gradient
        if self.mixed_cutoff is not None:
            thermocline["mixed_cutoff"] = self.mixed_cutoff
        if self.thermocline is not None:
            thermocline.update(self.thermocline.model_dump(exclude_none=True))
        if thermocline:
            overrides["thermocline"] = thermocline

        # Metalimnion section
        metalimnion = {}
        if self.slope_fraction is not None:
            metalimnion["slope_fraction"] = self.slope_fraction
        if self.metalimnion is not None:
            metalimnion.update(self.metalimnion.model_dump(exclude_none=True))
        if metalimnion:
            overrides["metalimnion"] = metalimnion

        # Wind section
        wind = {}
        if self.wind_height is not None:
            wind["height"] = self.wind_height
        if self.wind is not None:
            wind.update(self.wind.model_dump(exclude_none=True))
        if wind:
            overrides["wind"] = wind

        if self.lake_length is not None:
            overrides["lake"] = {"lake_length": self.lake_length}

        # Time-series section
        timeseries = {}
        if self.alignment is not None:
            timeseries["alignment"] = self.alignment
        if self.max_workers is not None:
            timeseries["max_workers"] = self.max_workers
        if self.drop_missing_depths is not None:
            timeseries["drop_missing_depths"] = self.drop_missing_depths
        if self.timeseries is not None:
            timeseries.update(self.timeseries.model_dump(exclude_none=True))
        if timeseries:
            overrides["timeseries"] = timeseries

        if self.log_level is not None:
            overrides["logging"] = {"level": self.log_level}

        return overrides
