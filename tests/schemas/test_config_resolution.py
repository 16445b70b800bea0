"""Test config resolution and validation with Pydantic."""

import pytest
from pydantic import ValidationError

from lakestrat.schemas import ParamConfig, UserConfig, InternalConfig
from lakestrat.schemas.resolve import resolve_config, deep_merge
from lakestrat.schemas.user import UserWindConfig, UserTimeSeriesConfig

pytestmark = pytest.mark.unit


class TestConfigResolution:
    """Test resolve_config() precedence and merging."""

    def test_resolve_config_all_defaults(self):
        """Resolving with no user overrides uses all ParamConfig defaults."""
        config = resolve_config(ParamConfig(), None)

        assert isinstance(config, InternalConfig)
        assert config.interpolation.resolution == 0.1
        assert config.thermocline.seasonal is False
        assert config.metalimnion.seasonal is True
        assert config.wind.height == 10.0
        assert config.wind.drag_low == 0.001
        assert config.lake.lake_length is None
        assert config.timeseries.alignment == "exact"
        assert config.timeseries.failure_policy == "mark_missing"

    def test_no_arguments_uses_defaults(self):
        assert resolve_config() == resolve_config(ParamConfig(), UserConfig())

    def test_user_config_overrides_param_config(self):
        """UserConfig values override ParamConfig defaults."""
        config = resolve_config(ParamConfig(), UserConfig(wind_height=2))

        assert config.wind.height == 2.0

    def test_dict_inputs_are_validated(self):
        config = resolve_config({"wind": {"air_density": 1.25}}, {"SALINITY": 0.5})

        assert config.wind.air_density == 1.25
        assert config.density.salinity == 0.5

    def test_nested_section_wins_over_flat_alias(self):
        user = UserConfig(wind_height=2, wind=UserWindConfig(height=3))
        config = resolve_config(ParamConfig(), user)

        assert config.wind.height == 3.0

    def test_nested_timeseries_override(self):
        user = UserConfig(timeseries=UserTimeSeriesConfig(failure_policy="FAIL_FAST"))
        config = resolve_config(ParamConfig(), user)

        assert config.timeseries.failure_policy == "fail_fast"

    def test_internal_config_is_frozen(self):
        config = resolve_config()

        with pytest.raises(ValidationError):
            config.lake = None

    def test_invalid_alignment_rejected(self):
        with pytest.raises(ValidationError):
            resolve_config(ParamConfig(), UserConfig(alignment="nearest"))

    def test_invalid_slope_fraction_rejected(self):
        with pytest.raises(ValidationError):
            resolve_config(ParamConfig(), UserConfig(slope_fraction=1.5))

    def test_temperature_range_order_validated(self):
        with pytest.raises(ValidationError):
            ParamConfig(density={"min_temperature": 30, "max_temperature": 10})

    def test_param_config_forbids_unknown_keys(self):
        with pytest.raises(ValidationError):
            ParamConfig(unknown_section={})


class TestUserConfigAliases:
    """Test UserConfig flat aliases map correctly."""

    @pytest.mark.parametrize("alias, value, path, expected", [
        ("SEASONAL", True, ("thermocline", "seasonal"), True),
        ("RESOLUTION", 0.5, ("interpolation", "resolution"), 0.5),
        ("MIN_GRADIENT", 0.2, ("thermocline", "min_gradient"), 0.2),
        ("MIXED_CUTOFF", 0.5, ("thermocline", "mixed_cutoff"), 0.5),
        ("SLOPE_FRACTION", 0.2, ("metalimnion", "slope_fraction"), 0.2),
        ("SALINITY", 3, ("density", "salinity"), 3.0),
        ("CHECK_DENSITY_RANGE", False, ("density", "check_range"), False),
        ("WIND_HEIGHT", 2, ("wind", "height"), 2.0),
        ("LAKE_LENGTH", 1500, ("lake", "lake_length"), 1500.0),
        ("DZ", 0.05, ("integration", "dz"), 0.05),
        ("ALIGNMENT", "Interpolate", ("timeseries", "alignment"), "interpolate"),
        ("MAX_WORKERS", 4, ("timeseries", "max_workers"), 4),
        ("DROP_MISSING_DEPTHS", True, ("timeseries", "drop_missing_depths"), True),
        ("LOG_LEVEL", "debug", ("logging", "level"), "DEBUG"),
    ])
    def test_alias(self, alias, value, path, expected):
        config = resolve_config(ParamConfig(), UserConfig.model_validate({alias: value}))
        section, field = path

        assert getattr(getattr(config, section), field) == expected


def test_deep_merge_nested():
    base = {"a": 1, "b": {"c": 2, "d": 3}}
    merged = deep_merge(base, {"b": {"d": 4, "e": 5}, "f": 6})

    assert merged == {"a": 1, "b": {"c": 2, "d": 4, "e": 5}, "f": 6}
    assert base == {"a": 1, "b": {"c": 2, "d": 3}}
