import pytest

from lakestrat.schemas.user import UserConfig


def test_uppercase_keys_are_handled():
    raw = {
        "WIND_HEIGHT": 2,
        "SEASONAL": True,
        "ALIGNMENT": "LEFT",
        "LOG_LEVEL": "warning",
    }

    user = UserConfig.model_validate(raw)

    assert isinstance(user.wind_height, float) and user.wind_height == 2.0
    assert user.seasonal is True
    assert user.alignment == "left"
    assert user.log_level == "WARNING"


def test_lowercase_field_names_are_handled():
    user = UserConfig(wind_height=3, lake_length=800)

    assert user.wind_height == 3.0
    assert user.lake_length == 800.0


def test_unknown_keys_are_ignored():
    raw = {"WIND_HEIGHT": 2, "UNKNOWN_LEGACY": 12345}
    user = UserConfig.model_validate(raw)

    assert user.wind_height == 2.0
    # Unknown key should not become an attribute nor raise
    assert not hasattr(user, "UNKNOWN_LEGACY")


def test_empty_user_config_has_no_overrides():
    assert UserConfig().to_internal_overrides() == {}


def test_overrides_are_nested():
    user = UserConfig(wind_height=2, max_workers=4, salinity=1)

    assert user.to_internal_overrides() == {
        "density": {"salinity": 1.0},
        "wind": {"height": 2.0},
        "timeseries": {"max_workers": 4},
    }
