"""Root-level pytest fixtures for the lakestrat test suite.

Provides shared configuration fixtures following the Pydantic-based
architecture, plus small synthetic lakes and profiles. All tests must use
these fixtures instead of creating raw dict configs.
"""

import numpy as np
import pytest

from lakestrat.lake import Bathymetry
from lakestrat.schemas import ParamConfig, UserConfig, resolve_config


# =============================================================================
# Configuration Fixtures (Pydantic-based)
# =============================================================================

@pytest.fixture
def param_config():
    """Expert configuration with all defaults.

    Use this as the base for all test configs. Override specific values
    using make_config or by creating custom UserConfig instances.
    """
    return ParamConfig()


@pytest.fixture
def internal_config(param_config):
    """Fully validated runtime configuration (no overrides).

    Examples
    --------
    >>> def test_analyzer_init(internal_config):
    ...     analyzer = ProfileAnalyzer(internal_config)
    ...     assert analyzer.resolution == 0.1
    """
    return resolve_config(param_config, None)


@pytest.fixture
def make_config(param_config):
    """Factory fixture for creating custom test configs.

    Returns a callable that accepts UserConfig-compatible kwargs.

    Examples
    --------
    >>> def test_custom_height(make_config):
    ...     config = make_config(wind_height=2)
    ...     assert config.wind.height == 2.0
    """
    def _make(**user_overrides):
        """Create InternalConfig with user overrides."""
        if user_overrides:
            user = UserConfig(**user_overrides)
            return resolve_config(param_config, user)
        return resolve_config(param_config, None)

    return _make


# =============================================================================
# Lake Fixtures
# =============================================================================

@pytest.fixture
def cone_bathymetry():
    """Cone-shaped lake, 10 m deep, 1 km^2 surface."""
    return Bathymetry([0, 2, 4, 6, 8, 10], [1e6, 8e5, 6e5, 4e5, 2e5, 0])


@pytest.fixture
def box_bathymetry():
    """Vertical-walled lake, 10 m deep, constant 1e5 m^2 area."""
    return Bathymetry([0, 10], [1e5, 1e5])


@pytest.fixture
def depths():
    return np.array([0.0, 2.0, 4.0, 6.0, 8.0, 10.0])


@pytest.fixture
def summer_temps():
    """Summer profile with a sharp thermocline between 4 and 8 m."""
    return np.array([25.0, 24.0, 20.0, 12.0, 8.0, 7.0])


@pytest.fixture
def isothermal_temps():
    return np.full(6, 10.0)
