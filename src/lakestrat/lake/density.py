"""Water density from temperature and salinity.

Uses the UNESCO 1983 (EOS80) equation of state at zero pressure. For fresh
water (salinity 0) this reduces to the standard mean ocean water polynomial

    rho = 999.842594 + 6.793952e-2 T - 9.095290e-3 T^2
          + 1.001685e-4 T^3 - 1.120083e-6 T^4 + 6.536336e-9 T^5
"""

import numpy as np
import seawater as sw

from lakestrat.contracts import require, DomainError

__all__ = ['water_density', 'DEFAULT_VALID_RANGE']

DEFAULT_VALID_RANGE = (0.0, 40.0)


def water_density(temperature, salinity=0.0, valid_range=DEFAULT_VALID_RANGE):
    """Calculate water density.

    Parameters
    ----------
    temperature : float or array_like
        Water temperature [°C].
    salinity : float or array_like, optional
        Practical salinity (default 0, fresh water).
    valid_range : tuple of float or None, optional
        Inclusive (min, max) temperature range accepted [°C]. None disables
        the check for brackish or extreme waters.

    Returns
    -------
    rho : float or np.ndarray
        Density [kg/m^3]. A float for scalar input.

    Raises
    ------
    DomainError
        If any temperature lies outside valid_range or salinity is negative.
    """
    temperature = np.asarray(temperature, dtype=float)
    salinity = np.asarray(salinity, dtype=float)

    require(bool(np.all(salinity >= 0)),
            "Density: salinity must be non-negative", DomainError)

    if valid_range is not None:
        t_min, t_max = valid_range
        finite = temperature[np.isfinite(temperature)]
        require(bool(np.all((finite >= t_min) & (finite <= t_max))),
                f"Density: temperature outside valid range [{t_min}, {t_max}] °C",
                DomainError)

    rho = np.asarray(sw.dens0(salinity, temperature), dtype=float)

    if rho.ndim == 0:
        return float(rho)
    return rho
