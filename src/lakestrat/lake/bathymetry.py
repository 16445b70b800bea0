"""Immutable lake bathymetry (hypsography) table.

Maps depth below the surface to horizontal lake area. Area is modelled as
piecewise linear between table rows, so trapezoid integration on the rows
is exact for volumes.
"""

import logging

import numpy as np
from scipy.integrate import trapezoid

from lakestrat.contracts import (
    require,
    assert_bathymetry,
    OutOfRangeError,
    EmptyLayerError,
)

__all__ = ['Bathymetry']

logger = logging.getLogger(__name__)


class Bathymetry:
    """Depth-to-area lookup table.

    Built once per analysis session and shared read-only across all
    per-profile calls (including worker threads). The underlying arrays are
    flagged non-writeable and the object exposes no mutators.

    Parameters
    ----------
    depths : array_like
        Depths [m], strictly increasing, starting at 0 (surface).
    areas : array_like
        Areas [m^2] at each depth, non-increasing, surface area > 0.

    Raises
    ------
    InvalidInputError
        If the table violates the bathymetry contract.

    Examples
    --------
    >>> bathy = Bathymetry([0, 5, 10], [1e6, 6e5, 0])
    >>> bathy.area_at(2.5)
    800000.0
    >>> bathy.volume_between(0, 5)
    4000000.0
    """

    __slots__ = ("_depths", "_areas")

    def __init__(self, depths, areas):
        depths, areas = assert_bathymetry(depths, areas)
        depths.setflags(write=False)
        areas.setflags(write=False)
        object.__setattr__(self, "_depths", depths)
        object.__setattr__(self, "_areas", areas)
        logger.debug("Bathymetry: %d rows, max depth %.2f m, surface area %.1f m^2",
                     depths.size, depths[-1], areas[0])

    def __setattr__(self, name, value):
        raise AttributeError("Bathymetry is immutable")

    def __repr__(self):
        return (f"Bathymetry(rows={self._depths.size}, max_depth={self.max_depth}, "
                f"surface_area={self.surface_area})")

    @property
    def depths(self) -> np.ndarray:
        return self._depths

    @property
    def areas(self) -> np.ndarray:
        return self._areas

    @property
    def max_depth(self) -> float:
        return float(self._depths[-1])

    @property
    def surface_area(self) -> float:
        return float(self._areas[0])

    @property
    def characteristic_length(self) -> float:
        """Horizontal length scale sqrt(surface area) [m]."""
        return float(np.sqrt(self.surface_area))

    @property
    def total_volume(self) -> float:
        return self.volume_between(0.0, self.max_depth)

    def _require_in_range(self, depth):
        depth = np.asarray(depth, dtype=float)
        require(bool(np.all(np.isfinite(depth))),
                "Bathymetry: query depth is not finite", OutOfRangeError)
        require(bool(np.all((depth >= 0) & (depth <= self.max_depth))),
                f"Bathymetry: depth outside [0, {self.max_depth}] m",
                OutOfRangeError)
        return depth

    def area_at(self, depth):
        """Area at depth by linear interpolation between bracketing rows.

        Parameters
        ----------
        depth : float or array_like
            Depth(s) within [0, max_depth].

        Returns
        -------
        float or np.ndarray
            Area [m^2]; a float for scalar input.

        Raises
        ------
        OutOfRangeError
            If any depth is outside the table.
        """
        depth = self._require_in_range(depth)
        area = np.interp(depth, self._depths, self._areas)
        if np.ndim(area) == 0:
            return float(area)
        return area

    def volume_between(self, top: float, bottom: float) -> float:
        """Volume [m^3] of the layer [top, bottom].

        Trapezoid rule on the table rows, subdivided at top and bottom.

        Raises
        ------
        OutOfRangeError
            If top or bottom is outside the table.
        EmptyLayerError
            If bottom < top.
        """
        self._require_in_range([top, bottom])
        require(bottom >= top,
                f"Bathymetry: layer bottom {bottom} above top {top}",
                EmptyLayerError)
        if bottom == top:
            return 0.0

        grid = self.layer_grid(top, bottom)
        return float(trapezoid(self.area_at(grid), grid))

    def layer_grid(self, top: float, bottom: float, extra=None) -> np.ndarray:
        """Sorted depths of [top, bottom] including every table row inside it.

        Parameters
        ----------
        top, bottom : float
            Layer bounds, top < bottom.
        extra : array_like, optional
            Additional depths to include (clipped to the layer).
        """
        inner = self._depths[(self._depths > top) & (self._depths < bottom)]
        parts = [np.array([top, bottom], dtype=float), inner]
        if extra is not None:
            extra = np.asarray(extra, dtype=float)
            parts.append(extra[(extra > top) & (extra < bottom)])
        return np.unique(np.concatenate(parts))

    def center_of_volume(self, dz: float = 0.1) -> float:
        """Depth of the lake's center of volume [m].

        z_cv = integral(z A(z) dz) / integral(A(z) dz) over [0, max_depth],
        evaluated on the table rows refined to a dz grid.
        """
        grid = self.layer_grid(0.0, self.max_depth,
                               extra=np.arange(0.0, self.max_depth, dz))
        area = self.area_at(grid)
        return float(trapezoid(grid * area, grid) / trapezoid(area, grid))
