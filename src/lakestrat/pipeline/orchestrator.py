# src/lakestrat/pipeline/orchestrator.py
"""Time-series orchestration of per-profile analyses.

Applies the ProfileAnalyzer to every row of a (time, depth) temperature
series, aligns wind and layer-bound inputs by timestamp, and assembles one
result row per input timestamp.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from functools import partial
from typing import Callable, List, Optional, Sequence, Tuple, TYPE_CHECKING

import numpy as np
import pandas as pd
import xarray as xr

from lakestrat.contracts import (
    require,
    assert_time_series,
    assert_series_output,
    AlignmentError,
    InvalidInputError,
)
from lakestrat.lake.analyzer import ProfileAnalyzer
from lakestrat.lake.bathymetry import Bathymetry
from lakestrat.pipeline.processor import ProfileProcessor, RowOutcome, UNSTRATIFIED

if TYPE_CHECKING:
    from lakestrat.schemas import InternalConfig

__all__ = ['TimeSeriesOrchestrator', 'SeriesResult', 'configure_logging']

logger = logging.getLogger(__name__)


def configure_logging(config: "InternalConfig") -> None:
    """Install a console handler on the root logger at the configured level.

    Never called implicitly; applications opt in.
    """
    log_level = getattr(logging, config.logging.level, logging.INFO)

    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Clear existing handlers and add new ones
    root = logging.getLogger()
    root.setLevel(log_level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    ch = logging.StreamHandler()
    ch.setLevel(log_level)
    ch.setFormatter(formatter)
    root.addHandler(ch)

    logger.info("Logging: level=%s", config.logging.level)


@dataclass
class SeriesResult:
    """Result of a time-series analysis.

    Attributes
    ----------
    table : pd.DataFrame
        One row per input timestamp, in input order, with the value
        column(s) and an ``error`` column (None when defined).
    n_failed : int
        Number of undefined rows.
    failed_times : list
        Timestamps of the undefined rows.
    """
    table: pd.DataFrame
    n_failed: int = 0
    failed_times: List = field(default_factory=list)


class TimeSeriesOrchestrator:
    """Run per-profile analyses across a temperature time series.

    **Inputs:**

    - Temperature: ``xr.DataArray`` with dims (time, depth), names taken from
      ``config.coord_names``, or a ``pd.DataFrame`` indexed by timestamp with
      numeric depth columns.
    - Wind: 1-D ``xr.DataArray`` over time or ``pd.Series`` indexed by
      timestamp, aligned according to ``timeseries.alignment``:

      - ``"exact"``: timestamps must match, else AlignmentError
      - ``"left"``: temperature timestamps kept, unmatched wind is missing
      - ``"interpolate"``: wind linearly interpolated in time, missing
        outside the wind record

    **Outputs:**

    Every method returns a :class:`SeriesResult` whose table has exactly one
    row per input timestamp, in input order. Failed rows hold NaN values and
    the failure kind in ``error``.

    **Concurrency:**

    With ``timeseries.max_workers > 1`` rows run on a thread pool. The
    analyzer, bathymetry and config are read-only, so they are shared.

    Example usage::

        config = resolve_config(ParamConfig(), UserConfig(WIND_HEIGHT=2.0))
        orchestrator = TimeSeriesOrchestrator(config, Bathymetry(depths, areas))
        result = orchestrator.lake_number(temperature, wind)
        result.table["lake_number"].plot()
    """

    def __init__(self, config: "InternalConfig", bathymetry: Optional[Bathymetry] = None):
        self.config = config
        self.analyzer = ProfileAnalyzer(config, bathymetry)
        self.time_name = config.coord_names.time
        self.depth_name = config.coord_names.depth
        self.alignment = config.timeseries.alignment
        self.max_workers = config.timeseries.max_workers

    # ------------------------------------------------------------------
    # Input handling
    # ------------------------------------------------------------------

    def _unpack(self, temperature) -> Tuple[pd.Index, np.ndarray, np.ndarray]:
        """Split a temperature series into (times, depths, values[time, depth])."""
        if isinstance(temperature, xr.DataArray):
            require(set(temperature.dims) == {self.time_name, self.depth_name},
                    f"Series: expected dims ({self.time_name}, {self.depth_name}), "
                    f"got {temperature.dims}", InvalidInputError)
            da = temperature.transpose(self.time_name, self.depth_name)
            times = pd.Index(da[self.time_name].values)
            depths = np.asarray(da[self.depth_name].values, dtype=float)
            values = np.asarray(da.values, dtype=float)
        elif isinstance(temperature, pd.DataFrame):
            times = temperature.index
            try:
                depths = np.asarray(temperature.columns, dtype=float)
            except (TypeError, ValueError) as e:
                raise InvalidInputError(f"Series: depth columns must be numeric: {e}") from e
            values = temperature.to_numpy(dtype=float)
        else:
            raise InvalidInputError(
                f"Series: expected xarray.DataArray or pandas.DataFrame, got {type(temperature)}"
            )

        assert_time_series(times, depths)
        return times, depths, values

    def _to_series(self, data) -> pd.Series:
        if isinstance(data, xr.DataArray):
            require(data.ndim == 1,
                    f"Series: expected 1-D auxiliary series, got dims {data.dims}",
                    InvalidInputError)
            return pd.Series(np.asarray(data.values, dtype=float),
                             index=pd.Index(data[data.dims[0]].values))
        if isinstance(data, pd.Series):
            return data.astype(float)
        raise InvalidInputError(
            f"Series: expected xarray.DataArray or pandas.Series, got {type(data)}"
        )

    def _align(self, series, times: pd.Index) -> np.ndarray:
        """Align an auxiliary time series (wind) to the temperature timestamps."""
        series = self._to_series(series)
        require(series.index.is_monotonic_increasing and series.index.is_unique,
                "Alignment: auxiliary timestamps must be strictly increasing",
                AlignmentError)

        if self.alignment == "exact":
            require(series.index.equals(times),
                    f"Alignment: {len(series)} auxiliary timestamps do not match "
                    f"{len(times)} temperature timestamps", AlignmentError)
            return series.to_numpy(dtype=float)

        if self.alignment == "left":
            aligned = series.reindex(times)
        else:
            require(len(series) >= 2, "Alignment: interpolation needs 2+ samples",
                    AlignmentError)
            da = xr.DataArray(series.to_numpy(dtype=float), dims="time",
                              coords={"time": series.index.values})
            aligned = da.interp(time=times.values, method="linear")

        n_missing = int(np.isnan(np.asarray(aligned, dtype=float)).sum())
        if n_missing:
            logger.info("Alignment (%s): %d of %d timestamps without auxiliary data",
                        self.alignment, n_missing, len(times))
        return np.asarray(aligned, dtype=float)

    def _per_row(self, value, times: pd.Index, label: str) -> np.ndarray:
        """Broadcast a scalar or per-timestamp value to one entry per row."""
        if isinstance(value, (pd.Series, xr.DataArray)):
            series = self._to_series(value)
            require(series.index.equals(times),
                    f"Alignment: {label} timestamps do not match temperature timestamps",
                    AlignmentError)
            return series.to_numpy(dtype=float)
        value = np.asarray(value, dtype=float)
        require(value.ndim == 0 or value.shape == (len(times),),
                f"Alignment: {label} needs a scalar or {len(times)} values, "
                f"got shape {value.shape}", AlignmentError)
        return np.broadcast_to(value, (len(times),))

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def _execute(self, func: Callable, name: str, times, depths, values,
                 extras: Sequence[np.ndarray] = (),
                 nan_error: Optional[str] = None) -> List[RowOutcome]:
        processor = ProfileProcessor(self.config, func, name, nan_error)

        def task(i):
            return processor.process(times[i], values[i], depths,
                                     tuple(float(x[i]) for x in extras))

        logger.info("Running %s on %d profiles (%d depths, workers=%d)",
                    name, len(times), depths.size, self.max_workers)

        if self.max_workers > 1:
            # map() yields in submission order
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                return list(pool.map(task, range(len(times))))
        return [task(i) for i in range(len(times))]

    def _finish(self, table: pd.DataFrame, outcomes: List[RowOutcome], times,
                name: str) -> SeriesResult:
        table["error"] = [o.error for o in outcomes]
        assert_series_output(table, times)

        failed_times = [t for t, o in zip(times, outcomes) if not o.defined]
        if failed_times:
            logger.warning("%s: %d of %d profiles undefined", name,
                           len(failed_times), len(times))
        else:
            logger.info("%s: all %d profiles defined", name, len(times))
        return SeriesResult(table, len(failed_times), failed_times)

    def run(self, func: Callable, temperature, columns: Sequence[str] = ("value",),
            extras: Sequence = (), name: Optional[str] = None,
            nan_error: Optional[str] = None) -> SeriesResult:
        """Apply any per-profile function across a temperature series.

        Parameters
        ----------
        func : callable
            ``func(temps, depths, *extras)`` returning a scalar, or a
            sequence with one entry per name in ``columns``.
        temperature : xr.DataArray or pd.DataFrame
            (time, depth) temperatures.
        columns : sequence of str, optional
            Output column names.
        extras : sequence, optional
            Per-row inputs, each a scalar or one value per timestamp, passed
            after depths.
        name : str, optional
            Label for log messages (default: first column name).
        nan_error : str, optional
            Error tag for rows whose result is entirely NaN; by default such
            rows stay defined.

        Returns
        -------
        SeriesResult
        """
        name = name or columns[0]
        times, depths, values = self._unpack(temperature)
        extras = [self._per_row(x, times, name) for x in extras]

        outcomes = self._execute(func, name, times, depths, values, extras, nan_error)

        data = np.full((len(times), len(columns)), np.nan)
        for i, outcome in enumerate(outcomes):
            if outcome.defined:
                data[i] = np.atleast_1d(np.asarray(outcome.value, dtype=float))
        table = pd.DataFrame(data, index=times, columns=list(columns))
        return self._finish(table, outcomes, times, name)

    def _run_with_wind(self, func: Callable, temperature, wind, column: str) -> SeriesResult:
        times, _, _ = self._unpack(temperature)
        aligned = self._align(wind, times)
        return self.run(func, temperature, columns=(column,), extras=(aligned,))

    # ------------------------------------------------------------------
    # Indices
    # ------------------------------------------------------------------

    def thermocline_depth(self, temperature, seasonal: Optional[bool] = None) -> SeriesResult:
        """Thermocline depth per timestamp (``thermocline_depth`` column).

        Rows without a thermocline are undefined with ``error="unstratified"``.
        """
        func = partial(self.analyzer.thermocline_depth, seasonal=seasonal)
        return self.run(func, temperature, columns=("thermocline_depth",),
                        nan_error=UNSTRATIFIED)

    def metalimnion_depths(self, temperature, seasonal: Optional[bool] = None) -> SeriesResult:
        """Metalimnion bounds per timestamp (``top``, ``bottom`` columns).

        Rows without a thermocline are undefined with ``error="unstratified"``.
        """
        func = partial(self.analyzer.metalimnion_depths, seasonal=seasonal)
        return self.run(func, temperature, columns=("top", "bottom"),
                        name="metalimnion_depths", nan_error=UNSTRATIFIED)

    def schmidt_stability(self, temperature) -> SeriesResult:
        """Schmidt stability [J/m^2] per timestamp."""
        return self.run(self.analyzer.schmidt_stability, temperature,
                        columns=("schmidt_stability",))

    def center_of_buoyancy(self, temperature) -> SeriesResult:
        """Center of buoyancy [m] per timestamp.

        Rows without a stable interval are undefined with
        ``error="unstratified"``.
        """
        return self.run(self.analyzer.center_of_buoyancy, temperature,
                        columns=("center_of_buoyancy",), nan_error=UNSTRATIFIED)

    def buoyancy_frequency(self, temperature, seasonal: bool = False) -> SeriesResult:
        """Squared buoyancy frequency per timestamp.

        With ``seasonal`` the table has one ``n2`` column (bulk metalimnion
        value). Otherwise the table is profile-shaped: one column per
        midpoint depth, each row filling only its own midpoints.
        """
        if seasonal:
            return self.run(self.analyzer.metalimnion_buoyancy_frequency,
                            temperature, columns=("n2",),
                            name="metalimnion_buoyancy_frequency")

        name = "buoyancy_frequency"
        times, depths, values = self._unpack(temperature)
        outcomes = self._execute(self.analyzer.buoyancy_frequency, name,
                                 times, depths, values)

        rows = []
        for outcome in outcomes:
            if outcome.defined:
                rows.append(dict(zip(outcome.value.depths, outcome.value.n2)))
            else:
                rows.append({})
        midpoints = sorted({z for row in rows for z in row})
        table = pd.DataFrame(rows, index=times, columns=midpoints, dtype=float)
        table.columns.name = self.depth_name
        return self._finish(table, outcomes, times, name)

    def layer_temperature(self, temperature, top, bottom) -> SeriesResult:
        """Volume-weighted layer temperature per timestamp.

        ``top`` and ``bottom`` are scalars or one value per timestamp (for
        example metalimnion bounds from :meth:`metalimnion_depths`).
        """
        return self.run(self.analyzer.layer_temperature, temperature,
                        columns=("layer_temperature",), extras=(top, bottom))

    def u_star(self, temperature, wind) -> SeriesResult:
        """Friction velocity [m/s] per timestamp."""
        return self._run_with_wind(self.analyzer.u_star, temperature, wind, "u_star")

    def lake_number(self, temperature, wind) -> SeriesResult:
        """Lake Number per timestamp."""
        return self._run_with_wind(self.analyzer.lake_number, temperature, wind,
                                   "lake_number")

    def wedderburn_number(self, temperature, wind) -> SeriesResult:
        """Wedderburn Number per timestamp."""
        return self._run_with_wind(self.analyzer.wedderburn_number, temperature,
                                   wind, "wedderburn_number")
