"""Time-series contracts.

The input contract validates the (time, depth) grid before any row is
processed. The output contract enforces the orchestrator's promise: one
row per input timestamp, in input order, with an ``error`` column.
"""

import numpy as np
import pandas as pd

from lakestrat.contracts.base import require
from lakestrat.contracts.failure import InvalidInputError


def assert_time_series(times: pd.Index, depths: np.ndarray) -> None:
    """Enforce time-series input contract.

    Parameters
    ----------
    times : pd.Index
        Row timestamps.
    depths : np.ndarray
        Column depths.

    Raises
    ------
    InvalidInputError
        If timestamps or depths are not strictly increasing, or depths
        are not finite and non-negative.
    """
    require(len(times) > 0, "Series: no timestamps", InvalidInputError)
    require(times.is_monotonic_increasing and times.is_unique,
            "Series: timestamps must be strictly increasing", InvalidInputError)
    require(depths.ndim == 1 and depths.size > 0,
            "Series: expected a 1-D, non-empty depth coordinate",
            InvalidInputError)
    require(bool(np.all(np.isfinite(depths))) and depths[0] >= 0,
            "Series: depths must be finite and >= 0", InvalidInputError)
    require(bool(np.all(np.diff(depths) > 0)),
            "Series: depths must be strictly increasing", InvalidInputError)


def assert_series_output(table: pd.DataFrame, times: pd.Index) -> None:
    """Enforce time-series output contract.

    Called by the orchestrator after assembling a result table.

    Raises
    ------
    ContractViolation
        If rows were dropped, reordered or the error column is missing.
    """
    require(isinstance(table, pd.DataFrame),
            f"Series output violated: got {type(table)}, expected DataFrame")
    require(len(table) == len(times),
            f"Series output violated: {len(table)} rows for {len(times)} timestamps")
    require(table.index.equals(times),
            "Series output violated: index does not match input timestamps")
    require("error" in table.columns,
            "Series output violated: missing 'error' column")
