# src/lakestrat/pipeline/processor.py
"""Per-row processing of a profile time series.

ProfileProcessor applies one per-profile function to one row and turns
failures into an undefined outcome. The orchestrator drives it across all
rows, optionally from worker threads.
"""

import logging
from typing import Any, Callable, NamedTuple, Optional, Sequence, TYPE_CHECKING

import numpy as np

from lakestrat.contracts import ContractViolation, FailurePolicy, LakeStratError

if TYPE_CHECKING:
    from lakestrat.schemas import InternalConfig

__all__ = ['ProfileProcessor', 'RowOutcome', 'MISSING', 'UNSTRATIFIED']

logger = logging.getLogger(__name__)

MISSING = "missing"
UNSTRATIFIED = "unstratified"


class RowOutcome(NamedTuple):
    """Result of one row: value, or None with the failure kind in error."""
    value: Any
    error: Optional[str]

    @property
    def defined(self) -> bool:
        return self.error is None


class ProfileProcessor:
    """Run a per-profile function on single rows of a time series.

    Row policy:

    1. Non-finite temperatures make the row undefined (``"missing"``), unless
       ``timeseries.drop_missing_depths`` is set. Then the non-finite depths
       are dropped and the row is undefined only when fewer than 2 points
       remain.
    2. Non-finite extra inputs (wind speed, layer bounds) make the row
       undefined (``"missing"``).
    3. A LakeStratError raised by the function makes the row undefined with
       the error class name, or is re-raised under the ``fail_fast`` policy.
    4. ContractViolation always propagates: it signals a bug, not bad data.
    5. With ``nan_error`` set, an all-NaN result (for example no thermocline)
       makes the row undefined with that tag. It is not an exception, so
       ``fail_fast`` does not apply.

    Parameters
    ----------
    config : InternalConfig
        Fully validated runtime configuration.
    func : callable
        ``func(temps, depths, *extras)`` returning the row value.
    name : str, optional
        Label used in log messages.
    nan_error : str, optional
        Error tag for rows whose result is entirely NaN. By default such
        rows stay defined.
    """

    def __init__(self, config: "InternalConfig", func: Callable, name: str = "profile",
                 nan_error: Optional[str] = None):
        self.func = func
        self.name = name
        self.nan_error = nan_error
        self.drop_missing_depths = config.timeseries.drop_missing_depths
        self.fail_fast = config.timeseries.failure_policy == FailurePolicy.FAIL_FAST.value

    def process(self, timestamp, temps, depths, extras: Sequence = ()) -> RowOutcome:
        """Process a single row.

        Parameters
        ----------
        timestamp : hashable
            Row label, used for logging only.
        temps : np.ndarray
            Row temperatures, aligned with depths.
        depths : np.ndarray
            Column depths.
        extras : sequence of float, optional
            Additional per-row scalars passed after depths.

        Returns
        -------
        RowOutcome
        """
        temps = np.asarray(temps, dtype=float)
        depths = np.asarray(depths, dtype=float)

        finite = np.isfinite(temps)
        if not finite.all():
            if not self.drop_missing_depths:
                logger.debug("%s @ %s: missing temperatures", self.name, timestamp)
                return RowOutcome(None, MISSING)
            temps, depths = temps[finite], depths[finite]
            if temps.size < 2:
                logger.debug("%s @ %s: fewer than 2 finite depths", self.name, timestamp)
                return RowOutcome(None, MISSING)

        if not all(np.isfinite(x) for x in extras):
            logger.debug("%s @ %s: missing auxiliary input", self.name, timestamp)
            return RowOutcome(None, MISSING)

        try:
            value = self.func(temps, depths, *extras)
        except ContractViolation:
            raise
        except LakeStratError as e:
            if self.fail_fast:
                raise
            logger.debug("%s @ %s: %s: %s", self.name, timestamp, type(e).__name__, e)
            return RowOutcome(None, type(e).__name__)

        if self.nan_error is not None and np.all(np.isnan(np.asarray(value, dtype=float))):
            logger.debug("%s @ %s: %s", self.name, timestamp, self.nan_error)
            return RowOutcome(None, self.nan_error)
        return RowOutcome(value, None)
