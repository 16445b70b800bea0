"""Pipeline modules.

- orchestrator: Time-series controller, alignment and result assembly
- processor: Per-row execution and failure policy
"""

from lakestrat.pipeline.orchestrator import (
    TimeSeriesOrchestrator,
    SeriesResult,
    configure_logging,
)
from lakestrat.pipeline.processor import ProfileProcessor, RowOutcome

__all__ = [
    "TimeSeriesOrchestrator",
    "SeriesResult",
    "configure_logging",
    "ProfileProcessor",
    "RowOutcome",
]
