"""Centralized error types and failure policy.

Every error raised by ``lakestrat`` derives from LakeStratError, so callers
can separate analysis failures from unrelated exceptions with a single
``except`` clause. Each concrete error also derives from the closest builtin
(ValueError, ArithmeticError, RuntimeError) for callers that already catch those.
"""

from enum import Enum


class FailurePolicy(str, Enum):
    """What the time-series orchestrator does when one row fails.

    MARK_MISSING (default): Record the row as undefined and continue
    FAIL_FAST: Re-raise the row's error and abort the batch
    """
    MARK_MISSING = "mark_missing"
    FAIL_FAST = "fail_fast"


class LakeStratError(Exception):
    """Base class for all lakestrat errors."""


class InvalidInputError(LakeStratError, ValueError):
    """Malformed profile, bathymetry table or time series.

    Mismatched lengths, non-increasing depths, non-finite values or too few
    points for the requested computation.
    """


class OutOfRangeError(LakeStratError, ValueError):
    """Query depth lies outside the bathymetry table."""


class DomainError(LakeStratError, ValueError):
    """Input value outside its physically valid range."""


class EmptyLayerError(LakeStratError, ValueError):
    """Layer is degenerate (bottom <= top) or has no overlap with the data."""


class UndefinedIndexError(LakeStratError, ArithmeticError):
    """Index is mathematically undefined for the given inputs."""


class AlignmentError(LakeStratError, ValueError):
    """Timestamps of two series do not match under the configured policy."""


class ContractViolation(LakeStratError, RuntimeError):
    """Raised when an output invariant is violated.

    This indicates a bug in lakestrat, not bad user input. The orchestrator
    never converts it into a missing row.
    """
