"""Contracts: error types and fail-fast checks.

Key principle:
- Pydantic validates config correctness
- Contracts validate input structure and output invariants
- Algorithms handle science edge cases (sentinels, undefined indices)
"""

from lakestrat.contracts.failure import (
    FailurePolicy,
    LakeStratError,
    InvalidInputError,
    OutOfRangeError,
    DomainError,
    EmptyLayerError,
    UndefinedIndexError,
    AlignmentError,
    ContractViolation,
)
from lakestrat.contracts.base import require
from lakestrat.contracts.profile import assert_profile, assert_bathymetry
from lakestrat.contracts.series import assert_time_series, assert_series_output

__all__ = [
    "FailurePolicy",
    "LakeStratError",
    "InvalidInputError",
    "OutOfRangeError",
    "DomainError",
    "EmptyLayerError",
    "UndefinedIndexError",
    "AlignmentError",
    "ContractViolation",
    "require",
    "assert_profile",
    "assert_bathymetry",
    "assert_time_series",
    "assert_series_output",
]
