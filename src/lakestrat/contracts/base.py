"""Base contract enforcement utilities.

The require() function is the single enforcement mechanism for all checks.
"""

from typing import Type

from lakestrat.contracts.failure import ContractViolation, LakeStratError


def require(condition: bool, message: str,
            error: Type[LakeStratError] = ContractViolation) -> None:
    """Enforce an invariant.

    Parameters
    ----------
    condition : bool
        The invariant that must be true.

    message : str
        Error message explaining the violation.

    error : type, optional
        LakeStratError subclass to raise (default ContractViolation).

    Raises
    ------
    LakeStratError
        The requested subclass, if condition is False.

    Examples
    --------
    >>> require(depths.ndim == 1, "Profile: depths must be 1-D", InvalidInputError)
    >>> require(len(table) == n_rows, "Series output: row count changed")
    """
    if not condition:
        raise error(message)
