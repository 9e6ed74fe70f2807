"""Precondition checks shared by the public operations."""

from typing import Any

from simple_soap.utils.exceptions import InvalidArgumentError


def require(**params: Any) -> None:
    """Ensure none of the given keyword arguments is None.

    Checks run in keyword order, so the first missing parameter is the one
    reported.

    Args:
        **params: Parameter name to value mapping

    Raises:
        InvalidArgumentError: If any value is None

    Example:
        >>> require(envelope=envelope, headers=headers)
    """
    for name, value in params.items():
        if value is None:
            raise InvalidArgumentError(name)
