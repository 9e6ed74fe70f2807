"""Builders for addressing headers (Action and To).

These are the headers WCF services expect in the
``http://schemas.microsoft.com/ws/2005/05/addressing/none`` namespace.
"""

from simple_soap.constants import MAY_IGNORE, MUST_UNDERSTAND
from simple_soap.models.headers import ActionHeader, ToHeader


def action(action: str, must_understand: bool = True) -> ActionHeader:
    """Create an Action header.

    Args:
        action: Action URI of the operation being called
        must_understand: Does the service have to understand the header?

    Returns:
        New ActionHeader

    Example:
        >>> action("http://tempuri.org/ICalculator/Add").must_understand
        1
    """
    return ActionHeader(
        action=action,
        must_understand=MUST_UNDERSTAND if must_understand else MAY_IGNORE,
    )


def to(to: str, must_understand: bool = True) -> ToHeader:
    """Create a To header.

    Args:
        to: Destination address
        must_understand: Does the service have to understand the header?

    Returns:
        New ToHeader
    """
    return ToHeader(
        to=to,
        must_understand=MUST_UNDERSTAND if must_understand else MAY_IGNORE,
    )
