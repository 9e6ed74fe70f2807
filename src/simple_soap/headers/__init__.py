"""Headers module.

This module provides builders for known SOAP headers, grouped by convention:
``addressing`` (Action, To) and ``security`` (WS-Security username token).
"""

from simple_soap.headers.addressing import action, to
from simple_soap.headers.security import username_token_and_password_text

__all__ = [
    "action",
    "to",
    "username_token_and_password_text",
]
