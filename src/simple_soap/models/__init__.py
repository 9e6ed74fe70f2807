"""Models module.

This module provides the envelope and header dataclasses.
"""

from simple_soap.models.envelope import Body, Envelope, Fault, Header
from simple_soap.models.headers import (
    ActionHeader,
    SoapHeader,
    Timestamp,
    ToHeader,
    UsernameToken,
    UsernameTokenAndPasswordTextHeader,
    UsernameTokenPasswordText,
)

__all__ = [
    "ActionHeader",
    "Body",
    "Envelope",
    "Fault",
    "Header",
    "SoapHeader",
    "Timestamp",
    "ToHeader",
    "UsernameToken",
    "UsernameTokenAndPasswordTextHeader",
    "UsernameTokenPasswordText",
]
