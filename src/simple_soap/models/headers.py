"""Data models for known SOAP headers.

Covers the addressing headers (Action, To) and the OASIS WS-Security
username token header with its freshness timestamp.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from simple_soap.constants import MUST_UNDERSTAND, PASSWORD_TEXT_TYPE


@dataclass
class SoapHeader:
    """Base class for typed SOAP headers.

    Attributes:
        must_understand: 1 if the receiver must process the header or reject
            the message, 0 otherwise
    """

    must_understand: int = MUST_UNDERSTAND


@dataclass
class ActionHeader(SoapHeader):
    """Addressing Action header."""

    action: Optional[str] = None


@dataclass
class ToHeader(SoapHeader):
    """Addressing To header."""

    to: Optional[str] = None


@dataclass
class Timestamp:
    """WS-Security freshness timestamp.

    Attributes:
        id: wsu:Id of the timestamp element
        created: Creation instant (UTC)
        expires: Expiry instant (UTC), after created
    """

    id: str
    created: datetime
    expires: datetime


@dataclass
class UsernameTokenPasswordText:
    """Plaintext password value of a username token."""

    value: str
    type: str = PASSWORD_TEXT_TYPE


@dataclass
class UsernameToken:
    """WS-Security username token.

    Attributes:
        id: wsu:Id of the token element
        username: User name, sent verbatim
        password: Password wrapped in the PasswordText shape
    """

    id: str
    username: str
    password: UsernameTokenPasswordText


@dataclass
class UsernameTokenAndPasswordTextHeader(SoapHeader):
    """wsse:Security header holding a timestamp and a username token."""

    timestamp: Optional[Timestamp] = None
    username_token: Optional[UsernameToken] = None
