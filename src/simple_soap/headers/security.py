"""Builders for OASIS WS-Security headers.

This module builds wsse:Security headers carrying a username token with a
plaintext password and a freshness timestamp, as accepted by most legacy
services secured with the Username Token Profile 1.0.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, Optional

from simple_soap.constants import (
    MAY_IGNORE,
    MUST_UNDERSTAND,
    SECURITY_TIMESTAMP_VALIDITY,
)
from simple_soap.models.headers import (
    Timestamp,
    UsernameToken,
    UsernameTokenAndPasswordTextHeader,
    UsernameTokenPasswordText,
)

logger = logging.getLogger(__name__)

TIMESTAMP_ID_PREFIX = "_TS"
USERNAME_TOKEN_ID_PREFIX = "_UT"


def random_id() -> str:
    """Return a random 32 character hex identifier."""
    return uuid.uuid4().hex


def utc_now() -> datetime:
    """Return the current instant as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def username_token_and_password_text(
    username: str,
    password: str,
    must_understand: bool = True,
    *,
    id_factory: Optional[Callable[[], str]] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> UsernameTokenAndPasswordTextHeader:
    """Create a WS-Security header with a timestamp and a username token.

    One random identifier is generated per call; the timestamp and token ids
    are derived from it with the ``_TS`` and ``_UT`` prefixes. The timestamp
    expires 15 minutes after its creation.

    Args:
        username: User name, sent verbatim
        password: Password, sent as PasswordText
        must_understand: Does the service have to understand the header?
        id_factory: Source of random identifiers (default: uuid4 hex)
        clock: Source of the current UTC instant (default: system clock)

    Returns:
        New UsernameTokenAndPasswordTextHeader

    Example:
        >>> header = username_token_and_password_text("alice", "secret")
        >>> header.username_token.username
        'alice'
        >>> header.timestamp.expires - header.timestamp.created
        datetime.timedelta(seconds=900)
    """
    id_factory = id_factory or random_id
    clock = clock or utc_now

    shared_id = id_factory()
    created = clock()
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    else:
        created = created.astimezone(timezone.utc)

    logger.debug(f"Building username token header {shared_id} for user {username}")

    return UsernameTokenAndPasswordTextHeader(
        timestamp=Timestamp(
            id=f"{TIMESTAMP_ID_PREFIX}{shared_id}",
            created=created,
            expires=created + SECURITY_TIMESTAMP_VALIDITY,
        ),
        username_token=UsernameToken(
            id=f"{USERNAME_TOKEN_ID_PREFIX}{shared_id}",
            username=username,
            password=UsernameTokenPasswordText(value=password),
        ),
        must_understand=MUST_UNDERSTAND if must_understand else MAY_IGNORE,
    )
