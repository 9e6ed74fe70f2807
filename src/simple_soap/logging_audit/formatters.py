"""Custom log formatters for Simple SOAP Client.

This module provides specialized formatters for logging, including secret redaction.
"""

import logging
import re
from typing import List, Tuple

REDACTED = "[REDACTED]"

SECRET_PATTERNS: List[Tuple[re.Pattern[str], str]] = [
    # <wsse:Password Type="...">secret</wsse:Password>
    (
        re.compile(r'(<(?:[\w.-]+:)?Password\b[^>]*>)(.*?)(</(?:[\w.-]+:)?Password>)', re.DOTALL),
        rf'\1{REDACTED}\3',
    ),
    # password=secret, password: secret, password="secret"
    (
        re.compile(r'(password\s*[=:]\s*)(["\']?)[^\s"\',;]+\2', re.IGNORECASE),
        rf'\1{REDACTED}',
    ),
]


def mask_secrets(text: str) -> str:
    """Replace passwords in a message or serialized envelope.

    Used before envelopes are logged, so the plaintext password never reaches
    a handler whatever formatter it uses.

    Example:
        >>> mask_secrets("<wsse:Password>secret</wsse:Password>")
        '<wsse:Password>[REDACTED]</wsse:Password>'
    """
    for pattern, replacement in SECRET_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


class SecretRedactingFormatter(logging.Formatter):
    """Formatter that masks credentials in log messages.

    Logged envelopes may contain WS-Security username tokens; the contents of
    any ``Password`` element (whatever its prefix) and ``password=`` pairs are
    replaced before the record is written.

    Attributes:
        redact_secrets: Whether to enable redaction
        patterns: List of (regex_pattern, replacement_text) tuples for redaction

    Example:
        >>> formatter = SecretRedactingFormatter(
        ...     fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        ...     redact_secrets=True
        ... )
        >>> handler = logging.StreamHandler()
        >>> handler.setFormatter(formatter)
    """

    def __init__(
        self,
        fmt: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt: str | None = None,
        redact_secrets: bool = True,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.redact_secrets = redact_secrets
        self.patterns: List[Tuple[re.Pattern[str], str]] = list(SECRET_PATTERNS)

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with optional secret redaction.

        Args:
            record: Log record to format

        Returns:
            Formatted log message with secrets masked if enabled
        """
        original = super().format(record)

        if self.redact_secrets:
            for pattern, replacement in self.patterns:
                original = pattern.sub(replacement, original)

        return original
