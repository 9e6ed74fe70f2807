"""Logging Audit module.

This module provides logging configuration and secret redaction.
"""

from .formatters import SecretRedactingFormatter, mask_secrets
from .logger import configure_logging, configure_logging_from_config, get_logger

__all__ = [
    "configure_logging",
    "configure_logging_from_config",
    "get_logger",
    "mask_secrets",
    "SecretRedactingFormatter",
]
