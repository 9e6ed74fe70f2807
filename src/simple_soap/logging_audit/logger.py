"""Logging configuration and logger factory for Simple SOAP Client.

The library itself only emits records through module loggers; handlers are
installed by applications (or the CLI) through ``configure_logging``.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from .formatters import SecretRedactingFormatter

if TYPE_CHECKING:
    from ..config.schema import LoggingConfig

# Constants
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
MAX_LOG_FILE_SIZE = 10 * 1024 * 1024  # 10MB
BACKUP_COUNT = 5

# Track if logging has been configured
_logging_configured = False

logger = logging.getLogger(__name__)


def configure_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    redact_secrets: bool = True,
) -> None:
    """Configure root logging for applications using Simple SOAP Client.

    Sets up a console handler at the given level and, when a log file is
    given (or SIMPLE_SOAP_LOG_FILE is set), a rotating file handler at DEBUG.
    Calling it again replaces the handlers it installed before.

    Args:
        level: Log level for console output (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file
        redact_secrets: Whether to mask passwords in log output

    Raises:
        ValueError: If invalid log level is provided
        RuntimeError: If log directory cannot be created

    Example:
        >>> configure_logging(level="DEBUG")
        >>> configure_logging(level="INFO", log_file=Path("logs/soap.log"))
    """
    global _logging_configured

    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(
            f"Invalid log level: {level}. "
            f"Must be one of: DEBUG, INFO, WARNING, ERROR, CRITICAL"
        )

    if log_file is None:
        env_log_file = os.environ.get("SIMPLE_SOAP_LOG_FILE")
        if env_log_file:
            log_file = Path(env_log_file)

    root_logger = logging.getLogger()

    if _logging_configured:
        root_logger.handlers.clear()

    root_logger.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(
        SecretRedactingFormatter(fmt=DEFAULT_LOG_FORMAT, redact_secrets=redact_secrets)
    )
    root_logger.addHandler(console_handler)

    if log_file is not None:
        log_dir = log_file.parent
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise RuntimeError(
                f"Failed to create log directory: {log_dir}. "
                f"Ensure write permissions are available. Error: {e}"
            ) from e

        file_handler = RotatingFileHandler(
            filename=str(log_file),
            maxBytes=MAX_LOG_FILE_SIZE,
            backupCount=BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            SecretRedactingFormatter(fmt=DEFAULT_LOG_FORMAT, redact_secrets=redact_secrets)
        )
        root_logger.addHandler(file_handler)

    _logging_configured = True
    logger.debug(f"Logging configured: level={level.upper()}, log_file={log_file}")


def configure_logging_from_config(config: "LoggingConfig") -> None:
    """Configure logging from a LoggingConfig object.

    Example:
        >>> from simple_soap.config import load_config
        >>> configure_logging_from_config(load_config().logging)
    """
    configure_logging(
        level=config.level,
        log_file=config.log_file,
        redact_secrets=config.redact_secrets,
    )


def get_logger(module_name: str) -> logging.Logger:
    """Get a logger for the specified module.

    Args:
        module_name: Name of the module, typically __name__

    Returns:
        Logger instance for the module
    """
    return logging.getLogger(module_name)
