"""Configuration manager for loading and managing configuration.

This module provides the main configuration loading functionality, including
support for JSON configuration files, environment variable overrides, and
configuration validation.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from simple_soap.config.defaults import DEFAULT_CONFIG, DEFAULT_CONFIG_PATH
from simple_soap.config.schema import Config, LoggingConfig, TransportConfig
from simple_soap.utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Environment variable prefix for all configuration overrides
ENV_PREFIX = "SIMPLE_SOAP_"


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file and environment variables.

    Configuration is loaded with the following precedence (highest to lowest):
    1. CLI arguments (handled by caller)
    2. Environment variables (SIMPLE_SOAP_* prefix)
    3. Configuration file (JSON)
    4. Default values

    Args:
        config_path: Path to configuration file. If None, uses ./simple_soap.json

    Returns:
        Validated Config instance

    Raises:
        ConfigurationError: If configuration is invalid or malformed

    Example:
        >>> config = load_config(Path("custom/simple_soap.json"))
        >>> timeout = config.transport.timeout_read
    """
    # Load .env file if present in working directory
    load_dotenv()

    if config_path is None:
        config_path = Path(DEFAULT_CONFIG_PATH)

    config_dict = _load_config_file(config_path)
    config_dict = _apply_env_overrides(config_dict)

    try:
        return Config(**config_dict)
    except ValidationError as e:
        raise ConfigurationError(
            f"Configuration validation failed:\n{e}\n\n"
            f"Fix: Check your configuration file at {config_path} and ensure all "
            f"values match the expected format."
        ) from e


def _load_config_file(config_path: Path) -> dict[str, Any]:
    """Load configuration file or return defaults.

    Args:
        config_path: Path to configuration file

    Returns:
        Configuration dictionary

    Raises:
        ConfigurationError: If JSON is malformed or the file cannot be read
    """
    if config_path.exists():
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config_dict = json.load(f)
            logger.info(f"Loaded configuration from {config_path}")
            return config_dict
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in config file: {config_path}\n"
                f"Error: {e}\n"
                f"Fix: Check JSON syntax at line {e.lineno}, column {e.colno}"
            ) from e
        except OSError as e:
            raise ConfigurationError(
                f"Failed to read config file: {config_path}\n"
                f"Error: {e}\n"
                f"Fix: Check file permissions and path"
            ) from e

    logger.debug(
        f"Config file not found: {config_path}. Using default configuration."
    )
    # Deep copy so callers never mutate the defaults
    return json.loads(json.dumps(DEFAULT_CONFIG))


def _apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """Apply environment variable overrides with SIMPLE_SOAP_ prefix.

    Environment variables follow the pattern: SIMPLE_SOAP_<FIELD>
    For example: SIMPLE_SOAP_ENDPOINT, SIMPLE_SOAP_LOG_LEVEL

    Args:
        config_dict: Configuration dictionary to update

    Returns:
        Updated configuration dictionary with environment overrides applied

    Raises:
        ConfigurationError: If a numeric override is not a number
    """
    if endpoint := os.getenv(f"{ENV_PREFIX}ENDPOINT"):
        config_dict["default_endpoint"] = endpoint
        logger.debug("Override: default_endpoint from environment")

    # Transport section
    if verify_tls := os.getenv(f"{ENV_PREFIX}VERIFY_TLS"):
        config_dict.setdefault("transport", {})["verify_tls"] = _parse_bool(verify_tls)
        logger.debug("Override: verify_tls from environment")

    numeric_overrides = (
        ("TIMEOUT_CONNECT", "timeout_connect", int),
        ("TIMEOUT_READ", "timeout_read", int),
        ("MAX_RETRIES", "max_retries", int),
        ("BACKOFF_FACTOR", "backoff_factor", float),
    )
    for env_name, key, convert in numeric_overrides:
        if raw := os.getenv(f"{ENV_PREFIX}{env_name}"):
            try:
                config_dict.setdefault("transport", {})[key] = convert(raw)
            except ValueError as e:
                raise ConfigurationError(
                    f"Invalid value for {ENV_PREFIX}{env_name}: {raw!r}. "
                    f"Expected a number."
                ) from e
            logger.debug(f"Override: {key} from environment")

    if user_agent := os.getenv(f"{ENV_PREFIX}USER_AGENT"):
        config_dict.setdefault("transport", {})["user_agent"] = user_agent
        logger.debug("Override: user_agent from environment")

    # Logging section
    if log_level := os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
        config_dict.setdefault("logging", {})["level"] = log_level
        logger.debug("Override: log_level from environment")

    if log_file := os.getenv(f"{ENV_PREFIX}LOG_FILE"):
        config_dict.setdefault("logging", {})["log_file"] = log_file
        logger.debug("Override: log_file from environment")

    if redact_secrets := os.getenv(f"{ENV_PREFIX}REDACT_SECRETS"):
        config_dict.setdefault("logging", {})["redact_secrets"] = _parse_bool(
            redact_secrets
        )
        logger.debug("Override: redact_secrets from environment")

    return config_dict


def _parse_bool(value: str) -> bool:
    """Parse boolean value from string.

    Args:
        value: String value to parse

    Returns:
        True for "true", "1", "yes", "on" (case-insensitive), False otherwise
    """
    return value.lower() in ("true", "1", "yes", "on")


def get_transport_config(config: Config) -> TransportConfig:
    """Get transport configuration.

    Example:
        >>> config = load_config()
        >>> transport = get_transport_config(config)
        >>> timeout = transport.timeout_connect
    """
    return config.transport


def get_logging_config(config: Config) -> LoggingConfig:
    """Get logging configuration.

    Example:
        >>> config = load_config()
        >>> logging_cfg = get_logging_config(config)
        >>> log_level = logging_cfg.level
    """
    return config.logging
