"""Configuration schema models using pydantic.

This module defines the configuration structure and validation rules using pydantic.
All configuration values are validated according to the schema defined here.
"""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class TransportConfig(BaseModel):
    """Configuration for HTTP/HTTPS transport.

    Attributes:
        verify_tls: Whether to verify TLS certificates
        timeout_connect: Connection timeout in seconds
        timeout_read: Read timeout in seconds
        max_retries: Maximum connection retry attempts
        backoff_factor: Exponential backoff factor for retries
        user_agent: User-Agent header sent with every request
    """

    verify_tls: bool = True
    timeout_connect: int = Field(
        default=10,
        ge=1,
        description="Connection timeout in seconds"
    )
    timeout_read: int = Field(
        default=30,
        ge=1,
        description="Read timeout in seconds"
    )
    max_retries: int = Field(
        default=3,
        ge=0,
        description="Maximum retry attempts"
    )
    backoff_factor: float = Field(
        default=0.3,
        ge=0.0,
        description="Exponential backoff factor"
    )
    user_agent: str = Field(
        default="simple-soap-client",
        description="User-Agent header value"
    )


class LoggingConfig(BaseModel):
    """Configuration for logging.

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to a rotating log file
        redact_secrets: Whether to mask passwords in log output
    """

    level: str = Field(
        default="INFO",
        description="Log level: DEBUG, INFO, WARNING, ERROR, CRITICAL"
    )
    log_file: Optional[Path] = Field(
        default=None,
        description="Log file path"
    )
    redact_secrets: bool = Field(
        default=True,
        description="Mask passwords in log output"
    )

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level.

        Args:
            v: Log level string

        Returns:
            Validated log level (uppercase)

        Raises:
            ValueError: If log level is not valid
        """
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(
                f"Invalid log level: {v}. Must be one of: {', '.join(valid_levels)}"
            )
        return v_upper


class Config(BaseModel):
    """Root configuration model.

    Attributes:
        default_endpoint: Service URL used when a call names none
        transport: HTTP/HTTPS transport configuration
        logging: Logging configuration

    Example:
        >>> config = Config(
        ...     default_endpoint="https://legacy.example.com/Service.svc",
        ...     transport=TransportConfig(timeout_read=60),
        ... )
        >>> config.transport.timeout_read
        60
    """

    default_endpoint: Optional[str] = Field(
        default=None,
        description="Default service endpoint URL"
    )
    transport: TransportConfig = TransportConfig()
    logging: LoggingConfig = LoggingConfig()

    @field_validator("default_endpoint")
    @classmethod
    def validate_url(cls, v: Optional[str]) -> Optional[str]:
        """Validate URL is valid HTTP/HTTPS.

        Raises:
            ValueError: If URL does not start with http:// or https://
        """
        if v is not None and not v.startswith(("http://", "https://")):
            raise ValueError(
                f"Invalid URL: {v}. Must start with http:// or https://"
            )
        return v
