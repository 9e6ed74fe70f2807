"""Default configuration values.

This module defines the default configuration values used when no configuration
file is provided or when configuration values are not specified.
"""

from typing import Any

# Default configuration dictionary
# This is used as a fallback when no configuration file is present
DEFAULT_CONFIG: dict[str, Any] = {
    # No default endpoint - must be provided per call or by the user
    "default_endpoint": None,
    "transport": {
        # Verify TLS certificates by default for security
        "verify_tls": True,
        # Connection timeout: 10 seconds
        "timeout_connect": 10,
        # Read timeout: 30 seconds
        "timeout_read": 30,
        # Retry connection failures up to 3 times
        "max_retries": 3,
        # Exponential backoff factor: 0.3 seconds
        "backoff_factor": 0.3,
        "user_agent": "simple-soap-client",
    },
    "logging": {
        # Default log level: INFO (moderate verbosity)
        "level": "INFO",
        # Console only unless a log file is configured
        "log_file": None,
        # Mask wsse:Password values in log output
        "redact_secrets": True,
    },
}

# Default configuration file path
DEFAULT_CONFIG_PATH = "simple_soap.json"
