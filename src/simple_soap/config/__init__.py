"""Config module.

This module provides configuration management functionality.
"""

from simple_soap.config.manager import (
    get_logging_config,
    get_transport_config,
    load_config,
)
from simple_soap.config.schema import (
    Config,
    LoggingConfig,
    TransportConfig,
)

__all__ = [
    # Main configuration loading
    "load_config",
    # Helper functions
    "get_transport_config",
    "get_logging_config",
    # Configuration models
    "Config",
    "TransportConfig",
    "LoggingConfig",
]
