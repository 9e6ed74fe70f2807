"""Helpers module.

This module provides functions to build and inspect SOAP envelopes.
"""

from simple_soap.helpers.envelope import (
    get_body,
    get_fault,
    get_header,
    get_header_value,
    is_faulted,
    raise_if_faulted,
    set_body,
    set_body_value,
    with_header_values,
    with_headers,
)

__all__ = [
    "get_body",
    "get_fault",
    "get_header",
    "get_header_value",
    "is_faulted",
    "raise_if_faulted",
    "set_body",
    "set_body_value",
    "with_header_values",
    "with_headers",
]
