"""Simple SOAP Client - SOAP 1.1 envelopes for legacy XML web services.

Build request envelopes with typed bodies and headers, send them, and read
responses back, including service-reported faults.
"""

import logging

from simple_soap.headers import action, to, username_token_and_password_text
from simple_soap.helpers import (
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
from simple_soap.models import Body, Envelope, Fault, Header
from simple_soap.utils.exceptions import (
    DecodingError,
    EncodingError,
    FaultError,
    InvalidArgumentError,
    SimpleSoapError,
)
from simple_soap.xml import XmlField, XmlSchema, register_schema

__version__ = "0.1.0"

# Records go nowhere unless the application configures logging
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "Body",
    "DecodingError",
    "EncodingError",
    "Envelope",
    "Fault",
    "FaultError",
    "Header",
    "InvalidArgumentError",
    "SimpleSoapError",
    "XmlField",
    "XmlSchema",
    "action",
    "get_body",
    "get_fault",
    "get_header",
    "get_header_value",
    "is_faulted",
    "raise_if_faulted",
    "register_schema",
    "set_body",
    "set_body_value",
    "to",
    "username_token_and_password_text",
    "with_header_values",
    "with_headers",
]
