"""Custom exception classes for Simple SOAP Client.

All exceptions inherit from SimpleSoapError to allow catching all custom exceptions.
"""

from typing import Any, Optional


class SimpleSoapError(Exception):
    """Base exception for all Simple SOAP Client custom exceptions."""

    pass


class InvalidArgumentError(SimpleSoapError, ValueError):
    """Raised when a required argument is missing.

    The offending parameter name is kept in ``param_name`` and is part of the
    message.

    Examples:
        - ``set_body(None, element)``
        - ``with_headers(envelope, None)``
    """

    def __init__(self, param_name: str) -> None:
        self.param_name = param_name
        super().__init__(
            f"{param_name} parameter is required and cannot be None."
        )


class DecodingError(SimpleSoapError):
    """Raised when an XML element cannot be mapped into the requested type.

    Examples:
        - Decoding a non-fault body as a Fault
        - Required child element or attribute missing
        - Integer or timestamp text that cannot be parsed
        - Decoding an absent (None) element
    """

    pass


class MalformedXMLError(DecodingError):
    """Raised when raw bytes are not a well-formed SOAP envelope.

    Examples:
        - Unclosed tags
        - Root element is not soapenv:Envelope
    """

    pass


class EncodingError(SimpleSoapError):
    """Raised when a value cannot be mapped into an XML element.

    Examples:
        - Type without a registered XML schema
        - Required field set to None
    """

    pass


class TransportError(SimpleSoapError):
    """Raised when network/transport issues occur.

    Examples:
        - Connection timeout
        - HTTP error response without a SOAP envelope
        - Network unreachable
    """

    pass


class ConfigurationError(SimpleSoapError):
    """Raised when configuration loading or validation fails.

    Examples:
        - Invalid configuration file format
        - Configuration value out of range
    """

    pass


class FaultError(SimpleSoapError):
    """Raised when a SOAP envelope carries a service-reported fault.

    The fault fields are carried verbatim from the decoded Fault body.

    Attributes:
        code: faultcode value (e.g., "soapenv:Server")
        string: faultstring, the human-readable message
        actor: Optional faultactor, the node that raised the fault
        detail: Optional detail element (lxml element)

    Example:
        >>> try:
        ...     raise_if_faulted(response)
        ... except FaultError as e:
        ...     print(e.code, e.string)
    """

    def __init__(
        self,
        code: str,
        string: str,
        actor: Optional[str] = None,
        detail: Optional[Any] = None,
    ) -> None:
        self.code = code
        self.string = string
        self.actor = actor
        self.detail = detail
        super().__init__(f"SOAP fault {code}: {string}")
