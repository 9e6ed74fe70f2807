"""SOAP 1.1 client over HTTP.

This module posts envelopes to SOAP endpoints with requests and maps the
responses back into Envelope models. SOAP 1.1 services report faults with
HTTP 500 and an envelope body, so any response that carries an envelope is
returned to the caller for fault inspection.
"""

import logging
from typing import Any, Iterable, Optional, Type, TypeVar

import requests
from lxml import etree
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from simple_soap.config.schema import Config
from simple_soap.helpers.envelope import (
    get_body,
    raise_if_faulted,
    set_body,
    set_body_value,
    with_headers,
)
from simple_soap.logging_audit.formatters import mask_secrets
from simple_soap.models.envelope import Envelope
from simple_soap.utils.exceptions import (
    InvalidArgumentError,
    MalformedXMLError,
    TransportError,
)
from simple_soap.utils.guards import require
from simple_soap.xml.mapper import encode
from simple_soap.xml.serialization import envelope_from_xml, envelope_to_xml

logger = logging.getLogger(__name__)

T = TypeVar("T")

SOAP_CONTENT_TYPE = "text/xml; charset=utf-8"


class SoapClient:
    """Client for calling SOAP 1.1 services.

    Attributes:
        config: Client configuration
        session: requests session with connection retries mounted

    Example:
        >>> with SoapClient() as client:
        ...     response = client.call(
        ...         "https://legacy.example.com/Calculator.svc",
        ...         "http://tempuri.org/ICalculator/Add",
        ...         AddRequest(a=1, b=2),
        ...         response_type=AddResponse,
        ...         headers=[username_token_and_password_text("alice", "secret")],
        ...     )
    """

    def __init__(self, config: Optional[Config] = None) -> None:
        """Initialize the SOAP client.

        Args:
            config: Client configuration (defaults if not provided)
        """
        self.config = config or Config()
        transport = self.config.transport

        # Only connection failures are retried; a POST may not be idempotent
        retry_strategy = Retry(
            total=transport.max_retries,
            connect=transport.max_retries,
            read=0,
            status=0,
            backoff_factor=transport.backoff_factor,
            allowed_methods=frozenset(["POST"]),
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)

        self.session = requests.Session()
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)
        self.session.verify = transport.verify_tls
        self.session.headers["User-Agent"] = transport.user_agent

        if not transport.verify_tls:
            logger.warning(
                "TLS certificate verification is DISABLED. "
                "This should only be used for development with self-signed certificates."
            )

        logger.debug(
            f"SOAP client initialized: timeout=({transport.timeout_connect}s, "
            f"{transport.timeout_read}s), max_retries={transport.max_retries}"
        )

    def send(self, url: Optional[str], action: Optional[str], envelope: Envelope) -> Envelope:
        """Send an envelope and return the response envelope.

        Faults are not raised here; inspect the result with ``is_faulted`` or
        decode it with ``get_body``.

        Args:
            url: Endpoint URL (falls back to config.default_endpoint)
            action: SOAPAction value, may be empty
            envelope: Request envelope

        Returns:
            Response envelope

        Raises:
            InvalidArgumentError: If envelope is None or no URL is available
            TransportError: If the request fails or an HTTP error response
                carries no SOAP envelope
            MalformedXMLError: If a successful response is not an envelope
        """
        require(envelope=envelope)
        url = self._resolve_url(url)

        payload = envelope_to_xml(envelope)
        headers = {
            "Content-Type": SOAP_CONTENT_TYPE,
            "SOAPAction": f'"{action or ""}"',
        }

        logger.info(f"Sending SOAP request to {url} (action={action})")
        logger.debug(f"SOAP request:\n{mask_secrets(payload.decode('utf-8'))}")

        transport = self.config.transport
        try:
            response = self.session.post(
                url,
                data=payload,
                headers=headers,
                timeout=(transport.timeout_connect, transport.timeout_read),
            )
        except requests.RequestException as e:
            raise TransportError(
                f"SOAP request to {url} failed: {e}. "
                "Check network connectivity and the endpoint URL."
            ) from e

        logger.info(f"Received HTTP {response.status_code} from {url}")
        logger.debug(f"SOAP response:\n{mask_secrets(response.text)}")

        try:
            return envelope_from_xml(response.content)
        except MalformedXMLError as e:
            if not response.ok:
                raise TransportError(
                    f"HTTP {response.status_code} from {url} without a SOAP envelope: "
                    f"{response.reason}"
                ) from e
            raise

    def call(
        self,
        url: Optional[str],
        action: Optional[str],
        body: Any,
        response_type: Optional[Type[T]] = None,
        headers: Iterable[Any] = (),
    ) -> Any:
        """Build an envelope, send it and decode the response body.

        Args:
            url: Endpoint URL (falls back to config.default_endpoint)
            action: SOAPAction value
            body: Body element or registered typed value
            response_type: Registered type to decode the response body into;
                None returns the response envelope
            headers: Header elements or typed headers, in order

        Returns:
            Decoded response body, or the response envelope

        Raises:
            FaultError: If the service answered with a SOAP fault
            DecodingError: If the response body does not match response_type
            TransportError: If the request fails
        """
        envelope = Envelope()
        if isinstance(body, etree._Element):
            set_body(envelope, body)
        else:
            set_body_value(envelope, body)

        with_headers(
            envelope,
            [h if isinstance(h, etree._Element) else encode(h) for h in headers],
        )

        response = self.send(url, action, envelope)

        if response_type is None:
            raise_if_faulted(response)
            return response
        return get_body(response, response_type)

    def _resolve_url(self, url: Optional[str]) -> str:
        resolved = url or self.config.default_endpoint
        if not resolved:
            raise InvalidArgumentError("url")
        return resolved

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()

    def __enter__(self) -> "SoapClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
