"""Conversion between Envelope models and raw XML bytes."""

import logging
from typing import Union

from lxml import etree

from simple_soap.constants import SOAP_ENV_NS
from simple_soap.models.envelope import Envelope
from simple_soap.utils.exceptions import MalformedXMLError
from simple_soap.utils.guards import require
from simple_soap.xml.mapper import decode, encode

logger = logging.getLogger(__name__)

ENVELOPE_TAG = f"{{{SOAP_ENV_NS}}}Envelope"


def _parser() -> etree.XMLParser:
    # No entity expansion or network access for untrusted responses
    return etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        remove_blank_text=True,
        huge_tree=False,
    )


def envelope_to_xml(envelope: Envelope, pretty_print: bool = False) -> bytes:
    """Serialize an envelope to UTF-8 XML bytes with an XML declaration.

    Args:
        envelope: Envelope to serialize
        pretty_print: Indent the output

    Returns:
        Serialized envelope

    Raises:
        InvalidArgumentError: If envelope is None
        EncodingError: If a required part of the envelope is missing

    Example:
        >>> data = envelope_to_xml(envelope)
        >>> data.startswith(b"<?xml")
        True
    """
    require(envelope=envelope)

    root = encode(envelope)
    data = etree.tostring(
        root,
        xml_declaration=True,
        encoding="utf-8",
        pretty_print=pretty_print,
    )
    logger.debug(f"Serialized SOAP envelope ({len(data)} bytes)")
    return data


def element_from_xml(data: Union[bytes, str]) -> etree._Element:
    """Parse an XML fragment (e.g., a body payload) into an element.

    Raises:
        InvalidArgumentError: If data is None
        MalformedXMLError: If the data is not well-formed XML
    """
    require(data=data)

    if isinstance(data, str):
        data = data.encode("utf-8")

    try:
        return etree.fromstring(data, parser=_parser())
    except etree.XMLSyntaxError as e:
        raise MalformedXMLError(f"Invalid XML: {e}") from e


def envelope_from_xml(data: Union[bytes, str]) -> Envelope:
    """Parse XML bytes into an envelope.

    Args:
        data: Serialized SOAP 1.1 envelope

    Returns:
        Decoded Envelope

    Raises:
        InvalidArgumentError: If data is None
        MalformedXMLError: If the data is not well-formed XML or its root
            is not a SOAP 1.1 envelope
        DecodingError: If the envelope has no Body

    Example:
        >>> envelope = envelope_from_xml(response.content)
        >>> is_faulted(envelope)
        False
    """
    require(data=data)

    if isinstance(data, str):
        data = data.encode("utf-8")

    try:
        root = etree.fromstring(data, parser=_parser())
    except etree.XMLSyntaxError as e:
        raise MalformedXMLError(
            f"Invalid SOAP envelope XML: {e}. "
            "Response is not valid XML."
        ) from e

    # Root check first so a non-envelope document is a parse error, not a decode error
    if root.tag != ENVELOPE_TAG:
        raise MalformedXMLError(
            f"Expected root element {ENVELOPE_TAG}, got: {root.tag}. "
            "Only SOAP 1.1 envelopes are supported."
        )

    envelope = decode(root, Envelope)
    logger.debug(f"Parsed SOAP envelope ({len(data)} bytes)")
    return envelope
