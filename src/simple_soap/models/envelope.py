"""Data models for the SOAP 1.1 envelope.

This module defines dataclasses for the on-wire shape of a SOAP message:
the envelope root, its optional header section, its body and the standard
fault payload. Their XML shape is declared in ``simple_soap.xml.schemas``.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from lxml import etree


@dataclass
class Header:
    """SOAP header section.

    Attributes:
        headers: Header elements in insertion order. Several elements may
            share a qualified name.
    """

    headers: List[etree._Element] = field(default_factory=list)


@dataclass
class Body:
    """SOAP body section.

    Attributes:
        value: Payload element, or a soapenv:Fault element on the fault path.
            None for an empty body.
    """

    value: Optional[etree._Element] = None


@dataclass
class Envelope:
    """SOAP 1.1 envelope.

    A well-formed envelope always has a body; the header section is only
    present once headers have been attached.

    Attributes:
        header: Optional header section
        body: Body section

    Example:
        >>> envelope = Envelope()
        >>> set_body(envelope, request_element)
        >>> with_header_values(envelope, action("urn:Ping"))
    """

    header: Optional[Header] = None
    body: Body = field(default_factory=Body)


@dataclass
class Fault:
    """SOAP 1.1 fault payload.

    Attributes:
        code: faultcode (e.g., "soapenv:Client", "soapenv:Server")
        string: faultstring, human-readable explanation
        actor: faultactor, URI of the node that raised the fault
        detail: detail element with application-specific content
    """

    code: str
    string: str
    actor: Optional[str] = None
    detail: Optional[etree._Element] = None
