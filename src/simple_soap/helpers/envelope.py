"""Helper functions for building and inspecting SOAP envelopes.

Every function takes the envelope explicitly, validates its arguments before
touching it, and returns the same envelope so calls can be chained:

    >>> envelope = with_header_values(
    ...     set_body_value(Envelope(), request),
    ...     action("http://tempuri.org/IService/Ping"),
    ... )
"""

import logging
from typing import Any, Iterable, Optional, Type, TypeVar, Union

from lxml import etree

from simple_soap.constants import SOAP_FAULT_TAG
from simple_soap.models.envelope import Body, Envelope, Fault, Header
from simple_soap.utils.exceptions import FaultError
from simple_soap.utils.guards import require
from simple_soap.xml.mapper import decode, encode

logger = logging.getLogger(__name__)

T = TypeVar("T")

QualifiedName = Union[str, etree.QName]


# Body


def set_body(envelope: Envelope, element: Optional[etree._Element]) -> Envelope:
    """Set the given element as the envelope body.

    Creates the body if the envelope has none. The element shape is not
    validated.

    Args:
        envelope: Envelope to change
        element: Body payload element

    Returns:
        The same envelope

    Raises:
        InvalidArgumentError: If envelope is None
    """
    require(envelope=envelope)

    if envelope.body is None:
        envelope.body = Body()

    envelope.body.value = element
    return envelope


def set_body_value(envelope: Envelope, value: Any) -> Envelope:
    """Encode a typed value and set it as the envelope body.

    Raises:
        InvalidArgumentError: If envelope is None
        EncodingError: If the value's type has no registered schema
    """
    require(envelope=envelope)
    return set_body(envelope, encode(value))


def get_body(envelope: Envelope, cls: Type[T]) -> T:
    """Decode the envelope body into the given type.

    Faults are checked first: a faulted envelope raises FaultError and the
    body is never decoded as ``cls``.

    Args:
        envelope: Envelope to read
        cls: Registered body type

    Returns:
        Decoded body

    Raises:
        InvalidArgumentError: If envelope or cls is None
        FaultError: If the body is a SOAP fault
        DecodingError: If the body does not match ``cls``
    """
    require(envelope=envelope, cls=cls)

    raise_if_faulted(envelope)

    value = envelope.body.value if envelope.body is not None else None
    return decode(value, cls)


# Headers


def with_headers(envelope: Envelope, *headers: Any) -> Envelope:
    """Append header elements after the envelope's existing headers.

    Accepts elements as positional arguments or a single iterable of
    elements. Existing headers are kept in order; nothing is replaced or
    deduplicated.

    Args:
        envelope: Envelope to change
        *headers: Header elements, or one iterable of them

    Returns:
        The same envelope

    Raises:
        InvalidArgumentError: If envelope or headers is None

    Example:
        >>> with_headers(envelope, action_element, to_element)
        >>> with_headers(envelope, [action_element, to_element])
    """
    elements = _flatten(headers)
    require(envelope=envelope, headers=elements)

    if not elements:
        return envelope

    if envelope.header is None:
        envelope.header = Header(headers=list(elements))
    else:
        envelope.header.headers = list(envelope.header.headers) + list(elements)

    logger.debug(f"Appended {len(elements)} header(s) to SOAP envelope")
    return envelope


def with_header_values(envelope: Envelope, *headers: Any) -> Envelope:
    """Encode typed headers and append them in call order.

    Args:
        envelope: Envelope to change
        *headers: Typed headers (e.g., from ``action`` or ``to``), or one
            iterable of them

    Returns:
        The same envelope

    Raises:
        InvalidArgumentError: If envelope or headers is None
        EncodingError: If a header type has no registered schema
    """
    values = _flatten(headers)
    require(envelope=envelope, headers=values)

    if not values:
        return envelope

    return with_headers(envelope, [encode(value) for value in values])


def get_header(envelope: Envelope, name: QualifiedName) -> Optional[etree._Element]:
    """Return the first header element with the given qualified name.

    Matching compares namespace and local name exactly.

    Args:
        envelope: Envelope to read
        name: Qualified name in Clark notation ("{ns}local") or an
            ``lxml.etree.QName``

    Returns:
        The first matching element, or None

    Raises:
        InvalidArgumentError: If envelope or name is None
    """
    require(envelope=envelope, name=name)

    if envelope.header is None or not envelope.header.headers:
        return None

    wanted = etree.QName(name).text
    for element in envelope.header.headers:
        if etree.QName(element).text == wanted:
            return element
    return None


def get_header_value(
    envelope: Envelope, name: QualifiedName, cls: Type[T]
) -> Optional[T]:
    """Return the first header with the given name, decoded into ``cls``.

    Returns None when no header matches; no default instance is built.

    Raises:
        InvalidArgumentError: If envelope, name or cls is None
        DecodingError: If the matching element does not fit ``cls``
    """
    require(envelope=envelope, name=name, cls=cls)

    element = get_header(envelope, name)
    if element is None:
        return None
    return decode(element, cls)


# Faults


def is_faulted(envelope: Envelope) -> bool:
    """Does the envelope body hold a SOAP fault?

    Only the body element's qualified name is checked.

    Raises:
        InvalidArgumentError: If envelope is None
    """
    require(envelope=envelope)

    body = envelope.body
    return body is not None and body.value is not None and body.value.tag == SOAP_FAULT_TAG


def get_fault(envelope: Envelope) -> Fault:
    """Decode the envelope body as a SOAP fault.

    The body is decoded whether or not it is a fault; check ``is_faulted``
    first.

    Raises:
        InvalidArgumentError: If envelope is None
        DecodingError: If the body is not a fault
    """
    require(envelope=envelope)

    value = envelope.body.value if envelope.body is not None else None
    return decode(value, Fault)


def raise_if_faulted(envelope: Envelope) -> None:
    """Raise FaultError if the envelope body holds a SOAP fault.

    Raises:
        InvalidArgumentError: If envelope is None
        FaultError: Carrying code, string, actor and detail of the fault
    """
    require(envelope=envelope)

    if not is_faulted(envelope):
        return

    fault = get_fault(envelope)
    logger.debug(f"SOAP fault in envelope: {fault.code} - {fault.string}")
    raise FaultError(
        code=fault.code,
        string=fault.string,
        actor=fault.actor,
        detail=fault.detail,
    )


def _flatten(items: tuple) -> Optional[list]:
    # Single iterable argument (list, tuple, generator) or varargs
    if len(items) == 1 and not isinstance(items[0], etree._Element):
        only = items[0]
        if only is None:
            return None
        if isinstance(only, Iterable) and not isinstance(only, (str, bytes)):
            return list(only)
    return list(items)
