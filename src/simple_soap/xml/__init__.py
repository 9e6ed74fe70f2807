"""XML module.

This module provides the schema-driven object mapper, the built-in schemas
and envelope serialization.
"""

from simple_soap.xml.mapper import (
    FieldKind,
    XmlField,
    XmlSchema,
    decode,
    encode,
    get_schema,
    register_schema,
)
from simple_soap.xml import schemas  # noqa: F401  registers built-in schemas
from simple_soap.xml.serialization import (
    element_from_xml,
    envelope_from_xml,
    envelope_to_xml,
)

__all__ = [
    "FieldKind",
    "XmlField",
    "XmlSchema",
    "decode",
    "element_from_xml",
    "encode",
    "envelope_from_xml",
    "envelope_to_xml",
    "get_schema",
    "register_schema",
]
