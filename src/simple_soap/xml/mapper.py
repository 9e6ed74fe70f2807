"""Schema-driven mapping between dataclass instances and lxml elements.

Every mappable type is described by an ``XmlSchema`` (element name, namespace
and ordered fields) kept in a single registry. The built-in envelope and
header schemas are declared in ``simple_soap.xml.schemas``; applications
register their own body and header types with ``register_schema``.

Example:
    >>> @dataclass
    ... class Ping:
    ...     message: str
    >>> register_schema(Ping, XmlSchema(
    ...     name="Ping",
    ...     namespace="urn:example",
    ...     fields=(XmlField("message", "Message", "urn:example"),),
    ... ))
    >>> element = encode(Ping(message="hello"))
    >>> decode(element, Ping)
    Ping(message='hello')
"""

import copy
import logging
import math
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Type, TypeVar

from lxml import etree

from simple_soap.utils.exceptions import DecodingError, EncodingError
from simple_soap.utils.guards import require

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Types a field can hold as text; anything else must be a registered type
SCALAR_TYPES = (str, int, bool, float, Decimal, datetime)

_FRACTION = re.compile(r"(T\d{2}:\d{2}:\d{2})\.(\d+)")


class FieldKind(Enum):
    """How a field is laid out in XML.

    Attributes:
        ELEMENT: Child element holding a scalar as text, or a nested
            registered type
        ATTRIBUTE: Attribute of the owner element
        TEXT: Text content of the owner element
        ANY: Arbitrary child element(s), kept as lxml elements
        RAW: Named child element, kept as an lxml element
    """

    ELEMENT = "element"
    ATTRIBUTE = "attribute"
    TEXT = "text"
    ANY = "any"
    RAW = "raw"


def _clark(name: Optional[str], namespace: Optional[str]) -> Optional[str]:
    if name is None:
        return None
    if namespace:
        return f"{{{namespace}}}{name}"
    return name


@dataclass(frozen=True)
class XmlField:
    """XML layout of one dataclass attribute.

    Attributes:
        attr: Python attribute name
        name: XML local name (unused for TEXT and ANY fields)
        namespace: XML namespace URI, None for unqualified names
        kind: Layout of the field
        type: Scalar type (one of SCALAR_TYPES) or a registered type
        required: Whether a missing value is an error
        many: ANY fields only, collect every child element into a list
        default: Value used when an optional field is missing on decode;
            None leaves the dataclass default in place
        timespec: datetime fields only; "milliseconds" writes the UTC
            ``.mmmZ`` form of WS-Security timestamps, None writes a lossless
            form with microseconds
    """

    attr: str
    name: Optional[str] = None
    namespace: Optional[str] = None
    kind: FieldKind = FieldKind.ELEMENT
    type: Any = str
    required: bool = True
    many: bool = False
    default: Any = None
    timespec: Optional[str] = None

    @property
    def tag(self) -> Optional[str]:
        return _clark(self.name, self.namespace)


@dataclass(frozen=True)
class XmlSchema:
    """XML layout of a mappable type.

    Attributes:
        name: Root element local name
        namespace: Root element namespace URI
        fields: Field layouts in document order
        nsmap: Prefix declarations placed on the root element when encoding
    """

    name: str
    namespace: Optional[str]
    fields: Tuple[XmlField, ...] = ()
    nsmap: Optional[Dict[Optional[str], str]] = None

    @property
    def tag(self) -> str:
        return _clark(self.name, self.namespace)


_SCHEMAS: Dict[type, XmlSchema] = {}


def register_schema(cls: type, schema: XmlSchema) -> None:
    """Register the XML schema of a type.

    Registering a type twice replaces its schema.

    Args:
        cls: Dataclass to map
        schema: Its XML layout
    """
    _SCHEMAS[cls] = schema
    logger.debug(f"Registered XML schema {schema.tag} for {cls.__name__}")


def get_schema(cls: type) -> Optional[XmlSchema]:
    """Return the registered schema of a type, or None."""
    return _SCHEMAS.get(cls)


def format_timestamp(value: datetime) -> str:
    """Format a datetime as UTC ISO 8601 with milliseconds and a Z suffix.

    This is the wsu:Created/wsu:Expires form. Naive datetimes are taken to be
    UTC already.

    Example:
        >>> format_timestamp(datetime(2024, 1, 2, 3, 4, 5, 678000, timezone.utc))
        '2024-01-02T03:04:05.678Z'
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime('%Y-%m-%dT%H:%M:%S.%f')[:-3] + 'Z'


def parse_timestamp(text: str) -> datetime:
    """Parse an ISO 8601 timestamp into an aware UTC datetime.

    Raises:
        ValueError: If the text is not a valid timestamp
    """
    parsed = parse_datetime(text)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_datetime(value: datetime) -> str:
    """Format a datetime as ISO 8601 with microseconds.

    Aware values are written in UTC with a Z suffix, naive values without an
    offset, so ``parse_datetime`` gives back an equal value.

    Example:
        >>> format_datetime(datetime(2024, 1, 2, 3, 4, 5, 123456, timezone.utc))
        '2024-01-02T03:04:05.123456Z'
    """
    if value.tzinfo is None:
        return value.isoformat(timespec="microseconds")
    utc = value.astimezone(timezone.utc).replace(tzinfo=None)
    return utc.isoformat(timespec="microseconds") + "Z"


def parse_datetime(text: str) -> datetime:
    """Parse an ISO 8601 datetime, keeping naive values naive.

    Offsets are converted to UTC. Fractions longer than microseconds (e.g.,
    the seven digits .NET services send) are truncated.

    Raises:
        ValueError: If the text is not a valid datetime
    """
    text = text.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _FRACTION.sub(
        lambda m: f"{m.group(1)}.{m.group(2)[:6].ljust(6, '0')}", text
    )
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        return parsed
    return parsed.astimezone(timezone.utc)


def _format_float(value: float) -> str:
    # xs:double literals for the special values
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "INF" if value > 0 else "-INF"
    return repr(value)


def _format_scalar(value: Any, fld: XmlField, where: str) -> str:
    type_ = fld.type
    try:
        if type_ is datetime:
            if fld.timespec == "milliseconds":
                return format_timestamp(value)
            return format_datetime(value)
        if type_ is bool:
            return "true" if value else "false"
        if type_ is int:
            return str(int(value))
        if type_ is float:
            return _format_float(float(value))
        if type_ is Decimal:
            return format(Decimal(value), "f")
        if type_ is str:
            return str(value)
    except (TypeError, ValueError, AttributeError, ArithmeticError) as e:
        raise EncodingError(
            f"Cannot write {value!r} as {type_.__name__} in {where}: {e}"
        ) from e
    raise EncodingError(
        f"Unsupported field type {type_!r} in {where}. "
        f"Use one of {', '.join(t.__name__ for t in SCALAR_TYPES)} "
        "or a registered type."
    )


def _parse_scalar(text: Optional[str], fld: XmlField, where: str) -> Any:
    type_ = fld.type
    text = text or ""
    try:
        if type_ is datetime:
            if fld.timespec == "milliseconds":
                return parse_timestamp(text)
            return parse_datetime(text)
        if type_ is bool:
            lowered = text.strip().lower()
            if lowered in ("true", "1"):
                return True
            if lowered in ("false", "0"):
                return False
            raise ValueError(f"invalid boolean literal {text!r}")
        if type_ is int:
            return int(text.strip())
        if type_ is float:
            return float(text.strip())
        if type_ is Decimal:
            return Decimal(text.strip())
        if type_ is str:
            return text
    except (ValueError, ArithmeticError) as e:
        raise DecodingError(
            f"Invalid {type_.__name__} value {text!r} in {where}: {e}"
        ) from e
    raise DecodingError(
        f"Unsupported field type {type_!r} in {where}. "
        f"Use one of {', '.join(t.__name__ for t in SCALAR_TYPES)} "
        "or a registered type."
    )


def _child_elements(element: etree._Element):
    # Skip comments and processing instructions
    return [child for child in element if isinstance(child.tag, str)]


def encode(value: Any) -> etree._Element:
    """Encode a registered value into a new lxml element.

    Args:
        value: Instance of a type registered with ``register_schema``

    Returns:
        Root element named after the type's schema

    Raises:
        EncodingError: If the type has no schema, a required field is None
            or a scalar cannot be written as its field type
    """
    if value is None:
        raise EncodingError("Cannot encode None. Provide a value with a registered schema.")

    schema = get_schema(type(value))
    if schema is None:
        raise EncodingError(
            f"No XML schema registered for {type(value).__name__}. "
            "Register one with register_schema()."
        )

    element = etree.Element(schema.tag, nsmap=schema.nsmap)
    _write_fields(element, value, schema)
    return element


def _write_fields(element: etree._Element, value: Any, schema: XmlSchema) -> None:
    where = f"<{schema.tag}>"
    for fld in schema.fields:
        field_value = getattr(value, fld.attr)
        if field_value is None:
            if fld.required:
                raise EncodingError(
                    f"{type(value).__name__}.{fld.attr} is required for <{schema.name}>."
                )
            continue

        if fld.kind is FieldKind.ATTRIBUTE:
            element.set(fld.tag, _format_scalar(field_value, fld, f"{where}@{fld.tag}"))
        elif fld.kind is FieldKind.TEXT:
            element.text = _format_scalar(field_value, fld, where)
        elif fld.kind is FieldKind.ANY:
            items = field_value if fld.many else [field_value]
            for item in items:
                element.append(copy.deepcopy(item))
        elif fld.kind is FieldKind.RAW:
            child = copy.deepcopy(field_value)
            child.tag = fld.tag
            element.append(child)
        else:
            child = etree.SubElement(element, fld.tag)
            nested = get_schema(fld.type)
            if nested is not None:
                _write_fields(child, field_value, nested)
            else:
                child.text = _format_scalar(field_value, fld, f"{where}/{fld.tag}")


def decode(element: Optional[etree._Element], cls: Type[T]) -> T:
    """Decode an lxml element into an instance of a registered type.

    The element's qualified name must equal the schema's root name. Unknown
    children and attributes are ignored.

    Args:
        element: Element to decode
        cls: Target type

    Returns:
        New instance of ``cls``

    Raises:
        InvalidArgumentError: If cls is None
        DecodingError: If the element is None, its name does not match, a
            required field is missing or a scalar cannot be parsed
    """
    require(cls=cls)

    if element is None:
        raise DecodingError(f"Cannot decode an absent element as {cls.__name__}.")

    schema = get_schema(cls)
    if schema is None:
        raise DecodingError(
            f"No XML schema registered for {cls.__name__}. "
            "Register one with register_schema()."
        )

    if element.tag != schema.tag:
        raise DecodingError(
            f"Cannot decode <{element.tag}> as {cls.__name__}: "
            f"expected <{schema.tag}>."
        )

    return _read_fields(element, cls, schema)


def _read_fields(element: etree._Element, cls: type, schema: XmlSchema) -> Any:
    kwargs: Dict[str, Any] = {}
    where = f"<{element.tag}>"

    for fld in schema.fields:
        found = True
        if fld.kind is FieldKind.ATTRIBUTE:
            raw = element.get(fld.tag)
            if raw is None:
                found = False
            else:
                kwargs[fld.attr] = _parse_scalar(raw, fld, f"{where}@{fld.tag}")
        elif fld.kind is FieldKind.TEXT:
            kwargs[fld.attr] = _parse_scalar(element.text, fld, where)
        elif fld.kind is FieldKind.ANY:
            children = _child_elements(element)
            if fld.many:
                kwargs[fld.attr] = [copy.deepcopy(child) for child in children]
            elif children:
                kwargs[fld.attr] = copy.deepcopy(children[0])
            else:
                found = False
        elif fld.kind is FieldKind.RAW:
            child = element.find(fld.tag)
            if child is None:
                found = False
            else:
                kwargs[fld.attr] = copy.deepcopy(child)
        else:
            child = element.find(fld.tag)
            if child is None:
                found = False
            else:
                nested = get_schema(fld.type)
                if nested is not None:
                    kwargs[fld.attr] = _read_fields(child, fld.type, nested)
                else:
                    kwargs[fld.attr] = _parse_scalar(
                        child.text, fld, f"{where}/{fld.tag}"
                    )

        if not found:
            if fld.required:
                raise DecodingError(
                    f"Missing required {fld.kind.value} '{fld.tag or fld.attr}' "
                    f"in {where} while decoding {cls.__name__}."
                )
            if fld.default is not None:
                kwargs[fld.attr] = fld.default

    try:
        return cls(**kwargs)
    except TypeError as e:
        raise DecodingError(f"Cannot build {cls.__name__} from {where}: {e}") from e
