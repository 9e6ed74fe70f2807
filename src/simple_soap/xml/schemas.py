"""XML schemas of the built-in envelope and header models.

All wire shapes of the package are declared here, in one place. Importing
``simple_soap.xml`` registers them.
"""

from datetime import datetime

from simple_soap.constants import (
    ADDRESSING_NS,
    MAY_IGNORE,
    NSMAP,
    PASSWORD_TEXT_TYPE,
    SOAP_ENV_NS,
    WSSE_NS,
    WSU_NS,
)
from simple_soap.models.envelope import Body, Envelope, Fault, Header
from simple_soap.models.headers import (
    ActionHeader,
    Timestamp,
    ToHeader,
    UsernameToken,
    UsernameTokenAndPasswordTextHeader,
    UsernameTokenPasswordText,
)
from simple_soap.xml.mapper import FieldKind, XmlField, XmlSchema, register_schema

# soapenv:mustUnderstand; an absent attribute means the header may be ignored
MUST_UNDERSTAND_FIELD = XmlField(
    "must_understand",
    "mustUnderstand",
    SOAP_ENV_NS,
    kind=FieldKind.ATTRIBUTE,
    type=int,
    required=False,
    default=MAY_IGNORE,
)

ENVELOPE_SCHEMA = XmlSchema(
    name="Envelope",
    namespace=SOAP_ENV_NS,
    fields=(
        XmlField("header", "Header", SOAP_ENV_NS, type=Header, required=False),
        XmlField("body", "Body", SOAP_ENV_NS, type=Body),
    ),
    nsmap=NSMAP,
)

HEADER_SCHEMA = XmlSchema(
    name="Header",
    namespace=SOAP_ENV_NS,
    fields=(XmlField("headers", kind=FieldKind.ANY, required=False, many=True),),
    nsmap={"soapenv": SOAP_ENV_NS},
)

BODY_SCHEMA = XmlSchema(
    name="Body",
    namespace=SOAP_ENV_NS,
    fields=(XmlField("value", kind=FieldKind.ANY, required=False),),
    nsmap={"soapenv": SOAP_ENV_NS},
)

# SOAP 1.1 fault children are unqualified
FAULT_SCHEMA = XmlSchema(
    name="Fault",
    namespace=SOAP_ENV_NS,
    fields=(
        XmlField("code", "faultcode"),
        XmlField("string", "faultstring"),
        XmlField("actor", "faultactor", required=False),
        XmlField("detail", "detail", kind=FieldKind.RAW, required=False),
    ),
    nsmap={"soapenv": SOAP_ENV_NS},
)

ACTION_SCHEMA = XmlSchema(
    name="Action",
    namespace=ADDRESSING_NS,
    fields=(
        MUST_UNDERSTAND_FIELD,
        XmlField("action", kind=FieldKind.TEXT),
    ),
    nsmap={"a": ADDRESSING_NS, "soapenv": SOAP_ENV_NS},
)

TO_SCHEMA = XmlSchema(
    name="To",
    namespace=ADDRESSING_NS,
    fields=(
        MUST_UNDERSTAND_FIELD,
        XmlField("to", kind=FieldKind.TEXT),
    ),
    nsmap={"a": ADDRESSING_NS, "soapenv": SOAP_ENV_NS},
)

TIMESTAMP_SCHEMA = XmlSchema(
    name="Timestamp",
    namespace=WSU_NS,
    fields=(
        XmlField("id", "Id", WSU_NS, kind=FieldKind.ATTRIBUTE),
        XmlField(
            "created", "Created", WSU_NS, type=datetime, timespec="milliseconds"
        ),
        XmlField(
            "expires", "Expires", WSU_NS, type=datetime, timespec="milliseconds"
        ),
    ),
    nsmap={"wsu": WSU_NS},
)

PASSWORD_TEXT_SCHEMA = XmlSchema(
    name="Password",
    namespace=WSSE_NS,
    fields=(
        XmlField(
            "type",
            "Type",
            kind=FieldKind.ATTRIBUTE,
            required=False,
            default=PASSWORD_TEXT_TYPE,
        ),
        XmlField("value", kind=FieldKind.TEXT),
    ),
    nsmap={"wsse": WSSE_NS},
)

USERNAME_TOKEN_SCHEMA = XmlSchema(
    name="UsernameToken",
    namespace=WSSE_NS,
    fields=(
        XmlField("id", "Id", WSU_NS, kind=FieldKind.ATTRIBUTE),
        XmlField("username", "Username", WSSE_NS),
        XmlField("password", "Password", WSSE_NS, type=UsernameTokenPasswordText),
    ),
    nsmap={"wsse": WSSE_NS, "wsu": WSU_NS},
)

SECURITY_SCHEMA = XmlSchema(
    name="Security",
    namespace=WSSE_NS,
    fields=(
        MUST_UNDERSTAND_FIELD,
        XmlField("timestamp", "Timestamp", WSU_NS, type=Timestamp, required=False),
        XmlField(
            "username_token",
            "UsernameToken",
            WSSE_NS,
            type=UsernameToken,
            required=False,
        ),
    ),
    nsmap={"soapenv": SOAP_ENV_NS, "wsse": WSSE_NS, "wsu": WSU_NS},
)

BUILTIN_SCHEMAS = {
    Envelope: ENVELOPE_SCHEMA,
    Header: HEADER_SCHEMA,
    Body: BODY_SCHEMA,
    Fault: FAULT_SCHEMA,
    ActionHeader: ACTION_SCHEMA,
    ToHeader: TO_SCHEMA,
    Timestamp: TIMESTAMP_SCHEMA,
    UsernameTokenPasswordText: PASSWORD_TEXT_SCHEMA,
    UsernameToken: USERNAME_TOKEN_SCHEMA,
    UsernameTokenAndPasswordTextHeader: SECURITY_SCHEMA,
}

for _cls, _schema in BUILTIN_SCHEMAS.items():
    register_schema(_cls, _schema)
