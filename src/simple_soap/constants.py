"""Namespace URIs and fixed values shared across the package.

All values here are module-level constants and are never mutated at runtime.
"""

from datetime import timedelta
from typing import Dict

# SOAP 1.1 envelope namespace
SOAP_ENV_NS = "http://schemas.xmlsoap.org/soap/envelope/"

# OASIS WS-Security 1.0 namespaces
WSSE_NS = "http://docs.oasis-open.org/wss/2004/01/oasis-200401-wss-wssecurity-secext-1.0.xsd"
WSU_NS = "http://docs.oasis-open.org/wss/2004/01/oasis-200401-wss-wssecurity-utility-1.0.xsd"

# Addressing namespace used by WCF services for Action/To headers
ADDRESSING_NS = "http://schemas.microsoft.com/ws/2005/05/addressing/none"

# Password type marker for plaintext username tokens
PASSWORD_TEXT_TYPE = (
    "http://docs.oasis-open.org/wss/2004/01/"
    "oasis-200401-wss-username-token-profile-1.0#PasswordText"
)

# Qualified name of the SOAP 1.1 fault element, in Clark notation
SOAP_FAULT_TAG = f"{{{SOAP_ENV_NS}}}Fault"

# Prefixes used when serializing
NSMAP: Dict[str, str] = {
    "soapenv": SOAP_ENV_NS,
    "wsse": WSSE_NS,
    "wsu": WSU_NS,
    "a": ADDRESSING_NS,
}

# Username token freshness window (Expires = Created + window)
SECURITY_TIMESTAMP_VALIDITY = timedelta(minutes=15)

# Serialized values of the mustUnderstand attribute
MUST_UNDERSTAND = 1
MAY_IGNORE = 0
