"""Transport module.

This module provides the HTTP SOAP client.
"""

from simple_soap.transport.soap_client import SoapClient

__all__ = ["SoapClient"]
