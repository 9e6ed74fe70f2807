"""Integration test fixtures and configuration.

This module provides a mock calculator SOAP service built with Flask. It is
started once per test session on a free local port so the tests can send
real HTTP requests through SoapClient.

The service implements one operation, Add. It answers with a SOAP fault
(HTTP 500) when the WS-Security credentials are wrong or an operand is
negative, and echoes the Action header it received in the response header.
"""

import logging
import socket
import threading
import time
from typing import Generator

import pytest
import requests
from flask import Flask, Response, request
from lxml import etree
from werkzeug.serving import make_server

from soap_samples import CALC_NS, SOAP_NS

logger = logging.getLogger(__name__)

WSSE_NS = "http://docs.oasis-open.org/wss/2004/01/oasis-200401-wss-wssecurity-secext-1.0.xsd"
ADDRESSING_NS = "http://schemas.microsoft.com/ws/2005/05/addressing/none"

VALID_USERNAME = "alice"
VALID_PASSWORD = "secret"


# =============================================================================
# Utility Functions
# =============================================================================


def find_free_port() -> int:
    """Find an available port on localhost.

    Returns:
        int: An available port number.
    """
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        s.listen(1)
        return s.getsockname()[1]


def wait_for_server(url: str, timeout: float = 10.0, interval: float = 0.1) -> bool:
    """Wait for server to become available.

    Returns:
        bool: True if server became available, False if timeout.
    """
    start_time = time.time()
    while time.time() - start_time < timeout:
        try:
            if requests.get(url, timeout=1).status_code == 200:
                return True
        except requests.exceptions.RequestException:
            pass
        time.sleep(interval)
    return False


def _soap_response(body: str, status: int = 200, header: str = "") -> Response:
    header_xml = f"<s:Header>{header}</s:Header>" if header else ""
    xml = (
        f'<?xml version="1.0" encoding="utf-8"?>'
        f'<s:Envelope xmlns:s="{SOAP_NS}">{header_xml}<s:Body>{body}</s:Body></s:Envelope>'
    )
    return Response(xml, status=status, content_type="text/xml; charset=utf-8")


def _fault(code: str, message: str) -> Response:
    return _soap_response(
        f"<s:Fault><faultcode>s:{code}</faultcode>"
        f"<faultstring>{message}</faultstring></s:Fault>",
        status=500,
    )


def create_calculator_app() -> Flask:
    """Create the mock calculator service."""
    app = Flask(__name__)

    @app.route("/health")
    def health() -> str:
        return "ok"

    @app.route("/Calculator.svc", methods=["POST"])
    def calculator() -> Response:
        try:
            envelope = etree.fromstring(request.get_data())
        except etree.XMLSyntaxError:
            return Response("Bad Request", status=400, content_type="text/plain")

        header = envelope.find(f"{{{SOAP_NS}}}Header")
        username = password = action = None
        if header is not None:
            username = header.findtext(f".//{{{WSSE_NS}}}Username")
            password = header.findtext(f".//{{{WSSE_NS}}}Password")
            action = header.findtext(f"{{{ADDRESSING_NS}}}Action")

        if (username, password) != (VALID_USERNAME, VALID_PASSWORD):
            return _fault("Client", "Authentication failed")

        add = envelope.find(f"{{{SOAP_NS}}}Body/{{{CALC_NS}}}Add")
        if add is None:
            return _fault("Client", "Unknown operation")

        a = int(add.findtext(f"{{{CALC_NS}}}a"))
        b = int(add.findtext(f"{{{CALC_NS}}}b"))
        if a < 0 or b < 0:
            return _fault("Server", "Operands must not be negative")

        echo = f'<a:Action xmlns:a="{ADDRESSING_NS}">{action}</a:Action>' if action else ""
        return _soap_response(
            f'<AddResponse xmlns="{CALC_NS}"><AddResult>{a + b}</AddResult></AddResponse>',
            header=echo,
        )

    @app.route("/html-error", methods=["POST"])
    def html_error() -> Response:
        return Response("<html>Bad Gateway</html>", status=502, content_type="text/html")

    return app


# =============================================================================
# Mock Server Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def mock_server_url() -> Generator[str, None, None]:
    """Session-scoped fixture that runs the mock service in a thread.

    Yields:
        str: Base URL (e.g., "http://127.0.0.1:8080").
    """
    host = "127.0.0.1"
    port = find_free_port()
    server = make_server(host, port, create_calculator_app(), threaded=True)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()

    base_url = f"http://{host}:{port}"
    if not wait_for_server(f"{base_url}/health"):
        server.shutdown()
        pytest.fail(f"Mock server failed to start at {base_url}")

    logger.info(f"Mock server started at {base_url}")
    yield base_url

    server.shutdown()
    thread.join(timeout=5)
    logger.info("Mock server stopped")


@pytest.fixture
def calculator_url(mock_server_url: str) -> str:
    """Get the calculator endpoint URL."""
    return f"{mock_server_url}/Calculator.svc"
