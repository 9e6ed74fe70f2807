"""
Shared pytest configuration and fixtures.

This module provides fixtures used across the unit and integration suites:
a fixed clock and id source for WS-Security headers, a body payload and
canned SOAP response documents. Sample body types live in soap_samples.
"""

import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Generator

import pytest
from lxml import etree

from soap_samples import CALC_NS, SOAP_NS


@pytest.fixture
def project_root() -> Path:
    """
    Return the project root directory.

    Returns:
        Path: Absolute path to the project root directory.
    """
    return Path(__file__).parent.parent


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed creation instant for security headers."""
    return datetime(2024, 3, 1, 12, 30, 45, 123000, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock(fixed_now: datetime) -> Callable[[], datetime]:
    """Clock that always returns ``fixed_now``."""
    return lambda: fixed_now


@pytest.fixture
def fixed_ids() -> Callable[[], str]:
    """Id source that always returns the same hex string."""
    return lambda: "0123456789abcdef0123456789abcdef"


@pytest.fixture
def payload_element() -> etree._Element:
    """Untyped body payload element."""
    return etree.fromstring(
        f'<Ping xmlns="{CALC_NS}"><Message>hello</Message></Ping>'
    )


@pytest.fixture
def add_response_xml() -> bytes:
    """Successful response envelope for AddRequest(a=2, b=3)."""
    return (
        f'<?xml version="1.0" encoding="utf-8"?>'
        f'<s:Envelope xmlns:s="{SOAP_NS}">'
        f"<s:Body>"
        f'<AddResponse xmlns="{CALC_NS}"><AddResult>5</AddResult></AddResponse>'
        f"</s:Body>"
        f"</s:Envelope>"
    ).encode("utf-8")


@pytest.fixture
def fault_xml() -> bytes:
    """SOAP 1.1 fault envelope with actor and detail."""
    return (
        f'<?xml version="1.0" encoding="utf-8"?>'
        f'<s:Envelope xmlns:s="{SOAP_NS}">'
        f"<s:Body>"
        f"<s:Fault>"
        f"<faultcode>s:Client</faultcode>"
        f"<faultstring>Invalid operands</faultstring>"
        f"<faultactor>http://legacy.example.com/Calculator.svc</faultactor>"
        f'<detail><Reason xmlns="{CALC_NS}">b must be positive</Reason></detail>'
        f"</s:Fault>"
        f"</s:Body>"
        f"</s:Envelope>"
    ).encode("utf-8")


@pytest.fixture
def body_file(tmp_path: Path) -> Generator[Path, None, None]:
    """Body payload file for CLI tests."""
    path = tmp_path / "add.xml"
    path.write_text(f'<Add xmlns="{CALC_NS}"><a>2</a><b>3</b></Add>', encoding="utf-8")
    yield path


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove SIMPLE_SOAP_* variables so the host environment cannot leak in."""
    for key in list(os.environ):
        if key.startswith("SIMPLE_SOAP_"):
            monkeypatch.delenv(key, raising=False)
