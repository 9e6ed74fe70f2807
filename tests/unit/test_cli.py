"""Unit tests for CLI commands.

This module tests the simple-soap command-line interface: the main group,
envelope building, service calls and configuration validation.
"""

import json
import logging
from unittest.mock import Mock, patch

import pytest
import requests
from click.testing import CliRunner
from lxml import etree

from simple_soap import __version__
from simple_soap.cli.main import cli
from simple_soap.constants import ADDRESSING_NS, SOAP_ENV_NS, WSSE_NS

URL = "http://localhost:8080/Calculator.svc"
ADD_ACTION = "http://tempuri.org/ICalculator/Add"
MUST_UNDERSTAND_ATTR = f"{{{SOAP_ENV_NS}}}mustUnderstand"


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo the logging setup done by the CLI group."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _http_response(content: bytes, status_code: int = 200) -> Mock:
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.ok = status_code < 400
    response.reason = "OK"
    response.content = content
    response.text = content.decode("utf-8")
    return response


class TestMainCLI:
    """Test cases for main CLI entry point."""

    def test_cli_help(self):
        """Test main CLI help output."""
        # Arrange
        runner = CliRunner()

        # Act
        result = runner.invoke(cli, ["--help"])

        # Assert
        assert result.exit_code == 0
        assert "Simple SOAP Client" in result.output
        assert "--verbose" in result.output
        assert "envelope" in result.output
        assert "call" in result.output

    def test_cli_version_option(self):
        """Test --version shows the program name and version."""
        result = CliRunner().invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "simple-soap" in result.output
        assert __version__ in result.output

    def test_cli_version_command(self):
        """Test explicit version command."""
        result = CliRunner().invoke(cli, ["version"])

        assert result.exit_code == 0
        assert f"simple-soap version {__version__}" in result.output

    def test_invalid_config_exits(self, tmp_path):
        """Test a broken configuration file stops the CLI."""
        bad = tmp_path / "bad.json"
        bad.write_text("{oops", encoding="utf-8")

        result = CliRunner().invoke(cli, ["--config", str(bad), "version"])

        assert result.exit_code == 1
        assert "Error loading configuration" in result.output


class TestEnvelopeCommand:
    """Test cases for the envelope command."""

    def test_plain_envelope(self, body_file):
        """Test an envelope without headers is printed."""
        result = CliRunner().invoke(cli, ["envelope", str(body_file)])

        assert result.exit_code == 0
        assert "<soapenv:Envelope" in result.output
        assert "soapenv:Header" not in result.output

    def test_headers_written_in_order(self, body_file, tmp_path):
        """Test Action, To and Security headers are written in order."""
        # Arrange
        output = tmp_path / "out" / "envelope.xml"

        # Act
        result = CliRunner().invoke(
            cli,
            [
                "envelope", str(body_file),
                "--action", ADD_ACTION,
                "--to", URL,
                "--username", "alice",
                "--password", "secret",
                "--output", str(output),
            ],
        )

        # Assert
        assert result.exit_code == 0
        assert "Envelope written to" in result.output
        root = etree.parse(str(output)).getroot()
        header = root.find(f"{{{SOAP_ENV_NS}}}Header")
        assert [etree.QName(h).text for h in header] == [
            f"{{{ADDRESSING_NS}}}Action",
            f"{{{ADDRESSING_NS}}}To",
            f"{{{WSSE_NS}}}Security",
        ]
        assert all(h.get(MUST_UNDERSTAND_ATTR) == "1" for h in header)

    def test_relax_must_understand(self, body_file, tmp_path):
        """Test --relax-must-understand writes 0 on every header."""
        output = tmp_path / "envelope.xml"

        result = CliRunner().invoke(
            cli,
            [
                "envelope", str(body_file),
                "--action", ADD_ACTION,
                "--relax-must-understand",
                "-o", str(output),
            ],
        )

        assert result.exit_code == 0
        header = etree.parse(str(output)).getroot().find(f"{{{SOAP_ENV_NS}}}Header")
        assert header[0].get(MUST_UNDERSTAND_ATTR) == "0"

    def test_password_from_environment(self, body_file, tmp_path, monkeypatch):
        """Test the password may come from SIMPLE_SOAP_PASSWORD."""
        monkeypatch.setenv("SIMPLE_SOAP_PASSWORD", "from-env")
        output = tmp_path / "envelope.xml"

        result = CliRunner().invoke(
            cli, ["envelope", str(body_file), "--username", "alice", "-o", str(output)]
        )

        assert result.exit_code == 0
        assert b"from-env" in output.read_bytes()

    def test_username_without_password(self, body_file):
        """Test --username requires --password."""
        result = CliRunner().invoke(cli, ["envelope", str(body_file), "--username", "alice"])

        assert result.exit_code == 2
        assert "--username and --password must be used together" in result.output

    def test_invalid_body_file(self, tmp_path):
        """Test a malformed body file fails with exit code 1."""
        body = tmp_path / "broken.xml"
        body.write_text("<Add>", encoding="utf-8")

        result = CliRunner().invoke(cli, ["envelope", str(body)])

        assert result.exit_code == 1
        assert "Invalid body file" in result.output

    def test_missing_body_file(self, tmp_path):
        """Test a missing body file is a usage error."""
        result = CliRunner().invoke(cli, ["envelope", str(tmp_path / "absent.xml")])

        assert result.exit_code == 2


class TestCallCommand:
    """Test cases for the call command."""

    def test_call_prints_response(self, body_file, add_response_xml):
        """Test a successful call prints the response envelope."""
        # Arrange
        runner = CliRunner()

        with patch.object(
            requests.Session, "post", return_value=_http_response(add_response_xml)
        ) as mock_post:
            # Act
            result = runner.invoke(
                cli, ["call", URL, ADD_ACTION, str(body_file), "--action", ADD_ACTION]
            )

        # Assert
        assert result.exit_code == 0
        assert "AddResult" in result.output
        assert mock_post.call_args.kwargs["headers"]["SOAPAction"] == f'"{ADD_ACTION}"'

    def test_call_fault_exit_code(self, body_file, fault_xml):
        """Test a SOAP fault is reported with exit code 2."""
        with patch.object(
            requests.Session, "post", return_value=_http_response(fault_xml, 500)
        ):
            result = CliRunner().invoke(cli, ["call", URL, ADD_ACTION, str(body_file)])

        assert result.exit_code == 2
        assert "Service returned a SOAP fault" in result.output
        assert "s:Client" in result.output
        assert "Invalid operands" in result.output

    def test_call_fault_without_faultstring(self, body_file):
        """Test a fault the service left incomplete exits with code 1 and a message."""
        # Arrange
        incomplete_fault = (
            f'<s:Envelope xmlns:s="{SOAP_ENV_NS}"><s:Body><s:Fault>'
            "<faultcode>s:Server</faultcode>"
            "</s:Fault></s:Body></s:Envelope>"
        ).encode("utf-8")

        with patch.object(
            requests.Session, "post", return_value=_http_response(incomplete_fault, 500)
        ):
            # Act
            result = CliRunner().invoke(cli, ["call", URL, ADD_ACTION, str(body_file)])

        # Assert
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Unreadable SOAP fault" in result.output
        assert "faultstring" in result.output

    def test_call_transport_error(self, body_file):
        """Test network failures exit with code 1."""
        with patch.object(
            requests.Session, "post", side_effect=requests.ConnectionError("refused")
        ):
            result = CliRunner().invoke(cli, ["call", URL, ADD_ACTION, str(body_file)])

        assert result.exit_code == 1
        assert "SOAP call failed" in result.output

    def test_call_uses_config(self, body_file, add_response_xml, tmp_path):
        """Test transport settings come from the configuration file."""
        config_path = tmp_path / "simple_soap.json"
        config_path.write_text(
            json.dumps({"transport": {"timeout_connect": 3, "timeout_read": 7}}),
            encoding="utf-8",
        )

        with patch.object(
            requests.Session, "post", return_value=_http_response(add_response_xml)
        ) as mock_post:
            result = CliRunner().invoke(
                cli, ["--config", str(config_path), "call", URL, ADD_ACTION, str(body_file)]
            )

        assert result.exit_code == 0
        assert mock_post.call_args.kwargs["timeout"] == (3, 7)


class TestConfigValidate:
    """Test cases for config validate."""

    def test_valid(self, tmp_path):
        """Test a valid file is summarized."""
        path = tmp_path / "simple_soap.json"
        path.write_text(json.dumps({"default_endpoint": URL}), encoding="utf-8")

        result = CliRunner().invoke(cli, ["config", "validate", str(path)])

        assert result.exit_code == 0
        assert "Configuration is valid" in result.output
        assert URL in result.output

    def test_invalid(self, tmp_path):
        """Test an invalid file fails with exit code 1."""
        path = tmp_path / "simple_soap.json"
        path.write_text(json.dumps({"logging": {"level": "LOUD"}}), encoding="utf-8")

        result = CliRunner().invoke(cli, ["config", "validate", str(path)])

        assert result.exit_code == 1
        assert "Configuration validation failed" in result.output
