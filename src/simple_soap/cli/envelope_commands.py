"""Envelope CLI commands.

This module provides CLI commands for working with SOAP envelopes:
- envelope: Build a request envelope around a body payload and print it
- call: Build a request envelope, send it and print the response envelope
"""

import logging
from pathlib import Path
from typing import Callable, Optional

import click

from simple_soap.headers import action as action_header
from simple_soap.headers import to as to_header
from simple_soap.headers import username_token_and_password_text
from simple_soap.helpers import get_fault, is_faulted, set_body, with_header_values
from simple_soap.models import Envelope
from simple_soap.transport import SoapClient
from simple_soap.utils.exceptions import (
    DecodingError,
    MalformedXMLError,
    SimpleSoapError,
    TransportError,
)
from simple_soap.xml import element_from_xml, envelope_to_xml

logger = logging.getLogger(__name__)

# Exit code for a call answered with a SOAP fault
FAULT_EXIT_CODE = 2


def header_options(func: Callable) -> Callable:
    """Attach the shared header options to a command."""
    options = [
        click.option("--action", "action_value", default=None, help="Add an Action header"),
        click.option("--to", "to_value", default=None, help="Add a To header"),
        click.option(
            "--username",
            default=None,
            help="Add a WS-Security UsernameToken header for this user",
        ),
        click.option(
            "--password",
            default=None,
            envvar="SIMPLE_SOAP_PASSWORD",
            help="Password for --username (or SIMPLE_SOAP_PASSWORD)",
        ),
        click.option(
            "--relax-must-understand",
            is_flag=True,
            help="Write mustUnderstand=0 on generated headers",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_envelope(
    body_file: Path,
    action_value: Optional[str],
    to_value: Optional[str],
    username: Optional[str],
    password: Optional[str],
    relax_must_understand: bool,
) -> Envelope:
    """Build a request envelope from a body file and header options.

    Headers are written in the order Action, To, Security.

    Raises:
        click.UsageError: If only one of username and password is given
        MalformedXMLError: If the body file is not well-formed XML
    """
    if (username is None) != (password is None):
        raise click.UsageError("--username and --password must be used together")

    must_understand = not relax_must_understand
    body = element_from_xml(body_file.read_bytes())

    envelope = Envelope()
    set_body(envelope, body)

    headers = []
    if action_value:
        headers.append(action_header(action_value, must_understand))
    if to_value:
        headers.append(to_header(to_value, must_understand))
    if username is not None:
        headers.append(
            username_token_and_password_text(username, password, must_understand)
        )
    with_header_values(envelope, headers)

    logger.debug(f"Built envelope from {body_file} with {len(headers)} header(s)")
    return envelope


def _emit(data: bytes, output: Optional[Path]) -> None:
    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_bytes(data)
        click.echo(
            click.style("✓", fg="green", bold=True) + f" Envelope written to {output}"
        )
    else:
        click.echo(data.decode("utf-8"))


@click.command(name="envelope")
@click.argument("body_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@header_options
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the envelope to this file instead of stdout",
)
def envelope_command(
    body_file: Path,
    action_value: Optional[str],
    to_value: Optional[str],
    username: Optional[str],
    password: Optional[str],
    relax_must_understand: bool,
    output: Optional[Path],
) -> None:
    """Build a SOAP envelope around the payload in BODY_FILE.

    Examples:

        # Envelope with addressing headers
        simple-soap envelope add.xml --action http://tempuri.org/ICalculator/Add

        # Envelope with a WS-Security username token
        simple-soap envelope add.xml --username alice --password secret
    """
    try:
        envelope = build_envelope(
            body_file, action_value, to_value, username, password, relax_must_understand
        )
        _emit(envelope_to_xml(envelope, pretty_print=True), output)
    except MalformedXMLError as e:
        click.echo(
            click.style("✗", fg="red", bold=True) + f" Invalid body file: {e}",
            err=True,
        )
        raise click.exceptions.Exit(1)


@click.command(name="call")
@click.argument("url")
@click.argument("soap_action", metavar="ACTION")
@click.argument("body_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@header_options
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the response envelope to this file instead of stdout",
)
@click.pass_context
def call_command(
    ctx: click.Context,
    url: str,
    soap_action: str,
    body_file: Path,
    action_value: Optional[str],
    to_value: Optional[str],
    username: Optional[str],
    password: Optional[str],
    relax_must_understand: bool,
    output: Optional[Path],
) -> None:
    """Send the payload in BODY_FILE to URL with SOAPAction ACTION.

    The response envelope is printed. A SOAP fault is reported on stderr
    and the command exits with status 2.

    Example:

        simple-soap call https://legacy.example.com/Calculator.svc \\
            http://tempuri.org/ICalculator/Add add.xml --username alice
    """
    config = (ctx.obj or {}).get("config")

    try:
        envelope = build_envelope(
            body_file, action_value, to_value, username, password, relax_must_understand
        )
        with SoapClient(config) as client:
            response = client.send(url, soap_action, envelope)
        fault = get_fault(response) if is_faulted(response) else None
    except (MalformedXMLError, TransportError) as e:
        click.echo(
            click.style("✗", fg="red", bold=True) + f" SOAP call failed: {e}",
            err=True,
        )
        raise click.exceptions.Exit(1)
    except DecodingError as e:
        click.echo(
            click.style("✗", fg="red", bold=True) + f" Unreadable SOAP fault: {e}",
            err=True,
        )
        raise click.exceptions.Exit(1)
    except SimpleSoapError as e:
        click.echo(
            click.style("✗", fg="red", bold=True) + f" Unexpected error: {e}",
            err=True,
        )
        logger.exception("Unexpected error during SOAP call")
        raise click.exceptions.Exit(1)

    if fault is not None:
        click.echo(
            click.style("✗", fg="red", bold=True) + " Service returned a SOAP fault",
            err=True,
        )
        click.echo(f"  Code:   {fault.code}", err=True)
        click.echo(f"  String: {fault.string}", err=True)
        if fault.actor:
            click.echo(f"  Actor:  {fault.actor}", err=True)
        raise click.exceptions.Exit(FAULT_EXIT_CODE)

    _emit(envelope_to_xml(response, pretty_print=True), output)
