"""Main CLI entry point for Simple SOAP Client.

This module provides the main Click command group for the simple-soap CLI.
"""

from pathlib import Path
from typing import Optional

import click

from simple_soap import __version__
from simple_soap.cli.envelope_commands import call_command, envelope_command
from simple_soap.config import load_config
from simple_soap.logging_audit import configure_logging
from simple_soap.utils.exceptions import ConfigurationError


@click.group()
@click.version_option(version=__version__, prog_name="simple-soap")
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: ./simple_soap.json)",
)
@click.option("--verbose", is_flag=True, help="Enable verbose logging (DEBUG level)")
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to log file (overrides config file)",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: bool,
    log_file: Optional[Path],
) -> None:
    """Simple SOAP Client - build and send SOAP 1.1 envelopes.

    Common usage:

        # Print an envelope with Action and To headers
        simple-soap envelope body.xml --action urn:Add --to https://svc.example.com

        # Call a service with a WS-Security username token
        simple-soap call https://svc.example.com urn:Add body.xml \\
            --username alice --password secret

        # Enable verbose logging for debugging
        simple-soap --verbose call https://svc.example.com urn:Add body.xml

    Use --help with any command for more information.
    """
    ctx.ensure_object(dict)

    try:
        config_obj = load_config(config)
        ctx.obj["config"] = config_obj
    except ConfigurationError as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        ctx.exit(1)

    ctx.obj["verbose"] = verbose
    ctx.obj["log_file"] = log_file

    # Precedence: CLI flags > config file > defaults
    log_level = "DEBUG" if verbose else config_obj.logging.level
    log_file_path = log_file if log_file else config_obj.logging.log_file

    configure_logging(
        level=log_level,
        log_file=log_file_path,
        redact_secrets=config_obj.logging.redact_secrets,
    )


cli.add_command(envelope_command)
cli.add_command(call_command)


@cli.group()
def config() -> None:
    """Configuration management commands."""
    pass


@config.command()
@click.argument("config_file", type=click.Path(exists=True, path_type=Path))
def validate(config_file: Path) -> None:
    """Validate a configuration file.

    Example:
        simple-soap config validate simple_soap.json
    """
    try:
        config_obj = load_config(config_file)
    except ConfigurationError as e:
        click.echo(click.style("✗", fg="red", bold=True) + " Configuration validation failed")
        click.echo(f"\n{e}", err=True)
        raise click.exceptions.Exit(1)

    click.echo(click.style("✓", fg="green", bold=True) + " Configuration is valid")
    click.echo(f"\nConfiguration file: {config_file}")
    click.echo(f"\nDefault endpoint: {config_obj.default_endpoint or 'Not configured'}")

    click.echo("\nTransport:")
    click.echo(f"  Verify TLS:  {config_obj.transport.verify_tls}")
    click.echo(
        f"  Timeouts:    {config_obj.transport.timeout_connect}s connect, "
        f"{config_obj.transport.timeout_read}s read"
    )
    click.echo(f"  Retries:     {config_obj.transport.max_retries}")
    click.echo(f"  User-Agent:  {config_obj.transport.user_agent}")

    click.echo("\nLogging:")
    click.echo(f"  Level:       {config_obj.logging.level}")
    click.echo(f"  Log file:    {config_obj.logging.log_file}")
    click.echo(f"  Redact:      {config_obj.logging.redact_secrets}")


@cli.command()
def version() -> None:
    """Display version information."""
    click.echo(f"simple-soap version {__version__}")


if __name__ == "__main__":
    cli()
