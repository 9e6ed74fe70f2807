"""Entry point for running simple_soap as a module.

This allows the package to be executed as:
    python -m simple_soap
"""

from simple_soap.cli.main import cli

if __name__ == "__main__":
    cli()
