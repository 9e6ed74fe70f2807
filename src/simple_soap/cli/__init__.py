"""Command-line interface for Simple SOAP Client."""
