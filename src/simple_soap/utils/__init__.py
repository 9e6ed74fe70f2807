"""Shared utilities: exception hierarchy and argument guards."""
