"""
Unit tests package.

Contains unit tests for individual modules in isolation. Network access is
mocked; see tests/integration for tests against a live mock service.
"""
