"""Shared stubs for unit tests."""
