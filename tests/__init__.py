"""Test suite for mmclassify.

Unit tests live under tests/unit/<domain>/ and are collected without the
test_ prefix by tests/conftest.py. Shared stubs live in tests/support/.
"""
