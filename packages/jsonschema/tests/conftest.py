"""Pytest configuration and fixtures for jsonschema package tests."""

import pytest

from schemaknobs_jsonschema.formats import FunctionFormatValidator


def _email_check(subject):
    return None if "@" in subject else "must be an email"


@pytest.fixture
def email_format():
    """A format validator that only looks for an '@'."""
    return FunctionFormatValidator("email", _email_check)


@pytest.fixture
def non_string_values():
    """Parsed JSON values of every kind except string."""
    return [42, 3.5, True, False, None, [1, "a"], {"a": "b"}]
