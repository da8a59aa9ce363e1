"""Tests for fincore.core.exceptions."""

import pytest

from fincore.core.exceptions import ConfigurationError, FincoreError, InvalidInputError


def test_hierarchy():
    """All exceptions should inherit from FincoreError."""
    for exc_cls in [ConfigurationError, InvalidInputError]:
        assert issubclass(exc_cls, FincoreError)


def test_invalid_input_is_value_error():
    assert issubclass(InvalidInputError, ValueError)


def test_catch_base():
    with pytest.raises(FincoreError):
        raise InvalidInputError("negative income")
