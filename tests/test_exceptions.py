"""Tests for the exception hierarchy."""

import pytest

from leanquery.exceptions import (
    ClassAlreadyRegisteredError,
    ConfigurationError,
    InvalidConfigError,
    InvalidConstraintError,
    InvalidFieldError,
    LeanQueryError,
    MissingConfigError,
    RegistryError,
    RequestError,
    SerializationError,
    ValidationError,
)


def test_message_only():
    error = LeanQueryError("Something failed")
    assert str(error) == "Something failed"
    assert error.details == {}


def test_message_with_details():
    error = SerializationError("Cannot serialize value", type="set")
    assert str(error) == "Cannot serialize value (type='set')"
    assert error.details == {"type": "set"}


def test_details_only():
    assert str(LeanQueryError(key="a")) == "key='a'"


def test_repr():
    assert repr(RequestError("Request failed", status_code=404)) == (
        "RequestError(message='Request failed', details={'status_code': 404})"
    )


@pytest.mark.parametrize(
    "cls,parent",
    [
        (ValidationError, LeanQueryError),
        (InvalidConstraintError, ValidationError),
        (InvalidFieldError, ValidationError),
        (SerializationError, LeanQueryError),
        (ConfigurationError, LeanQueryError),
        (MissingConfigError, ConfigurationError),
        (InvalidConfigError, ConfigurationError),
        (RegistryError, LeanQueryError),
        (ClassAlreadyRegisteredError, RegistryError),
        (RequestError, LeanQueryError),
    ],
)
def test_hierarchy(cls, parent):
    assert issubclass(cls, parent)
