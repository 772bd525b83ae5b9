"""Tests for the exception hierarchy."""

from suitelink.core.exceptions import ConfigurationError, SuitelinkException
from suitelink.domains.restlet.exceptions import MissingCredentialsError


def test_missing_credentials_is_configuration_error():
    error = MissingCredentialsError(["NETSUITE_ACCOUNT_ID"])

    assert isinstance(error, ConfigurationError)
    assert isinstance(error, SuitelinkException)
    assert error.missing == ["NETSUITE_ACCOUNT_ID"]


def test_configuration_error_default_message():
    assert str(ConfigurationError()) == "Invalid configuration"
