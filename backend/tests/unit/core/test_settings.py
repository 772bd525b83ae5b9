"""Tests for Settings — env loading, blank handling and credential checks."""

import pytest

from suitelink.core.config import Environment, Settings
from suitelink.domains.restlet.exceptions import MissingCredentialsError

CREDENTIAL_VARS = [
    "NETSUITE_ACCOUNT_ID",
    "NETSUITE_CONSUMER_KEY",
    "NETSUITE_CONSUMER_SECRET",
    "NETSUITE_TOKEN_ID",
    "NETSUITE_TOKEN_SECRET",
    "NETSUITE_RESTLET_URL",
]


def _settings() -> Settings:
    return Settings(_env_file=None)


class TestLoading:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("RESTLET_MAX_RETRIES", raising=False)
        s = _settings()

        assert s.RESTLET_TIMEOUT_SECONDS == 15.0
        assert s.RESTLET_MAX_RETRIES == 2
        assert s.RESTLET_BACKOFF_INITIAL_SECONDS == 1.0
        assert s.RESTLET_BACKOFF_MAX_SECONDS == 4.0
        assert s.REFERENCE_CACHE_TTL_SECONDS == 300.0
        assert s.REFERENCE_CACHE_JITTER == 0.1

    def test_environment_from_env(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "prd")
        s = _settings()

        assert s.ENVIRONMENT == Environment.PRD
        assert s.is_local is False

    def test_test_environment_is_local(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "test")
        assert _settings().is_local is True

    def test_demo_url_alias(self, monkeypatch):
        monkeypatch.delenv("NETSUITE_RESTLET_URL", raising=False)
        monkeypatch.setenv("NETSUITE_DEMO_RESTLET_URL", "https://demo.example/restlet.nl?script=1")

        assert _settings().NETSUITE_RESTLET_URL == "https://demo.example/restlet.nl?script=1"

    def test_blank_credentials_treated_as_unset(self, monkeypatch):
        monkeypatch.setenv("NETSUITE_TOKEN_SECRET", "   ")
        assert _settings().NETSUITE_TOKEN_SECRET is None

    def test_negative_retries_rejected(self, monkeypatch):
        monkeypatch.setenv("RESTLET_MAX_RETRIES", "-1")
        with pytest.raises(ValueError):
            _settings()


class TestCredentials:
    def test_all_present(self):
        s = _settings()
        creds = s.restlet_credentials()

        assert s.missing_credentials() == []
        assert creds.account_id == s.NETSUITE_ACCOUNT_ID
        assert creds.endpoint_url == s.NETSUITE_RESTLET_URL

    def test_missing_reported_by_env_name(self, monkeypatch):
        monkeypatch.delenv("NETSUITE_CONSUMER_KEY", raising=False)
        monkeypatch.delenv("NETSUITE_TOKEN_ID", raising=False)
        s = _settings()

        assert s.missing_credentials() == ["NETSUITE_CONSUMER_KEY", "NETSUITE_TOKEN_ID"]
        with pytest.raises(MissingCredentialsError) as exc_info:
            s.restlet_credentials()
        assert exc_info.value.missing == ["NETSUITE_CONSUMER_KEY", "NETSUITE_TOKEN_ID"]
        assert str(exc_info.value) == (
            "Missing NetSuite credentials: NETSUITE_CONSUMER_KEY, NETSUITE_TOKEN_ID"
        )

    def test_credential_status_hides_values(self, monkeypatch):
        monkeypatch.delenv("NETSUITE_TOKEN_SECRET", raising=False)
        status = _settings().credential_status()

        assert status["token_secret"] == "Missing"
        assert status["consumer_secret"] == "Set"
        assert "test-consumer-secret" not in status.values()

    def test_credentials_repr_hides_secrets(self):
        creds = _settings().restlet_credentials()
        assert "secret" not in repr(creds)

    @pytest.mark.parametrize("name", CREDENTIAL_VARS)
    def test_each_credential_required(self, monkeypatch, name):
        monkeypatch.delenv(name, raising=False)
        if name == "NETSUITE_RESTLET_URL":
            monkeypatch.delenv("NETSUITE_DEMO_RESTLET_URL", raising=False)

        assert _settings().missing_credentials() == [name]
