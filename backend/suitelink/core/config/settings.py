"""Application settings loaded from the environment.

Uses Pydantic Settings for automatic env var loading. Every NetSuite credential
is optional at load time so that importing the package never fails; the
credentials are validated when a client actually needs them.
"""

from typing import TYPE_CHECKING, Dict, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from suitelink.core.config.enums import Environment

if TYPE_CHECKING:
    from suitelink.domains.restlet.types import Credentials


# Env var name -> Credentials field
CREDENTIAL_ENV_FIELDS: Dict[str, str] = {
    "NETSUITE_ACCOUNT_ID": "account_id",
    "NETSUITE_CONSUMER_KEY": "consumer_key",
    "NETSUITE_CONSUMER_SECRET": "consumer_secret",
    "NETSUITE_TOKEN_ID": "token_id",
    "NETSUITE_TOKEN_SECRET": "token_secret",
    "NETSUITE_RESTLET_URL": "endpoint_url",
}


class Settings(BaseSettings):
    """Process-wide configuration.

    Attributes:
        ENVIRONMENT: Deployment environment, drives log formatting.
        LOG_LEVEL: Root log level for suitelink loggers.
        NETSUITE_*: Token-based-auth credentials and the RESTlet deployment URL.
        RESTLET_*: Per-call timeout and retry policy.
        REFERENCE_CACHE_*: TTL and jitter for cached reference-list reads.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    ENVIRONMENT: Environment = Environment.LOCAL
    LOG_LEVEL: str = "INFO"

    NETSUITE_ACCOUNT_ID: Optional[str] = None
    NETSUITE_CONSUMER_KEY: Optional[str] = None
    NETSUITE_CONSUMER_SECRET: Optional[str] = None
    NETSUITE_TOKEN_ID: Optional[str] = None
    NETSUITE_TOKEN_SECRET: Optional[str] = None
    NETSUITE_RESTLET_URL: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("NETSUITE_RESTLET_URL", "NETSUITE_DEMO_RESTLET_URL"),
    )

    RESTLET_TIMEOUT_SECONDS: float = Field(15.0, gt=0)
    RESTLET_MAX_RETRIES: int = Field(2, ge=0)
    RESTLET_BACKOFF_INITIAL_SECONDS: float = Field(1.0, ge=0)
    RESTLET_BACKOFF_MAX_SECONDS: float = Field(4.0, ge=0)

    REFERENCE_CACHE_TTL_SECONDS: float = Field(300.0, gt=0)
    REFERENCE_CACHE_JITTER: float = Field(0.1, ge=0, lt=1)

    @field_validator(
        "NETSUITE_ACCOUNT_ID",
        "NETSUITE_CONSUMER_KEY",
        "NETSUITE_CONSUMER_SECRET",
        "NETSUITE_TOKEN_ID",
        "NETSUITE_TOKEN_SECRET",
        "NETSUITE_RESTLET_URL",
        mode="before",
    )
    @classmethod
    def blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        """Treat empty or whitespace-only env values as unset."""
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def is_local(self) -> bool:
        """Whether we are running on a developer machine."""
        return self.ENVIRONMENT in (Environment.LOCAL, Environment.TEST)

    def missing_credentials(self) -> list[str]:
        """Return the env var names of every unset credential."""
        return [name for name in CREDENTIAL_ENV_FIELDS if getattr(self, name) is None]

    def credential_status(self) -> Dict[str, str]:
        """Report which credentials are present without revealing their values."""
        return {
            field: ("Set" if getattr(self, name) is not None else "Missing")
            for name, field in CREDENTIAL_ENV_FIELDS.items()
        }

    def restlet_credentials(self) -> "Credentials":
        """Build the RESTlet credentials.

        Raises:
            MissingCredentialsError: If any credential is unset.
        """
        from suitelink.domains.restlet.exceptions import MissingCredentialsError
        from suitelink.domains.restlet.types import Credentials

        missing = self.missing_credentials()
        if missing:
            raise MissingCredentialsError(missing)

        return Credentials(
            **{field: getattr(self, name) for name, field in CREDENTIAL_ENV_FIELDS.items()}
        )
