"""RESTlet domain exceptions."""

from typing import Sequence

from suitelink.core.exceptions import ConfigurationError


class MissingCredentialsError(ConfigurationError):
    """Raised when one or more NetSuite credentials are not configured."""

    def __init__(self, missing: Sequence[str]):
        self.missing = list(missing)
        super().__init__(f"Missing NetSuite credentials: {', '.join(self.missing)}")
