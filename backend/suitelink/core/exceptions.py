"""Shared exceptions module."""

from typing import Optional


class SuitelinkException(Exception):
    """Base exception for suitelink."""

    pass


class ConfigurationError(SuitelinkException):
    """Exception raised when required configuration is missing or invalid.

    Configuration errors are fatal: they are surfaced immediately and never retried.
    """

    def __init__(self, message: Optional[str] = "Invalid configuration"):
        """Create a new ConfigurationError instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        self.message = message
        super().__init__(self.message)
