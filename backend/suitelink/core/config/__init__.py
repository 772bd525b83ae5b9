"""Configuration module for suitelink.

Provides centralized configuration management with type-safe enums.

Usage:
    from suitelink.core.config import settings, Environment

    # Access settings
    credentials = settings.restlet_credentials()

    # Use enums for type safety
    if settings.ENVIRONMENT == Environment.PRD:
        ...
"""

from suitelink.core.config.enums import Environment
from suitelink.core.config.settings import Settings

__all__ = [
    "Settings",
    "Environment",
    "settings",
]

# Singleton settings instance
settings = Settings()
