"""Root conftest for pytest configuration and shared fixtures.

This conftest is loaded before both testpaths (tests/ and suitelink/),
making its setup available to centralized tests AND colocated domain tests.
"""

import os

# Register pytest-asyncio plugin at the root level
pytest_plugins = ("pytest_asyncio",)

# ---------------------------------------------------------------------------
# Environment variables: must be set before any suitelink module import
# Uses setdefault so real env vars (CI, smoke runs) are never overridden.
# ---------------------------------------------------------------------------
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "DEBUG")
os.environ.setdefault("NETSUITE_ACCOUNT_ID", "123456-sb1")
os.environ.setdefault("NETSUITE_CONSUMER_KEY", "test-consumer-key")
os.environ.setdefault("NETSUITE_CONSUMER_SECRET", "test-consumer-secret")
os.environ.setdefault("NETSUITE_TOKEN_ID", "test-token-id")
os.environ.setdefault("NETSUITE_TOKEN_SECRET", "test-token-secret")
os.environ.setdefault(
    "NETSUITE_RESTLET_URL",
    "https://123456-sb1.restlets.api.netsuite.com/app/site/hosting/restlet.nl"
    "?script=100&deploy=1",
)
