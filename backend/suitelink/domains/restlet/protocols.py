"""Protocols for RESTlet domain dependencies."""

from typing import Any, Mapping, Optional, Protocol, runtime_checkable

import httpx

from suitelink.domains.restlet.types import Credentials


@runtime_checkable
class Transport(Protocol):
    """Sends one HTTP request. Knows nothing about retries or signing."""

    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        json: Optional[Any] = None,
    ) -> httpx.Response:
        """Send the request and return the fully read response.

        Raises:
            httpx.TransportError: On connection-level failures.
        """
        ...


class SignerProtocol(Protocol):
    """Produces OAuth Authorization headers."""

    def authorization_header(self, method: str, url: str, credentials: Credentials) -> str:
        """Return the Authorization header value for a request."""
        ...
