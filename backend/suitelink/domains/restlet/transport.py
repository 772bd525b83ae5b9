"""httpx-backed transport."""

from typing import Any, Mapping, Optional

import httpx


class HttpxTransport:
    """Transport implementation over a shared httpx.AsyncClient.

    The client is created lazily and reused across calls so concurrent
    requests share one connection pool. Per-attempt timeouts are enforced
    by the executor, not here.
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None) -> None:
        """Initialize the transport.

        Args:
            client: Optional pre-built client; the transport then does not own it.
        """
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=None)
        return self._client

    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        json: Optional[Any] = None,
    ) -> httpx.Response:
        """Send one request and return the read response."""
        client = self._get_client()
        return await client.request(method, url, headers=dict(headers), json=json)

    async def aclose(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
