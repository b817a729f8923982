"""
HTTP transport shared by translation providers.

Timeouts and connection pooling live here; providers only see
``request(url, ...) -> httpx.Response``.
"""
import logging
from typing import Dict, Optional

import httpx

from deepl_translator.config import REQUEST_TIMEOUT

logger = logging.getLogger(__name__)


class HttpTransport:
    """Lazily created ``httpx.AsyncClient`` with connection pooling"""

    def __init__(self, timeout: float = REQUEST_TIMEOUT, client: Optional[httpx.AsyncClient] = None):
        """
        Args:
            timeout: Request timeout in seconds, used when creating the client
            client: Pre-built client (tests pass one backed by httpx.MockTransport)
        """
        self.timeout = timeout
        self._client = client

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create a persistent HTTP client with connection pooling"""
        if self._client is None:
            self._client = httpx.AsyncClient(
                limits=httpx.Limits(max_keepalive_connections=5, max_connections=10),
                timeout=httpx.Timeout(self.timeout),
            )
        return self._client

    async def request(self, url: str, method: str = "POST",
                      headers: Optional[Dict[str, str]] = None,
                      content: Optional[str] = None) -> httpx.Response:
        """
        Send a request and return the response.

        Raises:
            httpx.HTTPStatusError: on a non-2xx status
            httpx.HTTPError: on network failures and timeouts
        """
        client = await self._get_client()
        response = await client.request(method, url, headers=headers, content=content)
        response.raise_for_status()
        return response

    async def close(self):
        """Close the HTTP client"""
        if self._client:
            await self._client.aclose()
            self._client = None
