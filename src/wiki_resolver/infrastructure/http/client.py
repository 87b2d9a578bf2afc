"""
Fetch Client - single bounded-timeout GET against upstream APIs.

One attempt per call:
- Fixed short timeout and identifying User-Agent from ``EndpointConfig``
- No retries, no rate limiting
- Body returned for any HTTP status; interpreting a 404 body is the
  normalizer's job
- Every transport-level failure surfaces as ``TransportError``

Usage:
    async with FetchClient(EndpointConfig()) as client:
        body = await client.fetch("https://en.wikipedia.org/api/rest_v1/page/summary/Paris")
"""

from __future__ import annotations

import logging

import httpx
from typing_extensions import Self

from wiki_resolver.shared.config import EndpointConfig
from wiki_resolver.shared.exceptions import TransportError

logger = logging.getLogger(__name__)


class FetchClient:
    """
    Thin wrapper over ``httpx.AsyncClient``.

    The underlying client is safe to share between concurrent calls; every
    call builds its own request and returns its own bytes.
    """

    _service_name: str = "Wikipedia"

    def __init__(
        self,
        config: EndpointConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize fetch client.

        Args:
            config: Endpoint configuration (timeout and User-Agent are used here)
            transport: Optional httpx transport, e.g. ``httpx.MockTransport`` in tests
        """
        self._config = config or EndpointConfig()
        self._timeout = self._config.timeout
        self._client = httpx.AsyncClient(
            timeout=self._timeout,
            headers={
                "User-Agent": self._config.user_agent,
                "Accept": "application/json",
            },
            follow_redirects=True,
            transport=transport,
        )

    @property
    def config(self) -> EndpointConfig:
        return self._config

    async def fetch(self, url: str) -> bytes:
        """
        GET ``url`` once and return the raw body.

        Raises:
            TransportError: On timeout, DNS failure, connection reset or any
                other failure to complete the request and read the body
        """
        logger.debug(f"{self._service_name}: GET {url}")
        try:
            response = await self._execute_request(url)
        except httpx.TimeoutException as e:
            logger.warning(f"{self._service_name}: timeout after {self._timeout}s for {url}")
            raise TransportError(f"Request timeout after {self._timeout}s", url=url) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"{self._service_name}: request failed for {url}: {e}")
            raise TransportError(f"Request failed: {e}", url=url) from e

        if response.status_code >= 400:
            logger.debug(f"{self._service_name}: HTTP {response.status_code} for {url}")
        return response.content

    async def _execute_request(self, url: str) -> httpx.Response:
        """Execute the actual HTTP request. Override for custom behavior."""
        return await self._client.get(url)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
