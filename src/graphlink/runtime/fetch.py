"""
Transport used by the link to send requests.

A fetcher is any callable ``fetch(url, options)`` returning an awaitable
response object exposing ``status_code`` and ``text``. ``options`` holds
``method``, ``headers``, ``body`` (encoded JSON), optional ``credentials`` and
``signal``, plus any fetch options configured on the link or the context.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Optional, Protocol

import httpx

from ..core.errors import AbortError, ConstructionError

# Fetch options forwarded to httpx as request keyword arguments
HTTPX_REQUEST_OPTIONS = ("params", "cookies", "timeout", "follow_redirects", "extensions")


class Fetcher(Protocol):
    def __call__(self, url: str, options: dict[str, Any]) -> Awaitable[Any]: ...


def check_fetcher(fetch: Any) -> None:
    """
    Validate a user supplied fetch implementation.

    Raises:
        ConstructionError: If ``fetch`` is given but is not callable
    """
    if fetch is not None and not callable(fetch):
        raise ConstructionError(
            f"fetch must be a callable fetch(url, options), got {type(fetch).__name__}. "
            "Pass an HttpxFetcher or leave fetch unset to use the default client."
        )


class HttpxFetcher:
    """
    Fetcher backed by httpx.AsyncClient.

    Usage:
        fetcher = HttpxFetcher(timeout=10.0, base_url="https://api.example.com")
        link = HttpLink("/graphql", fetch=fetcher)
        ...
        await fetcher.close()
    """

    supports_abort = True

    def __init__(
        self,
        timeout: float = 30.0,
        base_url: str = "",
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize fetcher.

        Args:
            timeout: HTTP request timeout in seconds
            base_url: Base URL relative URIs are resolved against
            client: Preconfigured client to use instead of creating one
        """
        self.timeout = timeout
        self.base_url = base_url
        self._client = client

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, base_url=self.base_url)
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __call__(self, url: str, options: dict[str, Any]) -> httpx.Response:
        signal = options.get("signal")
        if signal is not None and signal.aborted:
            raise AbortError()

        client = await self._get_client()
        request = client.request(
            options.get("method", "POST"),
            url,
            headers=options.get("headers"),
            content=options.get("body"),
            **{key: options[key] for key in HTTPX_REQUEST_OPTIONS if key in options},
        )
        if signal is None:
            return await request

        task = asyncio.ensure_future(request)
        signal.add_listener(task.cancel)
        try:
            return await task
        except asyncio.CancelledError:
            if signal.aborted:
                raise AbortError() from None
            raise
        finally:
            signal.remove_listener(task.cancel)
