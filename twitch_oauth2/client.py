# -*- coding: utf-8 -*-
"""Location: ./twitch_oauth2/client.py
Copyright 2026
SPDX-License-Identifier: Apache-2.0

HTTP clients for the OAuth2 flows.

Any object with an ``async req(request) -> response`` method over
:class:`httpx.Request`/:class:`httpx.Response` can be used as a client. A plain
:class:`httpx.AsyncClient` is accepted too; it should not follow redirects,
since the authorization endpoints answer with redirects that must not be
followed.
"""

# Standard
import logging
from typing import Optional, Protocol, runtime_checkable, Union

# Third-Party
import httpx

# First-Party
from twitch_oauth2.config import get_settings
from twitch_oauth2.exceptions import RequestError

logger = logging.getLogger(__name__)


@runtime_checkable
class HttpClient(Protocol):
    """A client that can perform OAuth2 requests."""

    async def req(self, request: httpx.Request) -> httpx.Response:
        """Send a request and return the complete response."""


ClientLike = Union[HttpClient, httpx.AsyncClient]


class HttpxClient:
    """:class:`HttpClient` backed by :class:`httpx.AsyncClient`.

    Examples:
        >>> import asyncio
        >>> async def main():
        ...     async with HttpxClient() as client:
        ...         return client.client.follow_redirects
        >>> asyncio.run(main())
        False
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None, timeout: Optional[float] = None, user_agent: Optional[str] = None):
        """Initialize the client.

        Args:
            client: Existing httpx client to use. One is created when omitted and closed by :meth:`aclose`.
            timeout: Request timeout in seconds, defaults to ``settings.http_timeout``.
            user_agent: User-Agent header, defaults to ``settings.user_agent``.
        """
        settings = get_settings()
        self._owns_client = client is None
        self.user_agent = user_agent or settings.user_agent
        self.client = client or httpx.AsyncClient(timeout=timeout or settings.http_timeout, follow_redirects=False)

    async def req(self, request: httpx.Request) -> httpx.Response:
        """Send a request.

        Args:
            request: Request to send.

        Returns:
            httpx.Response: The response, with its body read.
        """
        request.headers.setdefault("User-Agent", self.user_agent)
        return await self.client.send(request, follow_redirects=False)

    async def aclose(self) -> None:
        """Close the underlying client if it was created here."""
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> "HttpxClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()


async def send(client: ClientLike, request: httpx.Request) -> httpx.Response:
    """Send a request through any supported client.

    Args:
        client: An :class:`HttpClient` or :class:`httpx.AsyncClient`.
        request: Request to send.

    Returns:
        httpx.Response: The response.

    Raises:
        RequestError: If the request could not be performed.
    """
    logger.debug(f"{request.method} {request.url.copy_with(query=None)}")
    try:
        if isinstance(client, httpx.AsyncClient):
            response = await client.send(request, follow_redirects=False)
        else:
            response = await client.req(request)
    except httpx.HTTPError as exc:
        raise RequestError(f"request to {request.url.copy_with(query=None)} failed: {exc}") from exc
    logger.debug(f"{request.method} {request.url.copy_with(query=None)} -> {response.status_code}")
    return response
