# -*- coding: utf-8 -*-
"""Location: ./twitch_oauth2/tokens/device_code.py
Copyright 2026
SPDX-License-Identifier: Apache-2.0

User tokens from the device code flow.

The device code flow works for both confidential and public clients and does
not need a redirect URL, which makes it the easiest flow for CLIs and devices.

See https://dev.twitch.tv/docs/authentication/getting-tokens-oauth/#device-code-grant-flow
"""

# Standard
import asyncio
import logging
import time
from typing import Awaitable, Callable, Iterable, List, Optional

# Third-Party
import httpx

# First-Party
from twitch_oauth2.client import ClientLike, send
from twitch_oauth2.config import get_settings
from twitch_oauth2.exceptions import (
    DeviceCodeExpiredError,
    DeviceFlowNotStartedError,
    DeviceUserTokenExchangeError,
    RequestError,
    RequestParseError,
    TwitchError,
    ValidationError,
)
from twitch_oauth2.id import DeviceCodeResponse, TwitchTokenResponse
from twitch_oauth2.oauth import construct_request, parse_response
from twitch_oauth2.scopes.definitions import Scope, scopes_to_string
from twitch_oauth2.tokens.user_token import UserToken
from twitch_oauth2.types import ClientId, ClientSecret

logger = logging.getLogger(__name__)

DEVICE_CODE_GRANT_TYPE = "urn:ietf:params:oauth:grant-type:device_code"

Sleep = Callable[[float], Awaitable[None]]


class DeviceUserTokenBuilder:
    """Builder for the device code flow.

    1. :meth:`start` and show ``verification_uri`` to the user.
    2. :meth:`wait_for_code` polls until the user has authorized the application.
    """

    def __init__(self, client_id: ClientId, scopes: Iterable[Scope] = (), client_secret: Optional[ClientSecret] = None):
        """Initialize the builder.

        Args:
            client_id: Client ID of the application.
            scopes: Scopes to request.
            client_secret: Client secret, only needed for confidential clients.
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.scopes: List[Scope] = list(scopes)
        self.response: Optional[DeviceCodeResponse] = None
        self._started_at: Optional[float] = None

    def start_request(self) -> httpx.Request:
        """Get the request starting the flow."""
        return construct_request(get_settings().device_url, [("client_id", self.client_id.as_str()), ("scopes", scopes_to_string(self.scopes))])

    async def start(self, client: ClientLike) -> DeviceCodeResponse:
        """Start the flow.

        Calling this again while the flow is pending returns the same codes.

        Returns:
            DeviceCodeResponse: Codes and verification URI to show the user.

        Raises:
            DeviceUserTokenExchangeError: If the request failed.
        """
        if self.response is not None:
            return self.response
        try:
            response = await send(client, self.start_request())
            self.response = parse_response(response, DeviceCodeResponse)
        except (RequestError, RequestParseError) as exc:
            raise DeviceUserTokenExchangeError(f"failed to start device code flow: {exc}") from exc
        self._started_at = time.monotonic()
        logger.info(f"Device code flow started, verification at {self.response.verification_uri}")
        return self.response

    def try_finish_request(self) -> httpx.Request:
        """Get the request polling for the token.

        Raises:
            DeviceFlowNotStartedError: If :meth:`start` has not completed.
        """
        if self.response is None:
            raise DeviceFlowNotStartedError("device code flow has not been started")
        params = [("client_id", self.client_id.as_str())]
        if self.client_secret is not None:
            params.append(("client_secret", self.client_secret.secret()))
        params.extend(
            [
                ("device_code", self.response.device_code),
                ("grant_type", DEVICE_CODE_GRANT_TYPE),
                ("scopes", scopes_to_string(self.scopes)),
            ]
        )
        return construct_request(get_settings().token_url, params)

    async def try_finish(self, client: ClientLike) -> Optional[UserToken]:
        """Check once whether the user has authorized the application.

        Returns:
            Optional[UserToken]: The token, or None while authorization is pending.

        Raises:
            DeviceFlowNotStartedError: If :meth:`start` has not completed.
            DeviceUserTokenExchangeError: If Twitch refused the code or validation failed.
        """
        request = self.try_finish_request()
        try:
            response = await send(client, request)
            body = parse_response(response, TwitchTokenResponse)
        except TwitchError as exc:
            if exc.response.message == "authorization_pending":
                return None
            raise DeviceUserTokenExchangeError(f"device code was not accepted: {exc}") from exc
        except (RequestError, RequestParseError) as exc:
            raise DeviceUserTokenExchangeError(f"failed to poll for device token: {exc}") from exc

        try:
            token = await UserToken.from_response(client, body, self.client_secret)
        except ValidationError as exc:
            raise DeviceUserTokenExchangeError(f"could not get validation for token: {exc}") from exc
        self.response = None
        self._started_at = None
        logger.info(f"Obtained device user token for {token.login}")
        return token

    async def wait_for_code(self, client: ClientLike, sleep: Sleep = asyncio.sleep) -> UserToken:
        """Poll until the user authorizes the application.

        Args:
            client: HTTP client.
            sleep: Coroutine function used to wait between polls.

        Returns:
            UserToken: The validated user token.

        Raises:
            DeviceFlowNotStartedError: If :meth:`start` has not completed.
            DeviceCodeExpiredError: If the device code expired before authorization.
            DeviceUserTokenExchangeError: If Twitch refused the code or validation failed.
        """
        if self.response is None or self._started_at is None:
            raise DeviceFlowNotStartedError("device code flow has not been started")
        interval = self.response.interval.total_seconds()
        deadline = self._started_at + self.response.expires_in.total_seconds()

        while True:
            token = await self.try_finish(client)
            if token is not None:
                return token
            if time.monotonic() + interval > deadline:
                self.response = None
                self._started_at = None
                raise DeviceCodeExpiredError("device code expired before the user authorized the application")
            logger.debug(f"Authorization pending, polling again in {interval}s")
            await sleep(interval)
