# -*- coding: utf-8 -*-
"""Location: ./twitch_oauth2/tokens/app_access_token.py
Copyright 2026
SPDX-License-Identifier: Apache-2.0

App access tokens from the client credentials flow.

See https://dev.twitch.tv/docs/authentication/getting-tokens-oauth/#client-credentials-grant-flow
"""

# Standard
from datetime import timedelta
import logging
from typing import Iterable, List, Optional

# Third-Party
import httpx

# First-Party
from twitch_oauth2.client import ClientLike, send
from twitch_oauth2.config import get_settings
from twitch_oauth2.exceptions import AppAccessTokenError, RefreshTokenError, RequestError, RequestParseError
from twitch_oauth2.id import TwitchTokenResponse
from twitch_oauth2 import oauth
from twitch_oauth2.oauth import construct_request, parse_response
from twitch_oauth2.scopes.definitions import Scope, scopes_to_string
from twitch_oauth2.tokens.base import _Lifetime, BearerTokenType, TwitchToken
from twitch_oauth2.types import AccessToken, ClientId, ClientSecret, RefreshToken

logger = logging.getLogger(__name__)


class AppAccessToken(TwitchToken):
    """An app access token.

    Used for server-to-server requests. Use :class:`UserToken` for requests that
    need the context of an authenticated user. In some contexts (EventSub) an app
    access token acts for users that have authorized the client ID.
    """

    def __init__(
        self,
        access_token: AccessToken,
        refresh_token: Optional[RefreshToken],
        client_id: ClientId,
        client_secret: ClientSecret,
        scopes: Optional[Iterable[Scope]] = None,
        expires_in: Optional[timedelta] = None,
    ):
        """Assemble a token without any checks.

        Args:
            access_token: The access token.
            refresh_token: Refresh token, if Twitch returned one.
            client_id: Client ID the token belongs to.
            client_secret: Client secret, needed to get a new token.
            scopes: Scopes attached to the token.
            expires_in: Lifetime from now, None if unknown.
        """
        self.access_token = access_token
        self.refresh_token = refresh_token
        self._client_id = client_id
        self.client_secret = client_secret
        self._scopes: List[Scope] = list(scopes or [])
        self._lifetime = _Lifetime(expires_in)

    def __repr__(self) -> str:
        return (
            f"AppAccessToken(access_token={self.access_token!r}, refresh_token={self.refresh_token!r}, client_id={self._client_id!r}, "
            f"client_secret={self.client_secret!r}, expires_in={self.expires_in()!r}, scopes={self._scopes!r})"
        )

    @classmethod
    def token_type(cls) -> BearerTokenType:
        return BearerTokenType.APP_ACCESS_TOKEN

    @property
    def client_id(self) -> ClientId:
        return self._client_id

    @property
    def token(self) -> AccessToken:
        return self.access_token

    @property
    def login(self) -> Optional[str]:
        return None

    @property
    def user_id(self) -> Optional[str]:
        return None

    @property
    def scopes(self) -> List[Scope]:
        return self._scopes

    def expires_in(self) -> Optional[timedelta]:
        return self._lifetime.remaining()

    @classmethod
    def from_existing_unchecked(
        cls,
        access_token: AccessToken,
        refresh_token: Optional[RefreshToken],
        client_id: ClientId,
        client_secret: ClientSecret,
        scopes: Optional[Iterable[Scope]] = None,
        expires_in: Optional[timedelta] = None,
    ) -> "AppAccessToken":
        """Assemble a token without validating it."""
        return cls(access_token, refresh_token, client_id, client_secret, scopes, expires_in)

    @classmethod
    async def from_existing(cls, client: ClientLike, access_token: AccessToken, refresh_token: Optional[RefreshToken], client_secret: ClientSecret) -> "AppAccessToken":
        """Assemble a token and validate it, retrieving its client ID, scopes and lifetime.

        Raises:
            ValidationError: If the token could not be validated.
        """
        validated = await oauth.validate_token(client, access_token)
        return cls(access_token, refresh_token, validated.client_id, client_secret, validated.scopes, validated.expires_in)

    @classmethod
    def from_response(cls, response: TwitchTokenResponse, client_id: ClientId, client_secret: ClientSecret) -> "AppAccessToken":
        """Assemble a token from a token endpoint response."""
        return cls(response.access_token, response.refresh_token, client_id, client_secret, response.scopes, response.expires_in)

    @staticmethod
    def get_app_access_token_request(client_id: ClientId, client_secret: ClientSecret, scopes: Iterable[Scope] = ()) -> httpx.Request:
        """Get the request for the client credentials flow."""
        return construct_request(
            get_settings().token_url,
            [
                ("client_id", client_id.as_str()),
                ("client_secret", client_secret.secret()),
                ("grant_type", "client_credentials"),
                ("scope", scopes_to_string(scopes)),
            ],
        )

    @classmethod
    async def get_app_access_token(cls, client: ClientLike, client_id: ClientId, client_secret: ClientSecret, scopes: Iterable[Scope] = ()) -> "AppAccessToken":
        """Generate an app access token via the client credentials flow.

        Args:
            client: HTTP client.
            client_id: Client ID of the application.
            client_secret: Client secret of the application.
            scopes: Scopes to request.

        Returns:
            AppAccessToken: The new token.

        Raises:
            AppAccessTokenError: If the flow failed.
        """
        scopes = list(scopes)
        try:
            response = await send(client, cls.get_app_access_token_request(client_id, client_secret, scopes))
            body = parse_response(response, TwitchTokenResponse)
        except (RequestError, RequestParseError) as exc:
            raise AppAccessTokenError(f"failed to get app access token: {exc}") from exc
        logger.info(f"Obtained app access token for client {client_id}")
        return cls.from_response(body, client_id, client_secret)

    async def refresh(self, client: ClientLike) -> None:
        """Refresh the token.

        App access tokens normally come without a refresh token, in which case
        a new token is requested through the client credentials flow with the
        same scopes.

        Raises:
            RefreshTokenError: If refreshing failed.
        """
        if self.refresh_token is not None:
            access_token, expires_in, refresh_token = await oauth.refresh_token(client, self.refresh_token, self._client_id, self.client_secret)
            self.access_token = access_token
            self.refresh_token = refresh_token
            self._lifetime = _Lifetime(expires_in)
            return

        try:
            renewed = await self.get_app_access_token(client, self._client_id, self.client_secret, self._scopes)
        except AppAccessTokenError as exc:
            raise RefreshTokenError(f"failed to renew app access token: {exc}") from exc
        self.access_token = renewed.access_token
        self.refresh_token = renewed.refresh_token
        self._scopes = renewed.scopes or self._scopes
        self._lifetime = renewed._lifetime
