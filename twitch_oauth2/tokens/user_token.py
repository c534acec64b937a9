# -*- coding: utf-8 -*-
"""Location: ./twitch_oauth2/tokens/user_token.py
Copyright 2026
SPDX-License-Identifier: Apache-2.0

User tokens from the authorization code and implicit grant flows.

See https://dev.twitch.tv/docs/authentication/getting-tokens-oauth/
"""

# Standard
from datetime import timedelta
import logging
import secrets
from typing import Iterable, List, Optional, Tuple

# Third-Party
import httpx

# First-Party
from twitch_oauth2.client import ClientLike, send
from twitch_oauth2.config import get_settings
from twitch_oauth2.exceptions import (
    ImplicitUserTokenExchangeError,
    NoLoginError,
    NoRefreshTokenError,
    RequestError,
    RequestParseError,
    StateMismatchError,
    UserTokenExchangeError,
    ValidationError,
)
from twitch_oauth2.id import TwitchTokenResponse
from twitch_oauth2 import oauth
from twitch_oauth2.oauth import construct_request, parse_response
from twitch_oauth2.scopes.definitions import Scope, scopes_to_string
from twitch_oauth2.tokens.base import _Lifetime, BearerTokenType, TwitchToken, ValidatedToken
from twitch_oauth2.types import AccessToken, ClientId, ClientSecret, CsrfToken, RefreshToken

logger = logging.getLogger(__name__)


class UserToken(TwitchToken):
    """A user token, acting in the context of an authenticated user."""

    def __init__(
        self,
        access_token: AccessToken,
        refresh_token: Optional[RefreshToken],
        client_id: ClientId,
        client_secret: Optional[ClientSecret],
        login: str,
        user_id: str,
        scopes: Optional[Iterable[Scope]] = None,
        expires_in: Optional[timedelta] = None,
    ):
        """Assemble a token without any checks.

        Args:
            access_token: The access token.
            refresh_token: Refresh token used to extend the life of the token.
            client_id: Client ID the token belongs to.
            client_secret: Client secret, None for public clients.
            login: Username of the user.
            user_id: User ID of the user.
            scopes: Scopes attached to the token.
            expires_in: Lifetime from now, None if the token does not expire.
        """
        self.access_token = access_token
        self.refresh_token = refresh_token
        self._client_id = client_id
        self.client_secret = client_secret
        self._login = login
        self._user_id = user_id
        self._scopes: List[Scope] = list(scopes or [])
        self._lifetime = _Lifetime(expires_in)

    def __repr__(self) -> str:
        return (
            f"UserToken(access_token={self.access_token!r}, refresh_token={self.refresh_token!r}, client_id={self._client_id!r}, "
            f"client_secret={self.client_secret!r}, login={self._login!r}, user_id={self._user_id!r}, "
            f"expires_in={self.expires_in()!r}, scopes={self._scopes!r})"
        )

    @classmethod
    def token_type(cls) -> BearerTokenType:
        return BearerTokenType.USER_TOKEN

    @property
    def client_id(self) -> ClientId:
        return self._client_id

    @property
    def token(self) -> AccessToken:
        return self.access_token

    @property
    def login(self) -> str:
        return self._login

    @property
    def user_id(self) -> str:
        return self._user_id

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
        client_secret: Optional[ClientSecret],
        login: str,
        user_id: str,
        scopes: Optional[Iterable[Scope]] = None,
        expires_in: Optional[timedelta] = None,
    ) -> "UserToken":
        """Assemble a token without validating it."""
        return cls(access_token, refresh_token, client_id, client_secret, login, user_id, scopes, expires_in)

    @classmethod
    def from_validated(
        cls, validated: ValidatedToken, access_token: AccessToken, refresh_token: Optional[RefreshToken] = None, client_secret: Optional[ClientSecret] = None
    ) -> "UserToken":
        """Assemble a token from a validation response.

        Raises:
            NoLoginError: If the validated token is not a user token.
        """
        if validated.login is None or validated.user_id is None:
            raise NoLoginError("validation did not return a login when it was expected")
        return cls(access_token, refresh_token, validated.client_id, client_secret, validated.login, validated.user_id, validated.scopes, validated.expires_in)

    @classmethod
    async def from_existing(
        cls, client: ClientLike, access_token: AccessToken, refresh_token: Optional[RefreshToken] = None, client_secret: Optional[ClientSecret] = None
    ) -> "UserToken":
        """Assemble a token and validate it, retrieving login, client ID and scopes.

        Raises:
            ValidationError: If the token could not be validated or is not a user token.
        """
        validated = await oauth.validate_token(client, access_token)
        return cls.from_validated(validated, access_token, refresh_token, client_secret)

    @classmethod
    async def from_response(cls, client: ClientLike, response: TwitchTokenResponse, client_secret: Optional[ClientSecret] = None) -> "UserToken":
        """Assemble a token from a token endpoint response, validating it for the login."""
        return await cls.from_existing(client, response.access_token, response.refresh_token, client_secret)

    @classmethod
    def builder(cls, client_id: ClientId, client_secret: ClientSecret, redirect_url: str) -> "UserTokenBuilder":
        """Create a :class:`UserTokenBuilder` for the authorization code flow."""
        return UserTokenBuilder(client_id, client_secret, redirect_url)

    async def refresh(self, client: ClientLike) -> None:
        """Refresh the token.

        The client secret is sent when held. Public clients (device code flow)
        refresh without one.

        Raises:
            NoRefreshTokenError: If the token has no refresh token.
            RefreshTokenError: If refreshing failed.
        """
        if self.refresh_token is None:
            raise NoRefreshTokenError("no refresh token found")
        access_token, expires_in, refresh_token = await oauth.refresh_token(client, self.refresh_token, self._client_id, self.client_secret)
        self.access_token = access_token
        self.refresh_token = refresh_token
        self._lifetime = _Lifetime(expires_in)


def _authorize_url(client_id: ClientId, redirect_url: str, response_type: str, scopes: List[Scope], csrf: CsrfToken, force_verify: bool) -> str:
    params = [
        ("response_type", response_type),
        ("client_id", client_id.as_str()),
        ("redirect_uri", redirect_url),
        ("scope", scopes_to_string(scopes)),
        ("state", csrf.secret()),
        ("force_verify", "true" if force_verify else "false"),
    ]
    return str(httpx.URL(get_settings().auth_url).copy_merge_params(params))


class _AuthorizeUrlBuilder:
    """Scope, CSRF and URL handling shared by the browser-based flows."""

    _response_type = "code"

    def __init__(self, client_id: ClientId, redirect_url: str):
        self.client_id = client_id
        self.redirect_url = redirect_url
        self.scopes: List[Scope] = []
        self.csrf: Optional[CsrfToken] = None
        self._force_verify = False

    def set_scopes(self, scopes: Iterable[Scope]):
        """Set the scopes to request."""
        self.scopes = list(scopes)
        return self

    def add_scope(self, scope: Scope) -> None:
        """Add a single scope to request."""
        self.scopes.append(scope)

    def force_verify(self, force: bool = True):
        """Make the user re-approve the application, letting them switch accounts."""
        self._force_verify = force
        return self

    def generate_url(self) -> Tuple[str, CsrfToken]:
        """Generate the URL the user should visit to authorize the application.

        A fresh CSRF token is generated and remembered for checking the redirect.

        Returns:
            Tuple[str, CsrfToken]: Authorization URL and the CSRF token sent as ``state``.
        """
        csrf = CsrfToken.new_random()
        self.csrf = csrf
        return _authorize_url(self.client_id, self.redirect_url, self._response_type, self.scopes, csrf, self._force_verify), csrf

    def set_csrf(self, csrf: CsrfToken) -> None:
        """Set the CSRF token, e.g. when the builder was recreated between requests."""
        self.csrf = csrf

    def csrf_is_valid(self, state: str) -> bool:
        """Check the ``state`` returned on the redirect against the CSRF token."""
        if self.csrf is None:
            return False
        return secrets.compare_digest(self.csrf.secret().encode(), state.encode())


class UserTokenBuilder(_AuthorizeUrlBuilder):
    """Builder for the authorization code flow.

    1. :meth:`generate_url` and send the user there.
    2. Twitch redirects to ``redirect_url`` with ``code`` and ``state``.
    3. :meth:`get_user_token` exchanges the code for a token.
    """

    _response_type = "code"

    def __init__(self, client_id: ClientId, client_secret: ClientSecret, redirect_url: str):
        super().__init__(client_id, redirect_url)
        self.client_secret = client_secret

    def get_user_token_request(self, code: str) -> httpx.Request:
        """Get the request exchanging an authorization code for a token."""
        return construct_request(
            get_settings().token_url,
            [
                ("client_id", self.client_id.as_str()),
                ("client_secret", self.client_secret.secret()),
                ("code", code),
                ("grant_type", "authorization_code"),
                ("redirect_uri", self.redirect_url),
            ],
        )

    async def get_user_token(self, client: ClientLike, state: str, code: str) -> UserToken:
        """Exchange the authorization code for a user token.

        Args:
            client: HTTP client.
            state: ``state`` query parameter of the redirect.
            code: ``code`` query parameter of the redirect.

        Returns:
            UserToken: The validated user token.

        Raises:
            StateMismatchError: If ``state`` does not match the CSRF token.
            UserTokenExchangeError: If the exchange or validation failed.
        """
        if not self.csrf_is_valid(state):
            raise StateMismatchError()
        try:
            response = await send(client, self.get_user_token_request(code))
            body = parse_response(response, TwitchTokenResponse)
        except (RequestError, RequestParseError) as exc:
            raise UserTokenExchangeError(f"failed to exchange code: {exc}") from exc
        try:
            token = await UserToken.from_response(client, body, self.client_secret)
        except ValidationError as exc:
            raise UserTokenExchangeError(f"could not get validation for token: {exc}") from exc
        logger.info(f"Obtained user token for {token.login}")
        return token


class ImplicitUserTokenBuilder(_AuthorizeUrlBuilder):
    """Builder for the implicit grant flow.

    Twitch redirects with the token in the URL fragment, so it must be read by
    the browser and handed to :meth:`get_user_token`.
    """

    _response_type = "token"

    async def get_user_token(
        self,
        client: ClientLike,
        state: Optional[str],
        access_token: Optional[str],
        error: Optional[str] = None,
        error_description: Optional[str] = None,
    ) -> UserToken:
        """Finish the implicit flow with the values from the redirect.

        Args:
            client: HTTP client.
            state: ``state`` from the redirect.
            access_token: ``access_token`` from the redirect, None if Twitch returned an error.
            error: ``error`` from the redirect.
            error_description: ``error_description`` from the redirect.

        Returns:
            UserToken: The validated user token.

        Raises:
            StateMismatchError: If ``state`` does not match the CSRF token.
            ImplicitUserTokenExchangeError: If Twitch returned an error or validation failed.
        """
        if state is None or not self.csrf_is_valid(state):
            raise StateMismatchError()
        if access_token is None:
            raise ImplicitUserTokenExchangeError(f"twitch returned an error: {error} - {error_description}", error, error_description)
        try:
            token = await UserToken.from_existing(client, AccessToken(access_token))
        except ValidationError as exc:
            raise ImplicitUserTokenExchangeError(f"could not get validation for token: {exc}") from exc
        logger.info(f"Obtained implicit user token for {token.login}")
        return token
