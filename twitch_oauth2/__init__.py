# -*- coding: utf-8 -*-
"""Location: ./twitch_oauth2/__init__.py
Copyright 2026
SPDX-License-Identifier: Apache-2.0

OAuth2 for Twitch endpoints.

Examples:
    Validate an existing token and check it against the scopes an application needs::

        import httpx
        from twitch_oauth2 import AccessToken, Scope, UserToken, validator, any_

        CHAT_BOT = validator(Scope.CHAT_EDIT, any_(Scope.CHAT_READ, Scope.USER_READ_CHAT))

        async with httpx.AsyncClient() as client:
            token = await UserToken.from_existing(client, AccessToken("sometokenhere"))
            token.ensure_scopes(CHAT_BOT)
"""

__version__ = "0.1.0"

# First-Party
from twitch_oauth2.client import HttpClient, HttpxClient
from twitch_oauth2.config import get_settings, Settings
from twitch_oauth2.exceptions import (
    AppAccessTokenError,
    DeserializeError,
    DeviceCodeExpiredError,
    DeviceFlowNotStartedError,
    DeviceUserTokenExchangeError,
    ImplicitUserTokenExchangeError,
    MissingScopesError,
    NoExpirationError,
    NoLoginError,
    NoRefreshTokenError,
    NotAuthorizedError,
    NotJsonError,
    RefreshTokenError,
    RequestError,
    RequestParseError,
    RevokeTokenError,
    StateMismatchError,
    TwitchError,
    TwitchOAuth2Error,
    UnexpectedStatusError,
    UserTokenExchangeError,
    ValidationError,
    ValidatorSyntaxError,
)
from twitch_oauth2.id import DeviceCodeResponse, TwitchTokenErrorResponse, TwitchTokenResponse
from twitch_oauth2.oauth import refresh_token, revoke_token, validate_token
from twitch_oauth2.scopes import all_, any_, not_, parse_validator, Scope, scope, validator, Validator
from twitch_oauth2.tokens import (
    AppAccessToken,
    BearerTokenType,
    DeviceUserTokenBuilder,
    ImplicitUserTokenBuilder,
    TwitchToken,
    UserToken,
    UserTokenBuilder,
    ValidatedToken,
)
from twitch_oauth2.types import AccessToken, ClientId, ClientSecret, CsrfToken, RefreshToken

__all__ = [
    "AccessToken",
    "AppAccessToken",
    "AppAccessTokenError",
    "BearerTokenType",
    "ClientId",
    "ClientSecret",
    "CsrfToken",
    "DeserializeError",
    "DeviceCodeExpiredError",
    "DeviceCodeResponse",
    "DeviceFlowNotStartedError",
    "DeviceUserTokenBuilder",
    "DeviceUserTokenExchangeError",
    "HttpClient",
    "HttpxClient",
    "ImplicitUserTokenBuilder",
    "ImplicitUserTokenExchangeError",
    "MissingScopesError",
    "NoExpirationError",
    "NoLoginError",
    "NoRefreshTokenError",
    "NotAuthorizedError",
    "NotJsonError",
    "RefreshToken",
    "RefreshTokenError",
    "RequestError",
    "RequestParseError",
    "RevokeTokenError",
    "Scope",
    "Settings",
    "StateMismatchError",
    "TwitchError",
    "TwitchOAuth2Error",
    "TwitchToken",
    "TwitchTokenErrorResponse",
    "TwitchTokenResponse",
    "UnexpectedStatusError",
    "UserToken",
    "UserTokenBuilder",
    "UserTokenExchangeError",
    "ValidatedToken",
    "ValidationError",
    "Validator",
    "ValidatorSyntaxError",
    "all_",
    "any_",
    "get_settings",
    "not_",
    "parse_validator",
    "refresh_token",
    "revoke_token",
    "scope",
    "validate_token",
    "validator",
]
