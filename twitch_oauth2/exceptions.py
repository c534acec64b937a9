# -*- coding: utf-8 -*-
"""Location: ./twitch_oauth2/exceptions.py
Copyright 2026
SPDX-License-Identifier: Apache-2.0

Twitch OAuth2 library exceptions.

Operation errors wrap their underlying cause (transport failure, unparsable
response, Twitch error payload) through exception chaining, so the original
error is available as ``__cause__``.
"""

# Standard
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    # First-Party
    from twitch_oauth2.id import TwitchTokenErrorResponse
    from twitch_oauth2.scopes.validator import Validator


class TwitchOAuth2Error(Exception):
    """Base exception for the library."""


class RequestError(TwitchOAuth2Error):
    """Raised when the HTTP client failed to perform a request."""


class RequestParseError(TwitchOAuth2Error):
    """Raised when a response from Twitch could not be used."""


class DeserializeError(RequestParseError):
    """Raised when a response body could not be deserialized."""


class TwitchError(RequestParseError):
    """Raised when Twitch answered with an error payload."""

    def __init__(self, response: "TwitchTokenErrorResponse"):
        """Initialize with the error payload.

        Args:
            response: Error response returned by Twitch.
        """
        super().__init__(f"twitch returned an error: {response}")
        self.response = response


class NotJsonError(RequestParseError):
    """Raised when the response content type is not ``application/json``."""

    def __init__(self, found: str):
        super().__init__(f"returned content is not `application/json`, found `{found}`")
        self.found = found


class UnexpectedStatusError(RequestParseError):
    """Raised when Twitch returned an unexpected status code."""

    def __init__(self, status: int):
        super().__init__(f"twitch returned an unexpected status code: {status}")
        self.status = status


class ValidationError(TwitchOAuth2Error):
    """Raised when token validation fails."""


class NotAuthorizedError(ValidationError):
    """Raised when the token is not authorized for use."""


class NoLoginError(ValidationError):
    """Raised when validation did not return a login where one was expected."""


class RevokeTokenError(TwitchOAuth2Error):
    """Raised when token revocation fails."""


class RefreshTokenError(TwitchOAuth2Error):
    """Raised when refreshing a token fails."""


class NoRefreshTokenError(RefreshTokenError):
    """Raised when there is no refresh token to refresh with."""


class NoExpirationError(RefreshTokenError):
    """Raised when a refreshed token came back without an expiration."""


class AppAccessTokenError(TwitchOAuth2Error):
    """Raised when the client credentials flow fails."""


class UserTokenExchangeError(TwitchOAuth2Error):
    """Raised when exchanging an authorization code for a user token fails."""


class ImplicitUserTokenExchangeError(TwitchOAuth2Error):
    """Raised when finishing the implicit flow fails."""

    def __init__(self, message: str, error: Optional[str] = None, description: Optional[str] = None):
        super().__init__(message)
        self.error = error
        self.description = description


class StateMismatchError(UserTokenExchangeError, ImplicitUserTokenExchangeError):
    """Raised when the returned state does not match the CSRF token sent."""

    def __init__(self, message: str = "state CSRF does not match"):
        super().__init__(message)


class DeviceUserTokenExchangeError(TwitchOAuth2Error):
    """Raised when the device code flow fails."""


class DeviceFlowNotStartedError(DeviceUserTokenExchangeError):
    """Raised when polling for a device token before starting the flow."""


class DeviceCodeExpiredError(DeviceUserTokenExchangeError):
    """Raised when the user did not authorize before the device code expired."""


class MissingScopesError(TwitchOAuth2Error):
    """Raised when a token does not hold the scopes an application requires."""

    def __init__(self, missing: "Validator"):
        """Initialize with the residual requirement.

        Args:
            missing: Pruned validator describing what is still required.
        """
        super().__init__(f"token is missing scopes: {missing}")
        self.missing = missing


class ValidatorSyntaxError(TwitchOAuth2Error, ValueError):
    """Raised when a textual validator expression is malformed."""
