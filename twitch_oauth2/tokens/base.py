# -*- coding: utf-8 -*-
"""Location: ./twitch_oauth2/tokens/base.py
Copyright 2026
SPDX-License-Identifier: Apache-2.0

Common token interface.
"""

# Standard
from abc import ABC, abstractmethod
from datetime import timedelta
from enum import Enum
import logging
import time
from typing import List, Optional

# Third-Party
from pydantic import BaseModel, ConfigDict, field_validator

# First-Party
from twitch_oauth2.client import ClientLike
from twitch_oauth2.exceptions import MissingScopesError
from twitch_oauth2.id import normalize_scope_list
from twitch_oauth2 import oauth
from twitch_oauth2.scopes.definitions import Scope
from twitch_oauth2.scopes.validator import Validator
from twitch_oauth2.types import AccessToken, ClientId

logger = logging.getLogger(__name__)


class BearerTokenType(str, Enum):
    """Types of bearer tokens."""

    # requests in the context of an authenticated user
    USER_TOKEN = "user_token"
    # server-to-server requests
    APP_ACCESS_TOKEN = "app_access_token"


class ValidatedToken(BaseModel):
    """Token validation returned from ``https://id.twitch.tv/oauth2/validate``.

    See https://dev.twitch.tv/docs/authentication/validate-tokens/
    """

    model_config = ConfigDict(extra="ignore")

    client_id: ClientId
    login: Optional[str] = None
    user_id: Optional[str] = None
    scopes: Optional[List[Scope]] = None
    expires_in: Optional[timedelta] = None

    @field_validator("scopes", mode="before")
    @classmethod
    def _scopes(cls, v):
        return normalize_scope_list(v)

    @field_validator("expires_in", mode="before")
    @classmethod
    def _zero_means_unknown(cls, v):
        # app tokens can report 0 while still being valid
        if v == 0:
            return None
        return v


class _Lifetime:
    """Remaining lifetime measured from when the token object was created."""

    __slots__ = ("expires_in", "created")

    def __init__(self, expires_in: Optional[timedelta]):
        self.expires_in = expires_in
        self.created = time.monotonic()

    def remaining(self) -> Optional[timedelta]:
        if self.expires_in is None:
            return None
        remaining = self.expires_in - timedelta(seconds=time.monotonic() - self.created)
        return max(remaining, timedelta(0))


class TwitchToken(ABC):
    """Interface shared by :class:`AppAccessToken` and :class:`UserToken`."""

    @classmethod
    @abstractmethod
    def token_type(cls) -> BearerTokenType:
        """Get the type of token."""

    @property
    @abstractmethod
    def client_id(self) -> ClientId:
        """Client ID associated with the token. Twitch requires this in all Helix API calls."""

    @property
    @abstractmethod
    def token(self) -> AccessToken:
        """The access token used to authenticate requests."""

    @property
    @abstractmethod
    def login(self) -> Optional[str]:
        """Username associated with the token."""

    @property
    @abstractmethod
    def user_id(self) -> Optional[str]:
        """User ID associated with the token."""

    @property
    @abstractmethod
    def scopes(self) -> List[Scope]:
        """Scopes attached to the token."""

    @abstractmethod
    def expires_in(self) -> Optional[timedelta]:
        """Get the remaining lifetime of the token, None if unknown."""

    @abstractmethod
    async def refresh(self, client: ClientLike) -> None:
        """Refresh this token, replacing it with a newer one."""

    def is_elapsed(self) -> bool:
        """Whether the token is expired. Tokens without a known lifetime never are."""
        remaining = self.expires_in()
        return remaining is not None and remaining <= timedelta(0)

    async def validate_token(self, client: ClientLike) -> ValidatedToken:
        """Validate this token.

        Should be done regularly, see https://dev.twitch.tv/docs/authentication/validate-tokens/
        This does not modify the token.
        """
        return await oauth.validate_token(client, self.token)

    async def revoke_token(self, client: ClientLike) -> None:
        """Revoke this token."""
        await oauth.revoke_token(client, self.token, self.client_id)

    def missing_scopes(self, required: Validator) -> Optional[Validator]:
        """Get the part of ``required`` that this token's scopes do not satisfy."""
        return required.missing(self.scopes)

    def ensure_scopes(self, required: Validator) -> None:
        """Check that this token satisfies a scope requirement.

        Args:
            required: Scope requirement.

        Raises:
            MissingScopesError: If the requirement is not met. The error carries the residual validator.
        """
        missing = self.missing_scopes(required)
        if missing is not None:
            logger.warning(f"Token for {self.login or self.client_id} is missing scopes: {missing}")
            raise MissingScopesError(missing)
