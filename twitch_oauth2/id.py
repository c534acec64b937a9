# -*- coding: utf-8 -*-
"""Location: ./twitch_oauth2/id.py
Copyright 2026
SPDX-License-Identifier: Apache-2.0

Representation of the OAuth2 responses from ``id.twitch.tv``.
"""

# Standard
from datetime import timedelta
from typing import List, Optional

# Third-Party
import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator

# First-Party
from twitch_oauth2.scopes.definitions import Scope
from twitch_oauth2.types import AccessToken, RefreshToken


def normalize_scope_list(v):
    """Twitch sends ``[""]`` for a token without scopes."""
    if v is None:
        return None
    if isinstance(v, str):
        v = [s for s in v.split(" ") if s]
        return v or None
    if len(v) == 1 and v[0] == "":
        return None
    return v


class TwitchTokenResponse(BaseModel):
    """Token response from the token endpoint.

    Returned by the client credentials, authorization code, refresh and device
    code grants.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    access_token: AccessToken
    expires_in: Optional[timedelta] = None
    refresh_token: Optional[RefreshToken] = None
    scopes: Optional[List[Scope]] = Field(default=None, alias="scope")
    token_type: Optional[str] = None

    @field_validator("scopes", mode="before")
    @classmethod
    def _scopes(cls, v):
        return normalize_scope_list(v)

    @classmethod
    def from_response(cls, response: httpx.Response) -> "TwitchTokenResponse":
        """Parse a token response, raising for Twitch errors.

        Args:
            response: Response from the token endpoint.

        Returns:
            TwitchTokenResponse: Parsed response.
        """
        # First-Party
        from twitch_oauth2.oauth import parse_response  # pylint: disable=import-outside-toplevel

        return parse_response(response, cls)


class TwitchTokenErrorResponse(BaseModel):
    """Error payload returned by ``id.twitch.tv``.

    Examples:
        >>> str(TwitchTokenErrorResponse(status=400, message="invalid client secret"))
        'Bad Request - invalid client secret'
    """

    model_config = ConfigDict(extra="ignore")

    status: int = Field(ge=100, lt=600)
    message: str
    error: Optional[str] = None

    def __str__(self) -> str:
        error = self.error or httpx.codes.get_reason_phrase(self.status) or "Error"
        return f"{error} - {self.message}"


class DeviceCodeResponse(BaseModel):
    """Response from the device authorization endpoint."""

    model_config = ConfigDict(extra="ignore")

    device_code: str
    expires_in: timedelta
    interval: timedelta
    user_code: str
    verification_uri: str
