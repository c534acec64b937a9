# -*- coding: utf-8 -*-
"""Location: ./twitch_oauth2/tokens/__init__.py
Copyright 2026
SPDX-License-Identifier: Apache-2.0

Twitch token types.
"""

# First-Party
from twitch_oauth2.tokens.app_access_token import AppAccessToken
from twitch_oauth2.tokens.base import BearerTokenType, TwitchToken, ValidatedToken
from twitch_oauth2.tokens.device_code import DeviceUserTokenBuilder
from twitch_oauth2.tokens.user_token import ImplicitUserTokenBuilder, UserToken, UserTokenBuilder

__all__ = [
    "AppAccessToken",
    "BearerTokenType",
    "DeviceUserTokenBuilder",
    "ImplicitUserTokenBuilder",
    "TwitchToken",
    "UserToken",
    "UserTokenBuilder",
    "ValidatedToken",
]
