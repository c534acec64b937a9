# -*- coding: utf-8 -*-
"""Unit tests for id.twitch.tv response models."""

# Standard
from datetime import timedelta

# Third-Party
import httpx
import pydantic
import pytest

# First-Party
from twitch_oauth2.exceptions import TwitchError, UnexpectedStatusError
from twitch_oauth2.id import DeviceCodeResponse, TwitchTokenErrorResponse, TwitchTokenResponse
from twitch_oauth2.scopes import Scope
from twitch_oauth2.types import AccessToken, RefreshToken


def test_token_response():
    body = '{"access_token": "a", "expires_in": 3600, "refresh_token": "r", "scope": ["chat:read", "chat:edit"], "token_type": "bearer"}'
    response = TwitchTokenResponse.model_validate_json(body)
    assert response.access_token == AccessToken("a")
    assert response.refresh_token == RefreshToken("r")
    assert response.expires_in == timedelta(seconds=3600)
    assert response.scopes == [Scope.CHAT_READ, Scope.CHAT_EDIT]
    assert response.token_type == "bearer"


def test_token_response_minimal():
    response = TwitchTokenResponse.model_validate_json('{"access_token": "a"}')
    assert response.expires_in is None
    assert response.refresh_token is None
    assert response.scopes is None


@pytest.mark.parametrize("scope,expected", [([""], None), ("", None), ("chat:read chat:edit", [Scope.CHAT_READ, Scope.CHAT_EDIT]), ([], [])])
def test_token_response_scope_shapes(scope, expected):
    response = TwitchTokenResponse.model_validate({"access_token": "a", "scope": scope})
    assert response.scopes == expected


def test_token_response_from_response():
    ok = httpx.Response(200, json={"access_token": "a", "expires_in": 10})
    assert TwitchTokenResponse.from_response(ok).expires_in == timedelta(seconds=10)

    error = httpx.Response(400, json={"status": 400, "message": "invalid client secret"})
    with pytest.raises(TwitchError) as exc_info:
        TwitchTokenResponse.from_response(error)
    assert exc_info.value.response.message == "invalid client secret"

    with pytest.raises(UnexpectedStatusError):
        TwitchTokenResponse.from_response(httpx.Response(502, content=b"bad gateway"))


def test_error_response_display():
    assert str(TwitchTokenErrorResponse(status=400, message="missing client id")) == "Bad Request - missing client id"
    assert str(TwitchTokenErrorResponse(status=400, message="m", error="Bad Request")) == "Bad Request - m"


def test_error_response_rejects_invalid_status():
    with pytest.raises(pydantic.ValidationError):
        TwitchTokenErrorResponse(status=42, message="m")


def test_device_code_response():
    body = {
        "device_code": "ike3GM8QIdYZs43KdrWPIO36LofILoCyFEzjlQ91",
        "expires_in": 1800,
        "interval": 5,
        "user_code": "ABCDEFGH",
        "verification_uri": "https://www.twitch.tv/activate?public=true&device-code=ABCDEFGH",
    }
    response = DeviceCodeResponse.model_validate(body)
    assert response.expires_in == timedelta(minutes=30)
    assert response.interval == timedelta(seconds=5)
    assert response.user_code == "ABCDEFGH"
