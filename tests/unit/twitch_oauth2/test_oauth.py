# -*- coding: utf-8 -*-
"""Unit tests for the id.twitch.tv request helpers."""

# Standard
from datetime import timedelta

# Third-Party
import httpx
import pytest

# First-Party
from twitch_oauth2.config import get_settings
from twitch_oauth2.exceptions import (
    DeserializeError,
    NoExpirationError,
    NotAuthorizedError,
    NotJsonError,
    RefreshTokenError,
    RevokeTokenError,
    TwitchError,
    UnexpectedStatusError,
    ValidationError,
)
from twitch_oauth2.id import TwitchTokenResponse
from twitch_oauth2.oauth import (
    construct_request,
    parse_response,
    parse_token_response_raw,
    refresh_token,
    refresh_token_request,
    revoke_token,
    revoke_token_request,
    validate_token,
    validate_token_request,
)
from twitch_oauth2.scopes import Scope
from twitch_oauth2.types import AccessToken, ClientId, ClientSecret, RefreshToken


def test_construct_request_defaults():
    request = construct_request("https://id.twitch.tv/oauth2/token?existing=1", [("grant_type", "client_credentials"), ("scope", "chat:read chat:edit")])
    assert request.method == "POST"
    assert request.url.params["existing"] == "1"
    assert request.url.params["grant_type"] == "client_credentials"
    assert request.url.params["scope"] == "chat:read chat:edit"
    assert request.headers["Accept"] == "application/json"
    assert request.content == b""


def test_construct_request_keeps_explicit_headers():
    request = construct_request("https://example.com", headers={"Accept": "text/plain", "X-Test": "1"}, method="GET")
    assert request.method == "GET"
    assert request.headers["Accept"] == "text/plain"
    assert request.headers["X-Test"] == "1"


def test_parse_token_response_raw_prefers_error_payload():
    # an error body is reported even with a success status
    response = httpx.Response(200, json={"status": 400, "message": "invalid client"})
    with pytest.raises(TwitchError):
        parse_token_response_raw(response)

    with pytest.raises(UnexpectedStatusError) as exc_info:
        parse_token_response_raw(httpx.Response(204))
    assert exc_info.value.status == 204

    ok = httpx.Response(200)
    assert parse_token_response_raw(ok) is ok


def test_parse_response_requires_json_content_type():
    response = httpx.Response(200, content=b'{"access_token": "a"}', headers={"Content-Type": "text/html; charset=utf-8"})
    with pytest.raises(NotJsonError) as exc_info:
        parse_response(response, TwitchTokenResponse)
    assert exc_info.value.found == "text/html; charset=utf-8"


def test_parse_response_accepts_json_with_parameters():
    response = httpx.Response(200, content=b'{"access_token": "a"}', headers={"Content-Type": "application/json; charset=utf-8"})
    assert parse_response(response, TwitchTokenResponse).access_token == AccessToken("a")


def test_parse_response_mock_api_skips_content_type(monkeypatch):
    monkeypatch.setenv("TWITCH_MOCK_API", "true")
    get_settings.cache_clear()
    response = httpx.Response(200, content=b'{"access_token": "a"}', headers={"Content-Type": "text/plain"})
    assert parse_response(response, TwitchTokenResponse).access_token == AccessToken("a")


def test_parse_response_deserialize_error():
    with pytest.raises(DeserializeError) as exc_info:
        parse_response(httpx.Response(200, json={"unexpected": True}), TwitchTokenResponse)
    assert exc_info.value.__cause__ is not None


def test_validate_token_request():
    request = validate_token_request(AccessToken("abc"))
    assert request.method == "GET"
    assert str(request.url) == "https://id.twitch.tv/oauth2/validate"
    assert request.headers["Authorization"] == "OAuth abc"


@pytest.mark.asyncio
async def test_validate_token(fake_twitch, http_client, user_validation):
    fake_twitch.add("/oauth2/validate", json=user_validation)
    validated = await validate_token(http_client, AccessToken("abc"))
    assert validated.client_id == ClientId("wbmytr93xzw8zbg0p1izqyzzc5mbiz")
    assert validated.login == "twitchdev"
    assert validated.user_id == "141981764"
    assert validated.scopes == [Scope.CHANNEL_READ_SUBSCRIPTIONS, Scope.CHAT_READ]
    assert validated.expires_in == timedelta(seconds=5520838)


@pytest.mark.asyncio
async def test_validate_app_token_without_expiry(fake_twitch, http_client):
    fake_twitch.add("/oauth2/validate", json={"client_id": "cid", "scopes": [""], "expires_in": 0})
    validated = await validate_token(http_client, AccessToken("abc"))
    assert validated.login is None
    assert validated.scopes is None
    assert validated.expires_in is None


@pytest.mark.asyncio
async def test_validate_token_not_authorized(fake_twitch, http_client):
    fake_twitch.add("/oauth2/validate", status=401, json={"status": 401, "message": "invalid access token"})
    with pytest.raises(NotAuthorizedError):
        await validate_token(http_client, AccessToken("expired"))


@pytest.mark.asyncio
async def test_validate_token_other_failure(fake_twitch, http_client):
    fake_twitch.add("/oauth2/validate", status=500, content=b"oops")
    with pytest.raises(ValidationError) as exc_info:
        await validate_token(http_client, AccessToken("abc"))
    assert not isinstance(exc_info.value, NotAuthorizedError)
    assert isinstance(exc_info.value.__cause__, UnexpectedStatusError)


def test_revoke_token_request():
    request = revoke_token_request(AccessToken("abc"), ClientId("cid"))
    assert request.method == "POST"
    assert request.url.path == "/oauth2/revoke"
    assert dict(request.url.params) == {"client_id": "cid", "token": "abc"}


@pytest.mark.asyncio
async def test_revoke_token(fake_twitch, http_client):
    fake_twitch.add("/oauth2/revoke", status=200)
    await revoke_token(http_client, AccessToken("abc"), ClientId("cid"))
    assert len(fake_twitch.requests_to("/oauth2/revoke")) == 1


@pytest.mark.asyncio
async def test_revoke_token_error(fake_twitch, http_client):
    fake_twitch.add("/oauth2/revoke", status=400, json={"status": 400, "message": "Invalid token"})
    with pytest.raises(RevokeTokenError) as exc_info:
        await revoke_token(http_client, AccessToken("abc"), ClientId("cid"))
    assert isinstance(exc_info.value.__cause__, TwitchError)
    assert exc_info.value.__cause__.response.message == "Invalid token"


def test_refresh_token_request_public_client():
    request = refresh_token_request(RefreshToken("r"), ClientId("cid"))
    assert "client_secret" not in request.url.params
    assert request.url.params["grant_type"] == "refresh_token"
    assert request.url.params["refresh_token"] == "r"

    confidential = refresh_token_request(RefreshToken("r"), ClientId("cid"), ClientSecret("s"))
    assert confidential.url.params["client_secret"] == "s"


@pytest.mark.asyncio
async def test_refresh_token(fake_twitch, http_client):
    fake_twitch.add("/oauth2/token", json={"access_token": "new", "refresh_token": "new-r", "expires_in": 14400, "scope": ["chat:read"], "token_type": "bearer"})
    access_token, expires_in, new_refresh = await refresh_token(http_client, RefreshToken("r"), ClientId("cid"), ClientSecret("s"))
    assert access_token == AccessToken("new")
    assert expires_in == timedelta(hours=4)
    assert new_refresh == RefreshToken("new-r")


@pytest.mark.asyncio
async def test_refresh_token_without_expiry(fake_twitch, http_client):
    fake_twitch.add("/oauth2/token", json={"access_token": "new"})
    with pytest.raises(NoExpirationError):
        await refresh_token(http_client, RefreshToken("r"), ClientId("cid"))


@pytest.mark.asyncio
async def test_refresh_token_rejected(fake_twitch, http_client):
    fake_twitch.add("/oauth2/token", status=400, json={"status": 400, "message": "Invalid refresh token"})
    with pytest.raises(RefreshTokenError) as exc_info:
        await refresh_token(http_client, RefreshToken("r"), ClientId("cid"))
    assert not isinstance(exc_info.value, NoExpirationError)
