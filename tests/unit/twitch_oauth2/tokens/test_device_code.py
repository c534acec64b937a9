# -*- coding: utf-8 -*-
"""Unit tests for the device code flow."""

# Standard
from unittest.mock import AsyncMock

# Third-Party
import pytest

# First-Party
from twitch_oauth2.exceptions import DeviceCodeExpiredError, DeviceFlowNotStartedError, DeviceUserTokenExchangeError
from twitch_oauth2.scopes import Scope
from twitch_oauth2.tokens import DeviceUserTokenBuilder
from twitch_oauth2.tokens.device_code import DEVICE_CODE_GRANT_TYPE
from twitch_oauth2.types import AccessToken, ClientId, RefreshToken

CLIENT_ID = ClientId("wbmytr93xzw8zbg0p1izqyzzc5mbiz")

PENDING = {"status": 400, "message": "authorization_pending"}


def _device_codes(expires_in: int = 1800, interval: int = 5) -> dict:
    return {
        "device_code": "ike3GM8QIdYZs43KdrWPIO36LofILoCyFEzjlQ91",
        "expires_in": expires_in,
        "interval": interval,
        "user_code": "ABCDEFGH",
        "verification_uri": "https://www.twitch.tv/activate?public=true&device-code=ABCDEFGH",
    }


@pytest.fixture
def builder():
    return DeviceUserTokenBuilder(CLIENT_ID, [Scope.CHAT_READ, Scope.CHAT_EDIT])


@pytest.mark.asyncio
async def test_start(fake_twitch, http_client, builder):
    fake_twitch.add("/oauth2/device", json=_device_codes())
    codes = await builder.start(http_client)
    assert codes.user_code == "ABCDEFGH"

    request = fake_twitch.requests_to("/oauth2/device")[0]
    assert request.url.params["client_id"] == CLIENT_ID.as_str()
    assert request.url.params["scopes"] == "chat:read chat:edit"

    # starting again while pending reuses the codes
    assert await builder.start(http_client) is codes
    assert len(fake_twitch.requests_to("/oauth2/device")) == 1


@pytest.mark.asyncio
async def test_start_error(fake_twitch, http_client, builder):
    fake_twitch.add("/oauth2/device", status=400, json={"status": 400, "message": "invalid client"})
    with pytest.raises(DeviceUserTokenExchangeError):
        await builder.start(http_client)


def test_try_finish_request_requires_start(builder):
    with pytest.raises(DeviceFlowNotStartedError):
        builder.try_finish_request()


@pytest.mark.asyncio
async def test_wait_for_code_requires_start(http_client, builder):
    with pytest.raises(DeviceFlowNotStartedError):
        await builder.wait_for_code(http_client)


@pytest.mark.asyncio
async def test_try_finish_request(fake_twitch, http_client, builder):
    fake_twitch.add("/oauth2/device", json=_device_codes())
    await builder.start(http_client)
    request = builder.try_finish_request()
    assert request.url.path == "/oauth2/token"
    assert request.url.params["grant_type"] == DEVICE_CODE_GRANT_TYPE
    assert request.url.params["device_code"] == "ike3GM8QIdYZs43KdrWPIO36LofILoCyFEzjlQ91"
    assert "client_secret" not in request.url.params


@pytest.mark.asyncio
async def test_wait_for_code_polls_until_authorized(fake_twitch, http_client, builder, user_validation):
    fake_twitch.add("/oauth2/device", json=_device_codes())
    fake_twitch.add("/oauth2/token", status=400, json=PENDING)
    fake_twitch.add("/oauth2/token", status=400, json=PENDING)
    fake_twitch.add("/oauth2/token", json={"access_token": "devtoken", "refresh_token": "devrefresh", "expires_in": 14400, "scope": ["chat:read", "chat:edit"]})
    fake_twitch.add("/oauth2/validate", json=user_validation)
    sleep = AsyncMock()

    await builder.start(http_client)
    token = await builder.wait_for_code(http_client, sleep=sleep)

    assert token.token == AccessToken("devtoken")
    assert token.refresh_token == RefreshToken("devrefresh")
    assert token.login == "twitchdev"
    assert token.client_secret is None
    assert sleep.await_count == 2
    sleep.assert_awaited_with(5.0)
    assert len(fake_twitch.requests_to("/oauth2/token")) == 3
    # the flow can be started again afterwards
    assert builder.response is None


@pytest.mark.asyncio
async def test_try_finish_pending_returns_none(fake_twitch, http_client, builder):
    fake_twitch.add("/oauth2/device", json=_device_codes())
    fake_twitch.add("/oauth2/token", status=400, json=PENDING)
    await builder.start(http_client)
    assert await builder.try_finish(http_client) is None


@pytest.mark.asyncio
async def test_try_finish_rejected(fake_twitch, http_client, builder):
    fake_twitch.add("/oauth2/device", json=_device_codes())
    fake_twitch.add("/oauth2/token", status=400, json={"status": 400, "message": "invalid device code"})
    await builder.start(http_client)
    with pytest.raises(DeviceUserTokenExchangeError, match="invalid device code"):
        await builder.try_finish(http_client)


@pytest.mark.asyncio
async def test_wait_for_code_expires(fake_twitch, http_client, builder):
    fake_twitch.add("/oauth2/device", json=_device_codes(expires_in=1, interval=5))
    fake_twitch.add("/oauth2/token", status=400, json=PENDING)
    sleep = AsyncMock()

    await builder.start(http_client)
    with pytest.raises(DeviceCodeExpiredError):
        await builder.wait_for_code(http_client, sleep=sleep)

    sleep.assert_not_awaited()
    assert builder.response is None
