# -*- coding: utf-8 -*-
"""Unit tests for the twitch-oauth2 command line interface."""

# Standard
import json
from unittest.mock import patch

# Third-Party
import httpx
import pytest
from typer.testing import CliRunner

# First-Party
from twitch_oauth2.cli import app
from twitch_oauth2.client import HttpxClient

runner = CliRunner()

ENV = {"TWITCH_CLIENT_ID": "cid", "TWITCH_CLIENT_SECRET": "csecret", "TWITCH_LOG_LEVEL": "ERROR"}


@pytest.fixture
def mock_client(fake_twitch):
    """Route CLI requests to the scripted Twitch."""
    transport = httpx.MockTransport(fake_twitch.handler)
    with patch("twitch_oauth2.cli._client", side_effect=lambda: HttpxClient(httpx.AsyncClient(transport=transport))):
        yield fake_twitch


def test_check_scopes_ok():
    result = runner.invoke(app, ["check-scopes", "chat:edit, any(chat:read, user:edit)", "chat:edit", "user:edit"], env=ENV)
    assert result.exit_code == 0
    assert "ok" in result.output


def test_check_scopes_missing():
    result = runner.invoke(app, ["check-scopes", "chat:edit, any(chat:read, user:edit)", "chat:edit"], env=ENV)
    assert result.exit_code == 1
    assert "missing: (chat:read or user:edit)" in result.output


def test_check_scopes_invalid_expression():
    result = runner.invoke(app, ["check-scopes", "maybe(chat:edit)", "chat:edit"], env=ENV)
    assert result.exit_code == 2


def test_app_token_json(mock_client):
    mock_client.add("/oauth2/token", json={"access_token": "apptoken", "expires_in": 3600, "token_type": "bearer"})
    result = runner.invoke(app, ["app-token", "--scope", "bits:read", "--json"], env=ENV)
    assert result.exit_code == 0, result.output

    data = json.loads(result.stdout)
    assert data["access_token"] == "apptoken"
    assert data["token_type"] == "app_access_token"
    assert data["client_id"] == "cid"
    request = mock_client.requests_to("/oauth2/token")[0]
    assert request.url.params["client_secret"] == "csecret"
    assert request.url.params["scope"] == "bits:read"


def test_app_token_error(mock_client):
    mock_client.add("/oauth2/token", status=403, json={"status": 403, "message": "invalid client secret"})
    result = runner.invoke(app, ["app-token"], env=ENV)
    assert result.exit_code == 1
    assert "invalid client secret" in result.output


def test_validate_with_requirement(mock_client, user_validation):
    mock_client.add("/oauth2/validate", json=user_validation)
    result = runner.invoke(app, ["validate", "tok", "--require", "chat:read, any(chat:edit, user:read:chat)"], env=ENV)
    assert result.exit_code == 1
    assert "login: twitchdev" in result.output
    assert "missing: (chat:edit or user:read:chat)" in result.output


def test_validate_satisfied_requirement(mock_client, user_validation):
    mock_client.add("/oauth2/validate", json=user_validation)
    result = runner.invoke(app, ["validate", "tok", "--require", "chat:read", "--json"], env=ENV)
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["missing"] is None
    assert data["scopes"] == ["channel:read:subscriptions", "chat:read"]


def test_validate_invalid_token(mock_client):
    mock_client.add("/oauth2/validate", status=401, json={"status": 401, "message": "invalid access token"})
    result = runner.invoke(app, ["validate", "tok"], env=ENV)
    assert result.exit_code == 1
    assert "Error" in result.output


def test_revoke(mock_client):
    mock_client.add("/oauth2/revoke", status=200)
    result = runner.invoke(app, ["revoke", "tok"], env=ENV)
    assert result.exit_code == 0
    assert "Token revoked" in result.output
    assert mock_client.requests_to("/oauth2/revoke")[0].url.params["client_id"] == "cid"


def test_refresh(mock_client):
    mock_client.add("/oauth2/token", json={"access_token": "new", "refresh_token": "r2", "expires_in": 14400})
    result = runner.invoke(app, ["refresh", "r1", "--json"], env=ENV)
    assert result.exit_code == 0
    assert json.loads(result.stdout) == {"access_token": "new", "refresh_token": "r2", "expires_in": 14400}
