# -*- coding: utf-8 -*-
"""Location: ./twitch_oauth2/cli.py
Copyright 2026
SPDX-License-Identifier: Apache-2.0

Command line interface for getting, inspecting and revoking Twitch tokens.

Client credentials are read from options or from the ``TWITCH_CLIENT_ID``,
``TWITCH_CLIENT_SECRET`` and ``TWITCH_REDIRECT_URL`` environment variables.

Examples:
    >>> twitch-oauth2 app-token --scope analytics:read:games
    >>> twitch-oauth2 validate $TOKEN --require "chat:edit, any(chat:read, user:read:chat)"
    >>> twitch-oauth2 device-flow --scope chat:read --scope chat:edit
    >>> twitch-oauth2 check-scopes "all(chat:edit, chat:read)" chat:edit
"""

# Standard
import asyncio
from datetime import timedelta
import logging
from typing import Any, Dict, List, Optional

# Third-Party
import httpx
import orjson
import typer

# First-Party
from twitch_oauth2.client import HttpxClient
from twitch_oauth2.exceptions import TwitchOAuth2Error
from twitch_oauth2.logging_service import configure_logging
from twitch_oauth2 import oauth
from twitch_oauth2.scopes.definitions import Scope
from twitch_oauth2.scopes.parser import parse_validator
from twitch_oauth2.tokens.app_access_token import AppAccessToken
from twitch_oauth2.tokens.base import TwitchToken
from twitch_oauth2.tokens.device_code import DeviceUserTokenBuilder
from twitch_oauth2.tokens.user_token import UserTokenBuilder
from twitch_oauth2.types import AccessToken, ClientId, ClientSecret, RefreshToken

logger = logging.getLogger(__name__)

app = typer.Typer(name="twitch-oauth2", help="Get, validate and revoke Twitch OAuth2 tokens", no_args_is_help=True)

ClientIdOption = typer.Option(..., "--client-id", envvar="TWITCH_CLIENT_ID", help="Client ID of the application")
ClientSecretOption = typer.Option(..., "--client-secret", envvar="TWITCH_CLIENT_SECRET", help="Client secret of the application")
OptionalClientSecretOption = typer.Option(None, "--client-secret", envvar="TWITCH_CLIENT_SECRET", help="Client secret, omitted for public clients")
ScopeOption = typer.Option(None, "--scope", "-s", help="Scope to request, can be repeated")
JsonOption = typer.Option(False, "--json", help="Output in JSON format")


def _client() -> HttpxClient:
    """Create the HTTP client used by the commands."""
    return HttpxClient()


def _seconds(value: Optional[timedelta]) -> Optional[int]:
    return None if value is None else int(value.total_seconds())


def _echo_json(data: Dict[str, Any]) -> None:
    typer.echo(orjson.dumps(data, option=orjson.OPT_INDENT_2).decode("utf-8"))


def _token_data(token: TwitchToken) -> Dict[str, Any]:
    return {
        "token_type": token.token_type().value,
        "access_token": token.token.secret(),
        "refresh_token": token.refresh_token.secret() if getattr(token, "refresh_token", None) is not None else None,
        "client_id": token.client_id.as_str(),
        "login": token.login,
        "user_id": token.user_id,
        "scopes": [str(s) for s in token.scopes],
        "expires_in": _seconds(token.expires_in()),
    }


def _print_token(token: TwitchToken, json_output: bool) -> None:
    data = _token_data(token)
    if json_output:
        _echo_json(data)
        return
    for key, value in data.items():
        if key == "scopes":
            value = " ".join(value) or "(none)"
        typer.echo(f"{key}: {value}")


def _run(coro) -> Any:
    """Run a command coroutine, turning library errors into exit code 1."""
    try:
        return asyncio.run(coro)
    except TwitchOAuth2Error as e:
        logger.error(f"Command failed: {e}")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.callback()
def main() -> None:
    """Configure logging from ``TWITCH_LOG_*`` settings."""
    configure_logging()


@app.command("app-token")
def app_token(
    client_id: str = ClientIdOption,
    client_secret: str = ClientSecretOption,
    scope: Optional[List[str]] = ScopeOption,
    json_output: bool = JsonOption,
):
    """Get an app access token through the client credentials flow."""

    async def _app_token():
        async with _client() as client:
            return await AppAccessToken.get_app_access_token(client, ClientId(client_id), ClientSecret(client_secret), [Scope.parse(s) for s in scope or []])

    _print_token(_run(_app_token()), json_output)


@app.command()
def validate(
    token: str = typer.Argument(..., help="Access token to validate"),
    require: Optional[str] = typer.Option(None, "--require", "-r", help="Scope requirement the token must satisfy, e.g. 'chat:edit, any(chat:read, user:edit)'"),
    json_output: bool = JsonOption,
):
    """Validate a token and optionally check it against a scope requirement."""
    requirement = None
    if require is not None:
        try:
            requirement = parse_validator(require)
        except TwitchOAuth2Error as e:
            raise typer.BadParameter(str(e), param_hint="--require")

    async def _validate():
        async with _client() as client:
            return await oauth.validate_token(client, AccessToken(token))

    validated = _run(_validate())
    missing = requirement.missing(validated.scopes or []) if requirement is not None else None

    data = {
        "client_id": validated.client_id.as_str(),
        "login": validated.login,
        "user_id": validated.user_id,
        "scopes": [str(s) for s in validated.scopes or []],
        "expires_in": _seconds(validated.expires_in),
    }
    if requirement is not None:
        data["missing"] = None if missing is None else str(missing)

    if json_output:
        _echo_json(data)
    else:
        for key, value in data.items():
            if key == "scopes":
                value = " ".join(value) or "(none)"
            typer.echo(f"{key}: {value}")

    if missing is not None:
        raise typer.Exit(1)


@app.command()
def revoke(
    token: str = typer.Argument(..., help="Access token to revoke"),
    client_id: str = ClientIdOption,
):
    """Revoke a token."""

    async def _revoke():
        async with _client() as client:
            await oauth.revoke_token(client, AccessToken(token), ClientId(client_id))

    _run(_revoke())
    typer.echo("Token revoked")


@app.command()
def refresh(
    refresh_token: str = typer.Argument(..., help="Refresh token"),
    client_id: str = ClientIdOption,
    client_secret: Optional[str] = OptionalClientSecretOption,
    json_output: bool = JsonOption,
):
    """Exchange a refresh token for a new access token."""

    async def _refresh():
        async with _client() as client:
            secret = ClientSecret(client_secret) if client_secret else None
            return await oauth.refresh_token(client, RefreshToken(refresh_token), ClientId(client_id), secret)

    access_token, expires_in, new_refresh_token = _run(_refresh())
    data = {
        "access_token": access_token.secret(),
        "refresh_token": new_refresh_token.secret() if new_refresh_token is not None else None,
        "expires_in": _seconds(expires_in),
    }
    if json_output:
        _echo_json(data)
    else:
        for key, value in data.items():
            typer.echo(f"{key}: {value}")


@app.command("auth-flow")
def auth_flow(
    client_id: str = ClientIdOption,
    client_secret: str = ClientSecretOption,
    redirect_url: str = typer.Option(..., "--redirect-url", envvar="TWITCH_REDIRECT_URL", help="Redirect URL registered for the application"),
    scope: Optional[List[str]] = ScopeOption,
    force_verify: bool = typer.Option(False, "--force-verify", help="Make the user re-approve the application"),
    json_output: bool = JsonOption,
):
    """Get a user token through the authorization code flow."""
    builder = UserTokenBuilder(ClientId(client_id), ClientSecret(client_secret), redirect_url)
    builder.set_scopes(Scope.parse(s) for s in scope or []).force_verify(force_verify)
    url, _ = builder.generate_url()

    typer.echo("Open this URL in a browser and authorize the application:")
    typer.echo(url)
    redirected = typer.prompt("Paste the URL you were redirected to", hide_input=True)

    params = httpx.URL(redirected.strip()).params
    if "error" in params:
        typer.echo(f"Error: twitch returned {params['error']} - {params.get('error_description', '')}", err=True)
        raise typer.Exit(1)
    if "code" not in params or "state" not in params:
        typer.echo("Error: the URL has no code and state parameters", err=True)
        raise typer.Exit(1)

    async def _exchange():
        async with _client() as client:
            return await builder.get_user_token(client, params["state"], params["code"])

    _print_token(_run(_exchange()), json_output)


@app.command("device-flow")
def device_flow(
    client_id: str = ClientIdOption,
    client_secret: Optional[str] = OptionalClientSecretOption,
    scope: Optional[List[str]] = ScopeOption,
    json_output: bool = JsonOption,
):
    """Get a user token through the device code flow."""

    async def _device_flow():
        secret = ClientSecret(client_secret) if client_secret else None
        builder = DeviceUserTokenBuilder(ClientId(client_id), [Scope.parse(s) for s in scope or []], secret)
        async with _client() as client:
            codes = await builder.start(client)
            typer.echo(f"Go to {codes.verification_uri} and enter the code {codes.user_code}", err=True)
            return await builder.wait_for_code(client)

    _print_token(_run(_device_flow()), json_output)


@app.command("check-scopes")
def check_scopes(
    requirement: str = typer.Argument(..., help="Scope requirement, e.g. 'chat:edit, any(chat:read, user:edit)'"),
    scopes: Optional[List[str]] = typer.Argument(None, help="Scopes held"),
):
    """Check a set of scopes against a requirement without contacting Twitch."""
    try:
        required = parse_validator(requirement)
    except TwitchOAuth2Error as e:
        raise typer.BadParameter(str(e), param_hint="REQUIREMENT")

    missing = required.missing(scopes or [])
    if missing is None:
        typer.echo("ok")
        return
    typer.echo(f"missing: {missing}")
    raise typer.Exit(1)


if __name__ == "__main__":
    app()
