# -*- coding: utf-8 -*-
"""Location: ./twitch_oauth2/oauth.py
Copyright 2026
SPDX-License-Identifier: Apache-2.0

Requests and responses for the ``id.twitch.tv`` endpoints.

Each operation comes in two parts: a ``*_request`` function building the
:class:`httpx.Request`, usable with any HTTP stack, and an ``async`` function
sending it through a client and parsing the result.

Twitch expects parameters in the query string of POST requests rather than in
a form body, so requests are built that way.
"""

# Standard
from datetime import timedelta
import logging
from typing import Iterable, Mapping, Optional, Tuple, Type, TypeVar, Union

# Third-Party
import httpx
import pydantic

# First-Party
from twitch_oauth2.client import ClientLike, send
from twitch_oauth2.config import get_settings
from twitch_oauth2.exceptions import (
    DeserializeError,
    NoExpirationError,
    NotAuthorizedError,
    NotJsonError,
    RefreshTokenError,
    RequestError,
    RequestParseError,
    RevokeTokenError,
    TwitchError,
    UnexpectedStatusError,
    ValidationError,
)
from twitch_oauth2.id import TwitchTokenErrorResponse, TwitchTokenResponse
from twitch_oauth2.types import AccessToken, ClientId, ClientSecret, RefreshToken

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)

Params = Union[Mapping[str, str], Iterable[Tuple[str, str]]]


def construct_request(url: str, params: Params = (), headers: Optional[Mapping[str, str]] = None, method: str = "POST", body: bytes = b"") -> httpx.Request:
    """Construct a request that accepts ``application/json`` by default.

    Args:
        url: Endpoint URL.
        params: Query parameters, appended to those already in ``url``.
        headers: Extra headers.
        method: HTTP method.
        body: Request body.

    Returns:
        httpx.Request: The request.

    Examples:
        >>> req = construct_request("https://id.twitch.tv/oauth2/token", {"grant_type": "client_credentials"})
        >>> str(req.url)
        'https://id.twitch.tv/oauth2/token?grant_type=client_credentials'
        >>> req.headers["accept"]
        'application/json'
    """
    pairs = list(params.items()) if isinstance(params, Mapping) else list(params)
    request_url = httpx.URL(url)
    if pairs:
        request_url = request_url.copy_merge_params(pairs)
    request_headers = httpx.Headers(headers or {})
    request_headers.setdefault("Accept", "application/json")
    return httpx.Request(method, request_url, headers=request_headers, content=body)


def parse_token_response_raw(response: httpx.Response) -> httpx.Response:
    """Check a response for Twitch errors.

    A body that parses as an error payload is an error whatever the status;
    otherwise anything but 200 is unexpected.

    Args:
        response: Response to check.

    Returns:
        httpx.Response: The same response if it is usable.

    Raises:
        TwitchError: If Twitch returned an error payload.
        UnexpectedStatusError: If the status is not 200.
    """
    try:
        error = TwitchTokenErrorResponse.model_validate_json(response.content)
    except pydantic.ValidationError:
        if response.status_code == httpx.codes.OK:
            return response
        raise UnexpectedStatusError(response.status_code) from None
    raise TwitchError(error)


def parse_response(response: httpx.Response, model: Type[ModelT]) -> ModelT:
    """Check a response and deserialize its JSON body into ``model``.

    Args:
        response: Response to parse.
        model: Pydantic model of the expected body.

    Returns:
        ModelT: Deserialized body.

    Raises:
        RequestParseError: If the response is an error or cannot be deserialized.
    """
    parse_token_response_raw(response)
    content_type = response.headers.get("content-type")
    if content_type is not None and not get_settings().mock_api:
        if content_type.split(";")[0].strip().lower() != "application/json":
            raise NotJsonError(content_type)
    try:
        return model.model_validate_json(response.content)
    except pydantic.ValidationError as exc:
        raise DeserializeError(f"could not deserialize {model.__name__}: {exc}") from exc


def validate_token_request(token: AccessToken) -> httpx.Request:
    """Get the request needed to validate a token."""
    return construct_request(get_settings().validate_url, headers={"Authorization": f"OAuth {token.secret()}"}, method="GET")


async def validate_token(client: ClientLike, token: AccessToken):
    """Validate a token.

    Tokens should be validated regularly, see https://dev.twitch.tv/docs/authentication/validate-tokens/

    Args:
        client: HTTP client.
        token: Access token to validate.

    Returns:
        ValidatedToken: What Twitch knows about the token.

    Raises:
        NotAuthorizedError: If the token is invalid or expired.
        ValidationError: If the request or its response failed.
    """
    # First-Party
    from twitch_oauth2.tokens.base import ValidatedToken  # pylint: disable=import-outside-toplevel

    try:
        response = await send(client, validate_token_request(token))
    except RequestError as exc:
        raise ValidationError(f"failed to request validation: {exc}") from exc
    if response.status_code == httpx.codes.UNAUTHORIZED:
        raise NotAuthorizedError("token is not authorized for use")
    try:
        validated = parse_response(response, ValidatedToken)
    except RequestParseError as exc:
        raise ValidationError(f"could not parse validation response: {exc}") from exc
    logger.debug(f"Validated token for client {validated.client_id} (login={validated.login})")
    return validated


def revoke_token_request(token: AccessToken, client_id: ClientId) -> httpx.Request:
    """Get the request needed to revoke a token."""
    return construct_request(get_settings().revoke_url, {"client_id": client_id.as_str(), "token": token.secret()})


async def revoke_token(client: ClientLike, token: AccessToken, client_id: ClientId) -> None:
    """Revoke a token.

    See https://dev.twitch.tv/docs/authentication/revoke-tokens/

    Raises:
        RevokeTokenError: If revocation failed.
    """
    try:
        response = await send(client, revoke_token_request(token, client_id))
        parse_token_response_raw(response)
    except (RequestError, RequestParseError) as exc:
        raise RevokeTokenError(f"failed to revoke token: {exc}") from exc
    logger.info(f"Revoked token for client {client_id}")


def refresh_token_request(token: RefreshToken, client_id: ClientId, client_secret: Optional[ClientSecret] = None) -> httpx.Request:
    """Get the request needed to refresh a token.

    The client secret can be omitted for public clients.
    """
    params = [("client_id", client_id.as_str())]
    if client_secret is not None:
        params.append(("client_secret", client_secret.secret()))
    params.extend([("grant_type", "refresh_token"), ("refresh_token", token.secret())])
    return construct_request(get_settings().token_url, params)


async def refresh_token(
    client: ClientLike, token: RefreshToken, client_id: ClientId, client_secret: Optional[ClientSecret] = None
) -> Tuple[AccessToken, timedelta, Optional[RefreshToken]]:
    """Refresh a token.

    See https://dev.twitch.tv/docs/authentication/refresh-tokens/

    Args:
        client: HTTP client.
        token: Refresh token.
        client_id: Client ID the token was issued to.
        client_secret: Client secret, omitted for public clients.

    Returns:
        Tuple[AccessToken, timedelta, Optional[RefreshToken]]: The new access token, its lifetime and the new refresh token.

    Raises:
        NoExpirationError: If the new token has no expiration.
        RefreshTokenError: If the request or its response failed.
    """
    try:
        response = await send(client, refresh_token_request(token, client_id, client_secret))
        body = parse_response(response, TwitchTokenResponse)
    except (RequestError, RequestParseError) as exc:
        raise RefreshTokenError(f"failed to refresh token: {exc}") from exc
    if body.expires_in is None:
        raise NoExpirationError("no expiration found on new token")
    logger.info(f"Refreshed token for client {client_id}")
    return body.access_token, body.expires_in, body.refresh_token
