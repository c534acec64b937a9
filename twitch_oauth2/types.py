# -*- coding: utf-8 -*-
"""Location: ./twitch_oauth2/types.py
Copyright 2026
SPDX-License-Identifier: Apache-2.0

Types used in the OAuth2 flows.

Secrets never show up in ``repr``/``str`` output, so tokens can be logged and
printed safely; use ``secret()`` to get the raw value.

Examples:
    >>> token = AccessToken("abcdef")
    >>> token
    [redacted access token]
    >>> token.secret()
    'abcdef'
    >>> ClientId("my-client-id")
    ClientId('my-client-id')
"""

# Standard
import base64
import secrets
from typing import Any

# Third-Party
from pydantic_core import core_schema


class _StringType:
    """Immutable string wrapper comparing by value within its own type."""

    __slots__ = ("_value",)

    def __init__(self, value: str):
        if isinstance(value, _StringType):
            value = value._value
        if not isinstance(value, str):
            raise TypeError(f"{type(self).__name__} value must be a string, got {type(value).__name__}")
        object.__setattr__(self, "_value", value)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return (type(self), (self._value,))

    def as_str(self) -> str:
        """Get the wrapped string."""
        return self._value

    def __eq__(self, other: object) -> bool:
        if type(other) is type(self):
            return self._value == other._value
        return NotImplemented

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._value))

    def __len__(self) -> int:
        return len(self._value)

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> core_schema.CoreSchema:
        """Validate from plain strings, serialize back to the raw string."""
        from_str = core_schema.no_info_after_validator_function(cls, core_schema.str_schema())
        return core_schema.json_or_python_schema(
            json_schema=from_str,
            python_schema=core_schema.union_schema([core_schema.is_instance_schema(cls), from_str]),
            serialization=core_schema.plain_serializer_function_ser_schema(lambda v: v.as_str()),
        )


class _SecretType(_StringType):
    """String wrapper with redacted output."""

    __slots__ = ()

    _redacted = "[redacted]"

    def secret(self) -> str:
        """Get the secret value.

        Same as :meth:`as_str`, with a name that is easy to search for.
        """
        return self._value

    def __str__(self) -> str:
        return self._redacted

    def __repr__(self) -> str:
        return self._redacted

    def __format__(self, format_spec: str) -> str:
        return format(self._redacted, format_spec)


class ClientId(_StringType):
    """A client ID."""

    __slots__ = ()


class ClientSecret(_SecretType):
    """A client secret."""

    __slots__ = ()

    _redacted = "[redacted client secret]"


class AccessToken(_SecretType):
    """An access token."""

    __slots__ = ()

    _redacted = "[redacted access token]"


class RefreshToken(_SecretType):
    """A refresh token."""

    __slots__ = ()

    _redacted = "[redacted refresh token]"


class CsrfToken(_SecretType):
    """A CSRF token, sent as ``state`` in authorization URLs."""

    __slots__ = ()

    _redacted = "[redacted csrf token]"

    @classmethod
    def new_random(cls, length: int = 16) -> "CsrfToken":
        """Make a new random CSRF token.

        Args:
            length: Number of random bytes.

        Returns:
            CsrfToken: Base64 encoded random token.
        """
        return cls(base64.b64encode(secrets.token_bytes(length)).decode("ascii"))
