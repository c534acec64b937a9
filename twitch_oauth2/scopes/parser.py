# -*- coding: utf-8 -*-
"""Location: ./twitch_oauth2/scopes/parser.py
Copyright 2026
SPDX-License-Identifier: Apache-2.0

Textual validator expressions.

Accepts the same grammar as the builder functions, so requirements can be kept
in configuration or passed on the command line::

    chat:edit, chat:read
    all(chat:edit, any(chat:read, user:edit))
    any(moderation:read, not(user:edit))

A bare comma-separated list is an implicit ``all(...)``; an empty string is
``all()``, which always matches.
"""

# Standard
import re
from typing import List, Optional, Tuple

# First-Party
from twitch_oauth2.exceptions import ValidatorSyntaxError
from twitch_oauth2.scopes.validator import all_, any_, not_, scope, validator, Validator

_TOKEN_RE = re.compile(r"\s*(?:(?P<name>[A-Za-z0-9_:.\-]+)|(?P<punct>[(),]))")

_Token = Tuple[str, str, int]


def _tokenize(text: str) -> List[_Token]:
    tokens: List[_Token] = []
    position = 0
    end = len(text.rstrip())
    while position < end:
        match = _TOKEN_RE.match(text, position)
        if match is None:
            offset = position + len(text[position:]) - len(text[position:].lstrip())
            raise ValidatorSyntaxError(f"Unexpected character {text[offset]!r} at position {offset}")
        if match.group("name") is not None:
            tokens.append(("name", match.group("name"), match.start("name")))
        else:
            tokens.append((match.group("punct"), match.group("punct"), match.start("punct")))
        position = match.end()
    return tokens


class _Parser:
    """Recursive-descent parser over the token list."""

    _GROUPS = {"all": all_, "any": any_}

    def __init__(self, text: str):
        self.text = text
        self.tokens = _tokenize(text)
        self.index = 0

    def _peek(self, offset: int = 0) -> Optional[_Token]:
        index = self.index + offset
        if index < len(self.tokens):
            return self.tokens[index]
        return None

    def _next(self) -> _Token:
        token = self._peek()
        if token is None:
            raise ValidatorSyntaxError(f"Unexpected end of expression in {self.text!r}")
        self.index += 1
        return token

    def _expect(self, kind: str) -> _Token:
        token = self._next()
        if token[0] != kind:
            raise ValidatorSyntaxError(f"Expected {kind!r} at position {token[2]}, found {token[1]!r}")
        return token

    def parse(self) -> Validator:
        return validator(*self._expression_list(closing=None))

    def _expression_list(self, closing: Optional[str]) -> List[Validator]:
        expressions: List[Validator] = []
        while True:
            token = self._peek()
            if token is None or token[0] == closing:
                return expressions
            expressions.append(self._expression())
            token = self._peek()
            if token is None or token[0] == closing:
                return expressions
            self._expect(",")

    def _expression(self) -> Validator:
        kind, value, position = self._next()
        if kind != "name":
            raise ValidatorSyntaxError(f"Expected a scope or group at position {position}, found {value!r}")

        following = self._peek()
        if following is None or following[0] != "(":
            return scope(value)

        self._next()
        arguments = self._expression_list(closing=")")
        self._expect(")")

        if value == "not":
            if len(arguments) != 1:
                raise ValidatorSyntaxError(f"not() at position {position} takes exactly one expression, got {len(arguments)}")
            return not_(arguments[0])
        group = self._GROUPS.get(value)
        if group is None:
            raise ValidatorSyntaxError(f"Unknown group {value!r} at position {position}; expected all, any or not")
        return group(*arguments)


def parse_validator(text: str) -> Validator:
    """Parse a validator expression.

    Args:
        text: Expression text.

    Returns:
        Validator: Parsed validator.

    Raises:
        ValidatorSyntaxError: If the expression is malformed.

    Examples:
        >>> str(parse_validator("chat:edit, any(chat:read, user:edit)"))
        '(chat:edit and (chat:read or user:edit))'
        >>> str(parse_validator(""))
        'all()'
    """
    return _Parser(text).parse()
