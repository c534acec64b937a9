# -*- coding: utf-8 -*-
"""Location: ./twitch_oauth2/scopes/__init__.py
Copyright 2026
SPDX-License-Identifier: Apache-2.0

Twitch scopes and scope validators.
"""

# First-Party
from twitch_oauth2.scopes.parser import parse_validator
from twitch_oauth2.scopes.definitions import Scope, scopes_to_string
from twitch_oauth2.scopes.validator import AllOf, all_, any_, AnyOf, Leaf, Not, not_, scope, validator, Validator

__all__ = [
    "AllOf",
    "AnyOf",
    "Leaf",
    "Not",
    "Scope",
    "Validator",
    "all_",
    "any_",
    "not_",
    "parse_validator",
    "scope",
    "scopes_to_string",
    "validator",
]
