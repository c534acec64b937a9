# -*- coding: utf-8 -*-
"""Location: ./twitch_oauth2/scopes/validator.py
Copyright 2026
SPDX-License-Identifier: Apache-2.0

Scope validators.

A validator is a boolean expression over scopes describing what an application
requires from a token. It can be evaluated against the scopes a token holds
(:meth:`Validator.matches`) and, when unmet, pruned down to the part that is
still missing (:meth:`Validator.missing`) for operator-facing diagnostics.

Validators are immutable and meant to be built once at import time:

    >>> from twitch_oauth2.scopes import Scope
    >>> CHAT_BOT = validator(Scope.CHAT_EDIT, any_(Scope.CHAT_READ, Scope.USER_EDIT))
    >>> CHAT_BOT.matches([Scope.CHAT_EDIT, Scope.USER_EDIT])
    True
    >>> print(CHAT_BOT.missing([Scope.CHAT_EDIT]))
    (chat:read or user:edit)
"""

# Standard
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import AbstractSet, FrozenSet, Iterable, List, Optional, Tuple, Type, Union

# First-Party
from twitch_oauth2.scopes.definitions import Scope

Expression = Union["Validator", Scope, str]


def _granted(scopes: Iterable[Union[Scope, str]]) -> FrozenSet[Scope]:
    """Normalize a scope collection for membership tests."""
    if isinstance(scopes, (str, Scope)):
        raise TypeError("Expected a collection of scopes, not a single scope")
    return frozenset(Scope.parse(s) for s in scopes)


class Validator(ABC):
    """Base class for the four validator node kinds."""

    __slots__ = ()

    def matches(self, scopes: Iterable[Union[Scope, str]]) -> bool:
        """Check whether the given scopes satisfy this validator.

        Args:
            scopes: Scopes held by a token. Duplicates are ignored.

        Returns:
            bool: True if the requirement is met.
        """
        return self._matches(_granted(scopes))

    def missing(self, scopes: Iterable[Union[Scope, str]]) -> Optional["Validator"]:
        """Describe what is missing from ``scopes`` to satisfy this validator.

        Matched branches are pruned away, so the result only contains the unmet
        part of the requirement. The returned validator never matches
        ``scopes``, and closing the gap it describes makes both it and the
        original validator match.

        Args:
            scopes: Scopes held by a token.

        Returns:
            Optional[Validator]: None if nothing is missing, otherwise the residual requirement.
        """
        return self._missing(_granted(scopes))

    @abstractmethod
    def _matches(self, granted: AbstractSet[Scope]) -> bool:
        """Evaluate against an already normalized scope set."""

    @abstractmethod
    def _missing(self, granted: AbstractSet[Scope]) -> Optional["Validator"]:
        """Compute the residual against an already normalized scope set."""

    def __and__(self, other: Expression) -> "AllOf":
        left = self.children if isinstance(self, AllOf) else (self,)
        return AllOf(left + (_coerce(other),))

    def __rand__(self, other: Expression) -> "AllOf":
        return AllOf((_coerce(other), self))

    def __or__(self, other: Expression) -> "AnyOf":
        left = self.children if isinstance(self, AnyOf) else (self,)
        return AnyOf(left + (_coerce(other),))

    def __ror__(self, other: Expression) -> "AnyOf":
        return AnyOf((_coerce(other), self))

    def __invert__(self) -> "Not":
        return Not(self)


@dataclass(frozen=True, slots=True)
class Leaf(Validator):
    """Matches when the scope is held."""

    scope: Scope

    def _matches(self, granted: AbstractSet[Scope]) -> bool:
        return self.scope in granted

    def _missing(self, granted: AbstractSet[Scope]) -> Optional[Validator]:
        if self.scope in granted:
            return None
        return self

    def __str__(self) -> str:
        return str(self.scope)


@dataclass(frozen=True, slots=True)
class AllOf(Validator):
    """Matches when every child matches. Always matches when empty."""

    children: Tuple[Validator, ...] = ()

    def _matches(self, granted: AbstractSet[Scope]) -> bool:
        return all(child._matches(granted) for child in self.children)

    def _missing(self, granted: AbstractSet[Scope]) -> Optional[Validator]:
        residuals = [residual for residual in (child._missing(granted) for child in self.children) if residual is not None]
        return _collapse(AllOf, residuals)

    def __str__(self) -> str:
        return _render_group("all", " and ", self.children)


@dataclass(frozen=True, slots=True)
class AnyOf(Validator):
    """Matches when at least one child matches. Never matches when empty."""

    children: Tuple[Validator, ...] = ()

    def _matches(self, granted: AbstractSet[Scope]) -> bool:
        return any(child._matches(granted) for child in self.children)

    def _missing(self, granted: AbstractSet[Scope]) -> Optional[Validator]:
        if self._matches(granted):
            return None
        if not self.children:
            # an empty alternative can never be satisfied, so it is its own gap
            return self
        residuals = [residual for residual in (child._missing(granted) for child in self.children) if residual is not None]
        return _collapse(AnyOf, residuals)

    def __str__(self) -> str:
        return _render_group("any", " or ", self.children)


@dataclass(frozen=True, slots=True)
class Not(Validator):
    """Matches when the child does not match."""

    child: Validator

    def _matches(self, granted: AbstractSet[Scope]) -> bool:
        return not self.child._matches(granted)

    def _missing(self, granted: AbstractSet[Scope]) -> Optional[Validator]:
        # the gap is the forbidden condition that currently holds
        if self.child._matches(granted):
            return self
        return None

    def __str__(self) -> str:
        return f"not({self.child})"


def _collapse(kind: Type[Union[AllOf, AnyOf]], residuals: List[Validator]) -> Optional[Validator]:
    """Wrap residuals in ``kind``, unwrapping singletons."""
    if not residuals:
        return None
    if len(residuals) == 1:
        return residuals[0]
    return kind(tuple(residuals))


def _render_group(name: str, separator: str, children: Tuple[Validator, ...]) -> str:
    if not children:
        return f"{name}()"
    return "(" + separator.join(str(child) for child in children) + ")"


def _coerce(expression: Expression) -> Validator:
    if isinstance(expression, Validator):
        return expression
    if isinstance(expression, (Scope, str)):
        return Leaf(Scope.parse(expression))
    raise TypeError(f"Cannot build a validator from {type(expression).__name__}")


def scope(value: Union[Scope, str]) -> Leaf:
    """Build a validator requiring a single scope.

    Args:
        value: Scope, or its canonical string.

    Returns:
        Leaf: Leaf validator.
    """
    if not isinstance(value, (Scope, str)):
        raise TypeError(f"Expected a scope, got {type(value).__name__}")
    return Leaf(Scope.parse(value))


def all_(*expressions: Expression) -> AllOf:
    """Require every expression.

    Examples:
        >>> all_().matches([])
        True
        >>> str(all_("chat:edit", "chat:read"))
        '(chat:edit and chat:read)'
    """
    return AllOf(tuple(_coerce(e) for e in expressions))


def any_(*expressions: Expression) -> AnyOf:
    """Require at least one expression.

    Examples:
        >>> any_().matches(["chat:edit"])
        False
    """
    return AnyOf(tuple(_coerce(e) for e in expressions))


def not_(*expressions: Expression) -> Not:
    """Forbid an expression.

    Exactly one expression is accepted. Negating several would be ambiguous
    between "none of" and "not all of", so group them explicitly instead:
    ``not_(any_(a, b))`` or ``not_(all_(a, b))``.

    Raises:
        TypeError: If not given exactly one expression.

    Examples:
        >>> str(not_("chat:edit"))
        'not(chat:edit)'
    """
    if len(expressions) != 1:
        raise TypeError(f"not_() takes exactly one expression ({len(expressions)} given); wrap several in all_() or any_()")
    return Not(_coerce(expressions[0]))


def validator(*expressions: Expression) -> Validator:
    """Build a validator from a single expression or an implicit conjunction.

    A single expression is returned as a validator of its own; several are
    wrapped in :func:`all_`; no expression at all is ``all_()``, which always
    matches.

    Examples:
        >>> str(validator("chat:edit"))
        'chat:edit'
        >>> str(validator("chat:edit", any_("chat:read", not_("user:edit"))))
        '(chat:edit and (chat:read or not(user:edit)))'
    """
    if len(expressions) == 1:
        return _coerce(expressions[0])
    return all_(*expressions)
