# -*- coding: utf-8 -*-
"""Location: ./twitch_oauth2/scopes/definitions.py
Copyright 2026
SPDX-License-Identifier: Apache-2.0

Twitch OAuth2 scopes.

Every scope documented at https://dev.twitch.tv/docs/authentication/scopes/ is
available as a class constant (``Scope.CHAT_EDIT``). Scopes unknown to this
library are still representable, so new permissions granted by Twitch survive
a validation round-trip.

Examples:
    >>> Scope.parse("chat:edit") is Scope.CHAT_EDIT
    True
    >>> str(Scope.CHAT_READ)
    'chat:read'
    >>> Scope.parse("custom:scope").is_known
    False
"""

# Standard
from typing import Any, Dict, List, Tuple

# Third-Party
from pydantic_core import core_schema

# attribute name, canonical string, description
_SCOPE_DEFINITIONS: Tuple[Tuple[str, str, str], ...] = (
    ("ANALYTICS_READ_EXTENSIONS", "analytics:read:extensions", "View analytics data for the Twitch Extensions owned by the authenticated account."),
    ("ANALYTICS_READ_GAMES", "analytics:read:games", "View analytics data for the games owned by the authenticated account."),
    ("BITS_READ", "bits:read", "View Bits information for a channel."),
    ("CHANNEL_BOT", "channel:bot", "Joins your channel's chatroom as a bot user, and perform chat-related actions as that user."),
    ("CHANNEL_EDIT_COMMERCIAL", "channel:edit:commercial", "Run commercials on a channel."),
    ("CHANNEL_MANAGE_BROADCAST", "channel:manage:broadcast", "Manage a channel's broadcast configuration, including updating channel configuration and managing stream markers and stream tags."),
    ("CHANNEL_MANAGE_EXTENSIONS", "channel:manage:extensions", "Manage a channel's Extension configuration, including activating Extensions."),
    ("CHANNEL_MANAGE_POLLS", "channel:manage:polls", "Manage a channel's polls."),
    ("CHANNEL_MANAGE_PREDICTIONS", "channel:manage:predictions", "Manage of channel's Channel Points Predictions."),
    ("CHANNEL_MANAGE_RAIDS", "channel:manage:raids", "Manage a channel raiding another channel."),
    ("CHANNEL_MANAGE_REDEMPTIONS", "channel:manage:redemptions", "Manage Channel Points custom rewards and their redemptions on a channel."),
    ("CHANNEL_MANAGE_VIDEOS", "channel:manage:videos", "Manage a channel's videos, including deleting videos."),
    ("CHANNEL_MANAGE_VIPS", "channel:manage:vips", "Add or remove the VIP role from users in your channel."),
    ("CHANNEL_MODERATE", "channel:moderate", "Perform moderation actions in a channel. The user requesting the scope must be a moderator in the channel."),
    ("CHANNEL_READ_EDITORS", "channel:read:editors", "View a list of users with the editor role for a channel."),
    ("CHANNEL_READ_GOALS", "channel:read:goals", "View Creator Goals for a channel."),
    ("CHANNEL_READ_HYPE_TRAIN", "channel:read:hype_train", "View Hype Train information for a channel."),
    ("CHANNEL_READ_POLLS", "channel:read:polls", "View a channel's polls."),
    ("CHANNEL_READ_PREDICTIONS", "channel:read:predictions", "View a channel's Channel Points Predictions."),
    ("CHANNEL_READ_REDEMPTIONS", "channel:read:redemptions", "View Channel Points custom rewards and their redemptions on a channel."),
    ("CHANNEL_READ_STREAM_KEY", "channel:read:stream_key", "View an authorized user's stream key."),
    ("CHANNEL_READ_SUBSCRIPTIONS", "channel:read:subscriptions", "View a list of all subscribers to a channel and check if a user is subscribed to a channel."),
    ("CHANNEL_READ_VIPS", "channel:read:vips", "Read the list of VIPs in your channel."),
    ("CHANNEL_SUBSCRIPTIONS", "channel_subscriptions", "[DEPRECATED] Read all subscribers to your channel."),
    ("CHAT_EDIT", "chat:edit", "Send live stream chat and rooms messages."),
    ("CHAT_READ", "chat:read", "View live stream chat and rooms messages."),
    ("CLIPS_EDIT", "clips:edit", "Manage Clips for a channel."),
    ("MODERATION_READ", "moderation:read", "View a channel's moderation data including Moderators, Bans, Timeouts, and Automod settings."),
    ("MODERATOR_MANAGE_ANNOUNCEMENTS", "moderator:manage:announcements", "Send announcements in channels where you have the moderator role."),
    ("MODERATOR_MANAGE_BANNED_USERS", "moderator:manage:banned_users", "Ban and unban users."),
    ("MODERATOR_MANAGE_CHAT_MESSAGES", "moderator:manage:chat_messages", "Delete chat messages in channels where you have the moderator role."),
    ("MODERATOR_READ_CHATTERS", "moderator:read:chatters", "View the chatters in a broadcaster's chat room."),
    ("MODERATOR_READ_FOLLOWERS", "moderator:read:followers", "Read the followers of a broadcaster."),
    ("USER_BOT", "user:bot", "Join a specified chat channel as your user and appear as a bot, and perform chat-related actions as your user."),
    ("USER_EDIT", "user:edit", "Manage a user object."),
    ("USER_EDIT_BROADCAST", "user:edit:broadcast", "Edit your channel's broadcast configuration, including extension configuration. (This scope implies user:read:broadcast capability.)"),
    ("USER_EDIT_FOLLOWS", "user:edit:follows", "Edit a user's follows."),
    ("USER_MANAGE_BLOCKED_USERS", "user:manage:blocked_users", "Manage the block list of a user."),
    ("USER_MANAGE_WHISPERS", "user:manage:whispers", "Read whispers that you send and receive, and send whispers on your behalf."),
    ("USER_READ_BLOCKED_USERS", "user:read:blocked_users", "View the block list of a user."),
    ("USER_READ_BROADCAST", "user:read:broadcast", "View a user's broadcasting configuration, including Extension configurations."),
    ("USER_READ_CHAT", "user:read:chat", "Receive chatroom messages and informational notifications relating to a channel's chatroom."),
    ("USER_READ_EMAIL", "user:read:email", "Read an authorized user's email address."),
    ("USER_READ_FOLLOWS", "user:read:follows", "View the list of channels a user follows."),
    ("USER_READ_SUBSCRIPTIONS", "user:read:subscriptions", "View if an authorized user is subscribed to specific channels."),
    ("USER_WRITE_CHAT", "user:write:chat", "Send chat messages to a chatroom."),
    ("WHISPERS_EDIT", "whispers:edit", "Send whisper messages."),
    ("WHISPERS_READ", "whispers:read", "View your whisper messages."),
)


class Scope:
    """A single Twitch permission.

    Scopes compare and hash by their canonical string, so a known constant and
    a scope parsed from the same string are interchangeable.
    """

    __slots__ = ("_value",)

    _known: Dict[str, "Scope"] = {}
    _descriptions: Dict[str, str] = {}
    _names: Dict[str, str] = {}

    def __init__(self, value: str):
        """Create a scope from its canonical string.

        Prefer :meth:`parse`, which returns the shared constant for known scopes.

        Args:
            value: Canonical scope string, e.g. ``"chat:edit"``.

        Raises:
            TypeError: If ``value`` is not a string.
        """
        if not isinstance(value, str):
            raise TypeError(f"Scope value must be a string, got {type(value).__name__}")
        object.__setattr__(self, "_value", value)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Scope is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("Scope is immutable")

    def __reduce__(self):
        return (Scope.parse, (self._value,))

    @classmethod
    def parse(cls, value: str) -> "Scope":
        """Make a scope from a string.

        Args:
            value: Scope string as sent by Twitch.

        Returns:
            Scope: The known constant when one exists, otherwise an "other" scope.

        Examples:
            >>> Scope.parse("user:edit") == Scope.USER_EDIT
            True
            >>> Scope.parse("not:a:twitch:scope")
            Scope('not:a:twitch:scope')
        """
        if isinstance(value, Scope):
            return value
        known = cls._known.get(value)
        if known is not None:
            return known
        return cls(value)

    @classmethod
    def all(cls) -> List["Scope"]:
        """Get every scope known to this library, in definition order.

        Note that some flows do not accept every scope.

        Returns:
            List[Scope]: All known scopes.
        """
        return list(cls._known.values())

    @property
    def value(self) -> str:
        """Canonical scope string."""
        return self._value

    @property
    def is_known(self) -> bool:
        """Whether this scope is one of the documented Twitch scopes."""
        return self._value in self._known

    @property
    def description(self) -> str:
        """Human-readable description, empty for unknown scopes."""
        return self._descriptions.get(self._value, "")

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        name = self._names.get(self._value)
        if name is not None:
            return f"Scope.{name}"
        return f"Scope({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Scope):
            return self._value == other._value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    def __lt__(self, other: "Scope") -> bool:
        if isinstance(other, Scope):
            return self._value < other._value
        return NotImplemented

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> core_schema.CoreSchema:
        """Validate scopes from strings and serialize them back to strings."""
        from_str = core_schema.no_info_after_validator_function(cls.parse, core_schema.str_schema())
        return core_schema.json_or_python_schema(
            json_schema=from_str,
            python_schema=core_schema.union_schema([core_schema.is_instance_schema(cls), from_str]),
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )


for _name, _value, _description in _SCOPE_DEFINITIONS:
    _scope = Scope(_value)
    Scope._known[_value] = _scope
    Scope._descriptions[_value] = _description
    Scope._names[_value] = _name
    setattr(Scope, _name, _scope)

del _name, _value, _description, _scope


def scopes_to_string(scopes) -> str:
    """Join scopes into the space-delimited form used in OAuth2 requests.

    Args:
        scopes: Iterable of :class:`Scope` or scope strings.

    Returns:
        str: Space-delimited scope string.

    Examples:
        >>> scopes_to_string([Scope.CHAT_EDIT, Scope.CHAT_READ])
        'chat:edit chat:read'
    """
    return " ".join(str(s) for s in scopes)
