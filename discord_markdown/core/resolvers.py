"""Mention and custom emoji resolvers.

A resolver maps a raw identifier found in the markdown to the text that
should be displayed for it, plus an optional color.  The convertor calls
them exactly once per mention/emoji, in document order.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, NamedTuple

from pydantic import BaseModel, ValidationError, field_validator

from discord_markdown.core.exceptions import ResolverConfigError

logger = logging.getLogger(__name__)

# (id_or_name) -> (display, color)
Resolver = Callable[[str], tuple[str, str | None]]

_CUSTOM_EMOJI_URL = "https://cdn.discordapp.com/emojis/{file}"


def identity_resolver(value: str) -> tuple[str, str | None]:
    """Display the raw identifier itself, without color."""
    return value, None


class Resolvers(NamedTuple):
    """The four resolvers used when rendering HTML."""

    emoji: Resolver = identity_resolver
    user: Resolver = identity_resolver
    role: Resolver = identity_resolver
    channel: Resolver = identity_resolver


class MentionTarget(BaseModel):
    model_config = {"frozen": True}

    name: str
    color: str | None = None  # Hex string like "#ff0000" or None

    @field_validator("color", mode="before")
    @classmethod
    def _normalize_color(cls, value: Any) -> Any:
        # Discord API colors are integers; 0 means "no color"
        if isinstance(value, int) and not isinstance(value, bool):
            return f"#{value:06x}" if value > 0 else None
        return value


class ResolverConfig(BaseModel):
    """Static lookup tables for mentions and custom emoji.

    Example JSON::

        {
            "users": {"1001": {"name": "Jane Doe"}},
            "roles": {"2001": {"name": "Moderator", "color": 16734003}},
            "channels": {"100": {"name": "general"}}
        }
    """

    model_config = {"frozen": True}

    users: dict[str, MentionTarget] = {}
    roles: dict[str, MentionTarget] = {}
    channels: dict[str, MentionTarget] = {}
    emoji_url_template: str = _CUSTOM_EMOJI_URL

    unknown_user: str = "Unknown"
    unknown_role: str = "deleted-role"
    unknown_channel: str = "deleted-channel"

    @classmethod
    def from_file(cls, path: str | Path) -> ResolverConfig:
        """Load a config from a JSON file, raising ResolverConfigError on failure."""
        try:
            raw = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise ResolverConfigError(f"Cannot read resolver config {str(path)!r}: {e}") from e
        try:
            return cls.model_validate(json.loads(raw))
        except json.JSONDecodeError as e:
            raise ResolverConfigError(f"Resolver config {str(path)!r} is not valid JSON: {e}") from e
        except ValidationError as e:
            raise ResolverConfigError(f"Invalid resolver config {str(path)!r}: {e}") from e

    def resolve_emoji(self, file_name: str) -> tuple[str, str | None]:
        return self.emoji_url_template.format(file=file_name), None

    def resolve_user(self, user_id: str) -> tuple[str, str | None]:
        return self._lookup(self.users, user_id, self.unknown_user, "user")

    def resolve_role(self, role_id: str) -> tuple[str, str | None]:
        return self._lookup(self.roles, role_id, self.unknown_role, "role")

    def resolve_channel(self, channel_id: str) -> tuple[str, str | None]:
        return self._lookup(self.channels, channel_id, self.unknown_channel, "channel")

    def to_resolvers(self) -> Resolvers:
        return Resolvers(
            emoji=self.resolve_emoji,
            user=self.resolve_user,
            role=self.resolve_role,
            channel=self.resolve_channel,
        )

    @staticmethod
    def _lookup(
        table: dict[str, MentionTarget],
        key: str,
        fallback: str,
        kind: str,
    ) -> tuple[str, str | None]:
        target = table.get(key)
        if target is None:
            logger.debug("No %s entry for %s, using %r", kind, key, fallback)
            return fallback, None
        return target.name, target.color
