"""Shared fixtures for resolver, CLI and MCP tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from discord_markdown.core.resolvers import ResolverConfig

# ---------------------------------------------------------------------------
# Resolver fixtures
# ---------------------------------------------------------------------------

RESOLVER_DATA = {
    "users": {"1001": {"name": "Test Nick"}},
    # Discord API style integer color (0xff5733)
    "roles": {
        "2001": {"name": "Moderator", "color": 16734003},
        "2002": {"name": "Plain", "color": 0},
    },
    "channels": {"100": {"name": "test-channel", "color": "#5865f2"}},
    "emoji_url_template": "/emojis/{file}",
}


@pytest.fixture
def resolver_data() -> dict:
    return json.loads(json.dumps(RESOLVER_DATA))


@pytest.fixture
def resolver_config(resolver_data: dict) -> ResolverConfig:
    return ResolverConfig.model_validate(resolver_data)


@pytest.fixture
def resolver_config_file(tmp_path: Path, resolver_data: dict) -> Path:
    path = tmp_path / "resolvers.json"
    path.write_text(json.dumps(resolver_data), encoding="utf-8")
    return path
