"""Tests for resolver bundles and the static resolver config."""

from __future__ import annotations

import logging

import pytest

from discord_markdown.core.exceptions import DiscordMarkdownError, ResolverConfigError
from discord_markdown.core.markdown.html_visitor import HtmlExpressionVisitor
from discord_markdown.core.resolvers import (
    MentionTarget,
    ResolverConfig,
    Resolvers,
    identity_resolver,
)


class TestResolvers:
    def test_defaults_are_identity(self):
        resolvers = Resolvers()
        assert resolvers.emoji is identity_resolver
        assert resolvers.user("1") == ("1", None)
        assert resolvers.role("2") == ("2", None)
        assert resolvers.channel("3") == ("3", None)

    def test_partial_override(self):
        resolvers = Resolvers(role=lambda _: ("r", "#000000"))
        assert resolvers.role("1") == ("r", "#000000")
        assert resolvers.user("1") == ("1", None)


class TestMentionTarget:
    def test_hex_color(self):
        assert MentionTarget(name="a", color="#ff0000").color == "#ff0000"

    def test_integer_color(self):
        assert MentionTarget(name="a", color=0xFF5733).color == "#ff5733"
        assert MentionTarget(name="a", color=255).color == "#0000ff"

    def test_zero_color_is_none(self):
        assert MentionTarget(name="a", color=0).color is None

    def test_no_color(self):
        assert MentionTarget(name="a").color is None


class TestResolverConfig:
    def test_known_ids(self, resolver_config: ResolverConfig):
        assert resolver_config.resolve_user("1001") == ("Test Nick", None)
        assert resolver_config.resolve_role("2001") == ("Moderator", "#ff5733")
        assert resolver_config.resolve_role("2002") == ("Plain", None)
        assert resolver_config.resolve_channel("100") == ("test-channel", "#5865f2")

    def test_unknown_ids_use_fallbacks(self, resolver_config: ResolverConfig):
        assert resolver_config.resolve_user("9") == ("Unknown", None)
        assert resolver_config.resolve_role("9") == ("deleted-role", None)
        assert resolver_config.resolve_channel("9") == ("deleted-channel", None)

    def test_unknown_id_is_logged(self, resolver_config: ResolverConfig, caplog):
        with caplog.at_level(logging.DEBUG, logger="discord_markdown.core.resolvers"):
            resolver_config.resolve_user("9")
        assert "No user entry for 9" in caplog.text

    def test_emoji_url(self, resolver_config: ResolverConfig):
        assert resolver_config.resolve_emoji("42.gif") == ("/emojis/42.gif", None)

    def test_default_emoji_url(self):
        config = ResolverConfig()
        assert config.resolve_emoji("42.png") == (
            "https://cdn.discordapp.com/emojis/42.png",
            None,
        )

    def test_render_with_config(self, resolver_config: ResolverConfig):
        html = HtmlExpressionVisitor.format(
            "<@1001> <@&2001> <#100> <:LUL:42>", resolver_config.to_resolvers()
        )
        assert "@Test Nick" in html
        assert 'style="color: #ff5733"' in html
        assert "#test-channel" in html
        assert 'src="/emojis/42.png"' in html

    def test_from_file(self, resolver_config_file):
        config = ResolverConfig.from_file(resolver_config_file)
        assert config.users["1001"].name == "Test Nick"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ResolverConfigError, match="Cannot read"):
            ResolverConfig.from_file(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ResolverConfigError, match="not valid JSON"):
            ResolverConfig.from_file(path)

    def test_invalid_schema(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text('{"users": {"1": {"color": "#fff"}}}', encoding="utf-8")
        with pytest.raises(ResolverConfigError, match="Invalid resolver config") as exc_info:
            ResolverConfig.from_file(path)
        assert exc_info.value.is_fatal
        assert isinstance(exc_info.value, DiscordMarkdownError)
