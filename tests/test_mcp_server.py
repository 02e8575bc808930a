"""Tests for the MCP tool functions."""

from __future__ import annotations

import pytest

from discord_markdown.mcp.server import parse_markdown, render_markdown


class TestParseMarkdown:
    def test_tree_as_json(self):
        assert parse_markdown("**a** <:e:1>\n`c`") == [
            {"type": "Bold", "children": [{"type": "Text", "text": "a"}]},
            {"type": "Text", "text": " "},
            {"type": "CustomEmoji", "name": "e", "id": "1", "is_animated": False},
            {"type": "Newline"},
            {"type": "InlineCode", "code": "c"},
        ]

    def test_md_hyperlinks(self):
        assert parse_markdown("[x](https://x.com)", md_hyperlinks=True) == [
            {
                "type": "Hyperlink",
                "label": [{"type": "Text", "text": "x"}],
                "url": "https://x.com",
            }
        ]

    def test_code_block_language(self):
        assert parse_markdown("```py\nx```") == [
            {"type": "CodeBlock", "language": "py", "code": "x"}
        ]


class TestRenderMarkdown:
    def test_identity(self):
        assert render_markdown("<@1>") == (
            '<span class="user" style="color: #afafaf">@1'
            '<span style="background-color: #afafaf"></span></span>'
        )

    def test_with_resolvers(self, resolver_data: dict):
        html = render_markdown("<@1001> <@&2001>", resolvers=resolver_data)
        assert "@Test Nick" in html
        assert "@Moderator" in html

    def test_invalid_resolvers(self):
        with pytest.raises(ValueError, match="Invalid resolvers"):
            render_markdown("x", resolvers={"users": {"1": {}}})
