"""MCP server exposing Discord markdown parsing and rendering for LLM consumption."""

from __future__ import annotations

from dataclasses import fields
from typing import Any, Sequence

from fastmcp import FastMCP
from pydantic import ValidationError

from discord_markdown.core.markdown.html_visitor import HtmlExpressionVisitor
from discord_markdown.core.markdown.nodes import Expression
from discord_markdown.core.markdown.parser import parse, parse_with_md_hyperlinks
from discord_markdown.core.resolvers import ResolverConfig

mcp = FastMCP(name="discord-markdown")

# Fields holding nested expressions
_TREE_FIELDS = frozenset({"children", "label"})


def _to_json(nodes: Sequence[Expression]) -> list[dict]:
    result = []
    for node in nodes:
        item: dict[str, Any] = {"type": type(node).__name__}
        for f in fields(node):
            value = getattr(node, f.name)
            item[f.name] = _to_json(value) if f.name in _TREE_FIELDS else value
        result.append(item)
    return result


def parse_markdown(text: str, md_hyperlinks: bool = False) -> list[dict]:
    """Parse Discord markdown into an expression tree.

    Args:
        text: Discord-flavored markdown.
        md_hyperlinks: Also recognise ``[label](url)`` links (embed syntax).
    """
    nodes = parse_with_md_hyperlinks(text) if md_hyperlinks else parse(text)
    return _to_json(nodes)


def render_markdown(
    text: str,
    md_hyperlinks: bool = False,
    resolvers: dict | None = None,
) -> str:
    """Render Discord markdown as an HTML fragment.

    Args:
        text: Discord-flavored markdown.
        md_hyperlinks: Also recognise ``[label](url)`` links (embed syntax).
        resolvers: Optional lookup tables, e.g.
            ``{"users": {"123": {"name": "Jane"}}, "roles": {...}, "channels": {...}}``.
            Without it mentions show their raw ids.
    """
    bundle = None
    if resolvers is not None:
        try:
            bundle = ResolverConfig.model_validate(resolvers).to_resolvers()
        except ValidationError as e:
            raise ValueError(f"Invalid resolvers: {e}") from e
    return HtmlExpressionVisitor.format(text, bundle, md_hyperlinks=md_hyperlinks)


mcp.tool(parse_markdown)
mcp.tool(render_markdown)
