"""Discord markdown parsing and rendering."""

from discord_markdown.core.markdown.html_visitor import (
    HtmlExpressionVisitor,
    to_html,
    to_html_with_callbacks,
)
from discord_markdown.core.markdown.nodes import (
    Blockquote,
    Bold,
    ChannelMention,
    CodeBlock,
    CustomEmoji,
    Expression,
    Formatting,
    FormattingKind,
    Hyperlink,
    InlineCode,
    Italics,
    Newline,
    RoleMention,
    Spoiler,
    Strikethrough,
    Text,
    Underline,
    UserMention,
)
from discord_markdown.core.markdown.parser import parse, parse_with_md_hyperlinks
from discord_markdown.core.markdown.visitor import ExpressionVisitor

__all__ = [
    # Nodes
    "Expression",
    "Text",
    "Formatting",
    "Bold",
    "Italics",
    "Underline",
    "Strikethrough",
    "Spoiler",
    "Blockquote",
    "InlineCode",
    "CodeBlock",
    "Newline",
    "UserMention",
    "RoleMention",
    "ChannelMention",
    "CustomEmoji",
    "Hyperlink",
    # Enums
    "FormattingKind",
    # Parser
    "parse",
    "parse_with_md_hyperlinks",
    # Visitors
    "ExpressionVisitor",
    "HtmlExpressionVisitor",
    "to_html",
    "to_html_with_callbacks",
]
