"""HTML expression visitor - renders an expression tree to HTML."""

from __future__ import annotations

from html import escape as html_escape
from io import StringIO
from typing import Sequence

from discord_markdown.core.markdown.nodes import (
    ChannelMention,
    CodeBlock,
    CustomEmoji,
    Expression,
    Formatting,
    FormattingKind,
    Hyperlink,
    InlineCode,
    Newline,
    RoleMention,
    Text,
    UserMention,
)
from discord_markdown.core.markdown.parser import parse, parse_with_md_hyperlinks
from discord_markdown.core.markdown.visitor import ExpressionVisitor
from discord_markdown.core.resolvers import Resolver, Resolvers

_DEFAULT_MENTION_COLOR = "#afafaf"

_FORMATTING_TAGS = {
    FormattingKind.BOLD: ("<strong>", "</strong>"),
    FormattingKind.ITALICS: ("<em>", "</em>"),
    FormattingKind.UNDERLINE: ("<u>", "</u>"),
    FormattingKind.STRIKETHROUGH: ("<s>", "</s>"),
    FormattingKind.SPOILER: ('<span class="spoiler">', "</span>"),
    FormattingKind.BLOCKQUOTE: ("<blockquote>", "</blockquote>"),
}


def _html_encode(text: str) -> str:
    return html_escape(text, quote=True)


def is_wumboji(nodes: Sequence[Expression]) -> bool:
    """True if the message consists solely of custom emoji and whitespace."""
    return all(
        isinstance(n, CustomEmoji)
        or (isinstance(n, Text) and not n.text.strip())
        for n in nodes
    )


class HtmlExpressionVisitor(ExpressionVisitor):
    """Renders an expression tree to HTML.

    All literal text and code is entity-escaped.  Display text returned by the
    resolvers is written as-is; resolvers fed from untrusted data must escape
    it themselves.
    """

    def __init__(
        self,
        resolvers: Resolvers,
        buffer: StringIO,
        is_wumboji: bool,
    ) -> None:
        self._resolvers = resolvers
        self._buffer = buffer
        self._is_wumboji = is_wumboji

    # -- text --

    def visit_text(self, node: Text) -> None:
        self._buffer.write(_html_encode(node.text))

    def visit_newline(self, node: Newline) -> None:
        self._buffer.write("<br>")

    # -- formatting --

    def visit_formatting(self, node: Formatting) -> None:
        tags = _FORMATTING_TAGS.get(node.kind)
        if tags is None:
            raise ValueError(f"Unknown formatting kind: {node.kind!r}")
        opening, closing = tags

        self._buffer.write(opening)
        self.visit_many(node.children)
        self._buffer.write(closing)

    # -- code --

    def visit_inline_code(self, node: InlineCode) -> None:
        # Newlines stay literal; the stylesheet preserves white space
        self._buffer.write(f'<code class="inline_code">{_html_encode(node.code)}</code>')

    def visit_code_block(self, node: CodeBlock) -> None:
        highlight_class = (
            f"language-{_html_encode(node.language)}" if node.language else "nohighlight"
        )
        code = node.code.strip("\r\n")
        self._buffer.write(
            f'<pre class="multiline_code"><code class="{highlight_class}">'
            f"{_html_encode(code)}</code></pre>"
        )

    # -- links --

    def visit_hyperlink(self, node: Hyperlink) -> None:
        self._buffer.write(f'<a href="{_html_encode(node.url)}" target="_blank">')
        self.visit_many(node.label)
        self._buffer.write("</a>")

    # -- emoji --

    def visit_custom_emoji(self, node: CustomEmoji) -> None:
        src, _ = self._resolvers.emoji(node.file_name)
        css_class = "emoji wumboji" if self._is_wumboji else "emoji"
        name = _html_encode(node.name)
        self._buffer.write(
            f'<img src="{_html_encode(src)}" '
            f'alt="{name}" '
            f'class="{css_class}" '
            f'title="{name}">'
        )

    # -- mentions --

    def visit_user_mention(self, node: UserMention) -> None:
        self._write_mention(self._resolvers.user, node.id, "user", "@")

    def visit_role_mention(self, node: RoleMention) -> None:
        self._write_mention(self._resolvers.role, node.id, "role", "@")

    def visit_channel_mention(self, node: ChannelMention) -> None:
        self._write_mention(
            self._resolvers.channel,
            node.id,
            "channel",
            "#",
            f' data-id="{_html_encode(node.id)}"',
        )

    def _write_mention(
        self,
        resolver: Resolver,
        target_id: str,
        css_class: str,
        symbol: str,
        extra_attrs: str = "",
    ) -> None:
        name, color = resolver(target_id)
        color = _html_encode(color or _DEFAULT_MENTION_COLOR)
        # The inner span is the tinted background overlay
        self._buffer.write(
            f'<span class="{css_class}"{extra_attrs} style="color: {color}">'
            f"{symbol}{name}"
            f'<span style="background-color: {color}"></span></span>'
        )

    # -- static entry points --

    @staticmethod
    def render(
        expressions: Sequence[Expression],
        resolvers: Resolvers | None = None,
    ) -> str:
        """Render an already parsed expression list as HTML."""
        buf = StringIO()
        visitor = HtmlExpressionVisitor(
            resolvers or Resolvers(), buf, is_wumboji(expressions)
        )
        visitor.visit_many(expressions)
        return buf.getvalue()

    @staticmethod
    def format(
        markdown: str,
        resolvers: Resolvers | None = None,
        md_hyperlinks: bool = False,
    ) -> str:
        """Parse *markdown* and render it as HTML."""
        nodes = parse_with_md_hyperlinks(markdown) if md_hyperlinks else parse(markdown)
        return HtmlExpressionVisitor.render(nodes, resolvers)


def to_html(expressions: Sequence[Expression]) -> str:
    """Render expressions to HTML, showing raw ids for mentions and emoji.

    Use :func:`to_html_with_callbacks` when the input may contain mentions or
    custom emoji that should be resolved to names and image paths.
    """
    return HtmlExpressionVisitor.render(expressions)


def to_html_with_callbacks(
    expressions: Sequence[Expression],
    emoji: Resolver,
    user: Resolver,
    role: Resolver,
    channel: Resolver,
) -> str:
    """Render expressions to HTML, resolving mentions and emoji via callbacks.

    **emoji** receives the emoji id followed by ``.png`` or ``.gif`` and must
    return the image source as its first value.  **user**, **role** and
    **channel** receive the raw id and return the display name and an optional
    color (``None`` falls back to a neutral gray).
    """
    return HtmlExpressionVisitor.render(
        expressions, Resolvers(emoji=emoji, user=user, role=role, channel=channel)
    )
