"""Base expression visitor."""

from __future__ import annotations

from typing import Sequence

from discord_markdown.core.markdown.nodes import (
    ChannelMention,
    CodeBlock,
    CustomEmoji,
    Expression,
    Formatting,
    Hyperlink,
    InlineCode,
    Newline,
    RoleMention,
    Text,
    UserMention,
)


class ExpressionVisitor:
    """Abstract visitor that walks an expression tree.

    Override the ``visit_*`` methods in subclasses to implement custom
    behaviour.  The default implementations for container nodes simply
    recurse into their children.
    """

    # -- leaf visitors (no-ops by default) --

    def visit_text(self, node: Text) -> None:
        pass

    def visit_newline(self, node: Newline) -> None:
        pass

    def visit_inline_code(self, node: InlineCode) -> None:
        pass

    def visit_code_block(self, node: CodeBlock) -> None:
        pass

    def visit_user_mention(self, node: UserMention) -> None:
        pass

    def visit_role_mention(self, node: RoleMention) -> None:
        pass

    def visit_channel_mention(self, node: ChannelMention) -> None:
        pass

    def visit_custom_emoji(self, node: CustomEmoji) -> None:
        pass

    # -- container visitors (recurse by default) --

    def visit_formatting(self, node: Formatting) -> None:
        self.visit_many(node.children)

    def visit_hyperlink(self, node: Hyperlink) -> None:
        self.visit_many(node.label)

    # -- dispatch --

    def visit(self, node: Expression) -> None:
        if isinstance(node, Text):
            self.visit_text(node)
        elif isinstance(node, Formatting):
            self.visit_formatting(node)
        elif isinstance(node, Newline):
            self.visit_newline(node)
        elif isinstance(node, InlineCode):
            self.visit_inline_code(node)
        elif isinstance(node, CodeBlock):
            self.visit_code_block(node)
        elif isinstance(node, UserMention):
            self.visit_user_mention(node)
        elif isinstance(node, RoleMention):
            self.visit_role_mention(node)
        elif isinstance(node, ChannelMention):
            self.visit_channel_mention(node)
        elif isinstance(node, CustomEmoji):
            self.visit_custom_emoji(node)
        elif isinstance(node, Hyperlink):
            self.visit_hyperlink(node)
        else:
            raise TypeError(f"Unknown expression type: {type(node).__name__}")

    def visit_many(self, nodes: Sequence[Expression]) -> None:
        for node in nodes:
            self.visit(node)
