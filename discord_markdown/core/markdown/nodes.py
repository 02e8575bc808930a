"""Discord markdown expression tree types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Sequence


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class FormattingKind(Enum):
    BOLD = "bold"
    ITALICS = "italics"
    UNDERLINE = "underline"
    STRIKETHROUGH = "strikethrough"
    SPOILER = "spoiler"
    BLOCKQUOTE = "blockquote"


# ---------------------------------------------------------------------------
# Base node
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Expression:
    """Abstract base for every expression in the tree."""


# ---------------------------------------------------------------------------
# Leaves
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Text(Expression):
    text: str


@dataclass(frozen=True)
class Newline(Expression):
    pass


@dataclass(frozen=True)
class InlineCode(Expression):
    code: str


@dataclass(frozen=True)
class CodeBlock(Expression):
    language: str | None
    code: str


@dataclass(frozen=True)
class UserMention(Expression):
    id: str


@dataclass(frozen=True)
class RoleMention(Expression):
    id: str


@dataclass(frozen=True)
class ChannelMention(Expression):
    id: str


@dataclass(frozen=True)
class CustomEmoji(Expression):
    name: str
    id: str
    is_animated: bool = False

    @property
    def file_name(self) -> str:
        """Image file name on the Discord CDN (e.g. ``1234.gif``)."""
        ext = "gif" if self.is_animated else "png"
        return f"{self.id}.{ext}"


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Formatting(Expression):
    children: Sequence[Expression]

    kind: ClassVar[FormattingKind]

    def __post_init__(self) -> None:
        # Tuples keep the tree immutable and make list/tuple input compare equal
        object.__setattr__(self, "children", tuple(self.children))


@dataclass(frozen=True)
class Bold(Formatting):
    kind: ClassVar[FormattingKind] = FormattingKind.BOLD


@dataclass(frozen=True)
class Italics(Formatting):
    kind: ClassVar[FormattingKind] = FormattingKind.ITALICS


@dataclass(frozen=True)
class Underline(Formatting):
    kind: ClassVar[FormattingKind] = FormattingKind.UNDERLINE


@dataclass(frozen=True)
class Strikethrough(Formatting):
    kind: ClassVar[FormattingKind] = FormattingKind.STRIKETHROUGH


@dataclass(frozen=True)
class Spoiler(Formatting):
    kind: ClassVar[FormattingKind] = FormattingKind.SPOILER


@dataclass(frozen=True)
class Blockquote(Formatting):
    kind: ClassVar[FormattingKind] = FormattingKind.BLOCKQUOTE


@dataclass(frozen=True)
class Hyperlink(Expression):
    label: Sequence[Expression]
    url: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "label", tuple(self.label))


# ---------------------------------------------------------------------------
# Container check helper
# ---------------------------------------------------------------------------


def get_children(node: Expression) -> Sequence[Expression] | None:
    """Return the children of a container node, or None if it is a leaf."""
    if isinstance(node, Formatting):
        return node.children
    if isinstance(node, Hyperlink):
        return node.label
    return None
