"""Recursive-descent Discord markdown parser.

The input is scanned left to right.  At every position a fixed list of
matchers is tried in priority order and the first one that recognises a
construct wins; anything no matcher accepts is accumulated as literal text.
Paired markers look for the nearest unescaped closing marker, so a marker
without a partner simply stays in the text.  Every input has a parse.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Sequence

from discord_markdown.core.markdown.nodes import (
    Blockquote,
    Bold,
    ChannelMention,
    CodeBlock,
    CustomEmoji,
    Expression,
    Formatting,
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

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

_SHRUG = r"¯\_(ツ)_/¯"


class _SearchCache:
    """Outcomes of closing-marker searches over one source string.

    A search for *needle* in ``[start, end)`` whose first hit is ``found``
    also answers a later search from any ``start'`` between ``start`` and
    ``found``; a search that found nothing answers every later search from
    ``start' >= start``.  As the scan moves left to right, each stretch of
    the source is searched once per marker and segment end.
    """

    def __init__(self) -> None:
        self._results: dict[tuple[str, bool, int], tuple[int, int]] = {}

    def find(self, source: str, needle: str, start: int, end: int, raw: bool) -> int:
        key = (needle, raw, end)
        cached = self._results.get(key)
        if cached is not None:
            searched_from, found = cached
            if searched_from <= start and (found < 0 or start <= found):
                return found
        if raw:
            found = source.find(needle, start, end)
        else:
            found = _find_unescaped(source, needle, start, end)
        self._results[key] = (start, found)
        return found


@dataclass(frozen=True)
class _Segment:
    """A view into the original source string."""

    source: str
    start: int
    length: int
    searches: _SearchCache = field(default_factory=_SearchCache, compare=False, repr=False)

    @property
    def end(self) -> int:
        return self.start + self.length

    def relocate(self, new_start: int, new_length: int) -> _Segment:
        return _Segment(self.source, new_start, new_length, self.searches)

    def starts_with(self, prefix: str) -> bool:
        return self.source.startswith(prefix, self.start, self.end)

    def find(self, needle: str, start: int, *, raw: bool = False) -> int:
        """First occurrence of *needle* in ``[start, end)``, or -1."""
        return self.searches.find(self.source, needle, start, self.end, raw)


@dataclass(frozen=True)
class _ParseOptions:
    md_hyperlinks: bool = False


@dataclass(frozen=True)
class _ParsedMatch:
    segment: _Segment
    value: Expression


# Matcher: callable that takes (segment, options) -> Optional[_ParsedMatch].
# The segment starts at the current scan position; matchers are anchored there.
_Matcher = Callable[[_Segment, _ParseOptions], _ParsedMatch | None]


def _is_escapable(char: str) -> bool:
    return not char.isalnum() and not char.isspace()


def _is_escaped(source: str, index: int) -> bool:
    """True if the character at *index* is preceded by an odd backslash run."""
    count = 0
    i = index - 1
    while i >= 0 and source[i] == "\\":
        count += 1
        i -= 1
    return count % 2 == 1


def _find_unescaped(source: str, needle: str, start: int, end: int) -> int:
    pos = start
    while pos < end:
        idx = source.find(needle, pos, end)
        if idx < 0:
            return -1
        if not _is_escaped(source, idx):
            return idx
        pos = idx + 1
    return -1


def _delimited(
    segment: _Segment,
    opener: str,
    closer: str,
    *,
    raw: bool = False,
) -> tuple[int, int, int] | None:
    """Match ``opener content closer`` with non-empty content.

    Returns ``(content_start, content_end, match_end)``.  Raw delimiters
    (code) ignore backslash escapes when looking for the closer.
    """
    if not segment.starts_with(opener):
        return None
    content_start = segment.start + len(opener)
    idx = segment.find(closer, content_start + 1, raw=raw)
    if idx < 0:
        return None
    return content_start, idx, idx + len(closer)


def _enclosed(
    segment: _Segment,
    marker: str,
    *,
    raw: bool = False,
) -> tuple[int, int, int] | None:
    """Match a single-character ``marker content marker`` where the content
    is non-empty and does not itself contain the marker."""
    if not segment.starts_with(marker):
        return None
    content_start = segment.start + 1
    idx = segment.find(marker, content_start, raw=raw)
    if idx <= content_start:
        return None
    return content_start, idx, idx + 1


def _match_span(segment: _Segment, match_end: int, value: Expression) -> _ParsedMatch:
    return _ParsedMatch(segment.relocate(segment.start, match_end - segment.start), value)


def _flush_text(literal: list[str], results: list[Expression]) -> None:
    text = "".join(literal)
    literal.clear()
    if text:
        results.append(Text(text))


# ---------------------------------------------------------------------------
# Recursive parse helpers
# ---------------------------------------------------------------------------


def _parse(
    segment: _Segment,
    options: _ParseOptions,
    at_line_start: bool,
) -> list[Expression]:
    source = segment.source
    end = segment.end
    results: list[Expression] = []
    literal: list[str] = []
    pos = run_start = segment.start

    while pos < end:
        char = source[pos]

        if char == "\n":
            literal.append(source[run_start:pos])
            _flush_text(literal, results)
            results.append(Newline())
            pos = run_start = pos + 1
            at_line_start = True
            continue

        if char == "¯" and source.startswith(_SHRUG, pos, end):
            # Kept verbatim: it would otherwise read as an escape and italics
            pos += len(_SHRUG)
            at_line_start = False
            continue

        if char == "\\" and pos + 1 < end and _is_escapable(source[pos + 1]):
            literal.append(source[run_start:pos])
            literal.append(source[pos + 1])
            pos = run_start = pos + 2
            at_line_start = False
            continue

        hit = _match_node(segment.relocate(pos, end - pos), options, at_line_start)
        if hit is None:
            pos += 1
            at_line_start = False
            continue

        literal.append(source[run_start:pos])
        _flush_text(literal, results)
        results.append(hit.value)
        # A blockquote swallows its newline, so the next line starts right after it
        at_line_start = isinstance(hit.value, Blockquote)
        pos = run_start = hit.segment.end

    literal.append(source[run_start:end])
    _flush_text(literal, results)
    return results


def _parse_content(
    segment: _Segment,
    start: int,
    end: int,
    options: _ParseOptions,
) -> list[Expression]:
    return _parse(segment.relocate(start, end - start), options, at_line_start=False)


def _match_node(
    segment: _Segment,
    options: _ParseOptions,
    at_line_start: bool,
) -> _ParsedMatch | None:
    if at_line_start:
        hit = _BLOCKQUOTE_MATCHER(segment, options)
        if hit is not None:
            return hit
    for matcher in _NODE_MATCHERS:
        hit = matcher(segment, options)
        if hit is not None:
            return hit
    return None


# ---------------------------------------------------------------------------
# Matchers – formatting
# ---------------------------------------------------------------------------


def _mk_paired(opener: str, node_type: type[Formatting]) -> _Matcher:
    """Matcher for a symmetric marker such as ``||`` or ``~~``."""

    def _match(segment: _Segment, options: _ParseOptions) -> _ParsedMatch | None:
        bounds = _delimited(segment, opener, opener)
        if bounds is None:
            return None
        content_start, content_end, match_end = bounds
        children = _parse_content(segment, content_start, content_end, options)
        return _match_span(segment, match_end, node_type(children))

    return _match


def _mk_emphasis(char: str, node_type: type[Formatting]) -> _Matcher:
    """Matcher for double-width emphasis (``**`` bold, ``__`` underline).

    Wider runs are tried first: a four-character run pairs with four, and a
    three-character run keeps its innermost marker in the content so that it
    parses as nested single-width emphasis.
    """
    double = char * 2
    triple = char * 3
    quad = char * 4

    def _match(segment: _Segment, options: _ParseOptions) -> _ParsedMatch | None:
        bounds = _delimited(segment, quad, quad)
        if bounds is None and segment.starts_with(triple):
            idx = segment.find(triple, segment.start + 3)
            if idx >= 0:
                bounds = (segment.start + 2, idx + 1, idx + 3)
        if bounds is None and segment.starts_with(double):
            idx = segment.find(triple, segment.start + 2)
            if idx >= 0:
                bounds = (segment.start + 2, idx + 1, idx + 3)
        if bounds is None:
            bounds = _delimited(segment, double, double)
        if bounds is None:
            return None
        content_start, content_end, match_end = bounds
        children = _parse_content(segment, content_start, content_end, options)
        return _match_span(segment, match_end, node_type(children))

    return _match


def _mk_italics() -> _Matcher:
    def _match(segment: _Segment, options: _ParseOptions) -> _ParsedMatch | None:
        for marker in ("_", "*"):
            bounds = _enclosed(segment, marker)
            if bounds is not None:
                content_start, content_end, match_end = bounds
                children = _parse_content(segment, content_start, content_end, options)
                return _match_span(segment, match_end, Italics(children))
        return None

    return _match


def _mk_blockquote() -> _Matcher:
    def _match(segment: _Segment, options: _ParseOptions) -> _ParsedMatch | None:
        if not segment.starts_with("> "):
            return None
        content_start = segment.start + 2
        newline = segment.source.find("\n", content_start, segment.end)
        if newline < 0:
            if content_start == segment.end:
                return None
            content_end = match_end = segment.end
        else:
            content_end, match_end = newline, newline + 1
        children = _parse_content(segment, content_start, content_end, options)
        return _match_span(segment, match_end, Blockquote(children))

    return _match


# ---------------------------------------------------------------------------
# Matchers – code
# ---------------------------------------------------------------------------

_LANGUAGE_PATTERN = re.compile(r"(\w+)\n")


def _mk_code_block() -> _Matcher:
    def _match(segment: _Segment, options: _ParseOptions) -> _ParsedMatch | None:
        bounds = _delimited(segment, "```", "```", raw=True)
        if bounds is None:
            return None
        content_start, content_end, match_end = bounds
        source = segment.source
        language = None
        code = source[content_start:content_end]
        m = _LANGUAGE_PATTERN.match(source, content_start, content_end)
        if m is not None and source[m.end() : content_end].strip():
            language = m.group(1)
            code = source[m.end() : content_end]
        return _match_span(segment, match_end, CodeBlock(language, code))

    return _match


def _mk_inline_code() -> _Matcher:
    def _match(segment: _Segment, options: _ParseOptions) -> _ParsedMatch | None:
        bounds = _delimited(segment, "``", "``", raw=True)
        if bounds is None:
            bounds = _enclosed(segment, "`", raw=True)
        if bounds is None:
            return None
        content_start, content_end, match_end = bounds
        code = segment.source[content_start:content_end]
        return _match_span(segment, match_end, InlineCode(code))

    return _match


# ---------------------------------------------------------------------------
# Matchers – mentions and emoji
# ---------------------------------------------------------------------------


def _regex_matcher(
    pattern: re.Pattern[str],
    transform: Callable[[re.Match[str]], Expression],
) -> _Matcher:
    """Build a matcher from a compiled regex anchored at the scan position."""

    def _match(segment: _Segment, options: _ParseOptions) -> _ParsedMatch | None:
        m = pattern.match(segment.source, segment.start, segment.end)
        if m is None:
            return None
        return _match_span(segment, m.end(), transform(m))

    return _match


def _mk_custom_emoji() -> _Matcher:
    pat = re.compile(r"<(a?):(\w+):(\d+)>")
    return _regex_matcher(
        pat, lambda m: CustomEmoji(name=m.group(2), id=m.group(3), is_animated=m.group(1) == "a")
    )


def _mk_user_mention() -> _Matcher:
    return _regex_matcher(re.compile(r"<@!?(\d+)>"), lambda m: UserMention(m.group(1)))


def _mk_role_mention() -> _Matcher:
    return _regex_matcher(re.compile(r"<@&(\d+)>"), lambda m: RoleMention(m.group(1)))


def _mk_channel_mention() -> _Matcher:
    return _regex_matcher(re.compile(r"<\#(\d+)>"), lambda m: ChannelMention(m.group(1)))


# ---------------------------------------------------------------------------
# Matchers – links
# ---------------------------------------------------------------------------

_URL_PATTERN = re.compile(
    r"(?:https?|ftp|file)://[-A-Za-z0-9+&@#/%?=~_|!:,.;]*[A-Za-z0-9+&@#/%=~_|]"
)


def _mk_md_hyperlink() -> _Matcher:
    def _match(segment: _Segment, options: _ParseOptions) -> _ParsedMatch | None:
        if not options.md_hyperlinks:
            return None
        bounds = _delimited(segment, "[", "]")
        if bounds is None:
            return None
        label_start, label_end, pos = bounds
        source = segment.source
        if not source.startswith("(", pos, segment.end):
            return None
        pos += 1
        wrapped = source.startswith("<", pos, segment.end)
        if wrapped:
            pos += 1
        m = _URL_PATTERN.match(source, pos, segment.end)
        if m is None:
            return None
        pos = m.end()
        closer = ">)" if wrapped else ")"
        if not source.startswith(closer, pos, segment.end):
            return None
        label = _parse_content(segment, label_start, label_end, _ParseOptions())
        return _match_span(segment, pos + len(closer), Hyperlink(label, m.group(0)))

    return _match


# ---------------------------------------------------------------------------
# Build the matcher table
# ---------------------------------------------------------------------------

_BLOCKQUOTE_MATCHER = _mk_blockquote()

# All matchers in priority order
_NODE_MATCHERS: Sequence[_Matcher] = (
    # Mentions and emoji
    _mk_custom_emoji(),
    _mk_user_mention(),
    _mk_role_mention(),
    _mk_channel_mention(),
    # Links
    _mk_md_hyperlink(),
    # Code
    _mk_code_block(),
    _mk_inline_code(),
    # Formatting
    _mk_paired("||", Spoiler),
    _mk_emphasis("_", Underline),
    _mk_paired("~~", Strikethrough),
    _mk_emphasis("*", Bold),
    _mk_italics(),
)

_PLAIN = _ParseOptions()
_WITH_MD_HYPERLINKS = _ParseOptions(md_hyperlinks=True)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse(markdown: str) -> list[Expression]:
    """Parse Discord markdown text into a list of root-level expressions."""
    return _parse(_Segment(markdown, 0, len(markdown)), _PLAIN, at_line_start=True)


def parse_with_md_hyperlinks(markdown: str) -> list[Expression]:
    """Parse like :func:`parse`, additionally turning ``[label](url)`` into hyperlinks.

    Alt-text links are only rendered by Discord inside embeds, hence the
    separate entry point.
    """
    return _parse(
        _Segment(markdown, 0, len(markdown)), _WITH_MD_HYPERLINKS, at_line_start=True
    )
