"""CLI application - main entry point with all commands."""

from __future__ import annotations

import logging
from typing import IO, TYPE_CHECKING, Sequence

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.tree import Tree

if TYPE_CHECKING:
    from discord_markdown.core.markdown.nodes import Expression
    from discord_markdown.core.resolvers import Resolvers

console = Console()
logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _parse_input(source: IO[str], md_hyperlinks: bool) -> list[Expression]:
    from discord_markdown.core.markdown.parser import parse, parse_with_md_hyperlinks

    markdown = source.read()
    logger.debug("Read %d characters from %s", len(markdown), getattr(source, "name", "<input>"))
    return parse_with_md_hyperlinks(markdown) if md_hyperlinks else parse(markdown)


def _load_resolvers(path: str | None) -> Resolvers | None:
    from discord_markdown.core.exceptions import DiscordMarkdownError
    from discord_markdown.core.resolvers import ResolverConfig

    if path is None:
        return None
    try:
        config = ResolverConfig.from_file(path)
    except DiscordMarkdownError as e:
        raise click.ClickException(str(e)) from e
    logger.debug(
        "Loaded resolver config: %d users, %d roles, %d channels",
        len(config.users),
        len(config.roles),
        len(config.channels),
    )
    return config.to_resolvers()


def _build_tree(parent: Tree, nodes: Sequence[Expression]) -> None:
    from dataclasses import fields

    from discord_markdown.core.markdown.nodes import get_children

    for node in nodes:
        children = get_children(node)
        attrs = ", ".join(
            f"{f.name}={getattr(node, f.name)!r}"
            for f in fields(node)
            if f.name not in ("children", "label")
        )
        label = f"[bold]{type(node).__name__}[/bold]"
        if attrs:
            label += f" {escape(attrs)}"
        branch = parent.add(label)
        if children is not None:
            _build_tree(branch, children)


# Common options
input_argument = click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
md_hyperlinks_option = click.option(
    "--md-hyperlinks",
    is_flag=True,
    default=False,
    help="Also parse [label](url) hyperlinks (as used in embeds).",
)
verbose_option = click.option("-v", "--verbose", is_flag=True, default=False, help="Debug logging.")


@click.group()
@click.version_option(package_name="discord-markdown")
def cli() -> None:
    """Discord markdown - convert Discord-flavored markdown to HTML."""


@cli.command()
@input_argument
@md_hyperlinks_option
@click.option(
    "-r",
    "--resolvers",
    "resolvers_path",
    envvar="DISCORD_MARKDOWN_RESOLVERS",
    type=click.Path(dir_okay=False),
    default=None,
    help="JSON file with user/role/channel names and the emoji URL template.",
)
@click.option(
    "-o",
    "--output",
    type=click.File("w", encoding="utf-8"),
    default="-",
    help="Output file (default: stdout).",
)
@click.option(
    "--standalone/--fragment",
    default=False,
    help="Wrap the output in a full HTML document with a stylesheet.",
)
@click.option("--title", default="Discord markdown", help="Document title (with --standalone).")
@verbose_option
def render(
    source: IO[str],
    md_hyperlinks: bool,
    resolvers_path: str | None,
    output: IO[str],
    standalone: bool,
    title: str,
    verbose: bool,
) -> None:
    """Render markdown from SOURCE (default: stdin) as HTML."""
    from discord_markdown.core.markdown.document import render_document
    from discord_markdown.core.markdown.html_visitor import HtmlExpressionVisitor

    _configure_logging(verbose)
    resolvers = _load_resolvers(resolvers_path)
    nodes = _parse_input(source, md_hyperlinks)
    html = HtmlExpressionVisitor.render(nodes, resolvers)
    if standalone:
        html = render_document(html, title)
    output.write(html)
    if not standalone:
        output.write("\n")


@cli.command()
@input_argument
@md_hyperlinks_option
@verbose_option
def tree(source: IO[str], md_hyperlinks: bool, verbose: bool) -> None:
    """Print the expression tree parsed from SOURCE (default: stdin)."""
    _configure_logging(verbose)
    nodes = _parse_input(source, md_hyperlinks)
    root = Tree(f"[dim]{len(nodes)} root expression(s)[/dim]")
    _build_tree(root, nodes)
    console.print(root)
