"""Entry point for ``python -m discord_markdown.mcp``."""

from __future__ import annotations

import click


@click.command()
@click.option(
    "--transport",
    type=click.Choice(["stdio", "http"], case_sensitive=False),
    default="stdio",
    help="MCP transport.",
)
@click.option("--port", type=int, default=8000, help="Port for the http transport.")
def main(transport: str, port: int) -> None:
    """Serve the discord-markdown MCP tools."""
    from discord_markdown.mcp.server import mcp

    if transport.lower() == "http":
        mcp.run(transport="http", port=port)
    else:
        mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
