"""Standalone HTML document wrapper with Jinja2 templates."""

from __future__ import annotations

from pathlib import Path

import jinja2
from markupsafe import Markup

_TEMPLATE_DIR = str(Path(__file__).resolve().parent / "templates")

_env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(_TEMPLATE_DIR),
    autoescape=jinja2.select_autoescape(["html", "j2"]),
    keep_trailing_newline=True,
)


def render_document(body_html: str, title: str = "Discord markdown") -> str:
    """Wrap rendered markdown in a full HTML page with the default stylesheet.

    *body_html* must already be safe markup (the convertor's output); the
    title is escaped.
    """
    template = _env.get_template("document.html.j2")
    return template.render(title=title, body=Markup(body_html))
