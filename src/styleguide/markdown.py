"""Markdown rendering for section descriptions."""

from __future__ import annotations

from markdown_it import MarkdownIt

# linkify needs the linkify-it-py package.
_MARKDOWN = MarkdownIt(
    "commonmark", {"breaks": True, "html": True, "linkify": True}
).enable(["table", "strikethrough", "linkify"])


def render_markdown(text: str) -> str:
    """Render ``text`` with tables, strikethrough, autolinks and hard line breaks."""
    return _MARKDOWN.render(text)


__all__ = ["render_markdown"]
