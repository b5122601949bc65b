"""Extract the literal source of a documentation block's body."""

from __future__ import annotations

from typing import TYPE_CHECKING

from extract.errors import CallSiteNotFound
from extract.locate import CallSiteQuery, find_call_site
from extract.span import DEFAULT_INDENT_WIDTH, SourceSpan, body_line_count, read_span
from parse.cache import ParserCache

if TYPE_CHECKING:
    import os


class SourceExtractor:
    """Turns a call site into the verbatim markup of its body.

    Template trees come from the injected :class:`~parse.cache.ParserCache`;
    the raw lines are re-read from disk on every request.
    """

    def __init__(
        self,
        cache: ParserCache | None = None,
        *,
        indent_width: int = DEFAULT_INDENT_WIDTH,
        encoding: str = "utf-8",
    ) -> None:
        self.cache = cache if cache is not None else ParserCache(encoding=encoding)
        self.indent_width = indent_width
        self.encoding = encoding

    def locate_span(
        self,
        path: str | os.PathLike[str],
        source_start: int,
        method_name: str,
        argument: str,
    ) -> SourceSpan:
        """Return the body span of the call ``method_name 'argument'`` in ``path``.

        Args:
            path: Template file containing the call.
            source_start: 0-indexed line just after the invocation line.
            method_name: Name of the documentation call, e.g. ``kss_block``.
            argument: Literal first argument, e.g. a section reference.

        Raises:
            CallSiteNotFound: No top-level call matches.
            TemplateSyntaxError: The template cannot be parsed.
            OSError: The template cannot be read.
        """
        root = self.cache.get(path)
        call = find_call_site(root, CallSiteQuery(method_name, argument))
        if call is None:
            raise CallSiteNotFound(path, method_name, argument)
        return SourceSpan(source_start, body_line_count(call))

    def extract(
        self,
        path: str | os.PathLike[str],
        source_start: int,
        method_name: str,
        argument: str,
    ) -> str:
        """Return the body source of the matching call, dedented one level."""
        span = self.locate_span(path, source_start, method_name, argument)
        return read_span(
            path,
            span,
            indent_width=self.indent_width,
            encoding=self.encoding,
        )


__all__ = ["SourceExtractor"]
