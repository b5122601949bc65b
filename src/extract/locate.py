"""Locate top-level documentation calls in a parsed template."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from extract.span import count_source_lines
from parse.nodes import Call

if TYPE_CHECKING:
    from collections.abc import Iterator

    from parse.nodes import Container


@dataclass(frozen=True)
class CallSiteQuery:
    """Identifies a call such as ``kss_block '1.1' do`` by name and argument.

    The method name must be followed by whitespace and the argument wrapped in
    a matching pair of single or double quotes. Parenthesized calls
    (``kss_block('1.1')``) and computed arguments are not recognised.
    """

    method_name: str
    argument: str

    def pattern(self) -> re.Pattern[str]:
        method = re.escape(self.method_name)
        argument = re.escape(self.argument)
        return re.compile(rf"(?<!\w){method}\s+(['\"]){argument}\1")


@dataclass(frozen=True)
class CallSite:
    """A top-level call found in a template."""

    argument: str
    text: str
    line: int
    call: Call

    @property
    def body_start(self) -> int:
        """0-indexed line where the block body begins."""
        return self.line + 1


def find_call_site(root: Container, query: CallSiteQuery) -> Call | None:
    """Return the first top-level call matching ``query``, or None.

    Only the direct children of ``root`` are scanned: documentation blocks are
    statements at the top of a template, never nested inside markup.
    """
    pattern = query.pattern()
    for child in root.children:
        if isinstance(child, Call) and pattern.search(child.text):
            return child
    return None


def iter_call_sites(root: Container, method_name: str) -> Iterator[CallSite]:
    """Yield every top-level call of ``method_name`` with a quoted argument.

    The line of each call is the number of source lines spanned by the
    siblings before it, wrapped call lines included.
    """
    pattern = re.compile(rf"(?<!\w){re.escape(method_name)}\s+(['\"])(.*?)\1")
    line = 0
    for child in root.children:
        if isinstance(child, Call):
            match = pattern.search(child.text)
            if match is not None:
                yield CallSite(
                    argument=match.group(2),
                    text=child.text,
                    line=line,
                    call=child,
                )
        line += count_source_lines([child])


__all__ = ["CallSite", "CallSiteQuery", "find_call_site", "iter_call_sites"]
