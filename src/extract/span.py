"""Measure and slice the source lines spanned by a call's body."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from parse.nodes import Call, Container, LineBreak

if TYPE_CHECKING:
    from collections.abc import Iterable

    from parse.nodes import Node

DEFAULT_INDENT_WIDTH = 2


@dataclass(frozen=True)
class SourceSpan:
    """Half-open range ``[start_line, start_line + line_count)`` of 0-indexed lines."""

    start_line: int
    line_count: int

    def __post_init__(self) -> None:
        if self.start_line < 0:
            msg = f"start_line must be >= 0, got {self.start_line}"
            raise ValueError(msg)
        if self.line_count < 0:
            msg = f"line_count must be >= 0, got {self.line_count}"
            raise ValueError(msg)

    @property
    def stop(self) -> int:
        return self.start_line + self.line_count


def count_line_breaks(nodes: Iterable[Node]) -> int:
    """Count line break markers at any depth under ``nodes``."""
    total = 0
    for node in nodes:
        if isinstance(node, LineBreak):
            total += 1
        elif isinstance(node, (Call, Container)):
            total += count_line_breaks(node.children)
    return total


def count_source_lines(nodes: Iterable[Node]) -> int:
    """Count the physical lines spanned by ``nodes``.

    A call continued with a trailing ``,`` or ``\\`` folds its extra lines into
    the call text and gets a single line break, so the newlines in call texts
    are added to the markers.
    """
    total = 0
    for node in nodes:
        if isinstance(node, LineBreak):
            total += 1
        elif isinstance(node, Call):
            total += node.text.count("\n") + count_source_lines(node.children)
        elif isinstance(node, Container):
            total += count_source_lines(node.children)
    return total


def body_line_count(call: Call) -> int:
    """Number of source lines in the body of ``call``.

    The invocation line's own line break sits inside the call's block and is
    not part of the body, so one is subtracted from the raw count. A block
    without any line break yields zero.
    """
    return max(count_source_lines(call.children) - 1, 0)


def _indent_pattern(indent_width: int) -> re.Pattern[str]:
    # Blanks only: a whitespace-only line keeps its terminator.
    return re.compile(r"\A[^\S\r\n]{%d}" % indent_width)


def dedent_line(line: str, indent_width: int = DEFAULT_INDENT_WIDTH) -> str:
    """Strip exactly ``indent_width`` leading blanks from ``line`` if present."""
    return _indent_pattern(indent_width).sub("", line, count=1)


def read_lines(path: str | os.PathLike[str], encoding: str = "utf-8") -> list[str]:
    """Read ``path`` into lines that keep their original terminators."""
    with open(path, encoding=encoding, newline="") as f:
        return f.readlines()


def read_span(
    path: str | os.PathLike[str],
    span: SourceSpan,
    *,
    indent_width: int = DEFAULT_INDENT_WIDTH,
    encoding: str = "utf-8",
) -> str:
    """Return the lines of ``span`` from ``path`` with one indent level removed.

    A span reaching past the end of the file yields the lines that exist.
    """
    lines = read_lines(path, encoding=encoding)[span.start_line : span.stop]
    return "".join(dedent_line(line, indent_width) for line in lines)


__all__ = [
    "DEFAULT_INDENT_WIDTH",
    "SourceSpan",
    "body_line_count",
    "count_line_breaks",
    "count_source_lines",
    "dedent_line",
    "read_lines",
    "read_span",
]
