"""Node types for parsed Slim templates."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Union

CallKind = Literal["output", "control"]


@dataclass(frozen=True)
class LineBreak:
    """Marks the end of one physical source line."""


@dataclass(frozen=True)
class Static:
    """Literal text carried by a text block or inline html line."""

    text: str


@dataclass
class Call:
    """A code line (``= expr`` or ``- expr``) and the block nested under it."""

    kind: CallKind
    text: str
    children: list[Node] = field(default_factory=list)
    escape: bool = True


@dataclass
class Container:
    """An ordered group of nodes: the document root, a tag, a text block..."""

    kind: str = "multi"
    children: list[Node] = field(default_factory=list)
    head: str = ""


Node = Union[LineBreak, Static, Call, Container]

LINE_BREAK = LineBreak()


__all__ = ["LINE_BREAK", "Call", "CallKind", "Container", "LineBreak", "Node", "Static"]
