"""Indentation based parser for Slim templates.

The parser produces a tree of :mod:`parse.nodes` values. Each physical source
line contributes exactly one :class:`~parse.nodes.LineBreak`, appended to the
innermost block that is open when the line ends. Code lines (``= ...`` and
``- ...``) open a block, so the line break of the invocation line and of every
line nested under it lands inside the call's children. Source extraction
relies on that placement to measure how many lines a block spans.

Lines continued with a trailing ``,`` or ``\\`` are folded into the call text
and do not contribute line breaks of their own.
"""

from __future__ import annotations

import re

from parse.nodes import LINE_BREAK, Call, Container, Node, Static

_LINE_SPLIT_RE = re.compile(r"\r?\n")

_HTML_COMMENT_RE = re.compile(r"\A/!( ?)")
_CONDITIONAL_COMMENT_RE = re.compile(r"\A/\[\s*(.*?)\s*\]\s*\Z")
_TEXT_RE = re.compile(r"\A([|'])( ?)")
_OUTPUT_RE = re.compile(r"\A=(=?)(['<>]*)")
_DOCTYPE_RE = re.compile(r"\Adoctype\b")
_TAG_RE = re.compile(r"\A(?:[.#](?=[\w-])|(\w(?:[\w:-]*\w)?))")
_SHORTCUT_RE = re.compile(r"\A[.#][\w-]+")
_ATTR_RE = re.compile(r"""\A\s+[\w:@-]+\s*==?\s*(?:"[^"]*"|'[^']*'|[^\s"']+)""")
_BLOCK_EXPANSION_RE = re.compile(r"\A\s*:\s*")
_TAG_OUTPUT_RE = re.compile(r"\A\s*=(=?)(['<>]*)")
_CLOSED_TAG_RE = re.compile(r"\A\s*/\s*")

EMBEDDED_ENGINES = (
    "markdown",
    "textile",
    "rdoc",
    "creole",
    "wiki",
    "org",
    "erb",
    "ruby",
    "javascript",
    "css",
    "sass",
    "scss",
    "less",
    "coffee",
)
_EMBEDDED_RE = re.compile(r"\A(" + "|".join(EMBEDDED_ENGINES) + r"):(\s*)")

_ATTR_WRAPPERS = {"(": ")", "[": "]", "{": "}"}

DEFAULT_FILENAME = "(__TEMPLATE__)"


class TemplateSyntaxError(Exception):
    """Raised when a template cannot be parsed."""

    def __init__(
        self,
        message: str,
        *,
        filename: str,
        lineno: int,
        column: int,
        line: str,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.filename = filename
        self.lineno = lineno
        self.column = column
        self.line = line

    def __str__(self) -> str:
        pointer = " " * max(self.column - 1, 0) + "^"
        return (
            f"{self.message}\n"
            f"  {self.filename}, Line {self.lineno}, Column {self.column}\n"
            f"  {self.line}\n"
            f"  {pointer}"
        )


def split_lines(source: str) -> list[str]:
    """Split template source into lines, dropping trailing empty lines."""
    lines = _LINE_SPLIT_RE.split(source)
    while lines and lines[-1] == "":
        lines.pop()
    return lines


def _indent_of(line: str) -> int:
    return len(line) - len(line.lstrip(" \t"))


class SlimParser:
    """Parse Slim source into a :class:`~parse.nodes.Container` root.

    A parser instance holds per-call state and must not be shared between
    threads while a parse is running.
    """

    def __init__(self) -> None:
        self._filename = DEFAULT_FILENAME
        self._lines: list[str] = []
        self._pos = 0
        self._lineno = 0
        self._orig_line = ""
        self._line = ""
        self._stacks: list[list[Node]] = []
        self._indents: list[int] = []

    def parse(self, source: str, filename: str | None = None) -> Container:
        root = Container()
        self._filename = filename or DEFAULT_FILENAME
        self._lines = split_lines(source)
        self._pos = 0
        self._lineno = 0
        self._orig_line = self._line = ""
        self._stacks = [root.children]
        self._indents = []

        while self._next_line():
            self._parse_line()

        self._stacks = []
        self._lines = []
        return root

    # -- line handling ---------------------------------------------------

    def _next_line(self) -> bool:
        if self._pos >= len(self._lines):
            return False
        self._orig_line = self._lines[self._pos]
        self._line = self._orig_line
        self._pos += 1
        self._lineno += 1
        return True

    def _peek_line(self) -> str | None:
        if self._pos >= len(self._lines):
            return None
        return self._lines[self._pos]

    def _expect_next_line(self) -> None:
        if not self._next_line():
            raise self._syntax_error("Unexpected end of file")
        self._line = self._line.strip()

    def _syntax_error(self, message: str) -> TemplateSyntaxError:
        column = len(self._orig_line) - len(self._line.lstrip()) + 1
        return TemplateSyntaxError(
            message,
            filename=self._filename,
            lineno=self._lineno,
            column=max(column, 1),
            line=self._orig_line.strip(),
        )

    def _parse_line(self) -> None:
        if not self._line.strip():
            self._stacks[-1].append(LINE_BREAK)
            return

        indent = _indent_of(self._line)

        # The first content line sets the base indentation.
        if not self._indents:
            self._indents.append(indent)

        self._line = self._line.lstrip()

        # More open blocks than indents: the previous line expects a body.
        expecting_indentation = len(self._stacks) > len(self._indents)

        if indent > self._indents[-1]:
            if not expecting_indentation:
                raise self._syntax_error("Unexpected indentation")
            self._indents.append(indent)
        else:
            if expecting_indentation:
                self._stacks.pop()
            while indent < self._indents[-1] and len(self._indents) > 1:
                self._indents.pop()
                self._stacks.pop()
            if indent != self._indents[-1]:
                raise self._syntax_error("Malformed indentation")

        self._parse_line_indicators()
        self._stacks[-1].append(LINE_BREAK)

    def _parse_line_indicators(self) -> None:
        line = self._line

        match = _HTML_COMMENT_RE.match(line)
        if match is not None:
            text_indent = self._indents[-1] + len(match.group(1)) + 2
            self._stacks[-1].append(
                Container(
                    "html_comment",
                    self._parse_text_block(line[match.end() :], text_indent),
                )
            )
            return

        match = _CONDITIONAL_COMMENT_RE.match(line)
        if match is not None:
            block = Container("condcomment", head=match.group(1))
            self._stacks[-1].append(block)
            self._stacks.append(block.children)
            return

        if line.startswith("/"):
            self._parse_comment_block()
            return

        match = _TEXT_RE.match(line)
        if match is not None:
            text_indent = self._indents[-1] + len(match.group(2)) + 1
            self._stacks[-1].append(
                Container("text", self._parse_text_block(line[match.end() :], text_indent))
            )
            if match.group(1) == "'":
                self._stacks[-1].append(Static(" "))
            return

        if line.startswith("<"):
            block = Container("inline_html", head=line)
            self._stacks[-1].append(block)
            self._stacks.append(block.children)
            return

        if line.startswith("-"):
            self._line = line[1:]
            call = Call("control", self._parse_broken_line())
            self._stacks[-1].append(call)
            self._stacks.append(call.children)
            return

        match = _OUTPUT_RE.match(line)
        if match is not None:
            self._line = line[match.end() :]
            modifiers = match.group(2)
            if "<" in modifiers:
                self._stacks[-1].append(Static(" "))
            call = Call("output", self._parse_broken_line(), escape=not match.group(1))
            self._stacks[-1].append(call)
            if ">" in modifiers or "'" in modifiers:
                self._stacks[-1].append(Static(" "))
            self._stacks.append(call.children)
            return

        match = _EMBEDDED_RE.match(line)
        if match is not None:
            rest = line[match.end() :]
            text_indent = len(self._orig_line) - len(rest)
            self._stacks[-1].append(
                Container(
                    "embedded",
                    self._parse_text_block(rest, text_indent),
                    head=match.group(1),
                )
            )
            return

        match = _DOCTYPE_RE.match(line)
        if match is not None:
            self._stacks[-1].append(
                Container("doctype", head=line[match.end() :].strip())
            )
            return

        match = _TAG_RE.match(line)
        if match is not None:
            if match.group(1):
                self._line = line[match.end() :]
            self._parse_tag(match.group(1) or "div")
            return

        raise self._syntax_error("Unknown line indicator")

    # -- blocks ------------------------------------------------------------

    def _parse_comment_block(self) -> None:
        while True:
            upcoming = self._peek_line()
            if upcoming is None:
                break
            if upcoming.strip() and _indent_of(upcoming) <= self._indents[-1]:
                break
            self._next_line()
            self._stacks[-1].append(LINE_BREAK)

    def _parse_text_block(self, first_line: str, text_indent: int | None) -> list[Node]:
        result: list[Node] = []
        if first_line:
            result.append(Static(first_line))
        else:
            text_indent = None

        empty_lines = 0
        while True:
            upcoming = self._peek_line()
            if upcoming is None:
                break

            if not upcoming.strip():
                self._next_line()
                result.append(LINE_BREAK)
                if text_indent is not None:
                    empty_lines += 1
                continue

            indent = _indent_of(upcoming)
            if indent <= self._indents[-1]:
                break

            if empty_lines:
                result.append(Static("\n" * empty_lines))
                empty_lines = 0

            self._next_line()
            text = self._line.lstrip()

            # Lines must be indented at least as deep as the first one.
            offset = indent - text_indent if text_indent is not None else 0
            if text_indent is not None and offset < 0:
                text_indent += offset
                offset = 0

            prefix = "\n" if text_indent is not None else ""
            result.append(LINE_BREAK)
            result.append(Static(prefix + " " * offset + text))

            if text_indent is None:
                text_indent = indent

        return result

    def _parse_broken_line(self) -> str:
        broken_line = self._line.strip()
        while broken_line.endswith((",", "\\")):
            self._expect_next_line()
            broken_line += "\n" + self._line
        return broken_line

    # -- tags ----------------------------------------------------------------

    def _parse_tag(self, name: str) -> None:
        head = [name]
        while True:
            match = _SHORTCUT_RE.match(self._line)
            if match is None:
                break
            head.append(match.group(0))
            self._line = self._line[match.end() :]
        head.extend(self._parse_attributes())

        tag = Container("tag", head="".join(head))
        self._stacks[-1].append(tag)
        rest = self._line

        match = _BLOCK_EXPANSION_RE.match(rest)
        if match is not None:
            self._line = rest[match.end() :]
            nested = _TAG_RE.match(self._line)
            if nested is None:
                raise self._syntax_error("Expected tag")
            if nested.group(1):
                self._line = self._line[nested.end() :]
            content = Container()
            tag.children.append(content)
            depth = len(self._stacks)
            self._stacks.append(content.children)
            self._parse_tag(nested.group(1) or "div")
            del self._stacks[depth]
            return

        match = _TAG_OUTPUT_RE.match(rest)
        if match is not None:
            self._line = rest[match.end() :]
            call = Call("output", self._parse_broken_line(), escape=not match.group(1))
            tag.children.append(call)
            self._stacks.append(call.children)
            return

        match = _CLOSED_TAG_RE.match(rest)
        if match is not None:
            self._line = rest[match.end() :]
            if self._line:
                raise self._syntax_error("Unexpected text after closed tag")
            return

        if not rest.strip():
            content = Container()
            tag.children.append(content)
            self._stacks.append(content.children)
            return

        text = rest[1:] if rest.startswith(" ") else rest
        text_indent = len(self._orig_line) - len(text)
        tag.children.append(Container("text", self._parse_text_block(text, text_indent)))

    def _parse_attributes(self) -> list[str]:
        parts: list[str] = []

        closer = _ATTR_WRAPPERS.get(self._line[:1])
        if closer is not None:
            end = self._line.find(closer)
            if end < 0:
                raise self._syntax_error(f"Expected closing delimiter {closer}")
            parts.append(self._line[: end + 1])
            self._line = self._line[end + 1 :]

        while True:
            match = _ATTR_RE.match(self._line)
            if match is None:
                break
            parts.append(match.group(0))
            self._line = self._line[match.end() :]

        return parts


def parse_template(source: str, filename: str | None = None) -> Container:
    """Parse ``source`` with a fresh :class:`SlimParser`."""
    return SlimParser().parse(source, filename=filename)


__all__ = [
    "EMBEDDED_ENGINES",
    "SlimParser",
    "TemplateSyntaxError",
    "parse_template",
    "split_lines",
]
