"""Partial rendering for styleguide helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape


class Renderer(Protocol):
    """Renders named view fragments with named values."""

    def render(self, name: str, *, partial: bool = False, **context: Any) -> str: ...

    def has_template(self, name: str, *, partial: bool = False) -> bool: ...


def template_filename(name: str, *, partial: bool = False, suffix: str = ".html") -> str:
    """Map ``styleguides/block`` to ``styleguides/_block.html`` for partials."""
    directory, _, base = name.rpartition("/")
    if partial:
        base = f"_{base}"
    filename = f"{base}{suffix}"
    return f"{directory}/{filename}" if directory else filename


class JinjaRenderer:
    """Renderer backed by a directory of Jinja2 templates."""

    def __init__(self, template_dir: Path, *, suffix: str = ".html") -> None:
        self.suffix = suffix
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=select_autoescape(["html"]),
            keep_trailing_newline=True,
        )

    def has_template(self, name: str, *, partial: bool = False) -> bool:
        try:
            self.env.get_template(template_filename(name, partial=partial, suffix=self.suffix))
        except TemplateNotFound:
            return False
        return True

    def render(self, name: str, *, partial: bool = False, **context: Any) -> str:
        template = self.env.get_template(
            template_filename(name, partial=partial, suffix=self.suffix)
        )
        return template.render(**context)


__all__ = ["JinjaRenderer", "Renderer", "template_filename"]
