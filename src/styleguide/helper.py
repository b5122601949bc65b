"""Template helpers for documenting styleguide blocks.

A styleguide template documents a section by wrapping example markup in a
``kss_block`` call::

    = kss_block '1.1' do
      div.foo
        | Put markup here!

The helper renders the body, pulls the literal markup of the body back out of
the template file, and renders both side by side in the block partial.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, Protocol

from extract.engine import SourceExtractor
from styleguide.config import StyleguideConfig
from styleguide.markdown import render_markdown
from styleguide.models import BlockOptions

if TYPE_CHECKING:
    import os
    from collections.abc import Callable

    from styleguide.models import Section
    from styleguide.render import Renderer

_MODIFIER_PLACEHOLDER = "$modifier_class"
_MODIFIER_PLACEHOLDER_RE = re.compile(r"\s*\$modifier_class")


class SectionNotFound(Exception):
    """Raised when a block references a section that is not documented."""

    def __init__(self, section_id: str) -> None:
        self.section_id = section_id
        super().__init__(f"Section '{section_id}' not found.")


class SectionLookup(Protocol):
    def section(self, reference: str) -> Section | None: ...


def parse_html(original_html: str, modifier_class: str | None = None) -> str:
    """Replace the ``$modifier_class`` placeholder in example HTML.

    Without a modifier the placeholder is removed along with the whitespace
    before it.
    """
    if modifier_class:
        return original_html.replace(_MODIFIER_PLACEHOLDER, modifier_class)
    return _MODIFIER_PLACEHOLDER_RE.sub("", original_html)


class StyleguideHelper:
    """Helpers available to styleguide templates."""

    def __init__(
        self,
        sections: SectionLookup,
        renderer: Renderer,
        *,
        extractor: SourceExtractor | None = None,
        config: StyleguideConfig | None = None,
    ) -> None:
        self.sections = sections
        self.renderer = renderer
        self.config = config if config is not None else StyleguideConfig()
        self.extractor = (
            extractor
            if extractor is not None
            else SourceExtractor(
                indent_width=self.config.indent_width,
                encoding=self.config.encoding,
            )
        )

    def kss_block(
        self,
        section_id: str,
        body: Callable[[], str],
        source_location: tuple[str | os.PathLike[str], int],
        **options: Any,
    ) -> str:
        """Document a styleguide block.

        Args:
            section_id: Section reference, e.g. ``"1.1"``.
            body: Renders the example markup to HTML. A ``$modifier_class``
                placeholder in it is filled once per section modifier.
            source_location: ``(filename, lineno)`` of the invocation, with
                ``lineno`` 1-based; it doubles as the 0-indexed line where
                the body starts.
            **options: ``background`` (clear, white, black, light, dark),
                ``align`` (left, right, center), ``code``, and optional
                ``width``, ``height`` and ``padding_*`` sizes in pixels.

        Raises:
            SectionNotFound: The section is unknown or has no filename.
            CallSiteNotFound: The template has no matching top-level call.
        """
        section = self.sections.section(section_id)
        if section is None or not section.filename:
            raise SectionNotFound(section_id)

        filename, lineno = source_location
        example_slim = self.extractor.extract(
            filename, lineno, self.config.method_name, section_id
        )
        example_html = body()

        merged = {**self.config.block.model_dump(), **options}
        block_options = BlockOptions.model_validate(merged)
        modifier_examples = [
            {
                "modifier": modifier,
                "class_name": modifier.class_name,
                "html": parse_html(example_html, modifier.class_name),
            }
            for modifier in section.modifiers
        ]

        return self.renderer.render(
            self.with_namespace("styleguides/block", partial=True),
            partial=True,
            canvas_class=block_options.canvas_class,
            code_block=body,
            slim=example_slim,
            html=parse_html(example_html),
            section=section,
            modifiers=list(section.modifiers),
            modifier_examples=modifier_examples,
            options=block_options.model_dump(),
            inner_style=block_options.inner_style,
        )

    def kss_specimen(self) -> str:
        """Render a type specimen for showcasing fonts."""
        return self.renderer.render(
            self.with_namespace("styleguides/specimen", partial=True), partial=True
        )

    def kss_swatch(
        self,
        name: str,
        color: str,
        *,
        dark: bool | None = None,
        description: str | None = None,
    ) -> str:
        """Render a color swatch."""
        return self.renderer.render(
            self.with_namespace("styleguides/swatch", partial=True),
            partial=True,
            name=name,
            identifier=name,
            color=color,
            dark=dark,
            description=description,
        )

    def kss_markdown(self, text: str) -> str:
        return render_markdown(text)

    def parse_html(self, original_html: str, modifier_class: str | None = None) -> str:
        return parse_html(original_html, modifier_class)

    def with_namespace(self, path: str, *, partial: bool = False) -> str:
        namespace = self.config.namespace
        if namespace is None:
            return path

        namespaced = f"{namespace}/{path}"
        if self.renderer.has_template(namespaced, partial=partial):
            return namespaced
        return path


__all__ = ["SectionLookup", "SectionNotFound", "StyleguideHelper", "parse_html"]
