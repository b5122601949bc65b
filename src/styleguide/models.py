"""Section and block option models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from styleguide.config import Align, Background


class Modifier(BaseModel):
    """A documented variation of a section, e.g. ``.button--large``."""

    name: str
    description: str = ""

    @property
    def class_name(self) -> str:
        return self.name.replace(".", " ").replace(":", " pseudo-class-").strip()


class Section(BaseModel):
    """Styleguide section metadata as provided by the section lookup."""

    reference: str
    header: str = ""
    description: str = ""
    filename: str | None = Field(
        default=None,
        description="Stylesheet the section is documented in; None if undocumented",
    )
    modifiers: list[Modifier] = Field(default_factory=list)


_STYLE_OPTIONS = (
    ("width", "width"),
    ("height", "height"),
    ("padding_top", "padding-top"),
    ("padding_right", "padding-right"),
    ("padding_bottom", "padding-bottom"),
    ("padding_left", "padding-left"),
)


class BlockOptions(BaseModel):
    """Options of one documented block; unknown keys are passed to the partial."""

    model_config = ConfigDict(extra="allow")

    background: Background = "light"
    align: Align = "left"
    code: bool = True
    width: int | str | None = None
    height: int | str | None = None
    padding_top: int | str | None = None
    padding_right: int | str | None = None
    padding_bottom: int | str | None = None
    padding_left: int | str | None = None

    @property
    def canvas_class(self) -> str:
        return f"bg-{self.background} align-{self.align}"

    @property
    def inner_style(self) -> str:
        """CSS for the inner area; every sized option also centres the area."""
        declarations: list[str] = []
        for option, prop in _STYLE_OPTIONS:
            value = getattr(self, option)
            if value is None:
                continue
            for declaration in (f"{prop}: {value}px", "margin: 0 auto"):
                if declaration not in declarations:
                    declarations.append(declaration)
        return ";".join(declarations)


__all__ = ["BlockOptions", "Modifier", "Section"]
