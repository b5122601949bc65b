from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

CONFIG_FILENAME = "styleguide.toml"

Background = Literal["clear", "white", "black", "light", "dark"]
Align = Literal["left", "right", "center"]


class BlockDefaults(BaseModel):
    """Default options applied to every documented block."""

    model_config = ConfigDict(extra="forbid")

    background: Background = Field(
        default="light",
        description="Canvas background (clear, white, black, light, dark)",
    )
    align: Align = Field(default="left", description="Canvas text alignment")
    code: bool = Field(
        default=True,
        description="Show the example source next to the rendered output",
    )


class StyleguideConfig(BaseModel):
    """Configuration for styleguide rendering and source extraction."""

    model_config = ConfigDict(extra="forbid")

    method_name: str = Field(
        default="kss_block",
        description="Name of the template call that documents a block",
    )
    indent_width: int = Field(
        default=2,
        ge=0,
        description="Leading blanks stripped from each extracted source line",
    )
    namespace: str | None = Field(
        default=None,
        description="Template namespace tried before the default partials",
    )
    encoding: str = Field(default="utf-8", description="Template file encoding")
    block: BlockDefaults = Field(
        default_factory=BlockDefaults,
        description="Default kss_block options",
    )

    @field_validator("method_name")
    @classmethod
    def validate_method_name(cls, v: str) -> str:
        if not v.isidentifier():
            msg = f"method_name must be a plain identifier, got {v!r}"
            raise ValueError(msg)
        return v

    @field_validator("namespace")
    @classmethod
    def validate_namespace(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip("/")
        return v or None


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def load_config(root: Path) -> StyleguideConfig:
    """Load configuration from styleguide.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return StyleguideConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return StyleguideConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e


__all__ = [
    "CONFIG_FILENAME",
    "BlockDefaults",
    "ConfigError",
    "StyleguideConfig",
    "load_config",
]
