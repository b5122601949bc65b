"""Living styleguide helpers."""

from styleguide.config import ConfigError, StyleguideConfig, load_config
from styleguide.helper import SectionNotFound, StyleguideHelper, parse_html
from styleguide.models import BlockOptions, Modifier, Section
from styleguide.render import JinjaRenderer

__all__ = [
    "BlockOptions",
    "ConfigError",
    "JinjaRenderer",
    "Modifier",
    "Section",
    "SectionNotFound",
    "StyleguideConfig",
    "StyleguideHelper",
    "load_config",
    "parse_html",
]
