from __future__ import annotations

from pathlib import Path

import pytest

from styleguide.config import ConfigError, load_config


def _write_config(root: Path, toml_content: str) -> None:
    (root / "styleguide.toml").write_text(toml_content, encoding="utf-8")


def test_missing_config_uses_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config.method_name == "kss_block"
    assert config.indent_width == 2
    assert config.namespace is None
    assert config.block.background == "light"
    assert config.block.align == "left"
    assert config.block.code is True


def test_empty_config_accepted(tmp_path: Path) -> None:
    _write_config(tmp_path, "")

    config = load_config(tmp_path)

    assert config.encoding == "utf-8"
    assert config.block.code is True


def test_valid_config_accepted(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
method_name = "sg_block"
indent_width = 4
namespace = "/admin/"

[block]
background = "dark"
align = "center"
""".strip(),
    )

    config = load_config(tmp_path)

    assert config.method_name == "sg_block"
    assert config.indent_width == 4
    assert config.namespace == "admin"
    assert config.block.background == "dark"
    assert config.block.align == "center"


def test_unknown_top_level_key_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "bogus_key = true")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_unknown_block_key_rejected(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
[block]
bogus = true
""".strip(),
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


@pytest.mark.parametrize(
    "toml_content",
    [
        'method_name = "kss block"',
        'method_name = ""',
        "indent_width = -1",
        '[block]\nbackground = "purple"',
        '[block]\nalign = "justify"',
    ],
)
def test_invalid_values_rejected(tmp_path: Path, toml_content: str) -> None:
    _write_config(tmp_path, toml_content)

    with pytest.raises(ConfigError, match="Invalid config"):
        load_config(tmp_path)


def test_invalid_toml_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "method_name = ")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(tmp_path)
