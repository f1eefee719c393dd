"""Tests for jsdocgen.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from jsdocgen.config import ConfigError, JsDocGenConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, JsDocGenConfig)
    assert config.root == tmp_path.resolve()
    assert config.output == tmp_path.resolve() / "API.md"
    assert config.format == "markdown"
    assert config.extensions == [".js"]
    assert config.exclude_paths == []
    assert config.templates_dir is None
    assert config.max_file_bytes is None


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".jsdocgen.yml"
    config_file.write_text(
        """
output: "docs/reference.json"
format: JSON
extensions: [js, ".mjs"]
exclude_paths:
  - "dist/"
  - "*.min.js"
templates_dir: "docs/templates"
max_file_bytes: 65536
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    root = tmp_path.resolve()
    assert config.output == root / "docs/reference.json"
    assert config.format == "json"
    assert config.extensions == [".js", ".mjs"]
    assert config.exclude_paths == ["dist/", "*.min.js"]
    assert config.templates_dir == root / "docs/templates"
    assert config.max_file_bytes == 65536


def test_empty_config_file_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / ".jsdocgen.yml").write_text("\n", encoding="utf-8")

    assert load_config(tmp_path).format == "markdown"


def test_non_mapping_root_is_rejected(tmp_path: Path) -> None:
    (tmp_path / ".jsdocgen.yml").write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_invalid_yaml_is_rejected(tmp_path: Path) -> None:
    (tmp_path / ".jsdocgen.yml").write_text("output: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Failed to parse"):
        load_config(tmp_path)


@pytest.mark.parametrize(
    "content",
    ["format: html\n", "max_file_bytes: 0\n", "max_file_bytes: lots\n"],
)
def test_invalid_values_are_rejected(tmp_path: Path, content: str) -> None:
    (tmp_path / ".jsdocgen.yml").write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_unreadable_config_is_rejected(tmp_path: Path) -> None:
    (tmp_path / ".jsdocgen.yml").mkdir()

    with pytest.raises(ConfigError, match="Failed to read"):
        load_config(tmp_path)


def test_non_utf8_config_is_rejected(tmp_path: Path) -> None:
    (tmp_path / ".jsdocgen.yml").write_bytes(b"output: \xff\xfe\n")

    with pytest.raises(ConfigError):
        load_config(tmp_path)
