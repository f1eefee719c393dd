"""Configuration loading for jsdocgen (.jsdocgen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".jsdocgen.yml"
OUTPUT_FORMATS = ("markdown", "json")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class JsDocGenConfig:
    """Settings defined in .jsdocgen.yml, resolved against the config root."""

    root: Path
    output: Path
    format: str = "markdown"
    extensions: List[str] = field(default_factory=lambda: [".js"])
    exclude_paths: List[str] = field(default_factory=list)
    templates_dir: Optional[Path] = None
    max_file_bytes: Optional[int] = None


def default_config(root: Path | None = None) -> JsDocGenConfig:
    """Return the configuration used when no .jsdocgen.yml exists."""
    base = (root or Path.cwd()).resolve()
    return JsDocGenConfig(root=base, output=base / "API.md")


def load_config(config_path: Path) -> JsDocGenConfig:
    """Load configuration from disk, falling back to defaults when the file is missing."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return default_config(root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = default_config(root)

    output = _as_str(data.get("output"))
    if output:
        config.output = root / output

    output_format = _as_str(data.get("format"))
    if output_format:
        lowered = output_format.lower()
        if lowered not in OUTPUT_FORMATS:
            raise ConfigError(
                f"Unsupported output format '{output_format}' (expected one of {', '.join(OUTPUT_FORMATS)})"
            )
        config.format = lowered

    extensions = _as_str_list(data.get("extensions"))
    if extensions:
        config.extensions = [ext if ext.startswith(".") else f".{ext}" for ext in extensions]

    config.exclude_paths = _as_str_list(data.get("exclude_paths"))

    templates_dir = _as_str(data.get("templates_dir"))
    if templates_dir:
        config.templates_dir = root / templates_dir

    max_bytes = data.get("max_file_bytes")
    if max_bytes is not None:
        parsed = _as_int(max_bytes)
        if parsed is None or parsed <= 0:
            raise ConfigError("max_file_bytes must be a positive integer")
        config.max_file_bytes = parsed

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = ["CONFIG_FILENAME", "ConfigError", "JsDocGenConfig", "default_config", "load_config"]
