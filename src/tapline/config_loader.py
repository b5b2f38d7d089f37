"""Load TaplineConfig from tapline.yaml or tapline.toml if present.

Merges file config with keyword overrides. Overrides take precedence.
"""

from __future__ import annotations

import tomllib
from dataclasses import fields
from pathlib import Path

import yaml

from tapline._errors import ConfigError
from tapline.config import TaplineConfig

_KNOWN_KEYS = frozenset(f.name for f in fields(TaplineConfig))


def load_config(root: Path | str = ".", **overrides: object) -> TaplineConfig:
    """Load TaplineConfig from root, optionally merging a config file.

    Looks for tapline.yaml, tapline.yml, or tapline.toml in root. If found,
    loads and merges with overrides. Unknown keys are ignored.

    Raises:
        ConfigError: If the file cannot be parsed or holds invalid values.

    """
    file_config = _read_tapline_config(Path(root))
    merged = {**file_config, **{k: v for k, v in overrides.items() if v is not None}}
    return TaplineConfig(**merged)  # type: ignore[arg-type]


def _read_tapline_config(root: Path) -> dict[str, object]:
    """Read tapline config from yaml/toml if present. Returns empty dict otherwise."""
    for name in ("tapline.yaml", "tapline.yml"):
        path = root / name
        if path.is_file():
            return _parse_yaml(path)
    toml_path = root / "tapline.toml"
    if toml_path.is_file():
        return _parse_toml(toml_path)
    return {}


def _parse_yaml(path: Path) -> dict[str, object]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        msg = f"Cannot parse {path.name}: {exc}"
        raise ConfigError(msg) from exc
    if not isinstance(data, dict):
        msg = f"{path.name} must contain a mapping, got {type(data).__name__}"
        raise ConfigError(msg)
    return _flatten_tapline_section(data)


def _parse_toml(path: Path) -> dict[str, object]:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
        msg = f"Cannot parse {path.name}: {exc}"
        raise ConfigError(msg) from exc
    return _flatten_tapline_section(data)


def _flatten_tapline_section(data: dict[str, object]) -> dict[str, object]:
    """Extract tapline.* keys and known top-level keys into a flat dict."""
    result: dict[str, object] = {}
    for k, v in data.items():
        if k in _KNOWN_KEYS:
            result[k] = v
    section = data.get("tapline")
    if isinstance(section, dict):
        for k, v in section.items():
            if k in _KNOWN_KEYS:
                result[k] = v
    return result
