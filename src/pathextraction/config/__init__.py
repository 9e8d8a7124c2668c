"""Configuration file loading."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from ..errors import ConfigurationError


def load_settings_file(path: str | Path) -> dict[str, Any]:
    """Load a YAML settings mapping; an empty file yields an empty dict."""
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigurationError(f"Config file {path} must be a YAML mapping")
    return loaded


__all__ = ["load_settings_file"]
