"""Shared constants for bsplayout."""

import os
from pathlib import Path

__all__ = [
    "CONFIG_FILE",
    "CONFIG_SUFFIXES",
    "DEFAULT_BSPC",
    "LEGACY_CONFIG_FILE",
    "TOML_SUFFIXES",
    "YAML_SUFFIXES",
]

# Config file paths - use XDG_CONFIG_HOME with fallback to ~/.config
_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
CONFIG_FILE = _xdg_config_home / "bsplayout" / "configuration.yaml"
LEGACY_CONFIG_FILE = Path("configuration.yaml")  # relative to the working directory

YAML_SUFFIXES = frozenset({".yaml", ".yml"})
TOML_SUFFIXES = frozenset({".toml"})
CONFIG_SUFFIXES = YAML_SUFFIXES | TOML_SUFFIXES

DEFAULT_BSPC = "bspc"
