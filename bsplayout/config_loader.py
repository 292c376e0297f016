"""Configuration file loading utilities.

This module handles loading, parsing, and merging YAML/TOML configuration
files, then turns the result into model objects.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

import yaml

from .constants import CONFIG_FILE, CONFIG_SUFFIXES, LEGACY_CONFIG_FILE, TOML_SUFFIXES
from .models import BsplayoutError, Configuration, ConfigurationSet, ExitCode, Layout, Settings
from .utils import coerce_to_bool, merge
from .validation import validate_document

if TYPE_CHECKING:
    import logging

__all__ = ["ConfigLoader", "parse_configuration_set"]


def _optional_bool(value: Any) -> bool | None:  # noqa: ANN401
    return None if value is None else coerce_to_bool(value)


def parse_configuration_set(raw: dict[str, Any], log: logging.Logger) -> ConfigurationSet:
    """Validate the raw document and build the model objects.

    Args:
        raw: Parsed file content
        log: Logger for errors and warnings

    Returns:
        The configuration set

    Raises:
        BsplayoutError: If the document is not valid
    """
    errors, _warnings = validate_document(raw, log)
    if errors:
        for error in errors:
            log.critical(error)
        msg = f"{len(errors)} configuration error(s)"
        raise BsplayoutError(msg, ExitCode.CONFIG_ERROR)

    settings_section = raw.get("settings") or {}
    settings = Settings(
        bspc=settings_section.get("bspc", Settings.bspc),
        remove_unlisted=coerce_to_bool(settings_section.get("remove_unlisted"), Settings.remove_unlisted),
        reorder=coerce_to_bool(settings_section.get("reorder"), Settings.reorder),
    )

    configurations = [
        Configuration(
            name=conf["name"],
            monitors=list(conf["monitors"]),
            layouts=[Layout(monitor=lay["monitor"], desktops=list(lay["desktops"])) for lay in conf.get("layouts") or []],
            remove_unlisted=_optional_bool(conf.get("remove_unlisted")),
            reorder=_optional_bool(conf.get("reorder")),
        )
        for conf in raw["configurations"]
    ]
    return ConfigurationSet(configurations=configurations, settings=settings)


class ConfigLoader:
    """Handles loading and merging configuration files.

    Supports:
    - YAML configuration files (preferred)
    - TOML configuration files
    - Directory-based config (multiple files merged, sorted by name)
    - Include directives for modular configuration
    """

    def __init__(self, log: logging.Logger) -> None:
        """Initialize the config loader.

        Args:
            log: Logger instance for status and error messages
        """
        self.log = log
        self._config: dict[str, Any] = {}
        self.source: Path | None = None

    @property
    def config(self) -> dict[str, Any]:
        """Return the loaded raw configuration."""
        return self._config

    async def load(self, config_filename: str = "") -> ConfigurationSet:
        """Load configuration from file or directory and parse it.

        Args:
            config_filename: Optional path to config file or directory.
                           If empty, uses the default location.

        Returns:
            The parsed configuration set.

        Raises:
            BsplayoutError: If config file not found, has syntax errors or is invalid.
        """
        self._config = await self.load_raw(config_filename)
        return parse_configuration_set(self._config, self.log)

    async def load_raw(self, config_filename: str = "") -> dict[str, Any]:
        """Load config file(s) without validating them.

        Args:
            config_filename: Optional configuration file or directory path

        Returns:
            The merged configuration dictionary
        """
        fname = self.resolve_path(config_filename)
        self.source = fname
        if fname.is_dir():
            return self._load_config_directory(fname)
        return self._load_with_includes(fname)

    def resolve_path(self, config_filename: str = "") -> Path:
        """Return the configuration path to use.

        Args:
            config_filename: Explicit path, takes precedence when set
        """
        if config_filename:
            return Path(os.path.expandvars(config_filename)).expanduser()
        if CONFIG_FILE.exists():
            return CONFIG_FILE
        if LEGACY_CONFIG_FILE.exists():
            self.log.warning("Using config from the working directory: %s", LEGACY_CONFIG_FILE.resolve())
            self.log.warning("Please move your config to: %s", CONFIG_FILE)
            return LEGACY_CONFIG_FILE
        return CONFIG_FILE  # Will error in _load_config_file

    def _load_with_includes(self, fname: Path) -> dict[str, Any]:
        config = self._load_config_file(fname)
        includes = config.pop("include", None) or []
        if not isinstance(includes, list):
            self.log.critical("Problem reading %s: 'include' must be a list", fname)
            raise BsplayoutError("invalid include", ExitCode.CONFIG_ERROR)
        for extra_config in includes:
            extra = Path(os.path.expandvars(str(extra_config))).expanduser()
            if not extra.is_absolute():
                extra = fname.parent / extra
            if extra.is_dir():
                merge(config, self._load_config_directory(extra))
            else:
                merge(config, self._load_with_includes(extra))
        return config

    def _load_config_directory(self, directory: Path) -> dict[str, Any]:
        """Load and merge all configuration files from a directory.

        Args:
            directory: Path to directory containing .yaml/.yml/.toml files

        Returns:
            Merged configuration from all files
        """
        config: dict[str, Any] = {}
        for entry in sorted(directory.iterdir(), key=lambda p: p.name):
            if entry.suffix.lower() not in CONFIG_SUFFIXES:
                continue
            merge(config, self._load_with_includes(entry))
        return config

    def _load_config_file(self, fname: Path) -> dict[str, Any]:
        """Load a single configuration file.

        Args:
            fname: Path to the configuration file

        Returns:
            Configuration dictionary

        Raises:
            BsplayoutError: If file not found or has syntax errors
        """
        if not fname.exists():
            self.log.critical("Config file not found! Please create %s", fname)
            raise BsplayoutError(f"{fname} not found", ExitCode.CONFIG_ERROR)

        self.log.info("Loading %s", fname)
        try:
            if fname.suffix.lower() in TOML_SUFFIXES:
                with fname.open("rb") as f:
                    content: Any = tomllib.load(f)
            else:
                with fname.open(encoding="utf-8") as f:
                    content = yaml.safe_load(f)
        except (tomllib.TOMLDecodeError, yaml.YAMLError) as e:
            self.log.critical("Problem reading %s: %s", fname, e)
            raise BsplayoutError(str(e), ExitCode.CONFIG_ERROR) from e
        except OSError as e:
            self.log.critical("Cannot read %s: %s", fname, e)
            raise BsplayoutError(str(e), ExitCode.CONFIG_ERROR) from e

        if content is None:
            return {}
        if not isinstance(content, dict):
            self.log.critical("Problem reading %s: expected a mapping at the top level", fname)
            raise BsplayoutError(f"{fname} is not a mapping", ExitCode.CONFIG_ERROR)
        return cast("dict[str, Any]", content)
