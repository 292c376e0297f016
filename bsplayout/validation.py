"""Configuration validation with schema definitions.

Provides declarative schema definitions (ConfigField, ConfigItems) for the
configuration file and a validator walking the document. Supports type
checking, required fields, unknown key detection with fuzzy matching for typo
suggestions, and the cross-field checks a layout file needs (layouts naming
monitors outside their configuration, desktops listed twice, ...).

Used by:
- ConfigLoader when parsing, errors are fatal there
- 'bsplayout validate' CLI for static configuration checking
"""

import difflib
import logging
from collections import Counter
from dataclasses import dataclass
from typing import Any

from .utils import BOOL_STRINGS

__all__ = [
    "CONFIGURATION_SCHEMA",
    "ConfigField",
    "ConfigItems",
    "ConfigValidator",
    "LAYOUT_SCHEMA",
    "ROOT_SCHEMA",
    "SETTINGS_SCHEMA",
    "format_config_error",
    "validate_document",
]


@dataclass
class ConfigField:
    """Describes an expected configuration field for validation.

    Attributes:
        name: The configuration key name
        field_type: Expected type (str, bool, list, dict) or tuple of types for union
        required: Whether the field is required
        default: Default value if not provided
        description: Human-readable description
    """

    name: str
    field_type: type | tuple[type, ...] = str
    required: bool = False
    default: Any = None
    description: str = ""

    @property
    def type_name(self) -> str:
        """Return human-readable type name."""
        if isinstance(self.field_type, tuple):
            return " or ".join(typ.__name__ for typ in self.field_type)
        return self.field_type.__name__


class ConfigItems(list):
    """A list of ConfigField items with lookup by name."""

    def __init__(self, *args: ConfigField) -> None:
        super().__init__(args)

    def get(self, name: str) -> ConfigField | None:
        """Get a ConfigField by name.

        Args:
            name: The field name to look up

        Returns:
            The ConfigField if found, None otherwise
        """
        for prop in self:
            if prop.name == name:
                return prop
        return None


ROOT_SCHEMA = ConfigItems(
    ConfigField("configurations", list, required=True, description="Monitor setups, first match wins"),
    ConfigField("settings", dict, description="Global options"),
    ConfigField("include", list, description="Extra files merged after this one"),
)

SETTINGS_SCHEMA = ConfigItems(
    ConfigField("bspc", str, default="bspc", description="bspwm control executable"),
    ConfigField("remove_unlisted", bool, default=True, description="Remove desktops no layout names"),
    ConfigField("reorder", bool, default=True, description="Reorder desktops to the layout order"),
)

CONFIGURATION_SCHEMA = ConfigItems(
    ConfigField("name", str, required=True, description="Configuration name"),
    ConfigField("monitors", list, required=True, description="Monitor names making this configuration active"),
    ConfigField("layouts", list, description="Desktops wanted on each monitor"),
    ConfigField("remove_unlisted", bool, description="Overrides settings.remove_unlisted"),
    ConfigField("reorder", bool, description="Overrides settings.reorder"),
)

LAYOUT_SCHEMA = ConfigItems(
    ConfigField("monitor", str, required=True, description="Monitor name"),
    ConfigField("desktops", list, required=True, description="Desktop names, in order"),
)


def _find_similar_key(unknown_key: str, known_keys: list[str]) -> str | None:
    """Find a similar key using fuzzy matching.

    Args:
        unknown_key: The unknown key to find a match for
        known_keys: List of valid keys to search

    Returns:
        The closest matching key, or None if no close match found
    """
    matches = difflib.get_close_matches(unknown_key, known_keys, n=1)
    if matches:
        return matches[0]
    return None


def format_config_error(section: str, field: str, message: str, suggestion: str = "") -> str:
    """Format a configuration error message.

    Args:
        section: Location of the faulty mapping (eg: "configurations[0]")
        field: Field name that has the error
        message: Error description
        suggestion: Optional suggestion for fixing the error

    Returns:
        Formatted error message
    """
    msg = f"[{section}] Config error for '{field}': {message}"
    if suggestion:
        msg += f" -> {suggestion}"
    return msg


class ConfigValidator:
    """Validates one mapping against a schema."""

    def __init__(self, config: dict, section: str, logger: logging.Logger) -> None:
        """Initialize the validator.

        Args:
            config: The mapping to validate
            section: Location of the mapping, for error messages
            logger: Logger instance for warnings
        """
        self.config = config
        self.section = section
        self.log = logger

    def validate(self, schema: ConfigItems) -> list[str]:
        """Validate the mapping against schema.

        Args:
            schema: List of ConfigField definitions

        Returns:
            List of error messages (empty if validation passed)
        """
        errors = []

        for field_def in schema:
            value = self.config.get(field_def.name)

            if field_def.required and value is None:
                errors.append(
                    format_config_error(
                        self.section,
                        field_def.name,
                        "Missing required field",
                        self._get_required_suggestion(field_def),
                    )
                )
                continue

            if value is None:
                continue

            type_error = self._check_type(field_def, value)
            if type_error:
                errors.append(type_error)

        return errors

    def _check_type(self, field_def: ConfigField, value: Any) -> str | None:  # noqa: ANN401
        """Check if value matches expected type.

        Args:
            field_def: Field definition
            value: Value to check

        Returns:
            Error message if type mismatch, None otherwise
        """
        expected_type = field_def.field_type
        if isinstance(expected_type, tuple):
            if any(self._check_type(ConfigField(field_def.name, typ), value) is None for typ in expected_type):
                return None
            return format_config_error(
                self.section,
                field_def.name,
                f"Expected {field_def.type_name}, got {type(value).__name__}",
            )

        if expected_type is bool:
            if isinstance(value, bool) or (isinstance(value, str) and value.lower() in BOOL_STRINGS):
                return None
            return format_config_error(
                self.section,
                field_def.name,
                f"Expected bool, got {type(value).__name__}",
                "Use true/false (without quotes)",
            )
        if expected_type is str:
            if isinstance(value, str):
                return None
            return format_config_error(
                self.section,
                field_def.name,
                f"Expected str, got {type(value).__name__}",
                f'Use {field_def.name}: "value"',
            )
        if expected_type is list:
            if isinstance(value, list):
                return None
            return format_config_error(
                self.section,
                field_def.name,
                f"Expected list, got {type(value).__name__}",
                f"Use {field_def.name}: [item1, item2]",
            )
        if expected_type is dict and not isinstance(value, dict):
            return format_config_error(
                self.section,
                field_def.name,
                f"Expected mapping, got {type(value).__name__}",
            )
        return None

    def _get_required_suggestion(self, field_def: ConfigField) -> str:
        """Generate suggestion for a missing required field."""
        if field_def.field_type is list:
            return f"Add {field_def.name}: [item] to {self.section}"
        if field_def.field_type is str:
            return f'Add {field_def.name}: "value" to {self.section}'
        return f"Add '{field_def.name}' to {self.section}"

    def warn_unknown_keys(self, schema: ConfigItems) -> list[str]:
        """Log warnings for unknown configuration keys.

        Args:
            schema: List of ConfigField definitions

        Returns:
            List of warning messages
        """
        warnings = []
        known_keys = [f.name for f in schema]

        for key in self.config:
            if key in known_keys:
                continue

            similar = _find_similar_key(str(key), known_keys)
            if similar:
                msg = f"[{self.section}] Unknown option '{key}' (did you mean '{similar}'?)"
            else:
                msg = f"[{self.section}] Unknown option '{key}' - will be ignored"

            self.log.warning(msg)
            warnings.append(msg)

        return warnings


def _string_items(section: str, field: str, values: list) -> list[str]:
    """Return errors for non-string entries of a name list."""
    return [
        format_config_error(section, field, f"Expected a name, got {type(item).__name__} {item!r}")
        for item in values
        if not isinstance(item, str)
    ]


def _duplicates(values: list) -> list[str]:
    return [str(name) for name, count in Counter(str(v) for v in values).items() if count > 1]


def _validate_layout(layout: Any, section: str, monitors: list, log: logging.Logger) -> tuple[list[str], list[str]]:  # noqa: ANN401
    if not isinstance(layout, dict):
        return [format_config_error(section, "layout", f"Expected mapping, got {type(layout).__name__}")], []

    validator = ConfigValidator(layout, section, log)
    errors = validator.validate(LAYOUT_SCHEMA)
    warnings = validator.warn_unknown_keys(LAYOUT_SCHEMA)
    if errors:
        return errors, warnings

    errors.extend(_string_items(section, "desktops", layout["desktops"]))
    if layout["monitor"] not in monitors:
        errors.append(
            format_config_error(
                section,
                "monitor",
                f"'{layout['monitor']}' is not part of this configuration's monitors",
                f"Add it to monitors or fix the name (known: {', '.join(str(m) for m in monitors)})",
            )
        )
    return errors, warnings


def _validate_configuration(conf: Any, section: str, log: logging.Logger) -> tuple[list[str], list[str]]:  # noqa: ANN401
    if not isinstance(conf, dict):
        return [format_config_error(section, "configuration", f"Expected mapping, got {type(conf).__name__}")], []

    validator = ConfigValidator(conf, section, log)
    errors = validator.validate(CONFIGURATION_SCHEMA)
    warnings = validator.warn_unknown_keys(CONFIGURATION_SCHEMA)
    if errors:
        return errors, warnings

    monitors = conf["monitors"]
    errors.extend(_string_items(section, "monitors", monitors))
    if not monitors:
        errors.append(format_config_error(section, "monitors", "At least one monitor is required"))
    for dup in _duplicates(monitors):
        errors.append(format_config_error(section, "monitors", f"Monitor '{dup}' is listed more than once"))

    all_desktops: list = []
    layout_monitors: list = []
    for index, layout in enumerate(conf.get("layouts") or []):
        lay_errors, lay_warnings = _validate_layout(layout, f"{section}.layouts[{index}]", monitors, log)
        errors.extend(lay_errors)
        warnings.extend(lay_warnings)
        if not lay_errors:
            all_desktops.extend(layout["desktops"])
            layout_monitors.append(layout["monitor"])

    for dup in _duplicates(layout_monitors):
        errors.append(format_config_error(section, "layouts", f"Monitor '{dup}' has more than one layout"))
    for dup in _duplicates(all_desktops):
        errors.append(format_config_error(section, "layouts", f"Desktop '{dup}' is listed more than once"))
    return errors, warnings


def validate_document(raw: Any, log: logging.Logger) -> tuple[list[str], list[str]]:  # noqa: ANN401
    """Validate a whole configuration document.

    Args:
        raw: The parsed file content
        log: Logger receiving the warnings

    Returns:
        Tuple of (errors, warnings)
    """
    if not isinstance(raw, dict):
        return [format_config_error("root", "document", f"Expected mapping, got {type(raw).__name__}")], []

    validator = ConfigValidator(raw, "root", log)
    errors = validator.validate(ROOT_SCHEMA)
    warnings = validator.warn_unknown_keys(ROOT_SCHEMA)

    settings = raw.get("settings")
    if isinstance(settings, dict):
        settings_validator = ConfigValidator(settings, "settings", log)
        errors.extend(settings_validator.validate(SETTINGS_SCHEMA))
        warnings.extend(settings_validator.warn_unknown_keys(SETTINGS_SCHEMA))

    configurations = raw.get("configurations")
    if not isinstance(configurations, list):
        return errors, warnings
    if not configurations:
        errors.append(format_config_error("root", "configurations", "No configuration defined"))

    names = []
    monitor_sets: dict[frozenset, str] = {}
    for index, conf in enumerate(configurations):
        conf_errors, conf_warnings = _validate_configuration(conf, f"configurations[{index}]", log)
        errors.extend(conf_errors)
        warnings.extend(conf_warnings)
        if conf_errors:
            continue
        names.append(conf["name"])
        key = frozenset(conf["monitors"])
        if key in monitor_sets:
            msg = f"[configurations[{index}]] '{conf['name']}' uses the same monitors as '{monitor_sets[key]}' and will never be selected"
            log.warning(msg)
            warnings.append(msg)
        else:
            monitor_sets[key] = conf["name"]

    for dup in _duplicates(names):
        errors.append(format_config_error("configurations", "name", f"Name '{dup}' is used more than once"))

    return errors, warnings
