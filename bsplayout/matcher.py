"""Selection of the configuration matching the plugged monitors."""

from collections.abc import Iterable
from logging import Logger

from .models import BsplayoutError, Configuration, ConfigurationSet, ExitCode

__all__ = ["find_active_configuration", "find_configuration", "monitors_match"]


def monitors_match(configuration: Configuration, monitors: Iterable[str]) -> bool:
    """Return True if `configuration` was written for exactly `monitors`, in any order."""
    return set(configuration.monitors) == set(monitors)


def find_configuration(config_set: ConfigurationSet, monitors: Iterable[str]) -> Configuration | None:
    """Return the first configuration matching `monitors`, None if there is none."""
    detected = set(monitors)
    for configuration in config_set:
        if monitors_match(configuration, detected):
            return configuration
    return None


def find_active_configuration(config_set: ConfigurationSet, monitors: list[str], *, log: Logger) -> Configuration:
    """Return the configuration to apply for the plugged `monitors`.

    Args:
        config_set: Every known configuration, in file order
        monitors: Detected monitor names
        log: Logger to use for this operation

    Raises:
        BsplayoutError: If no configuration matches
    """
    configuration = find_configuration(config_set, monitors)
    if configuration is None:
        log.critical("Could not find any configuration for the plugged monitors: %s", ", ".join(sorted(monitors)) or "(none)")
        msg = "no matching configuration"
        raise BsplayoutError(msg, ExitCode.NO_MATCH)
    log.info('Using configuration "%s"', configuration.name)
    return configuration
