"""CLI validation entry point for bsplayout configuration."""

import logging

from .config_loader import ConfigLoader
from .models import ExitCode
from .validation import validate_document

__all__ = ["run_validate"]


async def run_validate(loader: ConfigLoader, config_filename: str = "") -> ExitCode:
    """Validate the configuration file without touching the window manager.

    Args:
        loader: Loader used to read the file(s)
        config_filename: Optional path overriding the default location

    Returns:
        SUCCESS when there is no error, USAGE_ERROR otherwise

    Raises:
        BsplayoutError: If the file can't be read or parsed
    """
    raw = await loader.load_raw(config_filename)

    silent_logger = logging.getLogger("bsplayout.validate.silent")
    if not silent_logger.handlers:
        silent_logger.addHandler(logging.NullHandler())
    silent_logger.propagate = False
    errors, warnings = validate_document(raw, silent_logger)

    print(f"Validating {loader.source}...\n")
    for error in errors:
        print(f"  ERROR: {error}")
    for warning in warnings:
        print(f"  WARNING: {warning}")
    if errors or warnings:
        print()

    configurations = raw.get("configurations") if isinstance(raw.get("configurations"), list) else []
    if errors:
        print(f"Found {len(errors)} error(s) and {len(warnings)} warning(s)")
        return ExitCode.USAGE_ERROR
    if warnings:
        print(f"Found {len(warnings)} warning(s) in {len(configurations)} configuration(s)")
        return ExitCode.SUCCESS
    print(f"Configuration is valid! ({len(configurations)} configuration(s))")
    return ExitCode.SUCCESS
