"""Terminal colors for log records and printed plans.

Colors are off when NO_COLOR is set or the stream is not a terminal,
FORCE_COLOR turns them back on for pipes.
"""

import logging
import os
import shlex
import sys
from typing import TextIO

from .models import Action, ActionKind

__all__ = [
    "ACTION_STYLES",
    "LEVEL_STYLES",
    "colorize",
    "format_action",
    "should_colorize",
]

_ESC = "\x1b["

RESET = f"{_ESC}0m"

BOLD = "1"
DIM = "2"

RED = "31"
GREEN = "32"
YELLOW = "33"
CYAN = "36"

LEVEL_STYLES: dict[int, tuple[str, ...]] = {
    logging.WARNING: (YELLOW, DIM),
    logging.ERROR: (RED, DIM),
    logging.CRITICAL: (RED, BOLD),
}

ACTION_STYLES: dict[ActionKind, tuple[str, ...]] = {
    ActionKind.ADD: (GREEN,),
    ActionKind.MOVE: (YELLOW,),
    ActionKind.REORDER: (CYAN,),
    ActionKind.REMOVE: (RED,),
}


def should_colorize(stream: TextIO | None = None) -> bool:
    """Tell whether `stream` (stderr by default) gets colors."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    if stream is None:
        stream = sys.stderr
    return hasattr(stream, "isatty") and stream.isatty()


def colorize(text: str, *codes: str) -> str:
    """Wrap text in the given ANSI codes, unchanged when there is none."""
    if not codes:
        return text
    return f"{_ESC}{';'.join(codes)}m{text}{RESET}"


def format_action(action: Action, command: str = "bspc", colors: bool = False) -> str:
    """Return the command line running `action`.

    Args:
        action: The planned action
        command: Control executable, printed as is
        colors: Color the line according to the action kind
    """
    line = f"{command} {shlex.join(action.to_args())}"
    if colors:
        return colorize(line, *ACTION_STYLES[action.kind])
    return line
