"""Backend adapters for the window manager control surface.

The reconciliation code only talks to a WindowManagerBackend; BspwmBackend
drives the real `bspc` executable and DryRunBackend prints what would be run.
"""

from .backend import WindowManagerBackend
from .bspwm import BspwmBackend
from .dryrun import DryRunBackend

__all__ = ["BspwmBackend", "DryRunBackend", "WindowManagerBackend"]
