"""Dry-run backend: queries go to the real window manager, changes are only printed."""

import shlex
from logging import Logger

from .backend import WindowManagerBackend


class DryRunBackend(WindowManagerBackend):
    """Wraps a backend and records commands instead of running them."""

    def __init__(self, backend: WindowManagerBackend, prefix: str = "bspc") -> None:
        self.backend = backend
        self.prefix = prefix
        self.executed: list[list[str]] = []

    async def get_monitors(self, *, log: Logger) -> list[str]:
        return await self.backend.get_monitors(log=log)

    async def get_desktops(self, monitor: str, *, log: Logger) -> list[str]:
        return await self.backend.get_desktops(monitor, log=log)

    async def execute(self, args: list[str], *, log: Logger) -> bool:
        """Print the command line and report success."""
        self.executed.append(list(args))
        line = shlex.join([self.prefix, *args])
        log.info("dry-run: %s", line)
        print(line)
        return True
