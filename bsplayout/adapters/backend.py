"""Backend adapter interface."""

from abc import ABC, abstractmethod
from logging import Logger

from ..models import DesktopState


class WindowManagerBackend(ABC):
    """Abstract base class for window manager backends.

    All methods that perform logging require a `log` parameter to be passed,
    so the caller decides which logger reports the failures.
    """

    @abstractmethod
    async def get_monitors(self, *, log: Logger) -> list[str]:
        """Return the names of the plugged monitors.

        Args:
            log: Logger to use for this operation

        Raises:
            BsplayoutError: If the window manager can't be queried
        """

    @abstractmethod
    async def get_desktops(self, monitor: str, *, log: Logger) -> list[str]:
        """Return the desktop names of `monitor`, in order.

        Args:
            monitor: Monitor name
            log: Logger to use for this operation

        Raises:
            BsplayoutError: If the window manager can't be queried
        """

    @abstractmethod
    async def execute(self, args: list[str], *, log: Logger) -> bool:
        """Run one control command.

        Args:
            args: Arguments passed to the control executable
            log: Logger to use for this operation

        Returns:
            True on success. Failures are logged, never raised.
        """

    async def get_state(self, monitors: list[str] | None = None, *, log: Logger) -> DesktopState:
        """Return the desktops of every monitor.

        Args:
            monitors: Monitors to query, all plugged monitors if not set
            log: Logger to use for this operation
        """
        if monitors is None:
            monitors = await self.get_monitors(log=log)
        state = DesktopState()
        for monitor in monitors:
            state.monitors[monitor] = await self.get_desktops(monitor, log=log)
        return state
