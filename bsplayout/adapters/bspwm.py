"""bspwm backend, driving the `bspc` executable."""

import asyncio
import shlex
from logging import Logger

from ..constants import DEFAULT_BSPC
from ..models import BsplayoutError, ExitCode
from .backend import WindowManagerBackend


class BspwmBackend(WindowManagerBackend):
    """Query and change bspwm's desktops using `bspc`."""

    def __init__(self, bspc: str = DEFAULT_BSPC) -> None:
        """Initialize the backend.

        Args:
            bspc: Control executable, may include extra arguments
        """
        self.command = shlex.split(bspc)

    async def _run(self, args: list[str], *, log: Logger) -> tuple[int, str, str]:
        """Run the control executable and collect its output.

        Raises:
            OSError: If the executable can't be started
        """
        full_command = [*self.command, *args]
        log.debug("Running %s", shlex.join(full_command))
        proc = await asyncio.create_subprocess_exec(
            *full_command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        stdout, stderr = await proc.communicate()
        returncode = -1 if proc.returncode is None else proc.returncode
        return returncode, stdout.decode(), stderr.decode()

    async def query_list(self, args: list[str], *, log: Logger) -> list[str]:
        """Return the lines printed by a query command.

        Args:
            args: Query arguments
            log: Logger to use for this operation

        Raises:
            BsplayoutError: If the command can't be run or fails
        """
        command_line = shlex.join([*self.command, *args])
        try:
            returncode, stdout, stderr = await self._run(args, log=log)
        except OSError as e:
            log.critical("Cannot run %s: %s", command_line, e)
            raise BsplayoutError(str(e), ExitCode.BACKEND_ERROR) from e

        if returncode != 0:
            log.critical("%s failed (%d): %s", command_line, returncode, stderr.strip())
            msg = f"{command_line} exited with {returncode}"
            raise BsplayoutError(msg, ExitCode.BACKEND_ERROR)

        return [line.strip() for line in stdout.strip().splitlines() if line.strip()]

    async def get_monitors(self, *, log: Logger) -> list[str]:
        """Return the names of the plugged monitors.

        Args:
            log: Logger to use for this operation
        """
        return await self.query_list(["query", "-M", "--names"], log=log)

    async def get_desktops(self, monitor: str, *, log: Logger) -> list[str]:
        """Return the desktop names of `monitor`, in order.

        Args:
            monitor: Monitor name
            log: Logger to use for this operation
        """
        return await self.query_list(["query", "-D", "-m", monitor, "--names"], log=log)

    async def execute(self, args: list[str], *, log: Logger) -> bool:
        """Run one control command, logging failures.

        Args:
            args: Arguments passed to bspc
            log: Logger to use for this operation
        """
        command_line = shlex.join([*self.command, *args])
        try:
            returncode, _stdout, stderr = await self._run(args, log=log)
        except OSError as e:
            log.error("Cannot run %s: %s", command_line, e)
            return False
        if returncode != 0:
            log.error("%s failed (%d): %s", command_line, returncode, stderr.strip())
            return False
        return True
