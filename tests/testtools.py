from logging import Logger

from bsplayout.adapters.backend import WindowManagerBackend
from bsplayout.models import BsplayoutError, ExitCode


class FakeBspwm(WindowManagerBackend):
    "In-memory bspwm: monitors holding ordered desktop names"

    def __init__(self, monitors: dict[str, list[str]], fail_on=()):
        self.monitors = {name: list(desktops) for name, desktops in monitors.items()}
        self.fail_on = {tuple(args) for args in fail_on}
        self.calls: list[list[str]] = []
        self.query_error = False

    async def get_monitors(self, *, log: Logger) -> list[str]:
        if self.query_error:
            raise BsplayoutError("query failed", ExitCode.BACKEND_ERROR)
        return list(self.monitors)

    async def get_desktops(self, monitor: str, *, log: Logger) -> list[str]:
        if self.query_error:
            raise BsplayoutError("query failed", ExitCode.BACKEND_ERROR)
        return list(self.monitors[monitor])

    def _locate(self, desktop):
        for name, desktops in self.monitors.items():
            if desktop in desktops:
                return name
        return None

    async def execute(self, args: list[str], *, log: Logger) -> bool:
        self.calls.append(list(args))
        if tuple(args) in self.fail_on:
            log.error("fake failure: %s", args)
            return False
        match args:
            case ["monitor", monitor, "-a", desktop]:
                self.monitors[monitor].append(desktop)
            case ["desktop", desktop, "-m", monitor]:
                source = self._locate(desktop)
                if source is None or len(self.monitors[source]) == 1:
                    return False
                self.monitors[source].remove(desktop)
                self.monitors[monitor].append(desktop)
            case ["monitor", monitor, "-o", *order]:
                current = self.monitors[monitor]
                listed = [d for d in order if d in current]
                self.monitors[monitor] = listed + [d for d in current if d not in listed]
            case ["desktop", desktop, "-r"]:
                source = self._locate(desktop)
                if source is None or len(self.monitors[source]) == 1:
                    return False
                self.monitors[source].remove(desktop)
            case _:
                raise AssertionError(f"unexpected command {args}")
        return True
