"""Data model: configurations read from the user file and the observed desktop state."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import IntEnum, StrEnum

from .constants import DEFAULT_BSPC

__all__ = [
    "Action",
    "ActionKind",
    "ApplyReport",
    "BsplayoutError",
    "Configuration",
    "ConfigurationSet",
    "DesktopState",
    "ExitCode",
    "Layout",
    "Settings",
]


class BsplayoutError(Exception):
    """Used for errors which already triggered logging."""

    exit_code: "ExitCode"

    def __init__(self, message: str = "", exit_code: "ExitCode | None" = None) -> None:
        super().__init__(message)
        self.exit_code = exit_code if exit_code is not None else ExitCode.CONFIG_ERROR


class ExitCode(IntEnum):
    """Process exit codes."""

    SUCCESS = 0
    USAGE_ERROR = 1  # Bad arguments, invalid configuration on `validate`
    CONFIG_ERROR = 2  # Configuration missing or unreadable
    NO_MATCH = 3  # No configuration for the plugged monitors
    ACTION_ERROR = 4  # Some reconciliation commands failed
    BACKEND_ERROR = 5  # The window manager could not be queried


@dataclass
class Layout:
    """Desktops wanted on one monitor, in order."""

    monitor: str
    desktops: list[str] = field(default_factory=list)


@dataclass
class Configuration:
    """A named layout set, active when exactly `monitors` are plugged."""

    name: str
    monitors: list[str]
    layouts: list[Layout] = field(default_factory=list)
    remove_unlisted: bool | None = None
    reorder: bool | None = None

    def desired_monitor(self) -> dict[str, str]:
        """Map every desktop named by a layout to the monitor it belongs on."""
        wanted: dict[str, str] = {}
        for layout in self.layouts:
            for desktop in layout.desktops:
                wanted.setdefault(desktop, layout.monitor)
        return wanted

    def to_dict(self) -> dict:
        """Return a plain representation, suitable for dumping."""
        data: dict = {
            "name": self.name,
            "monitors": list(self.monitors),
            "layouts": [{"monitor": lay.monitor, "desktops": list(lay.desktops)} for lay in self.layouts],
        }
        if self.remove_unlisted is not None:
            data["remove_unlisted"] = self.remove_unlisted
        if self.reorder is not None:
            data["reorder"] = self.reorder
        return data


@dataclass
class Settings:
    """Global options, some of them overridable per configuration."""

    bspc: str = DEFAULT_BSPC
    remove_unlisted: bool = True
    reorder: bool = True

    def for_configuration(self, configuration: Configuration) -> "Settings":
        """Return the settings with `configuration`'s overrides applied."""
        return Settings(
            bspc=self.bspc,
            remove_unlisted=self.remove_unlisted if configuration.remove_unlisted is None else configuration.remove_unlisted,
            reorder=self.reorder if configuration.reorder is None else configuration.reorder,
        )


@dataclass
class ConfigurationSet:
    """Every configuration of the file, in file order."""

    configurations: list[Configuration] = field(default_factory=list)
    settings: Settings = field(default_factory=Settings)

    def __iter__(self) -> Iterator[Configuration]:
        return iter(self.configurations)

    def __len__(self) -> int:
        return len(self.configurations)


@dataclass
class DesktopState:
    """Desktops currently on each monitor, in the window manager's order."""

    monitors: dict[str, list[str]] = field(default_factory=dict)

    def locate(self, desktop: str) -> str | None:
        """Return the first monitor holding `desktop`, if any."""
        for monitor, desktops in self.monitors.items():
            if desktop in desktops:
                return monitor
        return None

    def copy(self) -> "DesktopState":
        """Return an independent copy."""
        return DesktopState({name: list(desktops) for name, desktops in self.monitors.items()})


class ActionKind(StrEnum):
    """Reconciliation steps."""

    ADD = "add"
    MOVE = "move"
    REORDER = "reorder"
    REMOVE = "remove"


@dataclass(frozen=True)
class Action:
    """One call to the control executable."""

    kind: ActionKind
    monitor: str = ""
    desktop: str = ""
    order: tuple[str, ...] = ()

    def to_args(self) -> list[str]:
        """Return the bspc argument vector (without the executable)."""
        match self.kind:
            case ActionKind.ADD:
                return ["monitor", self.monitor, "-a", self.desktop]
            case ActionKind.MOVE:
                return ["desktop", self.desktop, "-m", self.monitor]
            case ActionKind.REORDER:
                return ["monitor", self.monitor, "-o", *self.order]
            case ActionKind.REMOVE:
                return ["desktop", self.desktop, "-r"]
        msg = f"unknown action {self.kind}"
        raise ValueError(msg)

    def describe(self) -> str:
        """Return a short human readable description."""
        match self.kind:
            case ActionKind.ADD:
                return f"add desktop {self.desktop} to {self.monitor}"
            case ActionKind.MOVE:
                return f"move desktop {self.desktop} to {self.monitor}"
            case ActionKind.REORDER:
                return f"reorder {self.monitor}: {' '.join(self.order)}"
            case ActionKind.REMOVE:
                return f"remove desktop {self.desktop}"
        return str(self.kind)


@dataclass
class ApplyReport:
    """Outcome of a plan execution."""

    applied: list[Action] = field(default_factory=list)
    failed: list[Action] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True if no action failed."""
        return not self.failed
