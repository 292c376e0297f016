"""bsplayout - command line entry point."""

import asyncio
import sys
from dataclasses import dataclass

import yaml

from .adapters import BspwmBackend, DryRunBackend, WindowManagerBackend
from .ansi import format_action, should_colorize
from .config_loader import ConfigLoader
from .logging_setup import get_logger, init_logger
from .matcher import find_active_configuration, find_configuration
from .models import BsplayoutError, ConfigurationSet, ExitCode
from .reconcile import plan_reconciliation, reconcile
from .validate_cli import run_validate

__all__ = ["main", "parse_args", "parse_debug_option"]

USAGE = """Syntax: bsplayout [options] [command]

Matches the plugged monitors against the configured layouts and
rearranges the bspwm desktops accordingly.

Commands:
 apply                Apply the matching configuration (default)
 plan                 Print the bspc commands `apply` would run
 dump                 Print the matching configuration
 monitors             Print the plugged monitors and their desktops
 validate             Check the configuration file
 help                 Print this help message

Options:
 --config <path>      Use a different configuration file or directory
 --debug [<logfile>]  Enable debug logs, also written to <logfile>
                      (without <logfile>, --debug must come last)
 --dry-run            Print the bspc commands instead of running them
"""

COMMANDS = ("apply", "plan", "dump", "monitors", "validate", "help")


@dataclass
class CliOptions:
    """Parsed command line."""

    command: str = "apply"
    config: str = ""
    dry_run: bool = False


def use_param(argv: list[str], txt: str) -> str:
    """Check if parameter `txt` is in argv.

    if found, removes it from argv & returns the argument value
    """
    v = ""
    if txt in argv:
        i = argv.index(txt)
        if i + 1 >= len(argv):
            msg = f"{txt} requires a value"
            raise BsplayoutError(msg, ExitCode.USAGE_ERROR)
        v = argv[i + 1]
        del argv[i : i + 2]
    return v


def use_flag(argv: list[str], txt: str) -> bool:
    """Check if flag `txt` is in argv, removing it."""
    if txt in argv:
        argv.remove(txt)
        return True
    return False


class Bsplayout:
    """Main app object: loads the configuration and drives the backend."""

    def __init__(self, options: CliOptions) -> None:
        self.options = options
        self.log = get_logger("bsplayout")
        self.loader = ConfigLoader(get_logger("config"))
        self.config_set: ConfigurationSet | None = None
        self.backend: WindowManagerBackend | None = None

    async def load_config(self) -> ConfigurationSet:
        """Load the configuration file and create the backend."""
        self.config_set = await self.loader.load(self.options.config)
        backend: WindowManagerBackend = BspwmBackend(self.config_set.settings.bspc)
        if self.options.dry_run:
            backend = DryRunBackend(backend, prefix=self.config_set.settings.bspc)
        self.backend = backend
        return self.config_set

    async def run(self) -> ExitCode:
        """Run the requested command."""
        handler = getattr(self, f"run_{self.options.command}")
        return await handler()

    async def _select(self) -> tuple[ConfigurationSet, WindowManagerBackend, list[str]]:
        config_set = await self.load_config()
        assert self.backend is not None
        monitors = await self.backend.get_monitors(log=self.log)
        self.log.debug("Plugged monitors: %s", monitors)
        return config_set, self.backend, monitors

    async def run_apply(self) -> ExitCode:
        """Apply the matching configuration."""
        config_set, backend, monitors = await self._select()
        configuration = find_active_configuration(config_set, monitors, log=self.log)
        report = await reconcile(configuration, backend, config_set.settings, log=self.log)
        return ExitCode.SUCCESS if report.ok else ExitCode.ACTION_ERROR

    async def run_plan(self) -> ExitCode:
        """Print the commands `apply` would run."""
        config_set, backend, monitors = await self._select()
        configuration = find_active_configuration(config_set, monitors, log=self.log)
        state = await backend.get_state(configuration.monitors, log=self.log)
        plan = plan_reconciliation(configuration, state, config_set.settings, log=self.log)
        use_colors = should_colorize(sys.stdout)
        print(f"# configuration: {configuration.name}")
        if not plan:
            print("# nothing to do")
        for action in plan:
            print(format_action(action, config_set.settings.bspc, colors=use_colors))
        return ExitCode.SUCCESS

    async def run_dump(self) -> ExitCode:
        """Print the configuration matching the plugged monitors."""
        config_set, _backend, monitors = await self._select()
        configuration = find_active_configuration(config_set, monitors, log=self.log)
        print(yaml.safe_dump(configuration.to_dict(), sort_keys=False), end="")
        return ExitCode.SUCCESS

    async def run_monitors(self) -> ExitCode:
        """Print the plugged monitors with their desktops."""
        config_set, backend, monitors = await self._select()
        state = await backend.get_state(monitors, log=self.log)
        for monitor, desktops in state.monitors.items():
            print(f"{monitor}: {' '.join(desktops)}")
        configuration = find_configuration(config_set, monitors)
        print(f"# configuration: {configuration.name if configuration else '(none)'}")
        return ExitCode.SUCCESS

    async def run_validate(self) -> ExitCode:
        """Check the configuration file."""
        return await run_validate(self.loader, self.options.config)

    async def run_help(self) -> ExitCode:
        """Print the help message."""
        print(USAGE, end="")
        return ExitCode.SUCCESS


def parse_args(argv: list[str]) -> CliOptions:
    """Build the options from the command line (without the program name).

    Raises:
        BsplayoutError: On unknown commands or missing option values
    """
    args = list(argv)
    options = CliOptions()
    options.config = use_param(args, "--config")
    options.dry_run = use_flag(args, "--dry-run")
    if use_flag(args, "--help") or use_flag(args, "-h"):
        args.insert(0, "help")
    if args:
        options.command = args[0].replace("-", "_")
        if options.command not in COMMANDS or len(args) > 1:
            msg = f"unexpected arguments: {' '.join(args)}"
            raise BsplayoutError(msg, ExitCode.USAGE_ERROR)
    return options


def parse_debug_option(argv: list[str]) -> str | None:
    """Remove `--debug [logfile]` from argv.

    Returns:
        None without `--debug`, the log file name otherwise ("" when the option ends the command line)

    Raises:
        BsplayoutError: If the log file name is a command
    """
    if argv[-1:] == ["--debug"]:
        argv.pop()
        return ""
    if "--debug" not in argv:
        return None
    debug_file = use_param(argv, "--debug")
    if debug_file in COMMANDS:
        msg = f"--debug expects a log file, got the command '{debug_file}' (put --debug last to skip the log file)"
        raise BsplayoutError(msg, ExitCode.USAGE_ERROR)
    return debug_file


def main() -> None:
    """Run the command."""
    argv = sys.argv[1:]
    try:
        debug_file = parse_debug_option(argv)
        options = parse_args(argv)
    except BsplayoutError as e:
        init_logger()
        get_logger("startup").critical("%s", e)
        print(USAGE, end="", file=sys.stderr)
        sys.exit(e.exit_code)

    init_logger(filename=debug_file or None, force_debug=debug_file is not None)
    log = get_logger("startup")

    try:
        code = asyncio.run(Bsplayout(options).run())
    except KeyboardInterrupt:
        code = ExitCode.USAGE_ERROR
    except BsplayoutError as e:
        log.debug("Command failed: %s", e)
        code = e.exit_code
    except Exception:  # pylint: disable=W0718
        log.critical("Unhandled exception:", exc_info=True)
        code = ExitCode.USAGE_ERROR
    sys.exit(code)


if __name__ == "__main__":
    main()
