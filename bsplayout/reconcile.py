"""Reconciliation of the window manager desktops with a configuration.

Planning is pure: `plan_reconciliation` simulates every action on a copy of
the observed state, so the plan only holds the steps that change something.
Running a plan against an already converged state is a no-op.

The order of the steps matters for bspwm, which refuses to leave a monitor
without any desktop:

1. add the missing desktops on their monitor
2. move the misplaced ones, preferably from monitors holding other desktops.
   When only moves emptying their monitor remain, a placeholder desktop is
   added there first and removed once the monitor holds another desktop
3. remove the desktops no layout names (never the last one of a monitor)
4. reorder each monitor to match its layout
"""

from logging import Logger

from .adapters.backend import WindowManagerBackend
from .models import Action, ActionKind, ApplyReport, Configuration, DesktopState, Settings

__all__ = ["PLACEHOLDER_DESKTOP", "apply_plan", "plan_reconciliation", "reconcile"]


def _plan_additions(configuration: Configuration, sim: DesktopState) -> list[Action]:
    actions = []
    for layout in configuration.layouts:
        for desktop in layout.desktops:
            if sim.locate(desktop) is None:
                actions.append(Action(ActionKind.ADD, monitor=layout.monitor, desktop=desktop))
                sim.monitors[layout.monitor].append(desktop)
    return actions


PLACEHOLDER_DESKTOP = "bsplayout-tmp"


def _placeholder_name(configuration: Configuration, sim: DesktopState) -> str:
    taken = set(configuration.desired_monitor())
    for desktops in sim.monitors.values():
        taken.update(desktops)
    name = PLACEHOLDER_DESKTOP
    index = 1
    while name in taken:
        name = f"{PLACEHOLDER_DESKTOP}-{index}"
        index += 1
    return name


def _plan_moves(configuration: Configuration, sim: DesktopState, placeholders: list[str]) -> list[Action]:
    pending = [
        (desktop, layout.monitor)
        for layout in configuration.layouts
        for desktop in layout.desktops
        if sim.locate(desktop) != layout.monitor
    ]
    actions = []

    while pending:
        movable = [item for item in pending if len(sim.monitors[sim.locate(item[0]) or item[1]]) > 1]
        if movable:
            item = movable[0]
        else:
            # every remaining move empties its monitor: give it a placeholder first
            item = pending[0]
            source = sim.locate(item[0])
            assert source is not None
            placeholder = _placeholder_name(configuration, sim)
            sim.monitors[source].append(placeholder)
            placeholders.append(placeholder)
            actions.append(Action(ActionKind.ADD, monitor=source, desktop=placeholder))
        pending.remove(item)
        desktop, target = item
        source = sim.locate(desktop)
        assert source is not None
        sim.monitors[source].remove(desktop)
        sim.monitors[target].append(desktop)
        actions.append(Action(ActionKind.MOVE, monitor=target, desktop=desktop))
    return actions


def _plan_placeholder_removals(placeholders: list[str], sim: DesktopState) -> list[Action]:
    actions = []
    for placeholder in placeholders:
        monitor = sim.locate(placeholder)
        # still the only desktop of a monitor no layout fills
        if monitor is None or len(sim.monitors[monitor]) == 1:
            continue
        sim.monitors[monitor].remove(placeholder)
        actions.append(Action(ActionKind.REMOVE, monitor=monitor, desktop=placeholder))
    return actions


def _plan_removals(wanted: dict[str, str], sim: DesktopState, log: Logger | None) -> list[Action]:
    actions = []
    for monitor, desktops in sim.monitors.items():
        for desktop in list(desktops):
            if desktop in wanted:
                continue
            if len(desktops) == 1:
                if log:
                    log.info("Keeping %s, last desktop of %s", desktop, monitor)
                continue
            desktops.remove(desktop)
            actions.append(Action(ActionKind.REMOVE, monitor=monitor, desktop=desktop))
    return actions


def _plan_reorders(configuration: Configuration, sim: DesktopState) -> list[Action]:
    actions = []
    for layout in configuration.layouts:
        current = sim.monitors[layout.monitor]
        listed = [desktop for desktop in layout.desktops if desktop in current]
        desired = listed + [desktop for desktop in current if desktop not in layout.desktops]
        if current != desired:
            sim.monitors[layout.monitor] = desired
            actions.append(Action(ActionKind.REORDER, monitor=layout.monitor, order=tuple(desired)))
    return actions


def plan_reconciliation(
    configuration: Configuration,
    state: DesktopState,
    settings: Settings | None = None,
    log: Logger | None = None,
) -> list[Action]:
    """Compute the actions converging `state` to `configuration`.

    Args:
        configuration: The target configuration
        state: Observed desktops per monitor, left untouched
        settings: Options, the configuration's own overrides are applied on top
        log: Optional logger for skipped steps

    Returns:
        The ordered list of actions, empty if `state` already matches
    """
    effective = (settings or Settings()).for_configuration(configuration)
    sim = state.copy()
    for layout in configuration.layouts:
        sim.monitors.setdefault(layout.monitor, [])

    plan = _plan_additions(configuration, sim)
    placeholders: list[str] = []
    plan += _plan_moves(configuration, sim, placeholders)
    plan += _plan_placeholder_removals(placeholders, sim)
    if effective.remove_unlisted:
        plan += _plan_removals(configuration.desired_monitor(), sim, log)
    if effective.reorder:
        plan += _plan_reorders(configuration, sim)
    return plan


async def apply_plan(plan: list[Action], backend: WindowManagerBackend, *, log: Logger) -> ApplyReport:
    """Run every action, skipping over the failing ones.

    Args:
        plan: Actions to run, in order
        backend: Window manager control surface
        log: Logger to use for this operation
    """
    report = ApplyReport()
    for action in plan:
        log.debug("Applying: %s", action.describe())
        if await backend.execute(action.to_args(), log=log):
            report.applied.append(action)
        else:
            log.error("Could not %s", action.describe())
            report.failed.append(action)
    if report.failed:
        log.warning("%d of %d action(s) failed", len(report.failed), len(plan))
    return report


async def reconcile(
    configuration: Configuration,
    backend: WindowManagerBackend,
    settings: Settings | None = None,
    *,
    log: Logger,
) -> ApplyReport:
    """Query the desktops, plan and apply the changes for `configuration`.

    Args:
        configuration: The target configuration
        backend: Window manager control surface
        settings: Global options
        log: Logger to use for this operation
    """
    state = await backend.get_state(configuration.monitors, log=log)
    plan = plan_reconciliation(configuration, state, settings, log=log)
    if not plan:
        log.info('Desktops already match "%s"', configuration.name)
    return await apply_plan(plan, backend, log=log)
