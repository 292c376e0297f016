from bsplayout.models import Action, ActionKind, Configuration, DesktopState, Layout, Settings


def test_action_args():
    assert Action(ActionKind.ADD, monitor="DP-1", desktop="web").to_args() == ["monitor", "DP-1", "-a", "web"]
    assert Action(ActionKind.MOVE, monitor="DP-1", desktop="web").to_args() == ["desktop", "web", "-m", "DP-1"]
    assert Action(ActionKind.REMOVE, monitor="DP-1", desktop="web").to_args() == ["desktop", "web", "-r"]
    assert Action(ActionKind.REORDER, monitor="DP-1", order=("b", "a")).to_args() == ["monitor", "DP-1", "-o", "b", "a"]


def test_action_describe():
    assert Action(ActionKind.MOVE, monitor="DP-1", desktop="web").describe() == "move desktop web to DP-1"
    assert Action(ActionKind.REORDER, monitor="DP-1", order=("b", "a")).describe() == "reorder DP-1: b a"


def test_desired_monitor(docked):
    assert docked.desired_monitor() == {
        "web": "DP-1",
        "code": "DP-1",
        "chat": "DP-1",
        "music": "eDP-1",
        "mail": "eDP-1",
    }


def test_desktop_state_locate_and_copy():
    state = DesktopState({"eDP-1": ["1", "2"], "DP-1": ["3"]})
    assert state.locate("3") == "DP-1"
    assert state.locate("4") is None

    clone = state.copy()
    clone.monitors["eDP-1"].append("4")
    assert state.monitors["eDP-1"] == ["1", "2"]


def test_settings_overrides():
    settings = Settings(remove_unlisted=True, reorder=True)
    conf = Configuration("c", ["DP-1"], [Layout("DP-1", ["a"])], remove_unlisted=False)
    effective = settings.for_configuration(conf)
    assert effective.remove_unlisted is False
    assert effective.reorder is True
    assert effective.bspc == "bspc"


def test_to_dict_skips_unset_overrides(docked):
    data = docked.to_dict()
    assert data["name"] == "docked"
    assert data["layouts"][0] == {"monitor": "DP-1", "desktops": ["web", "code", "chat"]}
    assert "reorder" not in data
