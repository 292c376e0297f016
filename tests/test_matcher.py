import pytest

from bsplayout.matcher import find_active_configuration, find_configuration, monitors_match
from bsplayout.models import BsplayoutError, Configuration, ConfigurationSet, ExitCode


def make_set(*monitor_lists):
    return ConfigurationSet([Configuration(name=f"conf{i}", monitors=list(mons)) for i, mons in enumerate(monitor_lists)])


def test_monitors_match_ignores_order(docked):
    assert monitors_match(docked, ["DP-1", "eDP-1"])
    assert monitors_match(docked, ["eDP-1", "DP-1"])


def test_monitors_match_needs_same_set(docked):
    assert not monitors_match(docked, ["eDP-1"])
    assert not monitors_match(docked, ["eDP-1", "DP-1", "HDMI-A-1"])
    assert not monitors_match(docked, ["eDP-1", "DP-2"])
    assert not monitors_match(docked, [])


def test_first_match_wins():
    config_set = make_set(["eDP-1"], ["DP-1", "eDP-1"], ["eDP-1", "DP-1"])
    found = find_configuration(config_set, ["eDP-1", "DP-1"])
    assert found is not None
    assert found.name == "conf1"


def test_no_match_returns_none():
    assert find_configuration(make_set(["eDP-1"]), ["DP-1"]) is None
    assert find_configuration(ConfigurationSet(), ["DP-1"]) is None


def test_find_active_configuration(test_log):
    config_set = make_set(["eDP-1"], ["DP-1"])
    assert find_active_configuration(config_set, ["DP-1"], log=test_log).name == "conf1"


def test_find_active_configuration_fails(test_log):
    with pytest.raises(BsplayoutError) as excinfo:
        find_active_configuration(make_set(["eDP-1"]), ["HDMI-A-1", "DP-1"], log=test_log)
    assert excinfo.value.exit_code == ExitCode.NO_MATCH
