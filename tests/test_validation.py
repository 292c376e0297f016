from bsplayout.validation import ConfigField, ConfigValidator, _find_similar_key, format_config_error, validate_document


def conf(name="c", monitors=("DP-1",), layouts=(), **extra):
    return {"name": name, "monitors": list(monitors), "layouts": list(layouts), **extra}


def layout(monitor, *desktops):
    return {"monitor": monitor, "desktops": list(desktops)}


def test_valid_document(test_log):
    raw = {
        "settings": {"bspc": "/usr/bin/bspc", "remove_unlisted": False},
        "configurations": [conf("laptop", ["eDP-1"], [layout("eDP-1", "1", "2")])],
    }
    assert validate_document(raw, test_log) == ([], [])


def test_document_must_be_a_mapping(test_log):
    errors, _ = validate_document(["a"], test_log)
    assert len(errors) == 1


def test_missing_configurations(test_log):
    errors, _ = validate_document({}, test_log)
    assert "Missing required field" in errors[0]


def test_empty_configurations(test_log):
    errors, _ = validate_document({"configurations": []}, test_log)
    assert "No configuration defined" in errors[0]


def test_layout_monitor_outside_configuration(test_log):
    raw = {"configurations": [conf(monitors=["DP-1"], layouts=[layout("HDMI-A-1", "1")])]}
    errors, _ = validate_document(raw, test_log)
    assert len(errors) == 1
    assert "'HDMI-A-1' is not part of this configuration's monitors" in errors[0]


def test_desktop_listed_twice(test_log):
    raw = {"configurations": [conf(monitors=["DP-1", "eDP-1"], layouts=[layout("DP-1", "1", "2"), layout("eDP-1", "2")])]}
    errors, _ = validate_document(raw, test_log)
    assert errors == ["[configurations[0]] Config error for 'layouts': Desktop '2' is listed more than once"]


def test_monitor_listed_twice(test_log):
    raw = {"configurations": [conf(monitors=["DP-1", "DP-1"])]}
    errors, _ = validate_document(raw, test_log)
    assert "Monitor 'DP-1' is listed more than once" in errors[0]


def test_two_layouts_for_one_monitor(test_log):
    raw = {"configurations": [conf(layouts=[layout("DP-1", "1"), layout("DP-1", "2")])]}
    errors, _ = validate_document(raw, test_log)
    assert "Monitor 'DP-1' has more than one layout" in errors[0]


def test_duplicate_names(test_log):
    raw = {"configurations": [conf("a", ["DP-1"]), conf("a", ["eDP-1"])]}
    errors, _ = validate_document(raw, test_log)
    assert "Name 'a' is used more than once" in errors[0]


def test_shadowed_configuration_is_a_warning(test_log):
    raw = {"configurations": [conf("a", ["DP-1", "eDP-1"]), conf("b", ["eDP-1", "DP-1"])]}
    errors, warnings = validate_document(raw, test_log)
    assert errors == []
    assert "'b' uses the same monitors as 'a'" in warnings[0]


def test_wrong_types(test_log):
    raw = {"configurations": [{"name": 3, "monitors": "DP-1"}], "settings": {"reorder": "maybe"}}
    errors, _ = validate_document(raw, test_log)
    assert any("Expected bool" in e for e in errors)
    assert any("Expected str, got int" in e for e in errors)
    assert any("Expected list, got str" in e for e in errors)


def test_non_string_desktop(test_log):
    raw = {"configurations": [conf(layouts=[layout("DP-1", "1", {"x": 1})])]}
    errors, _ = validate_document(raw, test_log)
    assert "Expected a name, got dict" in errors[0]


def test_unknown_keys(test_log):
    raw = {"configurations": [conf(layouts=[{"monitor": "DP-1", "desktop": ["1"]}])], "setings": {}}
    errors, warnings = validate_document(raw, test_log)
    assert any("did you mean 'settings'" in w for w in warnings)
    assert any("did you mean 'desktops'" in w for w in warnings)
    assert any("'desktops': Missing required field" in e for e in errors)


def test_config_validator_required(test_log):
    validator = ConfigValidator({}, "section", test_log)
    errors = validator.validate([ConfigField("monitors", list, required=True)])
    assert errors == ["[section] Config error for 'monitors': Missing required field -> Add monitors: [item] to section"]


def test_find_similar_key():
    known_keys = ["configurations", "settings", "include"]
    assert _find_similar_key("configuration", known_keys) == "configurations"
    assert _find_similar_key("setting", known_keys) == "settings"
    assert _find_similar_key("xyz", known_keys) is None


def test_format_config_error():
    msg = format_config_error("settings", "reorder", "Expected bool", "Use true/false")
    assert msg == "[settings] Config error for 'reorder': Expected bool -> Use true/false"
