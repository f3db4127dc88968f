import pytest

from fehlib.bindings import (
    SYSTEM_CONFIG,
    Action,
    Binding,
    ButtonBindings,
    Modifier,
    config_paths,
    load_button_bindings,
    parse_binding,
)


def test_default_bindings():
    b = ButtonBindings()
    assert b[Action.PAN] == Binding(1, 0)
    assert b[Action.ZOOM] == Binding(2, 0)
    assert b[Action.TOGGLE_MENU] == Binding(3, 0)
    assert b[Action.PREV_IMG] == Binding(4, 0)
    assert b[Action.NEXT_IMG] == Binding(5, 0)
    assert b[Action.BLUR] == Binding(1, 4)
    assert b[Action.ROTATE] == Binding(2, 4)


def test_parse_plain_button():
    assert parse_binding("3") == Binding(3, 0)


def test_parse_modifiers():
    result = parse_binding("C-S-3")
    assert result.button == 3
    assert result.state == Modifier.CONTROL | Modifier.SHIFT


def test_parse_mod1_mod4():
    result = parse_binding("1-4-2")
    assert result == Binding(2, int(Modifier.MOD1 | Modifier.MOD4))


def test_parse_zero_sets_motion_flag():
    result = parse_binding("0")
    assert result.button == 0
    assert result.state & Modifier.MOD3


def test_parse_invalid_modifier_is_ignored():
    assert parse_binding("X-2") == Binding(2, 0)


def test_parse_empty():
    assert parse_binding("") is None


def test_apply_line_rebinds_action():
    b = ButtonBindings()
    assert b.apply_line("zoom_in C-4\n")
    assert b[Action.ZOOM_IN] == Binding(4, int(Modifier.CONTROL))


def test_apply_line_aliases():
    b = ButtonBindings()
    b.apply_line("next 8")
    b.apply_line("menu S-3")
    assert b[Action.NEXT_IMG].button == 8
    assert b[Action.TOGGLE_MENU] == Binding(3, int(Modifier.SHIFT))


@pytest.mark.parametrize("line", ["# pan 9", "", "   \n", "bogus 3"])
def test_apply_line_ignored(line):
    b = ButtonBindings()
    assert not b.apply_line(line)
    assert b.bindings == ButtonBindings().bindings


def test_apply_line_without_button_unbinds_keeping_state():
    b = ButtonBindings()
    b.apply_line("blur")
    assert b[Action.BLUR] == Binding(0, 4)


def test_action_for_defaults():
    b = ButtonBindings()
    assert b.action_for(3, 0) is Action.TOGGLE_MENU
    assert b.action_for(1, 0) is Action.PAN
    assert b.action_for(1, Modifier.CONTROL) is Action.BLUR
    assert b.action_for(2, Modifier.CONTROL) is Action.ROTATE
    assert b.action_for(9, 0) is None


def test_action_for_masks_other_bits():
    b = ButtonBindings()
    assert b.action_for(5, Modifier.MOD3) is Action.NEXT_IMG


def test_is_bound():
    b = ButtonBindings()
    assert b.is_bound(Action.ZOOM, 2, 0)
    assert not b.is_bound(Action.ZOOM, 2, Modifier.SHIFT)


def test_config_paths_prefers_xdg():
    paths = config_paths({"XDG_CONFIG_HOME": "/cfg", "HOME": "/home/u"})
    assert paths == ["/cfg/feh/buttons", SYSTEM_CONFIG]


def test_config_paths_home():
    assert config_paths({"HOME": "/home/u"})[0] == "/home/u/.config/feh/buttons"


def test_config_paths_none():
    assert config_paths({}) == []


def test_load_button_bindings_from_file(tmp_path):
    conf = tmp_path / "feh"
    conf.mkdir()
    (conf / "buttons").write_text("# comment\npan 6\nreload C-1\n")
    b = load_button_bindings({"XDG_CONFIG_HOME": str(tmp_path)})
    assert b[Action.PAN] == Binding(6, 0)
    assert b[Action.RELOAD_IMAGE] == Binding(1, int(Modifier.CONTROL))
    assert b[Action.ZOOM] == Binding(2, 0)


def test_load_missing_file(tmp_path):
    b = ButtonBindings()
    assert not b.load(str(tmp_path / "none"))
    assert b.bindings == ButtonBindings().bindings