"""Mouse button bindings and their configuration file."""

from __future__ import annotations

import enum
import logging
import os
import re
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

__all__ = [
    "Modifier",
    "Action",
    "Binding",
    "ButtonBindings",
    "SYSTEM_CONFIG",
    "parse_binding",
    "config_paths",
    "load_button_bindings",
]

log = logging.getLogger(__name__)

SYSTEM_CONFIG = "/etc/feh/buttons"

_LINE_CHUNK = 127
_ACTION_WIDTH = 31
_BUTTON_WIDTH = 7
_ATOI = re.compile(r"\s*([+-]?\d+)")


class Modifier(enum.IntFlag):
    """Modifier key masks as reported with pointer events."""

    NONE = 0
    SHIFT = 1
    CONTROL = 4
    MOD1 = 8
    MOD3 = 32
    MOD4 = 64


_PRESS_MASK = Modifier.CONTROL | Modifier.SHIFT | Modifier.MOD1 | Modifier.MOD4

_MODIFIER_CHARS = {
    "C": Modifier.CONTROL,
    "S": Modifier.SHIFT,
    "1": Modifier.MOD1,
    "4": Modifier.MOD4,
}


class Action(enum.Enum):
    """Actions that can be triggered with a mouse button."""

    PAN = "pan"
    ZOOM = "zoom"
    TOGGLE_MENU = "toggle_menu"
    PREV_IMG = "prev_img"
    NEXT_IMG = "next_img"
    BLUR = "blur"
    ROTATE = "rotate"
    ZOOM_IN = "zoom_in"
    ZOOM_OUT = "zoom_out"
    RELOAD_IMAGE = "reload_image"


_ALIASES = {
    "reload": Action.RELOAD_IMAGE,
    "menu": Action.TOGGLE_MENU,
    "prev": Action.PREV_IMG,
    "next": Action.NEXT_IMG,
}

# Order in which a button press is matched against the bindings.
_PRESS_ORDER = (
    Action.TOGGLE_MENU,
    Action.ROTATE,
    Action.BLUR,
    Action.PAN,
    Action.ZOOM,
    Action.ZOOM_IN,
    Action.ZOOM_OUT,
    Action.RELOAD_IMAGE,
    Action.PREV_IMG,
    Action.NEXT_IMG,
)


@dataclass(frozen=True)
class Binding:
    """A button number together with the modifier state it needs.

    Button 0 with MOD3 set stands for pointer movement; button 0 without
    it means the action is unbound.
    """

    button: int = 0
    state: int = 0


def _defaults() -> Dict[Action, Binding]:
    bindings = {action: Binding() for action in Action}
    bindings.update({
        Action.PAN: Binding(1, 0),
        Action.ZOOM: Binding(2, 0),
        Action.TOGGLE_MENU: Binding(3, 0),
        Action.PREV_IMG: Binding(4, 0),
        Action.NEXT_IMG: Binding(5, 0),
        Action.BLUR: Binding(1, Modifier.CONTROL),
        Action.ROTATE: Binding(2, Modifier.CONTROL),
    })
    return bindings


def _atoi(text: str) -> int:
    match = _ATOI.match(text)
    return int(match.group(1)) if match else 0


def parse_binding(text: str) -> Optional[Binding]:
    """Parse a binding such as ``"C-S-1"``.

    Returns ``None`` for an empty string. Unknown modifiers are reported
    and ignored.
    """
    if not text:
        return None
    rest = text
    state = Modifier.NONE
    while len(rest) >= 2 and rest[1] == "-":
        modifier = _MODIFIER_CHARS.get(rest[0])
        if modifier is None:
            log.warning('buttons: invalid modifier %s in "%s"', rest[0], text)
        else:
            state |= modifier
        rest = rest[2:]
    button = _atoi(rest)
    if button == 0:
        state |= Modifier.MOD3
    return Binding(button, int(state))


def _action_named(name: str) -> Optional[Action]:
    try:
        return Action(name)
    except ValueError:
        return _ALIASES.get(name)


def _word(line: str, pos: int, width: int) -> Tuple[str, int]:
    while pos < len(line) and line[pos].isspace():
        pos += 1
    start = pos
    while pos < len(line) and pos - start < width and not line[pos].isspace():
        pos += 1
    return line[start:pos], pos


def _chunks(text: str) -> Iterator[str]:
    for line in text.splitlines(keepends=True):
        while line:
            yield line[:_LINE_CHUNK]
            line = line[_LINE_CHUNK:]


@dataclass
class ButtonBindings:
    """The button binding of every action, starting from the defaults."""

    bindings: Dict[Action, Binding] = field(default_factory=_defaults)

    def __getitem__(self, action: Action) -> Binding:
        return self.bindings[action]

    def apply_line(self, line: str) -> bool:
        """Apply one configuration line of the form ``action binding``.

        Blank lines and comments are ignored. Returns whether a binding
        was changed.
        """
        action_name, pos = _word(line, 0, _ACTION_WIDTH)
        if not action_name or line.startswith("#"):
            return False
        button_text, _ = _word(line, pos, _BUTTON_WIDTH)
        action = _action_named(action_name)
        if action is None:
            log.warning("buttons: Invalid action: %s", action_name)
            return False
        parsed = parse_binding(button_text)
        if parsed is None:
            self.bindings[action] = Binding(0, self.bindings[action].state)
        else:
            self.bindings[action] = parsed
        return True

    def load(self, path: str) -> bool:
        """Apply every line of a configuration file.

        Returns ``False`` when the file cannot be opened.
        """
        try:
            with open(path, "rb") as fp:
                text = fp.read().decode("latin-1")
        except OSError:
            return False
        for line in _chunks(text):
            self.apply_line(line)
        return True

    def is_bound(self, action: Action, button: int, state: int) -> bool:
        """Tell whether ``button`` with ``state`` triggers ``action``."""
        binding = self.bindings[action]
        return binding.state == state and binding.button == button

    def action_for(self, button: int, state: int) -> Optional[Action]:
        """Return the action a button press triggers, if any.

        Only the Control, Shift, Mod1 and Mod4 bits of ``state`` count.
        """
        masked = state & _PRESS_MASK
        for action in _PRESS_ORDER:
            if self.is_bound(action, button, masked):
                return action
        return None


def config_paths(env: Optional[Mapping[str, str]] = None) -> List[str]:
    """Return the configuration files to try, in order.

    Without ``XDG_CONFIG_HOME`` or ``HOME`` no file is tried at all.
    """
    environ = os.environ if env is None else env
    confhome = environ.get("XDG_CONFIG_HOME")
    home = environ.get("HOME")
    if confhome is not None:
        user = f"{confhome}/feh/buttons"
    elif home is not None:
        user = f"{home}/.config/feh/buttons"
    else:
        return []
    return [user, SYSTEM_CONFIG]


def load_button_bindings(env: Optional[Mapping[str, str]] = None) -> ButtonBindings:
    """Return the default bindings updated from the first readable config file."""
    bindings = ButtonBindings()
    for path in config_paths(env):
        if bindings.load(path):
            break
    return bindings