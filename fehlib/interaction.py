"""Geometry of pointer interaction: zooming, panning, rotating, blurring, menus."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Tuple

__all__ = [
    "JITTER_OFFSET",
    "JITTER_TIME",
    "ZOOM_DRAG_SCALE",
    "ROTATION_SCALE",
    "Mode",
    "ViewState",
    "drag_zoom",
    "zoom_around_point",
    "step_zoom",
    "exceeds_jitter",
    "rotation_angle",
    "blur_radius",
    "menu_slide",
]

# A press on the pan button only becomes a drag once the pointer has moved
# more than this many pixels or the button has been held this many seconds.
JITTER_OFFSET = 2
JITTER_TIME = 1

# Horizontal pixels of drag that change the zoom factor by one.
ZOOM_DRAG_SCALE = 128.0

# Half a window width of horizontal movement rotates by this many radians.
ROTATION_SCALE = 3.1415926535


class Mode(enum.Enum):
    """What a pointer drag currently does in a window."""

    NORMAL = enum.auto()
    PAN = enum.auto()
    ZOOM = enum.auto()
    ROTATE = enum.auto()
    BLUR = enum.auto()
    NEXT = enum.auto()


@dataclass
class ViewState:
    """Position and scale of an image shown in a window.

    ``im_x``/``im_y`` give the window position of the image's top left
    corner, ``w``/``h`` the window size and ``im_w``/``im_h`` the image size.
    """

    w: int = 0
    h: int = 0
    im_w: int = 0
    im_h: int = 0
    im_x: int = 0
    im_y: int = 0
    zoom: float = 1.0
    old_zoom: float = 1.0
    click_offset_x: int = 0
    click_offset_y: int = 0
    im_click_offset_x: float = 0.0
    im_click_offset_y: float = 0.0
    mode: Mode = Mode.NORMAL


def _clamp(value: float, low: float, high: float) -> float:
    if value < low:
        return low
    if value > high:
        return high
    return value


def drag_zoom(
    old_zoom: float, click_x: int, x: int, zoom_min: float, zoom_max: float
) -> float:
    """Return the zoom after dragging horizontally from ``click_x`` to ``x``.

    Dragging right zooms in, dragging left zooms out; the result is kept
    within ``zoom_min`` and ``zoom_max``.
    """
    if x > click_x:
        zoom = old_zoom + (float(x) - float(click_x)) / ZOOM_DRAG_SCALE
    else:
        zoom = old_zoom - (float(click_x) - float(x)) / ZOOM_DRAG_SCALE
    return _clamp(zoom, zoom_min, zoom_max)


def zoom_around_point(
    state: ViewState, click_x: int, click_y: int, new_zoom: float
) -> ViewState:
    """Change the zoom so that the image point under the pointer stays put.

    Records the click position and the image point under it, then moves the
    image so that point is again under ``(click_x, click_y)`` at
    ``new_zoom``. The state is updated in place and returned.
    """
    if state.zoom == 0:
        raise ValueError("current zoom must not be zero")
    state.click_offset_x = click_x
    state.click_offset_y = click_y
    state.old_zoom = state.zoom
    state.im_click_offset_x = (click_x - state.im_x) / state.old_zoom
    state.im_click_offset_y = (click_y - state.im_y) / state.old_zoom
    state.zoom = new_zoom
    state.im_x = int(click_x - state.im_click_offset_x * state.zoom)
    state.im_y = int(click_y - state.im_click_offset_y * state.zoom)
    return state


def step_zoom(
    zoom: float, rate: float, zoom_in: bool, zoom_min: float, zoom_max: float
) -> float:
    """Zoom in or out by one step of ``rate``.

    Zooming in is capped at ``zoom_max``, zooming out at ``zoom_min``.
    """
    if rate == 0:
        raise ValueError("zoom rate must not be zero")
    if zoom_in:
        return min(zoom * rate, zoom_max)
    return max(zoom / rate, zoom_min)


def exceeds_jitter(state: ViewState, x: int, y: int, elapsed: float) -> bool:
    """Tell whether a press has turned into a drag.

    True once the pointer has moved more than :data:`JITTER_OFFSET` pixels
    from the click relative to the image, or more than :data:`JITTER_TIME`
    seconds have passed.
    """
    return (
        abs(state.click_offset_x - (x - state.im_x)) > JITTER_OFFSET
        or abs(state.click_offset_y - (y - state.im_y)) > JITTER_OFFSET
        or elapsed > JITTER_TIME
    )


def rotation_angle(x: int, width: int) -> float:
    """Return the rotation in radians for a pointer at ``x`` in a window.

    The window centre gives no rotation, the edges about half a turn.
    """
    if width <= 0:
        raise ValueError("width must be positive")
    return (x - width // 2) / (width / 2) * ROTATION_SCALE


def blur_radius(x: int, width: int) -> int:
    """Return the filter radius for a pointer at ``x`` in a window.

    Negative values blur and positive values sharpen, from -10 at the left
    edge to 10 at the right.
    """
    if width <= 0:
        raise ValueError("width must be positive")
    return int((x / width) * 20 - 10)


def menu_slide(
    screen_w: int, screen_h: int, x: int, y: int, w: int, h: int
) -> Tuple[int, int]:
    """Return how far to move a menu so it fits on the screen.

    The menu is only ever moved left and up, and never past the top left
    corner of the screen.
    """
    dx = min(screen_w - (x + w), 0)
    dy = min(screen_h - (y + h), 0)
    if x + dx < 0:
        dx = -x
    if y + dy < 0:
        dy = -y
    return dx, dy