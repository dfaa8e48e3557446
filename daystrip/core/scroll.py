from __future__ import annotations

import math
from dataclasses import replace
from datetime import date

from daystrip.core.dates import add_days
from daystrip.core.window import DEFAULT_WINDOW_LENGTH, WindowState, clamp_length

DRAG_STEP = 30


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def default_state(today: date, window_length: int = DEFAULT_WINDOW_LENGTH) -> WindowState:
    return WindowState(start_date=today, window_length=window_length)


def apply_delta(state: WindowState, dx: float = 0, dy: float = 0) -> WindowState:
    updated = state
    if dy:
        updated = replace(updated, start_date=add_days(updated.start_date, round_half_up(dy)))
    if dx:
        updated = replace(updated, window_length=clamp_length(updated.window_length + round_half_up(dx)))
    return updated


def drag_delta(x: float, y: float, step: int = DRAG_STEP) -> tuple[int, int]:
    """Convert a touch-drag offset in pixels into (dx, dy) window steps.

    Dragging left widens the window, dragging up scrolls forward. Vertical
    movement only counts once it exceeds one step.
    """
    dx = round_half_up(-x / step) if x else 0
    dy = round_half_up(-y / step) if abs(y) > step else 0
    return dx, dy
