from __future__ import annotations

from datetime import date, timedelta

from daystrip.core.scroll import apply_delta, default_state, drag_delta, round_half_up
from daystrip.core.window import WindowState


def test_dy_moves_start_date() -> None:
    state = WindowState(date(2024, 12, 30), 30)
    assert apply_delta(state, dy=3).start_date == date(2025, 1, 2)
    assert apply_delta(state, dy=-30).start_date == date(2024, 11, 30)
    assert apply_delta(state, dy=3).window_length == 30


def test_dx_changes_length_with_clamping() -> None:
    state = WindowState(date(2024, 1, 1), 30)
    assert apply_delta(state, dx=-200).window_length == 1
    assert apply_delta(state, dx=500).window_length == 100
    assert apply_delta(WindowState(date(2024, 1, 1), 1), dx=500).window_length == 100
    assert apply_delta(state, dx=2.5).window_length == 33
    assert apply_delta(state, dx=-1).start_date == date(2024, 1, 1)


def test_both_axes_update_together() -> None:
    state = apply_delta(WindowState(date(2024, 1, 1), 30), dx=5, dy=-1)
    assert state == WindowState(date(2023, 12, 31), 35)


def test_zero_delta_is_identity() -> None:
    state = WindowState(date(2024, 1, 1), 30)
    assert apply_delta(state) is state


def test_round_half_up() -> None:
    assert round_half_up(2.5) == 3
    assert round_half_up(-2.5) == -2
    assert round_half_up(0.49) == 0


def test_default_state() -> None:
    assert default_state(date(2024, 1, 1)) == WindowState(date(2024, 1, 1), 30)
    assert default_state(date(2024, 1, 1), 500).window_length == 100


def test_drag_delta() -> None:
    assert drag_delta(-60, 0) == (2, 0)
    assert drag_delta(45, 0) == (-1, 0)
    assert drag_delta(0, 20) == (0, 0)
    assert drag_delta(0, -95) == (0, 3)
    assert drag_delta(0, 90) == (0, -3)


def test_scrolling_stops_at_the_ends_of_the_date_range() -> None:
    near_end = WindowState(date(9999, 12, 28), 30)
    assert near_end.start_date == date.max - timedelta(days=29)
    assert apply_delta(near_end, dy=7).start_date == date.max - timedelta(days=29)
    assert apply_delta(WindowState(date(9999, 12, 20), 5), dy=7).start_date == date(9999, 12, 27)
    assert apply_delta(WindowState(date(9999, 12, 25), 5), dx=10) == WindowState(date(9999, 12, 17), 15)

    near_start = WindowState(date(1, 1, 3), 30)
    assert apply_delta(near_start, dy=-7).start_date == date.min
    assert apply_delta(WindowState(date.min, 30), dy=-1).start_date == date.min
