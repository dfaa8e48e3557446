from __future__ import annotations

from datetime import date

from daystrip.core.event_store import Event
from daystrip.core.recurrence import Anniversary
from daystrip.core.render import render_day_details, render_day_line, render_window
from daystrip.core.window import DayDescriptor


def _day(**overrides) -> DayDescriptor:
    values = dict(date=date(2024, 3, 5), weekday_index=1, is_workday=True, is_weekend=False)
    values.update(overrides)
    return DayDescriptor(**values)


def test_plain_workday_line() -> None:
    assert render_day_line(_day()) == "  Tue. 2024-03-05 W"


def test_today_marker_and_weekend_flag() -> None:
    saturday = _day(date=date(2024, 3, 9), weekday_index=5, is_workday=False, is_weekend=True)
    assert render_day_line(saturday, today=date(2024, 3, 9)) == "» Sat. 2024-03-09 E"


def test_holiday_clears_workday_flag() -> None:
    line = render_day_line(_day(date=date(2024, 5, 1), weekday_index=2, holidays=("Tag der Arbeit",)))
    assert line == "  Wed. 2024-05-01 · | Tag der Arbeit"


def test_anniversaries_and_events() -> None:
    line = render_day_line(
        _day(
            birthdays=(Anniversary("Ada", 34),),
            death_anniversaries=(Anniversary("Mozart", 1), Anniversary("Clara", 0)),
            events=(Event("Meeting", "#fff"), Event("Gym", "#000")),
        )
    )
    assert line == "  Tue. 2024-03-05 W | Ada (34), Mozart (✝ 1), Clara (✝) | Meeting [#fff]; Gym [#000]"


def test_render_window_joins_lines() -> None:
    days = [_day(), _day(date=date(2024, 3, 6), weekday_index=2)]
    assert render_window(days).splitlines() == ["  Tue. 2024-03-05 W", "  Wed. 2024-03-06 W"]


def test_day_details_number_events_from_one() -> None:
    text = render_day_details(
        _day(holidays=("Fasching",), events=(Event("Meeting", "#fff"), Event("Gym", "#000")))
    )
    assert text.splitlines() == [
        "Tue. 2024-03-05",
        "Holidays: Fasching",
        "Events:",
        "  1. Meeting [#fff]",
        "  2. Gym [#000]",
    ]


def test_day_details_without_events() -> None:
    text = render_day_details(_day())
    assert text.splitlines() == ["Tue. 2024-03-05 (workday)", "No events."]
