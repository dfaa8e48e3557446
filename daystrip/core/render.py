"""Plain-text rendering of a day window for chat messages.

One line per day: date label, workday/weekend flag, holidays, anniversaries
and events with their color tokens. The current day is prefixed with a marker.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from daystrip.core.dates import WEEKDAY_NAMES, day_key
from daystrip.core.recurrence import Anniversary
from daystrip.core.window import DayDescriptor

TODAY_MARKER = "»"
WORKDAY_FLAG = "W"
WEEKEND_FLAG = "E"
NO_FLAG = "·"


def format_day_label(day: date, weekday_names: Sequence[str] = WEEKDAY_NAMES) -> str:
    return f"{weekday_names[day.weekday()]}. {day_key(day)}"


def format_birthday(item: Anniversary) -> str:
    return f"{item.name} ({item.years_elapsed})"


def format_death_anniversary(item: Anniversary) -> str:
    if item.years_elapsed == 0:
        return f"{item.name} (✝)"
    return f"{item.name} (✝ {item.years_elapsed})"


def format_anniversaries(day: DayDescriptor) -> str:
    labels = [format_birthday(item) for item in day.birthdays]
    labels.extend(format_death_anniversary(item) for item in day.death_anniversaries)
    return ", ".join(labels)


def _flag(day: DayDescriptor) -> str:
    if day.is_working_day:
        return WORKDAY_FLAG
    if day.is_weekend:
        return WEEKEND_FLAG
    return NO_FLAG


def render_day_line(
    day: DayDescriptor,
    *,
    today: date | None = None,
    weekday_names: Sequence[str] = WEEKDAY_NAMES,
) -> str:
    prefix = TODAY_MARKER if today is not None and day.date == today else " "
    parts = [f"{prefix} {format_day_label(day.date, weekday_names)} {_flag(day)}"]
    if day.holidays:
        parts.append(", ".join(day.holidays))
    anniversaries = format_anniversaries(day)
    if anniversaries:
        parts.append(anniversaries)
    if day.events:
        parts.append("; ".join(f"{event.description} [{event.color}]" for event in day.events))
    return " | ".join(parts)


def render_window(
    days: Sequence[DayDescriptor],
    today: date | None = None,
    *,
    weekday_names: Sequence[str] = WEEKDAY_NAMES,
) -> str:
    return "\n".join(render_day_line(day, today=today, weekday_names=weekday_names) for day in days)


def render_day_details(day: DayDescriptor, *, weekday_names: Sequence[str] = WEEKDAY_NAMES) -> str:
    kinds = []
    if day.is_working_day:
        kinds.append("workday")
    if day.is_weekend:
        kinds.append("weekend")
    header = format_day_label(day.date, weekday_names)
    if kinds:
        header = f"{header} ({', '.join(kinds)})"
    lines = [header]
    if day.holidays:
        lines.append(f"Holidays: {', '.join(day.holidays)}")
    anniversaries = format_anniversaries(day)
    if anniversaries:
        lines.append(f"Anniversaries: {anniversaries}")
    if day.events:
        lines.append("Events:")
        for number, event in enumerate(day.events, start=1):
            lines.append(f"  {number}. {event.description} [{event.color}]")
    else:
        lines.append("No events.")
    return "\n".join(lines)
