from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date, timedelta

from daystrip.core import recurrence
from daystrip.core.dates import add_days, day_key, weekday_index
from daystrip.core.event_store import Event, EventStore
from daystrip.core.recurrence import Anniversary, AnniversaryPerson, HolidayRule

MIN_WINDOW_LENGTH = 1
MAX_WINDOW_LENGTH = 100
DEFAULT_WINDOW_LENGTH = 30


def clamp_length(value: int) -> int:
    return max(MIN_WINDOW_LENGTH, min(MAX_WINDOW_LENGTH, value))


@dataclass(frozen=True)
class WindowState:
    start_date: date
    window_length: int = DEFAULT_WINDOW_LENGTH

    def __post_init__(self) -> None:
        length = clamp_length(self.window_length)
        object.__setattr__(self, "window_length", length)
        # The last day of the window must still be a representable date.
        latest_start = date.max - timedelta(days=length - 1)
        if self.start_date > latest_start:
            object.__setattr__(self, "start_date", latest_start)


@dataclass(frozen=True)
class WeekClassification:
    workdays: frozenset[int] = frozenset({0, 1, 2, 3, 4})
    weekend_days: frozenset[int] = frozenset({5, 6})

    def __post_init__(self) -> None:
        for value in self.workdays | self.weekend_days:
            if not 0 <= value <= 6:
                raise ValueError(f"Weekday index out of range: {value}")
        overlap = self.workdays & self.weekend_days
        if overlap:
            raise ValueError(f"Weekdays are both workday and weekend: {sorted(overlap)}")


@dataclass(frozen=True)
class DayDescriptor:
    date: date
    weekday_index: int
    is_workday: bool
    is_weekend: bool
    holidays: tuple[str, ...] = ()
    birthdays: tuple[Anniversary, ...] = ()
    death_anniversaries: tuple[Anniversary, ...] = ()
    events: tuple[Event, ...] = field(default_factory=tuple)

    @property
    def key(self) -> str:
        return day_key(self.date)

    @property
    def is_working_day(self) -> bool:
        return self.is_workday and not self.holidays


def describe_day(
    day: date,
    holiday_rules: Sequence[HolidayRule],
    people: Sequence[AnniversaryPerson],
    event_store: EventStore,
    classification: WeekClassification,
) -> DayDescriptor:
    found = recurrence.match(day, holiday_rules, people)
    weekday = weekday_index(day)
    return DayDescriptor(
        date=day,
        weekday_index=weekday,
        is_workday=weekday in classification.workdays,
        is_weekend=weekday in classification.weekend_days,
        holidays=found.holidays,
        birthdays=found.birthdays,
        death_anniversaries=found.death_anniversaries,
        events=tuple(event_store.list_events(day_key(day))),
    )


def generate_window(
    state: WindowState,
    holiday_rules: Iterable[HolidayRule],
    people: Iterable[AnniversaryPerson],
    event_store: EventStore,
    classification: WeekClassification | None = None,
) -> list[DayDescriptor]:
    rules = list(holiday_rules)
    persons = list(people)
    classification = classification or WeekClassification()
    return [
        describe_day(add_days(state.start_date, offset), rules, persons, event_store, classification)
        for offset in range(state.window_length)
    ]
