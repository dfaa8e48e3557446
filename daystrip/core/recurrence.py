from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class HolidayRule:
    name: str
    matches: Callable[[date], bool]


@dataclass(frozen=True)
class AnniversaryPerson:
    name: str
    birth_date: date
    death_date: date | None = None


@dataclass(frozen=True)
class Anniversary:
    name: str
    years_elapsed: int


@dataclass(frozen=True)
class RecurrenceMatch:
    holidays: tuple[str, ...] = ()
    birthdays: tuple[Anniversary, ...] = ()
    death_anniversaries: tuple[Anniversary, ...] = ()

    @property
    def empty(self) -> bool:
        return not (self.holidays or self.birthdays or self.death_anniversaries)


def _same_month_day(a: date, b: date) -> bool:
    return a.month == b.month and a.day == b.day


def birthday_fires(person: AnniversaryPerson, day: date) -> bool:
    born = person.birth_date
    if not _same_month_day(born, day) or born.year > day.year:
        return False
    return person.death_date is None or person.death_date > day


def death_anniversary_fires(person: AnniversaryPerson, day: date) -> bool:
    died = person.death_date
    if died is None:
        return False
    return _same_month_day(died, day) and died.year <= day.year


def match(
    day: date,
    holiday_rules: Iterable[HolidayRule],
    people: Iterable[AnniversaryPerson],
) -> RecurrenceMatch:
    people = list(people)
    holidays = tuple(rule.name for rule in holiday_rules if rule.matches(day))
    birthdays = tuple(
        Anniversary(name=person.name, years_elapsed=day.year - person.birth_date.year)
        for person in people
        if birthday_fires(person, day)
    )
    deaths = tuple(
        Anniversary(name=person.name, years_elapsed=day.year - person.death_date.year)
        for person in people
        if death_anniversary_fires(person, day)
    )
    return RecurrenceMatch(holidays=holidays, birthdays=birthdays, death_anniversaries=deaths)
