"""Built-in holiday rules.

Fixed-date rules match on month/day, moveable feasts on an offset in days
from Gregorian Easter Sunday of the same year.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, timedelta

from dateutil.easter import EASTER_WESTERN, easter

from daystrip.core.recurrence import HolidayRule


def fixed_date(name: str, month: int, day: int, *, since: int | None = None) -> HolidayRule:
    date(2000, month, day)  # rejects impossible month/day pairs early

    def matches(value: date) -> bool:
        if since is not None and value.year < since:
            return False
        return value.month == month and value.day == day

    return HolidayRule(name=name, matches=matches)


def easter_offset(name: str, days: int) -> HolidayRule:
    def matches(value: date) -> bool:
        return value == easter(value.year, EASTER_WESTERN) + timedelta(days=days)

    return HolidayRule(name=name, matches=matches)


GERMAN_HOLIDAYS: tuple[HolidayRule, ...] = (
    fixed_date("Neujahr", 1, 1),
    easter_offset("Karfreitag", -2),
    easter_offset("Ostermontag", 1),
    fixed_date("Tag der Arbeit", 5, 1),
    easter_offset("Christi Himmelfahrt", 39),
    easter_offset("Pfingstmontag", 50),
    fixed_date("Tag der Deutschen Einheit", 10, 3, since=1990),
    fixed_date("1. Weihnachtstag", 12, 25),
    fixed_date("2. Weihnachtstag", 12, 26),
)


def select_holidays(
    names: Iterable[str] | None,
    rules: Iterable[HolidayRule] = GERMAN_HOLIDAYS,
) -> list[HolidayRule]:
    available = list(rules)
    if names is None:
        return available
    by_name = {rule.name: rule for rule in available}
    selected: list[HolidayRule] = []
    for name in names:
        rule = by_name.get(name)
        if rule is None:
            raise ValueError(f"Unknown holiday: {name!r}")
        selected.append(rule)
    return selected
