from __future__ import annotations

from datetime import date

from daystrip.core import dates
from daystrip.core.recurrence import Anniversary, AnniversaryPerson, HolidayRule, match


def _days_of(year: int) -> list[date]:
    start = date(year, 1, 1)
    return [dates.add_days(start, offset) for offset in range((date(year + 1, 1, 1) - start).days)]


def test_birthday_fires_once_a_year_with_elapsed_years() -> None:
    person = AnniversaryPerson(name="Ada", birth_date=date(1990, 3, 5))
    fired = [day for day in _days_of(2024) if match(day, [], [person]).birthdays]
    assert fired == [date(2024, 3, 5)]
    assert match(date(2024, 3, 5), [], [person]).birthdays == (Anniversary("Ada", 34),)


def test_birthday_not_before_birth_year() -> None:
    person = AnniversaryPerson(name="Ada", birth_date=date(1990, 3, 5))
    assert match(date(1989, 3, 5), [], [person]).birthdays == ()
    assert match(date(1990, 3, 5), [], [person]).birthdays == (Anniversary("Ada", 0),)


def test_death_suppresses_later_birthdays_and_starts_anniversaries() -> None:
    person = AnniversaryPerson(name="Ada", birth_date=date(1990, 3, 5), death_date=date(2020, 3, 5))
    result = match(date(2021, 3, 5), [], [person])
    assert result.birthdays == ()
    assert result.death_anniversaries == (Anniversary("Ada", 1),)


def test_death_day_itself_reports_zero_years() -> None:
    person = AnniversaryPerson(name="Mozart", birth_date=date(1756, 1, 27), death_date=date(1791, 12, 5))
    assert match(date(1791, 12, 5), [], [person]).death_anniversaries == (Anniversary("Mozart", 0),)
    assert match(date(1790, 12, 5), [], [person]).death_anniversaries == ()
    assert match(date(1791, 1, 27), [], [person]).birthdays == (Anniversary("Mozart", 35),)
    assert match(date(1792, 1, 27), [], [person]).birthdays == ()


def test_leap_day_birthday_only_in_leap_years() -> None:
    person = AnniversaryPerson(name="Leap", birth_date=date(2000, 2, 29))
    assert match(date(2024, 2, 29), [], [person]).birthdays == (Anniversary("Leap", 24),)
    assert match(date(2023, 2, 28), [], [person]).birthdays == ()
    assert match(date(2023, 3, 1), [], [person]).birthdays == ()


def test_holidays_keep_rule_order() -> None:
    rules = [
        HolidayRule(name="second-listed-first", matches=lambda day: day.day == 1),
        HolidayRule(name="never", matches=lambda day: False),
        HolidayRule(name="always", matches=lambda day: True),
    ]
    assert match(date(2024, 5, 1), rules, []).holidays == ("second-listed-first", "always")
    assert match(date(2024, 5, 2), rules, []).holidays == ("always",)


def test_people_order_is_preserved() -> None:
    people = [
        AnniversaryPerson(name="B", birth_date=date(2000, 6, 1)),
        AnniversaryPerson(name="A", birth_date=date(1999, 6, 1)),
        AnniversaryPerson(name="C", birth_date=date(1950, 1, 1), death_date=date(1980, 6, 1)),
    ]
    result = match(date(2024, 6, 1), [], people)
    assert [item.name for item in result.birthdays] == ["B", "A"]
    assert result.death_anniversaries == (Anniversary("C", 44),)
    assert not result.empty
    assert match(date(2024, 6, 2), [], people).empty
