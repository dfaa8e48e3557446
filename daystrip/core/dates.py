from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

WEEKDAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

_DAY_KEY_RE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


def normalize(value: date | datetime, tz: ZoneInfo | None = None) -> date:
    if isinstance(value, datetime):
        if tz is not None and value.tzinfo is not None:
            value = value.astimezone(tz)
        return value.date()
    return date(value.year, value.month, value.day)


def equals(a: date, b: date) -> bool:
    return (a.year, a.month, a.day) == (b.year, b.month, b.day)


def add_days(day: date, n: int) -> date:
    """Shift by n days, saturating at date.min/date.max."""
    try:
        return day + timedelta(days=n)
    except OverflowError:
        return date.max if n > 0 else date.min


def today(tz: ZoneInfo | None = None) -> date:
    return normalize(datetime.now(tz=tz), tz)


def weekday_index(day: date) -> int:
    return day.weekday()


def day_key(day: date) -> str:
    day = normalize(day)
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def parse_day_key(key: str) -> date:
    if not isinstance(key, str) or _DAY_KEY_RE.fullmatch(key) is None:
        raise ValueError(f"Invalid day key: {key!r}")
    year, month, day = (int(part) for part in key.split("-"))
    return date(year, month, day)


def is_day_key(key: str) -> bool:
    try:
        return day_key(parse_day_key(key)) == key
    except ValueError:
        return False
