from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from daystrip.core.dates import parse_day_key
from daystrip.core.event_store import DEFAULT_PALETTE
from daystrip.core.holidays import select_holidays
from daystrip.core.recurrence import AnniversaryPerson, HolidayRule
from daystrip.core.window import DEFAULT_WINDOW_LENGTH, WeekClassification, clamp_length

LOGGER = logging.getLogger(__name__)

DEFAULT_CALENDAR_CONFIG_PATH = Path("config/calendar.json")
DEFAULT_EVENTS_PATH = Path("data/events.json")
DEFAULT_TIMEZONE = "Europe/Berlin"


@dataclass(frozen=True)
class Settings:
    bot_token: str
    dry_run: bool
    calendar_config_path: Path
    events_path: Path | None
    timezone: ZoneInfo
    default_window_length: int
    allowed_user_ids: set[int]


@dataclass(frozen=True)
class CalendarConfig:
    classification: WeekClassification
    holiday_rules: tuple[HolidayRule, ...]
    people: tuple[AnniversaryPerson, ...]
    palette: tuple[str, ...]


def load_settings() -> Settings:
    load_dotenv()

    env = os.environ
    dry_run = _parse_optional_bool(env.get("DRY_RUN")) is True
    token = env.get("BOT_TOKEN", "").strip()
    if not token and not dry_run:
        raise RuntimeError("BOT_TOKEN is not set")

    config_path = Path(env.get("CALENDAR_CONFIG_PATH", DEFAULT_CALENDAR_CONFIG_PATH))
    events_raw = env.get("EVENTS_PATH", "").strip()
    if events_raw:
        events_path: Path | None = Path(events_raw)
    else:
        # Dry runs keep events in memory unless a file is named explicitly.
        events_path = None if dry_run else DEFAULT_EVENTS_PATH
    timezone = _parse_timezone(env.get("CALENDAR_TZ"))
    window_length = clamp_length(
        _parse_int_with_default(env.get("DEFAULT_WINDOW_LENGTH"), DEFAULT_WINDOW_LENGTH)
    )
    allowed_user_ids = _parse_int_set(env.get("ALLOWED_USER_IDS"))
    return Settings(
        bot_token=token,
        dry_run=dry_run,
        calendar_config_path=config_path,
        events_path=events_path,
        timezone=timezone,
        default_window_length=window_length,
        allowed_user_ids=allowed_user_ids,
    )


def load_calendar_config(path: Path) -> CalendarConfig:
    if not path.exists():
        LOGGER.warning("calendar.config missing path=%s; using built-in defaults", path)
        return parse_calendar_config({})
    with path.open("r", encoding="utf-8") as config_file:
        return parse_calendar_config(json.load(config_file))


def parse_calendar_config(data: dict[str, object]) -> CalendarConfig:
    if not isinstance(data, dict):
        raise ValueError("Calendar config must be a JSON object")
    defaults = WeekClassification()
    workdays = _parse_weekdays(data.get("workdays"), defaults.workdays, "workdays")
    weekend_days = _parse_weekdays(data.get("weekend_days"), defaults.weekend_days, "weekend_days")
    holiday_names = data.get("holidays")
    if holiday_names is not None and not isinstance(holiday_names, list):
        raise ValueError("'holidays' must be a list of names")
    people_raw = data.get("people", [])
    if not isinstance(people_raw, list):
        raise ValueError("'people' must be a list")
    palette_raw = data.get("palette")
    if palette_raw is None:
        palette = DEFAULT_PALETTE
    elif isinstance(palette_raw, list) and palette_raw and all(
        isinstance(item, str) and item.strip() for item in palette_raw
    ):
        palette = tuple(item.strip() for item in palette_raw)
    else:
        raise ValueError("'palette' must be a non-empty list of color strings")
    return CalendarConfig(
        classification=WeekClassification(workdays=workdays, weekend_days=weekend_days),
        holiday_rules=tuple(select_holidays(holiday_names)),
        people=tuple(_parse_person(item) for item in people_raw),
        palette=palette,
    )


def _parse_person(item: object) -> AnniversaryPerson:
    if not isinstance(item, dict):
        raise ValueError("Each person must be an object")
    name = item.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ValueError("Person name must be a non-empty string")
    birthday = item.get("birthday")
    if not isinstance(birthday, str):
        raise ValueError(f"Person {name!r} needs a birthday")
    death_day = item.get("death_day")
    return AnniversaryPerson(
        name=name.strip(),
        birth_date=parse_day_key(birthday),
        death_date=_parse_optional_date(death_day, name),
    )


def _parse_optional_date(value: object, name: str) -> date | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"Person {name!r} has an invalid death_day")
    return parse_day_key(value)


def _parse_weekdays(value: object, default: frozenset[int], field: str) -> frozenset[int]:
    if value is None:
        return default
    if not isinstance(value, list) or not all(isinstance(item, int) for item in value):
        raise ValueError(f"'{field}' must be a list of weekday indexes")
    return frozenset(value)


def _parse_timezone(value: str | None) -> ZoneInfo:
    name = (value or "").strip() or DEFAULT_TIMEZONE
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise RuntimeError(f"CALENDAR_TZ is invalid: {name}") from exc


def _parse_int_set(value: str | None) -> set[int]:
    if value is None:
        return set()
    raw = [item.strip() for item in value.split(",") if item.strip()]
    return {int(item) for item in raw}


def _parse_optional_bool(value: str | None) -> bool | None:
    if value is None:
        return None
    trimmed = value.strip().lower()
    if not trimmed:
        return None
    return trimmed in {"1", "true", "yes", "on"}


def _parse_int_with_default(value: str | None, default: int) -> int:
    if value is None:
        return default
    trimmed = value.strip()
    if not trimmed:
        return default
    return int(trimmed)
