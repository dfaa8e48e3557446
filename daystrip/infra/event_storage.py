from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from daystrip.core.dates import parse_day_key
from daystrip.core.errors import PersistenceError
from daystrip.core.event_store import Event

LOGGER = logging.getLogger(__name__)

SCHEMA_VERSION = 1


def dumps_events(events: dict[str, list[Event]]) -> str:
    payload = {
        "schema_version": SCHEMA_VERSION,
        "events": {
            key: [{"description": item.description, "color": item.color} for item in items]
            for key, items in sorted(events.items())
            if items
        },
    }
    return json.dumps(payload, ensure_ascii=False, indent=2)


def loads_events(text: str) -> dict[str, list[Event]]:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise PersistenceError(f"Event data is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise PersistenceError("Event data must be a JSON object")
    version = payload.get("schema_version")
    if version != SCHEMA_VERSION:
        raise PersistenceError(f"Unsupported event schema version: {version!r}")
    raw_events = payload.get("events", {})
    if not isinstance(raw_events, dict):
        raise PersistenceError("'events' must map day keys to lists")
    events: dict[str, list[Event]] = {}
    for key, items in raw_events.items():
        try:
            parse_day_key(key)
        except ValueError as exc:
            raise PersistenceError(str(exc)) from exc
        if not isinstance(items, list):
            raise PersistenceError(f"Events for {key} must be a list")
        parsed = [_parse_event(key, item) for item in items]
        if parsed:
            events[key] = parsed
    return events


def _parse_event(key: str, item: object) -> Event:
    if not isinstance(item, dict):
        raise PersistenceError(f"Event on {key} must be an object")
    description = item.get("description")
    color = item.get("color")
    if not isinstance(description, str) or not isinstance(color, str):
        raise PersistenceError(f"Event on {key} needs string description and color")
    return Event(description=description, color=color)


class JsonFileEventStorage:
    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> dict[str, list[Event]]:
        if not self._path.exists():
            LOGGER.info("events.storage missing path=%s; starting empty", self._path)
            return {}
        try:
            text = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise PersistenceError(f"Could not read {self._path}: {exc}") from exc
        return loads_events(text)

    def write(self, events: dict[str, list[Event]]) -> None:
        payload = dumps_events(events)
        tmp_path = self._path.with_suffix(f"{self._path.suffix}.tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(payload, encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as exc:
            raise PersistenceError(f"Could not write {self._path}: {exc}") from exc


class MemoryEventStorage:
    def __init__(self, text: str | None = None) -> None:
        self.text = text

    def read(self) -> dict[str, list[Event]]:
        if self.text is None:
            return {}
        return loads_events(self.text)

    def write(self, events: dict[str, list[Event]]) -> None:
        self.text = dumps_events(events)
