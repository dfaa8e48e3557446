from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass, replace
from typing import Protocol

from daystrip.core.dates import is_day_key
from daystrip.core.errors import NotFoundError, PersistenceError, ValidationError

LOGGER = logging.getLogger(__name__)

DEFAULT_PALETTE: tuple[str, ...] = (
    "#553333",
    "#594435",
    "#3e3b26",
    "#29443f",
    "#273944",
    "#332b4d",
    "#412b4d",
    "#40233e",
    "#462324",
)


@dataclass(frozen=True)
class Event:
    description: str
    color: str


class EventStorage(Protocol):
    def read(self) -> dict[str, list[Event]]: ...

    def write(self, events: dict[str, list[Event]]) -> None: ...


class EventStore:
    """Day-keyed, ordered collection of user events.

    Events are addressed by their position within a day. Every mutation is
    written through to storage before the call returns; when the write fails
    the in-memory mapping keeps its previous contents and PersistenceError
    propagates to the caller.
    """

    def __init__(
        self,
        storage: EventStorage,
        *,
        palette: Sequence[str] = DEFAULT_PALETTE,
        rng: random.Random | None = None,
    ) -> None:
        if not palette:
            raise ValueError("palette must not be empty")
        self._storage = storage
        self._palette = tuple(palette)
        self._rng = rng or random.Random()
        self._events: dict[str, list[Event]] = {}
        self._version = 0

    @property
    def palette(self) -> tuple[str, ...]:
        return self._palette

    @property
    def version(self) -> int:
        return self._version

    def load(self) -> None:
        loaded = self._storage.read()
        self._events = {key: list(items) for key, items in loaded.items() if items}
        self._version += 1
        LOGGER.info("events.load days=%s", len(self._events))

    def persist(self) -> None:
        self._commit(self._events)

    def day_keys(self) -> list[str]:
        return sorted(self._events)

    def list_events(self, day_key: str) -> list[Event]:
        return list(self._events.get(day_key, ()))

    def create_event(self, day_key: str, description: str, color: str | None = None) -> Event:
        _require_day_key(day_key)
        description = _require_text(description, "description")
        if color is None:
            color = self._rng.choice(self._palette)
        color = _require_text(color, "color")
        event = Event(description=description, color=color)
        items = self.list_events(day_key)
        items.append(event)
        self._commit_day(day_key, items)
        LOGGER.info("events.create day=%s index=%s", day_key, len(items) - 1)
        return event

    def update_event(
        self,
        day_key: str,
        index: int,
        description: str | None = None,
        color: str | None = None,
    ) -> Event:
        _require_day_key(day_key)
        items = self.list_events(day_key)
        _check_index(day_key, index, items)
        current = items[index]
        if description is not None:
            current = replace(current, description=_require_text(description, "description"))
        if color is not None:
            current = replace(current, color=_require_text(color, "color"))
        items[index] = current
        self._commit_day(day_key, items)
        LOGGER.info("events.update day=%s index=%s", day_key, index)
        return current

    def delete_event(self, day_key: str, index: int) -> None:
        _require_day_key(day_key)
        items = self.list_events(day_key)
        if not items:
            LOGGER.debug("events.delete noop day=%s index=%s", day_key, index)
            return
        _check_index(day_key, index, items)
        del items[index]
        self._commit_day(day_key, items)
        LOGGER.info("events.delete day=%s index=%s", day_key, index)

    def move_event(self, day_key: str, from_index: int, to_index: int) -> None:
        _require_day_key(day_key)
        items = self.list_events(day_key)
        _check_index(day_key, from_index, items)
        _check_index(day_key, to_index, items)
        if from_index == to_index:
            return
        items.insert(to_index, items.pop(from_index))
        self._commit_day(day_key, items)
        LOGGER.info("events.move day=%s from=%s to=%s", day_key, from_index, to_index)

    def _commit_day(self, day_key: str, items: list[Event]) -> None:
        updated = dict(self._events)
        if items:
            updated[day_key] = items
        else:
            updated.pop(day_key, None)
        self._commit(updated)

    def _commit(self, events: dict[str, list[Event]]) -> None:
        try:
            self._storage.write(events)
        except PersistenceError:
            LOGGER.exception("events.persist failed")
            raise
        self._events = events
        self._version += 1


def _require_day_key(day_key: str) -> None:
    if not is_day_key(day_key):
        raise ValidationError(f"Invalid day key: {day_key!r} (expected YYYY-MM-DD)")


def _require_text(value: str, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Event {field} must not be empty")
    return value.strip()


def _check_index(day_key: str, index: int, items: list[Event]) -> None:
    if not 0 <= index < len(items):
        raise NotFoundError(day_key, index, len(items))
