from __future__ import annotations


class CalendarError(Exception):
    """Base class for errors raised by the calendar core."""


class ValidationError(CalendarError):
    pass


class NotFoundError(CalendarError):
    def __init__(self, day_key: str, index: int, size: int) -> None:
        super().__init__(f"No event #{index} on {day_key} (day holds {size})")
        self.day_key = day_key
        self.index = index
        self.size = size


class PersistenceError(CalendarError):
    pass
