from __future__ import annotations

from dataclasses import dataclass

from telegram import InlineKeyboardButton, InlineKeyboardMarkup

STATIC_CALLBACK_PREFIX = "cb:"
SCROLL_CALLBACK_PREFIX = f"{STATIC_CALLBACK_PREFIX}scroll:"
TODAY_CALLBACK = f"{STATIC_CALLBACK_PREFIX}today"

_SCROLL_ROW = (("⏪ 7", 0, -7), ("◀ 1", 0, -1), ("▶ 1", 0, 1), ("⏩ 7", 0, 7))
_LENGTH_ROW = (("➖ 7", -7, 0), ("➖ 1", -1, 0), ("➕ 1", 1, 0), ("➕ 7", 7, 0))


@dataclass(frozen=True)
class ScrollCallback:
    dx: int
    dy: int
    today: bool = False


def build_scroll_callback_data(dx: int, dy: int) -> str:
    return f"{SCROLL_CALLBACK_PREFIX}{dx}:{dy}"


def parse_scroll_callback(data: str | None) -> ScrollCallback | None:
    if not data:
        return None
    if data == TODAY_CALLBACK:
        return ScrollCallback(dx=0, dy=0, today=True)
    if not data.startswith(SCROLL_CALLBACK_PREFIX):
        return None
    parts = data[len(SCROLL_CALLBACK_PREFIX) :].split(":")
    if len(parts) != 2:
        return None
    try:
        dx, dy = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    return ScrollCallback(dx=dx, dy=dy)


def build_scroll_keyboard() -> InlineKeyboardMarkup:
    scroll = [
        InlineKeyboardButton(label, callback_data=build_scroll_callback_data(dx, dy))
        for label, dx, dy in _SCROLL_ROW
    ]
    scroll.insert(2, InlineKeyboardButton("Today", callback_data=TODAY_CALLBACK))
    length = [
        InlineKeyboardButton(label, callback_data=build_scroll_callback_data(dx, dy))
        for label, dx, dy in _LENGTH_ROW
    ]
    return InlineKeyboardMarkup([scroll, length])
