from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date

from telegram import Update
from telegram.ext import ContextTypes

from daystrip.bot.keyboards import build_scroll_keyboard, parse_scroll_callback
from daystrip.core import dates
from daystrip.core.errors import NotFoundError, PersistenceError, ValidationError
from daystrip.core.event_store import EventStore
from daystrip.core.render import render_day_details, render_window
from daystrip.core.scroll import apply_delta, default_state
from daystrip.core.window import WindowState, describe_day, generate_window
from daystrip.infra.config import CalendarConfig, Settings
from daystrip.infra.messaging import safe_edit_text, safe_send_text

LOGGER = logging.getLogger(__name__)

WINDOW_KEY = "window"

HELP_TEXT = (
    "Commands:\n"
    "/calendar [YYYY-MM-DD] [DAYS]: show the day window\n"
    "/day YYYY-MM-DD: show one day with its events\n"
    "/event add YYYY-MM-DD <text>\n"
    "/event edit YYYY-MM-DD N <text>\n"
    "/event color YYYY-MM-DD N <color or palette number>\n"
    "/event del YYYY-MM-DD N\n"
    "/event move YYYY-MM-DD N M"
)
EVENT_USAGE = "Usage: /event add|edit|color|del|move YYYY-MM-DD … (see /help)."
SAVE_FAILED_TEXT = "Could not save events; nothing was changed."


def _get_settings(context: ContextTypes.DEFAULT_TYPE) -> Settings:
    return context.application.bot_data["settings"]


def _get_calendar_config(context: ContextTypes.DEFAULT_TYPE) -> CalendarConfig:
    return context.application.bot_data["calendar_config"]


def _get_event_store(context: ContextTypes.DEFAULT_TYPE) -> EventStore:
    return context.application.bot_data["event_store"]


def _today(context: ContextTypes.DEFAULT_TYPE) -> date:
    return dates.today(_get_settings(context).timezone)


def _get_window(context: ContextTypes.DEFAULT_TYPE) -> WindowState:
    state = context.chat_data.get(WINDOW_KEY)
    if isinstance(state, WindowState):
        return state
    state = default_state(_today(context), _get_settings(context).default_window_length)
    context.chat_data[WINDOW_KEY] = state
    return state


def _render_current(context: ContextTypes.DEFAULT_TYPE) -> str:
    config = _get_calendar_config(context)
    days = generate_window(
        _get_window(context),
        config.holiday_rules,
        config.people,
        _get_event_store(context),
        config.classification,
    )
    return render_window(days, today=_today(context))


def _render_day(context: ContextTypes.DEFAULT_TYPE, day: date) -> str:
    config = _get_calendar_config(context)
    descriptor = describe_day(
        day,
        config.holiday_rules,
        config.people,
        _get_event_store(context),
        config.classification,
    )
    return render_day_details(descriptor)


async def _guard_access(update: Update, context: ContextTypes.DEFAULT_TYPE) -> bool:
    allowed = _get_settings(context).allowed_user_ids
    if not allowed:
        return True
    user_id = update.effective_user.id if update.effective_user else 0
    if user_id in allowed:
        return True
    LOGGER.warning("access.denied user_id=%s", user_id)
    await safe_send_text(update, "Access denied.")
    return False


async def start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not await _guard_access(update, context):
        return
    await safe_send_text(update, "Day-by-day calendar with holidays, anniversaries and notes.\n\n" + HELP_TEXT)


async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not await _guard_access(update, context):
        return
    await safe_send_text(update, HELP_TEXT)


async def calendar(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not await _guard_access(update, context):
        return
    args = context.args or []
    state = default_state(_today(context), _get_settings(context).default_window_length)
    try:
        if args:
            state = replace(state, start_date=dates.parse_day_key(args[0]))
        if len(args) > 1:
            state = replace(state, window_length=int(args[1]))
    except ValueError:
        await safe_send_text(update, "Usage: /calendar [YYYY-MM-DD] [DAYS].")
        return
    context.chat_data[WINDOW_KEY] = state
    await safe_send_text(update, _render_current(context), reply_markup=build_scroll_keyboard())


async def day(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not await _guard_access(update, context):
        return
    args = context.args or []
    try:
        target = dates.parse_day_key(args[0]) if args else _today(context)
    except ValueError:
        await safe_send_text(update, "Usage: /day YYYY-MM-DD.")
        return
    await safe_send_text(update, _render_day(context, target))


async def scroll_callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    query = update.callback_query
    if query is None:
        return
    await query.answer()
    if not await _guard_access(update, context):
        return
    parsed = parse_scroll_callback(query.data)
    if parsed is None:
        LOGGER.warning("scroll.callback unknown data=%s", query.data)
        return
    state = _get_window(context)
    if parsed.today:
        state = replace(state, start_date=_today(context))
    else:
        state = apply_delta(state, dx=parsed.dx, dy=parsed.dy)
    context.chat_data[WINDOW_KEY] = state
    await safe_edit_text(update, _render_current(context), reply_markup=build_scroll_keyboard())


async def event(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not await _guard_access(update, context):
        return
    args = context.args or []
    if len(args) < 2:
        await safe_send_text(update, EVENT_USAGE)
        return
    command = args[0].lower()
    try:
        target = dates.parse_day_key(args[1])
    except ValueError:
        await safe_send_text(update, EVENT_USAGE)
        return
    key = dates.day_key(target)
    store = _get_event_store(context)
    try:
        if command == "add":
            if len(args) < 3:
                await safe_send_text(update, "Usage: /event add YYYY-MM-DD <text>.")
                return
            try:
                store.create_event(key, " ".join(args[2:]))
            except ValidationError:
                LOGGER.info("events.create discarded day=%s: empty description", key)
        elif command == "edit":
            if len(args) < 4:
                await safe_send_text(update, "Usage: /event edit YYYY-MM-DD N <text>.")
                return
            store.update_event(key, _parse_number(args[2]), description=" ".join(args[3:]))
        elif command == "color":
            if len(args) != 4:
                await safe_send_text(update, "Usage: /event color YYYY-MM-DD N <color or palette number>.")
                return
            store.update_event(key, _parse_number(args[2]), color=_resolve_color(args[3], store.palette))
        elif command == "del":
            if len(args) != 3:
                await safe_send_text(update, "Usage: /event del YYYY-MM-DD N.")
                return
            store.delete_event(key, _parse_number(args[2]))
        elif command == "move":
            if len(args) != 4:
                await safe_send_text(update, "Usage: /event move YYYY-MM-DD N M.")
                return
            store.move_event(key, _parse_number(args[2]), _parse_number(args[3]))
        else:
            await safe_send_text(update, EVENT_USAGE)
            return
    except ValueError:
        await safe_send_text(update, "Event numbers must be whole numbers starting at 1.")
        return
    except NotFoundError as exc:
        await safe_send_text(update, f"No event #{exc.index + 1} on {exc.day_key}.")
        return
    except ValidationError as exc:
        await safe_send_text(update, str(exc))
        return
    except PersistenceError:
        LOGGER.exception("events.%s failed day=%s", command, key)
        await safe_send_text(update, SAVE_FAILED_TEXT)
        return
    await safe_send_text(update, _render_day(context, target))


def _parse_number(raw: str) -> int:
    return int(raw) - 1


def _resolve_color(raw: str, palette: tuple[str, ...]) -> str:
    if raw.isdigit() and 1 <= int(raw) <= len(palette):
        return palette[int(raw) - 1]
    return raw
