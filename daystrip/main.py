from __future__ import annotations

import logging
import sys

from telegram.ext import Application, CallbackQueryHandler, CommandHandler

from daystrip.bot import handlers
from daystrip.bot.keyboards import STATIC_CALLBACK_PREFIX
from daystrip.core import dates
from daystrip.core.event_store import EventStore
from daystrip.core.render import render_window
from daystrip.core.scroll import default_state
from daystrip.core.window import generate_window
from daystrip.infra.config import CalendarConfig, Settings, load_calendar_config, load_settings
from daystrip.infra.event_storage import JsonFileEventStorage, MemoryEventStorage
from daystrip.infra.logging_config import configure_logging

LOGGER = logging.getLogger(__name__)


def _register_handlers(application: Application) -> None:
    application.add_handler(CommandHandler("start", handlers.start))
    application.add_handler(CommandHandler("help", handlers.help_command))
    application.add_handler(CommandHandler("calendar", handlers.calendar))
    application.add_handler(CommandHandler("day", handlers.day))
    application.add_handler(CommandHandler("event", handlers.event))
    application.add_handler(CallbackQueryHandler(handlers.scroll_callback, pattern=f"^{STATIC_CALLBACK_PREFIX}"))


def build_event_store(settings: Settings, config: CalendarConfig) -> EventStore:
    if settings.events_path is None:
        storage = MemoryEventStorage()
    else:
        storage = JsonFileEventStorage(settings.events_path)
    store = EventStore(storage, palette=config.palette)
    store.load()
    return store


def render_default_window(settings: Settings, config: CalendarConfig, store: EventStore) -> str:
    today = dates.today(settings.timezone)
    days = generate_window(
        default_state(today, settings.default_window_length),
        config.holiday_rules,
        config.people,
        store,
        config.classification,
    )
    return render_window(days, today=today)


def main() -> None:
    configure_logging()
    settings = load_settings()
    config = load_calendar_config(settings.calendar_config_path)
    store = build_event_store(settings, config)
    LOGGER.info(
        "startup people=%s holidays=%s event_days=%s tz=%s",
        len(config.people),
        len(config.holiday_rules),
        len(store.day_keys()),
        settings.timezone.key,
    )

    if settings.dry_run:
        sys.stdout.write(render_default_window(settings, config, store) + "\n")
        return

    application = Application.builder().token(settings.bot_token).build()
    application.bot_data["settings"] = settings
    application.bot_data["calendar_config"] = config
    application.bot_data["event_store"] = store
    _register_handlers(application)

    LOGGER.info("Bot started")
    application.run_polling()


if __name__ == "__main__":
    main()
