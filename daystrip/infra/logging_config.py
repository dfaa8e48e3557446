"""Logging setup for the daystrip process.

Options come from the environment:

    LOG_LEVEL         level name, INFO when unset or unknown
    LOG_FILE          optional path of a rotating log file
    LOG_MAX_BYTES     rotation size of LOG_FILE
    LOG_BACKUP_COUNT  rotated files to keep

configure_logging() owns only the handlers it installs itself, so calling it
again swaps them out and leaves handlers added by other code in place.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
HANDLER_PREFIX = "daystrip."

QUIET_LOGGERS = ("httpx", "httpcore", "telegram", "telegram.ext")


@dataclass(frozen=True)
class LogOptions:
    level: int = logging.INFO
    log_file: Path | None = None
    max_bytes: int = 5 * 1024 * 1024
    backup_count: int = 3


def _level_from_name(raw: str | None) -> int:
    if not raw:
        return logging.INFO
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def _positive_int(raw: str | None, default: int) -> int:
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def options_from_env(env: Mapping[str, str] | None = None) -> LogOptions:
    if env is None:
        env = os.environ
    defaults = LogOptions()
    log_file = (env.get("LOG_FILE") or "").strip()
    return LogOptions(
        level=_level_from_name(env.get("LOG_LEVEL")),
        log_file=Path(log_file) if log_file else None,
        max_bytes=_positive_int(env.get("LOG_MAX_BYTES"), defaults.max_bytes),
        backup_count=_positive_int(env.get("LOG_BACKUP_COUNT"), defaults.backup_count),
    )


def _own_handlers(root: logging.Logger) -> list[logging.Handler]:
    return [handler for handler in root.handlers if (handler.name or "").startswith(HANDLER_PREFIX)]


def _file_handler(options: LogOptions) -> logging.Handler | None:
    if options.log_file is None:
        return None
    try:
        options.log_file.parent.mkdir(parents=True, exist_ok=True)
        return RotatingFileHandler(
            options.log_file,
            maxBytes=options.max_bytes,
            backupCount=options.backup_count,
            encoding="utf-8",
        )
    except OSError as exc:
        logging.getLogger(__name__).warning("log file %s unavailable (%s); using stderr only", options.log_file, exc)
        return None


def configure_logging(options: LogOptions | None = None) -> LogOptions:
    """Install the stderr and optional file handlers on the root logger.

    Returns the options that were applied, read from the environment when
    none are passed.
    """
    if options is None:
        options = options_from_env()

    root = logging.getLogger()
    for handler in _own_handlers(root):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(options.level)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    installed: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    installed[0].set_name(f"{HANDLER_PREFIX}stderr")
    file_handler = _file_handler(options)
    if file_handler is not None:
        file_handler.set_name(f"{HANDLER_PREFIX}file")
        installed.append(file_handler)
    for handler in installed:
        handler.setLevel(options.level)
        handler.setFormatter(formatter)
        root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return options
