from __future__ import annotations

import logging
from collections.abc import Iterable

from telegram import Update
from telegram.error import BadRequest

LOGGER = logging.getLogger(__name__)

MAX_CHUNK_SIZE = 3500
FALLBACK_CHUNK_SIZE = 2000
EMPTY_MESSAGE_PLACEHOLDER = "(empty)"


def chunk_text(text: str, max_len: int = MAX_CHUNK_SIZE) -> list[str]:
    chunks: list[str] = []
    remaining = text or ""
    while remaining:
        if len(remaining) <= max_len:
            chunks.append(remaining)
            break
        split_at = remaining.rfind("\n", 0, max_len + 1)
        if split_at == -1:
            split_at = remaining.rfind(" ", 0, max_len + 1)
        if split_at <= 0:
            split_at = max_len
        chunk = remaining[:split_at].rstrip()
        if not chunk:
            chunk = remaining[:max_len]
            split_at = max_len
        chunks.append(chunk)
        remaining = remaining[split_at:].lstrip("\n ")
    return chunks


async def _send_chunks(message, chunks: Iterable[str], reply_markup=None) -> None:
    chunks = list(chunks)
    for position, chunk in enumerate(chunks):
        # The keyboard goes under the last chunk so it stays next to the window's end.
        markup = reply_markup if position == len(chunks) - 1 else None
        try:
            await message.reply_text(chunk, reply_markup=markup)
        except BadRequest as exc:
            if "Message is too long" in str(exc):
                LOGGER.warning("Telegram rejected message chunk as too long; splitting further.")
                for subchunk in chunk_text(chunk, max_len=FALLBACK_CHUNK_SIZE):
                    await message.reply_text(subchunk)
                continue
            LOGGER.exception("Failed to send message chunk: %s", exc)
            break


async def safe_send_text(update: Update | None, text: str | None, reply_markup=None) -> int:
    message = update.effective_message if update else None
    if message is None:
        LOGGER.warning("No message to reply to; dropping text of %s chars", len(text or ""))
        return 0
    payload = text if text and text.strip() else EMPTY_MESSAGE_PLACEHOLDER
    await _send_chunks(message, chunk_text(payload, max_len=MAX_CHUNK_SIZE), reply_markup=reply_markup)
    return len(payload)


async def safe_edit_text(update: Update | None, text: str | None, reply_markup=None) -> int:
    callback_query = update.callback_query if update else None
    if callback_query is None:
        return await safe_send_text(update, text, reply_markup=reply_markup)
    payload = text if text and text.strip() else EMPTY_MESSAGE_PLACEHOLDER
    chunks = chunk_text(payload, max_len=MAX_CHUNK_SIZE)
    if len(chunks) > 1:
        # A single message cannot hold the whole window; send it fresh instead.
        return await safe_send_text(update, payload, reply_markup=reply_markup)
    try:
        await callback_query.edit_message_text(chunks[0], reply_markup=reply_markup)
    except BadRequest as exc:
        msg = str(exc)
        if "Message is not modified" in msg:
            LOGGER.debug("Callback edit skipped: content unchanged")
            return len(payload)
        if "Query is too old" in msg or "query id is invalid" in msg:
            LOGGER.info("Telegram rejected callback edit (expired): %s", msg)
        else:
            LOGGER.exception("Failed to edit message text: %s", exc)
        return await safe_send_text(update, payload, reply_markup=reply_markup)
    return len(payload)
