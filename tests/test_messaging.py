from __future__ import annotations

import asyncio
from types import SimpleNamespace

from daystrip.infra import messaging


def test_chunk_text() -> None:
    assert messaging.chunk_text("", max_len=10) == []
    assert messaging.chunk_text("hello", max_len=10) == ["hello"]
    assert messaging.chunk_text("hello world", max_len=5) == ["hello", "world"]
    assert messaging.chunk_text("a" * 20, max_len=7) == ["a" * 7, "a" * 7, "a" * 6]
    assert messaging.chunk_text("one\ntwo\nthree", max_len=8) == ["one\ntwo", "three"]


def _recording_update() -> tuple[SimpleNamespace, list[tuple[str, object]]]:
    sent: list[tuple[str, object]] = []

    async def reply_text(text, reply_markup=None):
        sent.append((text, reply_markup))

    message = SimpleNamespace(reply_text=reply_text)
    return SimpleNamespace(effective_message=message, callback_query=None), sent


def test_safe_send_text_puts_markup_on_last_chunk(monkeypatch) -> None:
    monkeypatch.setattr(messaging, "MAX_CHUNK_SIZE", 10)
    update, sent = _recording_update()
    asyncio.run(messaging.safe_send_text(update, "line one\nline two", reply_markup="kb"))
    assert [text for text, _ in sent] == ["line one", "line two"]
    assert [markup for _, markup in sent] == [None, "kb"]


def test_safe_send_text_placeholder_for_empty() -> None:
    update, sent = _recording_update()
    asyncio.run(messaging.safe_send_text(update, "  "))
    assert sent == [(messaging.EMPTY_MESSAGE_PLACEHOLDER, None)]


def test_safe_edit_text_edits_callback_message() -> None:
    update, sent = _recording_update()
    edits: list[str] = []

    async def edit_message_text(text, reply_markup=None):
        edits.append(text)

    update.callback_query = SimpleNamespace(edit_message_text=edit_message_text)
    asyncio.run(messaging.safe_edit_text(update, "window"))
    assert edits == ["window"]
    assert sent == []
