# tests/test_message_store.py

from __future__ import annotations

import pytest

from taskchat.chat.chat_models import ChatMessage, MessageRole
from taskchat.chat.message_store import MessageStore

from .fakes import FakeClock


def test_append_within_one_clock_tick_keeps_both_messages() -> None:
    store = MessageStore(clock=FakeClock(start=500, step=0))

    first = store.append(MessageRole.USER, "one")
    second = store.append(MessageRole.ASSISTANT, "two")

    assert first.key != second.key
    assert second.timestamp == first.timestamp + 1
    assert [m.content for m in store.list_all()] == ["one", "two"]
    assert store.get(first.key) == first


def test_put_is_last_write_wins() -> None:
    store = MessageStore()
    store.put("10", ChatMessage(role=MessageRole.USER, content="old", timestamp=10))
    store.put("10", ChatMessage(role=MessageRole.USER, content="new", timestamp=10))

    assert len(store) == 1
    got = store.get("10")
    assert got is not None and got.content == "new"
    assert store.get("11") is None


def test_put_rejects_key_that_differs_from_message_timestamp() -> None:
    store = MessageStore()

    with pytest.raises(ValueError):
        store.put("99", ChatMessage(role=MessageRole.USER, content="x", timestamp=10))

    assert len(store) == 0
    assert store.get("99") is None


def test_constructor_rejects_mismatched_entries() -> None:
    msg = ChatMessage(role=MessageRole.USER, content="x", timestamp=10)

    with pytest.raises(ValueError):
        MessageStore([("11", msg)])


def test_list_all_is_chronological_regardless_of_insertion_order() -> None:
    store = MessageStore()
    for ts in (30, 10, 20):
        store.put(str(ts), ChatMessage(role=MessageRole.USER, content=str(ts), timestamp=ts))

    assert [m.timestamp for m in store.list_all()] == [10, 20, 30]


def test_restored_store_continues_after_latest_timestamp() -> None:
    old = ChatMessage(role=MessageRole.USER, content="before restart", timestamp=9_000)
    # New process clock reads lower than the persisted timestamps.
    store = MessageStore([(old.key, old)], clock=FakeClock(start=5))

    fresh = store.append(MessageRole.USER, "after restart")

    assert fresh.timestamp == 9_001
    assert store.list_all() == [old, fresh]


def test_store_is_unbounded() -> None:
    store = MessageStore(clock=FakeClock(step=0))
    for i in range(5_000):
        store.append(MessageRole.USER, f"m{i}")

    assert len(store) == 5_000
    assert len({m.key for m in store.list_all()}) == 5_000
