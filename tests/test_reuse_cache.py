"""Attachment reuse cache and its stores."""

import json
import os

import pytest

from messenger_sdk.errors import MessengerError
from messenger_sdk.store.reusable import (
    AttachmentReuseCache,
    JsonFileReusableStore,
    MemoryReusableStore,
    ReusableAttachment,
)


class CountingStore(MemoryReusableStore):
    def __init__(self) -> None:
        super().__init__()
        self.saves = 0

    def save(self, record: ReusableAttachment) -> None:
        self.saves += 1
        super().save(record)


def test_record_then_lookup():
    cache = AttachmentReuseCache()
    cache.record("u1", "a1")
    assert cache.lookup("u1") == "a1"


def test_lookup_unknown_url_is_empty():
    cache = AttachmentReuseCache()
    cache.record("u1", "a1")
    assert cache.lookup("u2") is None


def test_record_is_idempotent_and_last_write_wins():
    store = CountingStore()
    cache = AttachmentReuseCache(store)

    cache.record("u1", "a1")
    cache.record("u1", "a1")
    assert cache.lookup("u1") == "a1"
    assert store.saves == 1

    cache.record("u1", "a2")
    assert cache.lookup("u1") == "a2"
    assert store.saves == 2


def test_lookup_has_no_side_effects():
    store = CountingStore()
    cache = AttachmentReuseCache(store)
    cache.lookup("u1")
    assert store.saves == 0
    assert store.get("u1") is None


def test_json_file_store_persists_across_instances(tmp_path):
    path = tmp_path / "cache" / "reusables.json"

    AttachmentReuseCache(JsonFileReusableStore(path)).record("https://cdn.test/logo.png", "att-1")

    assert json.loads(path.read_text()) == {"https://cdn.test/logo.png": "att-1"}
    reopened = AttachmentReuseCache(JsonFileReusableStore(path))
    assert reopened.lookup("https://cdn.test/logo.png") == "att-1"
    assert reopened.lookup("https://cdn.test/other.png") is None


def test_json_file_store_missing_file_reads_empty(tmp_path):
    store = JsonFileReusableStore(tmp_path / "absent.json")
    assert store.get("anything") is None
    assert not (tmp_path / "absent.json").exists()


def test_json_file_store_overwrites_record(tmp_path):
    path = tmp_path / "reusables.json"
    store = JsonFileReusableStore(path)
    store.save(ReusableAttachment(url="u1", attachment_id="a1"))
    store.save(ReusableAttachment(url="u1", attachment_id="a2"))

    assert store.get("u1") == ReusableAttachment(url="u1", attachment_id="a2")
    assert [p.name for p in tmp_path.iterdir()] == ["reusables.json"]


@pytest.mark.parametrize("content", ["{not json", '["a", "b"]'])
def test_json_file_store_corrupt_file_raises_messenger_error(tmp_path, content):
    path = tmp_path / "reusables.json"
    path.write_text(content)

    with pytest.raises(MessengerError) as exc_info:
        AttachmentReuseCache(JsonFileReusableStore(path)).lookup("u1")
    assert exc_info.value.code == "reusable_store_corrupt"
    assert exc_info.value.details == {"path": str(path)}


def test_json_file_store_failed_write_keeps_previous_state(tmp_path, monkeypatch):
    path = tmp_path / "reusables.json"
    store = JsonFileReusableStore(path)
    store.save(ReusableAttachment(url="u1", attachment_id="a1"))

    def failing_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", failing_replace)
    with pytest.raises(OSError):
        store.save(ReusableAttachment(url="u2", attachment_id="a2"))
    monkeypatch.undo()

    assert store.get("u2") is None
    assert store.get("u1") == ReusableAttachment(url="u1", attachment_id="a1")
    assert json.loads(path.read_text()) == {"u1": "a1"}
    assert [p.name for p in tmp_path.iterdir()] == ["reusables.json"]
